"""Tests for environment-driven settings."""

import pytest

from hos.infrastructure.config import Settings


class TestSettingsFromEnv:

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.db_url.startswith("sqlite:///")
        assert settings.db_url.endswith("hos.db")
        assert settings.staff_passphrase == "letmein"
        assert settings.strict_transitions is False
        assert settings.default_menu_version == "RestoVersion"
        assert settings.log_level == "WARNING"

    def test_overrides(self):
        settings = Settings.from_env({
            "HOS_DB_URL": "sqlite:///:memory:",
            "HOS_STAFF_PASSPHRASE": "open-sesame",
            "HOS_DEFAULT_MENU_VERSION": "Breakfast",
            "HOS_LOG_LEVEL": "debug",
        })
        assert settings.db_url == "sqlite:///:memory:"
        assert settings.staff_passphrase == "open-sesame"
        assert settings.default_menu_version == "Breakfast"
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("raw, expected", [
        ("1", True),
        ("true", True),
        (" YES ", True),
        ("on", True),
        ("0", False),
        ("no", False),
        ("", False),
    ])
    def test_strict_transitions_flag(self, raw, expected):
        settings = Settings.from_env({"HOS_STRICT_TRANSITIONS": raw})
        assert settings.strict_transitions is expected
