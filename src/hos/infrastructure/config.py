"""Runtime settings, read from ``HOS_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from hos.domain.model.order import DEFAULT_MENU_VERSION

# Default SQLite file lives in <repo>/data when run from a checkout.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_or(environ: Mapping[str, str], key: str, default: str) -> str:
    v = environ.get(key)
    return v if v is not None else default


@dataclass(frozen=True)
class Settings:
    db_url: str
    staff_passphrase: str = "letmein"
    strict_transitions: bool = False
    default_menu_version: str = DEFAULT_MENU_VERSION
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            db_url=_env_or(env, "HOS_DB_URL", f"sqlite:///{_DATA_DIR / 'hos.db'}"),
            staff_passphrase=_env_or(env, "HOS_STAFF_PASSPHRASE", "letmein"),
            strict_transitions=(
                _env_or(env, "HOS_STRICT_TRANSITIONS", "false").strip().lower() in _TRUTHY
            ),
            default_menu_version=_env_or(
                env, "HOS_DEFAULT_MENU_VERSION", DEFAULT_MENU_VERSION
            ),
            log_level=_env_or(env, "HOS_LOG_LEVEL", "WARNING").upper(),
        )
