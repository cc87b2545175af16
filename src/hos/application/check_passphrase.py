"""Application service: staff passphrase check."""

from __future__ import annotations

import hmac

from hos.domain.exceptions import AccessDeniedError


class CheckPassphraseHandler:

    def __init__(self, expected: str) -> None:
        self._expected = expected

    def handle(self, supplied: str | None) -> None:
        """Raise AccessDeniedError unless *supplied* matches."""
        if not supplied or not hmac.compare_digest(
            supplied.encode("utf-8"), self._expected.encode("utf-8")
        ):
            raise AccessDeniedError("Invalid passphrase")
