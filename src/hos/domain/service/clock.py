"""Wall clock used for order timestamps.

Timestamps are always timezone-aware UTC.  Handlers and repositories take
a ``Clock`` so tests can pin "now".
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
