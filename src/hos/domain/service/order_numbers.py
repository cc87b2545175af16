"""Order number generation.

Order numbers are what staff read out and write on bills, e.g.
``ORD-251017-12345``: the creation date followed by the last five digits
of the epoch-millisecond clock.  Orders created a multiple of 100 seconds
apart to the millisecond collide; the store's unique constraint catches that.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

ORDER_NO_PREFIX = "ORD"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


def make_order_no(now: datetime) -> str:
    """Build ``ORD-YYMMDD-NNNNN`` from an aware ``now``."""
    millis = (now - _EPOCH) // _ONE_MS
    return f"{ORDER_NO_PREFIX}-{now:%y%m%d}-{millis % 100_000:05d}"
