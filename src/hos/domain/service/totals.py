"""Order total calculation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from hos.domain.model.order import OrderItem


def calculate_total(items: Iterable[OrderItem]) -> int:
    """Sum of ``qty * price`` over *items*; an empty list totals 0.

    Always derived from the items themselves, never from a stored total,
    so it can be used to verify one.
    """
    return sum(item.line_total for item in items)
