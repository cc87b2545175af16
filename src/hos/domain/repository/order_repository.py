"""Storage interface for orders.

Implemented by the SQL store and by the in-memory test fake.  Every
mutating method is all-or-nothing: on failure the previously committed
order is left untouched.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Callable

from hos.domain.model.order import Order, OrderChanges, OrderItem, OrderStatus

# Called with the locked, current order and the requested changes before
# they are applied.  Raising aborts the patch with nothing written.
OrderGuard = Callable[[Order, OrderChanges], None]


@dataclass(frozen=True)
class OrderFilters:
    """Optional, AND-combined listing filters.

    ``search`` matches guest name, room number or order number
    (case-insensitive substring, any of the three).
    """

    date: date | None = None
    status: OrderStatus | None = None
    room_no: str | None = None
    search: str | None = None


class OrderRepository(ABC):

    @abstractmethod
    def create(self, order: Order) -> Order:
        """Assign an id, persist the order with its items, return it reloaded.

        Raises PersistenceError if the store rejects the write (including a
        duplicate order number).
        """

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_matching(self, filters: OrderFilters) -> list[Order]:
        """Return matching orders, most recently created first."""

    @abstractmethod
    def append_items(self, order_id: str, items: list[OrderItem]) -> Order:
        """Add items to an order; raises EntityNotFoundError if absent."""

    @abstractmethod
    def patch(
        self,
        order_id: str,
        changes: OrderChanges,
        guard: OrderGuard | None = None,
    ) -> Order:
        """Apply an external update; raises EntityNotFoundError if absent.

        *guard* runs in the same transaction as the write, so it sees the
        state the changes will actually be applied to.
        """
