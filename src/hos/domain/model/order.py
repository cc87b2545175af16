"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its line items and its history.
All lifecycle bookkeeping (numbering, totals, history, status changes)
happens here; repositories only load and store the result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable

from hos.domain.exceptions import ValidationError
from hos.domain.model.history import HistoryEntry, record_history
from hos.domain.model.value_objects import Price, Quantity
from hos.domain.service.order_numbers import make_order_no
from hos.domain.service.totals import calculate_total


class OrderStatus(Enum):
    NEW = "New"
    PREPARING = "Preparing"
    READY = "Ready"
    SERVED = "Served"
    COMPLETED = "Completed"
    UPDATED = "Updated"


class PaymentStatus(Enum):
    NOT_PAID = "Not Paid"
    PAID = "Paid"
    PARTIAL = "Partial"


# ---------------------------------------------------------------------------
# Defaults for new orders
# ---------------------------------------------------------------------------
DEFAULT_MENU_VERSION = "RestoVersion"
DEFAULT_SOURCE = "staff-app"

# Kitchen progression used by the optional strict-transition mode.
# UPDATED means "re-opened with new items", so it sits alongside NEW.
_PROGRESSION = {
    OrderStatus.NEW: 0,
    OrderStatus.UPDATED: 0,
    OrderStatus.PREPARING: 1,
    OrderStatus.READY: 2,
    OrderStatus.SERVED: 3,
    OrderStatus.COMPLETED: 4,
}


def is_forward_transition(current: OrderStatus, new: OrderStatus) -> bool:
    """True unless *new* moves the order backwards in the kitchen flow."""
    return _PROGRESSION[new] >= _PROGRESSION[current]


@dataclass
class OrderItem:
    """A line item with the menu price captured when it was added.

    Later menu uploads never touch ``unit_price`` on existing orders.
    """

    item_key: str
    name: str
    quantity: Quantity
    unit_price: Price  # snapshot at add time
    id: str | None = None

    @property
    def line_total(self) -> int:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class OrderChanges:
    """Fields an external update may set.  ``None`` means "leave as is".

    An empty string is a value, not "unset": ``notes=""`` clears the notes
    and ``requested_time=""`` clears the requested time.
    """

    status: OrderStatus | None = None
    payment_status: PaymentStatus | None = None
    requested_time: str | None = None
    notes: str | None = None


@dataclass
class Order:
    """Aggregate root for guest orders.

    Use the ``Order.create()`` factory for new orders; it validates input
    and seeds the number, total and history.  The ``__init__`` stays plain
    so repositories can reconstitute persisted orders without side effects.
    """

    id: str | None
    order_no: str
    guest_name: str
    room_no: str
    created_at: datetime
    updated_at: datetime
    items: list[OrderItem] = field(default_factory=list)
    history: list[HistoryEntry] = field(default_factory=list)
    total: int = 0
    notes: str = ""
    source: str = DEFAULT_SOURCE
    menu_version: str = DEFAULT_MENU_VERSION
    status: OrderStatus = OrderStatus.NEW
    payment_status: PaymentStatus = PaymentStatus.NOT_PAID
    requested_time: str | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        guest_name: str,
        room_no: str,
        items: Iterable[OrderItem],
        now: datetime,
        notes: str | None = None,
        menu_version: str | None = None,
        source: str = DEFAULT_SOURCE,
    ) -> Order:
        """Create a new order in status New / Not Paid."""
        if not guest_name or not guest_name.strip():
            raise ValidationError("Guest name is required")
        if not room_no or not room_no.strip():
            raise ValidationError("Room number is required")

        items = list(items)
        return Order(
            id=None,
            order_no=make_order_no(now),
            guest_name=guest_name.strip(),
            room_no=room_no.strip(),
            created_at=now,
            updated_at=now,
            items=items,
            history=record_history([], "Created", now),
            total=calculate_total(items),
            notes=notes or "",
            source=source,
            menu_version=menu_version or DEFAULT_MENU_VERSION,
        )

    # --- Mutations ------------------------------------------------------------

    def add_items(self, items: Iterable[OrderItem], now: datetime) -> None:
        """Append line items to an existing order.

        The total is bumped by the new items only (the stored total is
        trusted, not recomputed).  Status is forced to UPDATED whatever it
        was before, so the kitchen sees the order again.
        """
        new_items = list(items)
        self.items.extend(new_items)
        self.total += calculate_total(new_items)
        record_history(self.history, f"Added {len(new_items)} items", now)
        self.status = OrderStatus.UPDATED
        self.updated_at = now

    def apply_changes(self, changes: OrderChanges, now: datetime) -> None:
        """Overwrite every field set in *changes*; record status changes."""
        if changes.status is not None:
            if changes.status != self.status:
                record_history(self.history, f"Status -> {changes.status.value}", now)
            self.status = changes.status

        if changes.payment_status is not None:
            if changes.payment_status != self.payment_status:
                record_history(
                    self.history, f"Payment -> {changes.payment_status.value}", now
                )
            self.payment_status = changes.payment_status

        if changes.requested_time is not None:
            self.requested_time = changes.requested_time
        if changes.notes is not None:
            self.notes = changes.notes

        self.updated_at = now

    # --- Computed properties --------------------------------------------------

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def recomputed_total(self) -> int:
        """Total derived from the current items, for checking ``total``."""
        return calculate_total(self.items)
