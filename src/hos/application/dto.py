"""Data Transfer Objects: plain containers that cross layer boundaries.

Handlers accept and return these instead of domain objects.  Enum values and
timestamps are flattened to strings (ISO 8601 for timestamps).
"""

from __future__ import annotations

from dataclasses import dataclass


# --- Inputs -------------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: a line item as sent by staff (already priced)."""

    name: str
    qty: int
    price: int
    item_key: str = ""


@dataclass(frozen=True)
class MenuPick:
    """Input: a menu item key and how many of it."""

    item_key: str
    qty: int


@dataclass(frozen=True)
class MenuItemSpec:
    """Input: one entry of a menu upload."""

    item_key: str
    name: str
    price: int
    category: str | None = None
    description: str | None = None
    image: str | None = None


# --- Outputs ------------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemDTO:
    id: str | None
    item_key: str
    name: str
    qty: int
    price: int
    line_total: int


@dataclass(frozen=True)
class HistoryEntryDTO:
    when: str
    action: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    order_no: str
    created_at: str
    updated_at: str
    guest_name: str
    room_no: str
    notes: str
    source: str
    menu_version: str
    status: str
    payment_status: str
    requested_time: str | None
    history: list[HistoryEntryDTO]
    total: int
    items: list[OrderItemDTO]


@dataclass(frozen=True)
class MenuItemDTO:
    id: str
    version: str
    item_key: str
    name: str
    description: str
    price: int
    category: str
    image: str


@dataclass(frozen=True)
class DaySummaryDTO:
    """Output: end-of-day audit figures."""

    date: str
    order_count: int
    revenue: int
    completed_count: int
    paid_count: int
    partial_count: int
    unpaid_count: int
    status_counts: dict[str, int]
