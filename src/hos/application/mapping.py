"""Conversions between DTOs and domain objects, shared by the handlers."""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from hos.application.dto import (
    HistoryEntryDTO,
    MenuItemDTO,
    OrderDTO,
    OrderItemDTO,
    OrderItemSpec,
)
from hos.domain.exceptions import ValidationError
from hos.domain.model.menu import MenuItem
from hos.domain.model.order import Order, OrderItem
from hos.domain.model.value_objects import Price, Quantity

E = TypeVar("E", bound=Enum)


def build_order_items(specs: list[OrderItemSpec]) -> list[OrderItem]:
    """Turn input specs into domain line items, validating qty and price."""
    return [
        OrderItem(
            item_key=spec.item_key or "",
            name=spec.name,
            quantity=Quantity(spec.qty),
            unit_price=Price(spec.price),
        )
        for spec in specs
    ]


def parse_enum(enum_cls: type[E], value: str | None, label: str) -> E | None:
    """Map a raw value onto *enum_cls*; empty or None means "not given"."""
    if not value:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            f"Unknown {label} '{value}' (expected one of: {allowed})"
        ) from None


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_no=order.order_no,
        created_at=order.created_at.isoformat(),
        updated_at=order.updated_at.isoformat(),
        guest_name=order.guest_name,
        room_no=order.room_no,
        notes=order.notes,
        source=order.source,
        menu_version=order.menu_version,
        status=order.status.value,
        payment_status=order.payment_status.value,
        requested_time=order.requested_time,
        history=[
            HistoryEntryDTO(when=entry.when.isoformat(), action=entry.action)
            for entry in order.history
        ],
        total=order.total,
        items=[
            OrderItemDTO(
                id=item.id,
                item_key=item.item_key,
                name=item.name,
                qty=item.quantity.value,
                price=item.unit_price.amount,
                line_total=item.line_total,
            )
            for item in order.items
        ],
    )


def menu_item_to_dto(item: MenuItem) -> MenuItemDTO:
    return MenuItemDTO(
        id=item.id,  # type: ignore[arg-type]
        version=item.version,
        item_key=item.item_key,
        name=item.name,
        description=item.description,
        price=item.price.amount,
        category=item.category,
        image=item.image,
    )
