"""Application service: Create Order use case.

Validates the guest details and line items, lets the Order aggregate
number and total the order, then persists it in one write.
"""

from __future__ import annotations

import logging

from hos.application.dto import OrderDTO, OrderItemSpec
from hos.application.mapping import build_order_items, order_to_dto
from hos.domain.model.order import Order
from hos.domain.repository.order_repository import OrderRepository
from hos.domain.service.clock import Clock, utcnow

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(self, order_repo: OrderRepository, clock: Clock = utcnow) -> None:
        self._order_repo = order_repo
        self._clock = clock

    def handle(
        self,
        guest_name: str,
        room_no: str,
        item_specs: list[OrderItemSpec] | None = None,
        notes: str | None = None,
        menu_version: str | None = None,
    ) -> OrderDTO:
        """Create a new order (status New, payment Not Paid).

        Steps:
        1. Validate each item spec (positive qty, non-negative price).
        2. Let ``Order.create`` check guest/room and seed number, total, history.
        3. Persist and return the stored order as a DTO.
        """
        items = build_order_items(item_specs or [])
        order = Order.create(
            guest_name=guest_name,
            room_no=room_no,
            items=items,
            now=self._clock(),
            notes=notes,
            menu_version=menu_version,
        )
        saved = self._order_repo.create(order)
        logger.info(
            f"Order {saved.order_no} created for room {saved.room_no} "
            f"({saved.item_count} items, total {saved.total})"
        )
        return order_to_dto(saved)
