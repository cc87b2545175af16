"""Application service: Add Items use case.

Appending items always re-opens the order: its status becomes Updated
even if it was already Completed, so the kitchen picks it up again.
"""

from __future__ import annotations

import logging

from hos.application.dto import OrderDTO, OrderItemSpec
from hos.application.mapping import build_order_items, order_to_dto
from hos.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class AddItemsHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, item_specs: list[OrderItemSpec] | None = None) -> OrderDTO:
        items = build_order_items(item_specs or [])
        order = self._order_repo.append_items(order_id, items)
        logger.info(f"Added {len(items)} items to order {order.order_no}")
        return order_to_dto(order)
