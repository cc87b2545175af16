"""Application service: List Orders use case (query)."""

from __future__ import annotations

from datetime import date

from hos.application.dto import OrderDTO
from hos.application.mapping import order_to_dto, parse_enum
from hos.domain.model.order import OrderStatus
from hos.domain.repository.order_repository import OrderFilters, OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        day: date | None = None,
        status: str | None = None,
        room_no: str | None = None,
        search: str | None = None,
    ) -> list[OrderDTO]:
        """List orders, newest first.  Blank filters are ignored."""
        filters = OrderFilters(
            date=day,
            status=parse_enum(OrderStatus, status, "status"),
            room_no=room_no or None,
            search=search or None,
        )
        return [order_to_dto(o) for o in self._order_repo.list_matching(filters)]
