"""Application service: Export a day's orders as CSV (query).

One row per order.  This is a read-only projection over the same
listing the audit screen uses, so rows come newest first.
"""

from __future__ import annotations

import csv
import io
from datetime import date

from hos.domain.model.order import Order
from hos.domain.repository.order_repository import OrderFilters, OrderRepository

CSV_HEADER = [
    "Order No",
    "Guest",
    "Room",
    "Items",
    "Total",
    "Status",
    "Payment",
    "Created At",
]


class ExportOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, day: date) -> str:
        orders = self._order_repo.list_matching(OrderFilters(date=day))

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for order in orders:
            writer.writerow(self._to_row(order))
        return buffer.getvalue()

    @staticmethod
    def _to_row(order: Order) -> list:
        return [
            order.order_no,
            order.guest_name,
            order.room_no,
            order.item_count,
            order.total,
            order.status.value,
            order.payment_status.value,
            order.created_at.isoformat(),
        ]
