"""Application service: Day Summary use case (query).

Mirrors the audit screen: headline counts by payment state plus a
breakdown by kitchen status.  Revenue adds up every order's total,
paid or not.
"""

from __future__ import annotations

from collections import Counter
from datetime import date

from hos.application.dto import DaySummaryDTO
from hos.domain.model.order import OrderStatus, PaymentStatus
from hos.domain.repository.order_repository import OrderFilters, OrderRepository


class DaySummaryHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, day: date) -> DaySummaryDTO:
        orders = self._order_repo.list_matching(OrderFilters(date=day))
        by_status = Counter(o.status for o in orders)
        by_payment = Counter(o.payment_status for o in orders)

        return DaySummaryDTO(
            date=day.isoformat(),
            order_count=len(orders),
            revenue=sum(o.total for o in orders),
            completed_count=by_status[OrderStatus.COMPLETED],
            paid_count=by_payment[PaymentStatus.PAID],
            partial_count=by_payment[PaymentStatus.PARTIAL],
            unpaid_count=by_payment[PaymentStatus.NOT_PAID],
            # every status listed, zeros included, in kitchen-flow order
            status_counts={s.value: by_status[s] for s in OrderStatus},
        )
