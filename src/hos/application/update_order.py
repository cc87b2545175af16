"""Application service: Update Order use case.

Status and payment may be set to any known value by default.  With
``strict_transitions`` enabled, moving an order backwards in the kitchen
flow (e.g. Completed -> New) is rejected instead.  The check runs inside
the repository transaction against the locked row.
"""

from __future__ import annotations

import logging

from hos.application.dto import OrderDTO
from hos.application.mapping import order_to_dto, parse_enum
from hos.domain.exceptions import ValidationError
from hos.domain.model.order import (
    Order,
    OrderChanges,
    OrderStatus,
    PaymentStatus,
    is_forward_transition,
)
from hos.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class UpdateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        strict_transitions: bool = False,
    ) -> None:
        self._order_repo = order_repo
        self._strict_transitions = strict_transitions

    def handle(
        self,
        order_id: str,
        status: str | None = None,
        payment_status: str | None = None,
        requested_time: str | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        changes = OrderChanges(
            status=parse_enum(OrderStatus, status, "status"),
            payment_status=parse_enum(PaymentStatus, payment_status, "payment status"),
            requested_time=requested_time,
            notes=notes,
        )

        guard = _reject_backward_moves if self._strict_transitions else None
        order = self._order_repo.patch(order_id, changes, guard=guard)
        logger.info(
            f"Order {order.order_no} updated "
            f"(status={order.status.value}, payment={order.payment_status.value})"
        )
        return order_to_dto(order)


def _reject_backward_moves(current: Order, changes: OrderChanges) -> None:
    if changes.status is None:
        return
    if not is_forward_transition(current.status, changes.status):
        raise ValidationError(
            f"Cannot move order {current.order_no} from "
            f"{current.status.value} back to {changes.status.value}"
        )
