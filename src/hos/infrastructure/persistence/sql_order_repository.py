"""SQLAlchemy implementation of OrderRepository.

Each mutating call is one transaction (``sessionmaker.begin()``): the
order header, its items and its history commit together or not at all.
The order row is read ``FOR UPDATE``, so backends with row locks serialise
concurrent appends and patches.  On SQLite two writers may both read the
same starting row; the last one to commit wins.
"""

from __future__ import annotations

import logging
from datetime import datetime, time, timedelta, timezone
from uuid import uuid4

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload, sessionmaker

from hos.domain.exceptions import EntityNotFoundError, PersistenceError
from hos.domain.model.history import HistoryEntry
from hos.domain.model.order import (
    Order,
    OrderChanges,
    OrderItem,
    OrderStatus,
    PaymentStatus,
)
from hos.domain.model.value_objects import Price, Quantity
from hos.domain.repository.order_repository import (
    OrderFilters,
    OrderGuard,
    OrderRepository,
)
from hos.domain.service.clock import Clock, utcnow
from hos.infrastructure.persistence.tables import OrderItemRow, OrderRow

logger = logging.getLogger(__name__)

_ONE_DAY = timedelta(days=1)


class SqlOrderRepository(OrderRepository):

    def __init__(self, session_factory: sessionmaker[Session], clock: Clock = utcnow) -> None:
        self._session_factory = session_factory
        self._clock = clock

    # --- OrderRepository interface --------------------------------------------

    def create(self, order: Order) -> Order:
        order_id = str(uuid4())
        try:
            with self._session_factory.begin() as session:
                session.add(self._to_row(order, order_id))
        except IntegrityError as exc:
            logger.warning(f"Order {order.order_no} rejected by the store: {exc.orig}")
            raise PersistenceError(
                f"Could not create order {order.order_no} (duplicate order number?)"
            ) from exc
        except SQLAlchemyError as exc:
            logger.error(f"Order {order.order_no} rolled back: {exc}")
            raise PersistenceError(f"Could not create order {order.order_no}") from exc
        return self._reload(order_id)

    def get_by_id(self, order_id: str) -> Order | None:
        with self._session_factory() as session:
            row = session.get(OrderRow, order_id, options=[selectinload(OrderRow.items)])
            if row is None:
                return None
            return self._to_domain(row)

    def list_matching(self, filters: OrderFilters) -> list[Order]:
        stmt = select(OrderRow).options(selectinload(OrderRow.items))

        if filters.date is not None:
            start = datetime.combine(filters.date, time.min, tzinfo=timezone.utc)
            stmt = stmt.where(
                OrderRow.created_at >= start, OrderRow.created_at < start + _ONE_DAY
            )
        if filters.status is not None:
            stmt = stmt.where(OrderRow.status == filters.status.value)
        if filters.room_no:
            stmt = stmt.where(OrderRow.room_no == filters.room_no)
        if filters.search:
            pattern = _contains_pattern(filters.search)
            stmt = stmt.where(
                or_(
                    OrderRow.guest_name.ilike(pattern, escape="\\"),
                    OrderRow.room_no.ilike(pattern, escape="\\"),
                    OrderRow.order_no.ilike(pattern, escape="\\"),
                )
            )

        stmt = stmt.order_by(OrderRow.created_at.desc())

        with self._session_factory() as session:
            return [self._to_domain(row) for row in session.scalars(stmt)]

    def append_items(self, order_id: str, items: list[OrderItem]) -> Order:
        now = self._clock()
        try:
            with self._session_factory.begin() as session:
                row = self._load_for_update(session, order_id)
                order = self._to_domain(row)
                start = len(order.items)
                order.add_items(items, now)

                for position, item in enumerate(order.items[start:], start=start):
                    row.items.append(self._item_to_row(item, position))
                self._apply_header(row, order)
        except SQLAlchemyError as exc:
            logger.error(f"Adding items to order {order_id} rolled back: {exc}")
            raise PersistenceError(f"Could not add items to order {order_id}") from exc
        return self._reload(order_id)

    def patch(
        self,
        order_id: str,
        changes: OrderChanges,
        guard: OrderGuard | None = None,
    ) -> Order:
        now = self._clock()
        try:
            with self._session_factory.begin() as session:
                row = self._load_for_update(session, order_id)
                order = self._to_domain(row)
                if guard is not None:
                    guard(order, changes)
                order.apply_changes(changes, now)
                self._apply_header(row, order)
        except SQLAlchemyError as exc:
            logger.error(f"Update of order {order_id} rolled back: {exc}")
            raise PersistenceError(f"Could not update order {order_id}") from exc
        return self._reload(order_id)

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _load_for_update(session: Session, order_id: str) -> OrderRow:
        row = session.get(
            OrderRow,
            order_id,
            options=[selectinload(OrderRow.items)],
            with_for_update=True,
        )
        if row is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        return row

    def _reload(self, order_id: str) -> Order:
        order = self.get_by_id(order_id)
        if order is None:
            raise PersistenceError(f"Order {order_id} vanished after commit")
        return order

    # --- Serialization --------------------------------------------------------

    def _to_row(self, order: Order, order_id: str) -> OrderRow:
        row = OrderRow(
            id=order_id,
            order_no=order.order_no,
            created_at=order.created_at,
            guest_name=order.guest_name,
            room_no=order.room_no,
            source=order.source,
            menu_version=order.menu_version,
        )
        self._apply_header(row, order)
        row.items = [
            self._item_to_row(item, position) for position, item in enumerate(order.items)
        ]
        return row

    @staticmethod
    def _apply_header(row: OrderRow, order: Order) -> None:
        """Copy the mutable header fields from the aggregate onto the row."""
        row.updated_at = order.updated_at
        row.notes = order.notes
        row.status = order.status.value
        row.payment_status = order.payment_status.value
        row.requested_time = order.requested_time
        row.total = order.total
        # assign a fresh list so the JSON column is flagged dirty
        row.history = [
            {"when": entry.when.isoformat(), "action": entry.action}
            for entry in order.history
        ]

    @staticmethod
    def _item_to_row(item: OrderItem, position: int) -> OrderItemRow:
        return OrderItemRow(
            id=item.id or str(uuid4()),
            position=position,
            item_key=item.item_key,
            name=item.name,
            qty=item.quantity.value,
            price=item.unit_price.amount,
        )

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        return Order(
            id=row.id,
            order_no=row.order_no,
            guest_name=row.guest_name,
            room_no=row.room_no,
            created_at=row.created_at,
            updated_at=row.updated_at,
            items=[
                OrderItem(
                    id=i.id,
                    item_key=i.item_key or "",
                    name=i.name,
                    quantity=Quantity(i.qty),
                    unit_price=Price(i.price),
                )
                for i in row.items
            ],
            history=[
                HistoryEntry(when=datetime.fromisoformat(h["when"]), action=h["action"])
                for h in row.history or []
            ],
            total=row.total,
            notes=row.notes or "",
            source=row.source,
            menu_version=row.menu_version,
            status=OrderStatus(row.status),
            payment_status=PaymentStatus(row.payment_status),
            requested_time=row.requested_time,
        )


def _contains_pattern(term: str) -> str:
    """LIKE pattern matching *term* literally anywhere in the column."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
