"""Tests for the SQLAlchemy order repository against a temporary SQLite file."""

from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from hos.domain.exceptions import EntityNotFoundError, PersistenceError, ValidationError
from hos.domain.model.order import (
    Order,
    OrderChanges,
    OrderItem,
    OrderStatus,
    PaymentStatus,
)
from hos.domain.model.value_objects import Price, Quantity
from hos.domain.repository.order_repository import OrderFilters
from hos.infrastructure.persistence.database import (
    init_database,
    make_engine,
    make_session_factory,
)
from hos.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from hos.infrastructure.persistence.tables import OrderItemRow, OrderRow
from tests.fakes import StepClock

DAY = date(2025, 10, 17)
T0 = datetime(2025, 10, 17, 9, 30, 0, 123456, tzinfo=timezone.utc)


@pytest.fixture
def session_factory(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'orders.db'}")
    init_database(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def repo(session_factory):
    return SqlOrderRepository(session_factory, clock=StepClock(start=T0 + timedelta(hours=2)))


def _item(name: str, qty: int, price: int, key: str = "") -> OrderItem:
    return OrderItem(item_key=key, name=name, quantity=Quantity(qty), unit_price=Price(price))


def _new_order(now: datetime = T0, guest: str = "Asha", room: str = "305", items=None) -> Order:
    if items is None:
        items = [_item("Dal Makhani", 2, 100, "dal_makhani"), _item("Naan", 1, 50, "naan")]
    return Order.create(guest_name=guest, room_no=room, items=items, now=now)


def _count(session_factory, model) -> int:
    with session_factory() as session:
        return session.scalar(select(func.count()).select_from(model))


class TestCreate:

    def test_assigns_id_and_persists(self, repo):
        saved = repo.create(_new_order())
        assert saved.id is not None
        assert saved.total == 250
        assert saved.status == OrderStatus.NEW
        assert saved.payment_status == PaymentStatus.NOT_PAID
        assert [h.action for h in saved.history] == ["Created"]

    def test_round_trip(self, repo):
        saved = repo.create(_new_order())
        assert repo.get_by_id(saved.id) == saved

    def test_timestamps_come_back_aware_and_exact(self, repo):
        saved = repo.create(_new_order())
        assert saved.created_at == T0
        assert saved.created_at.tzinfo is not None
        assert saved.history[0].when == T0

    def test_items_keep_insertion_order(self, repo):
        items = [_item(name, 1, 10) for name in ["Zeera Rice", "Aloo Gobi", "Mango Lassi"]]
        saved = repo.create(_new_order(items=items))
        assert [i.name for i in saved.items] == ["Zeera Rice", "Aloo Gobi", "Mango Lassi"]
        assert all(i.id for i in saved.items)

    def test_duplicate_order_number_rejected_atomically(self, repo, session_factory):
        repo.create(_new_order())
        with pytest.raises(PersistenceError, match="duplicate order number"):
            repo.create(_new_order(guest="Ravi", room="112"))
        assert _count(session_factory, OrderRow) == 1
        assert _count(session_factory, OrderItemRow) == 2


class TestGetById:

    def test_missing_returns_none(self, repo):
        assert repo.get_by_id("does-not-exist") is None


class TestAppendItems:

    def test_incremental_total_status_and_history(self, repo):
        saved = repo.create(_new_order())
        updated = repo.append_items(saved.id, [_item("Raita", 1, 25, "raita")])
        assert updated.total == 275
        assert updated.status == OrderStatus.UPDATED
        assert len(updated.history) == 2
        assert updated.history[-1].action == "Added 1 items"
        assert [i.name for i in updated.items] == ["Dal Makhani", "Naan", "Raita"]
        assert updated.updated_at == T0 + timedelta(hours=2)
        assert updated.created_at == T0

    def test_completed_order_reopened(self, repo):
        saved = repo.create(_new_order())
        repo.patch(saved.id, OrderChanges(status=OrderStatus.COMPLETED))
        updated = repo.append_items(saved.id, [_item("Tea", 1, 30)])
        assert updated.status == OrderStatus.UPDATED

    def test_missing_order_changes_nothing(self, repo, session_factory):
        with pytest.raises(EntityNotFoundError, match="not found"):
            repo.append_items("missing", [_item("Tea", 1, 30)])
        assert _count(session_factory, OrderItemRow) == 0

    def test_repeated_appends_accumulate(self, repo):
        saved = repo.create(_new_order())
        repo.append_items(saved.id, [_item("Tea", 2, 30)])
        updated = repo.append_items(saved.id, [_item("Coffee", 1, 40), _item("Tea", 1, 30)])
        assert updated.total == 250 + 60 + 70
        assert updated.total == updated.recomputed_total
        assert [h.action for h in updated.history] == [
            "Created",
            "Added 1 items",
            "Added 2 items",
        ]


class TestPatch:

    def test_status_change_recorded(self, repo):
        saved = repo.create(_new_order())
        updated = repo.patch(saved.id, OrderChanges(status=OrderStatus.PREPARING))
        assert updated.status == OrderStatus.PREPARING
        assert updated.history[-1].action == "Status -> Preparing"

    def test_same_status_not_recorded(self, repo):
        saved = repo.create(_new_order())
        updated = repo.patch(saved.id, OrderChanges(status=OrderStatus.NEW))
        assert len(updated.history) == 1

    def test_empty_patch_only_refreshes_updated_at(self, repo):
        saved = repo.create(_new_order())
        updated = repo.patch(saved.id, OrderChanges())
        assert updated.updated_at != saved.updated_at
        saved.updated_at = updated.updated_at
        assert updated == saved

    def test_fields_overwritten_and_kept(self, repo):
        saved = repo.create(_new_order())
        repo.patch(saved.id, OrderChanges(notes="no onions", requested_time="19:30"))
        updated = repo.patch(saved.id, OrderChanges(payment_status=PaymentStatus.PARTIAL))
        assert updated.notes == "no onions"
        assert updated.requested_time == "19:30"
        assert updated.payment_status == PaymentStatus.PARTIAL
        assert updated.history[-1].action == "Payment -> Partial"

    def test_missing_order_rejected(self, repo):
        with pytest.raises(EntityNotFoundError):
            repo.patch("missing", OrderChanges(status=OrderStatus.READY))


class TestRollback:

    def test_failed_append_leaves_order_untouched(self, repo, session_factory):
        saved = repo.create(_new_order())
        bad = OrderItem(item_key="x", name=None, quantity=Quantity(1), unit_price=Price(10))

        with pytest.raises(PersistenceError, match="Could not add items"):
            repo.append_items(saved.id, [_item("Tea", 1, 30), bad])

        assert _count(session_factory, OrderItemRow) == 2
        assert repo.get_by_id(saved.id) == saved

    def test_failed_patch_leaves_order_untouched(self, repo, monkeypatch):
        saved = repo.create(_new_order())
        write_header = SqlOrderRepository._apply_header

        def write_header_without_total(row, order):
            write_header(row, order)
            row.total = None

        monkeypatch.setattr(
            SqlOrderRepository, "_apply_header", staticmethod(write_header_without_total)
        )
        with pytest.raises(PersistenceError, match="Could not update order"):
            repo.patch(saved.id, OrderChanges(status=OrderStatus.READY, notes="late"))

        assert repo.get_by_id(saved.id) == saved

    def test_guard_rejection_writes_nothing(self, repo):
        saved = repo.create(_new_order())

        def refuse(current, changes):
            raise ValidationError(f"no changes to {current.order_no}")

        with pytest.raises(ValidationError, match="no changes"):
            repo.patch(saved.id, OrderChanges(status=OrderStatus.READY), guard=refuse)
        assert repo.get_by_id(saved.id) == saved

    def test_guard_sees_committed_state(self, repo):
        saved = repo.create(_new_order())
        repo.patch(saved.id, OrderChanges(status=OrderStatus.SERVED))
        seen = []

        def record(current, changes):
            seen.append((current.status, changes.status))

        repo.patch(saved.id, OrderChanges(status=OrderStatus.COMPLETED), guard=record)
        assert seen == [(OrderStatus.SERVED, OrderStatus.COMPLETED)]


class TestListMatching:

    @pytest.fixture
    def seeded(self, repo):
        def at(day: int, hour: int, minute: int = 0, ms: int = 0) -> datetime:
            return datetime(2025, 10, day, hour, minute, tzinfo=timezone.utc) + timedelta(
                milliseconds=ms
            )

        orders = {
            "early": repo.create(_new_order(at(17, 0), "Asha Rao", "305")),
            "noon": repo.create(_new_order(at(17, 12, 1), "Ravi Kumar", "112")),
            "late": repo.create(_new_order(at(17, 23, 59, ms=59_999), "Meera", "501")),
            "before": repo.create(_new_order(at(16, 23, 59), "Asha Rao", "305")),
            "after": repo.create(_new_order(at(18, 0, ms=1), "Joe", "215")),
        }
        return repo, orders

    def test_date_window_and_descending_order(self, seeded):
        repo, orders = seeded
        result = repo.list_matching(OrderFilters(date=DAY))
        assert [o.id for o in result] == [
            orders["late"].id,
            orders["noon"].id,
            orders["early"].id,
        ]

    def test_everything_newest_first(self, seeded):
        repo, orders = seeded
        result = repo.list_matching(OrderFilters())
        assert result[0].id == orders["after"].id
        assert result[-1].id == orders["before"].id

    def test_items_and_history_attached(self, seeded):
        repo, _ = seeded
        for order in repo.list_matching(OrderFilters(date=DAY)):
            assert len(order.items) == 2
            assert order.history[0].action == "Created"

    def test_search_is_case_insensitive_across_fields(self, seeded):
        repo, orders = seeded
        by_guest = repo.list_matching(OrderFilters(search="ASHA"))
        assert {o.id for o in by_guest} == {orders["early"].id, orders["before"].id}

        by_room = repo.list_matching(OrderFilters(search="50"))
        assert [o.id for o in by_room] == [orders["late"].id]

        by_number = repo.list_matching(OrderFilters(search=orders["noon"].order_no.lower()))
        assert [o.id for o in by_number] == [orders["noon"].id]

    def test_search_treats_wildcards_literally(self, seeded):
        repo, _ = seeded
        assert repo.list_matching(OrderFilters(search="%")) == []
        assert repo.list_matching(OrderFilters(search="_")) == []

    def test_room_and_status_filters(self, seeded):
        repo, orders = seeded
        repo.patch(orders["early"].id, OrderChanges(status=OrderStatus.SERVED))
        result = repo.list_matching(
            OrderFilters(room_no="305", status=OrderStatus.SERVED)
        )
        assert [o.id for o in result] == [orders["early"].id]

    def test_filters_combine_with_and(self, seeded):
        repo, orders = seeded
        result = repo.list_matching(OrderFilters(date=DAY, search="asha"))
        assert [o.id for o in result] == [orders["early"].id]

    def test_sub_millisecond_end_of_day_stays_on_that_day(self, repo):
        at = datetime(2025, 10, 17, 23, 59, 59, 999500, tzinfo=timezone.utc)
        saved = repo.create(_new_order(at))
        assert [o.id for o in repo.list_matching(OrderFilters(date=DAY))] == [saved.id]
        assert repo.list_matching(OrderFilters(date=date(2025, 10, 18))) == []

    def test_midnight_belongs_to_the_new_day(self, repo):
        saved = repo.create(_new_order(datetime(2025, 10, 18, tzinfo=timezone.utc)))
        assert repo.list_matching(OrderFilters(date=DAY)) == []
        assert [o.id for o in repo.list_matching(OrderFilters(date=date(2025, 10, 18)))] == [
            saved.id
        ]


class TestLifecycleScenario:

    def test_create_append_pay(self, repo):
        saved = repo.create(_new_order(items=[_item("A", 2, 100), _item("B", 1, 50)]))
        assert saved.total == 250

        appended = repo.append_items(saved.id, [_item("C", 1, 25)])
        assert appended.total == 275
        assert appended.status == OrderStatus.UPDATED

        paid = repo.patch(saved.id, OrderChanges(payment_status=PaymentStatus.PAID))
        assert paid.history[-1].action == "Payment -> Paid"
        assert [h.action for h in paid.history] == ["Created", "Added 1 items", "Payment -> Paid"]
