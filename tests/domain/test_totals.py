"""Unit tests for the total calculator."""

from hos.domain.model.order import OrderItem
from hos.domain.model.value_objects import Price, Quantity
from hos.domain.service.totals import calculate_total


def _item(qty: int, price: int) -> OrderItem:
    return OrderItem(item_key="k", name="Item", quantity=Quantity(qty), unit_price=Price(price))


class TestCalculateTotal:

    def test_empty_is_zero(self):
        assert calculate_total([]) == 0

    def test_sum_of_qty_times_price(self):
        items = [_item(2, 100), _item(1, 50)]
        assert calculate_total(items) == 250

    def test_matches_manual_sum(self):
        items = [_item(q, p) for q, p in [(1, 255), (3, 60), (2, 180), (4, 0)]]
        assert calculate_total(items) == sum(i.quantity.value * i.unit_price.amount for i in items)

    def test_accepts_any_iterable(self):
        assert calculate_total(iter([_item(5, 20)])) == 100
