"""Order ledger reads."""

from uuid import uuid4

import pytest

from pizzeria_kernel.exceptions import OrderNotFoundError
from pizzeria_kernel.selectors.order_selector import OrderSelector


class TestOrderSelector:
    def test_get_returns_snapshot(self, order_history, session):
        placed = order_history[1]
        record = OrderSelector(session).get(placed.order_id)

        assert record.id == placed.order_id
        assert record.customer_name == "María"
        assert record.total == placed.total
        assert record.courier.id == placed.courier.id
        assert [line.name for line in record.lines] == ["Margarita", "Pepperoni"]

    def test_get_unknown_raises(self, seeded, session):
        missing = uuid4()
        with pytest.raises(OrderNotFoundError) as exc_info:
            OrderSelector(session).get(missing)
        assert exc_info.value.order_id == str(missing)
        assert exc_info.value.code == "ORDER_NOT_FOUND"

    def test_list_recent_newest_first(self, order_history, session):
        recent = OrderSelector(session).list_recent(limit=2)
        assert [r.id for r in recent] == [order_history[2].order_id, order_history[1].order_id]

    def test_list_for_customer_oldest_first(self, order_history, session, seeded):
        orders = OrderSelector(session).list_for_customer(seeded.customers["Carlos"])
        assert [o.id for o in orders] == [order_history[0].order_id, order_history[2].order_id]

    def test_count(self, order_history, session):
        assert OrderSelector(session).count() == 3
