"""Order history shared by the report and order selector tests."""

from datetime import datetime, timezone

import pytest

from pizzeria_kernel.db.engine import session_scope
from pizzeria_kernel.models.courier import Courier


@pytest.fixture
def order_history(seeded, placement, clock, session_factory):
    """
    Three committed orders, the last at 2024-03-15 12:00 UTC (clock left there):

        2024-01-20  Carlos  Champiñones Deluxe x4
        2024-03-01  María   Margarita x2, Pepperoni x1
        2024-03-15  Carlos  Pepperoni x1
    """
    with session_scope(session_factory) as sess:
        sess.add(Courier(name="Pedro", zone="Norte"))

    items = seeded.menu_items
    placed = []
    for when, customer, lines in (
        (datetime(2024, 1, 20, 12, tzinfo=timezone.utc), "Carlos", [(items["Champiñones Deluxe"], 4)]),
        (datetime(2024, 3, 1, 12, tzinfo=timezone.utc), "María", [(items["Margarita"], 2), (items["Pepperoni"], 1)]),
        (datetime(2024, 3, 15, 12, tzinfo=timezone.utc), "Carlos", [(items["Pepperoni"], 1)]),
    ):
        clock.set_time(when)
        result = placement.place_order(seeded.customers[customer], lines)
        assert result.success, result.message
        placed.append(result)
    return placed
