"""Seeding the store through BootstrapService."""

from decimal import Decimal

import pytest
from sqlalchemy import func, select

from pizzeria_kernel.db.engine import session_scope
from pizzeria_kernel.domain.seed import (
    IngredientSeed,
    MenuItemSeed,
    RecipeLineSeed,
    SeedData,
)
from pizzeria_kernel.models.courier import Courier
from pizzeria_kernel.models.customer import Customer
from pizzeria_kernel.models.ingredient import Ingredient
from pizzeria_kernel.models.menu_item import MenuItem
from pizzeria_kernel.models.order import Order
from pizzeria_kernel.services.bootstrap_service import BootstrapService


def _count(session, model) -> int:
    return session.execute(select(func.count()).select_from(model)).scalar_one()


class TestDefaultSeed:
    def test_loads_full_dataset(self, seeded, session):
        assert set(seeded.ingredients) == {
            "Mozzarella",
            "Salsa de Tomate",
            "Pepperoni",
            "Champiñones",
            "Albahaca",
        }
        assert set(seeded.menu_items) == {"Margarita", "Pepperoni", "Champiñones Deluxe"}
        assert set(seeded.couriers) == {"Juan", "Luis", "Ana"}
        assert set(seeded.customers) == {"Carlos", "María"}
        assert seeded.inserted == 13
        assert seeded.skipped == 0

        assert _count(session, Ingredient) == 5
        assert _count(session, MenuItem) == 3
        assert _count(session, Courier) == 3
        assert _count(session, Customer) == 2

    def test_bill_of_materials_resolves_names_to_ids(self, seeded, session):
        pepperoni = session.get(MenuItem, seeded.menu_items["Pepperoni"])
        assert pepperoni.price == Decimal("26000")
        assert pepperoni.category == "especial"
        assert [(row.ingredient_id, row.quantity) for row in pepperoni.ingredients] == [
            (seeded.ingredients["Mozzarella"], 2),
            (seeded.ingredients["Salsa de Tomate"], 1),
            (seeded.ingredients["Pepperoni"], 3),
        ]

    def test_all_couriers_start_available(self, seeded, session):
        statuses = set(session.execute(select(Courier.status)).scalars())
        assert statuses == {"available"}


class TestIdempotency:
    def test_second_load_inserts_nothing(self, seeded, seed, session_factory):
        with session_scope(session_factory) as session:
            again = BootstrapService(session).load(seed)

        assert again.inserted == 0
        assert again.skipped == 13
        assert again.menu_items == seeded.menu_items

    def test_reset_clears_orders_and_restores_stock(
        self, seeded, seed, placement, session_factory, store_state
    ):
        initial = store_state()
        result = placement.place_order(
            seeded.customers["Carlos"], [(seeded.menu_items["Margarita"], 1)]
        )
        assert result.success
        assert store_state() != initial

        with session_scope(session_factory) as session:
            summary = BootstrapService(session).load(seed, reset=True)

        assert summary.inserted == 13
        assert store_state() == initial
        with session_scope(session_factory) as session:
            assert _count(session, Order) == 0


class TestInvalidSeed:
    def test_unknown_recipe_ingredient_rejected(self, session):
        seed = SeedData(
            ingredients=(IngredientSeed("Mozzarella", "queso", 10),),
            menu_items=(
                MenuItemSeed(
                    "Hawaiana",
                    "especial",
                    Decimal("24000"),
                    (RecipeLineSeed("Piña", 2),),
                ),
            ),
        )
        with pytest.raises(ValueError, match="Piña"):
            BootstrapService(session).load(seed)

    def test_negative_stock_rejected(self, session):
        seed = SeedData(ingredients=(IngredientSeed("Mozzarella", "queso", -1),))
        with pytest.raises(ValueError, match="negative"):
            BootstrapService(session).load(seed)
