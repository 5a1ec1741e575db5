"""
BootstrapService -- loads seed data into an empty (or reset) store.

Responsibility:
    Inserts ingredients, menu items with their bill-of-materials, couriers and
    customers from a SeedData value.  Bill-of-materials lines name their
    ingredient; names are resolved to ids here.

Architecture position:
    Kernel > Services.  Called by scripts/seed_data.py and by test fixtures.
    Flushes only; the caller commits.

Invariants enforced:
    - Loading is additive and idempotent by name: an ingredient, menu item,
      courier or customer whose name already exists is left untouched.
    - ``reset=True`` deletes orders, catalog, roster and customers first.
      Development use only.

Failure modes:
    - ValueError: a recipe line names an ingredient that is neither in the
      seed nor already stored, or has a non-positive quantity.
"""

from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy import delete, select

from pizzeria_kernel.domain.seed import SeedData
from pizzeria_kernel.logging_config import get_logger
from pizzeria_kernel.models.courier import Courier
from pizzeria_kernel.models.customer import Customer
from pizzeria_kernel.models.ingredient import Ingredient
from pizzeria_kernel.models.menu_item import MenuItem, MenuItemIngredient
from pizzeria_kernel.models.order import Order, OrderLine
from pizzeria_kernel.services.base import BaseService

logger = get_logger("services.bootstrap")


@dataclass
class SeedSummary:
    """Ids by name for every seeded row, plus how many rows were new."""

    ingredients: dict[str, UUID] = field(default_factory=dict)
    menu_items: dict[str, UUID] = field(default_factory=dict)
    couriers: dict[str, UUID] = field(default_factory=dict)
    customers: dict[str, UUID] = field(default_factory=dict)
    inserted: int = 0
    skipped: int = 0


class BootstrapService(BaseService):
    """Seeds the catalog, the courier roster and the customer directory."""

    def load(self, seed: SeedData, reset: bool = False) -> SeedSummary:
        if reset:
            self.reset()

        summary = SeedSummary()
        self._load_ingredients(seed, summary)
        self._load_menu_items(seed, summary)
        self._load_couriers(seed, summary)
        self._load_customers(seed, summary)
        self.session.flush()

        logger.info(
            "seed_loaded",
            extra={
                "source": seed.source,
                "inserted": summary.inserted,
                "skipped": summary.skipped,
                "reset": reset,
            },
        )
        return summary

    def reset(self) -> None:
        """Delete every row the kernel owns, children first."""
        for model in (OrderLine, Order, MenuItemIngredient, MenuItem, Ingredient, Courier, Customer):
            self.session.execute(delete(model))
        self.session.flush()
        logger.warning("store_reset")

    def _existing_ids(self, model) -> dict[str, UUID]:
        rows = self.session.execute(select(model.name, model.id)).all()
        return {row.name: row.id for row in rows}

    def _load_ingredients(self, seed: SeedData, summary: SeedSummary) -> None:
        existing = self._existing_ids(Ingredient)
        for item in seed.ingredients:
            if item.stock < 0:
                raise ValueError(f"Ingredient {item.name!r} has negative stock {item.stock}")
            if item.name in existing:
                summary.ingredients[item.name] = existing[item.name]
                summary.skipped += 1
                continue
            row = Ingredient(name=item.name, category=item.category, stock=item.stock)
            self.session.add(row)
            self.session.flush()
            existing[item.name] = row.id
            summary.ingredients[item.name] = row.id
            summary.inserted += 1

    def _load_menu_items(self, seed: SeedData, summary: SeedSummary) -> None:
        ingredient_ids = self._existing_ids(Ingredient)
        existing = self._existing_ids(MenuItem)
        for item in seed.menu_items:
            if item.name in existing:
                summary.menu_items[item.name] = existing[item.name]
                summary.skipped += 1
                continue

            bom: list[MenuItemIngredient] = []
            for position, line in enumerate(item.recipe):
                if line.ingredient not in ingredient_ids:
                    raise ValueError(
                        f"Menu item {item.name!r} uses unknown ingredient {line.ingredient!r}"
                    )
                if line.quantity <= 0:
                    raise ValueError(
                        f"Menu item {item.name!r} needs a positive quantity of {line.ingredient!r}"
                    )
                bom.append(
                    MenuItemIngredient(
                        position=position,
                        ingredient_id=ingredient_ids[line.ingredient],
                        quantity=line.quantity,
                    )
                )

            row = MenuItem(
                name=item.name,
                category=item.category,
                price=item.price,
                ingredients=bom,
            )
            self.session.add(row)
            self.session.flush()
            existing[item.name] = row.id
            summary.menu_items[item.name] = row.id
            summary.inserted += 1

    def _load_couriers(self, seed: SeedData, summary: SeedSummary) -> None:
        existing = self._existing_ids(Courier)
        for item in seed.couriers:
            if item.name in existing:
                summary.couriers[item.name] = existing[item.name]
                summary.skipped += 1
                continue
            row = Courier(name=item.name, zone=item.zone, status=item.status)
            self.session.add(row)
            self.session.flush()
            existing[item.name] = row.id
            summary.couriers[item.name] = row.id
            summary.inserted += 1

    def _load_customers(self, seed: SeedData, summary: SeedSummary) -> None:
        existing = self._existing_ids(Customer)
        for item in seed.customers:
            if item.name in existing:
                summary.customers[item.name] = existing[item.name]
                summary.skipped += 1
                continue
            row = Customer(name=item.name, phone=item.phone, address=item.address)
            self.session.add(row)
            self.session.flush()
            existing[item.name] = row.id
            summary.customers[item.name] = row.id
            summary.inserted += 1
