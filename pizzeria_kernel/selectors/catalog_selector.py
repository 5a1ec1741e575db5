"""
Module: pizzeria_kernel.selectors.catalog_selector
Responsibility: Batch reads of the Catalog Store, the Customer Directory, the
    Inventory Store and the Courier Roster.
Architecture position: Kernel > Selectors.

The order placement service uses the batched lookups (one query per entity
kind per placement).  The list methods serve the CLI and the bootstrap script.
"""

from typing import Iterable
from uuid import UUID

from sqlalchemy import select

from pizzeria_kernel.domain.dtos import CourierSnapshot, CustomerInfo, MenuItemInfo
from pizzeria_kernel.models.courier import Courier
from pizzeria_kernel.models.customer import Customer
from pizzeria_kernel.models.ingredient import Ingredient
from pizzeria_kernel.models.menu_item import MenuItem
from pizzeria_kernel.selectors.base import BaseSelector


class CatalogSelector(BaseSelector):
    """Read access to catalog, customers, ingredients and couriers."""

    def find_customer(self, customer_id: UUID) -> CustomerInfo | None:
        customer = self.session.get(Customer, customer_id)
        return CustomerInfo.from_model(customer) if customer else None

    def menu_items_by_id(self, item_ids: Iterable[UUID]) -> dict[UUID, MenuItemInfo]:
        """Fetch menu items with their bill-of-materials in one batch."""
        ids = list(item_ids)
        if not ids:
            return {}
        stmt = select(MenuItem).where(MenuItem.id.in_(ids))
        items = self.session.execute(stmt).scalars().all()
        return {item.id: MenuItemInfo.from_model(item) for item in items}

    def ingredients_by_id(self, ingredient_ids: Iterable[UUID]) -> dict[UUID, Ingredient]:
        """
        Fetch ingredients in one batch.

        Returns ORM rows: the inventory step needs the live stock value.
        """
        ids = list(ingredient_ids)
        if not ids:
            return {}
        stmt = select(Ingredient).where(Ingredient.id.in_(ids))
        return {ing.id: ing for ing in self.session.execute(stmt).scalars().all()}

    def list_menu_items(self) -> list[MenuItemInfo]:
        stmt = select(MenuItem).order_by(MenuItem.category, MenuItem.name)
        return [MenuItemInfo.from_model(i) for i in self.session.execute(stmt).scalars()]

    def list_customers(self) -> list[CustomerInfo]:
        stmt = select(Customer).order_by(Customer.name)
        return [CustomerInfo.from_model(c) for c in self.session.execute(stmt).scalars()]

    def list_ingredients(self) -> list[Ingredient]:
        stmt = select(Ingredient).order_by(Ingredient.name)
        return list(self.session.execute(stmt).scalars())

    def list_couriers(self, status: str | None = None) -> list[tuple[CourierSnapshot, str]]:
        """Couriers with their current status, optionally filtered by status."""
        stmt = select(Courier).order_by(Courier.name, Courier.id)
        if status is not None:
            stmt = stmt.where(Courier.status == status)
        return [
            (CourierSnapshot.from_model(c), c.status)
            for c in self.session.execute(stmt).scalars()
        ]
