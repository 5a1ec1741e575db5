"""
Seed data shapes -- the catalog, roster and customers a fresh store starts with.

The configuration layer parses seed files into these dataclasses and hands
them to BootstrapService; the kernel never reads files itself.
"""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class IngredientSeed:
    name: str
    category: str
    stock: int


@dataclass(frozen=True)
class RecipeLineSeed:
    """One bill-of-materials line, naming its ingredient."""

    ingredient: str
    quantity: int


@dataclass(frozen=True)
class MenuItemSeed:
    name: str
    category: str
    price: Decimal
    recipe: tuple[RecipeLineSeed, ...] = ()


@dataclass(frozen=True)
class CourierSeed:
    name: str
    zone: str
    status: str = "available"


@dataclass(frozen=True)
class CustomerSeed:
    name: str
    phone: str | None = None
    address: str | None = None


@dataclass(frozen=True)
class SeedData:
    """Everything BootstrapService.load() inserts."""

    ingredients: tuple[IngredientSeed, ...] = ()
    menu_items: tuple[MenuItemSeed, ...] = ()
    couriers: tuple[CourierSeed, ...] = ()
    customers: tuple[CustomerSeed, ...] = ()
    source: str | None = field(default=None, compare=False)
