"""Domain models for the pizzeria kernel."""

from pizzeria_kernel.models.courier import Courier, CourierStatus
from pizzeria_kernel.models.customer import Customer
from pizzeria_kernel.models.ingredient import Ingredient
from pizzeria_kernel.models.menu_item import MenuItem, MenuItemIngredient
from pizzeria_kernel.models.order import Order, OrderLine, OrderStatus

__all__ = [
    "Courier",
    "CourierStatus",
    "Customer",
    "Ingredient",
    "MenuItem",
    "MenuItemIngredient",
    "Order",
    "OrderLine",
    "OrderStatus",
]
