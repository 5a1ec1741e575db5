"""
Module: pizzeria_kernel.models.ingredient
Responsibility: ORM persistence for the Inventory Store -- one row per
    ingredient with its stock-on-hand.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - stock >= 0, both at the database level (ck_ingredient_stock_non_negative)
      and by the conditional decrement in InventoryService.
    - name is unique; bill-of-materials rows reference the id, never the name.

Failure modes:
    - IntegrityError on duplicate name or on any write that would take
      stock below zero.
"""

from sqlalchemy import BigInteger, CheckConstraint, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pizzeria_kernel.db.base import TimestampedBase


class Ingredient(TimestampedBase):
    """
    A stocked ingredient.

    Contract:
        Stock is mutated only by the order placement engine's conditional
        decrement, inside a placement transaction.
    """

    __tablename__ = "ingredients"

    __table_args__ = (
        UniqueConstraint("name", name="uq_ingredient_name"),
        CheckConstraint("stock >= 0", name="ck_ingredient_stock_non_negative"),
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Free-form tag ("cheese", "sauce", "topping")
    category: Mapped[str] = mapped_column(String(50), nullable=False)

    stock: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Ingredient {self.name} stock={self.stock}>"
