"""
Module: pizzeria_kernel.models.menu_item
Responsibility: ORM persistence for the Catalog Store -- priced menu items and
    their ordered bill-of-materials.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - price >= 0 (ck_menu_item_price_non_negative).
    - Every bill-of-materials quantity is > 0 (ck_bom_quantity_positive).
    - (menu_item_id, position) is unique, so the bill-of-materials keeps the
      order in which it was defined.

The catalog is read-only to the order placement engine.  Orders snapshot
name, category and price at placement time, so later catalog edits never
change historical orders.
"""

from decimal import Decimal
from uuid import UUID

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pizzeria_kernel.db.base import Base, TimestampedBase, UUIDString


class MenuItem(TimestampedBase):
    """A priced item on the menu (a pizza)."""

    __tablename__ = "menu_items"

    __table_args__ = (
        UniqueConstraint("name", name="uq_menu_item_name"),
        CheckConstraint("price >= 0", name="ck_menu_item_price_non_negative"),
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    price: Mapped[Decimal] = mapped_column(nullable=False)

    ingredients: Mapped[list["MenuItemIngredient"]] = relationship(
        back_populates="menu_item",
        order_by="MenuItemIngredient.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<MenuItem {self.name} {self.category} {self.price}>"


class MenuItemIngredient(Base):
    """One bill-of-materials row: quantity of an ingredient per unit of item."""

    __tablename__ = "menu_item_ingredients"

    __table_args__ = (
        UniqueConstraint("menu_item_id", "position", name="uq_bom_position"),
        CheckConstraint("quantity > 0", name="ck_bom_quantity_positive"),
    )

    menu_item_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("menu_items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    position: Mapped[int] = mapped_column(Integer, nullable=False)

    # No FK: an ingredient may be deleted while still referenced, which the
    # engine reports as MISSING_INGREDIENT.
    ingredient_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        nullable=False,
        index=True,
    )

    quantity: Mapped[int] = mapped_column(BigInteger, nullable=False)

    menu_item: Mapped[MenuItem] = relationship(back_populates="ingredients")
