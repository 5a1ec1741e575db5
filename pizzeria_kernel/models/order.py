"""
Module: pizzeria_kernel.models.order
Responsibility: ORM persistence for the Order Ledger -- committed orders with
    their line-item snapshots and courier snapshot.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - Append-only: an Order and its lines are inserted once by the order
      placement engine and never updated by the kernel.
    - Lines are snapshots: name, category and unit price are copied from the
      catalog at placement time.  menu_item_id is kept (without FK) so the
      reporting queries can join back to the catalog.
    - (order_id, position) is unique; quantity > 0.

Audit relevance:
    The reporting module derives every aggregate from these rows; there are no
    stored counters.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pizzeria_kernel.db.base import Base, UUIDString


class OrderStatus(str, Enum):
    """Order status.  Only IN_PREPARATION is written by the kernel."""

    IN_PREPARATION = "in_preparation"


class Order(Base):
    """A committed order."""

    __tablename__ = "orders"

    __table_args__ = (
        CheckConstraint("total >= 0", name="ck_order_total_non_negative"),
        Index("idx_order_created_at", "created_at"),
        Index("idx_order_customer", "customer_id"),
    )

    customer_id: Mapped[UUID] = mapped_column(UUIDString(), nullable=False)

    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)

    total: Mapped[Decimal] = mapped_column(nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    # Courier snapshot taken from the reservation
    courier_id: Mapped[UUID] = mapped_column(UUIDString(), nullable=False)

    courier_name: Mapped[str] = mapped_column(String(255), nullable=False)

    courier_zone: Mapped[str] = mapped_column(String(100), nullable=False)

    status: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default=OrderStatus.IN_PREPARATION.value,
    )

    lines: Mapped[list["OrderLine"]] = relationship(
        back_populates="order",
        order_by="OrderLine.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Order {self.id} total={self.total} status={self.status}>"


class OrderLine(Base):
    """Immutable snapshot of one ordered menu item."""

    __tablename__ = "order_lines"

    __table_args__ = (
        UniqueConstraint("order_id", "position", name="uq_order_line_position"),
        CheckConstraint("quantity > 0", name="ck_order_line_quantity_positive"),
        Index("idx_order_line_menu_item", "menu_item_id"),
    )

    order_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    position: Mapped[int] = mapped_column(Integer, nullable=False)

    menu_item_id: Mapped[UUID] = mapped_column(UUIDString(), nullable=False)

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    category: Mapped[str] = mapped_column(String(50), nullable=False)

    unit_price: Mapped[Decimal] = mapped_column(nullable=False)

    quantity: Mapped[int] = mapped_column(BigInteger, nullable=False)

    order: Mapped[Order] = relationship(back_populates="lines")
