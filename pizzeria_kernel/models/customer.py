"""
Module: pizzeria_kernel.models.customer
Responsibility: ORM persistence for the Customer Directory.
Architecture position: Kernel > Models.  May import from db/base.py only.

Read-only to the order placement engine; orders snapshot the customer name.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from pizzeria_kernel.db.base import TimestampedBase


class Customer(TimestampedBase):
    """A customer who places orders."""

    __tablename__ = "customers"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    address: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<Customer {self.name}>"
