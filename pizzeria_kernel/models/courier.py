"""
Module: pizzeria_kernel.models.courier
Responsibility: ORM persistence for the Courier Roster.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - status is one of CourierStatus.
    - AVAILABLE -> BUSY happens only through CourierService.reserve_available(),
      a single conditional UPDATE.  BUSY -> AVAILABLE (release after delivery)
      is outside the kernel.
"""

from enum import Enum

from sqlalchemy import CheckConstraint, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from pizzeria_kernel.db.base import TimestampedBase


class CourierStatus(str, Enum):
    """Courier availability."""

    AVAILABLE = "available"
    BUSY = "busy"


class Courier(TimestampedBase):
    """A delivery courier."""

    __tablename__ = "couriers"

    __table_args__ = (
        CheckConstraint(
            "status IN ('available', 'busy')",
            name="ck_courier_status",
        ),
        Index("idx_courier_status", "status"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    zone: Mapped[str] = mapped_column(String(100), nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=CourierStatus.AVAILABLE.value,
    )

    def __repr__(self) -> str:
        return f"<Courier {self.name} {self.zone} {self.status}>"
