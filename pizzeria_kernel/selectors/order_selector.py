"""
Module: pizzeria_kernel.selectors.order_selector
Responsibility: Read access to the Order Ledger.
Architecture position: Kernel > Selectors.
"""

from uuid import UUID

from sqlalchemy import func, select

from pizzeria_kernel.domain.dtos import OrderRecord
from pizzeria_kernel.exceptions import OrderNotFoundError
from pizzeria_kernel.models.order import Order
from pizzeria_kernel.selectors.base import BaseSelector


class OrderSelector(BaseSelector):
    """Queries over committed orders."""

    def get(self, order_id: UUID) -> OrderRecord:
        """
        Get a committed order by ID.

        Raises:
            OrderNotFoundError: If no order has this ID.
        """
        order = self.session.get(Order, order_id)
        if order is None:
            raise OrderNotFoundError(str(order_id))
        return OrderRecord.from_model(order)

    def list_recent(self, limit: int = 20) -> list[OrderRecord]:
        """Most recent orders first."""
        stmt = (
            select(Order)
            .order_by(Order.created_at.desc(), Order.id)
            .limit(limit)
        )
        return [OrderRecord.from_model(o) for o in self.session.execute(stmt).scalars()]

    def list_for_customer(self, customer_id: UUID) -> list[OrderRecord]:
        stmt = (
            select(Order)
            .where(Order.customer_id == customer_id)
            .order_by(Order.created_at, Order.id)
        )
        return [OrderRecord.from_model(o) for o in self.session.execute(stmt).scalars()]

    def count(self) -> int:
        return self.session.execute(select(func.count(Order.id))).scalar_one()
