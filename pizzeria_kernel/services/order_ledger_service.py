"""
OrderLedgerService -- append-only writes to the Order Ledger.

Responsibility:
    Builds the Order row with its line snapshots and courier snapshot and adds
    it to the caller's transaction.

Invariants enforced:
    - Orders are created exactly once, with status ``in_preparation``.
    - The kernel has no update or delete path for orders.
"""

from datetime import datetime

from pizzeria_kernel.domain.dtos import CourierSnapshot, CustomerInfo, DemandPlan
from pizzeria_kernel.logging_config import get_logger
from pizzeria_kernel.models.order import Order, OrderLine, OrderStatus
from pizzeria_kernel.services.base import BaseService

logger = get_logger("services.order_ledger")


class OrderLedgerService(BaseService):
    """Appends committed-to-be orders."""

    def append(
        self,
        customer: CustomerInfo,
        plan: DemandPlan,
        courier: CourierSnapshot,
        created_at: datetime,
    ) -> Order:
        """
        Insert the order and flush it so its id is assigned.

        Returns:
            The flushed Order ORM instance.
        """
        order = Order(
            customer_id=customer.id,
            customer_name=customer.name,
            total=plan.total,
            created_at=created_at,
            courier_id=courier.id,
            courier_name=courier.name,
            courier_zone=courier.zone,
            status=OrderStatus.IN_PREPARATION.value,
            lines=[
                OrderLine(
                    position=position,
                    menu_item_id=line.menu_item_id,
                    name=line.name,
                    category=line.category,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                )
                for position, line in enumerate(plan.lines)
            ],
        )
        self.session.add(order)
        self.session.flush()

        logger.info(
            "order_appended",
            extra={
                "order_id": str(order.id),
                "line_count": len(plan.lines),
                "total": plan.total,
            },
        )
        return order
