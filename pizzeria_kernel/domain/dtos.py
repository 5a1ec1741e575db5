"""
DTOs -- Pure domain data transfer objects.

Responsibility:
    Defines the immutable data structures that flow through order placement:
    OrderLineRequest (input), MenuItemInfo / BillOfMaterialsEntry (catalog
    snapshot), DemandPlan (pure aggregation output), CourierSnapshot and
    PlacementResult (engine output), and the read-side OrderRecord.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    from_model() class methods are boundary converters invoked only from the
    service and selector layers, never from domain logic.

Data flow:
    OrderLineRequest -> DemandPlan -> Order (ORM) -> PlacementResult
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping
from uuid import UUID

if TYPE_CHECKING:
    from pizzeria_kernel.models.courier import Courier as CourierModel
    from pizzeria_kernel.models.customer import Customer as CustomerModel
    from pizzeria_kernel.models.menu_item import MenuItem as MenuItemModel
    from pizzeria_kernel.models.order import Order as OrderModel


@dataclass(frozen=True)
class OrderLineRequest:
    """One requested line: a menu item and how many units of it."""

    menu_item_id: UUID
    quantity: int


@dataclass(frozen=True)
class BillOfMaterialsEntry:
    """Quantity of one ingredient consumed per unit of a menu item."""

    ingredient_id: UUID
    quantity: int


@dataclass(frozen=True)
class MenuItemInfo:
    """Catalog snapshot of a menu item, as read inside a placement."""

    id: UUID
    name: str
    category: str
    price: Decimal
    bill_of_materials: tuple[BillOfMaterialsEntry, ...]

    @classmethod
    def from_model(cls, item: MenuItemModel) -> MenuItemInfo:
        return cls(
            id=item.id,
            name=item.name,
            category=item.category,
            price=item.price,
            bill_of_materials=tuple(
                BillOfMaterialsEntry(
                    ingredient_id=row.ingredient_id,
                    quantity=row.quantity,
                )
                for row in item.ingredients
            ),
        )


@dataclass(frozen=True)
class CustomerInfo:
    """Read-only customer reference."""

    id: UUID
    name: str
    phone: str | None
    address: str | None

    @classmethod
    def from_model(cls, customer: CustomerModel) -> CustomerInfo:
        return cls(
            id=customer.id,
            name=customer.name,
            phone=customer.phone,
            address=customer.address,
        )


@dataclass(frozen=True)
class CourierSnapshot:
    """The courier assigned to an order, as captured at reservation."""

    id: UUID
    name: str
    zone: str

    @classmethod
    def from_model(cls, courier: CourierModel) -> CourierSnapshot:
        return cls(id=courier.id, name=courier.name, zone=courier.zone)

    def to_dict(self) -> dict[str, str]:
        return {"id": str(self.id), "name": self.name, "zone": self.zone}


@dataclass(frozen=True)
class OrderLineSnapshot:
    """What was ordered, at what price: copied from the catalog."""

    menu_item_id: UUID
    name: str
    category: str
    unit_price: Decimal
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class DemandPlan:
    """
    Output of demand aggregation for one placement attempt.

    Guarantees:
        - ``demand`` maps each ingredient id to the total quantity required
          across all lines; it is read-only.
        - ``lines`` has one entry per distinct menu item, in first-requested
          order.
        - ``total`` equals the sum of line totals.
    """

    demand: Mapping[UUID, int]
    lines: tuple[OrderLineSnapshot, ...]
    total: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.demand, MappingProxyType):
            object.__setattr__(self, "demand", MappingProxyType(dict(self.demand)))


class FailureReason(str, Enum):
    """
    Why a placement was rejected.

    Values equal the ``code`` of the exception that caused the rejection.
    """

    INVALID_REQUEST = "INVALID_REQUEST"
    CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
    MENU_ITEM_NOT_FOUND = "MENU_ITEM_NOT_FOUND"
    MISSING_INGREDIENT = "MISSING_INGREDIENT"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    NO_COURIER_AVAILABLE = "NO_COURIER_AVAILABLE"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class PlacementResult:
    """Result of an order placement."""

    success: bool
    order_id: UUID | None = None
    courier: CourierSnapshot | None = None
    total: Decimal | None = None
    reason: FailureReason | None = None
    message: str | None = None
    details: Mapping[str, Any] = field(default_factory=dict)
    attempts: int = 1

    @classmethod
    def committed(
        cls,
        order_id: UUID,
        courier: CourierSnapshot,
        total: Decimal,
        attempts: int,
    ) -> PlacementResult:
        return cls(
            success=True,
            order_id=order_id,
            courier=courier,
            total=total,
            attempts=attempts,
        )

    @classmethod
    def rejected(
        cls,
        reason: FailureReason,
        message: str,
        details: Mapping[str, Any] | None = None,
        attempts: int = 1,
    ) -> PlacementResult:
        return cls(
            success=False,
            reason=reason,
            message=message,
            details=dict(details or {}),
            attempts=attempts,
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain representation for CLI output and JSON responses."""
        if self.success:
            return {
                "success": True,
                "order_id": str(self.order_id),
                "courier": self.courier.to_dict() if self.courier else None,
                "total": str(self.total),
            }
        return {
            "success": False,
            "reason": self.reason.value if self.reason else None,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class OrderRecord:
    """Read-side view of a committed order."""

    id: UUID
    customer_id: UUID
    customer_name: str
    lines: tuple[OrderLineSnapshot, ...]
    total: Decimal
    created_at: datetime
    courier: CourierSnapshot
    status: str

    @classmethod
    def from_model(cls, order: OrderModel) -> OrderRecord:
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            customer_name=order.customer_name,
            lines=tuple(
                OrderLineSnapshot(
                    menu_item_id=line.menu_item_id,
                    name=line.name,
                    category=line.category,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                )
                for line in order.lines
            ),
            total=order.total,
            created_at=order.created_at,
            courier=CourierSnapshot(
                id=order.courier_id,
                name=order.courier_name,
                zone=order.courier_zone,
            ),
            status=order.status,
        )
