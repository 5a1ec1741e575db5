"""Services for the pizzeria kernel (write side)."""

from pizzeria_kernel.services.bootstrap_service import BootstrapService, SeedSummary
from pizzeria_kernel.services.courier_service import CourierService
from pizzeria_kernel.services.inventory_service import InventoryService
from pizzeria_kernel.services.order_ledger_service import OrderLedgerService
from pizzeria_kernel.services.order_placement import OrderPlacementService

__all__ = [
    "BootstrapService",
    "CourierService",
    "InventoryService",
    "OrderLedgerService",
    "OrderPlacementService",
    "SeedSummary",
]
