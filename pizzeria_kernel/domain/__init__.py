"""Pure domain layer: DTOs, demand aggregation, seed shapes, clock."""

from pizzeria_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from pizzeria_kernel.domain.demand import (
    build_demand_plan,
    collapse_quantities,
    normalize_requests,
    parse_identity,
)
from pizzeria_kernel.domain.dtos import (
    BillOfMaterialsEntry,
    CourierSnapshot,
    CustomerInfo,
    DemandPlan,
    FailureReason,
    MenuItemInfo,
    OrderLineRequest,
    OrderLineSnapshot,
    OrderRecord,
    PlacementResult,
)
from pizzeria_kernel.domain.seed import (
    CourierSeed,
    CustomerSeed,
    IngredientSeed,
    MenuItemSeed,
    RecipeLineSeed,
    SeedData,
)

__all__ = [
    "Clock",
    "SystemClock",
    "DeterministicClock",
    "build_demand_plan",
    "collapse_quantities",
    "normalize_requests",
    "parse_identity",
    "BillOfMaterialsEntry",
    "CourierSnapshot",
    "CustomerInfo",
    "DemandPlan",
    "FailureReason",
    "MenuItemInfo",
    "OrderLineRequest",
    "OrderLineSnapshot",
    "OrderRecord",
    "PlacementResult",
    "CourierSeed",
    "CustomerSeed",
    "IngredientSeed",
    "MenuItemSeed",
    "RecipeLineSeed",
    "SeedData",
]
