"""Selectors for the pizzeria kernel (read side)."""

from pizzeria_kernel.selectors.catalog_selector import CatalogSelector
from pizzeria_kernel.selectors.order_selector import OrderSelector
from pizzeria_kernel.selectors.report_selector import (
    CategoryPriceStats,
    CategorySales,
    IngredientUsage,
    ReportSelector,
)

__all__ = [
    "CatalogSelector",
    "OrderSelector",
    "ReportSelector",
    "IngredientUsage",
    "CategoryPriceStats",
    "CategorySales",
]
