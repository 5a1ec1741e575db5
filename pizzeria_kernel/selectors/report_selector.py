"""
Module: pizzeria_kernel.selectors.report_selector
Responsibility: The three fixed analytical reports over the Catalog Store and
    the Order Ledger:
        - most-used ingredients over a trailing window
        - average price per menu category
        - best-selling category over all history
Architecture position: Kernel > Selectors.  Read-only; depends only on the
    persisted Order / OrderLine / MenuItem shapes, never on the placement
    service.

Invariants enforced:
    - Pure function of persisted state: re-running a report against an
      unchanged ledger returns identical results (ties are broken by name).
    - Ingredient usage expands each order line through its menu item's
      bill-of-materials and multiplies by the ordered quantity.
    - Category joins use the catalog's current category, looked up by the
      menu_item_id stored on each line.
"""

import calendar
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from pizzeria_kernel.domain.clock import Clock, SystemClock
from pizzeria_kernel.logging_config import get_logger
from pizzeria_kernel.models.ingredient import Ingredient
from pizzeria_kernel.models.menu_item import MenuItem, MenuItemIngredient
from pizzeria_kernel.models.order import Order, OrderLine
from pizzeria_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.report")

_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class IngredientUsage:
    """Total quantity of one ingredient consumed by orders in a window."""

    ingredient_id: UUID
    name: str
    category: str
    total_used: int


@dataclass(frozen=True)
class CategoryPriceStats:
    """Average catalog price of one menu category."""

    category: str
    average_price: Decimal
    item_count: int


@dataclass(frozen=True)
class CategorySales:
    """Units sold for one menu category."""

    category: str
    units_sold: int


def one_month_before(moment: datetime) -> datetime:
    """Same wall-clock time one calendar month earlier, clamped to month end."""
    year, month = (moment.year, moment.month - 1) if moment.month > 1 else (moment.year - 1, 12)
    last_day = calendar.monthrange(year, month)[1]
    return moment.replace(year=year, month=month, day=min(moment.day, last_day))


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class ReportSelector(BaseSelector):
    """
    Read-only reporting queries.

    Args:
        session: Caller-owned session.
        clock: Time source for the default trailing window.
        window_days: Length of the default window for top_ingredients().
            None means one calendar month.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        window_days: int | None = None,
    ):
        super().__init__(session)
        self._clock = clock or SystemClock()
        self._window_days = window_days

    def default_window(self) -> tuple[datetime, datetime]:
        until = self._clock.now()
        if self._window_days is None:
            since = one_month_before(until)
        else:
            since = until - timedelta(days=self._window_days)
        return since, until

    def top_ingredients(
        self,
        limit: int = 10,
        since: datetime | None = None,
        until: datetime | None = None,
    ) -> list[IngredientUsage]:
        """Ingredients most consumed by orders created within [since, until]."""
        default_since, default_until = self.default_window()
        since = _as_utc(since or default_since)
        until = _as_utc(until or default_until)

        total_used = func.sum(MenuItemIngredient.quantity * OrderLine.quantity).label(
            "total_used"
        )
        stmt = (
            select(Ingredient.id, Ingredient.name, Ingredient.category, total_used)
            .select_from(Order)
            .join(OrderLine, OrderLine.order_id == Order.id)
            .join(MenuItemIngredient, MenuItemIngredient.menu_item_id == OrderLine.menu_item_id)
            .join(Ingredient, Ingredient.id == MenuItemIngredient.ingredient_id)
            .where(Order.created_at >= since, Order.created_at <= until)
            .group_by(Ingredient.id, Ingredient.name, Ingredient.category)
            .order_by(desc(total_used), Ingredient.name)
            .limit(limit)
        )
        rows = self.session.execute(stmt).all()

        logger.debug(
            "report_top_ingredients",
            extra={"since": since, "until": until, "rows": len(rows)},
        )
        return [
            IngredientUsage(
                ingredient_id=row.id,
                name=row.name,
                category=row.category,
                total_used=int(row.total_used),
            )
            for row in rows
        ]

    def average_price_by_category(self) -> list[CategoryPriceStats]:
        """Average menu price per category, highest first.  Catalog only."""
        average = func.avg(MenuItem.price).label("average_price")
        stmt = (
            select(MenuItem.category, average, func.count(MenuItem.id).label("item_count"))
            .group_by(MenuItem.category)
            .order_by(desc(average), MenuItem.category)
        )
        return [
            CategoryPriceStats(
                category=row.category,
                average_price=Decimal(str(row.average_price)).quantize(
                    _CENTS, rounding=ROUND_HALF_UP
                ),
                item_count=row.item_count,
            )
            for row in self.session.execute(stmt).all()
        ]

    def sales_by_category(self) -> list[CategorySales]:
        """Units sold per category over all orders, best first."""
        units = func.sum(OrderLine.quantity).label("units_sold")
        stmt = (
            select(MenuItem.category, units)
            .select_from(OrderLine)
            .join(MenuItem, MenuItem.id == OrderLine.menu_item_id)
            .group_by(MenuItem.category)
            .order_by(desc(units), MenuItem.category)
        )
        return [
            CategorySales(category=row.category, units_sold=int(row.units_sold))
            for row in self.session.execute(stmt).all()
        ]

    def best_selling_category(self) -> CategorySales | None:
        """The category with the most units sold, or None with no orders."""
        ranking = self.sales_by_category()
        return ranking[0] if ranking else None
