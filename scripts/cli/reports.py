"""CLI report views: ingredients, categories, recent orders, store state."""

from pizzeria_kernel.db.engine import session_scope
from pizzeria_kernel.selectors.catalog_selector import CatalogSelector
from pizzeria_kernel.selectors.order_selector import OrderSelector
from pizzeria_kernel.selectors.report_selector import ReportSelector
from scripts.cli.util import fmt_amount

W = 72


def _header(title: str) -> None:
    print()
    print("=" * W)
    print(f"  {title}".center(W))
    print("=" * W)


def show_top_ingredients(session_factory, clock, settings) -> None:
    with session_scope(session_factory) as session:
        report = ReportSelector(session, clock, window_days=settings.report_window_days)
        since, until = report.default_window()
        rows = report.top_ingredients(limit=settings.top_ingredients_limit)

    _header("TOP INGREDIENTS")
    print(f"  {since:%Y-%m-%d} .. {until:%Y-%m-%d}")
    if not rows:
        print("\n  No orders in this window.\n")
        return
    print(f"  {'#':>2}  {'Ingredient':<28} {'Category':<14} {'Used':>8}")
    print(f"  {'-'*2}  {'-'*28} {'-'*14} {'-'*8}")
    for rank, row in enumerate(rows, 1):
        print(f"  {rank:>2}  {row.name:<28} {row.category:<14} {row.total_used:>8}")
    print()


def show_category_prices(session_factory) -> None:
    with session_scope(session_factory) as session:
        rows = ReportSelector(session).average_price_by_category()

    _header("AVERAGE PRICE PER CATEGORY")
    if not rows:
        print("\n  Menu is empty.\n")
        return
    print(f"  {'Category':<28} {'Items':>6} {'Average':>14}")
    print(f"  {'-'*28} {'-'*6} {'-'*14}")
    for row in rows:
        print(f"  {row.category:<28} {row.item_count:>6} {fmt_amount(row.average_price):>14}")
    print()


def show_best_category(session_factory) -> None:
    with session_scope(session_factory) as session:
        best = ReportSelector(session).best_selling_category()

    _header("BEST-SELLING CATEGORY")
    if best is None:
        print("\n  No orders yet.\n")
        return
    print(f"\n  {best.category}: {best.units_sold} unit(s) sold\n")


def show_recent_orders(session_factory, limit: int = 10) -> None:
    with session_scope(session_factory) as session:
        orders = OrderSelector(session).list_recent(limit=limit)

    _header("RECENT ORDERS")
    if not orders:
        print("\n  No orders yet.\n")
        return
    for order in orders:
        print(
            f"  {order.created_at:%Y-%m-%d %H:%M}  {order.customer_name:<16} "
            f"{fmt_amount(order.total):>10}  {order.courier.name} ({order.courier.zone})  "
            f"[{order.status}]"
        )
        for line in order.lines:
            print(f"      {line.quantity:>3} x {line.name:<28} {fmt_amount(line.line_total):>10}")
    print()


def show_store(session_factory) -> None:
    with session_scope(session_factory) as session:
        catalog = CatalogSelector(session)
        stock = [(i.name, i.category, i.stock) for i in catalog.list_ingredients()]
        couriers = catalog.list_couriers()

    _header("STOCK AND COURIERS")
    print(f"  {'Ingredient':<28} {'Category':<14} {'Stock':>8}")
    print(f"  {'-'*28} {'-'*14} {'-'*8}")
    for name, category, level in stock:
        print(f"  {name:<28} {category:<14} {level:>8}")
    print()
    print(f"  {'Courier':<28} {'Zone':<14} {'Status':>8}")
    print(f"  {'-'*28} {'-'*14} {'-'*8}")
    for courier, status in couriers:
        print(f"  {courier.name:<28} {courier.zone:<14} {status:>8}")
    print()
