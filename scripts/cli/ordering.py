"""CLI order placement: pick a customer, build the item list, place."""

from pizzeria_kernel.db.engine import session_scope
from pizzeria_kernel.domain.dtos import OrderLineRequest
from pizzeria_kernel.selectors.catalog_selector import CatalogSelector
from pizzeria_kernel.services.order_placement import OrderPlacementService
from scripts.cli.util import fmt_amount, pick_index, prompt


def handle_place_order(session_factory, placement: OrderPlacementService) -> None:
    with session_scope(session_factory) as session:
        catalog = CatalogSelector(session)
        customers = catalog.list_customers()
        menu_items = catalog.list_menu_items()

    if not customers or not menu_items:
        print("\n  No customers or menu items. Run scripts/seed_data.py first.\n")
        return

    print("\n  Customers:")
    for i, c in enumerate(customers, 1):
        print(f"   {i:>2}.  {c.name:<24} {c.phone or '':<14} {c.address or ''}")
    idx = pick_index(prompt("  Customer #: "), len(customers))
    if idx is None:
        print("  Cancelled.")
        return
    customer = customers[idx]

    print("\n  Menu:")
    for i, m in enumerate(menu_items, 1):
        print(f"   {i:>2}.  {m.name:<28} {m.category:<14} {fmt_amount(m.price):>10}")
    print("  Enter 'item# quantity' per line; empty line to finish.")

    lines: list[OrderLineRequest] = []
    while True:
        raw = prompt("  > ")
        if not raw:
            break
        parts = raw.split()
        item_idx = pick_index(parts[0], len(menu_items))
        if item_idx is None or len(parts) > 2:
            print("  Expected: item# [quantity]")
            continue
        qty_text = parts[1] if len(parts) == 2 else "1"
        if not qty_text.lstrip("-").isdigit():
            print("  Quantity must be a whole number.")
            continue
        lines.append(OrderLineRequest(menu_items[item_idx].id, int(qty_text)))

    if not lines:
        print("  No items; nothing placed.")
        return

    result = placement.place_order(customer.id, lines)
    if result.success:
        courier = result.courier
        print(f"\n  Order {result.order_id} placed for {customer.name}.")
        print(f"  Courier: {courier.name} ({courier.zone})    Total: {fmt_amount(result.total)}\n")
    else:
        print(f"\n  FAILED: {result.reason.value}: {result.message}\n")
