"""
Demand aggregation -- pure functions for turning a placement request into
ingredient demand, a price total and the order-line snapshots.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.  The placement service
    reads the catalog, hands MenuItemInfo DTOs in, and persists what comes out.

Invariants enforced:
    - Duplicate menu item ids are summed before pricing and aggregation, so
      lines (A, 2) + (A, 3) behave exactly like (A, 5).
    - Every quantity is a positive integer.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Mapping
from uuid import UUID

from pizzeria_kernel.domain.dtos import (
    DemandPlan,
    MenuItemInfo,
    OrderLineRequest,
    OrderLineSnapshot,
)
from pizzeria_kernel.exceptions import (
    InvalidOrderRequestError,
    MenuItemNotFoundError,
)

_ITEM_ID_KEYS = ("menu_item_id", "item_id", "pizza_id")
_QUANTITY_KEYS = ("quantity", "qty")


def parse_identity(value: Any) -> UUID | None:
    """Return ``value`` as a UUID, or None when it cannot be one."""
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        try:
            return UUID(value.strip())
        except ValueError:
            return None
    return None


def _first_present(raw: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return None


def normalize_requests(items: Iterable[Any]) -> list[OrderLineRequest]:
    """
    Coerce caller input into OrderLineRequest values.

    Accepts OrderLineRequest instances, mappings with ``menu_item_id`` (or
    ``item_id``) and ``quantity`` (or ``qty``), and ``(item_id, quantity)``
    pairs.

    Raises:
        InvalidOrderRequestError: empty request, malformed line, or a
            quantity that is not a positive integer.
        MenuItemNotFoundError: an item id that is not a valid identity.
    """
    if items is None or isinstance(items, (str, bytes)) or not isinstance(items, Iterable):
        raise InvalidOrderRequestError("items must be a non-empty sequence")

    requests: list[OrderLineRequest] = []
    unparseable: list[str] = []

    for index, raw in enumerate(items):
        if isinstance(raw, OrderLineRequest):
            raw_id, quantity = raw.menu_item_id, raw.quantity
        elif isinstance(raw, Mapping):
            raw_id = _first_present(raw, _ITEM_ID_KEYS)
            quantity = _first_present(raw, _QUANTITY_KEYS)
        elif isinstance(raw, (tuple, list)) and len(raw) == 2:
            raw_id, quantity = raw
        else:
            raise InvalidOrderRequestError(f"line {index} is not an item/quantity pair")

        # bool is an int subclass; True is not a quantity
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvalidOrderRequestError(
                f"line {index} quantity must be an integer, got {quantity!r}"
            )
        if quantity <= 0:
            raise InvalidOrderRequestError(
                f"line {index} quantity must be positive, got {quantity}"
            )

        item_id = parse_identity(raw_id)
        if item_id is None:
            unparseable.append(str(raw_id))
            continue
        requests.append(OrderLineRequest(menu_item_id=item_id, quantity=quantity))

    if not requests and not unparseable:
        raise InvalidOrderRequestError("items must be a non-empty sequence")
    if unparseable:
        raise MenuItemNotFoundError(unparseable)
    return requests


def collapse_quantities(requests: Iterable[OrderLineRequest]) -> dict[UUID, int]:
    """Sum quantities per distinct menu item, keeping first-requested order."""
    quantities: dict[UUID, int] = {}
    for request in requests:
        quantities[request.menu_item_id] = (
            quantities.get(request.menu_item_id, 0) + request.quantity
        )
    return quantities


def build_demand_plan(
    menu_items: Mapping[UUID, MenuItemInfo],
    quantities: Mapping[UUID, int],
) -> DemandPlan:
    """
    Aggregate ingredient demand, total price and line snapshots.

    Preconditions:
        Every key of ``quantities`` is present in ``menu_items``.

    Raises:
        MenuItemNotFoundError: a requested id has no catalog entry.
    """
    missing = [str(item_id) for item_id in quantities if item_id not in menu_items]
    if missing:
        raise MenuItemNotFoundError(missing)

    demand: dict[UUID, int] = {}
    lines: list[OrderLineSnapshot] = []
    total = Decimal("0")

    for item_id, quantity in quantities.items():
        item = menu_items[item_id]
        total += item.price * quantity
        lines.append(
            OrderLineSnapshot(
                menu_item_id=item.id,
                name=item.name,
                category=item.category,
                unit_price=item.price,
                quantity=quantity,
            )
        )
        for entry in item.bill_of_materials:
            demand[entry.ingredient_id] = (
                demand.get(entry.ingredient_id, 0) + entry.quantity * quantity
            )

    return DemandPlan(demand=demand, lines=tuple(lines), total=total)
