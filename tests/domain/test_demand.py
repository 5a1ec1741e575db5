"""
Demand aggregation tests.

Pure functions only: no database.  Covers request normalization, duplicate
collapsing and the aggregation of bill-of-materials demand, total and line
snapshots.
"""

from decimal import Decimal
from types import MappingProxyType
from uuid import UUID, uuid4

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from pizzeria_kernel.domain.demand import (
    build_demand_plan,
    collapse_quantities,
    normalize_requests,
    parse_identity,
)
from pizzeria_kernel.domain.dtos import (
    BillOfMaterialsEntry,
    MenuItemInfo,
    OrderLineRequest,
)
from pizzeria_kernel.exceptions import InvalidOrderRequestError, MenuItemNotFoundError

MOZZARELLA = UUID("00000000-0000-0000-0000-00000000000a")
TOMATO = UUID("00000000-0000-0000-0000-00000000000b")
BASIL = UUID("00000000-0000-0000-0000-00000000000c")
PEPPERONI = UUID("00000000-0000-0000-0000-00000000000d")


def _margarita() -> MenuItemInfo:
    return MenuItemInfo(
        id=UUID("00000000-0000-0000-0000-000000000001"),
        name="Margarita",
        category="tradicional",
        price=Decimal("20000"),
        bill_of_materials=(
            BillOfMaterialsEntry(MOZZARELLA, 2),
            BillOfMaterialsEntry(TOMATO, 1),
            BillOfMaterialsEntry(BASIL, 1),
        ),
    )


def _pepperoni() -> MenuItemInfo:
    return MenuItemInfo(
        id=UUID("00000000-0000-0000-0000-000000000002"),
        name="Pepperoni",
        category="especial",
        price=Decimal("26000"),
        bill_of_materials=(
            BillOfMaterialsEntry(MOZZARELLA, 2),
            BillOfMaterialsEntry(TOMATO, 1),
            BillOfMaterialsEntry(PEPPERONI, 3),
        ),
    )


@pytest.fixture
def menu() -> dict[UUID, MenuItemInfo]:
    items = (_margarita(), _pepperoni())
    return {item.id: item for item in items}


class TestParseIdentity:
    def test_uuid_passes_through(self):
        value = uuid4()
        assert parse_identity(value) is value

    def test_string_form_parses(self):
        value = uuid4()
        assert parse_identity(f"  {value}  ") == value

    @pytest.mark.parametrize("raw", ["", "not-a-uuid", 42, None, 1.5])
    def test_unparseable_is_none(self, raw):
        assert parse_identity(raw) is None


class TestNormalizeRequests:
    """Input shapes accepted by place_order()."""

    def test_accepts_dtos_mappings_and_pairs(self):
        a, b, c = uuid4(), uuid4(), uuid4()
        requests = normalize_requests(
            [
                OrderLineRequest(a, 1),
                {"menu_item_id": str(b), "quantity": 2},
                {"item_id": c, "qty": 3},
                (str(a), 4),
            ]
        )
        assert requests == [
            OrderLineRequest(a, 1),
            OrderLineRequest(b, 2),
            OrderLineRequest(c, 3),
            OrderLineRequest(a, 4),
        ]

    def test_empty_request_is_invalid(self):
        with pytest.raises(InvalidOrderRequestError):
            normalize_requests([])

    @pytest.mark.parametrize("items", [None, 5, "pizza", b"pizza"])
    def test_non_sequence_is_invalid(self, items):
        with pytest.raises(InvalidOrderRequestError):
            normalize_requests(items)

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, "2", True, None])
    def test_bad_quantity_is_invalid(self, quantity):
        with pytest.raises(InvalidOrderRequestError) as exc_info:
            normalize_requests([(uuid4(), quantity)])
        assert exc_info.value.code == "INVALID_REQUEST"

    def test_malformed_line_is_invalid(self):
        with pytest.raises(InvalidOrderRequestError):
            normalize_requests([object()])

    def test_unparseable_item_id_is_not_found(self):
        with pytest.raises(MenuItemNotFoundError) as exc_info:
            normalize_requests([("pizza-1", 1), (uuid4(), 1)])
        assert exc_info.value.missing_ids == ["pizza-1"]

    def test_quantity_checked_before_identity(self):
        with pytest.raises(InvalidOrderRequestError):
            normalize_requests([("pizza-1", 0)])


class TestCollapseQuantities:
    def test_duplicates_are_summed_in_first_seen_order(self):
        a, b = uuid4(), uuid4()
        collapsed = collapse_quantities(
            [OrderLineRequest(b, 1), OrderLineRequest(a, 2), OrderLineRequest(b, 3)]
        )
        assert list(collapsed.items()) == [(b, 4), (a, 2)]


class TestBuildDemandPlan:
    def test_single_margarita(self, menu):
        margarita = _margarita()
        plan = build_demand_plan(menu, {margarita.id: 1})

        assert dict(plan.demand) == {MOZZARELLA: 2, TOMATO: 1, BASIL: 1}
        assert plan.total == Decimal("20000")
        assert len(plan.lines) == 1
        assert plan.lines[0].name == "Margarita"
        assert plan.lines[0].unit_price == Decimal("20000")

    def test_shared_ingredients_accumulate_across_items(self, menu):
        margarita, pepperoni = _margarita(), _pepperoni()
        plan = build_demand_plan(menu, {margarita.id: 2, pepperoni.id: 1})

        assert plan.demand[MOZZARELLA] == 2 * 2 + 2 * 1
        assert plan.demand[TOMATO] == 3
        assert plan.demand[BASIL] == 2
        assert plan.demand[PEPPERONI] == 3
        assert plan.total == Decimal("66000")
        assert [line.name for line in plan.lines] == ["Margarita", "Pepperoni"]

    def test_total_equals_sum_of_line_totals(self, menu):
        margarita, pepperoni = _margarita(), _pepperoni()
        plan = build_demand_plan(menu, {pepperoni.id: 3, margarita.id: 1})
        assert plan.total == sum(line.line_total for line in plan.lines)

    def test_missing_item_raises(self, menu):
        unknown = uuid4()
        with pytest.raises(MenuItemNotFoundError) as exc_info:
            build_demand_plan(menu, {_margarita().id: 1, unknown: 1})
        assert exc_info.value.missing_ids == [str(unknown)]

    def test_demand_is_read_only(self, menu):
        plan = build_demand_plan(menu, {_margarita().id: 1})
        assert isinstance(plan.demand, MappingProxyType)
        with pytest.raises(TypeError):
            plan.demand[MOZZARELLA] = 0

    def test_item_without_recipe_adds_no_demand(self):
        plain = MenuItemInfo(uuid4(), "Focaccia", "pan", Decimal("8000"), ())
        plan = build_demand_plan({plain.id: plain}, {plain.id: 2})
        assert dict(plan.demand) == {}
        assert plan.total == Decimal("16000")


class TestAggregationEquivalence:
    """Splitting a quantity across duplicate lines never changes the plan."""

    def test_two_plus_three_equals_five(self, menu):
        margarita = _margarita()
        split = collapse_quantities(
            normalize_requests([(margarita.id, 2), (margarita.id, 3)])
        )
        whole = collapse_quantities(normalize_requests([(margarita.id, 5)]))

        assert build_demand_plan(menu, split) == build_demand_plan(menu, whole)

    @settings(max_examples=50, deadline=None)
    @given(parts=st.lists(st.integers(min_value=1, max_value=20), min_size=1, max_size=6))
    def test_any_split_matches_the_sum(self, parts):
        margarita, pepperoni = _margarita(), _pepperoni()
        menu = {margarita.id: margarita, pepperoni.id: pepperoni}

        requests = [(margarita.id, n) for n in parts] + [(pepperoni.id, 1)]
        split = build_demand_plan(menu, collapse_quantities(normalize_requests(requests)))
        whole = build_demand_plan(
            menu, {margarita.id: sum(parts), pepperoni.id: 1}
        )

        assert split == whole
        assert split.demand[MOZZARELLA] == 2 * sum(parts) + 2
