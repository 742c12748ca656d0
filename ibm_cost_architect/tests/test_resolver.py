from dataclasses import dataclass, replace
from decimal import Decimal

import pytest

from ibm_cost_architect.resources.declarative.loader import parse_definition
from ibm_cost_architect.resources.registry import build_default_registry
from ibm_cost_architect.resources.resolver import resolve_cost_components
from ibm_cost_architect.resources.types import AttributeFilter, BillableResource

PUSH = "event-notifications_OUTBOUND_DIGITAL_MESSAGES_PUSH"


def _firefox(plan: str, usage=None, region: str = "us-south") -> BillableResource:
    r = BillableResource(
        address="ibm_en_subscription_firefox.sub",
        resource_type="ibm_en_subscription_firefox",
        region=region,
        plan=plan,
    )
    model = build_default_registry().get("ibm_en_subscription_firefox")
    model.populate_usage(r, usage)
    return r


def _resolve(r: BillableResource):
    model = build_default_registry().get(r.resource_type)
    return model.cost_components(r)


def test_lite_plan_caps_usage_and_forces_zero_price():
    components = _resolve(_firefox("lite", {PUSH: 2500}))

    assert len(components) == 1
    c = components[0]
    assert "Lite plan" in c.name
    assert "Max. 1,000" in c.name
    assert c.name == "Outbound Firefox Push Messages (Lite plan) (Max. 1,000 per destination)"
    assert c.monthly_quantity == Decimal(1000)
    assert c.custom_price == Decimal(0)
    assert c.price_filter is None
    assert c.product_filter.vendor_name == "ibm"
    assert c.product_filter.service == "event-notifications"
    assert c.product_filter.region == "us-south"
    assert c.product_filter.attribute_filters == []


@pytest.mark.parametrize("used", [0, 1, 999, 1000, 1001, 2500, 10**12])
def test_lite_plan_quantity_is_min_of_usage_and_cap(used):
    c = _resolve(_firefox("lite", {PUSH: used}))[0]
    assert c.monthly_quantity == Decimal(min(used, 1000))


def test_lite_plan_cap_is_idempotent():
    once = _resolve(_firefox("lite", {PUSH: 5000}))[0].monthly_quantity
    twice = _resolve(_firefox("lite", {PUSH: int(once)}))[0].monthly_quantity
    assert once == twice == Decimal(1000)


def test_lite_plan_without_usage_is_zero_not_unknown():
    c = _resolve(_firefox("lite"))[0]
    assert c.monthly_quantity == Decimal(0)
    assert c.custom_price == Decimal(0)


def test_standard_plan_passes_usage_through():
    components = _resolve(_firefox("standard", {PUSH: 2500}))

    assert len(components) == 1
    c = components[0]
    assert c.name == "Outbound Firefox Push Messages (Standard plan)"
    assert c.unit == "Messages"
    assert c.monthly_quantity == Decimal(2500)
    assert c.custom_price is None
    assert not c.uses_custom_price
    assert AttributeFilter(key="planName", value="standard") in c.product_filter.attribute_filters
    assert c.price_filter is not None
    assert c.price_filter.unit == "OUTBOUND_DIGITAL_MESSAGES_PUSH"


@pytest.mark.parametrize("used", [0, 500, 2500, 123456789])
def test_standard_plan_quantity_equals_input(used):
    c = _resolve(_firefox("standard", {PUSH: used}))[0]
    assert c.monthly_quantity == Decimal(used)


def test_standard_plan_absent_usage_stays_unknown():
    c = _resolve(_firefox("standard"))[0]
    assert c.monthly_quantity is None


def test_standard_plan_zero_usage_is_distinct_from_absent():
    zero = _resolve(_firefox("standard", {PUSH: 0}))[0]
    absent = _resolve(_firefox("standard"))[0]
    assert zero.monthly_quantity == Decimal(0)
    assert absent.monthly_quantity is None
    assert zero != absent


@pytest.mark.parametrize("usage", [None, {PUSH: 2500}, {PUSH: 0}])
def test_unknown_plan_yields_placeholder(usage):
    components = _resolve(_firefox("gold", usage))

    assert len(components) == 1
    c = components[0]
    assert c.name == "Plan gold not found"
    assert c.monthly_quantity == Decimal(1)
    assert c.custom_price == Decimal(0)
    assert c.product_filter.attribute_filters == [AttributeFilter(key="planName", value="gold")]
    assert c.price_filter is None


def test_plan_matching_is_exact():
    c = _resolve(_firefox("Lite", {PUSH: 10}))[0]
    assert c.name == "Plan Lite not found"


def test_empty_plan_yields_placeholder():
    c = _resolve(_firefox(""))[0]
    assert c.name == "Plan  not found"
    assert c.custom_price == Decimal(0)


def test_region_is_passed_through_unmodified():
    c = _resolve(_firefox("standard", {PUSH: 1}, region="eu-de"))[0]
    assert c.product_filter.region == "eu-de"


def test_resolution_is_repeatable():
    r = _firefox("standard", {PUSH: 42})
    assert _resolve(r) == _resolve(r)
    assert r.meter_usage == {PUSH: 42}


def _two_meter_definition():
    return parse_definition(
        {
            "resource_type": "ibm_en_subscription_demo",
            "vendor": "ibm",
            "service": "event-notifications",
            "tiers": [
                {"id": "lite", "label": "Lite", "kind": "free", "cap": 100, "cap_scope": "per month"},
                {"id": "standard", "label": "Standard", "kind": "metered"},
                {"id": "plus", "label": "Plus", "kind": "metered"},
            ],
            "meters": [
                {"key": "demo_B", "label": "Second meter", "unit": "Calls", "catalog_unit": "B_UNIT"},
                {"key": "demo_A", "label": "First meter", "unit": "Events", "catalog_unit": "A_UNIT"},
            ],
        },
        source="demo.yaml",
    )


@pytest.mark.parametrize("plan", ["lite", "standard", "plus"])
def test_components_follow_meter_declaration_order(plan):
    definition = _two_meter_definition()
    r = BillableResource("demo.x", "ibm_en_subscription_demo", "us-south", plan, {"demo_A": 5, "demo_B": 500})

    components = resolve_cost_components(r, definition)

    assert [c.name.split(" (")[0] for c in components] == ["Second meter", "First meter"]
    assert [c.unit for c in components] == ["Calls", "Events"]


def test_multi_meter_tiers_apply_per_meter():
    definition = _two_meter_definition()
    r = BillableResource("demo.x", "ibm_en_subscription_demo", "us-south", "lite", {"demo_A": 5, "demo_B": 500})
    lite = resolve_cost_components(r, definition)
    assert [c.monthly_quantity for c in lite] == [Decimal(100), Decimal(5)]
    assert lite[0].name == "Second meter (Lite plan) (Max. 100 per month)"

    r.plan = "plus"
    r.meter_usage = {"demo_A": 5}
    plus = resolve_cost_components(r, definition)
    assert [c.monthly_quantity for c in plus] == [None, Decimal(5)]
    assert [c.price_filter.unit for c in plus] == ["B_UNIT", "A_UNIT"]
    assert plus[1].name == "First meter (Plus plan)"


def test_unknown_plan_on_multi_meter_type_is_single_line():
    definition = _two_meter_definition()
    r = BillableResource("demo.x", "ibm_en_subscription_demo", "us-south", "gold")
    components = resolve_cost_components(r, definition)
    assert [c.name for c in components] == ["Plan gold not found"]


def test_tier_variant_without_a_branch_is_rejected():
    @dataclass(frozen=True)
    class PrepaidTier:
        id: str
        label: str

    base = _two_meter_definition()
    definition = replace(base, tiers=[PrepaidTier(id="prepaid", label="Prepaid")])
    r = BillableResource("demo.x", "ibm_en_subscription_demo", "us-south", "prepaid")

    with pytest.raises(TypeError, match="Unhandled plan tier"):
        resolve_cost_components(r, definition)
