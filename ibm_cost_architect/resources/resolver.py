"""Tiered-plan cost resolution.

One cost component per meter, in meter declaration order:

- free tier:    min(usage, cap), zero custom price, no plan attribute filter
- metered tier: usage as-is (None when unknown), catalog price by plan + unit
- anything else: a single "Plan <plan> not found" line, quantity 1, price 0

No plan string raises; an odd plan must show up in the output rather than
abort the run. A tier variant without a branch here is a TypeError.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List

from .declarative.schema import MeterDef, ResourceDefinition
from .tiers import FreeTier, MeteredTier, UnrecognizedTier, parse_plan
from .types import AttributeFilter, BillableResource, CostComponent, PriceFilter, ProductFilter

PLAN_ATTRIBUTE = "planName"
PLACEHOLDER_QUANTITY = Decimal(1)
ZERO = Decimal(0)


def _product_filter(resource: BillableResource, definition: ResourceDefinition, *, with_plan: bool) -> ProductFilter:
    attrs = [AttributeFilter(key=PLAN_ATTRIBUTE, value=resource.plan)] if with_plan else []
    return ProductFilter(
        vendor_name=definition.vendor,
        service=definition.service,
        region=resource.region,
        attribute_filters=attrs,
    )


def free_tier_component(
    resource: BillableResource, definition: ResourceDefinition, meter: MeterDef, tier: FreeTier
) -> CostComponent:
    # absent usage counts as zero under the cap
    used = resource.usage_for(meter.key) or 0
    return CostComponent(
        name=f"{meter.label} ({tier.label} plan) ({tier.cap_annotation()})",
        unit=meter.unit,
        monthly_quantity=Decimal(min(used, tier.cap)),
        product_filter=_product_filter(resource, definition, with_plan=False),
        custom_price=ZERO,
    )


def metered_tier_component(
    resource: BillableResource, definition: ResourceDefinition, meter: MeterDef, tier: MeteredTier
) -> CostComponent:
    used = resource.usage_for(meter.key)
    return CostComponent(
        name=f"{meter.label} ({tier.label} plan)",
        unit=meter.unit,
        monthly_quantity=None if used is None else Decimal(used),
        product_filter=_product_filter(resource, definition, with_plan=True),
        price_filter=PriceFilter(unit=meter.catalog_unit),
    )


def plan_not_found_component(
    resource: BillableResource, definition: ResourceDefinition, tier: UnrecognizedTier
) -> CostComponent:
    return CostComponent(
        name=f"Plan {tier.value} not found",
        unit="",
        monthly_quantity=PLACEHOLDER_QUANTITY,
        product_filter=_product_filter(resource, definition, with_plan=True),
        custom_price=ZERO,
    )


def resolve_cost_components(resource: BillableResource, definition: ResourceDefinition) -> List[CostComponent]:
    tier = parse_plan(resource.plan, definition.tiers)
    if isinstance(tier, UnrecognizedTier):
        return [plan_not_found_component(resource, definition, tier)]

    out: List[CostComponent] = []
    for meter in definition.meters:
        if isinstance(tier, FreeTier):
            out.append(free_tier_component(resource, definition, meter, tier))
        elif isinstance(tier, MeteredTier):
            out.append(metered_tier_component(resource, definition, meter, tier))
        else:
            raise TypeError(f"Unhandled plan tier {tier!r} for {definition.resource_type}")
    return out
