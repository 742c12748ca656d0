from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

INT64 = "int64"


@dataclass(frozen=True)
class UsageItem:
    """One entry of a resource type's usage schema.

    ``default_value`` is what a usage file template shows for the meter.
    It is never used for billing arithmetic.
    """

    key: str
    default_value: Any = 0
    value_type: str = INT64  # only integer counters for now
    description: str = ""


@dataclass
class BillableResource:
    address: str
    resource_type: str
    region: str
    plan: str
    # meter key -> bound usage; a missing key means "no data", not zero
    meter_usage: Dict[str, Optional[int]] = field(default_factory=dict)

    def usage_for(self, key: str) -> Optional[int]:
        return self.meter_usage.get(key)


@dataclass(frozen=True)
class AttributeFilter:
    key: str
    value: str


@dataclass(frozen=True)
class ProductFilter:
    vendor_name: str
    service: str
    region: str
    attribute_filters: List[AttributeFilter] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vendorName": self.vendor_name,
            "service": self.service,
            "region": self.region,
            "attributeFilters": [{"key": a.key, "value": a.value} for a in self.attribute_filters],
        }


@dataclass(frozen=True)
class PriceFilter:
    unit: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"unit": self.unit}


def _dec(v: Optional[Decimal]) -> Optional[str]:
    return None if v is None else str(v)


@dataclass(frozen=True)
class CostComponent:
    """Price-query descriptor for one meter of one resource.

    ``monthly_quantity`` is None when the quantity depends on usage that was
    not supplied. When ``custom_price`` is set, catalog lookup is skipped and
    the price is used verbatim.
    """

    name: str
    unit: str
    product_filter: ProductFilter
    unit_multiplier: Decimal = Decimal(1)
    monthly_quantity: Optional[Decimal] = None
    price_filter: Optional[PriceFilter] = None
    custom_price: Optional[Decimal] = None

    @property
    def uses_custom_price(self) -> bool:
        return self.custom_price is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "unit": self.unit,
            "unitMultiplier": _dec(self.unit_multiplier),
            "monthlyQuantity": _dec(self.monthly_quantity),
            "productFilter": self.product_filter.to_dict(),
            "priceFilter": self.price_filter.to_dict() if self.price_filter else None,
            "customPrice": _dec(self.custom_price),
        }


@dataclass(frozen=True)
class Resource:
    """Resolved output for one billable resource."""

    name: str
    resource_type: str
    usage_schema: List[UsageItem]
    cost_components: List[CostComponent]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "resourceType": self.resource_type,
            "costComponents": [c.to_dict() for c in self.cost_components],
        }
