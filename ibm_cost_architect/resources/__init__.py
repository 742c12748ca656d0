from .base import BaseResourceType, ResourceType
from .declarative import DeclarativeResourceType, load_definitions
from .registry import ResourceTypeRegistry, build_default_registry
from .resolver import resolve_cost_components
from .tiers import FreeTier, MeteredTier, UnrecognizedTier, parse_plan
from .types import (
    AttributeFilter,
    BillableResource,
    CostComponent,
    PriceFilter,
    ProductFilter,
    Resource,
    UsageItem,
)
from .usage import populate_usage

__all__ = [
    "AttributeFilter",
    "BaseResourceType",
    "BillableResource",
    "CostComponent",
    "DeclarativeResourceType",
    "FreeTier",
    "MeteredTier",
    "PriceFilter",
    "ProductFilter",
    "Resource",
    "ResourceType",
    "ResourceTypeRegistry",
    "UnrecognizedTier",
    "UsageItem",
    "build_default_registry",
    "load_definitions",
    "parse_plan",
    "populate_usage",
    "resolve_cost_components",
]
