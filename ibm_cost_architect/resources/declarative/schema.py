"""Declarative resource-type schema.

Lets a new vendor resource type be added with a YAML file instead of a
Python class per resource.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

from ..tiers import KnownTier
from ..types import INT64


@dataclass(frozen=True)
class MeterDef:
    key: str  # usage key, namespaced as <service>_<METER>
    label: str
    unit: str
    catalog_unit: str  # unit code used to narrow the catalog price
    default: Any = 0
    value_type: str = INT64
    description: str = ""


@dataclass(frozen=True)
class ResourceDefinition:
    resource_type: str
    vendor: str
    service: str
    description: str = ""
    tiers: List[KnownTier] = field(default_factory=list)
    meters: List[MeterDef] = field(default_factory=list)
    source_file: str = ""
