"""DeclarativeResourceType.

Wraps a ResourceDefinition and exposes the BaseResourceType interface, so
YAML-defined resource types are used exactly like hand-written ones.
"""

from __future__ import annotations

from typing import List

from ..base import BaseResourceType
from ..resolver import resolve_cost_components
from ..types import BillableResource, CostComponent, UsageItem
from .schema import ResourceDefinition


class DeclarativeResourceType(BaseResourceType):
    def __init__(self, definition: ResourceDefinition):
        super().__init__()
        self.definition = definition
        self.resource_type = definition.resource_type

    def usage_schema(self) -> List[UsageItem]:
        return [
            UsageItem(
                key=m.key,
                default_value=m.default,
                value_type=m.value_type,
                description=m.description,
            )
            for m in self.definition.meters
        ]

    def cost_components(self, resource: BillableResource) -> List[CostComponent]:
        return resolve_cost_components(resource, self.definition)

    def __repr__(self) -> str:
        return f"DeclarativeResourceType({self.resource_type!r}, source={self.definition.source_file!r})"
