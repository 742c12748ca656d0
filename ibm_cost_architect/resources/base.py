from __future__ import annotations

from typing import List, Optional, Protocol

from .types import BillableResource, CostComponent, Resource, UsageItem
from .usage import UsageData, populate_usage


class ResourceType(Protocol):
    """A vendor resource type that can be usage-bound and resolved."""

    resource_type: str

    def usage_schema(self) -> List[UsageItem]: ...

    def populate_usage(self, resource: BillableResource, usage_data: Optional[UsageData]) -> None: ...

    def cost_components(self, resource: BillableResource) -> List[CostComponent]: ...

    def build_resource(self, resource: BillableResource) -> Resource: ...


class BaseResourceType:
    """Default wiring shared by resource types."""

    resource_type: str = "other"

    def usage_schema(self) -> List[UsageItem]:
        return []

    def populate_usage(self, resource: BillableResource, usage_data: Optional[UsageData]) -> None:
        populate_usage(resource, usage_data, self.usage_schema())

    def cost_components(self, resource: BillableResource) -> List[CostComponent]:
        return []

    def build_resource(self, resource: BillableResource) -> Resource:
        """Build the resolved Resource once usage has been populated."""
        return Resource(
            name=resource.address,
            resource_type=resource.resource_type,
            usage_schema=self.usage_schema(),
            cost_components=self.cost_components(resource),
        )
