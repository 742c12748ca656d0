from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .base import ResourceType
from .declarative import DeclarativeResourceType, load_definitions

logger = logging.getLogger(__name__)


@dataclass
class ResourceTypeRegistry:
    """Lookup table for resource types by Terraform resource type."""

    types: Dict[str, ResourceType] = field(default_factory=dict)

    def register(self, resource_type: str, model: ResourceType) -> None:
        if resource_type in self.types:
            raise ValueError(f"Resource type already registered: {resource_type}")
        self.types[resource_type] = model

    def get(self, resource_type: str) -> Optional[ResourceType]:
        return self.types.get(resource_type)

    def supported(self) -> List[str]:
        return sorted(self.types)

    def __contains__(self, resource_type: str) -> bool:
        return resource_type in self.types


def build_default_registry(definitions_dir: Path | None = None) -> ResourceTypeRegistry:
    """Registry populated from the declarative definitions."""

    reg = ResourceTypeRegistry()
    for d in load_definitions(definitions_dir):
        reg.register(d.resource_type, DeclarativeResourceType(d))
    logger.debug("Registered resource types: %s", ", ".join(reg.supported()))
    return reg
