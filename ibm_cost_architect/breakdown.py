"""Breakdown pipeline: bind usage, then resolve every resource.

Each resource is handled on its own; nothing is shared between resources,
so the order of the input is the order of the output.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .providers.usage_file import UsageFile
from .resources.registry import ResourceTypeRegistry
from .resources.types import BillableResource, Resource
from .utils.trace import TraceLogger

logger = logging.getLogger(__name__)


def build_breakdown(
    resources: Iterable[BillableResource],
    registry: ResourceTypeRegistry,
    usage: Optional[UsageFile] = None,
    *,
    trace: Optional[TraceLogger] = None,
) -> List[Resource]:
    out: List[Resource] = []
    for r in resources:
        model = registry.get(r.resource_type)
        if model is None:
            logger.warning("No resource type registered for %s (%s)", r.address, r.resource_type)
            continue

        usage_data = usage.for_address(r.address) if usage else {}
        model.populate_usage(r, usage_data)
        if trace:
            trace.log("usage_bound", {"plan": r.plan, "region": r.region, "usage": dict(r.meter_usage)}, address=r.address)

        built = model.build_resource(r)
        if trace:
            trace.log("resolved", {"cost_components": [c.to_dict() for c in built.cost_components]}, address=r.address)
        logger.debug("%s: %d cost components", r.address, len(built.cost_components))
        out.append(built)
    return out
