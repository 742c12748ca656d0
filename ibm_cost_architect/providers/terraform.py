"""Terraform plan JSON -> BillableResource.

Reads the output of ``terraform show -json <planfile>``. Only
``planned_values`` are used; resources whose type has no registered
resource type are reported back as skipped.

Region precedence: resource ``region`` attribute, then the ``ibm`` provider
block's constant ``region``, then the caller's default.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..resources.registry import ResourceTypeRegistry
from ..resources.types import BillableResource

logger = logging.getLogger(__name__)

PROVIDER_NAME = "ibm"


@dataclass
class ParsedPlan:
    resources: List[BillableResource] = field(default_factory=list)
    # (address, type) of resources no resource type is registered for
    skipped: List[Tuple[str, str]] = field(default_factory=list)


def load_plan_json(path: Path | str) -> Dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Top-level plan JSON must be an object in {p}")
    return data


def _walk_module(module: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
    for r in module.get("resources") or []:
        yield r
    for child in module.get("child_modules") or []:
        yield from _walk_module(child)


def _provider_region(plan: Dict[str, Any]) -> Optional[str]:
    providers = (plan.get("configuration") or {}).get("provider_config") or {}
    cfg = providers.get(PROVIDER_NAME) or {}
    region = ((cfg.get("expressions") or {}).get("region") or {}).get("constant_value")
    if isinstance(region, str) and region.strip():
        return region.strip()
    return None


def parse_plan_json(plan: Dict[str, Any], registry: ResourceTypeRegistry, default_region: str) -> ParsedPlan:
    if not isinstance(plan, dict):
        raise ValueError("Terraform plan JSON must be an object")

    root = (plan.get("planned_values") or {}).get("root_module") or {}
    provider_region = _provider_region(plan)
    out = ParsedPlan()

    for r in _walk_module(root):
        address = str(r.get("address") or "")
        rtype = str(r.get("type") or "")
        if r.get("mode", "managed") != "managed":
            continue
        if rtype not in registry:
            out.skipped.append((address, rtype))
            continue

        values = r.get("values") or {}
        region = str(values.get("region") or provider_region or default_region)
        out.resources.append(
            BillableResource(
                address=address,
                resource_type=rtype,
                region=region,
                plan=str(values.get("plan") or ""),
            )
        )

    if out.skipped:
        logger.info("Skipped %d unsupported resources", len(out.skipped))
    return out
