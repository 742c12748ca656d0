"""Usage file loading and templating.

Usage files follow the infracost layout::

    version: 0.1
    resource_usage:
      ibm_en_subscription_firefox.sub:
        event-notifications_OUTBOUND_DIGITAL_MESSAGES_PUSH: 2500

A ``null`` value means "no data". Addresses may end in ``[*]`` to cover
every instance of a counted resource; an exact address always wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import yaml

from ..config import USAGE_FILE_VERSION
from ..resources.registry import ResourceTypeRegistry
from ..resources.types import BillableResource

logger = logging.getLogger(__name__)

WILDCARD = "[*]"
INT64_MAX = 2**63 - 1


def _version_tuple(v: str) -> tuple[int, ...]:
    try:
        return tuple(int(p) for p in v.split("."))
    except ValueError:
        raise ValueError(f"Invalid usage file version: {v!r}") from None


@dataclass
class UsageFile:
    version: str = USAGE_FILE_VERSION
    resource_usage: Dict[str, Dict[str, Optional[int]]] = field(default_factory=dict)

    def for_address(self, address: str) -> Dict[str, Optional[int]]:
        if address in self.resource_usage:
            return self.resource_usage[address]
        if address.endswith("]") and "[" in address:
            wildcard = address[: address.rindex("[")] + WILDCARD
            if wildcard in self.resource_usage:
                return self.resource_usage[wildcard]
        return {}


def _parse_value(value: Any, *, ctx: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"usage value must be an integer in {ctx} (got: {value!r})")
    if value < 0:
        raise ValueError(f"usage value cannot be negative in {ctx} (got: {value})")
    if value > INT64_MAX:
        raise ValueError(f"usage value exceeds int64 range in {ctx} (got: {value})")
    return value


def parse_usage_file(data: Any, *, source: str = "<memory>") -> UsageFile:
    if data is None:
        return UsageFile()
    if not isinstance(data, dict):
        raise ValueError(f"Top-level usage file must be a mapping in {source}")

    version = str(data.get("version") or USAGE_FILE_VERSION).strip()
    if _version_tuple(version) > _version_tuple(USAGE_FILE_VERSION):
        raise ValueError(
            f"Usage file {source} has version {version}, newest supported is {USAGE_FILE_VERSION}"
        )

    raw = data.get("resource_usage") or {}
    if not isinstance(raw, dict):
        raise ValueError(f"resource_usage must be a mapping in {source}")

    out: Dict[str, Dict[str, Optional[int]]] = {}
    for address, items in raw.items():
        ctx = f"{source}:resource_usage[{address}]"
        if items is None:
            out[str(address)] = {}
            continue
        if not isinstance(items, dict):
            raise ValueError(f"usage entry must be a mapping in {ctx}")
        out[str(address)] = {str(k): _parse_value(v, ctx=f"{ctx}.{k}") for k, v in items.items()}
    return UsageFile(version=version, resource_usage=out)


def load_usage_file(path: Path | str) -> UsageFile:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as ex:
            raise ValueError(f"Invalid YAML in usage file {p}: {ex}") from ex
    usage = parse_usage_file(data, source=p.name)
    logger.info("Loaded usage for %d resources from %s", len(usage.resource_usage), p)
    return usage


def render_usage_template(resources: Iterable[BillableResource], registry: ResourceTypeRegistry) -> str:
    """YAML usage file skeleton listing each resource's meters with display defaults."""
    resource_usage: Dict[str, Dict[str, Any]] = {}
    for r in resources:
        model = registry.get(r.resource_type)
        if model is None:
            continue
        resource_usage[r.address] = {item.key: item.default_value for item in model.usage_schema()}
    doc = {"version": USAGE_FILE_VERSION, "resource_usage": resource_usage}
    return yaml.safe_dump(doc, sort_keys=False, default_flow_style=False)
