"""Definition loader for declarative resource types.

Loads YAML/JSON definitions from ibm_cost_architect/resources/definitions
(or IBMCOST_DEFINITIONS_DIR when set).

The loader is intentionally strict:
- it validates required fields
- it normalizes the schema into dataclasses

If a definition is invalid, it raises ValueError with a readable message,
so CI/test runs fail fast.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

import yaml

from ..tiers import FREE, METERED, TIER_KINDS, FreeTier, KnownTier, MeteredTier
from ..types import INT64
from .schema import MeterDef, ResourceDefinition

logger = logging.getLogger(__name__)

SUPPORTED_VALUE_TYPES = (INT64,)


def _as_list(x: Any) -> List[Any]:
    if x is None:
        return []
    if isinstance(x, list):
        return x
    return [x]


def _require(obj: Dict[str, Any], key: str, *, ctx: str) -> Any:
    if key not in obj:
        raise ValueError(f"Missing required key '{key}' in {ctx}")
    return obj[key]


def _require_str(obj: Dict[str, Any], key: str, *, ctx: str) -> str:
    value = str(_require(obj, key, ctx=ctx) or "").strip()
    if not value:
        raise ValueError(f"'{key}' cannot be empty in {ctx}")
    return value


def _load_one(path: Path) -> Dict[str, Any]:
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(raw) or {}
        except yaml.YAMLError as ex:
            raise ValueError(f"Invalid YAML in definition {path}: {ex}") from ex
        if not isinstance(data, dict):
            raise ValueError(f"Top-level YAML must be a mapping in {path}")
        return data
    if path.suffix.lower() == ".json":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as ex:
            raise ValueError(f"Invalid JSON in definition {path}: {ex}") from ex
        if not isinstance(data, dict):
            raise ValueError(f"Top-level JSON must be an object in {path}")
        return data
    raise ValueError(f"Unsupported definition file type: {path}")


def _parse_tiers(items: Iterable[Any], *, ctx: str) -> List[KnownTier]:
    out: List[KnownTier] = []
    seen: set[str] = set()
    for i, it in enumerate(items):
        tctx = f"{ctx}.tiers[{i}]"
        if not isinstance(it, dict):
            raise ValueError(f"tier must be an object in {tctx}")
        tier_id = _require_str(it, "id", ctx=tctx)
        if tier_id in seen:
            raise ValueError(f"duplicate tier id '{tier_id}' in {tctx}")
        seen.add(tier_id)
        kind = str(_require(it, "kind", ctx=tctx)).strip().lower()
        if kind not in TIER_KINDS:
            raise ValueError(f"tier kind must be one of {', '.join(TIER_KINDS)} in {tctx} (got: {kind})")
        label = str(it.get("label") or tier_id.capitalize())

        if kind == FREE:
            cap = _require(it, "cap", ctx=tctx)
            if isinstance(cap, bool) or not isinstance(cap, int) or cap < 0:
                raise ValueError(f"cap must be a non-negative integer in {tctx}")
            out.append(FreeTier(id=tier_id, label=label, cap=cap, cap_scope=str(it.get("cap_scope") or "")))
        elif kind == METERED:
            out.append(MeteredTier(id=tier_id, label=label))
    return out


def _parse_meters(items: Iterable[Any], *, ctx: str) -> List[MeterDef]:
    out: List[MeterDef] = []
    seen: set[str] = set()
    for i, it in enumerate(items):
        mctx = f"{ctx}.meters[{i}]"
        if not isinstance(it, dict):
            raise ValueError(f"meter must be an object in {mctx}")
        key = _require_str(it, "key", ctx=mctx)
        if key in seen:
            raise ValueError(f"duplicate meter key '{key}' in {mctx}")
        seen.add(key)
        value_type = str(it.get("value_type") or INT64).strip().lower()
        if value_type not in SUPPORTED_VALUE_TYPES:
            raise ValueError(f"unsupported value_type '{value_type}' in {mctx}")
        out.append(
            MeterDef(
                key=key,
                label=_require_str(it, "label", ctx=mctx),
                unit=_require_str(it, "unit", ctx=mctx),
                catalog_unit=_require_str(it, "catalog_unit", ctx=mctx),
                default=it.get("default", 0),
                value_type=value_type,
                description=str(it.get("description") or ""),
            )
        )
    return out


def parse_definition(data: Dict[str, Any], *, source: str = "<memory>") -> ResourceDefinition:
    ctx = f"definition({source})"
    meters = _parse_meters(_as_list(data.get("meters")), ctx=ctx)
    if not meters:
        raise ValueError(f"Missing meters in {ctx}")
    tiers = _parse_tiers(_as_list(data.get("tiers")), ctx=ctx)
    if not tiers:
        raise ValueError(f"Missing tiers in {ctx}")
    return ResourceDefinition(
        resource_type=_require_str(data, "resource_type", ctx=ctx),
        vendor=_require_str(data, "vendor", ctx=ctx),
        service=_require_str(data, "service", ctx=ctx),
        description=str(data.get("description") or ""),
        tiers=tiers,
        meters=meters,
        source_file=source,
    )


def default_definitions_dir() -> Path:
    return Path(__file__).resolve().parents[1] / "definitions"


def load_definitions(definitions_dir: Path | None = None) -> List[ResourceDefinition]:
    base = definitions_dir or default_definitions_dir()
    if not base.exists():
        logger.warning("Definitions directory %s does not exist", base)
        return []
    paths = sorted([p for p in base.iterdir() if p.is_file() and p.suffix.lower() in (".yaml", ".yml", ".json")])
    out: List[ResourceDefinition] = []
    for p in paths:
        out.append(parse_definition(_load_one(p), source=p.name))
    logger.debug("Loaded %d resource definitions from %s", len(out), base)
    return out
