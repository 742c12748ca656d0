import json
from typing import Any, Dict, List, Optional, Sequence, Tuple

from rich.table import Table

from ..resources.types import CostComponent, Resource

UNKNOWN_QUANTITY = "depends on usage"


def _format_quantity(component: CostComponent) -> str:
    q = component.monthly_quantity
    if q is None:
        return UNKNOWN_QUANTITY
    return f"{q:,}"


def _price_source(component: CostComponent) -> str:
    if component.custom_price is not None:
        return f"custom ({component.custom_price})"
    unit = component.price_filter.unit if component.price_filter else None
    return f"catalog (unit={unit})" if unit else "catalog"


def build_output(
    resources: Sequence[Resource],
    skipped: Optional[Sequence[Tuple[str, str]]] = None,
) -> Dict[str, Any]:
    return {
        "resources": [r.to_dict() for r in resources],
        "skipped": [{"address": a, "type": t} for a, t in (skipped or [])],
    }


def render_json(resources: Sequence[Resource], skipped: Optional[Sequence[Tuple[str, str]]] = None) -> str:
    """Deterministic JSON; this is the format the golden files are recorded in."""
    return json.dumps(build_output(resources, skipped), indent=2, ensure_ascii=False) + "\n"


def render_table(resources: Sequence[Resource]) -> Table:
    table = Table(title="Cost components", show_lines=False)
    table.add_column("Resource", style="bold")
    table.add_column("Component")
    table.add_column("Unit")
    table.add_column("Monthly qty", justify="right")
    table.add_column("Price")

    for r in resources:
        first = True
        for c in r.cost_components:
            table.add_row(
                r.name if first else "",
                c.name,
                c.unit or "-",
                _format_quantity(c),
                _price_source(c),
            )
            first = False
    return table


def summarize(resources: Sequence[Resource]) -> Dict[str, int]:
    components: List[CostComponent] = [c for r in resources for c in r.cost_components]
    return {
        "resources": len(resources),
        "components": len(components),
        "usage_dependent": sum(1 for c in components if c.monthly_quantity is None),
        "custom_priced": sum(1 for c in components if c.custom_price is not None),
    }
