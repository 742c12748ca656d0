"""Plan tiers.

A resource's ``plan`` string is an open set: the known tiers of its
resource type plus anything else the configuration happens to contain.
``parse_plan`` always returns one of the three variants below, so callers
branch on the variant type and never on raw strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

FREE = "free"
METERED = "metered"
TIER_KINDS = (FREE, METERED)


@dataclass(frozen=True)
class FreeTier:
    """Zero-priced tier with a hard monthly cap and no overage."""

    id: str
    label: str
    cap: int
    cap_scope: str = ""

    def cap_annotation(self) -> str:
        text = f"Max. {self.cap:,}"
        if self.cap_scope:
            text = f"{text} {self.cap_scope}"
        return text


@dataclass(frozen=True)
class MeteredTier:
    """Per-unit tier; the price comes from the catalog."""

    id: str
    label: str


@dataclass(frozen=True)
class UnrecognizedTier:
    value: str


KnownTier = Union[FreeTier, MeteredTier]
PlanTier = Union[FreeTier, MeteredTier, UnrecognizedTier]


def parse_plan(plan: Optional[str], tiers: Sequence[KnownTier]) -> PlanTier:
    """Match a plan string against the known tiers (exact, case-sensitive)."""
    value = plan or ""
    for tier in tiers:
        if tier.id == value:
            return tier
    return UnrecognizedTier(value)
