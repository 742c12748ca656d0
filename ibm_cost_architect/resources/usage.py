"""Usage binding.

Copies declared usage values onto a BillableResource. The usage schema of
the resource type is the binding table: only keys it declares are read,
anything else in the usage data is ignored so that newer usage files keep
working against older schemas.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from .types import BillableResource, UsageItem

logger = logging.getLogger(__name__)

UsageData = Mapping[str, Optional[int]]


def populate_usage(
    resource: BillableResource,
    usage_data: Optional[UsageData],
    usage_schema: Sequence[UsageItem],
) -> None:
    if not usage_data:
        return

    for item in usage_schema:
        value = usage_data.get(item.key)
        # null in a usage file is the same as leaving the key out
        if value is None:
            continue
        resource.meter_usage[item.key] = value

    declared = {item.key for item in usage_schema}
    ignored = sorted(k for k in usage_data if k not in declared)
    if ignored:
        logger.debug("%s: ignoring undeclared usage keys %s", resource.address, ", ".join(ignored))
