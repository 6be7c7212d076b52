# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Grouping primitive shared by every retention view.

Monthly cohorts, cities and period buckets are all the same aggregation
over a different group key. Keys are plain callables ``Resident -> key``;
a key of ``None`` leaves the resident out of the result. Lookups that live
outside the resident table (property -> city) are injected into the key
builders, so the aggregation itself never joins.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import (
    Callable,
    Dict,
    Hashable,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Union,
)

from ..core.base import Resident
from ..core.primitives import (
    PeriodBucket,
    TenureUnitEnum,
    cohort_month,
    period_start,
    round_pct,
    validate_ascending,
)
from .results import GroupRetentionSummary
from .screening import Diagnostics, screen_residents
from .tenure import resident_tenure

logger = logging.getLogger(__name__)

GroupKey = Callable[[Resident], Optional[Hashable]]
PropertyLookup = Union[Mapping[str, str], Callable[[str], Optional[str]]]
CityLookup = PropertyLookup


def group_residents(
    residents: Iterable[Resident], key: GroupKey
) -> Dict[Hashable, List[Resident]]:
    """Bucket residents by ``key``; residents keyed ``None`` are dropped."""
    groups: Dict[Hashable, List[Resident]] = defaultdict(list)
    dropped = 0
    for resident in residents:
        k = key(resident)
        if k is None:
            dropped += 1
            continue
        groups[k].append(resident)
    if dropped:
        logger.debug(f"{dropped} resident(s) had no group key and were excluded")
    return dict(groups)


def retention_counts(
    members: Sequence[Resident], checkpoints: Sequence[int]
) -> Dict[int, int]:
    """Number of members active or with tenure >= c, per checkpoint c (months)."""
    tenures = [resident_tenure(r, TenureUnitEnum.MONTHS) for r in members]
    return {c: sum(1 for t in tenures if t.reaches(c)) for c in checkpoints}


def safe_pct(count: int, size: int, places: int, group: Hashable) -> float:
    """
    Percentage of a group; a zero-size group is an internal error.

    Groups only exist because they have members, so an empty one means the
    grouping itself is broken.
    """
    if size <= 0:
        raise RuntimeError(f"Internal error: group {group!r} has size {size}")
    return round_pct(count, size, places)


def summarize_retention(
    group: Hashable,
    members: Sequence[Resident],
    checkpoints: Sequence[int],
    places: int = 1,
) -> GroupRetentionSummary:
    size = len(members)
    counts = retention_counts(members, checkpoints)
    return GroupRetentionSummary(
        group=group,
        group_size=size,
        retention_at={c: safe_pct(n, size, places, group) for c, n in counts.items()},
    )


def retention_by_group(
    residents: Iterable[Resident],
    checkpoints: Sequence[int],
    key: GroupKey,
    *,
    diagnostics: Optional[Diagnostics] = None,
    places: int = 1,
) -> List[GroupRetentionSummary]:
    """
    Retention at each checkpoint for every group produced by ``key``.

    Args:
        residents: Resident snapshot
        checkpoints: Strictly ascending months, e.g. ``[1, 3, 6, 9, 12]``
        key: Group key callable
        diagnostics: Collector for skipped records
        places: Decimal places for percentages

    Returns:
        One summary per group, ascending by group key

    Raises:
        ValueError: If ``checkpoints`` is empty, negative or not ascending
    """
    checkpoints = validate_ascending(checkpoints, "checkpoints")
    usable = screen_residents(residents, diagnostics)
    groups = group_residents(usable, key)
    return [
        summarize_retention(g, groups[g], checkpoints, places) for g in sorted(groups)
    ]


# --- Key builders ---


def cohort_key(resident: Resident) -> Optional[Hashable]:
    """Monthly cohort of the lease start."""
    if resident.lease_start_date is None:
        return None
    return cohort_month(resident.lease_start_date)


def property_key(resident: Resident) -> Optional[Hashable]:
    return resident.property_id


def _property_attribute_key(lookup: PropertyLookup, name: str) -> GroupKey:
    if isinstance(lookup, Mapping):
        resolve = lookup.get
    elif callable(lookup):
        resolve = lookup
    else:
        raise ValueError(
            f"{name} lookup must be a mapping or callable, got {type(lookup).__name__}"
        )

    def key(resident: Resident) -> Optional[Hashable]:
        if resident.property_id is None:
            return None
        return resolve(resident.property_id)

    return key


def city_key(lookup: CityLookup) -> GroupKey:
    """
    Key residents by the city of their property.

    Args:
        lookup: Mapping ``property_id -> city`` or a callable doing the same.
            Residents whose property is unknown are excluded.
    """
    return _property_attribute_key(lookup, "city")


def property_manager_key(lookup: PropertyLookup) -> GroupKey:
    """Key residents by the manager of their property; unmanaged ones are excluded."""
    return _property_attribute_key(lookup, "property manager")


def period_key(buckets: Sequence[PeriodBucket]) -> GroupKey:
    """
    Key residents by the first bucket containing their cohort month.

    Residents whose cohort month falls outside every bucket are excluded.
    """
    buckets = list(buckets)

    def key(resident: Resident) -> Optional[Hashable]:
        if resident.lease_start_date is None:
            return None
        first_day = period_start(cohort_month(resident.lease_start_date))
        for bucket in buckets:
            if bucket.start <= first_day <= bucket.end:
                return bucket.label
        return None

    return key
