# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Churn investigation segments.

Snapshot churn rates (share of residents with a move-out on record) broken
down by city, property, property manager, benefit activation speed, benefit
depth and activation status, plus the seasonal move-out profile and the
rent levels of churned vs retained residents.

Segment thresholds (early-activation days, benefit tiers) are parameters:
the defaults in ``SegmentSettings`` were read off one portfolio and are not
universal.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from decimal import Decimal
from typing import (
    Dict,
    Hashable,
    Iterable,
    List,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)

from ..core.base import BenefitEnrollment, PropertyRecord, Resident
from ..core.primitives import (
    ActivationStatusEnum,
    BenefitTier,
    ResidentStatusEnum,
    round_half_up,
    round_pct,
    validate_non_negative,
)
from .grouping import (
    CityLookup,
    GroupKey,
    PropertyLookup,
    city_key,
    group_residents,
    property_manager_key,
)
from .results import (
    ManagerChurnSummary,
    PropertyChurnSummary,
    RentSummary,
    SegmentChurnSummary,
)
from .screening import Diagnostics, screen_residents

logger = logging.getLogger(__name__)

EARLY_ACTIVATOR = "Early Activator (0-{days} days)"
LATE_ACTIVATOR = "Late Activator ({days_after}+ days)"

Summary = TypeVar("Summary", bound=SegmentChurnSummary)


def _churn_counts(members: Sequence[Resident]) -> Tuple[int, int]:
    return len(members), sum(1 for r in members if not r.is_active)


def order_segments(
    summaries: Iterable[Summary],
    *,
    descending: bool = False,
    limit: Optional[int] = None,
    segment_order: Optional[Sequence[Hashable]] = None,
) -> List[Summary]:
    """
    Order segment summaries and keep the first ``limit``.

    Args:
        summaries: Segment summaries
        descending: Highest churn first; ignored with ``segment_order``
        limit: Number of summaries kept after ordering; ``None`` keeps all
        segment_order: Explicit segment order (e.g. tier labels); segments
            not listed go last, by label

    Returns:
        Ordered summaries; churn ties are broken by segment label
    """
    if limit is not None:
        validate_non_negative(limit, "limit")
    if segment_order is not None:
        position = {segment: i for i, segment in enumerate(segment_order)}
        ordered = sorted(
            summaries, key=lambda s: (position.get(s.segment, len(position)), str(s.segment))
        )
    elif descending:
        ordered = sorted(summaries, key=lambda s: (-s.churn_rate_pct, str(s.segment)))
    else:
        ordered = sorted(summaries, key=lambda s: (s.churn_rate_pct, str(s.segment)))
    return ordered if limit is None else ordered[:limit]


def churn_by_segment(
    residents: Iterable[Resident],
    key: GroupKey,
    *,
    min_size: int = 1,
    descending: bool = False,
    limit: Optional[int] = None,
    segment_order: Optional[Sequence[Hashable]] = None,
    diagnostics: Optional[Diagnostics] = None,
    places: int = 1,
) -> List[SegmentChurnSummary]:
    """
    Snapshot churn rate per segment.

    Args:
        residents: Resident snapshot
        key: Segment key callable; residents keyed ``None`` are excluded
        min_size: Segments with fewer residents are dropped
        descending: Highest churn first instead of lowest
        limit: Keep only the first ``limit`` segments after ordering
        segment_order: Explicit segment order overriding the churn ordering
        diagnostics: Collector for skipped records
        places: Decimal places for percentages

    Returns:
        Segment summaries, lowest churn first unless told otherwise, ties
        broken by segment label
    """
    validate_non_negative(min_size, "min_size")
    usable = screen_residents(residents, diagnostics)
    groups = group_residents(usable, key)

    summaries: List[SegmentChurnSummary] = []
    for segment, members in groups.items():
        total, churned = _churn_counts(members)
        if total < max(min_size, 1):
            continue
        summaries.append(
            SegmentChurnSummary(
                segment=segment,
                total_residents=total,
                churned=churned,
                churn_rate_pct=round_pct(churned, total, places),
            )
        )
    return order_segments(
        summaries, descending=descending, limit=limit, segment_order=segment_order
    )


def average_rent(residents: Iterable[Resident]) -> Optional[float]:
    """Mean rent in whole units (half away from zero); residents without rent are ignored."""
    rents = [Decimal(str(r.rent_amount)) for r in residents if r.rent_amount is not None]
    if not rents:
        return None
    return round_half_up(sum(rents) / len(rents), 0)


def churn_by_property(
    residents: Iterable[Resident],
    properties: Iterable[PropertyRecord],
    *,
    city: Optional[str] = None,
    min_size: int = 1,
    limit: Optional[int] = None,
    diagnostics: Optional[Diagnostics] = None,
    places: int = 1,
) -> List[PropertyChurnSummary]:
    """
    Snapshot churn per property with its name, city, manager and average rent.

    Args:
        residents: Resident snapshot
        properties: Property records; residents of unknown properties are
            excluded
        city: Restrict to the properties of one city
        min_size: Properties with fewer residents are dropped
        limit: Keep only the ``limit`` highest-churn properties

    Returns:
        Property summaries, highest churn first
    """
    validate_non_negative(min_size, "min_size")
    catalog = {p.property_id: p for p in properties}

    def key(resident: Resident) -> Optional[Hashable]:
        record = catalog.get(resident.property_id) if resident.property_id else None
        if record is None or (city is not None and record.city != city):
            return None
        return record.property_id

    groups = group_residents(screen_residents(residents, diagnostics), key)

    summaries: List[PropertyChurnSummary] = []
    for property_id, members in groups.items():
        total, churned = _churn_counts(members)
        if total < max(min_size, 1):
            continue
        record = catalog[property_id]
        summaries.append(
            PropertyChurnSummary(
                segment=property_id,
                total_residents=total,
                churned=churned,
                churn_rate_pct=round_pct(churned, total, places),
                property_name=record.property_name,
                city=record.city,
                property_manager_name=record.property_manager_name,
                avg_rent=average_rent(members),
            )
        )
    return order_segments(summaries, descending=True, limit=limit)


def churn_by_manager(
    residents: Iterable[Resident],
    manager_lookup: PropertyLookup,
    *,
    diagnostics: Optional[Diagnostics] = None,
    places: int = 1,
) -> List[ManagerChurnSummary]:
    """
    Snapshot churn per property manager, highest first.

    ``properties_managed`` counts the manager's properties that have at
    least one resident in the snapshot.
    """
    usable = screen_residents(residents, diagnostics)
    groups = group_residents(usable, property_manager_key(manager_lookup))

    summaries: List[ManagerChurnSummary] = []
    for manager, members in groups.items():
        total, churned = _churn_counts(members)
        summaries.append(
            ManagerChurnSummary(
                segment=manager,
                total_residents=total,
                churned=churned,
                churn_rate_pct=round_pct(churned, total, places),
                properties_managed=len({r.property_id for r in members}),
            )
        )
    return order_segments(summaries, descending=True)


def rent_by_status(
    residents: Iterable[Resident],
    *,
    city: Optional[str] = None,
    city_lookup: Optional[CityLookup] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> List[RentSummary]:
    """
    Rent levels of churned vs retained residents.

    Args:
        residents: Resident snapshot
        city: Restrict to residents of one city
        city_lookup: ``property_id -> city``; required when ``city`` is set
        diagnostics: Collector for skipped records

    Returns:
        ``Churned`` then ``Retained``, each present only when it has
        residents. Rent figures are ``None`` when no member has a rent.

    Raises:
        ValueError: If ``city`` is given without ``city_lookup``
    """
    usable = screen_residents(residents, diagnostics)
    if city is not None:
        if city_lookup is None:
            raise ValueError("city_lookup is required to filter rent by city")
        in_city = city_key(city_lookup)
        usable = [r for r in usable if in_city(r) == city]

    groups = group_residents(
        usable,
        lambda r: ResidentStatusEnum.RETAINED if r.is_active else ResidentStatusEnum.CHURNED,
    )
    summaries: List[RentSummary] = []
    for status in (ResidentStatusEnum.CHURNED, ResidentStatusEnum.RETAINED):
        members = groups.get(status)
        if not members:
            continue
        rents = [r.rent_amount for r in members if r.rent_amount is not None]
        summaries.append(
            RentSummary(
                status=status,
                total_residents=len(members),
                residents_with_rent=len(rents),
                avg_rent=average_rent(members),
                min_rent=min(rents) if rents else None,
                max_rent=max(rents) if rents else None,
            )
        )
    return summaries


def enrollments_by_resident(
    enrollments: Iterable[BenefitEnrollment],
) -> Dict[str, List[BenefitEnrollment]]:
    by_resident: Dict[str, List[BenefitEnrollment]] = defaultdict(list)
    for e in enrollments:
        by_resident[e.resident_id].append(e)
    return dict(by_resident)


def activation_speed_key(
    enrollments: Iterable[BenefitEnrollment], early_activation_days: int = 7
) -> GroupKey:
    """
    Key residents as early or late activators.

    A resident is an early activator when their fastest activation came
    within ``early_activation_days`` of enrollment. Residents with no
    activated enrollment are excluded.
    """
    validate_non_negative(early_activation_days, "early_activation_days")
    early = EARLY_ACTIVATOR.format(days=early_activation_days)
    late = LATE_ACTIVATOR.format(days_after=early_activation_days + 1)

    fastest: Dict[str, int] = {}
    for resident_id, items in enrollments_by_resident(enrollments).items():
        days = [e.activation_days for e in items if e.activation_days is not None]
        if days:
            fastest[resident_id] = min(days)

    def key(resident: Resident) -> Optional[Hashable]:
        days = fastest.get(resident.resident_id)
        if days is None:
            return None
        return early if days <= early_activation_days else late

    return key


def benefit_tier_label(count: int, tiers: Sequence[BenefitTier]) -> str:
    """Label of the first tier whose ``max_count`` covers ``count``."""
    for tier in tiers:
        if tier.max_count is None or count <= tier.max_count:
            return tier.label
    # No open-ended tier: counts beyond the last bound fall into it
    return tiers[-1].label


def benefit_depth_key(
    enrollments: Iterable[BenefitEnrollment], tiers: Sequence[BenefitTier]
) -> GroupKey:
    """Key residents by number of enrollments; no enrollment counts as 0."""
    tiers = list(tiers)
    if not tiers:
        raise ValueError("tiers must not be empty")
    counts = {rid: len(items) for rid, items in enrollments_by_resident(enrollments).items()}

    def key(resident: Resident) -> Optional[Hashable]:
        return benefit_tier_label(counts.get(resident.resident_id, 0), tiers)

    return key


def activation_status(items: Sequence[BenefitEnrollment]) -> ActivationStatusEnum:
    enrolled = len(items)
    activated = sum(1 for e in items if e.is_activated)
    if enrolled == 0:
        return ActivationStatusEnum.NO_BENEFITS
    if activated == 0:
        return ActivationStatusEnum.ENROLLED_ONLY
    if activated < enrolled:
        return ActivationStatusEnum.PARTIAL
    return ActivationStatusEnum.FULL


def activation_status_key(enrollments: Iterable[BenefitEnrollment]) -> GroupKey:
    """Key residents by how many of their enrollments were activated."""
    by_resident = enrollments_by_resident(enrollments)

    def key(resident: Resident) -> Optional[Hashable]:
        return activation_status(by_resident.get(resident.resident_id, [])).value

    return key


def move_outs_by_month(
    residents: Iterable[Resident], *, diagnostics: Optional[Diagnostics] = None
) -> Dict[int, int]:
    """Move-outs per calendar month (1-12), every month present."""
    counts = {m: 0 for m in range(1, 13)}
    for r in screen_residents(residents, diagnostics):
        if r.move_out_date is not None:
            counts[r.move_out_date.month] += 1
    return counts
