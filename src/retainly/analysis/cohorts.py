# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Cohort Aggregator

Groups residents into monthly cohorts by lease start and measures, per
cohort, the share still in place at fixed month checkpoints.

Rules shared by every view in this module:
    - The cohort containing ``as_of_date`` (and any later one) is never
      reported; its members have not had a full observation window.
    - With a runway of ``k`` months, only cohorts whose first day is at least
      ``k`` months before ``as_of_date`` are scored.
    - Percentages are rounded half away from zero.

The by-city and by-period views run the same aggregation with a different
group key (see ``grouping``).
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional, Sequence

from ..core.base import Resident
from ..core.primitives import (
    PeriodBucket,
    TenureUnitEnum,
    cohort_month,
    has_runway,
    validate_ascending,
    validate_non_negative,
)
from .grouping import (
    CityLookup,
    city_key,
    group_residents,
    period_key,
    safe_pct,
    summarize_retention,
)
from .results import CohortChurnSummary, CohortSummary, GroupRetentionSummary
from .screening import Diagnostics, screen_residents
from .tenure import resident_tenure

logger = logging.getLogger(__name__)


def observable_residents(
    residents: Iterable[Resident],
    as_of_date: date,
    runway_months: Optional[int] = None,
) -> List[Resident]:
    """
    Screened residents whose cohort may be reported as of ``as_of_date``.

    Drops the partial (current) month and later months, then applies the
    optional runway filter.
    """
    current = cohort_month(as_of_date)
    kept: List[Resident] = []
    partial = 0
    short_runway = 0
    for resident in residents:
        cohort = cohort_month(resident.lease_start_date)
        if cohort >= current:
            partial += 1
            continue
        if runway_months is not None and not has_runway(cohort, as_of_date, runway_months):
            short_runway += 1
            continue
        kept.append(resident)
    logger.debug(
        f"Cohort filter as of {as_of_date}: kept {len(kept)}, "
        f"excluded {partial} in current/future months, {short_runway} without runway"
    )
    return kept


def aggregate_cohorts(
    residents: Iterable[Resident],
    checkpoints: Sequence[int],
    as_of_date: date,
    min_runway_checkpoint: Optional[int] = None,
    *,
    diagnostics: Optional[Diagnostics] = None,
    places: int = 1,
) -> List[CohortSummary]:
    """
    Monthly cohort retention table.

    For each cohort and checkpoint ``c`` (months):
    ``retention = count(active or tenure >= c) / cohort_size * 100``.

    Args:
        residents: Resident snapshot
        checkpoints: Strictly ascending months, e.g. ``[1, 3, 6, 9, 12]``
        as_of_date: Reference date; its month is excluded as partial
        min_runway_checkpoint: When set, only cohorts at least this many
            months old (relative to ``as_of_date``) are included
        diagnostics: Collector for skipped records
        places: Decimal places for percentages

    Returns:
        Cohort summaries ascending by cohort month; empty for empty input

    Raises:
        ValueError: If ``checkpoints`` is invalid or the runway is negative

    Example:
        ```python
        summaries = aggregate_cohorts(residents, [1, 3], date(2024, 7, 15))
        summaries[0].cohort_label, summaries[0].retention_at[3]
        ```
    """
    checkpoints = validate_ascending(checkpoints, "checkpoints")
    if min_runway_checkpoint is not None:
        validate_non_negative(min_runway_checkpoint, "min_runway_checkpoint")

    usable = screen_residents(residents, diagnostics)
    observable = observable_residents(usable, as_of_date, min_runway_checkpoint)
    cohorts = group_residents(observable, lambda r: cohort_month(r.lease_start_date))

    summaries: List[CohortSummary] = []
    for cohort in sorted(cohorts):
        group = summarize_retention(cohort, cohorts[cohort], checkpoints, places)
        summaries.append(
            CohortSummary(
                cohort_month=cohort,
                cohort_size=group.group_size,
                retention_at=group.retention_at,
            )
        )
    logger.debug(f"Aggregated {len(summaries)} cohort(s) as of {as_of_date}")
    return summaries


def cohort_churn(
    residents: Iterable[Resident],
    checkpoints: Sequence[int],
    as_of_date: date,
    runway_checkpoint: Optional[int] = None,
    *,
    diagnostics: Optional[Diagnostics] = None,
    places: int = 1,
) -> List[CohortChurnSummary]:
    """
    Cumulative churn per monthly cohort, the complement of retention.

    ``churn_by[c] = count(churned with tenure < c) / cohort_size * 100``,
    counted directly so each figure carries a single rounding.

    Args:
        residents: Resident snapshot
        checkpoints: Strictly ascending months, e.g. ``[3, 6, 12]``
        as_of_date: Reference date
        runway_checkpoint: Minimum cohort age in months; defaults to the
            largest checkpoint so no cohort is scored before it could churn
        diagnostics: Collector for skipped records
        places: Decimal places for percentages

    Returns:
        Churn summaries ascending by cohort month
    """
    checkpoints = validate_ascending(checkpoints, "checkpoints")
    if runway_checkpoint is None:
        runway_checkpoint = checkpoints[-1]
    validate_non_negative(runway_checkpoint, "runway_checkpoint")

    usable = screen_residents(residents, diagnostics)
    observable = observable_residents(usable, as_of_date, runway_checkpoint)
    cohorts = group_residents(observable, lambda r: cohort_month(r.lease_start_date))

    summaries: List[CohortChurnSummary] = []
    for cohort in sorted(cohorts):
        members = cohorts[cohort]
        size = len(members)
        tenures = [resident_tenure(r, TenureUnitEnum.MONTHS) for r in members]
        churn_by = {
            c: safe_pct(sum(1 for t in tenures if not t.reaches(c)), size, places, cohort)
            for c in checkpoints
        }
        summaries.append(
            CohortChurnSummary(cohort_month=cohort, cohort_size=size, churn_by=churn_by)
        )
    return summaries


def retention_by_city(
    residents: Iterable[Resident],
    checkpoints: Sequence[int],
    as_of_date: date,
    city_lookup: CityLookup,
    runway_checkpoint: Optional[int] = None,
    *,
    diagnostics: Optional[Diagnostics] = None,
    places: int = 1,
) -> List[GroupRetentionSummary]:
    """
    Retention per city over cohorts with enough runway.

    Args:
        residents: Resident snapshot
        checkpoints: Strictly ascending months, e.g. ``[6, 12]``
        as_of_date: Reference date
        city_lookup: Mapping or callable ``property_id -> city``; residents
            of unknown properties are excluded
        runway_checkpoint: Minimum cohort age in months; defaults to the
            largest checkpoint

    Returns:
        City summaries, best retention at the largest checkpoint first
    """
    checkpoints = validate_ascending(checkpoints, "checkpoints")
    if runway_checkpoint is None:
        runway_checkpoint = checkpoints[-1]
    validate_non_negative(runway_checkpoint, "runway_checkpoint")

    usable = screen_residents(residents, diagnostics)
    observable = observable_residents(usable, as_of_date, runway_checkpoint)
    groups = group_residents(observable, city_key(city_lookup))

    summaries = [
        summarize_retention(city, members, checkpoints, places)
        for city, members in groups.items()
    ]
    last = checkpoints[-1]
    return sorted(summaries, key=lambda s: (-s.retention_at[last], str(s.group)))


def retention_by_period(
    residents: Iterable[Resident],
    checkpoints: Sequence[int],
    as_of_date: date,
    buckets: Sequence[PeriodBucket],
    *,
    diagnostics: Optional[Diagnostics] = None,
    places: int = 1,
) -> List[GroupRetentionSummary]:
    """
    Retention per period bucket, e.g. leasing year 1 vs leasing year 2.

    Returns:
        One summary per non-empty bucket, in the order the buckets were given
    """
    checkpoints = validate_ascending(checkpoints, "checkpoints")
    buckets = list(buckets)

    usable = screen_residents(residents, diagnostics)
    observable = observable_residents(usable, as_of_date)
    groups = group_residents(observable, period_key(buckets))

    summaries: List[GroupRetentionSummary] = []
    for label in dict.fromkeys(b.label for b in buckets):
        if label in groups:
            summaries.append(summarize_retention(label, groups[label], checkpoints, places))
    return summaries
