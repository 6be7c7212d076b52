# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Survival Sampler

Samples one portfolio-wide survival curve: at each day offset ``d``, the
share of eligible residents whose tenure exceeds ``d`` days.

Only residents whose lease started at least ``min_age_days`` before the
as-of date are eligible, so recent move-ins who have not had time to churn
do not inflate the curve. The eligible set is fixed once per call, which
makes the curve non-increasing by construction.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence

from ..core.base import Resident
from ..core.primitives import (
    TenureUnitEnum,
    round_pct,
    validate_ascending,
    validate_non_negative,
)
from .results import SurvivalPoint
from .screening import Diagnostics, screen_residents
from .tenure import resident_tenure

logger = logging.getLogger(__name__)


def default_day_offsets(max_day: int = 360, step: int = 30) -> List[int]:
    """Offsets ``0, step, 2*step, ...`` up to and including ``max_day``."""
    validate_non_negative(max_day, "max_day")
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    return list(range(0, max_day + 1, step))


def survival_curve(
    residents: Iterable[Resident],
    day_offsets: Sequence[int],
    as_of_date: date,
    min_age_days: int = 365,
    *,
    diagnostics: Optional[Diagnostics] = None,
    places: int = 1,
) -> List[SurvivalPoint]:
    """
    Portfolio survival curve sampled at ``day_offsets``.

    Args:
        residents: Resident snapshot
        day_offsets: Strictly ascending day offsets, e.g. ``0, 30, ..., 360``
        as_of_date: Reference date for eligibility
        min_age_days: Minimum days from lease start to ``as_of_date``
        diagnostics: Collector for skipped records
        places: Decimal places for percentages

    Returns:
        One point per offset, in the order supplied. With no eligible
        resident every point has ``retention_pct=None``.

    Raises:
        ValueError: If ``day_offsets`` is invalid or ``min_age_days`` negative
    """
    day_offsets = validate_ascending(day_offsets, "day_offsets")
    validate_non_negative(min_age_days, "min_age_days")

    cutoff = as_of_date - timedelta(days=min_age_days)
    usable = screen_residents(residents, diagnostics)
    tenures = [
        resident_tenure(r, TenureUnitEnum.DAYS)
        for r in usable
        if r.lease_start_date <= cutoff
    ]
    eligible = len(tenures)
    logger.debug(
        f"Survival curve as of {as_of_date}: {eligible} eligible resident(s) "
        f"with lease start on or before {cutoff}"
    )

    points: List[SurvivalPoint] = []
    for offset in day_offsets:
        still_active = sum(1 for t in tenures if t.exceeds(offset))
        pct = round_pct(still_active, eligible, places) if eligible else None
        points.append(
            SurvivalPoint(
                day_offset=offset,
                eligible_count=eligible,
                still_active_count=still_active,
                retention_pct=pct,
            )
        )
    return points
