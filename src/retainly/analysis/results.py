# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Retention analysis result models.

Summary records are immutable snapshots; ``RetentionAnalysisResult`` bundles
every view produced by one run together with its inputs and diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Dict, Hashable, List, Optional

import pandas as pd

from ..core.primitives import (
    GlobalSettings,
    Model,
    Percentage,
    PositiveFloat,
    PositiveInt,
    ResidentStatusEnum,
    SkipReasonEnum,
    format_period,
)

if TYPE_CHECKING:
    from ..reporting.interface import ReportingInterface
    from .screening import Diagnostics


class SkippedRecord(Model):
    """A resident record left out of the aggregates, with the reason."""

    resident_id: str
    reason: SkipReasonEnum


class CohortSummary(Model):
    """
    Retention of one monthly cohort at each checkpoint.

    Attributes:
        cohort_month: Month in which the cohort's leases started.
        cohort_size: Number of residents in the cohort (always >= 1).
        retention_at: Checkpoint (months) -> percent still in place.
    """

    cohort_month: pd.Period
    cohort_size: PositiveInt
    retention_at: Dict[int, Percentage]

    @property
    def cohort_label(self) -> str:
        return format_period(self.cohort_month)


class CohortChurnSummary(Model):
    """Cumulative churn of one monthly cohort by each checkpoint."""

    cohort_month: pd.Period
    cohort_size: PositiveInt
    churn_by: Dict[int, Percentage]

    @property
    def cohort_label(self) -> str:
        return format_period(self.cohort_month)


class GroupRetentionSummary(Model):
    """Retention of an arbitrary group (city, period bucket, cohort month)."""

    group: Hashable
    group_size: PositiveInt
    retention_at: Dict[int, Percentage]


class SurvivalPoint(Model):
    """
    One sample of the portfolio survival curve.

    ``retention_pct`` is ``None`` when no resident is eligible; the curve is
    undefined there rather than zero.
    """

    day_offset: PositiveInt
    eligible_count: PositiveInt
    still_active_count: PositiveInt
    retention_pct: Optional[Percentage] = None


class SegmentChurnSummary(Model):
    """Snapshot churn rate of one segment (city, activation speed, ...)."""

    segment: Hashable
    total_residents: PositiveInt
    churned: PositiveInt
    churn_rate_pct: Percentage


class PropertyChurnSummary(SegmentChurnSummary):
    """
    Snapshot churn of one property (``segment`` is the property id).

    ``avg_rent`` is rounded to whole currency units and is ``None`` when no
    resident of the property has a rent on record.
    """

    property_name: Optional[str] = None
    city: Optional[str] = None
    property_manager_name: Optional[str] = None
    avg_rent: Optional[PositiveFloat] = None


class ManagerChurnSummary(SegmentChurnSummary):
    """Snapshot churn across the properties of one manager."""

    properties_managed: PositiveInt


class RentSummary(Model):
    """Rent levels of churned or retained residents."""

    status: ResidentStatusEnum
    total_residents: PositiveInt
    residents_with_rent: PositiveInt
    avg_rent: Optional[PositiveFloat] = None
    min_rent: Optional[PositiveFloat] = None
    max_rent: Optional[PositiveFloat] = None


@dataclass
class RetentionAnalysisResult:
    """
    Every retention view computed for one snapshot and as-of date.

    Optional views are empty lists when their inputs were not supplied
    (no property records, no enrollments, no period buckets, no focus city).

    Attributes:
        as_of_date: Reference date of the run
        settings: Settings the run used
        diagnostics: Records skipped during screening
        cohort_retention: Monthly cohort retention, ascending by month
        cohort_churn: Monthly cohort churn for cohorts with enough runway
        survival_curve: Portfolio survival curve in offset order
        retention_by_city: Retention per city
        retention_by_period: Retention per configured period bucket
        churn_by_city: Snapshot churn per city, highest first
        churn_by_property: Highest-churn properties above the size threshold
        churn_by_manager: Snapshot churn per property manager, highest first
        churn_by_activation_speed: Early vs late activators
        churn_by_benefit_depth: Churn per benefit-count tier
        churn_by_activation_status: Churn by enrolled/activated mix
        move_outs_by_month: Calendar month -> number of move-outs
        rent_by_status: Rent of churned vs retained residents
        focus_city_churn_by_property: Every property of the focus city
        focus_city_rent_by_status: Rent comparison within the focus city
    """

    as_of_date: date
    settings: GlobalSettings
    diagnostics: "Diagnostics"
    cohort_retention: List[CohortSummary] = field(default_factory=list)
    cohort_churn: List[CohortChurnSummary] = field(default_factory=list)
    survival_curve: List[SurvivalPoint] = field(default_factory=list)
    retention_by_city: List[GroupRetentionSummary] = field(default_factory=list)
    retention_by_period: List[GroupRetentionSummary] = field(default_factory=list)
    churn_by_city: List[SegmentChurnSummary] = field(default_factory=list)
    churn_by_property: List[PropertyChurnSummary] = field(default_factory=list)
    churn_by_manager: List[ManagerChurnSummary] = field(default_factory=list)
    churn_by_activation_speed: List[SegmentChurnSummary] = field(default_factory=list)
    churn_by_benefit_depth: List[SegmentChurnSummary] = field(default_factory=list)
    churn_by_activation_status: List[SegmentChurnSummary] = field(default_factory=list)
    move_outs_by_month: Dict[int, int] = field(default_factory=dict)
    rent_by_status: List[RentSummary] = field(default_factory=list)
    focus_city_churn_by_property: List[PropertyChurnSummary] = field(default_factory=list)
    focus_city_rent_by_status: List[RentSummary] = field(default_factory=list)

    @property
    def skipped_ids(self) -> List[str]:
        return self.diagnostics.skipped_ids

    @property
    def reporting(self) -> "ReportingInterface":
        """
        Access reporting interface for table generation.

        Example:
            ```python
            result = run(residents, as_of_date=date(2024, 7, 15))
            table = result.reporting.cohort_retention()
            ```
        """
        # Import at runtime to avoid circular dependencies
        from ..reporting.interface import ReportingInterface  # noqa: PLC0415

        return ReportingInterface(self)
