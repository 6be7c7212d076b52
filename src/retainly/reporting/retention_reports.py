# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Retention report formatters.

Each report selects one view of a ``RetentionAnalysisResult`` and renders
it with the matching table builder.
"""

from __future__ import annotations

from typing import Callable, Dict, Sequence

import pandas as pd

from .base import BaseReport
from .tables import (
    cohort_churn_table,
    cohort_retention_table,
    group_retention_table,
    manager_churn_table,
    move_outs_table,
    property_churn_table,
    rent_by_status_table,
    segment_churn_table,
    skipped_records_table,
    survival_curve_table,
)

SEGMENT_VIEWS: Dict[str, str] = {
    "city": "churn_by_city",
    "property": "churn_by_property",
    "property_manager": "churn_by_manager",
    "focus_city_property": "focus_city_churn_by_property",
    "activation_speed": "churn_by_activation_speed",
    "benefit_depth": "churn_by_benefit_depth",
    "activation_status": "churn_by_activation_status",
}

SEGMENT_COLUMNS: Dict[str, str] = {
    "city": "city",
    "activation_speed": "activation_group",
    "benefit_depth": "benefit_tier",
    "activation_status": "activation_status",
}

# Views whose summaries carry more than the generic segment fields
DETAILED_SEGMENT_TABLES: Dict[str, Callable[[Sequence], pd.DataFrame]] = {
    "property": property_churn_table,
    "property_manager": manager_churn_table,
    "focus_city_property": property_churn_table,
}


class CohortRetentionReport(BaseReport):
    """Monthly cohort retention table."""

    def generate(self) -> pd.DataFrame:
        return cohort_retention_table(self._results.cohort_retention)


class CohortChurnReport(BaseReport):
    """Monthly cohort churn table (cohorts with full runway only)."""

    def generate(self) -> pd.DataFrame:
        return cohort_churn_table(self._results.cohort_churn)


class SurvivalCurveReport(BaseReport):
    """Survival curve sample points."""

    def generate(self) -> pd.DataFrame:
        return survival_curve_table(self._results.survival_curve)


class GroupRetentionReport(BaseReport):
    """Retention by city or by period bucket."""

    def generate(self, dimension: str = "city") -> pd.DataFrame:
        if dimension == "city":
            return group_retention_table(self._results.retention_by_city, "city")
        if dimension == "period":
            return group_retention_table(self._results.retention_by_period, "period")
        raise ValueError(f"Unknown retention dimension '{dimension}'. Valid: city, period")


class SegmentChurnReport(BaseReport):
    """Snapshot churn for one churn-investigation segment."""

    def generate(self, segment: str = "city") -> pd.DataFrame:
        attr = SEGMENT_VIEWS.get(segment)
        if attr is None:
            valid = ", ".join(SEGMENT_VIEWS)
            raise ValueError(f"Unknown segment '{segment}'. Valid: {valid}")
        summaries = getattr(self._results, attr)
        if segment in DETAILED_SEGMENT_TABLES:
            return DETAILED_SEGMENT_TABLES[segment](summaries)
        return segment_churn_table(summaries, SEGMENT_COLUMNS[segment])


class SeasonalityReport(BaseReport):
    """Move-outs per calendar month."""

    def generate(self) -> pd.DataFrame:
        return move_outs_table(self._results.move_outs_by_month)


class RentByStatusReport(BaseReport):
    """Rent of churned vs retained residents, portfolio-wide or in the focus city."""

    def generate(self, scope: str = "portfolio") -> pd.DataFrame:
        if scope == "portfolio":
            return rent_by_status_table(self._results.rent_by_status)
        if scope == "focus_city":
            return rent_by_status_table(self._results.focus_city_rent_by_status)
        raise ValueError(f"Unknown rent scope '{scope}'. Valid: portfolio, focus_city")


class SkippedRecordsReport(BaseReport):
    """Records excluded during screening, with reasons."""

    def generate(self) -> pd.DataFrame:
        return skipped_records_table(self._results.diagnostics.skipped)
