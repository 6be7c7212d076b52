# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Reporting Interface

Provides the fluent API for accessing reports from RetentionAnalysisResult
objects. This is the primary user-facing interface for the reporting system.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd

from .retention_reports import (
    CohortChurnReport,
    CohortRetentionReport,
    GroupRetentionReport,
    RentByStatusReport,
    SeasonalityReport,
    SegmentChurnReport,
    SkippedRecordsReport,
    SurvivalCurveReport,
)

if TYPE_CHECKING:
    from ..analysis.results import RetentionAnalysisResult


class ReportingInterface:
    """
    Fluent interface for accessing standardized reports.

    Example:
        result = run(residents, as_of_date=date(2024, 7, 15))
        cohorts_df = result.reporting.cohort_retention()
        curve_df = result.reporting.survival_curve()
    """

    def __init__(self, results: "RetentionAnalysisResult"):
        self._results = results

    def cohort_retention(self) -> pd.DataFrame:
        """Monthly cohort retention (``retention_m1`` ... ``retention_m12``)."""
        return CohortRetentionReport(self._results).generate()

    def cohort_churn(self) -> pd.DataFrame:
        """Monthly cohort churn (``churn_by_m3`` ...)."""
        return CohortChurnReport(self._results).generate()

    def survival_curve(self) -> pd.DataFrame:
        return SurvivalCurveReport(self._results).generate()

    def retention_by_city(self) -> pd.DataFrame:
        return GroupRetentionReport(self._results).generate(dimension="city")

    def retention_by_period(self) -> pd.DataFrame:
        return GroupRetentionReport(self._results).generate(dimension="period")

    def churn_by(self, segment: str) -> pd.DataFrame:
        """
        Snapshot churn by segment.

        Args:
            segment: One of ``city``, ``property``, ``property_manager``,
                ``focus_city_property``, ``activation_speed``,
                ``benefit_depth``, ``activation_status``

        Raises:
            ValueError: For an unknown segment
        """
        return SegmentChurnReport(self._results).generate(segment=segment)

    def seasonality(self) -> pd.DataFrame:
        return SeasonalityReport(self._results).generate()

    def rent_by_status(self, scope: str = "portfolio") -> pd.DataFrame:
        """
        Rent of churned vs retained residents.

        Args:
            scope: ``portfolio`` or ``focus_city``
        """
        return RentByStatusReport(self._results).generate(scope=scope)

    def skipped_records(self) -> pd.DataFrame:
        return SkippedRecordsReport(self._results).generate()
