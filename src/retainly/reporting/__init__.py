# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Retainly Reporting Module

The primary interface is the fluent API:
    result = run(residents, as_of_date)
    cohorts = result.reporting.cohort_retention()
    curve = result.reporting.survival_curve()

The table builders also work directly on lists of summaries returned by the
individual analysis functions.
"""

from .base import BaseReport
from .interface import ReportingInterface
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

__all__ = [
    # Base classes for custom reports
    "BaseReport",
    # Fluent interface (exposed via RetentionAnalysisResult.reporting)
    "ReportingInterface",
    # Reports
    "CohortRetentionReport",
    "CohortChurnReport",
    "SurvivalCurveReport",
    "GroupRetentionReport",
    "SegmentChurnReport",
    "SeasonalityReport",
    "RentByStatusReport",
    "SkippedRecordsReport",
    # Table builders
    "cohort_retention_table",
    "cohort_churn_table",
    "group_retention_table",
    "survival_curve_table",
    "segment_churn_table",
    "property_churn_table",
    "manager_churn_table",
    "rent_by_status_table",
    "skipped_records_table",
    "move_outs_table",
]
