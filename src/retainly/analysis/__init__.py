# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Retainly Analysis Engine

Tenure, monthly cohort retention and churn, the portfolio survival curve,
grouped retention (city, period) and churn-investigation segments.
"""

from .api import run
from .cohorts import (
    aggregate_cohorts,
    cohort_churn,
    retention_by_city,
    retention_by_period,
)
from .grouping import (
    city_key,
    cohort_key,
    period_key,
    property_key,
    property_manager_key,
    retention_by_group,
)
from .results import (
    CohortChurnSummary,
    CohortSummary,
    GroupRetentionSummary,
    ManagerChurnSummary,
    PropertyChurnSummary,
    RentSummary,
    RetentionAnalysisResult,
    SegmentChurnSummary,
    SkippedRecord,
    SurvivalPoint,
)
from .screening import Diagnostics, screen_residents
from .segments import (
    activation_speed_key,
    activation_status,
    activation_status_key,
    benefit_depth_key,
    benefit_tier_label,
    churn_by_manager,
    churn_by_property,
    churn_by_segment,
    move_outs_by_month,
    order_segments,
    rent_by_status,
)
from .survival import default_day_offsets, survival_curve
from .tenure import Active, Churned, Tenure, resident_tenure, tenure

__all__ = [
    # Main API function
    "run",
    # Tenure
    "Active",
    "Churned",
    "Tenure",
    "tenure",
    "resident_tenure",
    # Cohorts
    "aggregate_cohorts",
    "cohort_churn",
    "retention_by_city",
    "retention_by_period",
    # Grouping primitive
    "retention_by_group",
    "cohort_key",
    "city_key",
    "period_key",
    "property_key",
    "property_manager_key",
    # Survival
    "survival_curve",
    "default_day_offsets",
    # Segments
    "churn_by_segment",
    "churn_by_property",
    "churn_by_manager",
    "order_segments",
    "rent_by_status",
    "activation_speed_key",
    "activation_status",
    "activation_status_key",
    "benefit_depth_key",
    "benefit_tier_label",
    "move_outs_by_month",
    # Screening
    "Diagnostics",
    "screen_residents",
    # Results
    "CohortSummary",
    "CohortChurnSummary",
    "GroupRetentionSummary",
    "SurvivalPoint",
    "SegmentChurnSummary",
    "PropertyChurnSummary",
    "ManagerChurnSummary",
    "RentSummary",
    "SkippedRecord",
    "RetentionAnalysisResult",
]
