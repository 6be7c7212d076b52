# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Retainly Core Primitives

Building blocks shared by every retention view: the immutable model base,
settings, enums, month arithmetic, rounding and configuration validation.
"""

from .enums import (
    ActivationStatusEnum,
    ResidentStatusEnum,
    SkipReasonEnum,
    TenureUnitEnum,
)
from .model import Model
from .periods import (
    cohort_month,
    format_period,
    has_runway,
    period_start,
    whole_months_between,
)
from .rounding import round_half_up, round_pct
from .settings import (
    BenefitTier,
    CohortSettings,
    GlobalSettings,
    PeriodBucket,
    ReportingSettings,
    SegmentSettings,
    SurvivalSettings,
)
from .types import Percentage, PositiveFloat, PositiveInt
from .validation import (
    validate_ascending,
    validate_date_ordering,
    validate_non_negative,
)

__all__ = [
    # Core models
    "Model",
    # Settings
    "GlobalSettings",
    "CohortSettings",
    "SurvivalSettings",
    "SegmentSettings",
    "ReportingSettings",
    "PeriodBucket",
    "BenefitTier",
    # Enums
    "ActivationStatusEnum",
    "ResidentStatusEnum",
    "SkipReasonEnum",
    "TenureUnitEnum",
    # Periods
    "cohort_month",
    "format_period",
    "has_runway",
    "period_start",
    "whole_months_between",
    # Rounding
    "round_half_up",
    "round_pct",
    # Types
    "Percentage",
    "PositiveFloat",
    "PositiveInt",
    # Validation
    "validate_ascending",
    "validate_date_ordering",
    "validate_non_negative",
]
