# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import Field, ValidationInfo, field_validator, model_validator

from .model import Model
from .types import PositiveInt
from .validation import validate_ascending


class PeriodBucket(Model):
    """
    Labelled window of cohort months for period-over-period comparison.

    Both ends are inclusive and compared against the cohort month (the first
    day of the month in which the lease started).

    Example:
        ```python
        PeriodBucket(label="Year 1 (Jul 22 - Jun 23)",
                     start=date(2022, 7, 1), end=date(2023, 6, 30))
        ```
    """

    label: str
    start: date
    end: date

    @model_validator(mode="after")
    def check_window(self) -> "PeriodBucket":
        if self.end < self.start:
            raise ValueError(f"PeriodBucket '{self.label}': end must not precede start")
        return self


class BenefitTier(Model):
    """Benefit-depth tier; ``max_count=None`` marks the open-ended top tier."""

    label: str
    max_count: Optional[PositiveInt] = None


def _default_benefit_tiers() -> List[BenefitTier]:
    return [
        BenefitTier(label="1-2 benefits", max_count=2),
        BenefitTier(label="3 benefits", max_count=3),
        BenefitTier(label="4 benefits", max_count=4),
        BenefitTier(label="5 benefits", max_count=None),
    ]


class CohortSettings(Model):
    """Checkpoints (in months) for the monthly cohort views."""

    retention_checkpoints: List[int] = Field(
        default_factory=lambda: [1, 3, 6, 9, 12],
        description="Months at which cohort retention is measured.",
    )
    churn_checkpoints: List[int] = Field(
        default_factory=lambda: [3, 6, 12],
        description="Months at which cumulative cohort churn is measured.",
    )
    churn_runway_months: Optional[PositiveInt] = Field(
        default=None,
        description=(
            "Minimum cohort age (months) for the churn view. "
            "Defaults to the largest churn checkpoint."
        ),
    )

    @field_validator("retention_checkpoints", "churn_checkpoints")
    @classmethod
    def check_checkpoints(cls, v: List[int], info: ValidationInfo) -> List[int]:
        return validate_ascending(v, info.field_name)

    @property
    def effective_churn_runway(self) -> int:
        if self.churn_runway_months is not None:
            return self.churn_runway_months
        return self.churn_checkpoints[-1]


class SurvivalSettings(Model):
    """Sampling grid and eligibility window for the survival curve."""

    day_offsets: List[int] = Field(
        default_factory=lambda: list(range(0, 361, 30)),
        description="Days since lease start at which the curve is sampled.",
    )
    min_age_days: PositiveInt = Field(
        default=365,
        description="Minimum days between lease start and as-of date for eligibility.",
    )

    @field_validator("day_offsets")
    @classmethod
    def check_offsets(cls, v: List[int]) -> List[int]:
        return validate_ascending(v, "day_offsets")


class SegmentSettings(Model):
    """
    Thresholds for the churn-investigation segments.

    These were picked by inspection of one portfolio and are properties of
    the data, so they stay configurable.
    """

    early_activation_days: PositiveInt = Field(
        default=7,
        description="Max days from enrollment to first activation for an 'early activator'.",
    )
    benefit_tiers: List[BenefitTier] = Field(default_factory=_default_benefit_tiers)
    min_property_residents: PositiveInt = Field(
        default=50,
        description="Properties with fewer residents are left out of per-property churn.",
    )
    top_properties: Optional[PositiveInt] = Field(
        default=10,
        description="Number of highest-churn properties reported; None reports all.",
    )
    focus_city: Optional[str] = Field(
        default=None,
        description="City for the per-property and rent deep dive, e.g. 'Alexandria'.",
    )
    period_buckets: List[PeriodBucket] = Field(default_factory=list)

    @field_validator("benefit_tiers")
    @classmethod
    def check_tiers(cls, v: List[BenefitTier]) -> List[BenefitTier]:
        if not v:
            raise ValueError("benefit_tiers must not be empty")
        bounded = [t.max_count for t in v if t.max_count is not None]
        if bounded:
            validate_ascending(bounded, "benefit_tiers max_count")
        if any(t.max_count is None for t in v[:-1]):
            raise ValueError("Only the last benefit tier may be open-ended")
        return v


class ReportingSettings(Model):
    """Settings related to report generation and display."""

    decimal_places: PositiveInt = Field(
        default=1, description="Decimal places for percentage values."
    )


class GlobalSettings(Model):
    """Global analysis settings

    Groups every tunable of a retention run by functional area. There is no
    reference date here: the as-of date is always passed explicitly.
    """

    cohorts: CohortSettings = Field(default_factory=CohortSettings)
    survival: SurvivalSettings = Field(default_factory=SurvivalSettings)
    segments: SegmentSettings = Field(default_factory=SegmentSettings)
    reporting: ReportingSettings = Field(default_factory=ReportingSettings)
