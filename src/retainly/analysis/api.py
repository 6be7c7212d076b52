# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Retention Analysis API

Single entry point that screens a resident snapshot once and produces
every retention view configured in ``GlobalSettings``.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional

from ..core.base import BenefitEnrollment, PropertyRecord, Resident
from ..core.primitives import GlobalSettings
from ..data.loaders import city_lookup as build_city_lookup
from ..data.loaders import manager_lookup as build_manager_lookup
from .cohorts import aggregate_cohorts, cohort_churn, retention_by_city, retention_by_period
from .grouping import city_key
from .results import RetentionAnalysisResult
from .screening import Diagnostics, screen_residents
from .segments import (
    activation_speed_key,
    activation_status_key,
    benefit_depth_key,
    churn_by_manager,
    churn_by_property,
    churn_by_segment,
    move_outs_by_month,
    rent_by_status,
)
from .survival import survival_curve

logger = logging.getLogger(__name__)


def run(
    residents: Iterable[Resident],
    as_of_date: date,
    settings: Optional[GlobalSettings] = None,
    *,
    properties: Optional[Iterable[PropertyRecord]] = None,
    enrollments: Optional[Iterable[BenefitEnrollment]] = None,
) -> RetentionAnalysisResult:
    """
    Run every retention view over one snapshot.

    Workflow:
      1) Screen residents once, collecting skipped records
      2) Monthly cohort retention and cohort churn
      3) Portfolio survival curve, seasonality and rent by status
      4) City, property and manager views when ``properties`` are given,
         plus the focus-city deep dive when a focus city is configured
      5) Period comparison when period buckets are configured
      6) Benefit segments when ``enrollments`` are given

    Args:
        residents: Resident snapshot
        as_of_date: Reference date; there is no implicit "today"
        settings: Analysis settings; defaults to ``GlobalSettings()``
        properties: Property records for the city, property and manager views
        enrollments: Benefit enrollments for the activation/depth views

    Returns:
        RetentionAnalysisResult holding every view and the diagnostics
    """
    if settings is None:
        settings = GlobalSettings()

    diagnostics = Diagnostics()
    usable = screen_residents(residents, diagnostics)
    places = settings.reporting.decimal_places
    cohort_cfg = settings.cohorts
    segment_cfg = settings.segments

    logger.info(
        f"Running retention analysis as of {as_of_date}: {len(usable)} resident(s), "
        f"{len(diagnostics)} skipped"
    )

    result = RetentionAnalysisResult(
        as_of_date=as_of_date,
        settings=settings,
        diagnostics=diagnostics,
        cohort_retention=aggregate_cohorts(
            usable, cohort_cfg.retention_checkpoints, as_of_date, places=places
        ),
        cohort_churn=cohort_churn(
            usable,
            cohort_cfg.churn_checkpoints,
            as_of_date,
            cohort_cfg.effective_churn_runway,
            places=places,
        ),
        survival_curve=survival_curve(
            usable,
            settings.survival.day_offsets,
            as_of_date,
            settings.survival.min_age_days,
            places=places,
        ),
        move_outs_by_month=move_outs_by_month(usable),
        rent_by_status=rent_by_status(usable),
    )

    if properties is not None:
        properties = list(properties)
        lookup = build_city_lookup(properties)
        result.retention_by_city = retention_by_city(
            usable, cohort_cfg.retention_checkpoints, as_of_date, lookup, places=places
        )
        result.churn_by_city = churn_by_segment(
            usable, city_key(lookup), descending=True, places=places
        )
        result.churn_by_property = churn_by_property(
            usable,
            properties,
            min_size=segment_cfg.min_property_residents,
            limit=segment_cfg.top_properties,
            places=places,
        )
        result.churn_by_manager = churn_by_manager(
            usable, build_manager_lookup(properties), places=places
        )
        if segment_cfg.focus_city is not None:
            logger.debug(f"Focus-city deep dive for {segment_cfg.focus_city}")
            result.focus_city_churn_by_property = churn_by_property(
                usable, properties, city=segment_cfg.focus_city, places=places
            )
            result.focus_city_rent_by_status = rent_by_status(
                usable, city=segment_cfg.focus_city, city_lookup=lookup
            )
    elif segment_cfg.focus_city is not None:
        logger.warning(
            f"Focus city {segment_cfg.focus_city!r} configured but no properties given; "
            "skipping the focus-city views"
        )

    if segment_cfg.period_buckets:
        result.retention_by_period = retention_by_period(
            usable,
            cohort_cfg.retention_checkpoints,
            as_of_date,
            segment_cfg.period_buckets,
            places=places,
        )

    if enrollments is not None:
        enrollments = list(enrollments)
        result.churn_by_activation_speed = churn_by_segment(
            usable,
            activation_speed_key(enrollments, segment_cfg.early_activation_days),
            places=places,
        )
        result.churn_by_benefit_depth = churn_by_segment(
            usable,
            benefit_depth_key(enrollments, segment_cfg.benefit_tiers),
            segment_order=[t.label for t in segment_cfg.benefit_tiers],
            places=places,
        )
        result.churn_by_activation_status = churn_by_segment(
            usable, activation_status_key(enrollments), places=places
        )

    return result
