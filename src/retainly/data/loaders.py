# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Snapshot loaders.

Turn CSV exports (or any DataFrame, e.g. a query result) of the residents,
benefit enrollments and properties tables into record models. Loading is
forgiving about values: dates that do not parse become ``None`` and are
screened out by the analysis, and negative amounts become ``None``. It is strict about structure: a missing
required column raises ``ValueError``.
"""

from __future__ import annotations

import logging
import math
import os
from datetime import date
from typing import IO, Dict, Iterable, List, Optional, Sequence, Union

import pandas as pd

from ..core.base import BenefitEnrollment, PropertyRecord, Resident

logger = logging.getLogger(__name__)

CsvSource = Union[str, os.PathLike, IO[str]]

RESIDENT_COLUMNS = ["resident_id", "lease_start_date"]
ENROLLMENT_COLUMNS = ["enrollment_id", "resident_id"]
PROPERTY_COLUMNS = ["property_id"]


def _normalize_columns(df: pd.DataFrame, required: Sequence[str], table: str) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"{table} data missing required columns: {missing}")
    return df


def _text(df: pd.DataFrame, column: str) -> List[Optional[str]]:
    if column not in df.columns:
        return [None] * len(df)
    out: List[Optional[str]] = []
    for v in df[column]:
        if pd.isna(v):
            out.append(None)
        else:
            s = str(v).strip()
            out.append(s or None)
    return out


def _dates(df: pd.DataFrame, column: str) -> List[Optional[date]]:
    if column not in df.columns:
        return [None] * len(df)
    parsed = pd.to_datetime(df[column], errors="coerce", format="ISO8601")
    return [None if pd.isna(v) else v.date() for v in parsed]


def _numbers(df: pd.DataFrame, column: str) -> List[Optional[float]]:
    """
    Non-negative amounts; anything else becomes ``None``.

    Rent, fees and unit counts are informational, so one bad value must not
    reject its row.
    """
    if column not in df.columns:
        return [None] * len(df)
    parsed = pd.to_numeric(df[column], errors="coerce")
    out: List[Optional[float]] = []
    rejected = 0
    for v in parsed:
        if pd.isna(v):
            out.append(None)
        elif not math.isfinite(v) or v < 0:
            rejected += 1
            out.append(None)
        else:
            out.append(float(v))
    if rejected:
        logger.warning(
            f"Treating {rejected} negative or non-finite value(s) in {column} as missing"
        )
    return out


def _read_csv(source: CsvSource) -> pd.DataFrame:
    # Keep identifiers as text ("P017" must not become a number)
    return pd.read_csv(source, dtype=str)


def residents_from_frame(df: pd.DataFrame) -> List[Resident]:
    """
    Build residents from a residents-table frame.

    Rows without a ``resident_id`` cannot be reported individually and are
    dropped with a warning.
    """
    df = _normalize_columns(df, RESIDENT_COLUMNS, "residents")
    rows = zip(
        _text(df, "resident_id"),
        _text(df, "property_id"),
        _dates(df, "lease_start_date"),
        _dates(df, "move_out_date"),
        _dates(df, "lease_end_date"),
        _numbers(df, "rent_amount"),
    )
    residents: List[Resident] = []
    missing_ids = 0
    for resident_id, property_id, start, move_out, lease_end, rent in rows:
        if resident_id is None:
            missing_ids += 1
            continue
        residents.append(
            Resident(
                resident_id=resident_id,
                property_id=property_id,
                lease_start_date=start,
                move_out_date=move_out,
                lease_end_date=lease_end,
                rent_amount=rent,
            )
        )
    if missing_ids:
        logger.warning(f"Dropped {missing_ids} resident row(s) without resident_id")
    logger.debug(f"Loaded {len(residents)} resident(s)")
    return residents


def enrollments_from_frame(df: pd.DataFrame) -> List[BenefitEnrollment]:
    """Build benefit enrollments from an enrollments-table frame."""
    df = _normalize_columns(df, ENROLLMENT_COLUMNS, "benefit_enrollments")
    rows = zip(
        _text(df, "enrollment_id"),
        _text(df, "resident_id"),
        _text(df, "benefit_type"),
        _dates(df, "enrollment_date"),
        _dates(df, "activation_date"),
        _dates(df, "cancellation_date"),
        _numbers(df, "monthly_fee"),
    )
    enrollments: List[BenefitEnrollment] = []
    for enrollment_id, resident_id, benefit, enrolled, activated, cancelled, fee in rows:
        if enrollment_id is None or resident_id is None:
            logger.warning(
                f"Dropped enrollment row with missing identifiers "
                f"(enrollment_id={enrollment_id}, resident_id={resident_id})"
            )
            continue
        enrollments.append(
            BenefitEnrollment(
                enrollment_id=enrollment_id,
                resident_id=resident_id,
                benefit_type=benefit,
                enrollment_date=enrolled,
                activation_date=activated,
                cancellation_date=cancelled,
                monthly_fee=fee,
            )
        )
    return enrollments


def properties_from_frame(df: pd.DataFrame) -> List[PropertyRecord]:
    """Build property records from a properties-table frame."""
    df = _normalize_columns(df, PROPERTY_COLUMNS, "properties")
    unit_counts = _numbers(df, "unit_count")
    rows = zip(
        _text(df, "property_id"),
        _text(df, "property_name"),
        _text(df, "city"),
        unit_counts,
        _text(df, "property_manager_name"),
        _dates(df, "onboarding_date"),
    )
    properties: List[PropertyRecord] = []
    for property_id, name, city, units, manager, onboarded in rows:
        if property_id is None:
            logger.warning("Dropped property row without property_id")
            continue
        properties.append(
            PropertyRecord(
                property_id=property_id,
                property_name=name,
                city=city,
                unit_count=int(units) if units is not None else None,
                property_manager_name=manager,
                onboarding_date=onboarded,
            )
        )
    return properties


def load_residents_csv(source: CsvSource) -> List[Resident]:
    """Load residents from a CSV path or file-like object."""
    return residents_from_frame(_read_csv(source))


def load_enrollments_csv(source: CsvSource) -> List[BenefitEnrollment]:
    """Load benefit enrollments from a CSV path or file-like object."""
    return enrollments_from_frame(_read_csv(source))


def load_properties_csv(source: CsvSource) -> List[PropertyRecord]:
    """Load properties from a CSV path or file-like object."""
    return properties_from_frame(_read_csv(source))


def city_lookup(properties: Iterable[PropertyRecord]) -> Dict[str, str]:
    """``property_id -> city`` for properties with a known city."""
    return {p.property_id: p.city for p in properties if p.city is not None}


def manager_lookup(properties: Iterable[PropertyRecord]) -> Dict[str, str]:
    """``property_id -> property_manager_name`` for managed properties."""
    return {
        p.property_id: p.property_manager_name
        for p in properties
        if p.property_manager_name is not None
    }
