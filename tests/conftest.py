# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Test utilities and fixtures for Retainly testing.

This module provides convenient utilities for creating residents,
enrollments and properties without spelling out every optional field.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

import pytest

from retainly.core.base import BenefitEnrollment, PropertyRecord, Resident


# Record Utilities
def make_resident(
    resident_id: str,
    lease_start: Optional[str],
    move_out: Optional[str] = None,
    property_id: Optional[str] = "P001",
    rent: Optional[float] = None,
) -> Resident:
    """
    Create a resident from ISO date strings.

    Example:
        >>> make_resident("R1", "2023-01-10").is_active
        True
    """
    return Resident(
        resident_id=resident_id,
        property_id=property_id,
        lease_start_date=date.fromisoformat(lease_start) if lease_start else None,
        move_out_date=date.fromisoformat(move_out) if move_out else None,
        rent_amount=rent,
    )


def make_enrollment(
    enrollment_id: str,
    resident_id: str,
    enrolled: str = "2023-01-10",
    activated: Optional[str] = None,
    benefit_type: str = "Renters Insurance",
) -> BenefitEnrollment:
    return BenefitEnrollment(
        enrollment_id=enrollment_id,
        resident_id=resident_id,
        benefit_type=benefit_type,
        enrollment_date=date.fromisoformat(enrolled),
        activation_date=date.fromisoformat(activated) if activated else None,
        monthly_fee=10.0,
    )


@pytest.fixture
def as_of_date() -> date:
    return date(2024, 7, 15)


@pytest.fixture
def portfolio() -> List[Resident]:
    """
    Small portfolio spanning three closed cohorts and the partial month.

    2023-01: 4 residents (1 active, churned after 0, 2 and 7 months)
    2023-06: 2 residents (1 active, churned after 12 months)
    2024-03: 2 residents (both active)
    2024-07: 1 resident (partial month as of 2024-07-15, no rent on record)
    """
    return [
        make_resident("R01", "2023-01-10", None, "P001", 1800.0),
        make_resident("R02", "2023-01-15", "2023-02-05", "P001", 1500.0),
        make_resident("R03", "2023-01-20", "2023-03-25", "P002", 1650.0),
        make_resident("R04", "2023-01-31", "2023-08-31", "P002", 1700.0),
        make_resident("R05", "2023-06-01", None, "P003", 2100.0),
        make_resident("R06", "2023-06-15", "2024-06-20", "P003", 2000.0),
        make_resident("R07", "2024-03-01", None, "P001", 1900.0),
        make_resident("R08", "2024-03-20", None, "P002", 1600.0),
        make_resident("R09", "2024-07-01", None, "P003"),
    ]


@pytest.fixture
def properties() -> List[PropertyRecord]:
    return [
        PropertyRecord(
            property_id="P001",
            property_name="Maple Court",
            city="Arlington",
            property_manager_name="Jordan Lee",
        ),
        PropertyRecord(
            property_id="P002",
            property_name="Oak Terrace",
            city="Alexandria",
            property_manager_name="Sam Ortiz",
        ),
        PropertyRecord(
            property_id="P003",
            property_name="Birch Commons",
            city="Washington DC",
            property_manager_name="Jordan Lee",
        ),
    ]


@pytest.fixture
def enrollments() -> List[BenefitEnrollment]:
    return [
        # R01: activated in 3 days, plus an unactivated second benefit
        make_enrollment("E01", "R01", "2023-01-10", "2023-01-13"),
        make_enrollment("E02", "R01", "2023-01-10", None, "Credit Building"),
        # R02: activated after 20 days
        make_enrollment("E03", "R02", "2023-01-15", "2023-02-04"),
        # R03: enrolled only
        make_enrollment("E04", "R03", "2023-01-20", None),
        # R05: three benefits, all activated within a week
        make_enrollment("E05", "R05", "2023-06-01", "2023-06-02"),
        make_enrollment("E06", "R05", "2023-06-01", "2023-06-05", "Credit Building"),
        make_enrollment("E07", "R05", "2023-06-01", "2023-06-08", "Air Filters"),
    ]
