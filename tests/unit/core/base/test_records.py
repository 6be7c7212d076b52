# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from datetime import date

import pytest
from pydantic import ValidationError

from retainly.core.base import BenefitEnrollment, PropertyRecord, Resident


def test_resident_active_without_move_out():
    r = Resident(resident_id="R1", lease_start_date=date(2023, 1, 10))
    assert r.is_active
    assert r.has_valid_dates


def test_resident_allows_malformed_dates():
    """Malformed rows must load so screening can report them."""
    missing = Resident(resident_id="R2")
    inverted = Resident(
        resident_id="R3",
        lease_start_date=date(2023, 5, 1),
        move_out_date=date(2023, 4, 1),
    )
    assert not missing.has_valid_dates
    assert not inverted.has_valid_dates
    assert not inverted.is_active


def test_resident_requires_id():
    with pytest.raises(ValidationError):
        Resident(lease_start_date=date(2023, 1, 1))


def test_enrollment_activation_days():
    e = BenefitEnrollment(
        enrollment_id="E1",
        resident_id="R1",
        enrollment_date=date(2023, 1, 10),
        activation_date=date(2023, 1, 17),
    )
    assert e.is_activated
    assert e.activation_days == 7

    pending = BenefitEnrollment(enrollment_id="E2", resident_id="R1")
    assert not pending.is_activated
    assert pending.activation_days is None


def test_property_record_minimal():
    p = PropertyRecord(property_id="P017")
    assert p.city is None
