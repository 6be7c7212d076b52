# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum


class TenureUnitEnum(str, Enum):
    """
    Unit in which elapsed tenure is measured.

    Both units truncate: a resident who moves out one day short of a full
    month has an elapsed tenure of 0 months.
    """

    MONTHS = "months"
    DAYS = "days"

    @classmethod
    def coerce(cls, value: "TenureUnitEnum | str") -> "TenureUnitEnum":
        """Accept either an enum member or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(
                f"Unknown tenure unit {value!r}. Valid units: {valid}"
            ) from None


class SkipReasonEnum(str, Enum):
    """
    Why a resident record was excluded from cohort and survival computations.

    Attributes:
        MISSING_LEASE_START: Record has no lease start date.
        MOVE_OUT_BEFORE_LEASE_START: Move-out date precedes lease start date.
    """

    MISSING_LEASE_START = "Missing Lease Start"
    MOVE_OUT_BEFORE_LEASE_START = "Move-out Before Lease Start"


class ActivationStatusEnum(str, Enum):
    """Benefit activation status of a resident across all enrollments."""

    NO_BENEFITS = "No Benefits"
    ENROLLED_ONLY = "Enrolled Only (0% activated)"
    PARTIAL = "Partial Activation"
    FULL = "Full Activation"


class ResidentStatusEnum(str, Enum):
    """Snapshot status: churned once a move-out date is on record."""

    CHURNED = "Churned"
    RETAINED = "Retained"
