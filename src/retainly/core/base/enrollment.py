# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from datetime import date
from typing import Optional

from ..primitives.model import Model
from ..primitives.types import PositiveFloat


class BenefitEnrollment(Model):
    """A resident's enrollment in one benefit of the package."""

    enrollment_id: str
    resident_id: str
    benefit_type: Optional[str] = None
    enrollment_date: Optional[date] = None
    activation_date: Optional[date] = None
    cancellation_date: Optional[date] = None
    monthly_fee: Optional[PositiveFloat] = None

    @property
    def is_activated(self) -> bool:
        return self.activation_date is not None

    @property
    def activation_days(self) -> Optional[int]:
        """Days from enrollment to activation, ``None`` if either is missing."""
        if self.activation_date is None or self.enrollment_date is None:
            return None
        return (self.activation_date - self.enrollment_date).days
