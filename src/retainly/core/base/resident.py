# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from datetime import date
from typing import Optional

from ..primitives.model import Model
from ..primitives.types import PositiveFloat
from ..primitives.validation import validate_date_ordering


class Resident(Model):
    """
    A resident record from the portfolio snapshot.

    Dates are optional at the model level so that malformed rows survive
    loading and are screened out (and reported) by the analysis instead of
    aborting it. A missing ``move_out_date`` means the resident is still in
    place as of the snapshot.

    Attributes:
        resident_id: Unique identifier.
        property_id: Property the resident leases at. City and manager
            lookups are external joins.
        lease_start_date: Start of the lease; required by every analysis.
        move_out_date: Move-out date, ``None`` while still resident.
        lease_end_date: Contractual lease end (informational).
        rent_amount: Monthly rent (informational).
    """

    resident_id: str
    property_id: Optional[str] = None
    lease_start_date: Optional[date] = None
    move_out_date: Optional[date] = None
    lease_end_date: Optional[date] = None
    rent_amount: Optional[PositiveFloat] = None

    @property
    def is_active(self) -> bool:
        """True while no move-out has been observed."""
        return self.move_out_date is None

    @property
    def has_valid_dates(self) -> bool:
        """Lease start present and move-out (if any) not before it."""
        return self.lease_start_date is not None and validate_date_ordering(
            self.lease_start_date, self.move_out_date
        )
