# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Record screening and the skipped-record side channel.

A single bad row must not stop the rest of the portfolio from being
reported: records without a lease start, or whose move-out precedes the
lease start, are dropped from every aggregate and listed in ``Diagnostics``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set, Tuple

from ..core.base import Resident
from ..core.primitives import SkipReasonEnum, validate_date_ordering
from .results import SkippedRecord

logger = logging.getLogger(__name__)


@dataclass
class Diagnostics:
    """
    Mutable collector for records excluded from a computation.

    One collector can be shared across several calls; a record reported
    twice for the same reason is listed once.
    """

    skipped: List[SkippedRecord] = field(default_factory=list)
    _seen: Set[Tuple[str, SkipReasonEnum]] = field(
        default_factory=set, repr=False, compare=False
    )

    def record(self, resident_id: str, reason: SkipReasonEnum) -> None:
        key = (resident_id, reason)
        if key in self._seen:
            return
        self._seen.add(key)
        self.skipped.append(SkippedRecord(resident_id=resident_id, reason=reason))
        logger.warning(f"Skipping resident {resident_id}: {reason.value}")

    @property
    def skipped_ids(self) -> List[str]:
        """Identifiers of skipped records in the order first reported."""
        ids: List[str] = []
        for rec in self.skipped:
            if rec.resident_id not in ids:
                ids.append(rec.resident_id)
        return ids

    def __len__(self) -> int:
        return len(self.skipped)


def skip_reason(resident: Resident) -> Optional[SkipReasonEnum]:
    """Why a record cannot be analysed, or ``None`` if it is usable."""
    if resident.lease_start_date is None:
        return SkipReasonEnum.MISSING_LEASE_START
    if not validate_date_ordering(resident.lease_start_date, resident.move_out_date):
        return SkipReasonEnum.MOVE_OUT_BEFORE_LEASE_START
    return None


def screen_residents(
    residents: Iterable[Resident],
    diagnostics: Optional[Diagnostics] = None,
) -> List[Resident]:
    """
    Keep usable records and report the rest.

    Args:
        residents: Resident snapshot (any iterable; consumed once)
        diagnostics: Collector for skipped records; when omitted, skips are
            only logged

    Returns:
        Usable residents in input order
    """
    if diagnostics is None:
        diagnostics = Diagnostics()

    kept: List[Resident] = []
    for resident in residents:
        reason = skip_reason(resident)
        if reason is None:
            kept.append(resident)
        else:
            diagnostics.record(resident.resident_id, reason)
    return kept
