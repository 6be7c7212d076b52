# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tenure Calculator

Derives how long a resident stayed before moving out. Residents without a
move-out date get an explicit ``Active`` value instead of a large numeric
stand-in, so "still resident" can never be confused with a real duration or
leak into arithmetic.

Ordering rules:
    - ``Churned`` values order by elapsed time
    - ``Active`` orders above every ``Churned`` value and every integer
    - Both compare directly against plain integers, so a checkpoint test
      reads ``tenure >= 3`` and counts active residents as retained
    - Equality agrees with the ordering: ``Churned(3) == 3``, and tenures in
      different units are never equal
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Literal, Optional, Tuple, Union

from ..core.base import Resident
from ..core.primitives import Model, TenureUnitEnum, whole_months_between


class Tenure(Model, ABC):
    """Base class for tenure values. Compare with ints or other tenures."""

    unit: TenureUnitEnum

    @property
    @abstractmethod
    def is_active(self) -> bool:
        """True when no churn has been observed."""

    @property
    @abstractmethod
    def elapsed(self) -> Optional[int]:
        """Elapsed units until churn, ``None`` for active residents."""

    @abstractmethod
    def _rank(self) -> Tuple[int, int]:
        pass

    def _other_rank(self, other: object) -> Optional[Tuple[int, int]]:
        if isinstance(other, Tenure):
            if other.unit != self.unit:
                raise ValueError(
                    f"Cannot compare tenure in {self.unit.value} with tenure in {other.unit.value}"
                )
            return other._rank()
        if isinstance(other, int) and not isinstance(other, bool):
            return (0, other)
        return None

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Tenure) and other.unit != self.unit:
            return False
        rank = self._other_rank(other)
        if rank is None:
            return NotImplemented
        return self._rank() == rank

    def __hash__(self) -> int:
        # Churned(n) == n, so both must hash alike
        if self.is_active:
            return hash(("active", self.unit))
        return hash(self.elapsed)

    def __lt__(self, other: object) -> bool:
        rank = self._other_rank(other)
        if rank is None:
            return NotImplemented
        return self._rank() < rank

    def __le__(self, other: object) -> bool:
        rank = self._other_rank(other)
        if rank is None:
            return NotImplemented
        return self._rank() <= rank

    def __gt__(self, other: object) -> bool:
        rank = self._other_rank(other)
        if rank is None:
            return NotImplemented
        return self._rank() > rank

    def __ge__(self, other: object) -> bool:
        rank = self._other_rank(other)
        if rank is None:
            return NotImplemented
        return self._rank() >= rank

    def reaches(self, threshold: int) -> bool:
        """Retained at a checkpoint: active, or elapsed >= threshold."""
        return self >= threshold

    def exceeds(self, threshold: int) -> bool:
        """Still in place after ``threshold`` units: active, or elapsed > threshold."""
        return self > threshold


class Active(Tenure):
    """No churn observed yet; conceptually infinite tenure."""

    kind: Literal["active"] = "active"

    @property
    def is_active(self) -> bool:
        return True

    @property
    def elapsed(self) -> Optional[int]:
        return None

    def _rank(self) -> Tuple[int, int]:
        return (1, 0)

    def __str__(self) -> str:
        return "Active"


class Churned(Tenure):
    """
    Moved out after ``elapsed`` whole units.

    ``elapsed`` can be negative when the move-out precedes the lease start;
    screening keeps such records out of the aggregates.
    """

    kind: Literal["churned"] = "churned"
    elapsed_units: int

    @property
    def is_active(self) -> bool:
        return False

    @property
    def elapsed(self) -> Optional[int]:
        return self.elapsed_units

    def _rank(self) -> Tuple[int, int]:
        return (0, self.elapsed_units)

    def __str__(self) -> str:
        return f"Churned({self.elapsed_units} {self.unit.value})"


def tenure(
    lease_start: date,
    move_out: Optional[date],
    unit: Union[TenureUnitEnum, str],
) -> Tenure:
    """
    Elapsed time from lease start to move-out, or ``Active``.

    Args:
        lease_start: Lease start date
        move_out: Move-out date, ``None`` while still resident
        unit: ``TenureUnitEnum.MONTHS`` (whole calendar months, truncated)
            or ``TenureUnitEnum.DAYS``

    Returns:
        ``Active(unit)`` when ``move_out`` is ``None``, otherwise
        ``Churned(elapsed)``. Ordering is not re-validated.

    Raises:
        ValueError: If ``unit`` is not a known tenure unit

    Example:
        ```python
        tenure(date(2023, 1, 15), date(2023, 2, 20), "months")  # Churned(1 months)
        tenure(date(2023, 1, 15), None, "days") >= 10_000         # True
        ```
    """
    unit = TenureUnitEnum.coerce(unit)
    if move_out is None:
        return Active(unit=unit)
    if unit == TenureUnitEnum.MONTHS:
        elapsed = whole_months_between(lease_start, move_out)
    else:
        elapsed = (move_out - lease_start).days
    return Churned(unit=unit, elapsed_units=elapsed)


def resident_tenure(
    resident: Resident, unit: Union[TenureUnitEnum, str]
) -> Tenure:
    """Tenure of a screened resident (lease start must be present)."""
    if resident.lease_start_date is None:
        raise ValueError(
            f"Resident {resident.resident_id} has no lease_start_date; screen records first"
        )
    return tenure(resident.lease_start_date, resident.move_out_date, unit)
