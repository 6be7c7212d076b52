# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Reusable validation utilities for analysis configuration.

Checkpoint and offset lists are configuration, not data: a bad list is a
programmer error and fails fast with ``ValueError`` instead of producing a
misleading report.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence


def validate_ascending(values: Sequence[int], field_name: str = "values") -> List[int]:
    """
    Validate a checkpoint/offset list.

    Args:
        values: Sequence of non-negative integers
        field_name: Name of the field for error messages

    Returns:
        The values as a list (unchanged order)

    Raises:
        ValueError: If the sequence is empty, contains negatives or
            non-integers, or is not strictly ascending

    Example:
        ```python
        validate_ascending([1, 3, 6, 9, 12], "checkpoints")  # OK
        validate_ascending([3, 1], "checkpoints")  # Raises ValueError
        ```
    """
    if values is None:
        raise ValueError(f"{field_name} must be provided")
    items = list(values)
    if not items:
        raise ValueError(f"{field_name} must not be empty")

    for v in items:
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError(
                f"{field_name} must contain integers, got {type(v).__name__} ({v!r})"
            )
        if v < 0:
            raise ValueError(f"{field_name} must be non-negative, got {v}")

    for prev, curr in zip(items, items[1:]):
        if curr <= prev:
            raise ValueError(
                f"{field_name} must be strictly ascending, got {prev} followed by {curr}"
            )
    return items


def validate_non_negative(value: int, field_name: str = "value") -> int:
    """Validate a single non-negative integer parameter."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{field_name} must be non-negative, got {value}")
    return value


def validate_date_ordering(
    start: Optional[date], end: Optional[date], allow_equal: bool = True
) -> bool:
    """
    Check that ``end`` does not precede ``start``.

    Missing values are treated as ordered; completeness is checked separately.
    """
    if start is None or end is None:
        return True
    return end >= start if allow_equal else end > start
