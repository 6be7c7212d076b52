# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Percentage arithmetic with a fixed rounding mode.

Percentages are computed exactly in ``decimal`` and rounded half away from
zero (``ROUND_HALF_UP``), so 12.25 becomes 12.3 and never 12.2.
"""

from __future__ import annotations

import decimal
from decimal import ROUND_HALF_UP, Decimal

_HUNDRED = Decimal(100)


def round_half_up(value: Decimal, places: int = 1) -> float:
    """Round a decimal half away from zero to ``places`` decimals."""
    quantum = Decimal(1).scaleb(-places)
    return float(value.quantize(quantum, rounding=ROUND_HALF_UP))


def round_pct(numerator: int, denominator: int, places: int = 1) -> float:
    """
    ``numerator / denominator * 100`` rounded half away from zero.

    Raises:
        ZeroDivisionError: If ``denominator`` is zero
    """
    if denominator == 0:
        raise ZeroDivisionError("percentage denominator is zero")
    with decimal.localcontext() as ctx:
        ctx.prec = 28
        value = Decimal(numerator) * _HUNDRED / Decimal(denominator)
        return round_half_up(value, places)
