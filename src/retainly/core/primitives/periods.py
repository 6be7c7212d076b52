# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Monthly period helpers for cohort keys and runway checks.

Cohorts are keyed by monthly ``pd.Period`` values so they sort naturally and
render as ``YYYY-MM``.
"""

from __future__ import annotations

from datetime import date
from typing import Union

import pandas as pd
from dateutil.relativedelta import relativedelta


def cohort_month(d: Union[date, pd.Timestamp, pd.Period]) -> pd.Period:
    """Truncate a date to its monthly period."""
    if isinstance(d, pd.Period):
        if d.freqstr != "M":
            return pd.Period(d.to_timestamp(), freq="M")
        return d
    return pd.Period(d, freq="M")


def period_start(period: pd.Period) -> date:
    """First calendar day of a monthly period."""
    return date(period.year, period.month, 1)


def whole_months_between(start: date, end: date) -> int:
    """
    Number of complete calendar months from ``start`` to ``end``.

    A month is complete once ``end`` reaches the start's day of month; there
    is no end-of-month clamping. So 2023-01-31 to 2023-02-28 is 0 months and
    2023-01-15 to 2023-02-20 is 1 month. Truncates toward zero when ``end``
    precedes ``start``.
    """
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if months > 0 and end.day < start.day:
        months -= 1
    elif months < 0 and end.day > start.day:
        months += 1
    return months


def has_runway(
    cohort: Union[date, pd.Period], as_of_date: date, months: int
) -> bool:
    """
    Whether a cohort has been observable for at least ``months`` months.

    A cohort qualifies when the first day of its month falls on or before
    ``as_of_date`` minus ``months`` calendar months.
    """
    first_day = period_start(cohort_month(cohort))
    return first_day <= as_of_date - relativedelta(months=months)


def format_period(period: pd.Period) -> str:
    """Render a monthly period as ``YYYY-MM``."""
    return period.strftime("%Y-%m")
