# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
DataFrame builders for retention outputs.

Column names follow the dashboard extracts: ``cohort``, ``cohort_size``,
``retention_m{c}``, ``churn_by_m{c}``, ``days_since_lease_start``,
``total_residents``, ``still_active``, ``retention_pct``,
``churn_rate_pct``, ``avg_rent``. Row order is the order of the input
sequence.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

import pandas as pd

from ..analysis.results import (
    CohortChurnSummary,
    CohortSummary,
    GroupRetentionSummary,
    ManagerChurnSummary,
    PropertyChurnSummary,
    RentSummary,
    SegmentChurnSummary,
    SkippedRecord,
    SurvivalPoint,
)


def _checkpoint_columns(prefix: str, values: Dict[int, float]) -> Dict[str, float]:
    return {f"{prefix}{c}": pct for c, pct in sorted(values.items())}


def cohort_retention_table(summaries: Sequence[CohortSummary]) -> pd.DataFrame:
    """One row per cohort: ``cohort``, ``cohort_size``, ``retention_m{c}``..."""
    rows = [
        {
            "cohort": s.cohort_label,
            "cohort_size": s.cohort_size,
            **_checkpoint_columns("retention_m", s.retention_at),
        }
        for s in summaries
    ]
    return pd.DataFrame(rows, columns=_columns(rows, ["cohort", "cohort_size"]))


def cohort_churn_table(summaries: Sequence[CohortChurnSummary]) -> pd.DataFrame:
    """One row per cohort: ``cohort``, ``cohort_size``, ``churn_by_m{c}``..."""
    rows = [
        {
            "cohort": s.cohort_label,
            "cohort_size": s.cohort_size,
            **_checkpoint_columns("churn_by_m", s.churn_by),
        }
        for s in summaries
    ]
    return pd.DataFrame(rows, columns=_columns(rows, ["cohort", "cohort_size"]))


def group_retention_table(
    summaries: Sequence[GroupRetentionSummary], group_column: str = "group"
) -> pd.DataFrame:
    """One row per group: ``<group_column>``, ``total_residents``, ``retention_m{c}``..."""
    rows = [
        {
            group_column: s.group,
            "total_residents": s.group_size,
            **_checkpoint_columns("retention_m", s.retention_at),
        }
        for s in summaries
    ]
    return pd.DataFrame(rows, columns=_columns(rows, [group_column, "total_residents"]))


def survival_curve_table(points: Sequence[SurvivalPoint]) -> pd.DataFrame:
    """
    One row per offset. ``retention_pct`` is NaN where the curve is undefined.
    """
    rows = [
        {
            "days_since_lease_start": p.day_offset,
            "total_residents": p.eligible_count,
            "still_active": p.still_active_count,
            "retention_pct": p.retention_pct,
        }
        for p in points
    ]
    columns = ["days_since_lease_start", "total_residents", "still_active", "retention_pct"]
    df = pd.DataFrame(rows, columns=columns)
    df["retention_pct"] = df["retention_pct"].astype(float)
    return df


def segment_churn_table(
    summaries: Sequence[SegmentChurnSummary], segment_column: str = "segment"
) -> pd.DataFrame:
    """One row per segment: ``<segment_column>``, ``total_residents``, ``churned``, ``churn_rate_pct``."""
    columns = [segment_column, "total_residents", "churned", "churn_rate_pct"]
    rows = [
        {
            segment_column: s.segment,
            "total_residents": s.total_residents,
            "churned": s.churned,
            "churn_rate_pct": s.churn_rate_pct,
        }
        for s in summaries
    ]
    return pd.DataFrame(rows, columns=columns)


def property_churn_table(summaries: Sequence[PropertyChurnSummary]) -> pd.DataFrame:
    """Per-property churn with property details and ``avg_rent``."""
    columns = [
        "property_id",
        "property_name",
        "city",
        "property_manager_name",
        "total_residents",
        "churned",
        "churn_rate_pct",
        "avg_rent",
    ]
    rows = [
        {
            "property_id": s.segment,
            "property_name": s.property_name,
            "city": s.city,
            "property_manager_name": s.property_manager_name,
            "total_residents": s.total_residents,
            "churned": s.churned,
            "churn_rate_pct": s.churn_rate_pct,
            "avg_rent": s.avg_rent,
        }
        for s in summaries
    ]
    return pd.DataFrame(rows, columns=columns)


def manager_churn_table(summaries: Sequence[ManagerChurnSummary]) -> pd.DataFrame:
    columns = [
        "property_manager_name",
        "properties_managed",
        "total_residents",
        "churned",
        "churn_rate_pct",
    ]
    rows = [
        {
            "property_manager_name": s.segment,
            "properties_managed": s.properties_managed,
            "total_residents": s.total_residents,
            "churned": s.churned,
            "churn_rate_pct": s.churn_rate_pct,
        }
        for s in summaries
    ]
    return pd.DataFrame(rows, columns=columns)


def rent_by_status_table(summaries: Sequence[RentSummary]) -> pd.DataFrame:
    """``status``, ``total_residents``, ``avg_rent``, ``min_rent``, ``max_rent``."""
    columns = ["status", "total_residents", "avg_rent", "min_rent", "max_rent"]
    rows = [
        {
            "status": s.status.value,
            "total_residents": s.total_residents,
            "avg_rent": s.avg_rent,
            "min_rent": s.min_rent,
            "max_rent": s.max_rent,
        }
        for s in summaries
    ]
    return pd.DataFrame(rows, columns=columns)


def skipped_records_table(skipped: Sequence[SkippedRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"resident_id": s.resident_id, "reason": s.reason.value} for s in skipped],
        columns=["resident_id", "reason"],
    )


def move_outs_table(counts: Dict[int, int]) -> pd.DataFrame:
    """``move_out_month`` (1-12), ``month_name``, ``move_outs``."""
    rows = [
        {
            "move_out_month": month,
            "month_name": pd.Timestamp(year=2000, month=month, day=1).strftime("%B"),
            "move_outs": n,
        }
        for month, n in sorted(counts.items())
    ]
    return pd.DataFrame(rows, columns=["move_out_month", "month_name", "move_outs"])


def _columns(rows: List[dict], leading: List[str]) -> List[str]:
    """Leading columns followed by checkpoint columns in first-row order."""
    if not rows:
        return leading
    return leading + [c for c in rows[0] if c not in leading]
