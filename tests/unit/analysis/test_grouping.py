# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from datetime import date

import pandas as pd
import pytest

from retainly.analysis import (
    city_key,
    cohort_key,
    period_key,
    property_key,
    property_manager_key,
    retention_by_group,
)
from retainly.analysis.grouping import group_residents, retention_counts, safe_pct
from retainly.core.primitives import PeriodBucket
from tests.conftest import make_resident


def test_group_residents_drops_none_keys(portfolio):
    groups = group_residents(portfolio, city_key({"P001": "Arlington"}))
    assert list(groups) == ["Arlington"]
    assert [r.resident_id for r in groups["Arlington"]] == ["R01", "R02", "R07"]


def test_retention_counts():
    members = [
        make_resident("A", "2023-01-10"),
        make_resident("B", "2023-01-15", "2023-02-20"),
        make_resident("C", "2023-01-15", "2023-01-20"),
    ]
    assert retention_counts(members, [0, 1, 3]) == {0: 3, 1: 2, 3: 1}


def test_safe_pct_rejects_empty_groups():
    assert safe_pct(1, 3, 1, "g") == 33.3
    with pytest.raises(RuntimeError, match="Internal error"):
        safe_pct(0, 0, 1, "g")


def test_retention_by_cohort_key(portfolio):
    summaries = retention_by_group(portfolio, [1, 12], cohort_key)

    assert [s.group for s in summaries] == [
        pd.Period("2023-01", freq="M"),
        pd.Period("2023-06", freq="M"),
        pd.Period("2024-03", freq="M"),
        pd.Period("2024-07", freq="M"),
    ]
    assert summaries[0].retention_at == {1: 75.0, 12: 25.0}


def test_retention_by_property_key(portfolio):
    summaries = retention_by_group(portfolio, [6], property_key)
    assert {s.group: s.group_size for s in summaries} == {"P001": 3, "P002": 3, "P003": 3}


def test_retention_by_group_validates_checkpoints(portfolio):
    with pytest.raises(ValueError):
        retention_by_group(portfolio, [6, 3], property_key)


def test_city_key_rejects_bad_lookup():
    with pytest.raises(ValueError, match="mapping or callable"):
        city_key(42)


def test_property_manager_key():
    key = property_manager_key(lambda pid: "Jordan Lee" if pid == "P001" else None)
    assert key(make_resident("A", "2023-01-01", property_id="P001")) == "Jordan Lee"
    assert key(make_resident("B", "2023-01-01", property_id="P002")) is None
    with pytest.raises(ValueError, match="property manager lookup"):
        property_manager_key([("P001", "Jordan Lee")])


def test_city_key_without_property():
    key = city_key({"P001": "Arlington"})
    assert key(make_resident("X", "2023-01-01", property_id=None)) is None


def test_period_key_first_matching_bucket_wins():
    buckets = [
        PeriodBucket(label="Year 1", start=date(2022, 7, 1), end=date(2023, 6, 30)),
        PeriodBucket(label="Overlap", start=date(2023, 1, 1), end=date(2023, 12, 31)),
    ]
    key = period_key(buckets)
    assert key(make_resident("A", "2023-03-31")) == "Year 1"
    assert key(make_resident("B", "2023-07-02")) == "Overlap"
    assert key(make_resident("C", "2024-01-01")) is None


def test_period_key_uses_cohort_month():
    # A lease starting mid-month belongs to a bucket starting on the 1st
    bucket = PeriodBucket(label="June", start=date(2023, 6, 1), end=date(2023, 6, 1))
    assert period_key([bucket])(make_resident("A", "2023-06-28")) == "June"
