# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from datetime import date

import pytest

from retainly.analysis import default_day_offsets, survival_curve
from tests.conftest import make_resident

OFFSETS = list(range(0, 361, 30))


def test_default_day_offsets():
    assert default_day_offsets() == OFFSETS
    assert default_day_offsets(60, 20) == [0, 20, 40, 60]
    with pytest.raises(ValueError):
        default_day_offsets(360, 0)


def test_three_resident_scenario():
    """Tenures of 10 days, 40 days and one still active."""
    residents = [
        make_resident("A", "2022-01-01", "2022-01-11"),
        make_resident("B", "2022-01-01", "2022-02-10"),
        make_resident("C", "2022-01-01"),
    ]
    points = survival_curve(residents, [0, 30], date(2024, 1, 1))

    assert [p.retention_pct for p in points] == [100.0, 66.7]
    assert [p.still_active_count for p in points] == [3, 2]
    assert all(p.eligible_count == 3 for p in points)


def test_portfolio_curve(portfolio, as_of_date):
    points = survival_curve(portfolio, OFFSETS, as_of_date)
    by_offset = {p.day_offset: p.retention_pct for p in points}

    assert by_offset[0] == 100.0
    assert by_offset[30] == by_offset[60] == 83.3
    assert by_offset[90] == by_offset[210] == 66.7
    assert by_offset[240] == by_offset[360] == 50.0
    assert {p.eligible_count for p in points} == {6}


def test_curve_is_non_increasing(portfolio, as_of_date):
    points = survival_curve(portfolio, OFFSETS, as_of_date)
    counts = [p.still_active_count for p in points]
    assert counts == sorted(counts, reverse=True)


def test_recent_move_ins_are_not_eligible():
    residents = [
        make_resident("OLD", "2023-01-01", "2023-01-05"),
        make_resident("NEW", "2024-06-01"),
    ]
    points = survival_curve(residents, [0, 30], date(2024, 7, 15))
    assert points[0].eligible_count == 1
    assert points[1].retention_pct == 0.0


def test_eligibility_is_inclusive_of_cutoff():
    # 2024-07-15 minus 365 days is 2023-07-16
    residents = [make_resident("EDGE", "2023-07-16")]
    points = survival_curve(residents, [0], date(2024, 7, 15))
    assert points[0].eligible_count == 1


def test_no_eligible_residents_yields_undefined_points():
    residents = [make_resident("NEW", "2024-06-01")]
    points = survival_curve(residents, [0, 30], date(2024, 7, 15))
    assert [p.retention_pct for p in points] == [None, None]
    assert [p.eligible_count for p in points] == [0, 0]


def test_min_age_zero_includes_everyone(portfolio, as_of_date):
    points = survival_curve(portfolio, [0], as_of_date, min_age_days=0)
    assert points[0].eligible_count == 9


@pytest.mark.parametrize("offsets", [[], [30, 0], [0, 0]])
def test_invalid_offsets(portfolio, as_of_date, offsets):
    with pytest.raises(ValueError):
        survival_curve(portfolio, offsets, as_of_date)


def test_negative_min_age(portfolio, as_of_date):
    with pytest.raises(ValueError):
        survival_curve(portfolio, [0], as_of_date, min_age_days=-1)
