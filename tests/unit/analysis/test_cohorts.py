# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from datetime import date

import pandas as pd
import pytest

from retainly.analysis import (
    Diagnostics,
    aggregate_cohorts,
    cohort_churn,
    retention_by_city,
    retention_by_period,
)
from retainly.core.primitives import PeriodBucket
from tests.conftest import make_resident

CHECKPOINTS = [1, 3, 6, 9, 12]


class TestAggregateCohorts:
    def test_two_resident_scenario(self):
        """One active resident and one who left after about a month."""
        residents = [
            make_resident("A", "2023-01-10"),
            make_resident("B", "2023-01-15", "2023-02-20"),
        ]
        summaries = aggregate_cohorts(residents, [1, 3], date(2024, 1, 1))

        assert len(summaries) == 1
        jan = summaries[0]
        assert jan.cohort_label == "2023-01"
        assert jan.cohort_size == 2
        assert jan.retention_at == {1: 100.0, 3: 50.0}

    def test_portfolio_table(self, portfolio, as_of_date):
        summaries = aggregate_cohorts(portfolio, CHECKPOINTS, as_of_date)

        assert [s.cohort_label for s in summaries] == ["2023-01", "2023-06", "2024-03"]
        assert [s.cohort_size for s in summaries] == [4, 2, 2]
        assert summaries[0].retention_at == {1: 75.0, 3: 50.0, 6: 50.0, 9: 25.0, 12: 25.0}
        assert summaries[1].retention_at == {c: 100.0 for c in CHECKPOINTS}
        assert summaries[2].retention_at == {c: 100.0 for c in CHECKPOINTS}

    def test_partial_month_cohort_is_excluded(self, portfolio, as_of_date):
        summaries = aggregate_cohorts(portfolio, CHECKPOINTS, as_of_date)
        assert pd.Period("2024-07", freq="M") not in [s.cohort_month for s in summaries]

    def test_future_cohorts_are_excluded(self):
        residents = [make_resident("F", "2025-01-01")]
        assert aggregate_cohorts(residents, [1], date(2024, 7, 15)) == []

    def test_retention_is_monotonic(self, portfolio, as_of_date):
        for summary in aggregate_cohorts(portfolio, CHECKPOINTS, as_of_date):
            values = [summary.retention_at[c] for c in CHECKPOINTS]
            assert values == sorted(values, reverse=True)

    def test_active_residents_retained_at_any_checkpoint(self):
        residents = [make_resident("A", "2020-01-01")]
        summaries = aggregate_cohorts(residents, [1, 120, 100_000], date(2024, 1, 1))
        assert summaries[0].retention_at == {1: 100.0, 120: 100.0, 100_000: 100.0}

    def test_runway_filter(self, portfolio, as_of_date):
        summaries = aggregate_cohorts(
            portfolio, CHECKPOINTS, as_of_date, min_runway_checkpoint=12
        )
        assert [s.cohort_label for s in summaries] == ["2023-01", "2023-06"]

    def test_empty_input(self, as_of_date):
        assert aggregate_cohorts([], CHECKPOINTS, as_of_date) == []

    def test_malformed_records_are_skipped_and_reported(self, as_of_date):
        residents = [
            make_resident("OK", "2023-01-10"),
            make_resident("NO_START", None),
            make_resident("INVERTED", "2023-01-20", "2023-01-05"),
        ]
        diagnostics = Diagnostics()
        summaries = aggregate_cohorts(
            residents, [1], as_of_date, diagnostics=diagnostics
        )
        assert summaries[0].cohort_size == 1
        assert diagnostics.skipped_ids == ["NO_START", "INVERTED"]

    @pytest.mark.parametrize("checkpoints", [[], [3, 1], [1, 1], [-1]])
    def test_invalid_checkpoints_fail_fast(self, portfolio, as_of_date, checkpoints):
        with pytest.raises(ValueError):
            aggregate_cohorts(portfolio, checkpoints, as_of_date)

    def test_negative_runway_fails_fast(self, portfolio, as_of_date):
        with pytest.raises(ValueError):
            aggregate_cohorts(portfolio, [1], as_of_date, min_runway_checkpoint=-1)

    def test_idempotent(self, portfolio, as_of_date):
        first = aggregate_cohorts(portfolio, CHECKPOINTS, as_of_date)
        second = aggregate_cohorts(portfolio, CHECKPOINTS, as_of_date)
        assert first == second

    def test_end_of_month_lease_short_of_a_month_is_churned_at_m1(self):
        residents = [
            make_resident("A", "2023-01-31", "2023-02-28"),
            make_resident("B", "2023-01-31", "2023-03-01"),
        ]
        summaries = aggregate_cohorts(residents, [1, 2], date(2024, 1, 1))
        assert summaries[0].retention_at == {1: 50.0, 2: 0.0}

    def test_half_point_rounds_away_from_zero(self):
        # 7 of 16 retained -> 43.75
        residents = [make_resident(f"R{i}", "2023-01-01") for i in range(7)]
        residents += [make_resident(f"C{i}", "2023-01-01", "2023-01-10") for i in range(9)]
        summaries = aggregate_cohorts(residents, [1], date(2024, 1, 1), places=1)
        assert summaries[0].retention_at[1] == 43.8


class TestCohortChurn:
    def test_churn_by_checkpoint(self, portfolio, as_of_date):
        summaries = cohort_churn(portfolio, [3, 6, 12], as_of_date)

        assert [s.cohort_label for s in summaries] == ["2023-01", "2023-06"]
        assert summaries[0].churn_by == {3: 50.0, 6: 50.0, 12: 75.0}
        assert summaries[1].churn_by == {3: 0.0, 6: 0.0, 12: 0.0}

    def test_churn_by_12_excludes_cohorts_within_12_months(self, as_of_date):
        residents = [
            make_resident("OLD", "2023-07-01", "2023-08-15"),
            make_resident("NEW", "2023-08-01", "2023-08-15"),
        ]
        summaries = cohort_churn(residents, [12], as_of_date)
        assert [s.cohort_label for s in summaries] == ["2023-07"]

    def test_explicit_runway(self, portfolio, as_of_date):
        summaries = cohort_churn(portfolio, [3, 6, 12], as_of_date, runway_checkpoint=3)
        assert [s.cohort_label for s in summaries] == ["2023-01", "2023-06", "2024-03"]

    def test_churn_complements_retention(self, portfolio, as_of_date):
        retention = aggregate_cohorts(portfolio, [3, 6, 12], as_of_date, min_runway_checkpoint=12)
        churn = cohort_churn(portfolio, [3, 6, 12], as_of_date)
        for r, c in zip(retention, churn):
            for checkpoint in (3, 6, 12):
                assert r.retention_at[checkpoint] + c.churn_by[checkpoint] == pytest.approx(100.0)


class TestGroupedRetention:
    def test_retention_by_city(self, portfolio, properties, as_of_date):
        lookup = {p.property_id: p.city for p in properties}
        summaries = retention_by_city(portfolio, [6, 12], as_of_date, lookup)

        assert [s.group for s in summaries] == ["Washington DC", "Arlington", "Alexandria"]
        by_city = {s.group: s for s in summaries}
        assert by_city["Arlington"].retention_at == {6: 50.0, 12: 50.0}
        assert by_city["Alexandria"].retention_at == {6: 50.0, 12: 0.0}
        assert by_city["Washington DC"].group_size == 2

    def test_retention_by_city_accepts_callable_lookup(self, portfolio, as_of_date):
        summaries = retention_by_city(
            portfolio, [12], as_of_date, lambda pid: "Everywhere" if pid != "P002" else None
        )
        assert [s.group for s in summaries] == ["Everywhere"]
        assert summaries[0].group_size == 4

    def test_unknown_properties_are_excluded(self, portfolio, as_of_date):
        summaries = retention_by_city(portfolio, [12], as_of_date, {"P001": "Arlington"})
        assert [s.group for s in summaries] == ["Arlington"]

    def test_retention_by_period(self, portfolio, as_of_date):
        buckets = [
            PeriodBucket(label="H1 2023", start=date(2023, 1, 1), end=date(2023, 6, 30)),
            PeriodBucket(label="2024", start=date(2024, 1, 1), end=date(2024, 12, 31)),
            PeriodBucket(label="Empty", start=date(2020, 1, 1), end=date(2020, 12, 31)),
        ]
        summaries = retention_by_period(portfolio, [3, 6], as_of_date, buckets)

        assert [s.group for s in summaries] == ["H1 2023", "2024"]
        assert summaries[0].group_size == 6
        assert summaries[0].retention_at == {3: 66.7, 6: 66.7}
        # July 2024 is the partial month and stays out
        assert summaries[1].group_size == 2
