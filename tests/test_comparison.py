"""
Tests for analytics/comparison.py -- quarterly and annual comparison strategies.
"""
import pytest

from analytics.comparison import (
    AnnualComparator,
    ComparisonResult,
    QuarterlyComparator,
    chronological_points,
    comparator_for,
    compare_annual,
    compare_quarterly,
    make_result,
)
from analytics.diagnosis import Diagnosis
from analytics.store import TimeSeriesStore


# ── make_result ───────────────────────────────────────────────────────────────

class TestMakeResult:
    def test_both_present(self):
        r = make_result(200.0, 150.0)
        assert r.delta == -50.0
        assert r.relative_change_pct == -25.0
        assert r.diagnosis is Diagnosis.RED

    def test_delta_absent_when_a_period_is_missing(self):
        assert make_result(None, 10.0).delta is None
        assert make_result(10.0, None).delta is None
        assert make_result(None, None).diagnosis is Diagnosis.YELLOW

    def test_zero_prior_keeps_delta_but_no_pct(self):
        r = make_result(0.0, 25.0)
        assert r.delta == 25.0
        assert r.relative_change_pct is None
        assert r.diagnosis is Diagnosis.YELLOW

    def test_to_dict(self):
        d = make_result(100.0, 105.0).to_dict()
        assert d == {
            "prior_period": 100.0,
            "current_period": 105.0,
            "delta": 5.0,
            "relative_change_pct": 5.0,
            "diagnosis": "green",
            "current_provisional_quarter": None,
        }


# ── Quarterly strategy ────────────────────────────────────────────────────────

class TestQuarterly:
    def test_last_two_reported_quarters(self, sample_store):
        r = compare_quarterly(sample_store, "PIT", [2024, 2025])
        assert r.current_period == 150.0
        assert r.prior_period == 125.0
        assert r.delta == 25.0
        assert r.diagnosis is Diagnosis.RED
        assert r.current_provisional_quarter is None

    def test_crosses_year_boundary(self, make_store):
        store = make_store({
            (2024, "Q4", "VAT"): 100.0,
            (2025, "Q1", "VAT"): 105.0,
        })
        r = compare_quarterly(store, "VAT", [2024, 2025])
        assert (r.prior_period, r.current_period) == (100.0, 105.0)
        assert r.diagnosis is Diagnosis.GREEN

    def test_sparse_quarters_skip_gaps(self, make_store):
        store = make_store({
            (2024, "Q1", "PIT"): 10.0,
            (2024, "Q3", "PIT"): 11.0,
            (2025, "Q2", "PIT"): 12.0,
        })
        r = compare_quarterly(store, "PIT", [2024, 2025])
        assert (r.prior_period, r.current_period) == (11.0, 12.0)

    def test_window_order_does_not_matter(self, sample_store):
        forward = compare_quarterly(sample_store, "VAT", [2024, 2025])
        backward = compare_quarterly(sample_store, "VAT", [2025, 2024])
        assert forward == backward

    def test_points_outside_window_ignored(self, sample_store):
        r = compare_quarterly(sample_store, "PIT", [2023, 2024])
        assert (r.prior_period, r.current_period) == (110.0, 120.0)

    def test_single_point(self, make_store):
        store = make_store({(2025, "Q1", "PIT"): 10.0})
        r = compare_quarterly(store, "PIT", [2024, 2025])
        assert r.current_period == 10.0
        assert r.prior_period is None
        assert r.delta is None
        assert r.diagnosis is Diagnosis.YELLOW

    def test_no_points(self):
        r = compare_quarterly(TimeSeriesStore.build([]), "PIT", [2024, 2025])
        assert r == ComparisonResult()

    def test_empty_window(self, sample_store):
        r = compare_quarterly(sample_store, "PIT", [])
        assert r.current_period is None
        assert r.diagnosis is Diagnosis.YELLOW

    def test_no_scaling(self, make_store):
        store = make_store({(2025, "Q1", "PIT"): 40.0, (2025, "Q2", "PIT"): 50.0})
        r = compare_quarterly(store, "PIT", [2025])
        assert (r.prior_period, r.current_period) == (40.0, 50.0)

    def test_chronological_points(self, make_store):
        store = make_store({
            (2025, "Q1", "VAT"): 3.0,
            (2024, "Q4", "VAT"): 2.0,
            (2024, "Q2", "VAT"): 1.0,
        })
        assert chronological_points(store, "VAT", [2025, 2024]) == [
            (2024, "Q2", 1.0), (2024, "Q4", 2.0), (2025, "Q1", 3.0),
        ]


# ── Annual strategy ───────────────────────────────────────────────────────────

class TestAnnual:
    def test_current_provisional_prior_final(self, make_store):
        store = make_store({(2024, "Q4", "CIT"): 200.0, (2025, "Q2", "CIT"): 50.0})
        r = compare_annual(store, "CIT")
        assert r.prior_period == 100.0
        assert r.current_period == 50.0
        assert r.delta == -50.0
        assert r.relative_change_pct == -50.0
        assert r.diagnosis is Diagnosis.RED
        assert r.current_provisional_quarter == "Q2"

    def test_both_final_no_scaling(self, make_store):
        store = make_store({(2024, "Q4", "CIT"): 100.0, (2025, "Q4", "CIT"): 110.0})
        r = compare_annual(store, "CIT")
        assert (r.prior_period, r.current_period) == (100.0, 110.0)
        assert r.delta == 10.0
        assert r.diagnosis is Diagnosis.YELLOW
        assert r.current_provisional_quarter is None

    def test_current_final_prior_provisional(self, make_store):
        store = make_store({(2024, "Q3", "CIT"): 90.0, (2025, "Q4", "CIT"): 160.0})
        r = compare_annual(store, "CIT")
        assert r.current_period == pytest.approx(120.0)
        assert r.prior_period == 90.0
        assert r.current_provisional_quarter is None

    def test_both_provisional_harmonise_to_lesser(self, make_store):
        store = make_store({(2024, "Q1", "CIT"): 40.0, (2025, "Q3", "CIT"): 90.0})
        r = compare_annual(store, "CIT")
        assert r.current_period == pytest.approx(90.0 * (1 / 3))
        assert r.prior_period == 40.0
        assert r.current_provisional_quarter == "Q3"

    def test_both_provisional_prior_further_along(self, make_store):
        store = make_store({(2024, "Q3", "CIT"): 90.0, (2025, "Q1", "CIT"): 28.0})
        r = compare_annual(store, "CIT")
        assert r.prior_period == pytest.approx(30.0)
        assert r.current_period == 28.0
        assert r.diagnosis is Diagnosis.GREEN

    def test_both_provisional_same_quarter(self, make_store):
        store = make_store({(2024, "Q2", "CIT"): 80.0, (2025, "Q2", "CIT"): 100.0})
        r = compare_annual(store, "CIT")
        assert (r.prior_period, r.current_period) == (80.0, 100.0)

    def test_uses_latest_quarter_of_each_year(self, sample_store):
        r = compare_annual(sample_store, "CIT")
        # 2025 Q2 = 50 against 2024 Q4 = 200 scaled to 2/4
        assert r.prior_period == 100.0
        assert r.current_period == 50.0
        assert r.current_provisional_quarter == "Q2"

    def test_previous_year_missing(self, make_store):
        store = make_store({(2023, "Q4", "CIT"): 100.0, (2025, "Q2", "CIT"): 50.0})
        r = compare_annual(store, "CIT")
        assert r.prior_period is None
        assert r.current_period == 50.0
        assert r.delta is None
        assert r.diagnosis is Diagnosis.YELLOW
        assert r.current_provisional_quarter == "Q2"

    def test_no_data(self):
        r = compare_annual(TimeSeriesStore.build([]), "CIT")
        assert r == ComparisonResult()

    def test_zero_baseline(self, make_store):
        store = make_store({(2024, "Q4", "CIT"): 0.0, (2025, "Q4", "CIT"): 10.0})
        r = compare_annual(store, "CIT")
        assert r.delta == 10.0
        assert r.diagnosis is Diagnosis.YELLOW

    def test_year_window_is_ignored(self, make_store):
        store = make_store({(2024, "Q4", "CIT"): 100.0, (2025, "Q4", "CIT"): 105.0})
        comparator = AnnualComparator()
        assert comparator.compare(store, "CIT", [2019]) == comparator.compare(store, "CIT")


# ── Strategy selection ────────────────────────────────────────────────────────

class TestComparatorFor:
    def test_quarterly_indicators(self):
        assert isinstance(comparator_for("PIT"), QuarterlyComparator)
        assert isinstance(comparator_for("VAT"), QuarterlyComparator)

    def test_annual_indicator(self):
        assert isinstance(comparator_for("CIT"), AnnualComparator)
