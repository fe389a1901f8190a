"""Unit tests for time-series reconciliation."""

from datetime import date

import pytest

from src.analytics.reconciliation import (
    DEFAULT_SPREADS,
    SpreadDefinition,
    reconcile,
    representative_rate,
    select_pool_spreads,
)
from src.core.models import SeriesKey, SpreadKey


D1, D2, D3, D4 = (date(2024, 1, d) for d in (1, 2, 3, 4))

SPREAD = SpreadDefinition(key="spread", risk_free_key="Rate1")


class TestReconcileScenarios:
    """Worked examples of the merge."""

    def test_forward_fill_scenario(self, make_points):
        """DeFi value carries forward onto a date only the rate observed."""
        result = reconcile(
            {
                "DeFi1": make_points(("2024-01-01", 5.0)),
                "Rate1": make_points(("2024-01-01", 3.0), ("2024-01-03", 3.5)),
            },
            spreads=[SPREAD],
        )

        assert [p.date for p in result] == [D1, D3]
        assert result[0].values == {"DeFi1": 5.0, "Rate1": 3.0}
        assert result[0].spreads == {"spread": 2.0}
        assert result[1].values == {"DeFi1": 5.0, "Rate1": 3.5}
        assert result[1].spreads == {"spread": 1.5}

    def test_representative_rate_is_max_not_average(self, make_points):
        """Two pools at 4.0 and 6.0 compare at 6.0."""
        result = reconcile(
            {
                "A": make_points(("2024-01-01", 4.0)),
                "B": make_points(("2024-01-01", 6.0)),
                "Rate1": make_points(("2024-01-01", 0.0)),
            },
            spreads=[SPREAD],
        )

        assert result[0].spreads["spread"] == 6.0

    def test_max_independent_of_input_order(self, make_points):
        """Neither first-series nor min would give the reconciled answer."""
        result = reconcile(
            {
                "Low": make_points(("2024-01-01", 2.0), ("2024-01-02", 9.0)),
                "High": make_points(("2024-01-01", 7.0), ("2024-01-02", 1.0)),
                "Rate1": make_points(("2024-01-01", 1.0)),
            },
            spreads=[SPREAD],
        )

        assert [p.spreads["spread"] for p in result] == [6.0, 8.0]


class TestReconcileInvariants:
    """Properties that hold for any input."""

    @pytest.fixture
    def inputs(self, make_points):
        return {
            "A": make_points(("2024-01-04", 4.0), ("2024-01-01", 3.0)),  # unsorted
            "B": make_points(("2024-01-02", 6.0)),
            "Rate1": make_points(("2024-01-03", 2.0)),
            "Empty": [],
        }

    def test_dates_are_exact_union(self, inputs):
        result = reconcile(inputs, spreads=[SPREAD])

        assert {p.date for p in result} == {D1, D2, D3, D4}

    def test_dates_strictly_increasing(self, inputs):
        result = reconcile(inputs, spreads=[SPREAD])
        dates = [p.date for p in result]

        assert all(a < b for a, b in zip(dates, dates[1:]))

    def test_every_key_on_every_row(self, inputs):
        result = reconcile(inputs, spreads=[SPREAD])

        for point in result:
            assert set(point.values) == {"A", "B", "Rate1", "Empty"}

    def test_default_zero_before_first_observation(self, inputs):
        result = reconcile(inputs, spreads=[SPREAD])

        assert [p.values["B"] for p in result] == [0.0, 6.0, 6.0, 6.0]
        assert [p.values["Rate1"] for p in result] == [0.0, 0.0, 2.0, 2.0]

    def test_empty_series_is_zero_everywhere(self, inputs):
        result = reconcile(inputs, spreads=[SPREAD])

        assert all(p.values["Empty"] == 0.0 for p in result)

    def test_forward_fill_holds_between_observations(self, inputs):
        result = reconcile(inputs, spreads=[SPREAD])

        # A observed on D1 and D4 only
        assert [p.values["A"] for p in result] == [3.0, 3.0, 3.0, 4.0]

    def test_empty_series_does_not_lower_max(self, inputs):
        result = reconcile(inputs, spreads=[SPREAD])

        # best of A/B/Empty minus Rate1
        assert [p.spreads["spread"] for p in result] == [3.0, 6.0, 4.0, 4.0]


class TestReconcileEdgeCases:
    """Sparse, empty and duplicated input."""

    def test_no_input(self):
        assert reconcile({}) == []

    def test_all_series_empty(self):
        assert reconcile({"A": [], "Rate1": []}, spreads=[SPREAD]) == []

    def test_duplicate_date_last_write_wins(self, make_points):
        result = reconcile(
            {"A": make_points(("2024-01-01", 1.0), ("2024-01-01", 2.5))},
            spreads=[],
        )

        assert len(result) == 1
        assert result[0].values["A"] == 2.5

    def test_only_empty_defi_series_gives_zero_rate(self, make_points):
        result = reconcile(
            {"A": [], "Rate1": make_points(("2024-01-01", 5.0))},
            spreads=[SPREAD],
        )

        assert result[0].spreads["spread"] == -5.0

    def test_missing_benchmark_reads_as_zero(self, make_points):
        result = reconcile({"A": make_points(("2024-01-01", 4.0))}, spreads=[SPREAD])

        assert result[0].values["Rate1"] == 0.0
        assert result[0].spreads["spread"] == 4.0

    def test_explicit_defi_keys(self, make_points):
        result = reconcile(
            {
                "A": make_points(("2024-01-01", 4.0)),
                "B": make_points(("2024-01-01", 9.0)),
                "Rate1": make_points(("2024-01-01", 1.0)),
            },
            spreads=[SPREAD],
            defi_keys=["A"],
        )

        assert result[0].spreads["spread"] == 3.0

    def test_input_not_mutated(self, make_points):
        series = make_points(("2024-01-02", 2.0), ("2024-01-01", 1.0))
        reconcile({"A": series}, spreads=[])

        assert [p.value for p in series] == [2.0, 1.0]


class TestDefaultSpreads:
    """Reconciliation with the tracked series keys."""

    def test_default_spreads_cover_both_benchmarks(self):
        assert {s.key for s in DEFAULT_SPREADS} == {SpreadKey.VS_FED, SpreadKey.VS_TBILL}
        assert {s.risk_free_key for s in DEFAULT_SPREADS} == {SeriesKey.FED_FUNDS, SeriesKey.TBILL}

    def test_spreads_against_fed_and_tbill(self, make_points):
        result = reconcile(
            {
                SeriesKey.AAVE_V3_USDC: make_points(("2024-01-01", 5.0)),
                SeriesKey.COMPOUND_V3_USDC: make_points(("2024-01-01", 6.5)),
                SeriesKey.FED_FUNDS: make_points(("2024-01-01", 5.33)),
                SeriesKey.TBILL: make_points(("2024-01-01", 5.25)),
            }
        )

        assert result[0].spreads[SpreadKey.VS_FED] == pytest.approx(1.17)
        assert result[0].spreads[SpreadKey.VS_TBILL] == pytest.approx(1.25)

    def test_representative_rate_without_defi_keys(self):
        assert representative_rate({"Rate1": 5.0}, []) == 0.0


class TestSelectPoolSpreads:
    """Per-pool comparison applied after reconciliation."""

    def test_spreads_use_selected_pool(self, make_points):
        reconciled = reconcile(
            {
                SeriesKey.AAVE_V3_USDC: make_points(("2024-01-01", 4.0)),
                SeriesKey.COMPOUND_V3_USDC: make_points(("2024-01-01", 6.0)),
                SeriesKey.FED_FUNDS: make_points(("2024-01-01", 5.0)),
                SeriesKey.TBILL: make_points(("2024-01-01", 4.5)),
            }
        )

        selected = select_pool_spreads(reconciled, SeriesKey.AAVE_V3_USDC)

        assert selected[0].spreads[SpreadKey.VS_FED] == pytest.approx(-1.0)
        assert selected[0].spreads[SpreadKey.VS_TBILL] == pytest.approx(-0.5)
        # Original rows keep the best-rate spreads
        assert reconciled[0].spreads[SpreadKey.VS_FED] == pytest.approx(1.0)
        assert selected[0].values == reconciled[0].values
