"""
Tests for per-cell aggregation of the results table.

Verifies bias, the MSE decomposition, Fisher skewness/kurtosis, NaN
handling for tiny cells, the derived tables, and the decreasing
bias/MSE trend across sample sizes.
"""

import numpy as np
import pytest
from scipy import stats

from pyweibull.core.exceptions import ValidationError
from pyweibull.simulation import (
    GridCell,
    Observation,
    ResultsTable,
    aggregate,
    simulate,
)


def _table(rows):
    return ResultsTable.from_observations([Observation(*r) for r in rows])


@pytest.fixture
def hand_table():
    """Two cells with known estimates. Rows: (n, k, ML, ML_bootstrap)."""
    return _table([
        (10, 2.0, 2.5, 2.1),
        (10, 2.0, 1.9, 1.7),
        (10, 2.0, 2.9, 2.4),
        (10, 2.0, 2.2, 2.0),
        (100, 2.0, 2.05, 2.01),
        (100, 2.0, 1.95, 1.96),
        (100, 2.0, 2.10, 2.07),
    ])


class TestAggregateStats:

    def test_bias(self, hand_table):
        s = aggregate(hand_table)[GridCell(2.0, 10)]
        assert s.count == 4
        assert s.bias_mle == pytest.approx(np.mean([2.5, 1.9, 2.9, 2.2]) - 2.0)
        assert s.bias_bootstrap == pytest.approx(np.mean([2.1, 1.7, 2.4, 2.0]) - 2.0)

    def test_mse_is_bias_squared_plus_sample_variance(self, hand_table):
        agg = aggregate(hand_table)
        for cell, s in agg.stats.items():
            ml = hand_table.select(cell)["ML"]
            assert s.variance_mle == pytest.approx(np.var(ml, ddof=1))
            assert s.mse_mle == pytest.approx(s.bias_mle ** 2 + s.variance_mle,
                                              rel=1e-15)
            assert s.mse_bootstrap == pytest.approx(
                s.bias_bootstrap ** 2 + s.variance_bootstrap, rel=1e-15
            )

    def test_fisher_moments(self, hand_table):
        s = aggregate(hand_table)[GridCell(2.0, 10)]
        ml = np.array([2.5, 1.9, 2.9, 2.2])
        centered = ml - ml.mean()
        m2 = np.mean(centered ** 2)
        assert s.skewness_mle == pytest.approx(np.mean(centered ** 3) / m2 ** 1.5)
        assert s.kurtosis_mle == pytest.approx(np.mean(centered ** 4) / m2 ** 2 - 3)
        assert s.kurtosis_mle == pytest.approx(stats.kurtosis(ml))

    def test_cells_in_table_order(self, hand_table):
        assert list(aggregate(hand_table).stats) == [
            GridCell(2.0, 10), GridCell(2.0, 100),
        ]

    def test_for_estimator(self, hand_table):
        s = aggregate(hand_table)[GridCell(2.0, 100)]
        assert s.for_estimator("ML")["mse"] == s.mse_mle
        assert s.for_estimator("ML_bootstrap")["skewness"] == s.skewness_bootstrap
        with pytest.raises(ValueError):
            s.for_estimator("percentile")

    def test_accepts_solution(self, small_design_kwargs):
        sol = simulate(**small_design_kwargs)
        agg = aggregate(sol)
        assert len(agg) == 4
        assert agg.info['n_rows'] == sol.n_rows

    def test_rejects_other_input(self):
        with pytest.raises(ValidationError):
            aggregate({"ML": [1.0]})

    def test_pure(self, hand_table):
        a = aggregate(hand_table)[GridCell(2.0, 10)]
        b = aggregate(hand_table)[GridCell(2.0, 10)]
        assert a == b


class TestSmallCells:

    def test_single_observation_gives_nan(self):
        table = _table([(10, 1.0, 1.3, 0.9)])
        with pytest.warns(RuntimeWarning, match="NaN"):
            agg = aggregate(table)
        s = agg[GridCell(1.0, 10)]
        assert s.bias_mle == pytest.approx(0.3)
        assert np.isnan(s.variance_mle)
        assert np.isnan(s.mse_mle)
        assert np.isnan(s.skewness_bootstrap)
        assert agg.warnings

    def test_constant_estimates_give_nan_moments(self):
        table = _table([(10, 1.0, 1.3, 0.9), (10, 1.0, 1.3, 1.1)])
        with pytest.warns(RuntimeWarning, match="ML: skewness"):
            agg = aggregate(table)
        s = agg[GridCell(1.0, 10)]
        assert s.variance_mle == 0.0
        assert np.isnan(s.skewness_mle)
        assert np.isfinite(s.skewness_bootstrap)


class TestDerivedTables:

    def test_bias_mse_table(self, hand_table):
        agg = aggregate(hand_table)
        t = agg.bias_mse_table()
        assert list(t) == ["k", "n", "bias_ML", "bias_ML_bootstrap",
                           "MSE_ML", "MSE_ML_bootstrap"]
        np.testing.assert_array_equal(t["n"], [10, 100])
        assert t["MSE_ML"][1] == agg[GridCell(2.0, 100)].mse_mle

    def test_moments_table(self, hand_table):
        t = aggregate(hand_table).moments_table()
        assert t["Estimator"].tolist() == ["ML", "ML", "ML_bootstrap",
                                           "ML_bootstrap"]
        assert t["n"].tolist() == [10, 100, 10, 100]
        assert t["k"].tolist() == [2.0] * 4

    def test_summary(self, hand_table):
        agg = aggregate(hand_table)
        assert "SHAPE ESTIMATOR COMPARISON" in agg.summary()
        assert repr(agg) == "AggregateSolution(cells=2)"


class TestConvergenceTrend:

    def test_bias_and_mse_shrink_with_n(self):
        sol = simulate(shapes=[2.0], sample_sizes=[10, 100, 500],
                       total_budget=5000, bootstrap_count=2, seed=38)
        agg = aggregate(sol)
        s10 = agg[GridCell(2.0, 10)]
        s100 = agg[GridCell(2.0, 100)]
        s500 = agg[GridCell(2.0, 500)]

        assert s10.mse_mle > s100.mse_mle > s500.mse_mle
        assert abs(s500.bias_mle) < abs(s10.bias_mle)
        # small-sample MLE of the shape is biased upwards
        assert s10.bias_mle > 0
