"""
Tests for the bootstrap bias correction.

Verifies the reflection formula, the draw order on the shared stream,
reproducibility, and that resample failures propagate.
"""

import numpy as np
import pytest

from pyweibull.core.exceptions import (
    DegenerateSampleError,
    InvalidInputError,
    NoSignChangeError,
)
from pyweibull.simulation import (
    bootstrap_correct,
    bootstrap_replicates,
    draw_sample,
    make_stream,
    reflect,
    resample,
    solve_shape_mle,
)


class TestReflect:

    def test_formula(self):
        assert reflect(2.0, [1.5, 2.5, 3.0]) == pytest.approx(2 * 2.0 - 7.0 / 3)

    def test_all_replicates_equal_mle_returns_mle(self):
        m = 1.2345678901234
        assert reflect(m, [m] * 100) == m

    @pytest.mark.parametrize("count", [1, 3, 100, 1000])
    def test_constant_replicates_exact_for_many_estimates(self, count):
        values = make_stream(2024).uniform(0.3, 10.0, size=500)
        mismatched = [m for m in values if reflect(m, [m] * count) != m]
        assert mismatched == []

    def test_can_be_negative(self):
        assert reflect(0.5, [3.0, 4.0]) < 0


class TestBootstrapReplicates:

    def test_length_and_order(self, weibull_sample):
        t = bootstrap_replicates(weibull_sample, 20, make_stream(9))
        assert t.shape == (20,)

        rng = make_stream(9)
        expected = [
            solve_shape_mle(resample(weibull_sample, rng), (1.0, 10.0))
            for _ in range(20)
        ]
        np.testing.assert_array_equal(t, expected)

    def test_replicates_near_mle(self, weibull_sample):
        k_hat = solve_shape_mle(weibull_sample)
        t = bootstrap_replicates(weibull_sample, 50, make_stream(9))
        assert np.mean(t) == pytest.approx(k_hat, rel=0.1)


class TestBootstrapCorrect:

    def test_equals_reflect_of_replicates(self, weibull_sample):
        k_hat = solve_shape_mle(weibull_sample)
        corrected = bootstrap_correct(weibull_sample, k_hat, 30, make_stream(4))
        t = bootstrap_replicates(weibull_sample, 30, make_stream(4))
        assert corrected == reflect(k_hat, t)

    def test_seed_reproducibility(self, weibull_sample):
        k_hat = solve_shape_mle(weibull_sample)
        a = bootstrap_correct(weibull_sample, k_hat, 25, make_stream(4))
        b = bootstrap_correct(weibull_sample, k_hat, 25, make_stream(4))
        assert a == b

    def test_different_streams_differ(self, weibull_sample):
        k_hat = solve_shape_mle(weibull_sample)
        a = bootstrap_correct(weibull_sample, k_hat, 25, make_stream(4))
        b = bootstrap_correct(weibull_sample, k_hat, 25, make_stream(5))
        assert a != b

    def test_consumes_exactly_bootstrap_count_resamples(self, weibull_sample):
        n = len(weibull_sample)
        a = make_stream(13)
        b = make_stream(13)
        bootstrap_correct(weibull_sample, 2.0, 7, a)
        for _ in range(7):
            b.choice(n, size=n, replace=True)
        assert a.random() == b.random()

    def test_reduces_small_sample_bias_on_average(self):
        # The shape MLE is biased upwards for small n; the correction
        # pulls the average estimate back towards the truth.
        rng = make_stream(21)
        mle, corrected = [], []
        for _ in range(200):
            x = draw_sample(2.0, 10, rng)
            k_hat = solve_shape_mle(x)
            mle.append(k_hat)
            corrected.append(bootstrap_correct(x, k_hat, 20, rng))
        assert abs(np.mean(corrected) - 2.0) < abs(np.mean(mle) - 2.0)

    @pytest.mark.parametrize("bad", [0, -1, 2.5])
    def test_bootstrap_count_validated(self, weibull_sample, bad):
        with pytest.raises(InvalidInputError):
            bootstrap_correct(weibull_sample, 2.0, bad, make_stream(1))


class TestFailurePropagation:

    def test_degenerate_resample_propagates(self):
        # Every resample of a constant sample is constant
        with pytest.raises(DegenerateSampleError):
            bootstrap_correct([2.0, 2.0, 2.0], 1.0, 10, make_stream(1))

    def test_single_failing_resample_aborts(self):
        # With two distinct values some of 200 resamples of size 2 repeat
        # one value and are degenerate
        with pytest.raises(NoSignChangeError):
            bootstrap_correct([1.0, 2.0], 1.0, 200, make_stream(1))
