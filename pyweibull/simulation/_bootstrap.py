"""
Bootstrap bias correction of the shape MLE.

    corrected = 2 * mle - mean(mle of each resample)

This is the bias-reflection estimator: the bootstrap estimate of bias,
mean(t*) - t0, subtracted from t0. It is not a percentile bootstrap, and
the coefficient 2 is used literally.

Resamples are drawn one after another from the caller's stream, so the
draws for a repetition are always: base sample, then resample 1..B.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyweibull.core.validation import check_positive_int
from pyweibull.simulation._mle import BOOTSTRAP_BRACKET, solve_shape_mle
from pyweibull.simulation._variates import resample


def reflect(
    mle_estimate: float,
    replicates: ArrayLike,
) -> float:
    """
    2 * mle_estimate - mean(replicates), as mle - mean(replicates - mle).

    Centring on mle_estimate makes the mean exactly 0 when every replicate
    equals it, so the estimate is returned unchanged bit for bit.
    """
    deviations = np.asarray(replicates, dtype=np.float64) - mle_estimate
    return float(mle_estimate - np.mean(deviations))


def bootstrap_replicates(
    base_sample: NDArray[np.floating[Any]],
    bootstrap_count: int,
    rng: np.random.Generator,
    bracket: tuple[float, float] = BOOTSTRAP_BRACKET,
) -> NDArray[np.floating[Any]]:
    """
    Shape MLE of each of bootstrap_count resamples, in draw order.

    Any root-finding error aborts immediately; there is no averaging
    over the replicates that did succeed.
    """
    base_sample = np.asarray(base_sample, dtype=np.float64)
    t = np.empty(bootstrap_count, dtype=np.float64)
    for b in range(bootstrap_count):
        t[b] = solve_shape_mle(resample(base_sample, rng), bracket)
    return t


def bootstrap_correct(
    base_sample: ArrayLike,
    mle_estimate: float,
    bootstrap_count: int,
    rng: np.random.Generator,
    bracket: tuple[float, float] = BOOTSTRAP_BRACKET,
) -> float:
    """
    Bias-corrected shape estimate.

    Parameters
    ----------
    base_sample : array-like
        The sample mle_estimate was computed from.
    mle_estimate : float
        Shape MLE of base_sample.
    bootstrap_count : int
        Number of resamples B >= 1.
    rng : numpy.random.Generator
        The run's shared stream. Exactly B resamples are drawn from it.
    bracket : (float, float)
        Initial bracket for each resample's root finding.

    Returns
    -------
    float
        2 * mle_estimate - mean(replicates). May be negative.

    Raises
    ------
    NoSignChangeError, DegenerateSampleError, ConvergenceError
        Propagated unchanged from the first failing resample.
    """
    bootstrap_count = check_positive_int(bootstrap_count, "bootstrap_count")
    t = bootstrap_replicates(base_sample, bootstrap_count, rng, bracket)
    return reflect(mle_estimate, t)
