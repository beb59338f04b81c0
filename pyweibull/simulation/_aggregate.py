"""
Per-cell bias, variance, MSE, skewness and kurtosis of both estimators.

For a cell with true shape theta and estimates t_1..t_R:

    bias     = mean(t) - theta
    variance = sum((t - mean(t))^2) / (R - 1)
    mse      = bias^2 + variance
    skewness = m3 / m2^1.5          (Fisher, population moments)
    kurtosis = m4 / m2^2 - 3        (Fisher, excess)

MSE is assembled from the bias-variance decomposition rather than
mean((t - theta)^2), which differs from it by a factor (R - 1) / R on
the variance term.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from pyweibull.simulation._common import AggregateStats, GridCell, ResultsTable


def _moments(
    estimates: NDArray[np.floating[Any]],
    theta: float,
) -> tuple[dict[str, float], list[str]]:
    """mean, bias, variance, mse, skewness, kurtosis of one estimator."""
    notes: list[str] = []
    r = estimates.shape[0]
    mean = float(np.mean(estimates))
    bias = mean - theta

    if r < 2:
        variance = np.nan
        notes.append("variance and MSE need at least 2 observations")
    else:
        variance = float(np.var(estimates, ddof=1))

    if r < 2 or np.ptp(estimates) == 0.0:
        skewness = np.nan
        kurtosis = np.nan
        notes.append("skewness and kurtosis need at least 2 distinct estimates")
    else:
        skewness = float(stats.skew(estimates, bias=True))
        kurtosis = float(stats.kurtosis(estimates, fisher=True, bias=True))

    return {
        "mean": mean,
        "bias": bias,
        "variance": variance,
        "mse": bias ** 2 + variance,
        "skewness": skewness,
        "kurtosis": kurtosis,
    }, notes


def aggregate_table(
    table: ResultsTable,
) -> tuple[dict[GridCell, AggregateStats], list[str]]:
    """
    Group the table by (true_shape, sample_size) and summarize.

    Returns
    -------
    stats : dict[GridCell, AggregateStats]
        One entry per cell, in order of first appearance in the table.
    warnings : list[str]
        One entry per statistic that came out NaN for lack of data.
    """
    result: dict[GridCell, AggregateStats] = {}
    warnings_list: list[str] = []

    for cell in table.cells():
        by_estimator = table.select(cell)
        ml, ml_notes = _moments(by_estimator["ML"], cell.true_shape)
        bs, bs_notes = _moments(by_estimator["ML_bootstrap"], cell.true_shape)

        for label, notes in (("ML", ml_notes), ("ML_bootstrap", bs_notes)):
            for note in notes:
                warnings_list.append(
                    f"k={cell.true_shape:g}, n={cell.sample_size}, {label}: "
                    f"{note}; reported as NaN"
                )

        result[cell] = AggregateStats(
            count=int(by_estimator["ML"].shape[0]),
            mean_mle=ml["mean"],
            mean_bootstrap=bs["mean"],
            bias_mle=ml["bias"],
            bias_bootstrap=bs["bias"],
            variance_mle=ml["variance"],
            variance_bootstrap=bs["variance"],
            mse_mle=ml["mse"],
            mse_bootstrap=bs["mse"],
            skewness_mle=ml["skewness"],
            skewness_bootstrap=bs["skewness"],
            kurtosis_mle=ml["kurtosis"],
            kurtosis_bootstrap=bs["kurtosis"],
        )

    return result, warnings_list
