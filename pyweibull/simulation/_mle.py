"""
Maximum likelihood estimation of the Weibull shape parameter.

With the scale profiled out, the MLE of the shape k is the root of

    score(k) = sum(x^k log x) / sum(x^k) - 1/k - mean(log x)

score is increasing in k, tends to -inf as k -> 0+ and to
log(max x) - mean(log x) > 0 as k -> inf for any sample with at least
two distinct values, so a non-degenerate sample has exactly one root.

Root finding is bracketed: scipy.optimize.brentq on [lo, hi] after a
geometric bracket expansion. While score(lo) and score(hi) share a sign
the bracket becomes [lo / 2, hi * 2]; lo halves towards 0 but never
reaches it. After MAX_EXPANSIONS failed widenings NoSignChangeError is
raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.optimize import brentq
from scipy.special import softmax

from pyweibull.core.exceptions import (
    ConvergenceError,
    DegenerateSampleError,
    NoSignChangeError,
)
from pyweibull.core.validation import (
    check_1d,
    check_array,
    check_bracket,
    check_finite,
    check_min_samples,
    check_positive,
)


MLE_BRACKET: tuple[float, float] = (0.3, 10.0)
BOOTSTRAP_BRACKET: tuple[float, float] = (1.0, 10.0)
ROOT_TOLERANCE = 1e-10
MAX_EXPANSIONS = 50
EXPANSION_FACTOR = 2.0
MAX_ITERATIONS = 200


@dataclass(frozen=True)
class RootSolution:
    """
    Shape MLE plus root-finding diagnostics.

    lower/upper is the bracket brentq actually ran on, after expansions.
    """
    root: float
    lower: float
    upper: float
    expansions: int
    iterations: int
    function_calls: int


def weibull_score(k: float, log_sample: NDArray[np.floating[Any]]) -> float:
    """
    Profile score of the shape parameter at k > 0.

    The weighted mean sum(x^k log x) / sum(x^k) is computed with softmax
    weights of k*log(x), so x^k never overflows for large k.
    """
    weights = softmax(k * log_sample)
    return float(weights @ log_sample - 1.0 / k - np.mean(log_sample))


def _prepare_sample(
    sample: ArrayLike,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    x = check_array(sample, "sample")
    check_1d(x, "sample")
    check_min_samples(x, 1, "sample")
    check_finite(x, "sample")
    check_positive(x, "sample")
    return x, np.log(x)


def solve_shape_mle_full(
    sample: ArrayLike,
    bracket: tuple[float, float] = MLE_BRACKET,
    *,
    tol: float = ROOT_TOLERANCE,
    max_expansions: int = MAX_EXPANSIONS,
) -> RootSolution:
    """
    Shape MLE with bracket and iteration diagnostics.

    Parameters
    ----------
    sample : array-like
        Non-empty 1D sample of strictly positive, finite values.
    bracket : (float, float)
        Initial bracket (lo, hi) with 0 < lo < hi. Widened automatically
        if it does not contain the root.
    tol : float
        Absolute tolerance on the root (brentq xtol).
    max_expansions : int
        Number of widenings allowed before giving up.

    Returns
    -------
    RootSolution

    Raises
    ------
    DegenerateSampleError
        All sample values are equal, so the score is -1/k everywhere.
    NoSignChangeError
        No sign change after max_expansions widenings.
    ConvergenceError
        brentq did not reach tol within MAX_ITERATIONS.
    """
    x, log_x = _prepare_sample(sample)
    lo0, hi0 = check_bracket(bracket, "bracket")

    if np.ptp(log_x) == 0.0:
        raise DegenerateSampleError(
            f"sample has zero variance in log-space (all {len(log_x)} "
            f"values equal {float(x[0])!r}); the shape score "
            f"is -1/k and has no root",
            lower=lo0,
            upper=hi0,
            final_lower=lo0,
            final_upper=hi0,
            expansions=0,
            sample=x,
        )

    lo, hi = lo0, hi0
    f_lo = weibull_score(lo, log_x)
    f_hi = weibull_score(hi, log_x)
    expansions = 0
    while np.sign(f_lo) == np.sign(f_hi) and f_lo != 0.0:
        if expansions >= max_expansions:
            raise NoSignChangeError(
                f"no sign change of the shape score on [{lo:.6g}, {hi:.6g}] "
                f"after {expansions} expansions of the initial bracket "
                f"[{lo0:.6g}, {hi0:.6g}] (score {f_lo:.6g} at lo, "
                f"{f_hi:.6g} at hi)",
                lower=lo0,
                upper=hi0,
                final_lower=lo,
                final_upper=hi,
                expansions=expansions,
                sample=x,
            )
        lo /= EXPANSION_FACTOR
        hi *= EXPANSION_FACTOR
        f_lo = weibull_score(lo, log_x)
        f_hi = weibull_score(hi, log_x)
        expansions += 1

    root, info = brentq(
        weibull_score, lo, hi,
        args=(log_x,),
        xtol=tol,
        maxiter=MAX_ITERATIONS,
        full_output=True,
        disp=False,
    )
    if not info.converged:
        raise ConvergenceError(
            f"brentq did not converge on [{lo:.6g}, {hi:.6g}] within "
            f"{MAX_ITERATIONS} iterations ({info.flag})",
            iterations=info.iterations,
            reason=info.flag,
            threshold=tol,
        )

    return RootSolution(
        root=float(root),
        lower=lo,
        upper=hi,
        expansions=expansions,
        iterations=info.iterations,
        function_calls=info.function_calls,
    )


def solve_shape_mle(
    sample: ArrayLike,
    bracket: tuple[float, float] = MLE_BRACKET,
    *,
    tol: float = ROOT_TOLERANCE,
    max_expansions: int = MAX_EXPANSIONS,
) -> float:
    """
    Maximum likelihood estimate of the Weibull shape.

    Pure function of its inputs. See solve_shape_mle_full for the
    parameters, bracket policy and errors.
    """
    return solve_shape_mle_full(
        sample, bracket, tol=tol, max_expansions=max_expansions,
    ).root
