"""
Weibull random variates by inverse-transform sampling.

The scale is pinned so the distribution has mean one:

    scale = 1 / Gamma(1 + 1/k)
    x     = (-log(1 - u))^(1/k) * scale,   u ~ Uniform(0, 1)

All randomness comes from one numpy Generator over MT19937, created
once per run and passed explicitly. weibull_variates itself is a pure
function of (shape, uniforms).
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.special import gamma

from pyweibull.core.exceptions import ValidationError
from pyweibull.core.validation import (
    check_1d,
    check_array,
    check_open_unit_interval,
)


def make_stream(seed: int | None) -> np.random.Generator:
    """
    The single pseudo-random stream of a simulation run.

    Mersenne Twister (MT19937) wrapped in a numpy Generator. The same seed
    and the same sequence of draws reproduce a run bit for bit.
    """
    return np.random.Generator(np.random.MT19937(seed))


def mean_one_scale(shape: float) -> float:
    """Weibull scale giving mean 1 for the given shape."""
    return float(1.0 / gamma(1.0 + 1.0 / shape))


def _check_shape(shape: float) -> float:
    shape = float(shape)
    if not np.isfinite(shape) or shape <= 0:
        raise ValidationError(f"shape must be a finite value > 0, got {shape}")
    return shape


def weibull_variates(
    shape: float,
    uniforms: ArrayLike,
) -> NDArray[np.floating[Any]]:
    """
    Map uniforms in (0, 1) to mean-one Weibull(shape) variates.

    Parameters
    ----------
    shape : float
        Weibull shape k > 0.
    uniforms : array-like
        1D uniforms, each strictly inside (0, 1).

    Returns
    -------
    NDArray
        Variates, same length and order as ``uniforms``. Strictly
        positive and increasing in u for a fixed shape.

    Raises
    ------
    ValidationError
        If shape <= 0 or any uniform lies outside (0, 1).
    """
    shape = _check_shape(shape)
    u = check_array(uniforms, "uniforms")
    check_1d(u, "uniforms")
    check_open_unit_interval(u, "uniforms")

    # -log1p(-u) == log(1 / (1 - u)), accurate for small u
    return np.power(-np.log1p(-u), 1.0 / shape) * mean_one_scale(shape)


def draw_sample(
    shape: float,
    n: int,
    rng: np.random.Generator,
) -> NDArray[np.floating[Any]]:
    """Draw exactly n uniforms from rng and transform them."""
    return weibull_variates(shape, rng.random(n))


def resample(
    sample: NDArray[np.floating[Any]],
    rng: np.random.Generator,
) -> NDArray[np.floating[Any]]:
    """Same-size resample with replacement, uniform over positions."""
    n = sample.shape[0]
    indices = rng.choice(n, size=n, replace=True)
    return sample[indices]
