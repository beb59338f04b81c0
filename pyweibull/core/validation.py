"""
Input validation utilities for PyWeibull.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import math
import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pyweibull.core.exceptions import (
    ValidationError,
    DimensionError,
    InvalidInputError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is 1-dimensional.

    Raises:
        DimensionError: If array is not 1D
    """
    if array.ndim != 1:
        raise DimensionError(
            f"{name}: expected 1D array, got {array.ndim}D with shape {array.shape}"
        )


def check_min_samples(array: NDArray[np.floating[Any]], min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Raises:
        ValidationError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise ValidationError(
            f"{name}: requires at least {min_samples} samples, got {n}"
        )


def check_positive(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify every element is strictly positive.

    Raises:
        ValidationError: If any element is <= 0
    """
    bad = np.where(array <= 0)[0]
    if len(bad) > 0:
        raise ValidationError(
            f"{name}: all values must be > 0, got {len(bad)} non-positive "
            f"(first at index {int(bad[0])}: {float(array[bad[0]])!r})"
        )


def check_open_unit_interval(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify every element lies strictly inside (0, 1).

    A uniform of exactly 1 maps to an infinite Weibull variate and a
    uniform of exactly 0 maps to a variate of 0, whose log is undefined.

    Raises:
        ValidationError: If any element is outside (0, 1)
    """
    bad = np.where((array <= 0) | (array >= 1))[0]
    if len(bad) > 0:
        raise ValidationError(
            f"{name}: all values must lie strictly in (0, 1), got "
            f"{len(bad)} outside (first at index {int(bad[0])}: "
            f"{float(array[bad[0]])!r})"
        )


def check_positive_int(value: Any, name: str) -> int:
    """
    Verify a configuration value is an integer >= 1.

    bool is rejected even though it subclasses int.

    Returns:
        The value as a plain int

    Raises:
        InvalidInputError: If value is not a positive integer
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidInputError(
            f"{name} must be an integer, got {type(value).__name__} {value!r}",
            parameter=name,
            value=value,
        )
    if value < 1:
        raise InvalidInputError(
            f"{name} must be >= 1, got {value}",
            parameter=name,
            value=value,
        )
    return int(value)


def check_bracket(bracket: Any, name: str) -> tuple[float, float]:
    """
    Verify a root-finding bracket is a finite pair with 0 < lo < hi.

    The Weibull score is undefined at k = 0, so a bracket may never
    touch or straddle zero.

    Returns:
        (lo, hi) as floats

    Raises:
        InvalidInputError: If the bracket is malformed
    """
    try:
        lo, hi = bracket
        lo = float(lo)
        hi = float(hi)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(
            f"{name} must be a pair (lo, hi), got {bracket!r}",
            parameter=name,
            value=bracket,
        ) from e

    if not (math.isfinite(lo) and math.isfinite(hi)):
        raise InvalidInputError(
            f"{name} must be finite, got ({lo}, {hi})",
            parameter=name,
            value=bracket,
        )
    if not 0 < lo < hi:
        raise InvalidInputError(
            f"{name} must satisfy 0 < lo < hi, got ({lo}, {hi})",
            parameter=name,
            value=bracket,
        )
    return lo, hi
