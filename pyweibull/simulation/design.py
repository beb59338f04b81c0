"""
Design class for the Weibull shape simulation.

SimulationDesign encapsulates every input the backend needs to run the
grid. Immutable, validated at construction: a malformed configuration
fails here with InvalidInputError, before any random draw happens.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any, Iterator

from pyweibull.core.exceptions import InvalidInputError
from pyweibull.core.validation import check_bracket, check_positive_int
from pyweibull.simulation._common import GridCell
from pyweibull.simulation._mle import BOOTSTRAP_BRACKET, MLE_BRACKET


DEFAULT_SHAPES: tuple[float, ...] = (0.5, 1.0, 2.0, 4.0)
DEFAULT_SAMPLE_SIZES: tuple[int, ...] = (10, 100, 500)
DEFAULT_TOTAL_BUDGET = 30000
DEFAULT_BOOTSTRAP_COUNT = 100
DEFAULT_SEED = 38


def _check_shapes(shapes) -> tuple[float, ...]:
    try:
        values = tuple(shapes)
    except TypeError as e:
        raise InvalidInputError(
            f"shapes must be a sequence of positive numbers, got {shapes!r}",
            parameter="shapes",
            value=shapes,
        ) from e
    if len(values) == 0:
        raise InvalidInputError(
            "shapes must not be empty", parameter="shapes", value=shapes,
        )
    out = []
    for s in values:
        if isinstance(s, bool) or not isinstance(s, numbers.Real):
            raise InvalidInputError(
                f"shapes must contain numbers, got {s!r}",
                parameter="shapes",
                value=shapes,
            )
        s = float(s)
        if not math.isfinite(s) or s <= 0:
            raise InvalidInputError(
                f"shapes must be finite and > 0, got {s}",
                parameter="shapes",
                value=shapes,
            )
        out.append(s)
    return tuple(out)


def _check_sample_sizes(sample_sizes) -> tuple[int, ...]:
    try:
        values = tuple(sample_sizes)
    except TypeError as e:
        raise InvalidInputError(
            f"sample_sizes must be a sequence of positive integers, "
            f"got {sample_sizes!r}",
            parameter="sample_sizes",
            value=sample_sizes,
        ) from e
    if len(values) == 0:
        raise InvalidInputError(
            "sample_sizes must not be empty",
            parameter="sample_sizes",
            value=sample_sizes,
        )
    return tuple(check_positive_int(n, "sample_sizes") for n in values)


@dataclass(frozen=True)
class SimulationDesign:
    """
    Frozen design for the shape-estimator simulation.

    Attributes:
        shapes: True shape values, outer loop, in traversal order.
        sample_sizes: Sample sizes, middle loop, in traversal order.
        total_budget: Observations per cell are round(total_budget / n).
        bootstrap_count: Resamples per bias-corrected estimate (B).
        seed: Seed of the run's single MT19937 stream.
        mle_bracket: Initial bracket for the direct MLE.
        bootstrap_bracket: Initial bracket for each resample's MLE.
    """
    shapes: tuple[float, ...]
    sample_sizes: tuple[int, ...]
    total_budget: int
    bootstrap_count: int
    seed: int | None
    mle_bracket: tuple[float, float]
    bootstrap_bracket: tuple[float, float]

    @classmethod
    def for_simulation(
        cls,
        shapes=DEFAULT_SHAPES,
        sample_sizes=DEFAULT_SAMPLE_SIZES,
        total_budget: int = DEFAULT_TOTAL_BUDGET,
        bootstrap_count: int = DEFAULT_BOOTSTRAP_COUNT,
        seed: int | None = DEFAULT_SEED,
        *,
        mle_bracket: tuple[float, float] = MLE_BRACKET,
        bootstrap_bracket: tuple[float, float] = BOOTSTRAP_BRACKET,
    ) -> SimulationDesign:
        """
        Create a simulation design with validation.

        Args:
            shapes: Non-empty sequence of true shapes, each > 0.
            sample_sizes: Non-empty sequence of integer sample sizes >= 1.
            total_budget: Integer >= 1.
            bootstrap_count: Integer >= 1.
            seed: Integer seed, or None for fresh OS entropy.
            mle_bracket: (lo, hi) with 0 < lo < hi.
            bootstrap_bracket: (lo, hi) with 0 < lo < hi.

        Returns:
            Validated SimulationDesign.

        Raises:
            InvalidInputError: If any parameter is malformed, or a sample
                size is so large that its cell would get no repetitions.
        """
        shapes_t = _check_shapes(shapes)
        sizes_t = _check_sample_sizes(sample_sizes)
        total_budget = check_positive_int(total_budget, "total_budget")
        bootstrap_count = check_positive_int(bootstrap_count, "bootstrap_count")

        if seed is not None and (
            isinstance(seed, bool) or not isinstance(seed, numbers.Integral)
        ):
            raise InvalidInputError(
                f"seed must be an integer or None, got {seed!r}",
                parameter="seed",
                value=seed,
            )
        if seed is not None and seed < 0:
            raise InvalidInputError(
                f"seed must be >= 0, got {seed}", parameter="seed", value=seed,
            )

        for n in sizes_t:
            if round(total_budget / n) < 1:
                raise InvalidInputError(
                    f"sample size {n} gets round({total_budget} / {n}) = 0 "
                    f"repetitions; raise total_budget or drop the size",
                    parameter="sample_sizes",
                    value=sample_sizes,
                )

        return cls(
            shapes=shapes_t,
            sample_sizes=sizes_t,
            total_budget=total_budget,
            bootstrap_count=bootstrap_count,
            seed=None if seed is None else int(seed),
            mle_bracket=check_bracket(mle_bracket, "mle_bracket"),
            bootstrap_bracket=check_bracket(bootstrap_bracket, "bootstrap_bracket"),
        )

    def repetitions(self, sample_size: int) -> int:
        """round(total_budget / sample_size), half to even."""
        return round(self.total_budget / sample_size)

    def grid(self) -> Iterator[GridCell]:
        """Cells in traversal order: shape outer, sample size inner."""
        for shape in self.shapes:
            for n in self.sample_sizes:
                yield GridCell(true_shape=shape, sample_size=n)

    @property
    def expected_rows(self) -> int:
        return len(self.shapes) * sum(self.repetitions(n) for n in self.sample_sizes)

    # --- DataSource protocol ---

    @property
    def n_observations(self) -> int:
        return self.expected_rows

    @property
    def metadata(self) -> dict[str, Any]:
        return {
            'shapes': self.shapes,
            'sample_sizes': self.sample_sizes,
            'total_budget': self.total_budget,
            'bootstrap_count': self.bootstrap_count,
            'seed': self.seed,
            'mle_bracket': self.mle_bracket,
            'bootstrap_bracket': self.bootstrap_bracket,
        }

    def supports(self, capability: str) -> bool:
        if capability == 'reproducible':
            return self.seed is not None
        return False
