"""
Common data structures for the Weibull shape simulation.

Observation, ResultsTable, GridCell and AggregateStats are the payloads
wrapped by Result[P] and exposed through Solution classes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

import numpy as np
from numpy.typing import NDArray


# The two estimator variants, in the column order of the results table.
ESTIMATORS: tuple[str, str] = ("ML", "ML_bootstrap")


@dataclass(frozen=True)
class Observation:
    """
    One simulation repetition.

    bootstrap_estimate is 2*mle - mean(replicates) and can be negative.
    """
    sample_size: int
    true_shape: float
    mle_estimate: float
    bootstrap_estimate: float


@dataclass(frozen=True, order=True)
class GridCell:
    """(true_shape, sample_size) grouping key."""
    true_shape: float
    sample_size: int


def _readonly(values, dtype) -> NDArray:
    arr = np.asarray(values, dtype=dtype)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class ResultsTable:
    """
    Columnar, read-only table of observations in grid traversal order.

    Columns mirror the reference output: n (sample size), k (true shape),
    ML (direct MLE) and ML_bootstrap (bias-corrected MLE).
    """
    n: NDArray[np.int64]                      # shape (rows,)
    k: NDArray[np.floating[Any]]              # shape (rows,)
    ML: NDArray[np.floating[Any]]             # shape (rows,)
    ML_bootstrap: NDArray[np.floating[Any]]   # shape (rows,)

    @classmethod
    def from_observations(cls, observations: list[Observation]) -> ResultsTable:
        """Freeze a list of observations into columns, keeping order."""
        return cls(
            n=_readonly([o.sample_size for o in observations], np.int64),
            k=_readonly([o.true_shape for o in observations], np.float64),
            ML=_readonly([o.mle_estimate for o in observations], np.float64),
            ML_bootstrap=_readonly(
                [o.bootstrap_estimate for o in observations], np.float64
            ),
        )

    def __len__(self) -> int:
        return int(self.n.shape[0])

    def __iter__(self) -> Iterator[Observation]:
        for i in range(len(self)):
            yield self.row(i)

    def row(self, i: int) -> Observation:
        return Observation(
            sample_size=int(self.n[i]),
            true_shape=float(self.k[i]),
            mle_estimate=float(self.ML[i]),
            bootstrap_estimate=float(self.ML_bootstrap[i]),
        )

    def columns(self) -> dict[str, NDArray]:
        """Columns keyed by name: n, k, ML, ML_bootstrap."""
        return {
            "n": self.n,
            "k": self.k,
            "ML": self.ML,
            "ML_bootstrap": self.ML_bootstrap,
        }

    def cells(self) -> list[GridCell]:
        """Distinct grid cells in order of first appearance."""
        seen: dict[GridCell, None] = {}
        for k, n in zip(self.k.tolist(), self.n.tolist()):
            seen.setdefault(GridCell(true_shape=k, sample_size=n), None)
        return list(seen)

    def mask(self, cell: GridCell) -> NDArray[np.bool_]:
        return (self.k == cell.true_shape) & (self.n == cell.sample_size)

    def select(self, cell: GridCell) -> dict[str, NDArray]:
        """Estimates of both variants for one grid cell, keyed by ESTIMATORS."""
        m = self.mask(cell)
        return {"ML": self.ML[m], "ML_bootstrap": self.ML_bootstrap[m]}

    def counts(self) -> dict[GridCell, int]:
        """Row count per grid cell."""
        return {cell: int(np.sum(self.mask(cell))) for cell in self.cells()}


@dataclass(frozen=True)
class SimulationParams:
    """
    Parameter payload for a simulation run.

    - table: all observations in traversal order
    - the remaining fields echo the configuration that produced it
    """
    table: ResultsTable
    shapes: tuple[float, ...]
    sample_sizes: tuple[int, ...]
    total_budget: int
    bootstrap_count: int
    seed: int | None


@dataclass(frozen=True)
class AggregateStats:
    """
    Per-cell summary of both estimators.

    mse_* is bias_*^2 + variance_* by construction. skewness and kurtosis
    are Fisher's (third and fourth standardized moments, kurtosis in
    excess of 3). Statistics that need more data than the cell has are NaN.
    """
    count: int
    mean_mle: float
    mean_bootstrap: float
    bias_mle: float
    bias_bootstrap: float
    variance_mle: float
    variance_bootstrap: float
    mse_mle: float
    mse_bootstrap: float
    skewness_mle: float
    skewness_bootstrap: float
    kurtosis_mle: float
    kurtosis_bootstrap: float

    def for_estimator(self, estimator: str) -> dict[str, float]:
        """mean, bias, variance, mse, skewness and kurtosis of one estimator."""
        if estimator == "ML":
            suffix = "mle"
        elif estimator == "ML_bootstrap":
            suffix = "bootstrap"
        else:
            raise ValueError(
                f"estimator must be one of {ESTIMATORS}, got {estimator!r}"
            )
        return {
            stat: getattr(self, f"{stat}_{suffix}")
            for stat in ("mean", "bias", "variance", "mse", "skewness", "kurtosis")
        }


@dataclass(frozen=True)
class AggregateParams:
    """Parameter payload for aggregation: one AggregateStats per cell."""
    stats: dict[GridCell, AggregateStats]
