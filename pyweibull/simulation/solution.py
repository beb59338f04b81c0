"""
Solution wrappers for simulation results.

SimulationSolution and AggregateSolution wrap Result[P] and provide
convenient accessors, the derived tables and a plain-text summary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pyweibull.core.result import Result
from pyweibull.simulation._common import (
    ESTIMATORS,
    AggregateParams,
    AggregateStats,
    GridCell,
    ResultsTable,
    SimulationParams,
)

if TYPE_CHECKING:
    from pyweibull.simulation.design import SimulationDesign


@dataclass
class SimulationSolution:
    """
    User-facing simulation results.

    The results table (columns n, k, ML, ML_bootstrap) is the artifact
    downstream reporting consumes; everything else is metadata.
    """
    _result: Result[SimulationParams]
    _design: 'SimulationDesign'

    # --- Core fields ---

    @property
    def table(self) -> ResultsTable:
        """All observations in traversal order."""
        return self._result.params.table

    @property
    def n_rows(self) -> int:
        return len(self.table)

    def columns(self) -> dict[str, NDArray]:
        """Columnar view: n, k, ML, ML_bootstrap."""
        return self.table.columns()

    # --- Metadata ---

    @property
    def design(self) -> 'SimulationDesign':
        return self._design

    @property
    def seed(self) -> int | None:
        """Random seed used."""
        return self._result.params.seed

    @property
    def bootstrap_count(self) -> int:
        return self._result.params.bootstrap_count

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Display ---

    def summary(self) -> str:
        """Run configuration and row counts per cell."""
        params = self._result.params
        lines = [
            "\nWEIBULL SHAPE SIMULATION",
            "",
            f"Shapes: {', '.join(f'{k:g}' for k in params.shapes)}",
            f"Sample sizes: {', '.join(str(n) for n in params.sample_sizes)}",
            f"Total budget: {params.total_budget}   "
            f"Bootstrap resamples: {params.bootstrap_count}   "
            f"Seed: {params.seed}",
            "",
            f"{'k':>8s} {'n':>8s} {'rows':>8s}",
        ]
        for cell, count in self.table.counts().items():
            lines.append(
                f"{cell.true_shape:8g} {cell.sample_size:8d} {count:8d}"
            )
        lines.append(f"{'':>8s} {'total':>8s} {self.n_rows:8d}")
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"SimulationSolution(rows={self.n_rows}, "
            f"seed={self.seed!r}, backend={self.backend_name!r})"
        )


@dataclass
class AggregateSolution:
    """
    Per-cell estimator statistics.

    Indexable by GridCell; also exposes the (k, n) bias/MSE table and the
    (k, Estimator) skewness/kurtosis breakdown as columnar dicts.
    """
    _result: Result[AggregateParams]

    @property
    def stats(self) -> dict[GridCell, AggregateStats]:
        return self._result.params.stats

    def __getitem__(self, cell: GridCell) -> AggregateStats:
        return self.stats[cell]

    def __len__(self) -> int:
        return len(self.stats)

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    # --- Derived tables ---

    def bias_mse_table(self) -> dict[str, NDArray]:
        """One row per (k, n): bias and MSE of both estimators."""
        cells = list(self.stats)
        return {
            "k": np.array([c.true_shape for c in cells], dtype=np.float64),
            "n": np.array([c.sample_size for c in cells], dtype=np.int64),
            "bias_ML": np.array([self.stats[c].bias_mle for c in cells]),
            "bias_ML_bootstrap": np.array(
                [self.stats[c].bias_bootstrap for c in cells]
            ),
            "MSE_ML": np.array([self.stats[c].mse_mle for c in cells]),
            "MSE_ML_bootstrap": np.array(
                [self.stats[c].mse_bootstrap for c in cells]
            ),
        }

    def moments_table(self) -> dict[str, NDArray]:
        """
        Skewness and kurtosis in long form.

        Rows are ordered by k, then Estimator (ML before ML_bootstrap),
        then n in the order the sizes were simulated.
        """
        shapes = list(dict.fromkeys(c.true_shape for c in self.stats))
        rows = []
        for k in shapes:
            for estimator in ESTIMATORS:
                for cell, s in self.stats.items():
                    if cell.true_shape != k:
                        continue
                    m = s.for_estimator(estimator)
                    rows.append(
                        (k, estimator, cell.sample_size,
                         m["skewness"], m["kurtosis"])
                    )
        return {
            "k": np.array([r[0] for r in rows], dtype=np.float64),
            "Estimator": np.array([r[1] for r in rows], dtype=str),
            "n": np.array([r[2] for r in rows], dtype=np.int64),
            "skewness": np.array([r[3] for r in rows], dtype=np.float64),
            "kurtosis": np.array([r[4] for r in rows], dtype=np.float64),
        }

    # --- Display ---

    def summary(self) -> str:
        """Bias and MSE per cell for both estimators."""
        lines = [
            "\nSHAPE ESTIMATOR COMPARISON",
            "",
            f"{'k':>6s} {'n':>6s} {'bias ML':>12s} {'bias boot':>12s} "
            f"{'MSE ML':>12s} {'MSE boot':>12s}",
        ]
        for cell, s in self.stats.items():
            lines.append(
                f"{cell.true_shape:6g} {cell.sample_size:6d} "
                f"{s.bias_mle:12.5f} {s.bias_bootstrap:12.5f} "
                f"{s.mse_mle:12.5f} {s.mse_bootstrap:12.5f}"
            )
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"AggregateSolution(cells={len(self)})"
