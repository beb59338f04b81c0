"""
Public API for the Weibull shape simulation.

    simulate(shapes, sample_sizes, total_budget, bootstrap_count, seed)
        -> SimulationSolution
    aggregate(solution_or_table) -> AggregateSolution

simulate validates its configuration into a SimulationDesign, runs the
CPU backend and wraps the Result. aggregate groups the results table by
(true shape, sample size) and summarizes both estimators.
"""

from __future__ import annotations

import warnings

import numpy as np

from pyweibull.core.compute.timing import Timer
from pyweibull.core.exceptions import ValidationError
from pyweibull.core.result import Result
from pyweibull.simulation._aggregate import aggregate_table
from pyweibull.simulation._common import AggregateParams, ResultsTable
from pyweibull.simulation._mle import BOOTSTRAP_BRACKET, MLE_BRACKET
from pyweibull.simulation.backends.cpu import CPUSimulationBackend
from pyweibull.simulation.design import (
    DEFAULT_BOOTSTRAP_COUNT,
    DEFAULT_SAMPLE_SIZES,
    DEFAULT_SEED,
    DEFAULT_SHAPES,
    DEFAULT_TOTAL_BUDGET,
    SimulationDesign,
)
from pyweibull.simulation.solution import AggregateSolution, SimulationSolution


def simulate(
    shapes=DEFAULT_SHAPES,
    sample_sizes=DEFAULT_SAMPLE_SIZES,
    total_budget: int = DEFAULT_TOTAL_BUDGET,
    bootstrap_count: int = DEFAULT_BOOTSTRAP_COUNT,
    seed: int | None = DEFAULT_SEED,
    *,
    mle_bracket: tuple[float, float] = MLE_BRACKET,
    bootstrap_bracket: tuple[float, float] = BOOTSTRAP_BRACKET,
    rng: np.random.Generator | None = None,
) -> SimulationSolution:
    """
    Monte Carlo comparison of the shape MLE and its bootstrap correction.

    For each shape (outer loop) and sample size n (middle loop),
    round(total_budget / n) repetitions each draw a mean-one Weibull
    sample, estimate the shape by maximum likelihood, and correct it with
    bootstrap_count resamples.

    Parameters
    ----------
    shapes : sequence of float
        True shape values. Default (0.5, 1, 2, 4).
    sample_sizes : sequence of int
        Sample sizes. Default (10, 100, 500).
    total_budget : int
        Sample values per cell, spread over repetitions. Default 30000.
    bootstrap_count : int
        Resamples per corrected estimate. Default 100.
    seed : int or None
        Seed of the MT19937 stream. Default 38.
    mle_bracket : (float, float)
        Initial root bracket of the direct MLE. Default (0.3, 10).
    bootstrap_bracket : (float, float)
        Initial root bracket of each resample MLE. Default (1, 10).
    rng : numpy.random.Generator, optional
        Stream to use instead of one seeded from ``seed``.

    Returns
    -------
    SimulationSolution

    Raises
    ------
    InvalidInputError
        Malformed configuration, before anything is drawn.
    NoSignChangeError, DegenerateSampleError, ConvergenceError
        A root could not be found. The whole run is aborted; the error
        carries true_shape, sample_size, repetition and stage.
    """
    design = SimulationDesign.for_simulation(
        shapes, sample_sizes, total_budget, bootstrap_count, seed,
        mle_bracket=mle_bracket,
        bootstrap_bracket=bootstrap_bracket,
    )
    result = CPUSimulationBackend(rng=rng).solve(design)
    return SimulationSolution(_result=result, _design=design)


def aggregate(
    results: SimulationSolution | ResultsTable,
) -> AggregateSolution:
    """
    Bias, variance, MSE, skewness and kurtosis per (true shape, n).

    Parameters
    ----------
    results : SimulationSolution or ResultsTable

    Returns
    -------
    AggregateSolution
        Statistics that need more observations than a cell has are NaN
        and listed in ``warnings``.
    """
    if isinstance(results, SimulationSolution):
        table = results.table
    elif isinstance(results, ResultsTable):
        table = results
    else:
        raise ValidationError(
            f"aggregate() expects a SimulationSolution or ResultsTable, "
            f"got {type(results).__name__}"
        )

    timer = Timer()
    timer.start()
    stats, warnings_list = aggregate_table(table)
    timer.stop()

    for w in warnings_list:
        warnings.warn(w, RuntimeWarning, stacklevel=2)

    result = Result(
        params=AggregateParams(stats=stats),
        info={'n_rows': len(table), 'n_cells': len(stats)},
        timing=timer.result(),
        backend_name='cpu_aggregate',
        warnings=tuple(warnings_list),
    )
    return AggregateSolution(_result=result)
