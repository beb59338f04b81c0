"""
PyWeibull simulation of Weibull shape estimators.

Compares the maximum likelihood estimate of the Weibull shape with its
bootstrap bias-corrected version (2 * MLE - mean of bootstrap MLEs) over
a grid of true shapes and sample sizes.

Usage:
    from pyweibull.simulation import simulate, aggregate

    sim = simulate(shapes=[0.5, 1, 2, 4], sample_sizes=[10, 100, 500],
                   total_budget=30000, bootstrap_count=100, seed=38)
    stats = aggregate(sim)
    print(stats.summary())
"""

from pyweibull.simulation._common import (
    ESTIMATORS,
    AggregateStats,
    GridCell,
    Observation,
    ResultsTable,
)
from pyweibull.simulation._variates import (
    make_stream,
    weibull_variates,
    draw_sample,
    resample,
)
from pyweibull.simulation._mle import (
    RootSolution,
    solve_shape_mle,
    solve_shape_mle_full,
    weibull_score,
)
from pyweibull.simulation._bootstrap import (
    bootstrap_correct,
    bootstrap_replicates,
    reflect,
)
from pyweibull.simulation.design import SimulationDesign
from pyweibull.simulation.solution import AggregateSolution, SimulationSolution
from pyweibull.simulation.solvers import simulate, aggregate

__all__ = [
    "simulate",
    "aggregate",
    "make_stream",
    "weibull_variates",
    "draw_sample",
    "resample",
    "weibull_score",
    "solve_shape_mle",
    "solve_shape_mle_full",
    "RootSolution",
    "bootstrap_correct",
    "bootstrap_replicates",
    "reflect",
    "SimulationDesign",
    "SimulationSolution",
    "AggregateSolution",
    "ESTIMATORS",
    "AggregateStats",
    "GridCell",
    "Observation",
    "ResultsTable",
]
