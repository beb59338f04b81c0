"""
PyWeibull: Monte Carlo study of Weibull shape estimators.

Simulates mean-one Weibull samples by inverse-transform sampling,
estimates the shape by maximum likelihood (bracketed root finding on
the profile score) and by a bootstrap bias-corrected MLE, and
summarizes bias, MSE, skewness and kurtosis per (shape, sample size).

Submodules:
    simulation: Variates, MLE, bootstrap correction, driver, aggregation
    core: Exceptions, Result envelope, validation, timing
"""

__version__ = "0.1.0"

from pyweibull import simulation
from pyweibull.simulation import simulate, aggregate

__all__ = [
    "__version__",
    "simulation",
    "simulate",
    "aggregate",
]
