"""
Core infrastructure for PyWeibull.

Shared abstractions and utilities used by the simulation package.

Key components:
    protocols: DataSource, Backend protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing
"""

from pyweibull.core.protocols import DataSource, Backend
from pyweibull.core.result import Result
from pyweibull.core.exceptions import (
    PyWeibullError,
    ValidationError,
    DimensionError,
    InvalidInputError,
    NumericalError,
    NoSignChangeError,
    DegenerateSampleError,
    ConvergenceError,
)

__all__ = [
    # Protocols
    "DataSource",
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyWeibullError",
    "ValidationError",
    "DimensionError",
    "InvalidInputError",
    "NumericalError",
    "NoSignChangeError",
    "DegenerateSampleError",
    "ConvergenceError",
]
