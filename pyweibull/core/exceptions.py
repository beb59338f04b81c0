"""
Exception hierarchy for PyWeibull.

All exceptions inherit from PyWeibullError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""

from typing import Any


class PyWeibullError(Exception):
    """Base exception for all PyWeibull errors."""

    def annotate(self, **context: Any) -> 'PyWeibullError':
        """
        Attach where-it-happened context to an in-flight error.

        The simulation driver uses this to record the grid position
        (true_shape, sample_size, repetition, stage) of a failure before
        re-raising the same exception object. Each key becomes an
        attribute and is also kept in ``self.context``.

        Returns:
            self, so callers can ``raise err.annotate(...)``.
        """
        existing = getattr(self, 'context', None) or {}
        self.context = {**existing, **context}
        for key, value in context.items():
            setattr(self, key, value)
        return self

    def __str__(self) -> str:
        message = super().__str__()
        context = getattr(self, 'context', None)
        if not context:
            return message
        details = ", ".join(f"{k}={v!r}" for k, v in context.items())
        return f"{message} [{details}]"


class ValidationError(PyWeibullError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect.

    Raised when an array does not have the expected number of dimensions.
    """
    pass


class InvalidInputError(ValidationError):
    """
    Simulation configuration is malformed.

    Raised eagerly while building a SimulationDesign, before any random
    draw happens: empty shape or sample-size lists, non-positive sizes,
    bootstrap_count < 1, and similar.

    Attributes:
        parameter: Name of the offending configuration parameter
        value: The rejected value
    """

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        value: Any = None,
    ):
        super().__init__(message)
        self.parameter = parameter
        self.value = value


class NumericalError(PyWeibullError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class NoSignChangeError(NumericalError):
    """
    Bracket expansion could not find a sign change of the score function.

    Raised by the shape MLE root finder when the initial bracket, widened
    geometrically the maximum number of times, still has a score of the
    same sign at both ends.

    Attributes:
        lower: Lower end of the initial bracket
        upper: Upper end of the initial bracket
        final_lower: Lower end of the last bracket tried
        final_upper: Upper end of the last bracket tried
        expansions: Number of expansions performed
        sample: The sample the score was evaluated on
    """

    def __init__(
        self,
        message: str,
        lower: float | None = None,
        upper: float | None = None,
        final_lower: float | None = None,
        final_upper: float | None = None,
        expansions: int | None = None,
        sample: Any = None,
    ):
        super().__init__(message)
        self.lower = lower
        self.upper = upper
        self.final_lower = final_lower
        self.final_upper = final_upper
        self.expansions = expansions
        self.sample = sample


class DegenerateSampleError(NoSignChangeError):
    """
    Sample has zero variance in log-space.

    With all values equal the score reduces to -1/k, which never crosses
    zero. Raised before any bracket expansion is attempted, so
    ``expansions`` is always 0.
    """
    pass


class ConvergenceError(PyWeibullError):
    """
    Iterative algorithm failed to converge.

    Raised when the bracketed root finder does not meet its tolerance
    within the maximum number of iterations.

    Attributes:
        iterations: Number of iterations completed
        final_change: Final bracket width, if known
        reason: Why convergence failed (e.g., 'max_iterations')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
