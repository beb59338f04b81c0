"""
Generic result container for all PyWeibull computations.

The Result class provides a standardized envelope that the simulation
and aggregation stages both use. This enables shared tooling for timing,
reproducibility and diagnostics while letting each stage define its own
parameter structure.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (seed, grid, row counts)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for simulation computations.

    Type Parameters:
        P: The stage-specific parameter payload type

    Attributes:
        params: Stage-specific payload (results table, aggregate stats)
        info: Structured metadata (seed, grid, number of rows)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=SimulationParams(table=table, ...),
        ...     info={'seed': 38, 'n_rows': 13440},
        ...     timing={'total_seconds': 812.4, 'bootstrap': 790.1},
        ...     backend_name='cpu_simulation'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
