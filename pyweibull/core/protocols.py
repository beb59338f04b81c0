"""
Core protocols for PyWeibull.

These define structural interfaces that the simulation stages satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) to allow
flexibility while maintaining type safety.

Design Principles:
    - Minimal contracts: prescribe only what's truly universal
    - Capability-driven: use supports() for optional features
    - Type-safe: use generics to preserve type information through pipelines
"""

from typing import Protocol, TypeVar, Any, runtime_checkable

# Type variables for generic payloads
P = TypeVar('P', covariant=True)  # Parameter payload type
D = TypeVar('D', contravariant=True)  # DataSource type


@runtime_checkable
class DataSource(Protocol):
    """
    Minimal protocol for any design handed to a backend.

    This protocol intentionally prescribes very little. It exists to establish
    a common interface for tooling (profiling, serialization) without
    forcing every design to have the same structure.
    """

    @property
    def n_observations(self) -> int:
        """Number of rows the computation will produce or consume."""
        ...

    @property
    def metadata(self) -> dict[str, Any]:
        """
        Design-specific metadata.

        Example:
            Simulation: {'shapes': (0.5, 1.0), 'sample_sizes': (10,), 'seed': 38}
        """
        ...

    def supports(self, capability: str) -> bool:
        """
        Check if this data source supports a given capability.

        Standard capability strings:
            'materialize': Can return full data as numpy arrays
            'reproducible': Output is a pure function of the design

        Note:
            Unknown capabilities MUST return False, never raise.
        """
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend takes a design and produces a parameter payload wrapped
    in a Result. Backends are stateless apart from construction-time
    configuration, which makes them easy to test and swap.

    Type Parameters:
        D: The DataSource type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}', e.g. 'cpu_simulation'.
        """
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the computation.

        Raises:
            NumericalError: If a root cannot be bracketed
            ConvergenceError: If the root finder fails to converge
            ValidationError: If design is invalid for this backend
        """
        ...
