"""Simulation backends."""

from pyweibull.simulation.backends.cpu import CPUSimulationBackend

__all__ = ["CPUSimulationBackend"]
