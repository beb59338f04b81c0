"""
Shared compute infrastructure for PyWeibull.

IMPORTANT: This is NOT where simulation backends live. Those go in
simulation/backends/. This module contains shared infrastructure only.

Submodules:
    timing: Execution timing utilities
"""

from pyweibull.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]
