"""
pytest configuration and shared fixtures.
"""

import pytest

from pyweibull.simulation import draw_sample, make_stream


@pytest.fixture
def rng():
    """Seeded MT19937 stream for reproducible tests."""
    return make_stream(42)


@pytest.fixture
def weibull_sample(rng):
    """Mean-one Weibull(2) sample of size 200."""
    return draw_sample(2.0, 200, rng)


@pytest.fixture
def small_design_kwargs():
    """A grid small enough to run in well under a second."""
    return dict(
        shapes=[1.0, 2.0],
        sample_sizes=[10, 50],
        total_budget=100,
        bootstrap_count=5,
        seed=38,
    )
