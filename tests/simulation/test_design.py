"""
Tests for SimulationDesign: defaults, eager validation and grid shape.
"""

import pytest

from pyweibull.core.exceptions import InvalidInputError
from pyweibull.core.protocols import DataSource
from pyweibull.simulation import GridCell, SimulationDesign


class TestDefaults:

    def test_reference_configuration(self):
        d = SimulationDesign.for_simulation()
        assert d.shapes == (0.5, 1.0, 2.0, 4.0)
        assert d.sample_sizes == (10, 100, 500)
        assert d.total_budget == 30000
        assert d.bootstrap_count == 100
        assert d.seed == 38
        assert d.mle_bracket == (0.3, 10.0)
        assert d.bootstrap_bracket == (1.0, 10.0)

    def test_reference_row_counts(self):
        d = SimulationDesign.for_simulation()
        assert d.repetitions(10) == 3000
        assert d.repetitions(100) == 300
        assert d.repetitions(500) == 60
        assert d.expected_rows == 4 * (3000 + 300 + 60) == 13440

    def test_repetitions_round_half_to_even(self):
        d = SimulationDesign.for_simulation(sample_sizes=[10], total_budget=25)
        assert d.repetitions(10) == 2
        d = SimulationDesign.for_simulation(sample_sizes=[10], total_budget=35)
        assert d.repetitions(10) == 4

    def test_grid_order(self):
        d = SimulationDesign.for_simulation(shapes=[4, 1], sample_sizes=[100, 10])
        assert list(d.grid()) == [
            GridCell(4.0, 100), GridCell(4.0, 10),
            GridCell(1.0, 100), GridCell(1.0, 10),
        ]

    def test_is_data_source(self):
        d = SimulationDesign.for_simulation()
        assert isinstance(d, DataSource)
        assert d.n_observations == 13440
        assert d.metadata['seed'] == 38
        assert d.supports('reproducible')
        assert not d.supports('gpu_tensors')

    def test_frozen(self):
        d = SimulationDesign.for_simulation()
        with pytest.raises(AttributeError):
            d.seed = 1


class TestValidation:

    @pytest.mark.parametrize("kwargs, parameter", [
        (dict(shapes=[]), "shapes"),
        (dict(shapes=[1.0, 0.0]), "shapes"),
        (dict(shapes=[-2.0]), "shapes"),
        (dict(shapes=["a"]), "shapes"),
        (dict(shapes=5), "shapes"),
        (dict(sample_sizes=[]), "sample_sizes"),
        (dict(sample_sizes=[10, 0]), "sample_sizes"),
        (dict(sample_sizes=[-5]), "sample_sizes"),
        (dict(sample_sizes=[10.5]), "sample_sizes"),
        (dict(total_budget=0), "total_budget"),
        (dict(bootstrap_count=0), "bootstrap_count"),
        (dict(seed=1.5), "seed"),
        (dict(seed=-1), "seed"),
        (dict(mle_bracket=(0.0, 10.0)), "mle_bracket"),
        (dict(bootstrap_bracket=(10.0, 1.0)), "bootstrap_bracket"),
    ])
    def test_rejected(self, kwargs, parameter):
        with pytest.raises(InvalidInputError) as exc:
            SimulationDesign.for_simulation(**kwargs)
        assert exc.value.parameter == parameter

    def test_cell_without_repetitions_rejected(self):
        with pytest.raises(InvalidInputError, match="0 repetitions"):
            SimulationDesign.for_simulation(sample_sizes=[10, 500],
                                            total_budget=100)

    def test_seed_none_allowed(self):
        d = SimulationDesign.for_simulation(seed=None)
        assert d.seed is None
        assert not d.supports('reproducible')
