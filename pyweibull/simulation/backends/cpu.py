"""
CPU backend for the Weibull shape simulation.

CPUSimulationBackend: sequential grid traversal, one shared stream.
"""

from __future__ import annotations

import numpy as np

from pyweibull.core.exceptions import PyWeibullError
from pyweibull.core.result import Result
from pyweibull.core.compute.timing import Timer
from pyweibull.simulation._bootstrap import bootstrap_correct
from pyweibull.simulation._common import Observation, ResultsTable, SimulationParams
from pyweibull.simulation._mle import solve_shape_mle
from pyweibull.simulation._variates import draw_sample, make_stream
from pyweibull.simulation.design import SimulationDesign


class CPUSimulationBackend:
    """
    CPU backend running the (shape x sample size x repetition) grid.

    Strictly sequential. For every repetition the stream is consumed as:
    n uniforms for the base sample, then bootstrap_count resamples. The
    direct MLE draws nothing. Same design and stream give the same table.
    """

    def __init__(self, rng: np.random.Generator | None = None):
        """
        Args:
            rng: Stream to draw from. If None, a fresh MT19937 stream is
                seeded from design.seed at each solve(). An injected stream
                is reported with seed None, since design.seed did not
                produce its draws.
        """
        self._rng = rng

    @property
    def name(self) -> str:
        return 'cpu_simulation'

    def solve(self, design: SimulationDesign) -> Result[SimulationParams]:
        """Run the grid and return Result[SimulationParams]."""
        timer = Timer()
        timer.start()

        if self._rng is not None:
            rng, seed, stream = self._rng, None, 'injected'
        else:
            rng, seed, stream = make_stream(design.seed), design.seed, 'seeded'
        observations: list[Observation] = []

        with timer.section('grid_traversal'):
            for cell in design.grid():
                reps = design.repetitions(cell.sample_size)
                for rep in range(reps):
                    observations.append(
                        self._repetition(design, cell.true_shape,
                                         cell.sample_size, rep, rng, timer)
                    )

        table = ResultsTable.from_observations(observations)
        timer.stop()

        warnings_list: list[str] = []
        n_negative = int(np.sum(table.ML_bootstrap < 0))
        if n_negative > 0:
            warnings_list.append(
                f"{n_negative} of {len(table)} bias-corrected estimates are "
                f"negative (2*ML - mean(bootstrap) < 0)"
            )

        params = SimulationParams(
            table=table,
            shapes=design.shapes,
            sample_sizes=design.sample_sizes,
            total_budget=design.total_budget,
            bootstrap_count=design.bootstrap_count,
            seed=seed,
        )

        return Result(
            params=params,
            info={
                'n_rows': len(table),
                'n_cells': len(design.shapes) * len(design.sample_sizes),
                'repetitions': {
                    n: design.repetitions(n) for n in design.sample_sizes
                },
                'bootstrap_count': design.bootstrap_count,
                'seed': seed,
                'stream': stream,
                'bit_generator': type(rng.bit_generator).__name__,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    def _repetition(
        self,
        design: SimulationDesign,
        shape: float,
        n: int,
        rep: int,
        rng: np.random.Generator,
        timer: Timer,
    ) -> Observation:
        """Base sample, direct MLE, bias-corrected MLE, in that order."""
        try:
            with timer.section('sampling'):
                sample = draw_sample(shape, n, rng)
        except PyWeibullError as err:
            err.annotate(
                true_shape=shape, sample_size=n, repetition=rep,
                stage='sampling',
            )
            raise

        try:
            with timer.section('mle'):
                k_hat = solve_shape_mle(sample, design.mle_bracket)
        except PyWeibullError as err:
            err.annotate(
                true_shape=shape, sample_size=n, repetition=rep,
                stage='mle', bracket=design.mle_bracket,
            )
            raise

        try:
            with timer.section('bootstrap'):
                k_boot = bootstrap_correct(
                    sample, k_hat, design.bootstrap_count, rng,
                    design.bootstrap_bracket,
                )
        except PyWeibullError as err:
            err.annotate(
                true_shape=shape, sample_size=n, repetition=rep,
                stage='bootstrap', bracket=design.bootstrap_bracket,
            )
            raise

        return Observation(
            sample_size=n,
            true_shape=shape,
            mle_estimate=k_hat,
            bootstrap_estimate=k_boot,
        )
