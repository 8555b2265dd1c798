"""Iteration driver for the Chebyshev collocation solvers.

This module owns the loop shared by VFI, FPI and TI: compute node values
from frozen coefficients, refit through the precomputed basis inverse,
damp, measure the change in node values, and stop on tolerance or on
the iteration cap.  It is agnostic to the residual being solved; that is
supplied by a :class:`~growth_models.solvers.protocols.ResidualStrategy`.

Example::

    >>> solver = CollocationSolver(params, CollocationConfig(n_nodes=7), "vfi")
    >>> solution = solver.solve()
    >>> solution.converged
    True
"""

from __future__ import annotations

import itertools
import logging
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np
import tensorflow as tf

from growth_models.approximation.chebyshev import ChebyshevApproximant
from growth_models.config.economic_params import EconomicParams
from growth_models.config.solver_config import Algorithm, CollocationConfig
from growth_models.core.types import NUMPY_DTYPE, TENSORFLOW_DTYPE, Array, Numeric, Tensor
from growth_models.econ.growth_model import GrowthModel
from growth_models.grids.grid_builder import GridBuilder
from growth_models.solvers.kernels import convergence_error, damped_update
from growth_models.solvers.protocols import NodeUpdate, ResidualStrategy
from growth_models.solvers.results import CollocationSolution, ConvergenceState
from growth_models.solvers.strategies import build_strategy

logger = logging.getLogger(__name__)


class CollocationSolver:
    """Fixed-point iterator on Chebyshev coefficients.

    Parameters
    ----------
    params : EconomicParams
        Model primitives.
    config : CollocationConfig, optional
        Nodes, domain, tolerance, damping and cadence.  Defaults to
        ``CollocationConfig()``.
    algorithm : Algorithm or str
        ``"vfi"``, ``"fpi"`` or ``"ti"``.

    Raises
    ------
    ValueError
        If *algorithm* is not a collocation algorithm, or the design
        matrix of the requested grid is ill-conditioned.
    """

    def __init__(
        self,
        params: EconomicParams,
        config: Optional[CollocationConfig] = None,
        algorithm: Union[Algorithm, str] = Algorithm.TI,
    ) -> None:
        self.params: EconomicParams = params
        self.config: CollocationConfig = config or CollocationConfig()
        self.algorithm: Algorithm = Algorithm(algorithm)

        self.grid = GridBuilder.build_collocation_grid(self.config, params)
        self.approximant = ChebyshevApproximant(self.grid.scaler, self.grid.n)
        self.model = GrowthModel(params, self.approximant)
        self.strategy: ResidualStrategy = build_strategy(
            self.algorithm, self.model, self.grid, self.config
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def solve(
        self,
        initial_coefficients: Optional[Numeric] = None,
    ) -> CollocationSolution:
        """Iterate until the node values settle or the cap is reached.

        Parameters
        ----------
        initial_coefficients : array-like, optional
            Starting coefficient vector of length ``n_nodes``.  When
            omitted the strategy's default guess is used.

        Returns
        -------
        CollocationSolution
            Final coefficients, node values, snapshot history and state.

        Raises
        ------
        ValueError
            If *initial_coefficients* has the wrong length.
        FloatingPointError
            If the node values become non-finite.
        RuntimeError
            If a per-node optimisation or root-find fails.
        """
        config = self.config
        coefficients = self._initial_coefficients(initial_coefficients)
        previous_values = self.approximant(self.grid.capital, coefficients)

        state = ConvergenceState()
        history: List[Tuple[int, Array]] = [(0, coefficients.numpy())]
        update: Optional[NodeUpdate] = None

        logger.info(
            "Starting %s collocation — n=%d, domain=[%.4f, %.4f], "
            "tol=%.1e, damping=%.2f",
            self.algorithm.value.upper(),
            self.grid.n,
            self.grid.scaler.lower,
            self.grid.scaler.upper,
            config.tolerance,
            config.damping,
        )

        for iteration in self._iteration_range():
            update = self.strategy.node_values(coefficients)
            if not np.all(np.isfinite(update.values.numpy())):
                raise FloatingPointError(
                    f"{self.algorithm.value.upper()} produced non-finite "
                    f"node values at iteration {iteration}."
                )
            refit = ChebyshevApproximant.fit(update.values, self.grid.basis_inverse)
            coefficients = damped_update(
                refit, coefficients, self._damping_weight(iteration)
            )

            error = convergence_error(
                update.values, previous_values, config.error_metric
            )
            previous_values = update.values
            state = state.advance(error)

            if iteration % config.log_every == 0:
                logger.info("iteration %d, error=%.3e", iteration, error)
            if iteration % config.snapshot_every == 0:
                history.append((iteration, coefficients.numpy()))

            if error < config.tolerance:
                state = state.mark_converged()
                logger.info(
                    "%s converged in %d iterations (error=%.2e).",
                    self.algorithm.value.upper(),
                    iteration,
                    error,
                )
                break
        else:
            state = state.mark_exceeded()
            logger.warning(
                "%s did not converge after %d iterations (final error=%.2e).",
                self.algorithm.value.upper(),
                state.iteration,
                state.error,
            )

        if history[-1][0] != state.iteration:
            history.append((state.iteration, coefficients.numpy()))

        return CollocationSolution(
            algorithm=self.algorithm,
            params=self.params,
            config=config,
            grid=self.grid,
            coefficients=coefficients.numpy(),
            node_values=update.values.numpy(),
            node_controls=update.controls.numpy(),
            history=history,
            state=state,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _initial_coefficients(self, initial: Optional[Numeric]) -> Tensor:
        if initial is None:
            return self.strategy.initial_coefficients()
        coefficients = tf.convert_to_tensor(
            np.asarray(initial, dtype=NUMPY_DTYPE), dtype=TENSORFLOW_DTYPE
        )
        if coefficients.shape != (self.grid.n,):
            raise ValueError(
                f"Initial coefficients must have shape ({self.grid.n},), "
                f"got {coefficients.shape}."
            )
        return coefficients

    def _iteration_range(self) -> Iterable[int]:
        if self.config.max_iterations is None:
            return itertools.count(1)
        return range(1, self.config.max_iterations + 1)

    def _damping_weight(self, iteration: int) -> float:
        if iteration == 1 and self.config.undamped_first_iteration:
            return 1.0
        return self.config.damping
