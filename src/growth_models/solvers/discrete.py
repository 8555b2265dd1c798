"""Brute-force Value Function Iteration on an evenly spaced capital grid.

State space : capital k on a finite grid (no approximation)
Choice      : next-period capital k' from the same grid

Each sweep evaluates u(f(k_i) − k_j) + β V(k_j) for every pair and takes
the max over j — O(n_k²) per iteration.  Pairs with non-positive
consumption receive ``config.infeasible_penalty``.  The result serves as
an independent check on the collocation solvers.

Architecture note
-----------------
This module is a thin orchestrator.  The Bellman sweep and error metric
are delegated to ``solvers.kernels``, and policy extraction to
``solvers.policies``.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import tensorflow as tf

from growth_models.config.economic_params import EconomicParams
from growth_models.config.solver_config import DiscreteGridConfig
from growth_models.core.types import TENSORFLOW_DTYPE
from growth_models.econ import CRRAUtility, ProductionFunctions
from growth_models.grids.grid_builder import GridBuilder
from growth_models.solvers.kernels import bellman_step, convergence_error
from growth_models.solvers.policies import extract_discrete_policies
from growth_models.solvers.results import ConvergenceState, DiscreteSolution

logger = logging.getLogger(__name__)


class DiscretizedVFISolver:
    """VFI solver for the growth model on a finite capital grid.

    Parameters
    ----------
    params : EconomicParams
        Structural economic parameters (frozen dataclass).
    config : DiscreteGridConfig, optional
        Grid size, bounds, tolerance and iteration cap.

    Raises
    ------
    ValueError
        If the lowest grid point has no feasible choice, i.e.
        ``f(k_min) <= k_min``.
    """

    def __init__(
        self,
        params: EconomicParams,
        config: Optional[DiscreteGridConfig] = None,
    ) -> None:
        self.params: EconomicParams = params
        self.config: DiscreteGridConfig = config or DiscreteGridConfig()

        self._initialize_grid()
        self._validate_feasibility()

    # ------------------------------------------------------------------
    # Grid initialisation
    # ------------------------------------------------------------------

    def _initialize_grid(self) -> None:
        self.k_grid: tf.Tensor
        self.k_ss: float
        self.k_grid, self.k_ss = GridBuilder.build_capital_grid(
            self.config, self.params
        )
        self.n_capital: int = int(tf.shape(self.k_grid)[0])
        self.k_min: float = float(self.k_grid[0])
        self.k_max: float = float(self.k_grid[-1])

    def _validate_feasibility(self) -> None:
        output_at_min = ProductionFunctions.cobb_douglas(self.k_min, self.params)
        if output_at_min <= self.k_min:
            raise ValueError(
                f"No feasible choice at k_min={self.k_min:.6g}: "
                f"f(k_min)={output_at_min:.6g} does not exceed the "
                f"smallest grid point."
            )

    # ------------------------------------------------------------------
    # Flow utilities
    # ------------------------------------------------------------------

    def compute_flow(self) -> tf.Tensor:
        """Flow utility of moving from ``k_i`` to ``k_j``.

        Returns
        -------
        tf.Tensor
            Shape ``(n_k, n_k)``; infeasible pairs hold the penalty.
        """
        n_k = self.n_capital
        k_curr = tf.reshape(self.k_grid, (n_k, 1))
        k_next = tf.reshape(self.k_grid, (1, n_k))

        consumption = ProductionFunctions.cobb_douglas(k_curr, self.params) - k_next
        feasible = consumption > 0.0
        # Placeholder consumption keeps the masked branch finite.
        safe_consumption = tf.where(
            feasible, consumption, tf.ones_like(consumption)
        )
        penalty = tf.constant(self.config.infeasible_penalty, dtype=TENSORFLOW_DTYPE)
        return tf.where(
            feasible,
            CRRAUtility.utility(safe_consumption, self.params),
            penalty,
        )

    # ------------------------------------------------------------------
    # Bellman iteration
    # ------------------------------------------------------------------

    def _run_bellman_iteration(
        self,
        flow: tf.Tensor,
    ) -> Tuple[tf.Tensor, tf.Tensor, ConvergenceState]:
        """Iterate the Bellman equation until convergence or the cap.

        Returns
        -------
        v_curr : tf.Tensor
            Final value function, ``(n_k,)``.
        policy_idx : tf.Tensor
            Optimal k' indices, ``(n_k,)``.
        state : ConvergenceState
            Iterations, final error and status.
        """
        config = self.config
        v_curr = tf.zeros((self.n_capital,), dtype=TENSORFLOW_DTYPE)
        beta = tf.constant(self.params.discount_factor, dtype=TENSORFLOW_DTYPE)
        policy_idx = tf.zeros((self.n_capital,), dtype=tf.int32)
        state = ConvergenceState()

        for iteration in range(1, config.max_iterations + 1):
            v_next, policy_idx = bellman_step(v_curr, flow, beta)
            error = convergence_error(v_next, v_curr, config.error_metric)
            v_curr = v_next
            state = state.advance(error)

            if iteration % config.log_every == 0:
                logger.info("iteration %d, error=%.3e", iteration, error)

            if error < config.tolerance:
                state = state.mark_converged()
                logger.info(
                    "Discretized VFI converged in %d iterations (diff=%.2e).",
                    iteration,
                    error,
                )
                break
        else:
            state = state.mark_exceeded()
            logger.warning(
                "Discretized VFI did not converge after %d iterations "
                "(final diff=%.2e).",
                config.max_iterations,
                state.error,
            )

        return v_curr, policy_idx, state

    # ------------------------------------------------------------------
    # Public entry point
    # ------------------------------------------------------------------

    def solve(self) -> DiscreteSolution:
        """Solve the growth model by brute-force value function iteration.

        Returns
        -------
        DiscreteSolution
            Grid, converged values, policy indices, policy capital,
            policy consumption and convergence state.
        """
        logger.info(
            "Starting DiscretizedVFISolver.solve() — n_k=%d, "
            "domain=[%.4f, %.4f], tol=%.1e",
            self.n_capital,
            self.k_min,
            self.k_max,
            self.config.tolerance,
        )

        flow = self.compute_flow()
        v_curr, policy_idx, state = self._run_bellman_iteration(flow)

        policy_capital = extract_discrete_policies(self.k_grid, policy_idx)
        policy_consumption = (
            ProductionFunctions.cobb_douglas(self.k_grid, self.params)
            - policy_capital
        )

        return DiscreteSolution(
            params=self.params,
            config=self.config,
            capital_grid=self.k_grid.numpy(),
            values=v_curr.numpy(),
            policy_index=policy_idx.numpy(),
            policy_capital=policy_capital.numpy(),
            policy_consumption=policy_consumption.numpy(),
            k_ss=float(self.k_ss),
            state=state,
        )
