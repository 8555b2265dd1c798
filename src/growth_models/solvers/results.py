"""Convergence state and solution containers returned by the solvers.

All arrays on a solution are NumPy copies so that results can be saved
or inspected without TensorFlow.  Solutions are immutable.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from functools import cached_property
from typing import Any, Dict, List, Tuple

import numpy as np

from growth_models.approximation.chebyshev import ChebyshevApproximant
from growth_models.config.economic_params import EconomicParams
from growth_models.config.solver_config import (
    Algorithm,
    CollocationConfig,
    DiscreteGridConfig,
)
from growth_models.core.types import NUMPY_DTYPE, Array
from growth_models.econ.growth_model import GrowthModel
from growth_models.grids.grid_builder import CollocationGrid


class SolverStatus(str, Enum):
    """Lifecycle of one solve."""

    INITIALIZED = "initialized"
    ITERATING = "iterating"
    CONVERGED = "converged"
    MAX_ITERATIONS_EXCEEDED = "max_iterations_exceeded"


@dataclass(frozen=True)
class ConvergenceState:
    """Iteration counter, latest error and status of a solve.

    Parameters
    ----------
    iteration : int
        Number of completed iterations.
    error : float
        Error metric of the latest iteration (``inf`` before the first).
    status : SolverStatus
        Current lifecycle state.
    """

    iteration: int = 0
    error: float = math.inf
    status: SolverStatus = SolverStatus.INITIALIZED

    def advance(self, error: float) -> "ConvergenceState":
        """Record one completed iteration."""
        return ConvergenceState(
            iteration=self.iteration + 1,
            error=float(error),
            status=SolverStatus.ITERATING,
        )

    def mark_converged(self) -> "ConvergenceState":
        return replace(self, status=SolverStatus.CONVERGED)

    def mark_exceeded(self) -> "ConvergenceState":
        return replace(self, status=SolverStatus.MAX_ITERATIONS_EXCEEDED)

    @property
    def converged(self) -> bool:
        return self.status is SolverStatus.CONVERGED

    @property
    def terminated(self) -> bool:
        return self.status in (
            SolverStatus.CONVERGED,
            SolverStatus.MAX_ITERATIONS_EXCEEDED,
        )


@dataclass(frozen=True)
class CollocationSolution:
    """Output of :class:`~growth_models.solvers.engine.CollocationSolver`.

    Attributes
    ----------
    algorithm : Algorithm
        VFI, FPI or TI.
    params : EconomicParams
        Model primitives used for the solve.
    config : CollocationConfig
        Solver configuration used for the solve.
    grid : CollocationGrid
        Collocation grid (nodes, design matrix and inverse).
    coefficients : ndarray
        Final coefficient vector, shape ``(n,)``.  Value-function
        coefficients for VFI, consumption-policy coefficients otherwise.
    node_values : ndarray
        Node values from the final iteration, shape ``(n,)``.
    node_controls : ndarray
        Consumption at each node from the final iteration.
    history : list of (int, ndarray)
        Coefficient snapshots ``(iteration, coefficients)``.
    state : ConvergenceState
        Final convergence state.
    """

    algorithm: Algorithm
    params: EconomicParams
    config: CollocationConfig
    grid: CollocationGrid
    coefficients: Array
    node_values: Array
    node_controls: Array
    history: List[Tuple[int, Array]] = field(default_factory=list)
    state: ConvergenceState = field(default_factory=ConvergenceState)

    @property
    def converged(self) -> bool:
        return self.state.converged

    @property
    def iterations(self) -> int:
        return self.state.iteration

    @property
    def capital_nodes(self) -> Array:
        return self.grid.capital.numpy()

    @cached_property
    def approximant(self) -> ChebyshevApproximant:
        """Approximant on the solution's domain (built once per solution)."""
        return ChebyshevApproximant(self.grid.scaler, self.grid.n)

    @cached_property
    def model(self) -> GrowthModel:
        return GrowthModel(self.params, self.approximant)

    def evaluate(self, capital: Any) -> Array:
        """Evaluate the fitted polynomial Γ(k; b) at *capital*."""
        capital = np.asarray(capital, dtype=NUMPY_DTYPE)
        return self.approximant(capital, self.coefficients).numpy()

    def as_dict(self) -> Dict[str, Any]:
        """Package the solution into a serialisable dictionary."""
        iterations = np.array([it for it, _ in self.history], dtype=np.int64)
        snapshots = (
            np.stack([c for _, c in self.history])
            if self.history
            else np.empty((0, self.grid.n))
        )
        return {
            "algorithm": self.algorithm.value,
            "coefficients": self.coefficients,
            "node_values": self.node_values,
            "node_controls": self.node_controls,
            "capital_nodes": self.capital_nodes,
            "canonical_nodes": self.grid.canonical_nodes.numpy(),
            "k_min": float(self.grid.scaler.lower),
            "k_max": float(self.grid.scaler.upper),
            "history_iterations": iterations,
            "history_coefficients": snapshots,
            "iterations": self.state.iteration,
            "final_error": self.state.error,
            "status": self.state.status.value,
            "capital_share": self.params.capital_share,
            "discount_factor": self.params.discount_factor,
            "risk_aversion": self.params.risk_aversion,
        }


@dataclass(frozen=True)
class DiscreteSolution:
    """Output of :class:`~growth_models.solvers.discrete.DiscretizedVFISolver`.

    Attributes
    ----------
    params : EconomicParams
        Model primitives used for the solve.
    config : DiscreteGridConfig
        Grid configuration used for the solve.
    capital_grid : ndarray
        Evenly spaced capital grid, ascending, shape ``(n_k,)``.
    values : ndarray
        Converged value function on the grid.
    policy_index : ndarray
        Grid index of optimal next-period capital.
    policy_capital : ndarray
        Optimal next-period capital.
    policy_consumption : ndarray
        Implied consumption ``f(k) - k'``.
    k_ss : float
        Steady-state capital.
    state : ConvergenceState
        Final convergence state.
    """

    params: EconomicParams
    config: DiscreteGridConfig
    capital_grid: Array
    values: Array
    policy_index: Array
    policy_capital: Array
    policy_consumption: Array
    k_ss: float
    state: ConvergenceState

    algorithm = Algorithm.DISCRETIZED_VFI

    @property
    def converged(self) -> bool:
        return self.state.converged

    @property
    def iterations(self) -> int:
        return self.state.iteration

    def as_dict(self) -> Dict[str, Any]:
        """Package the solution into a serialisable dictionary."""
        return {
            "algorithm": self.algorithm.value,
            "V": self.values,
            "K": self.capital_grid,
            "policy_idx": self.policy_index,
            "policy_k_values": self.policy_capital,
            "policy_c_values": self.policy_consumption,
            "k_ss": float(self.k_ss),
            "k_min": float(self.capital_grid[0]),
            "k_max": float(self.capital_grid[-1]),
            "iterations": self.state.iteration,
            "final_error": self.state.error,
            "status": self.state.status.value,
            "capital_share": self.params.capital_share,
            "discount_factor": self.params.discount_factor,
            "risk_aversion": self.params.risk_aversion,
        }
