"""Per-algorithm node computations for the collocation solver.

Each strategy turns a frozen coefficient vector into fresh node values:

* :class:`BellmanStrategy` (VFI) — maximise u(c) + β Γ(f(k) − c; b)
  over consumption at every node.
* :class:`FixedPointStrategy` (FPI) — closed-form Euler inversion,
  vectorised over all nodes in one call.
* :class:`TimeIterationStrategy` (TI) — root-find the Euler residual at
  every node against the prior policy.

Per-node sub-problems are small frozen dataclasses so that a node's
inputs cannot change while its optimiser runs.  Nodes are independent
and all read the same coefficients.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

import tensorflow as tf

from growth_models.approximation.chebyshev import ChebyshevApproximant
from growth_models.config.economic_params import EconomicParams
from growth_models.config.solver_config import Algorithm, CollocationConfig
from growth_models.core.optimize import brackets_root, find_root, maximize_scalar
from growth_models.core.types import TENSORFLOW_DTYPE, Numeric, Tensor
from growth_models.econ.growth_model import GrowthModel
from growth_models.econ.production import ProductionFunctions
from growth_models.grids.grid_builder import CollocationGrid
from growth_models.solvers.protocols import NodeUpdate, ResidualStrategy

logger = logging.getLogger(__name__)


def initial_consumption_guess(capital: Numeric, params: EconomicParams) -> Numeric:
    """Starting policy c₀(k) = (1 − αβ) k^α.

    Exact for log utility; a good start for any CRRA curvature.
    """
    saving_rate = params.capital_share * params.discount_factor
    return (1.0 - saving_rate) * ProductionFunctions.cobb_douglas(capital, params)


# ----------------------------------------------------------------------
# Per-node sub-problems
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class BellmanNodeProblem:
    """One-node Bellman maximisation over consumption.

    Parameters
    ----------
    model : GrowthModel
        Residual equations and approximant.
    capital : float
        Node capital k.
    coefficients : Tensor
        Frozen value-function coefficients.
    lower, upper : float
        Consumption bracket.
    """

    model: GrowthModel
    capital: float
    coefficients: Tensor
    lower: float
    upper: float

    def objective(self, consumption: float) -> float:
        return float(
            self.model.bellman_value(self.capital, consumption, self.coefficients)
        )

    def solve(self) -> Tuple[float, float]:
        """Return ``(maximising consumption, maximised value)``."""
        consumption = maximize_scalar(self.objective, self.lower, self.upper)
        return consumption, self.objective(consumption)


@dataclass(frozen=True)
class EulerNodeProblem:
    """One-node Euler root-find against the prior policy.

    Parameters
    ----------
    model : GrowthModel
        Residual equations and approximant.
    capital : float
        Node capital k.
    coefficients : Tensor
        Prior-iteration policy coefficients.
    restrict_next_state : bool
        Try the bracket that keeps k' in the domain first.
    """

    model: GrowthModel
    capital: float
    coefficients: Tensor
    restrict_next_state: bool = True

    def residual(self, consumption: float) -> float:
        return float(
            self.model.euler_root_residual(
                consumption, self.capital, self.coefficients
            )
        )

    def solve(self) -> float:
        """Return the Euler-consistent consumption at this node.

        Raises
        ------
        RuntimeError
            If neither the in-domain nor the full bracket changes sign.
        """
        lower, upper = self.model.control_bracket(
            self.capital, self.restrict_next_state
        )
        if brackets_root(self.residual, lower, upper):
            return find_root(self.residual, lower, upper)

        full_lower, full_upper = self.model.full_bracket(self.capital)
        if (full_lower, full_upper) != (lower, upper):
            logger.debug(
                "No sign change on in-domain bracket at k=%.6f; "
                "widening to (0, f(k)).",
                self.capital,
            )
            if brackets_root(self.residual, full_lower, full_upper):
                return find_root(self.residual, full_lower, full_upper)

        raise RuntimeError(
            f"Euler residual does not change sign on (0, f(k)) at "
            f"k={self.capital:.6g}; the prior policy is not admissible."
        )


# ----------------------------------------------------------------------
# Strategies
# ----------------------------------------------------------------------


class BellmanStrategy:
    """Collocation VFI: coefficients approximate the value function.

    Parameters
    ----------
    model : GrowthModel
        Residual equations and approximant.
    grid : CollocationGrid
        Collocation nodes and basis inverse.
    config : CollocationConfig
        Solver configuration (bracket restriction).
    """

    algorithm = Algorithm.VFI

    def __init__(
        self,
        model: GrowthModel,
        grid: CollocationGrid,
        config: CollocationConfig,
    ) -> None:
        self.model = model
        self.grid = grid
        self._capital: List[float] = [float(k) for k in grid.capital.numpy()]
        # Node capital is fixed, so the brackets are too.
        self._brackets: List[Tuple[float, float]] = [
            model.control_bracket(k, config.restrict_next_state)
            for k in self._capital
        ]

    def initial_coefficients(self) -> Tensor:
        """Fit V₀(k) = u(c₀(k)) / (1 − β) at the nodes."""
        c0 = initial_consumption_guess(self.grid.capital, self.model.params)
        v0 = self.model.utility(c0) / (1.0 - self.model.params.discount_factor)
        return ChebyshevApproximant.fit(v0, self.grid.basis_inverse)

    def node_values(self, coefficients: Tensor) -> NodeUpdate:
        values, controls = [], []
        for capital, (lower, upper) in zip(self._capital, self._brackets):
            problem = BellmanNodeProblem(
                self.model, capital, coefficients, lower, upper
            )
            consumption, value = problem.solve()
            values.append(value)
            controls.append(consumption)
        return NodeUpdate(
            values=tf.constant(values, dtype=TENSORFLOW_DTYPE),
            controls=tf.constant(controls, dtype=TENSORFLOW_DTYPE),
        )


class FixedPointStrategy:
    """Collocation FPI: coefficients approximate the consumption policy."""

    algorithm = Algorithm.FPI

    def __init__(
        self,
        model: GrowthModel,
        grid: CollocationGrid,
        config: CollocationConfig,
    ) -> None:
        self.model = model
        self.grid = grid

    def initial_coefficients(self) -> Tensor:
        c0 = initial_consumption_guess(self.grid.capital, self.model.params)
        return ChebyshevApproximant.fit(c0, self.grid.basis_inverse)

    def node_values(self, coefficients: Tensor) -> NodeUpdate:
        consumption = self.model.euler_fixed_point(self.grid.capital, coefficients)
        return NodeUpdate(values=consumption, controls=consumption)


class TimeIterationStrategy:
    """Collocation TI: coefficients approximate the consumption policy."""

    algorithm = Algorithm.TI

    def __init__(
        self,
        model: GrowthModel,
        grid: CollocationGrid,
        config: CollocationConfig,
    ) -> None:
        self.model = model
        self.grid = grid
        self.restrict_next_state = config.restrict_next_state
        self._capital: List[float] = [float(k) for k in grid.capital.numpy()]

    def initial_coefficients(self) -> Tensor:
        c0 = initial_consumption_guess(self.grid.capital, self.model.params)
        return ChebyshevApproximant.fit(c0, self.grid.basis_inverse)

    def node_values(self, coefficients: Tensor) -> NodeUpdate:
        consumption = [
            EulerNodeProblem(
                self.model, capital, coefficients, self.restrict_next_state
            ).solve()
            for capital in self._capital
        ]
        values = tf.constant(consumption, dtype=TENSORFLOW_DTYPE)
        return NodeUpdate(values=values, controls=values)


_STRATEGIES: Dict[Algorithm, Callable[..., ResidualStrategy]] = {
    Algorithm.VFI: BellmanStrategy,
    Algorithm.FPI: FixedPointStrategy,
    Algorithm.TI: TimeIterationStrategy,
}


def build_strategy(
    algorithm: Algorithm,
    model: GrowthModel,
    grid: CollocationGrid,
    config: CollocationConfig,
) -> ResidualStrategy:
    """Resolve the strategy for a collocation algorithm.

    Raises
    ------
    ValueError
        If *algorithm* is not a collocation algorithm.
    """
    algorithm = Algorithm(algorithm)
    try:
        strategy_cls = _STRATEGIES[algorithm]
    except KeyError:
        raise ValueError(
            f"{algorithm.value!r} is not a collocation algorithm; "
            f"expected one of {[a.value for a in _STRATEGIES]}."
        ) from None
    return strategy_cls(model, grid, config)
