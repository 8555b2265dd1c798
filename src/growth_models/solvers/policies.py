"""Policy extraction for solved models.

Contains pure functions that map solver output to a consumption policy
at arbitrary capital levels:

* discretized VFI — grid indices to continuous values, and linear
  interpolation between grid points;
* collocation VFI — re-solve the one-step Bellman maximisation against
  the converged value function;
* FPI / TI — evaluate the fitted policy polynomial.
"""

from __future__ import annotations

from typing import Union

import numpy as np
import tensorflow as tf

from growth_models.config.solver_config import Algorithm
from growth_models.core.types import NUMPY_DTYPE, TENSORFLOW_DTYPE, Array, Numeric
from growth_models.econ.growth_model import GrowthModel
from growth_models.grids.grid_utils import interp_1d_batch
from growth_models.solvers.results import CollocationSolution, DiscreteSolution
from growth_models.solvers.strategies import BellmanNodeProblem

ACCUM_DTYPE: tf.DType = TENSORFLOW_DTYPE

Solution = Union[CollocationSolution, DiscreteSolution]


def extract_discrete_policies(
    k_grid: tf.Tensor,
    policy_idx: tf.Tensor,
) -> tf.Tensor:
    """Map discrete policy indices to continuous capital values.

    Parameters
    ----------
    k_grid : tf.Tensor
        Capital grid, shape ``(n_k,)``.
    policy_idx : tf.Tensor
        Grid indices of optimal k', shape ``(n_k,)``.

    Returns
    -------
    tf.Tensor
        Continuous k' values, shape ``(n_k,)``.
    """
    return tf.gather(k_grid, policy_idx)


def recover_vfi_consumption(
    model: GrowthModel,
    capital: float,
    coefficients: Numeric,
    restrict_next_state: bool = True,
) -> float:
    """Maximising consumption at *capital* under value coefficients.

    Parameters
    ----------
    model : GrowthModel
        Model whose approximant matches *coefficients*.
    capital : float
        Capital level (need not be a node).
    coefficients : array-like
        Value-function coefficients.
    restrict_next_state : bool
        Search only consumption that keeps k' inside the domain.

    Returns
    -------
    float
        Optimal consumption.
    """
    coefficients = tf.convert_to_tensor(coefficients, dtype=ACCUM_DTYPE)
    lower, upper = model.control_bracket(float(capital), restrict_next_state)
    problem = BellmanNodeProblem(model, float(capital), coefficients, lower, upper)
    consumption, _ = problem.solve()
    return consumption


def consumption_policy(solution: Solution, capital: Numeric) -> Array:
    """Consumption chosen at *capital* by a solved model.

    Parameters
    ----------
    solution : CollocationSolution or DiscreteSolution
        Output of any solver.
    capital : float or array-like
        Capital levels.

    Returns
    -------
    ndarray
        Consumption with the shape of *capital*.
    """
    capital = np.asarray(capital, dtype=NUMPY_DTYPE)

    if isinstance(solution, DiscreteSolution):
        consumption = interp_1d_batch(
            solution.capital_grid,
            solution.policy_consumption,
            np.reshape(capital, (-1,)),
        )
        return np.reshape(consumption.numpy(), capital.shape)

    if solution.algorithm is Algorithm.VFI:
        restrict = solution.config.restrict_next_state
        consumption = [
            recover_vfi_consumption(
                solution.model, k, solution.coefficients, restrict
            )
            for k in np.reshape(capital, (-1,))
        ]
        return np.reshape(np.array(consumption, dtype=NUMPY_DTYPE), capital.shape)

    return solution.evaluate(capital)
