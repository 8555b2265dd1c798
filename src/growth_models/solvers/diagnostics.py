"""Accuracy diagnostics for solved models.

Euler-equation errors measure how far a consumption policy is from
satisfying u'(c(k)) = β u'(c(k')) f'(k') at arbitrary capital levels,
not only at the collocation nodes.  The unit-free form

    EE(k) = 1 − (β u'(c(k')) f'(k'))^(-1/η) / c(k)

is the fractional consumption mistake an agent makes by following the
policy for one period; ``log10 |EE|`` is the usual summary.
"""

from __future__ import annotations

import logging

import numpy as np

from growth_models.core.types import NUMPY_DTYPE, Array, Numeric
from growth_models.econ import CRRAUtility, ProductionFunctions
from growth_models.solvers.policies import Solution, consumption_policy

logger = logging.getLogger(__name__)


def euler_errors(solution: Solution, capital: Numeric) -> Array:
    """Unit-free Euler-equation errors of a solution's policy.

    Parameters
    ----------
    solution : CollocationSolution or DiscreteSolution
        Output of any solver.
    capital : array-like
        Capital levels at which to evaluate, shape ``(m,)``.

    Returns
    -------
    ndarray
        Errors with the shape of *capital*.

    Raises
    ------
    ValueError
        If the policy leaves no capital for next period at some point.
    """
    params = solution.params
    capital = np.asarray(capital, dtype=NUMPY_DTYPE)

    consumption = consumption_policy(solution, capital)
    k_next = ProductionFunctions.cobb_douglas(capital, params) - consumption
    if np.any(k_next <= 0.0):
        raise ValueError(
            "Policy consumes all output at some capital levels; "
            "Euler errors are undefined there."
        )
    c_next = consumption_policy(solution, k_next)

    rhs = (
        params.discount_factor
        * CRRAUtility.marginal_utility(c_next, params)
        * ProductionFunctions.marginal_product(k_next, params)
    )
    implied = CRRAUtility.inverse_marginal_utility(rhs, params)
    errors = 1.0 - implied / consumption

    logger.debug(
        "Euler errors: max |EE|=%.3e over %d points",
        float(np.max(np.abs(errors))),
        errors.size,
    )
    return errors
