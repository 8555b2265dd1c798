"""Single entry point selecting a solver by algorithm tag."""

from __future__ import annotations

import logging
from typing import Optional, Union

from growth_models.config.economic_params import EconomicParams
from growth_models.config.solver_config import (
    Algorithm,
    CollocationConfig,
    DiscreteGridConfig,
)
from growth_models.core.types import Numeric
from growth_models.solvers.discrete import DiscretizedVFISolver
from growth_models.solvers.engine import CollocationSolver
from growth_models.solvers.policies import Solution

logger = logging.getLogger(__name__)


def solve(
    algorithm: Union[Algorithm, str],
    params: EconomicParams,
    config: Optional[Union[CollocationConfig, DiscreteGridConfig]] = None,
    initial_coefficients: Optional[Numeric] = None,
) -> Solution:
    """Solve the growth model with the selected algorithm.

    Args:
        algorithm: ``vfi``, ``fpi``, ``ti`` or ``discrete``.
        params: Economic parameters.
        config: CollocationConfig for the collocation algorithms,
            DiscreteGridConfig for ``discrete``.  None uses defaults.
        initial_coefficients: Starting coefficients (collocation only).

    Returns:
        CollocationSolution or DiscreteSolution.

    Raises:
        TypeError: If *config* does not match the algorithm.
        ValueError: If initial coefficients are given for ``discrete``.
    """
    algorithm = Algorithm(algorithm)

    if algorithm is Algorithm.DISCRETIZED_VFI:
        if config is not None and not isinstance(config, DiscreteGridConfig):
            raise TypeError(
                f"Discretized VFI needs a DiscreteGridConfig, "
                f"got {type(config).__name__}."
            )
        if initial_coefficients is not None:
            raise ValueError(
                "Discretized VFI has no coefficients; "
                "initial_coefficients must be None."
            )
        return DiscretizedVFISolver(params, config).solve()

    if config is not None and not isinstance(config, CollocationConfig):
        raise TypeError(
            f"{algorithm.value.upper()} needs a CollocationConfig, "
            f"got {type(config).__name__}."
        )
    solver = CollocationSolver(params, config, algorithm)
    return solver.solve(initial_coefficients)
