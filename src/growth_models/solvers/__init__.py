"""Solution algorithms for the deterministic growth model.

Modules
-------
engine
    Collocation iteration loop (VFI, FPI, TI).
strategies
    Per-algorithm node computations.
discrete
    Brute-force VFI on an evenly spaced grid.
kernels
    Bellman sweep, error metrics, damping.
policies
    Consumption policy from any solution.
diagnostics
    Euler-equation errors.
dispatch
    ``solve(algorithm, params, config)``.
"""

from growth_models.solvers.diagnostics import euler_errors
from growth_models.solvers.discrete import DiscretizedVFISolver
from growth_models.solvers.dispatch import solve
from growth_models.solvers.engine import CollocationSolver
from growth_models.solvers.policies import consumption_policy
from growth_models.solvers.results import (
    CollocationSolution,
    ConvergenceState,
    DiscreteSolution,
    SolverStatus,
)

__all__ = [
    "CollocationSolution",
    "CollocationSolver",
    "ConvergenceState",
    "DiscreteSolution",
    "DiscretizedVFISolver",
    "SolverStatus",
    "consumption_policy",
    "euler_errors",
    "solve",
]
