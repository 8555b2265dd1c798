"""Scalar optimisation and root-finding on a bracket.

The collocation solvers only need two capabilities from a numerical
library: maximise a scalar function over an interval, and find a root of
a scalar function inside a sign-changing interval.  Both wrap
:mod:`scipy.optimize` and always return a point inside the bracket.
"""

from __future__ import annotations

import logging
from typing import Callable

from scipy import optimize

logger = logging.getLogger(__name__)

# Absolute tolerance on the maximiser.  Consumption levels in the growth
# model are O(0.1), so 1e-10 leaves ~9 significant digits.
MAXIMIZE_XATOL: float = 1e-10
MAXIMIZE_MAXITER: int = 500

ROOT_XTOL: float = 1e-14
ROOT_MAXITER: int = 200


def maximize_scalar(
    objective: Callable[[float], float],
    lower: float,
    upper: float,
) -> float:
    """Return the maximiser of *objective* on the open interval ``(lower, upper)``.

    Parameters
    ----------
    objective : callable
        Scalar function ``float -> float``.
    lower, upper : float
        Bracket, ``lower < upper``.

    Returns
    -------
    float
        Argmax, strictly inside the bracket.

    Raises
    ------
    ValueError
        If the bracket is empty.
    RuntimeError
        If the bounded search fails to converge.
    """
    if not lower < upper:
        raise ValueError(
            f"Empty bracket for maximisation: ({lower}, {upper})."
        )

    result = optimize.minimize_scalar(
        lambda x: -objective(x),
        bounds=(lower, upper),
        method="bounded",
        options={"xatol": MAXIMIZE_XATOL, "maxiter": MAXIMIZE_MAXITER},
    )
    if not result.success:
        raise RuntimeError(
            f"Bounded maximisation on ({lower:.6g}, {upper:.6g}) failed: "
            f"{result.message}"
        )
    return float(result.x)


def find_root(
    residual: Callable[[float], float],
    lower: float,
    upper: float,
) -> float:
    """Return a root of *residual* inside ``[lower, upper]`` (Brent's method).

    Parameters
    ----------
    residual : callable
        Scalar function ``float -> float`` that changes sign on the bracket.
    lower, upper : float
        Bracket, ``lower < upper``.

    Returns
    -------
    float
        Root inside the bracket.

    Raises
    ------
    ValueError
        If the bracket is empty or *residual* does not change sign on it.
    RuntimeError
        If Brent's method does not converge.
    """
    if not lower < upper:
        raise ValueError(f"Empty bracket for root-finding: ({lower}, {upper}).")

    root, info = optimize.brentq(
        residual,
        lower,
        upper,
        xtol=ROOT_XTOL,
        maxiter=ROOT_MAXITER,
        full_output=True,
        disp=False,
    )
    if not info.converged:
        raise RuntimeError(
            f"Root-finding on ({lower:.6g}, {upper:.6g}) did not converge "
            f"after {info.iterations} iterations: {info.flag}"
        )
    return float(root)


def brackets_root(
    residual: Callable[[float], float],
    lower: float,
    upper: float,
) -> bool:
    """Return True if *residual* takes opposite signs at the bracket ends."""
    return residual(lower) * residual(upper) < 0.0
