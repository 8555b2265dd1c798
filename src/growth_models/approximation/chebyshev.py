"""Chebyshev polynomial basis and approximant.

Contains:

* :class:`ChebyshevBasis` — collocation nodes, polynomial evaluation by
  the three-term recursion, and the design matrix with its inverse.
* :class:`ChebyshevApproximant` — evaluates Γ(k; b) = Σ_j b_j T_j(z(k))
  at physical states and refits coefficients from node values.

The design-matrix inverse is computed once per grid and reused for every
refit, so each iteration of a solver costs one matrix-vector product.
"""

from __future__ import annotations

import logging
import math
from typing import Tuple

import tensorflow as tf

from growth_models.approximation.scaling import StateScaler
from growth_models.core.types import TENSORFLOW_DTYPE, Numeric, Tensor

logger = logging.getLogger(__name__)

# Design matrices with a larger condition number are rejected at grid
# construction.  Chebyshev nodes give cond ~ sqrt(2) for any n.
MAX_CONDITION_NUMBER: float = 1e12


class ChebyshevBasis:
    """Static methods for Chebyshev polynomials of the first kind."""

    @staticmethod
    def nodes(n: int) -> Tensor:
        """Return the ``n`` zeros of T_n in formula order.

        ``k_j = cos(π (2j - 1) / (2n))`` for ``j = 1..n``, i.e. descending
        from near 1 to near -1.  The order is kept as-is: the physical
        grid is built positionally from it.

        Parameters
        ----------
        n : int
            Number of nodes, ``n >= 1``.

        Returns
        -------
        Tensor
            Canonical nodes, shape ``(n,)``.

        Raises
        ------
        ValueError
            If ``n < 1``.
        """
        if n < 1:
            raise ValueError(f"Number of Chebyshev nodes must be >= 1, got {n}.")
        j = tf.range(1, n + 1, dtype=TENSORFLOW_DTYPE)
        return tf.cos(math.pi * (2.0 * j - 1.0) / (2.0 * n))

    @staticmethod
    def evaluate(x: Numeric, order: int) -> Tensor:
        """Evaluate T_order at ``x`` (scalar or vector).

        Uses ``T0 = 1``, ``T1 = x``, ``Tm = 2x T(m-1) - T(m-2)``.

        Raises
        ------
        ValueError
            If *order* is negative.
        """
        if order < 0:
            raise ValueError(f"Polynomial order must be >= 0, got {order}.")
        x = tf.convert_to_tensor(x, dtype=TENSORFLOW_DTYPE)
        t_prev = tf.ones_like(x)
        if order == 0:
            return t_prev
        t_curr = x
        for _ in range(2, order + 1):
            t_prev, t_curr = t_curr, 2.0 * x * t_curr - t_prev
        return t_curr

    @staticmethod
    def basis_matrix(x: Numeric, n: int) -> Tensor:
        """Evaluate T_0 … T_{n-1} at ``x`` in a single recursion pass.

        Parameters
        ----------
        x : scalar or Tensor
            Canonical points, shape ``()`` or ``(m,)``.
        n : int
            Number of basis functions.

        Returns
        -------
        Tensor
            Shape ``(n,)`` for scalar *x*, ``(m, n)`` for vector *x*;
            entry ``[..., j] = T_j(x)``.
        """
        x = tf.convert_to_tensor(x, dtype=TENSORFLOW_DTYPE)
        columns = [tf.ones_like(x)]
        if n > 1:
            columns.append(x)
        for _ in range(2, n):
            columns.append(2.0 * x * columns[-1] - columns[-2])
        return tf.stack(columns, axis=-1)

    @staticmethod
    def design_matrix(nodes: Numeric, n: int) -> Tuple[Tensor, Tensor]:
        """Build the ``n x n`` design matrix at *nodes* and its inverse.

        Parameters
        ----------
        nodes : Tensor
            Canonical nodes, shape ``(n,)``.
        n : int
            Number of basis functions.

        Returns
        -------
        matrix : Tensor
            ``matrix[i, j] = T_j(nodes[i])``.
        inverse : Tensor
            ``matrix^{-1}``.

        Raises
        ------
        ValueError
            If the node count differs from *n*, or the matrix is singular
            or ill-conditioned (e.g. coinciding nodes).
        """
        nodes = tf.convert_to_tensor(nodes, dtype=TENSORFLOW_DTYPE)
        if nodes.shape.rank != 1 or nodes.shape[0] != n:
            raise ValueError(
                f"Design matrix needs exactly {n} nodes, got shape {nodes.shape}."
            )

        matrix = ChebyshevBasis.basis_matrix(nodes, n)

        singular_values = tf.linalg.svd(matrix, compute_uv=False)
        s_max = float(singular_values[0])
        s_min = float(singular_values[-1])
        if s_min <= 0.0 or s_max / s_min > MAX_CONDITION_NUMBER:
            raise ValueError(
                f"Design matrix is singular or ill-conditioned "
                f"(singular values {s_max:.3e} .. {s_min:.3e}); "
                f"collocation nodes must be distinct."
            )

        inverse = tf.linalg.inv(matrix)
        logger.debug(
            "Design matrix built: n=%d, cond=%.3e", n, s_max / s_min
        )
        return matrix, inverse


class ChebyshevApproximant:
    """Polynomial approximant Γ(k; b) on a physical capital domain.

    Parameters
    ----------
    scaler : StateScaler
        Physical ↔ canonical map.
    n : int
        Number of basis functions (length of every coefficient vector).
    """

    def __init__(self, scaler: StateScaler, n: int) -> None:
        if n < 1:
            raise ValueError(f"Approximant needs n >= 1, got {n}.")
        self.scaler: StateScaler = scaler
        self.n: int = n
        self._evaluate = tf.function(self._evaluate_core)

    def _evaluate_core(self, x: Tensor, coefficients: Tensor) -> Tensor:
        canonical = self.scaler.to_canonical(x)
        basis = ChebyshevBasis.basis_matrix(canonical, self.n)
        return tf.reduce_sum(basis * coefficients, axis=-1)

    def __call__(self, x: Numeric, coefficients: Numeric) -> Tensor:
        """Evaluate the approximant at physical states *x*.

        Parameters
        ----------
        x : scalar or Tensor
            Physical states, shape ``()`` or ``(m,)``.
        coefficients : Tensor
            Coefficient vector, shape ``(n,)``.

        Returns
        -------
        Tensor
            Approximant values with the shape of *x*.
        """
        x = tf.convert_to_tensor(x, dtype=TENSORFLOW_DTYPE)
        coefficients = tf.convert_to_tensor(coefficients, dtype=TENSORFLOW_DTYPE)
        if coefficients.shape != (self.n,):
            raise ValueError(
                f"Expected {self.n} coefficients, got shape {coefficients.shape}."
            )
        return self._evaluate(x, coefficients)

    def evaluate_scalar(self, x: float, coefficients: Tensor) -> float:
        """Evaluate at a single physical state and return a Python float."""
        return float(self(x, coefficients))

    @staticmethod
    def fit(node_values: Numeric, basis_inverse: Tensor) -> Tensor:
        """Coefficients that interpolate *node_values*: ``basis_inverse @ values``."""
        node_values = tf.convert_to_tensor(node_values, dtype=TENSORFLOW_DTYPE)
        return tf.linalg.matvec(basis_inverse, node_values)
