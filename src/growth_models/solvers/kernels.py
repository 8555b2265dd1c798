"""Numerical kernels shared by the collocation and discretized solvers.

Contains:

- ``bellman_step`` — one brute-force Bellman sweep over a finite grid
  (max and argmax over every candidate next-period state)
- ``sup_norm_diff`` — ‖a − b‖∞
- ``convergence_error`` — absolute or floored relative change
- ``damped_update`` — convex combination of a fresh refit and the
  previous coefficients

``bellman_step`` and ``sup_norm_diff`` have undecorated ``_core``
variants for nesting inside other XLA scopes.
"""

from __future__ import annotations

from typing import Tuple

import tensorflow as tf

from growth_models.config.solver_config import ErrorMetric
from growth_models.core.types import TENSORFLOW_DTYPE

ACCUM_DTYPE: tf.DType = TENSORFLOW_DTYPE

# Denominator floor of the relative error.  The previous values at
# iteration 1 come from the initial guess and may be exactly zero.
RELATIVE_ERROR_FLOOR: float = 1e-10


def bellman_step_core(
    v_curr: tf.Tensor,
    flow: tf.Tensor,
    beta: tf.Tensor,
) -> Tuple[tf.Tensor, tf.Tensor]:
    """One Bellman sweep on a finite grid (undecorated).

    Parameters
    ----------
    v_curr : tf.Tensor
        Value function on the grid, ``(n_k,)``.
    flow : tf.Tensor
        Flow utility of moving from ``k_i`` to ``k_j``, ``(n_k, n_k)``;
        infeasible pairs carry a large negative penalty.
    beta : tf.Tensor
        Scalar discount factor.

    Returns
    -------
    v_next : tf.Tensor
        Updated value function, ``(n_k,)``.
    policy_idx : tf.Tensor
        Index of the maximising ``k_j`` for each ``k_i``, ``(n_k,)`` int32.
    """
    rhs = flow + beta * tf.expand_dims(v_curr, 0)
    v_next = tf.reduce_max(rhs, axis=1)
    policy_idx = tf.argmax(rhs, axis=1, output_type=tf.int32)
    return v_next, policy_idx


@tf.function(jit_compile=True)
def bellman_step(
    v_curr: tf.Tensor,
    flow: tf.Tensor,
    beta: tf.Tensor,
) -> Tuple[tf.Tensor, tf.Tensor]:
    """One Bellman sweep on a finite grid (XLA-compiled).

    See :func:`bellman_step_core` for parameter documentation.
    """
    return bellman_step_core(v_curr, flow, beta)


def sup_norm_diff_core(a: tf.Tensor, b: tf.Tensor) -> tf.Tensor:
    """Compute the sup-norm ``‖a − b‖∞`` (undecorated)."""
    return tf.reduce_max(tf.abs(a - b))


@tf.function(jit_compile=True)
def sup_norm_diff(a: tf.Tensor, b: tf.Tensor) -> tf.Tensor:
    """Compute the sup-norm ``‖a − b‖∞`` (XLA-compiled)."""
    return sup_norm_diff_core(a, b)


def relative_diff(a: tf.Tensor, b: tf.Tensor) -> tf.Tensor:
    """Compute ``max_i |a_i − b_i| / max(|b_i|, RELATIVE_ERROR_FLOOR)``."""
    denominator = tf.maximum(tf.abs(b), RELATIVE_ERROR_FLOOR)
    return tf.reduce_max(tf.abs(a - b) / denominator)


def convergence_error(
    values: tf.Tensor,
    previous: tf.Tensor,
    metric: ErrorMetric,
) -> float:
    """Change between successive node (or grid) values.

    Parameters
    ----------
    values, previous : tf.Tensor
        Current and previous values, same shape.
    metric : ErrorMetric
        ``RELATIVE`` divides by the floored magnitude of *previous*.

    Returns
    -------
    float
        Scalar error.
    """
    values = tf.cast(values, ACCUM_DTYPE)
    previous = tf.cast(previous, ACCUM_DTYPE)
    if metric is ErrorMetric.RELATIVE:
        return float(relative_diff(values, previous))
    return float(sup_norm_diff_core(values, previous))


def damped_update(
    refit: tf.Tensor,
    previous: tf.Tensor,
    weight: float,
) -> tf.Tensor:
    """Return ``weight * refit + (1 − weight) * previous``."""
    if weight == 1.0:
        return refit
    return weight * refit + (1.0 - weight) * previous
