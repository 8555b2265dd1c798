# growth_models/grids/grid_utils.py
"""
Grid utility functions for the discretized solver and simulator.

Contains:
    * ``interp_1d_batch`` / ``_interp_1d_batch_core`` – 1-D linear (XLA)

``_*_core`` variants are undecorated for nesting inside other
``@tf.function(jit_compile=True)`` functions; the public wrapper
carries the XLA decorator for standalone use.
"""

import tensorflow as tf

from growth_models.core.types import TENSORFLOW_DTYPE

ACCUM_DTYPE = TENSORFLOW_DTYPE


def _interp_1d_batch_core(
    x_grid: tf.Tensor,
    y_vals: tf.Tensor,
    x_query: tf.Tensor,
) -> tf.Tensor:
    """
    Core batch 1-D linear interpolation (undecorated).

    Queries outside the grid are held at the nearest end value.

    Args:
        x_grid:  (N,)    sorted 1-D knot positions.
        y_vals:  (N, ...) values at knot positions; trailing dims are batched.
        x_query: (M,)    query positions.

    Returns:
        (M, ...) interpolated values with the same trailing shape as y_vals.
    """
    x_grid = tf.cast(x_grid, ACCUM_DTYPE)
    y_vals = tf.cast(y_vals, ACCUM_DTYPE)
    x_query = tf.cast(x_query, ACCUM_DTYPE)

    n = tf.shape(x_grid)[0]
    xq = tf.reshape(x_query, [-1])

    idx_hi = tf.searchsorted(x_grid, xq, side='right')
    idx_hi = tf.clip_by_value(idx_hi, 1, n - 1)
    idx_lo = idx_hi - 1

    x_lo = tf.gather(x_grid, idx_lo)
    x_hi = tf.gather(x_grid, idx_hi)

    denom = tf.maximum(x_hi - x_lo, tf.constant(1e-12, dtype=ACCUM_DTYPE))
    w = tf.clip_by_value((xq - x_lo) / denom, 0.0, 1.0)

    y_lo = tf.gather(y_vals, idx_lo, axis=0)
    y_hi = tf.gather(y_vals, idx_hi, axis=0)

    y_rank = len(y_vals.shape)
    if y_rank > 1:
        w = tf.reshape(w, [-1] + [1] * (y_rank - 1))

    return (1.0 - w) * y_lo + w * y_hi


@tf.function(jit_compile=True)
def interp_1d_batch(
    x_grid: tf.Tensor,
    y_vals: tf.Tensor,
    x_query: tf.Tensor,
) -> tf.Tensor:
    """
    XLA-compiled, batch-vectorised 1-D linear interpolation.

    Standalone wrapper for use outside other @tf.function scopes.

    Args:
        x_grid:  (N,) sorted knot positions.
        y_vals:  (N, ...) values at knot positions.
        x_query: (M,) query positions.

    Returns:
        (M, ...) interpolated values.
    """
    return _interp_1d_batch_core(x_grid, y_vals, x_query)
