"""Unit tests for grid_utils: 1-D interpolation used on grid policies."""

from __future__ import annotations

import numpy as np
import tensorflow as tf

tf.config.set_visible_devices([], 'GPU')

import pytest

from growth_models.grids.grid_utils import (
    _interp_1d_batch_core,
    interp_1d_batch,
)


def _f64(values):
    return tf.constant(values, dtype=tf.float64)


class TestInterp1dBatch:
    """Tests for 1-D batch linear interpolation."""

    def test_at_grid_points(self):
        """Interpolation at grid points returns exact values."""
        x = _f64([0.1, 0.2, 0.3, 0.4])
        y = _f64([0.05, 0.07, 0.08, 0.11])
        result = interp_1d_batch(x, y, x).numpy()
        np.testing.assert_allclose(result, y.numpy(), atol=1e-14)

    def test_midpoints(self):
        """Interpolation at midpoints returns mean of neighbors."""
        x = _f64([0.0, 1.0, 2.0])
        y = _f64([0.0, 10.0, 20.0])
        result = interp_1d_batch(x, y, _f64([0.5, 1.5])).numpy()
        np.testing.assert_allclose(result, [5.0, 15.0], atol=1e-12)

    def test_outside_grid_held_at_ends(self):
        """Out-of-bounds queries are held at the boundary values."""
        x = _f64([1.0, 2.0, 3.0])
        y = _f64([10.0, 20.0, 30.0])
        result = interp_1d_batch(x, y, _f64([0.0, 4.0])).numpy()
        assert result[0] == pytest.approx(10.0)
        assert result[1] == pytest.approx(30.0)

    def test_batch_dims(self):
        """Works with 2-D y_vals (batch dimension)."""
        x = _f64([0.0, 1.0, 2.0])
        y = _f64([
            [0.0, 0.0],
            [10.0, 20.0],
            [20.0, 40.0],
        ])
        result = interp_1d_batch(x, y, _f64([0.5, 1.5])).numpy()
        assert result.shape == (2, 2)
        np.testing.assert_allclose(result, [[5.0, 10.0], [15.0, 30.0]], atol=1e-12)

    def test_float32_inputs_promoted(self):
        x = tf.constant([0.0, 1.0])
        y = tf.constant([0.0, 10.0])
        result = interp_1d_batch(x, y, tf.constant([0.3]))
        assert result.dtype == tf.float64
        np.testing.assert_allclose(result.numpy(), [3.0], atol=1e-6)

    def test_core_matches_compiled(self):
        """Core (undecorated) and compiled versions give same result."""
        x = _f64([0.0, 1.0, 2.0, 3.0])
        y = _f64([1.0, 4.0, 2.0, 7.0])
        xq = _f64([0.25, 1.75, 2.5])
        r1 = _interp_1d_batch_core(x, y, xq).numpy()
        r2 = interp_1d_batch(x, y, xq).numpy()
        np.testing.assert_allclose(r1, r2, atol=1e-12)
