"""Unit tests for solvers.kernels: bellman_step, error metrics, damping.

All tests run on CPU — no GPU required.
"""

from __future__ import annotations

import numpy as np
import tensorflow as tf

# Force CPU for CI
tf.config.set_visible_devices([], 'GPU')

import pytest

from growth_models.config.solver_config import ErrorMetric
from growth_models.solvers.kernels import (
    RELATIVE_ERROR_FLOOR,
    bellman_step,
    bellman_step_core,
    convergence_error,
    damped_update,
    sup_norm_diff,
)


def _f64(values):
    return tf.constant(values, dtype=tf.float64)


class TestBellmanStep:
    """Tests for bellman_step."""

    def test_known_values(self):
        """Verify against a manual NumPy computation."""
        v_np = np.array([1.0, 2.0, 4.0])
        flow_np = np.array([
            [0.5, 0.1, -1e10],
            [0.7, 0.6, 0.2],
            [0.9, 0.8, 0.7],
        ])
        beta = 0.9
        rhs = flow_np + beta * v_np[None, :]

        v_next, policy = bellman_step(_f64(v_np), _f64(flow_np), _f64(beta))
        np.testing.assert_allclose(v_next.numpy(), rhs.max(axis=1))
        np.testing.assert_array_equal(policy.numpy(), rhs.argmax(axis=1))

    def test_penalty_never_chosen(self):
        """Infeasible (penalised) choices lose to any feasible one."""
        flow = _f64([[0.0, -1e10], [0.0, 0.0]])
        v = _f64([0.0, 100.0])
        _, policy = bellman_step(v, flow, _f64(0.95))
        assert policy.numpy()[0] == 0
        assert policy.numpy()[1] == 1

    def test_policy_dtype(self):
        _, policy = bellman_step(_f64([0.0, 0.0]), _f64([[1.0, 0.0], [0.0, 1.0]]), _f64(0.5))
        assert policy.dtype == tf.int32

    def test_core_matches_compiled(self):
        rng = np.random.default_rng(0)
        v = _f64(rng.normal(size=6))
        flow = _f64(rng.normal(size=(6, 6)))
        beta = _f64(0.95)
        r1, p1 = bellman_step_core(v, flow, beta)
        r2, p2 = bellman_step(v, flow, beta)
        np.testing.assert_allclose(r1.numpy(), r2.numpy(), atol=1e-12)
        np.testing.assert_array_equal(p1.numpy(), p2.numpy())


class TestErrorMetrics:
    """Tests for sup_norm_diff and convergence_error."""

    def test_sup_norm(self):
        assert float(sup_norm_diff(_f64([1.0, 5.0]), _f64([1.5, 2.0]))) == pytest.approx(3.0)

    def test_absolute(self):
        error = convergence_error(_f64([1.0, 5.0]), _f64([1.5, 2.0]), ErrorMetric.ABSOLUTE)
        assert error == pytest.approx(3.0)

    def test_relative(self):
        """max_i |a_i - b_i| / |b_i|."""
        error = convergence_error(_f64([1.1, -4.0]), _f64([1.0, -5.0]), ErrorMetric.RELATIVE)
        assert error == pytest.approx(0.2)

    def test_relative_zero_previous_is_floored(self):
        """Zero prior values divide by the floor, not by zero."""
        error = convergence_error(_f64([1e-12, 0.0]), _f64([0.0, 0.0]), ErrorMetric.RELATIVE)
        assert np.isfinite(error)
        assert error == pytest.approx(1e-12 / RELATIVE_ERROR_FLOOR)

    def test_returns_python_float(self):
        error = convergence_error(_f64([1.0]), _f64([1.0]), ErrorMetric.RELATIVE)
        assert isinstance(error, float)
        assert error == 0.0


class TestDampedUpdate:
    """Tests for damped_update."""

    def test_convex_combination(self):
        result = damped_update(_f64([1.0, 2.0]), _f64([3.0, 6.0]), 0.25)
        np.testing.assert_allclose(result.numpy(), [2.5, 5.0])

    def test_no_damping_returns_refit(self):
        refit = _f64([1.0, 2.0])
        result = damped_update(refit, _f64([3.0, 6.0]), 1.0)
        np.testing.assert_array_equal(result.numpy(), refit.numpy())
