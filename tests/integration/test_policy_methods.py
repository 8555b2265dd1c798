"""Integration test: FPI and TI on the reference calibration.

Both Euler-equation methods should land on the same consumption policy
and satisfy the steady-state relation c(k*) = f(k*) - k*.
"""

from __future__ import annotations

import numpy as np
import tensorflow as tf

tf.config.set_visible_devices([], 'GPU')

import pytest

from growth_models.config.economic_params import EconomicParams
from growth_models.config.solver_config import CollocationConfig
from growth_models.solvers import CollocationSolver, euler_errors


def _make_params():
    return EconomicParams(
        capital_share=0.75,
        discount_factor=0.95,
        risk_aversion=2.0,
    )


def _steady_state():
    k_ss = (0.75 * 0.95) ** (1.0 / 0.25)
    return k_ss, k_ss ** 0.75 - k_ss


@pytest.fixture(scope="module")
def fpi_solution():
    config = CollocationConfig(n_nodes=5, damping=0.5, tolerance=1e-6)
    return CollocationSolver(_make_params(), config, "fpi").solve()


@pytest.fixture(scope="module")
def ti_solution():
    config = CollocationConfig(n_nodes=5, damping=0.7, tolerance=1e-6)
    return CollocationSolver(_make_params(), config, "ti").solve()


class TestPolicyMethods:
    """End-to-end tests for the policy-function collocation methods."""

    def test_both_converge(self, fpi_solution, ti_solution):
        assert fpi_solution.converged
        assert ti_solution.converged

    def test_agree_on_domain(self, fpi_solution, ti_solution):
        k = np.linspace(fpi_solution.grid.scaler.lower, fpi_solution.grid.scaler.upper, 40)
        np.testing.assert_allclose(
            fpi_solution.evaluate(k), ti_solution.evaluate(k), atol=1e-3
        )

    @pytest.mark.parametrize("name", ["fpi", "ti"])
    def test_steady_state(self, name, fpi_solution, ti_solution):
        solution = {"fpi": fpi_solution, "ti": ti_solution}[name]
        k_ss, c_ss = _steady_state()
        assert float(solution.evaluate(k_ss)) == pytest.approx(c_ss, rel=1e-3)

    def test_policy_increasing(self, ti_solution):
        k = np.linspace(ti_solution.grid.scaler.lower, ti_solution.grid.scaler.upper, 40)
        assert np.all(np.diff(ti_solution.evaluate(k)) > 0)

    def test_euler_errors_small(self, fpi_solution):
        k = np.linspace(0.14, 0.38, 30)
        assert np.max(np.abs(euler_errors(fpi_solution, k))) < 1e-3
