"""Integration test: all four solvers agree near the steady state."""

from __future__ import annotations

import numpy as np
import tensorflow as tf

tf.config.set_visible_devices([], 'GPU')

import pytest

from growth_models.config.economic_params import EconomicParams
from growth_models.config.solver_config import CollocationConfig, DiscreteGridConfig
from growth_models.simulation import Simulator
from growth_models.solvers import consumption_policy, solve


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
def solutions():
    """Solve with every algorithm once."""
    params = _make_params()
    return {
        "vfi": solve("vfi", params, CollocationConfig(n_nodes=11, tolerance=1e-8)),
        "fpi": solve("fpi", params, CollocationConfig(n_nodes=5, damping=0.5, tolerance=1e-6)),
        "ti": solve("ti", params, CollocationConfig(n_nodes=5, damping=0.7, tolerance=1e-6)),
        "discrete": solve("discrete", params, DiscreteGridConfig(n_capital=2000)),
    }


class TestCrossMethod:
    """Consistency checks across VFI, FPI, TI and discretized VFI."""

    def test_all_converged(self, solutions):
        for name, solution in solutions.items():
            assert solution.converged, name

    @pytest.mark.parametrize("name", ["vfi", "fpi", "ti", "discrete"])
    def test_steady_state_consumption(self, solutions, name):
        """Every method consumes f(k*) - k* at k*."""
        k_ss, c_ss = _steady_state()
        assert float(consumption_policy(solutions[name], k_ss)) == pytest.approx(
            c_ss, rel=1e-3
        )

    def test_steady_state_consumption_pairwise(self, solutions):
        k_ss, _ = _steady_state()
        values = [float(consumption_policy(s, k_ss)) for s in solutions.values()]
        assert (max(values) - min(values)) / min(values) < 1e-3

    @pytest.mark.parametrize("name", ["vfi", "fpi", "discrete"])
    def test_agree_with_ti(self, solutions, name):
        k = np.array([0.18, 0.2, 0.2577, 0.3, 0.35])
        reference = consumption_policy(solutions["ti"], k)
        np.testing.assert_allclose(
            consumption_policy(solutions[name], k), reference, rtol=1e-3
        )

    def test_simulations_agree(self, solutions):
        paths = {
            name: Simulator(30).run(solution, 0.15).capital
            for name, solution in solutions.items()
            if name != "vfi"
        }
        np.testing.assert_allclose(paths["fpi"], paths["ti"], rtol=1e-3)
        np.testing.assert_allclose(paths["discrete"], paths["ti"], rtol=2e-2)
