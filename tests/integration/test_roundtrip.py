"""Integration test: solve → save → load → rebuild → simulate.

Round-trip test that exercises the persistence layer on small problems.
"""

from __future__ import annotations

import numpy as np
import tensorflow as tf

tf.config.set_visible_devices([], 'GPU')

import pytest

from growth_models.approximation.chebyshev import ChebyshevApproximant
from growth_models.approximation.scaling import StateScaler
from growth_models.config.economic_params import EconomicParams
from growth_models.config.solver_config import CollocationConfig, DiscreteGridConfig
from growth_models.io.artifacts import load_solution, save_solution
from growth_models.simulation import Simulator
from growth_models.solvers import CollocationSolver, DiscretizedVFISolver


def _make_params():
    return EconomicParams(
        capital_share=0.75,
        discount_factor=0.95,
        risk_aversion=2.0,
    )


@pytest.fixture(scope="module")
def round_trip_data(tmp_path_factory):
    """Solve, save and reload once; share across tests."""
    config = CollocationConfig(n_nodes=5, damping=0.7, tolerance=1e-6)
    solution = CollocationSolver(_make_params(), config, "ti").solve()
    path = tmp_path_factory.mktemp("artifacts") / "ti_solution.npz"
    save_solution(solution, str(path))
    return solution, load_solution(str(path))


class TestRoundTrip:
    """Persistence round-trip tests."""

    def test_metadata(self, round_trip_data):
        solution, loaded = round_trip_data
        assert loaded["algorithm"] == "ti"
        assert loaded["status"] == "converged"
        assert loaded["iterations"] == solution.iterations
        assert loaded["risk_aversion"] == 2.0

    def test_arrays(self, round_trip_data):
        solution, loaded = round_trip_data
        np.testing.assert_array_equal(loaded["coefficients"], solution.coefficients)
        np.testing.assert_array_equal(loaded["capital_nodes"], solution.capital_nodes)
        assert loaded["history_coefficients"].shape == (len(solution.history), 5)

    def test_rebuilt_policy(self, round_trip_data):
        """The saved domain and coefficients reproduce the policy."""
        solution, loaded = round_trip_data
        scaler = StateScaler(loaded["k_min"], loaded["k_max"])
        approximant = ChebyshevApproximant(scaler, len(loaded["coefficients"]))
        k = np.linspace(loaded["k_min"], loaded["k_max"], 25)
        np.testing.assert_allclose(
            approximant(k, loaded["coefficients"]).numpy(),
            solution.evaluate(k),
            rtol=1e-12,
        )

    def test_simulation_after_reload(self, round_trip_data):
        solution, _ = round_trip_data
        traj = Simulator(50).run(solution, 0.2)
        assert not np.any(np.isnan(traj.capital))
        assert np.all(traj.capital > 0)

    def test_discrete_round_trip(self, tmp_path):
        solution = DiscretizedVFISolver(
            _make_params(), DiscreteGridConfig(n_capital=30)
        ).solve()
        path = tmp_path / "nested" / "discrete.npz"
        save_solution(solution, str(path))
        loaded = load_solution(str(path))
        assert loaded["algorithm"] == "discrete"
        np.testing.assert_array_equal(loaded["V"], solution.values)
        np.testing.assert_array_equal(loaded["policy_idx"], solution.policy_index)
