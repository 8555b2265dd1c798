"""Unit tests for EconomicParams, solver configs and their JSON loaders."""

from __future__ import annotations

import json

import tensorflow as tf

tf.config.set_visible_devices([], 'GPU')

import pytest

from growth_models.config.economic_params import EconomicParams, load_economic_params
from growth_models.config.solver_config import (
    Algorithm,
    CollocationConfig,
    DiscreteGridConfig,
    ErrorMetric,
    load_collocation_config,
    load_discrete_config,
)


def _write_json(path, data):
    path.write_text(json.dumps(data))
    return str(path)


# ─── EconomicParams ───


class TestEconomicParams:
    """Tests for EconomicParams frozen dataclass."""

    def test_defaults(self):
        p = EconomicParams()
        assert p.capital_share == 0.75
        assert p.discount_factor == 0.95
        assert p.risk_aversion == 2.0

    @pytest.mark.parametrize("alpha", [0.0, 1.0, -0.2, 1.5])
    def test_capital_share_out_of_range(self, alpha):
        with pytest.raises(ValueError, match="Capital share must be in"):
            EconomicParams(capital_share=alpha)

    @pytest.mark.parametrize("beta", [0.0, 1.0, -0.5])
    def test_discount_factor_out_of_range(self, beta):
        with pytest.raises(ValueError, match="Discount factor must be in"):
            EconomicParams(discount_factor=beta)

    @pytest.mark.parametrize("eta", [0.0, -1.0])
    def test_risk_aversion_not_positive(self, eta):
        with pytest.raises(ValueError, match="Risk aversion must be positive"):
            EconomicParams(risk_aversion=eta)

    def test_frozen_immutability(self):
        p = EconomicParams()
        with pytest.raises(AttributeError):
            p.discount_factor = 0.99

    def test_load_from_json(self, tmp_path):
        filename = _write_json(
            tmp_path / "params.json",
            {"capital_share": 0.3, "discount_factor": 0.9, "risk_aversion": 1.0},
        )
        p = load_economic_params(filename)
        assert p == EconomicParams(capital_share=0.3, discount_factor=0.9, risk_aversion=1.0)

    def test_load_unknown_key_exits(self, tmp_path):
        filename = _write_json(tmp_path / "params.json", {"depreciation_rate": 0.1})
        with pytest.raises(SystemExit):
            load_economic_params(filename)

    def test_load_missing_file_exits(self, tmp_path):
        with pytest.raises(SystemExit):
            load_economic_params(str(tmp_path / "missing.json"))


# ─── CollocationConfig ───


class TestCollocationConfig:
    """Tests for CollocationConfig validation."""

    def test_defaults(self):
        c = CollocationConfig()
        assert c.n_nodes == 7
        assert c.damping == 1.0
        assert c.bounds is None
        assert c.error_metric is ErrorMetric.RELATIVE
        assert c.restrict_next_state is True
        assert c.undamped_first_iteration is False

    def test_explicit_bounds(self):
        c = CollocationConfig(k_min=0.1, k_max=0.4)
        assert c.bounds == (0.1, 0.4)

    def test_metric_coerced_from_string(self):
        assert CollocationConfig(error_metric="absolute").error_metric is ErrorMetric.ABSOLUTE

    def test_unbounded_iterations_allowed(self):
        assert CollocationConfig(max_iterations=None).max_iterations is None

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"n_nodes": 0}, "n_nodes"),
            ({"k_min": 0.4, "k_max": 0.1}, "must be less than"),
            ({"k_min": 0.4, "k_max": 0.4}, "must be less than"),
            ({"k_min": 0.1}, "both be set"),
            ({"k_min": -0.1, "k_max": 0.4}, "positive"),
            ({"tolerance": 0.0}, "Tolerance"),
            ({"damping": 0.0}, "Damping"),
            ({"damping": 1.2}, "Damping"),
            ({"max_iterations": 0}, "max_iterations"),
            ({"snapshot_every": 0}, "snapshot_every"),
            ({"log_every": 0}, "log_every"),
        ],
    )
    def test_invalid(self, overrides, message):
        with pytest.raises(ValueError, match=message):
            CollocationConfig(**overrides)

    def test_invalid_metric(self):
        with pytest.raises(ValueError):
            CollocationConfig(error_metric="euclidean")


class TestDiscreteGridConfig:
    """Tests for DiscreteGridConfig validation."""

    def test_defaults(self):
        c = DiscreteGridConfig()
        assert c.n_capital == 500
        assert c.error_metric is ErrorMetric.ABSOLUTE
        assert c.infeasible_penalty < -1e9

    @pytest.mark.parametrize(
        "overrides",
        [{"n_capital": 1}, {"tolerance": -1.0}, {"max_iterations": 0}, {"log_every": 0}],
    )
    def test_invalid(self, overrides):
        with pytest.raises(ValueError):
            DiscreteGridConfig(**overrides)


# ─── Loaders ───


class TestLoaders:
    """Tests for per-algorithm JSON loading."""

    @pytest.fixture
    def config_file(self, tmp_path):
        return _write_json(
            tmp_path / "solver.json",
            {
                "fpi": {"n_nodes": 5, "damping": 0.5, "comment": "ignored"},
                "ti": {"n_nodes": 5, "damping": 0.7, "error_metric": "absolute"},
                "discrete": {"n_capital": 50, "tolerance": 1e-5},
            },
        )

    def test_collocation_section(self, config_file):
        c = load_collocation_config(config_file, "fpi")
        assert c.n_nodes == 5
        assert c.damping == 0.5

    def test_enum_key(self, config_file):
        c = load_collocation_config(config_file, Algorithm.TI)
        assert c.damping == 0.7
        assert c.error_metric is ErrorMetric.ABSOLUTE

    def test_missing_section_defaults(self, config_file):
        assert load_collocation_config(config_file, "vfi") == CollocationConfig()

    def test_missing_file_defaults(self, tmp_path):
        c = load_collocation_config(str(tmp_path / "nope.json"), "ti")
        assert c == CollocationConfig()

    def test_discrete_section(self, config_file):
        c = load_discrete_config(config_file)
        assert c.n_capital == 50
        assert c.tolerance == 1e-5

    def test_invalid_values_exit(self, tmp_path):
        filename = _write_json(tmp_path / "bad.json", {"ti": {"damping": 3.0}})
        with pytest.raises(SystemExit):
            load_collocation_config(filename, "ti")

    def test_unknown_algorithm(self, config_file):
        with pytest.raises(ValueError):
            load_collocation_config(config_file, "pfi")
