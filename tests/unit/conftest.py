"""Shared test fixtures and helper utilities for growth-model unit tests."""

from __future__ import annotations

import numpy as np
import tensorflow as tf

# Force CPU for CI — must be called before any TF ops
tf.config.set_visible_devices([], 'GPU')

from growth_models.config.economic_params import EconomicParams


def make_test_params(**overrides) -> EconomicParams:
    """Return EconomicParams for the reference scenario, with overrides."""
    defaults = dict(
        capital_share=0.75,
        discount_factor=0.95,
        risk_aversion=2.0,
    )
    defaults.update(overrides)
    return EconomicParams(**defaults)


def steady_state(params: EconomicParams):
    """Return ``(k_ss, c_ss)`` computed directly from the formulas."""
    alpha, beta = params.capital_share, params.discount_factor
    k_ss = (alpha * beta) ** (1.0 / (1.0 - alpha))
    return k_ss, k_ss ** alpha - k_ss


def exact_log_policy(capital, params: EconomicParams) -> np.ndarray:
    """Closed-form policy c(k) = (1 - alpha*beta) k^alpha under log utility."""
    alpha, beta = params.capital_share, params.discount_factor
    return (1.0 - alpha * beta) * np.asarray(capital, dtype=np.float64) ** alpha
