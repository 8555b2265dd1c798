"""Unit tests for scaling: StateScaler."""

from __future__ import annotations

import numpy as np
import tensorflow as tf

tf.config.set_visible_devices([], 'GPU')

import pytest

from growth_models.approximation.scaling import StateScaler


class TestStateScaler:
    """Tests for the physical <-> canonical affine map."""

    def test_endpoints(self):
        scaler = StateScaler(lower=0.1, upper=0.5)
        assert scaler.to_canonical(0.1) == pytest.approx(-1.0)
        assert scaler.to_canonical(0.5) == pytest.approx(1.0)
        assert scaler.to_canonical(0.3) == pytest.approx(0.0)

    def test_round_trip_numpy(self):
        scaler = StateScaler(lower=0.129, upper=0.387)
        x = np.linspace(0.05, 0.5, 13)
        np.testing.assert_allclose(scaler.to_physical(scaler.to_canonical(x)), x, atol=1e-14)

    def test_round_trip_tensor(self):
        scaler = StateScaler(lower=-2.0, upper=3.0)
        z = tf.constant([-1.0, -0.25, 0.5, 1.0], dtype=tf.float64)
        np.testing.assert_allclose(
            scaler.to_canonical(scaler.to_physical(z)).numpy(), z.numpy(), atol=1e-14
        )

    def test_no_clamping(self):
        """States outside the domain map outside [-1, 1]."""
        scaler = StateScaler(lower=1.0, upper=2.0)
        assert scaler.to_canonical(3.0) == pytest.approx(3.0)
        assert scaler.to_canonical(0.0) == pytest.approx(-3.0)

    def test_width(self):
        assert StateScaler(lower=0.25, upper=1.0).width == pytest.approx(0.75)

    @pytest.mark.parametrize("lower,upper", [(1.0, 1.0), (2.0, 1.0)])
    def test_invalid_domain(self, lower, upper):
        with pytest.raises(ValueError, match="lower < upper"):
            StateScaler(lower=lower, upper=upper)

    def test_frozen(self):
        scaler = StateScaler(lower=0.0, upper=1.0)
        with pytest.raises(Exception):
            scaler.lower = 0.5
