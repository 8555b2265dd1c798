# growth_models/econ/growth_model.py
"""
Residual equations of the deterministic growth model.

The model: V(k) = max_c u(c) + beta * V(k^alpha - c).  Every residual is
parameterised by a coefficient vector b that the caller treats as the
current approximant Γ(.; b) — a value function for VFI, a consumption
policy for the Euler-based methods.
"""

from typing import Tuple

import tensorflow as tf

from growth_models.approximation.chebyshev import ChebyshevApproximant
from growth_models.config.economic_params import EconomicParams
from growth_models.core.types import TENSORFLOW_DTYPE, Numeric, Tensor
from growth_models.econ.production import ProductionFunctions
from growth_models.econ.utility import CRRAUtility

# Floors applied before raising to negative powers.
CONSUMPTION_FLOOR: float = 1e-10
CAPITAL_FLOOR: float = 1e-10

# Open brackets stop this fraction of output short of either end.
BRACKET_EPS: float = 1e-10


class GrowthModel:
    """
    Primitives and per-node residuals of the growth model.

    Args:
        params: Economic parameters (alpha, beta, eta).
        approximant: Chebyshev approximant on the capital domain.
    """

    def __init__(
        self,
        params: EconomicParams,
        approximant: ChebyshevApproximant,
    ) -> None:
        self.params: EconomicParams = params
        self.approximant: ChebyshevApproximant = approximant

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def production(self, capital: Numeric) -> Numeric:
        return ProductionFunctions.cobb_douglas(capital, self.params)

    def marginal_product(self, capital: Numeric) -> Numeric:
        return ProductionFunctions.marginal_product(capital, self.params)

    def utility(self, consumption: Numeric) -> Numeric:
        return CRRAUtility.utility(consumption, self.params)

    def marginal_utility(self, consumption: Numeric) -> Numeric:
        return CRRAUtility.marginal_utility(consumption, self.params)

    # ------------------------------------------------------------------
    # Brackets
    # ------------------------------------------------------------------

    def full_bracket(self, capital: float) -> Tuple[float, float]:
        """Open consumption interval (0, f(k)), shrunk by a relative epsilon."""
        output = float(self.production(capital))
        return BRACKET_EPS * output, (1.0 - BRACKET_EPS) * output

    def control_bracket(
        self,
        capital: float,
        restrict_next_state: bool,
    ) -> Tuple[float, float]:
        """
        Consumption interval searched at one node.

        With *restrict_next_state*, consumption is limited to values that
        keep k' = f(k) - c inside the approximant's domain; if that
        interval is empty the full open interval is used instead.

        Args:
            capital: Current capital k.
            restrict_next_state: Keep k' inside [k_min, k_max].

        Returns:
            Tuple ``(lower, upper)`` with ``0 < lower < upper < f(k)``.
        """
        full_lower, full_upper = self.full_bracket(capital)
        if not restrict_next_state:
            return full_lower, full_upper

        output = float(self.production(capital))
        scaler = self.approximant.scaler
        lower = max(output - scaler.upper, full_lower)
        upper = min(output - scaler.lower, full_upper)
        if lower >= upper:
            return full_lower, full_upper
        return lower, upper

    # ------------------------------------------------------------------
    # Residuals
    # ------------------------------------------------------------------

    def bellman_value(
        self,
        capital: Numeric,
        consumption: Numeric,
        coefficients: Tensor,
    ) -> Tensor:
        """
        Right-hand side of the Bellman equation.

        Formula: u(c) + beta * Γ(f(k) - c; b)

        Args:
            capital: Current capital k.
            consumption: Candidate consumption c, in (0, f(k)).
            coefficients: Value-function coefficients b.

        Returns:
            Bellman value tensor.
        """
        capital = tf.convert_to_tensor(capital, dtype=TENSORFLOW_DTYPE)
        consumption = tf.convert_to_tensor(consumption, dtype=TENSORFLOW_DTYPE)
        k_next = ProductionFunctions.next_capital(capital, consumption, self.params)
        continuation = self.approximant(k_next, coefficients)
        return (
            self.utility(consumption)
            + self.params.discount_factor * continuation
        )

    def euler_fixed_point(
        self,
        capital: Numeric,
        coefficients: Tensor,
    ) -> Tensor:
        """
        Consumption implied by the Euler equation under policy Γ(.; b).

        c = Γ(k; b), k' = f(k) - c, c' = Γ(k'; b), and today's consumption
        is recovered in closed form: (beta * u'(c') * f'(k'))^(-1/eta).

        k' is floored at CAPITAL_FLOOR so that f'(k') stays finite when the
        approximant consumes more than output; c' is floored at
        CONSUMPTION_FLOOR before exponentiation.

        Args:
            capital: Capital nodes k, shape ``(n,)`` or scalar.
            coefficients: Policy coefficients b.

        Returns:
            Implied consumption with the shape of *capital*.
        """
        capital = tf.convert_to_tensor(capital, dtype=TENSORFLOW_DTYPE)
        consumption = self.approximant(capital, coefficients)
        k_next = ProductionFunctions.next_capital_floored(
            capital, consumption, self.params, CAPITAL_FLOOR
        )
        c_next = tf.maximum(
            self.approximant(k_next, coefficients), CONSUMPTION_FLOOR
        )
        rhs = (
            self.params.discount_factor
            * self.marginal_utility(c_next)
            * self.marginal_product(k_next)
        )
        return CRRAUtility.inverse_marginal_utility(rhs, self.params)

    def euler_root_residual(
        self,
        consumption: Numeric,
        capital: Numeric,
        coefficients: Tensor,
    ) -> Tensor:
        """
        Euler equation residual for time iteration.

        Formula: u'(c) / (beta * u'(c'(c)) * f'(k'(c))) - 1, with
        k'(c) = f(k) - c and c'(c) = Γ(k'(c); b) from the prior iterate.

        Args:
            consumption: Candidate consumption c, in (0, f(k)).
            capital: Current capital k.
            coefficients: Prior-iteration policy coefficients b.

        Returns:
            Residual tensor; zero at the Euler-consistent consumption.
        """
        capital = tf.convert_to_tensor(capital, dtype=TENSORFLOW_DTYPE)
        consumption = tf.convert_to_tensor(consumption, dtype=TENSORFLOW_DTYPE)
        k_next = ProductionFunctions.next_capital_floored(
            capital, consumption, self.params, CAPITAL_FLOOR
        )
        c_next = tf.maximum(
            self.approximant(k_next, coefficients), CONSUMPTION_FLOOR
        )
        denominator = (
            self.params.discount_factor
            * self.marginal_utility(c_next)
            * self.marginal_product(k_next)
        )
        return self.marginal_utility(consumption) / denominator - 1.0
