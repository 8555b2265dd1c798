# growth_models/econ/steady_state.py
"""
Steady state calculations for the growth model.

This module computes the analytical steady state used for default
domain bounds, initial guesses and the capital-replacement check.
"""

from typing import Tuple

from growth_models.config.economic_params import EconomicParams


class SteadyStateCalculator:
    """Static methods for steady state calculations."""

    @staticmethod
    def calculate_capital(params: EconomicParams) -> float:
        """
        Calculate steady-state capital stock.

        Derived from the Euler equation in steady state, 1 = beta * f'(k):
            k_ss = (alpha * beta)^(1 / (1 - alpha))

        Args:
            params: Economic parameters containing discount factor and
                    capital share.

        Returns:
            The steady-state capital stock.
        """
        alpha = params.capital_share
        return (alpha * params.discount_factor) ** (1.0 / (1.0 - alpha))

    @staticmethod
    def calculate_consumption(params: EconomicParams) -> float:
        """
        Calculate steady-state consumption from capital replacement.

        Formula: c_ss = f(k_ss) - k_ss

        Args:
            params: Economic parameters.

        Returns:
            The steady-state consumption level.
        """
        k_ss = SteadyStateCalculator.calculate_capital(params)
        return k_ss ** params.capital_share - k_ss

    @staticmethod
    def default_bounds(
        params: EconomicParams,
        lower_scale: float = 0.5,
        upper_scale: float = 1.5,
    ) -> Tuple[float, float]:
        """
        Capital domain bracketing the steady state.

        Args:
            params: Economic parameters.
            lower_scale: Lower bound as a multiple of k_ss.
            upper_scale: Upper bound as a multiple of k_ss.

        Returns:
            Tuple ``(k_min, k_max)``.
        """
        k_ss = SteadyStateCalculator.calculate_capital(params)
        return lower_scale * k_ss, upper_scale * k_ss
