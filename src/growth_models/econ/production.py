# growth_models/econ/production.py
"""
Production function calculations.

This module implements the Cobb-Douglas technology of the growth model
and the resource constraint linking consumption to next-period capital.
"""

import tensorflow as tf

from growth_models.config.economic_params import EconomicParams
from growth_models.core.types import Tensor


class ProductionFunctions:
    """Static methods for production-related calculations."""

    @staticmethod
    def cobb_douglas(capital: Tensor, params: EconomicParams) -> Tensor:
        """
        Compute output using Cobb-Douglas production technology.

        Formula: Y = K^alpha

        Args:
            capital: Capital stock tensor (K).
            params: Economic parameters containing capital share.

        Returns:
            Gross production output tensor.
        """
        return capital ** params.capital_share

    @staticmethod
    def marginal_product(capital: Tensor, params: EconomicParams) -> Tensor:
        """
        Compute the marginal product of capital.

        Formula: f'(K) = alpha * K^(alpha - 1)

        Args:
            capital: Capital stock tensor (K).
            params: Economic parameters containing capital share.

        Returns:
            Marginal product tensor.
        """
        return params.capital_share * capital ** (params.capital_share - 1.0)

    @staticmethod
    def next_capital(
        capital: Tensor,
        consumption: Tensor,
        params: EconomicParams
    ) -> Tensor:
        """
        Apply the resource constraint with full depreciation.

        Formula: K' = K^alpha - C

        Args:
            capital: Current capital stock (K).
            consumption: Consumption chosen this period (C).
            params: Economic parameters containing capital share.

        Returns:
            Next-period capital tensor.
        """
        return ProductionFunctions.cobb_douglas(capital, params) - consumption

    @staticmethod
    def next_capital_floored(
        capital: Tensor,
        consumption: Tensor,
        params: EconomicParams,
        floor: float,
    ) -> Tensor:
        """Resource constraint with K' bounded below by *floor*."""
        return tf.maximum(
            ProductionFunctions.next_capital(capital, consumption, params),
            floor,
        )
