# growth_models/econ/utility.py
"""
Period utility calculations.

This module implements CRRA utility, its derivative and the inverse of
the derivative.  Curvature eta == 1 is handled as log utility.
"""

import tensorflow as tf

from growth_models.config.economic_params import EconomicParams
from growth_models.core.types import Tensor


class CRRAUtility:
    """Static methods for CRRA utility calculations."""

    @staticmethod
    def utility(consumption: Tensor, params: EconomicParams) -> Tensor:
        """
        Compute period utility.

        Formula: u(C) = C^(1 - eta) / (1 - eta), or log(C) when eta == 1.

        Args:
            consumption: Consumption tensor (C), strictly positive.
            params: Economic parameters containing risk aversion.

        Returns:
            Utility tensor.
        """
        eta = params.risk_aversion
        if eta == 1.0:
            return tf.math.log(consumption)
        return consumption ** (1.0 - eta) / (1.0 - eta)

    @staticmethod
    def marginal_utility(consumption: Tensor, params: EconomicParams) -> Tensor:
        """
        Compute marginal utility.

        Formula: u'(C) = C^(-eta)

        Args:
            consumption: Consumption tensor (C), strictly positive.
            params: Economic parameters containing risk aversion.

        Returns:
            Marginal utility tensor.
        """
        return consumption ** (-params.risk_aversion)

    @staticmethod
    def inverse_marginal_utility(
        marginal: Tensor,
        params: EconomicParams
    ) -> Tensor:
        """
        Invert marginal utility.

        Formula: C = (u')^(-1 / eta)

        Args:
            marginal: Marginal utility tensor, strictly positive.
            params: Economic parameters containing risk aversion.

        Returns:
            Consumption tensor.
        """
        return marginal ** (-1.0 / params.risk_aversion)
