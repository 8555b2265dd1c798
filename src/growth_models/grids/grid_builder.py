# growth_models/grids/grid_builder.py
"""
Grid construction utilities for the growth-model solvers.

This module builds the Chebyshev collocation grid (canonical nodes,
their physical images and the design matrix with its inverse) and the
evenly spaced capital grid used by the discretized solver.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import tensorflow as tf

from growth_models.approximation.chebyshev import ChebyshevBasis
from growth_models.approximation.scaling import StateScaler
from growth_models.config.economic_params import EconomicParams
from growth_models.config.solver_config import CollocationConfig, DiscreteGridConfig
from growth_models.core.types import TENSORFLOW_DTYPE, Tensor
from growth_models.econ import SteadyStateCalculator


@dataclass(frozen=True)
class CollocationGrid:
    """
    Collocation nodes and the precomputed design matrix for one solve.

    ``capital[i]`` is the physical image of ``canonical_nodes[i]``; both
    keep the order produced by :meth:`ChebyshevBasis.nodes`.

    Attributes:
        canonical_nodes: Nodes in [-1, 1], shape ``(n,)``.
        capital: Physical capital nodes, shape ``(n,)``.
        scaler: Physical/canonical map for the domain.
        basis_matrix: ``T_j(canonical_nodes[i])``, shape ``(n, n)``.
        basis_inverse: Inverse of ``basis_matrix``.
    """

    canonical_nodes: Tensor
    capital: Tensor
    scaler: StateScaler
    basis_matrix: Tensor
    basis_inverse: Tensor

    @property
    def n(self) -> int:
        return int(self.canonical_nodes.shape[0])


class GridBuilder:
    """
    Utility class for constructing solver grids.

    This class provides static methods for building the collocation grid
    and the discretized capital grid.
    """

    @staticmethod
    def resolve_bounds(
        params: EconomicParams,
        custom_bounds: Optional[Tuple[float, float]] = None,
    ) -> Tuple[float, float]:
        """
        Return custom bounds, or a domain around the steady state.

        Args:
            params: Economic parameters.
            custom_bounds: Optional explicit (min, max) bounds.

        Returns:
            Tuple ``(k_min, k_max)``.
        """
        if custom_bounds is not None:
            return float(custom_bounds[0]), float(custom_bounds[1])
        return SteadyStateCalculator.default_bounds(params)

    @staticmethod
    def build_collocation_grid(
        config: CollocationConfig,
        params: EconomicParams,
    ) -> CollocationGrid:
        """
        Build Chebyshev collocation nodes and the design matrix.

        Args:
            config: Collocation configuration (node count, bounds).
            params: Economic parameters (for default bounds).

        Returns:
            Immutable CollocationGrid.

        Raises:
            ValueError: If the design matrix is singular or ill-conditioned.
        """
        k_min, k_max = GridBuilder.resolve_bounds(params, config.bounds)
        scaler = StateScaler(lower=k_min, upper=k_max)

        canonical = ChebyshevBasis.nodes(config.n_nodes)
        capital = scaler.to_physical(canonical)
        matrix, inverse = ChebyshevBasis.design_matrix(canonical, config.n_nodes)

        return CollocationGrid(
            canonical_nodes=canonical,
            capital=capital,
            scaler=scaler,
            basis_matrix=matrix,
            basis_inverse=inverse,
        )

    @staticmethod
    def build_capital_grid(
        config: DiscreteGridConfig,
        params: EconomicParams,
    ) -> Tuple[Tensor, float]:
        """
        Build an evenly spaced capital grid.

        Args:
            config: Discrete grid configuration.
            params: Economic parameters.

        Returns:
            Tuple containing:
                - k_grid: Capital grid tensor, ascending.
                - k_ss: Steady state capital value.
        """
        k_ss = SteadyStateCalculator.calculate_capital(params)
        k_min_val, k_max_val = GridBuilder.resolve_bounds(params, config.bounds)
        k_grid = GridBuilder._build_linear_grid(
            k_min_val, k_max_val, config.n_capital
        )
        return k_grid, k_ss

    @staticmethod
    def _build_linear_grid(
        min_val: float,
        max_val: float,
        n_points: int
    ) -> Tensor:
        """Build a linearly-spaced float64 grid with exact end points."""
        return tf.linspace(
            tf.constant(min_val, dtype=TENSORFLOW_DTYPE),
            tf.constant(max_val, dtype=TENSORFLOW_DTYPE),
            n_points,
        )
