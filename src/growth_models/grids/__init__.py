# growth_models/grids/__init__.py
"""
Grid management for the growth-model solvers.

This package provides the Chebyshev collocation grid, the evenly spaced
capital grid of the discretized solver, and 1-D interpolation used when
simulating from a grid policy.
"""

from growth_models.grids.grid_builder import CollocationGrid, GridBuilder
from growth_models.grids.grid_utils import (
    _interp_1d_batch_core,
    interp_1d_batch,
)

__all__ = [
    'CollocationGrid',
    'GridBuilder',
    '_interp_1d_batch_core',
    'interp_1d_batch',
]
