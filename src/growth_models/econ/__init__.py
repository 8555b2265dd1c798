# growth_models/econ/__init__.py
"""
Core economic logic module.

This package provides the growth-model primitives (production, utility,
steady state) and the residual equations used by every solver.
"""

from growth_models.econ.production import ProductionFunctions
from growth_models.econ.utility import CRRAUtility
from growth_models.econ.steady_state import SteadyStateCalculator
from growth_models.econ.growth_model import GrowthModel


__all__ = [
    'ProductionFunctions',
    'CRRAUtility',
    'SteadyStateCalculator',
    'GrowthModel',
]
