# growth_models/simulation/__init__.py

from growth_models.simulation.simulator import Simulator, Trajectory

__all__ = [
    "Simulator",
    "Trajectory",
]
