# growth_models/simulation/simulator.py
"""
Deterministic simulator for solved growth models.

Rolls the economy forward from an initial capital stock using a solved
policy: FPI/TI evaluate the fitted consumption polynomial, VFI re-solves
the one-step Bellman maximisation, and discretized VFI interpolates the
grid policy.  Capital evolves by k' = f(k) - c.  Nothing is refitted,
so identical inputs give identical trajectories.
"""

from dataclasses import dataclass

import numpy as np

from growth_models.core.types import NUMPY_DTYPE, Array
from growth_models.econ import ProductionFunctions
from growth_models.solvers.policies import Solution, consumption_policy


@dataclass(frozen=True)
class Trajectory:
    """
    Simulated paths, one entry per period.

    Attributes:
        capital: Capital at the start of each period, shape ``(T,)``.
        consumption: Consumption chosen each period, shape ``(T,)``.
        output: Output f(k) each period, shape ``(T,)``.
    """

    capital: Array
    consumption: Array
    output: Array

    @property
    def n_steps(self) -> int:
        return int(self.capital.shape[0])

    @property
    def next_capital(self) -> Array:
        """Capital carried into the period after each step."""
        return self.output - self.consumption


class Simulator:
    """
    Forward simulator for any solved growth model.

    Args:
        n_steps: Number of periods T to simulate.

    Raises:
        ValueError: If ``n_steps < 1``.
    """

    def __init__(self, n_steps: int):
        if n_steps < 1:
            raise ValueError(f"n_steps must be >= 1, got {n_steps}.")
        self.n_steps = n_steps

    def run(self, solution: Solution, initial_capital: float) -> Trajectory:
        """
        Simulate the economy from *initial_capital*.

        Args:
            solution: Output of any solver.
            initial_capital: Capital in the first period, strictly positive.

        Returns:
            Trajectory with capital, consumption and output paths.

        Raises:
            ValueError: If *initial_capital* is not positive.
            RuntimeError: If the policy leaves no capital for next period.
        """
        if initial_capital <= 0.0:
            raise ValueError(
                f"Initial capital must be positive, got {initial_capital}."
            )

        params = solution.params
        capital = np.zeros(self.n_steps, dtype=NUMPY_DTYPE)
        consumption = np.zeros(self.n_steps, dtype=NUMPY_DTYPE)
        output = np.zeros(self.n_steps, dtype=NUMPY_DTYPE)

        k_sim = float(initial_capital)
        for t in range(self.n_steps):
            y_sim = ProductionFunctions.cobb_douglas(k_sim, params)
            c_sim = float(consumption_policy(solution, k_sim))

            capital[t] = k_sim
            consumption[t] = c_sim
            output[t] = y_sim

            k_sim = y_sim - c_sim
            if k_sim <= 0.0:
                raise RuntimeError(
                    f"Policy consumed all output at period {t} "
                    f"(k={capital[t]:.6g}, c={c_sim:.6g})."
                )

        return Trajectory(capital=capital, consumption=consumption, output=output)
