# growth_models/cli/solve_growth.py
"""
Command-line interface for solving the deterministic growth model.

This script loads parameters and solver settings, runs the selected
algorithm, optionally simulates a trajectory starting at half the steady-state
capital stock, and persists the result together with the resolved settings.

Example:
    $ python -m growth_models.cli.solve_growth --algorithm ti
    $ python -m growth_models.cli.solve_growth --algorithm vfi \\
        --params hyperparam/growth_params.json --output results/vfi.npz
    $ python -m growth_models.cli.solve_growth --algorithm discrete --simulate 50
"""

import argparse
import logging
import os
import sys
from dataclasses import asdict
from enum import Enum
from typing import Any, Dict, Optional, Union

from growth_models.config.economic_params import EconomicParams, load_economic_params
from growth_models.config.solver_config import (
    Algorithm,
    CollocationConfig,
    DiscreteGridConfig,
    load_collocation_config,
    load_discrete_config,
)
from growth_models.econ import SteadyStateCalculator
from growth_models.io.artifacts import save_results, save_solution
from growth_models.io.file_utils import save_json_file
from growth_models.simulation import Simulator
from growth_models.solvers import solve

BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname('./')))
ECON_PARAMS_FILE = os.path.join(BASE_DIR, "hyperparam/growth_params.json")
SOLVER_CONFIG_FILE = os.path.join(BASE_DIR, "hyperparam/solver_config.json")

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%H:%M:%S'
)
logger = logging.getLogger(__name__)


def load_params(filename: Optional[str]) -> EconomicParams:
    """Load parameters from *filename*, the default file, or defaults."""
    if filename is not None:
        return load_economic_params(filename)
    if os.path.exists(ECON_PARAMS_FILE):
        return load_economic_params(ECON_PARAMS_FILE)
    logger.warning(
        f"Parameter file '{ECON_PARAMS_FILE}' not found. Using defaults."
    )
    return EconomicParams()


def resolved_settings(
    algorithm: Algorithm,
    params: EconomicParams,
    config: Union[CollocationConfig, DiscreteGridConfig],
) -> Dict[str, Any]:
    """JSON-ready record of the parameters and solver settings of a run."""
    solver_settings = {
        key: value.value if isinstance(value, Enum) else value
        for key, value in asdict(config).items()
    }
    return {
        "algorithm": algorithm.value,
        "params": asdict(params),
        "solver": solver_settings,
    }


def run(args: argparse.Namespace) -> None:
    """Orchestrate one solve (and optional simulation)."""
    algorithm = Algorithm(args.algorithm)
    params = load_params(args.params)
    logger.info(
        f"Parameters: alpha={params.capital_share}, "
        f"beta={params.discount_factor}, eta={params.risk_aversion}"
    )

    if algorithm is Algorithm.DISCRETIZED_VFI:
        config = load_discrete_config(args.config)
    else:
        config = load_collocation_config(args.config, algorithm)

    solution = solve(algorithm, params, config)
    if not solution.converged:
        logger.warning(
            f"{algorithm.value} stopped with status "
            f"'{solution.state.status.value}'."
        )

    output = args.output or os.path.join(
        "results", f"growth_{algorithm.value}_solution.npz"
    )
    save_solution(solution, output)
    logger.info(f"Solution saved to {output}")
    save_json_file(
        resolved_settings(algorithm, params, config),
        os.path.splitext(output)[0] + "_settings.json",
    )

    if args.simulate:
        k0 = SteadyStateCalculator.default_bounds(params)[0]
        trajectory = Simulator(args.simulate).run(solution, k0)
        sim_output = os.path.splitext(output)[0] + "_simulation.npz"
        save_results(
            {
                "capital": trajectory.capital,
                "consumption": trajectory.consumption,
                "output": trajectory.output,
            },
            sim_output,
        )
        logger.info(
            f"Simulated {args.simulate} periods from k0={k0:.4f}: "
            f"k_T={trajectory.capital[-1]:.4f}, "
            f"k_ss={SteadyStateCalculator.calculate_capital(params):.4f}"
        )


def main():
    """Main entry point for the growth-model solver CLI."""
    parser = argparse.ArgumentParser(
        description="Solve the deterministic growth model"
    )
    parser.add_argument(
        '--algorithm',
        type=str,
        default=Algorithm.TI.value,
        choices=[a.value for a in Algorithm],
        help="Solution algorithm."
    )
    parser.add_argument(
        '--params',
        type=str,
        default=None,
        help="JSON file with economic parameters."
    )
    parser.add_argument(
        '--config',
        type=str,
        default=SOLVER_CONFIG_FILE,
        help="JSON file with per-algorithm solver settings."
    )
    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help="Target .npz file for the solution."
    )
    parser.add_argument(
        '--simulate',
        type=int,
        default=0,
        help="Number of periods to simulate after solving (0 disables)."
    )
    args = parser.parse_args()

    try:
        run(args)
    except Exception as e:
        logger.error(f"Solver failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
