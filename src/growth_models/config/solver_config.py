# growth_models/config/solver_config.py
"""
Configuration for the collocation and discretized VFI solvers.

This module provides configuration classes and loading utilities for the
solution algorithms, including domain bounds, grid sizes, convergence
tolerances, damping and logging cadence.

Example:
    >>> from growth_models.config.solver_config import load_collocation_config
    >>> config = load_collocation_config("hyperparam/solver_config.json", "ti")
    >>> print(f"Collocation nodes: {config.n_nodes}")
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional, Tuple, Type, TypeVar, Union
import os
import sys
import logging

from growth_models.io.file_utils import load_json_file

logger = logging.getLogger(__name__)

_ConfigT = TypeVar("_ConfigT", "CollocationConfig", "DiscreteGridConfig")


class Algorithm(str, Enum):
    """Solution algorithm for the growth model."""

    VFI = "vfi"
    FPI = "fpi"
    TI = "ti"
    DISCRETIZED_VFI = "discrete"


class ErrorMetric(str, Enum):
    """Convergence metric on successive node (or grid) values."""

    RELATIVE = "relative"
    ABSOLUTE = "absolute"


def _validate_bounds(k_min: Optional[float], k_max: Optional[float]) -> None:
    if (k_min is None) != (k_max is None):
        raise ValueError(
            "k_min and k_max must either both be set or both be None."
        )
    if k_min is None:
        return
    if k_min <= 0.0:
        raise ValueError(f"k_min must be positive, got {k_min}.")
    if k_min >= k_max:
        raise ValueError(
            f"k_min ({k_min}) must be less than k_max ({k_max})."
        )


@dataclass(frozen=True)
class CollocationConfig:
    """
    Configuration for the Chebyshev collocation solvers (VFI, FPI, TI).

    Attributes:
        n_nodes: Number of collocation nodes, equal to the number of
            Chebyshev basis functions.
        k_min: Lower bound of the capital domain.  None selects
            0.5 * steady-state capital.
        k_max: Upper bound of the capital domain.  None selects
            1.5 * steady-state capital.
        tolerance: Convergence tolerance on the error metric.
        damping: Weight on the fresh refit in the coefficient update,
            in (0, 1].  1.0 means no damping.
        max_iterations: Iteration cap.  None iterates until convergence.
        snapshot_every: Cadence of coefficient snapshots kept in the
            convergence history.
        log_every: Cadence of progress log lines.
        error_metric: Relative or absolute change in node values.
        undamped_first_iteration: Skip damping on the first iteration.
        restrict_next_state: Search consumption only where next-period
            capital stays inside [k_min, k_max].
    """

    n_nodes: int = 7
    k_min: Optional[float] = None
    k_max: Optional[float] = None

    tolerance: float = 1e-4
    damping: float = 1.0
    max_iterations: Optional[int] = 1000

    snapshot_every: int = 10
    log_every: int = 10
    error_metric: ErrorMetric = ErrorMetric.RELATIVE

    undamped_first_iteration: bool = False
    restrict_next_state: bool = True

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        object.__setattr__(self, "error_metric", ErrorMetric(self.error_metric))

        if self.n_nodes < 1:
            raise ValueError(f"n_nodes must be >= 1, got {self.n_nodes}.")
        _validate_bounds(self.k_min, self.k_max)
        if self.tolerance <= 0.0:
            raise ValueError(f"Tolerance must be positive, got {self.tolerance}.")
        if not 0.0 < self.damping <= 1.0:
            raise ValueError(f"Damping must be in (0, 1], got {self.damping}.")
        if self.max_iterations is not None and self.max_iterations < 1:
            raise ValueError(
                f"max_iterations must be >= 1 or None, got {self.max_iterations}."
            )
        if self.snapshot_every < 1:
            raise ValueError(
                f"snapshot_every must be >= 1, got {self.snapshot_every}."
            )
        if self.log_every < 1:
            raise ValueError(f"log_every must be >= 1, got {self.log_every}.")

    @property
    def bounds(self) -> Optional[Tuple[float, float]]:
        """Explicit ``(k_min, k_max)`` or None when derived from the steady state."""
        if self.k_min is None:
            return None
        return (self.k_min, self.k_max)


@dataclass(frozen=True)
class DiscreteGridConfig:
    """
    Configuration for brute-force VFI on an evenly spaced capital grid.

    Attributes:
        n_capital: Number of points in the capital grid.
        k_min: Lower grid bound.  None selects 0.5 * steady-state capital.
        k_max: Upper grid bound.  None selects 1.5 * steady-state capital.
        tolerance: Convergence tolerance on the error metric.
        max_iterations: Iteration cap.  Hitting it is reported on the result.
        error_metric: Absolute or relative change in the value vector.
        log_every: Cadence of progress log lines.
        infeasible_penalty: Flow value assigned to choices with
            non-positive consumption.
    """

    n_capital: int = 500
    k_min: Optional[float] = None
    k_max: Optional[float] = None

    tolerance: float = 1e-6
    max_iterations: int = 2000
    error_metric: ErrorMetric = ErrorMetric.ABSOLUTE
    log_every: int = 50

    infeasible_penalty: float = -1e10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        object.__setattr__(self, "error_metric", ErrorMetric(self.error_metric))

        if self.n_capital < 2:
            raise ValueError(f"n_capital must be >= 2, got {self.n_capital}.")
        _validate_bounds(self.k_min, self.k_max)
        if self.tolerance <= 0.0:
            raise ValueError(f"Tolerance must be positive, got {self.tolerance}.")
        if self.max_iterations < 1:
            raise ValueError(
                f"max_iterations must be >= 1, got {self.max_iterations}."
            )
        if self.log_every < 1:
            raise ValueError(f"log_every must be >= 1, got {self.log_every}.")

    @property
    def bounds(self) -> Optional[Tuple[float, float]]:
        """Explicit ``(k_min, k_max)`` or None when derived from the steady state."""
        if self.k_min is None:
            return None
        return (self.k_min, self.k_max)


def _load_section(
    filename: str,
    section: str,
    config_cls: Type[_ConfigT],
) -> _ConfigT:
    if not os.path.exists(filename):
        logger.warning(
            f"Solver config file '{filename}' not found. Using defaults."
        )
        return config_cls()

    try:
        full_data = load_json_file(filename)

        if section not in full_data:
            logger.warning(
                f"Key '{section}' not in {filename}. Using defaults."
            )
            return config_cls()

        section_data = full_data[section]
        valid_keys = {f.name for f in fields(config_cls)}
        filtered_data = {k: v for k, v in section_data.items() if k in valid_keys}

        return config_cls(**filtered_data)

    except (TypeError, ValueError) as e:
        logger.error(f"Error reading solver config {filename}: {e}")
        sys.exit(1)


def load_collocation_config(
    filename: str,
    algorithm: Union[Algorithm, str],
) -> CollocationConfig:
    """
    Load collocation configuration from a JSON file for one algorithm.

    Args:
        filename: Path to the JSON configuration file.
        algorithm: Key in the JSON file ('vfi', 'fpi' or 'ti').

    Returns:
        Populated CollocationConfig instance.
    """
    return _load_section(filename, Algorithm(algorithm).value, CollocationConfig)


def load_discrete_config(filename: str) -> DiscreteGridConfig:
    """
    Load discretized-VFI configuration from the 'discrete' key of a JSON file.

    Args:
        filename: Path to the JSON configuration file.

    Returns:
        Populated DiscreteGridConfig instance.
    """
    return _load_section(
        filename, Algorithm.DISCRETIZED_VFI.value, DiscreteGridConfig
    )
