# growth_models/io/artifacts.py
"""
Utilities for saving and loading solver results.

Solutions are persisted with NumPy's ``.npz`` format via their
``as_dict()`` representation, so a saved result can be inspected
without TensorFlow.

Example:
    >>> from growth_models.io.artifacts import save_solution, load_solution
    >>> save_solution(solution, "results/ti_solution.npz")
    >>> data = load_solution("results/ti_solution.npz")
    >>> data["coefficients"]
"""

import os
import logging
from typing import Any, Dict, Union

import numpy as np

logger = logging.getLogger(__name__)


def save_results(results: Dict[str, Any], filename: str) -> None:
    """
    Save a result dictionary to a compressed NumPy file.

    Args:
        results: Dictionary of arrays and scalars.
        filename: Target file path (should end with .npz).
    """
    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(filename, "wb") as f:
        np.savez(f, **results)
    logger.info(f"Saved results to {filename}")


def save_solution(solution: Any, filename: str) -> None:
    """
    Save a CollocationSolution or DiscreteSolution.

    Args:
        solution: Any object exposing ``as_dict()``.
        filename: Target file path (should end with .npz).
    """
    save_results(solution.as_dict(), filename)


def load_solution(filename: str) -> Dict[str, Union[np.ndarray, Any]]:
    """
    Load a saved solution from a NumPy file.

    Zero-dimensional entries (scalars and strings) are unwrapped to
    Python values; arrays are returned as-is.

    Args:
        filename: Path to the .npz file.

    Returns:
        Dictionary containing the loaded entries.
    """
    with np.load(filename) as data:
        return {
            key: data[key].item() if data[key].ndim == 0 else data[key]
            for key in data.files
        }
