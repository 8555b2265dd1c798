"""Protocol definitions for collocation solver components.

Defines ``typing.Protocol`` classes that formalise the interface between
the iteration loop and the per-algorithm residual computation.  Contains
no implementation — only type signatures.

The loop (``CollocationSolver.solve``) depends only on
:class:`ResidualStrategy`; in tests any strategy can be replaced by a
lightweight stub that returns pre-canned node values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import tensorflow as tf

from growth_models.config.solver_config import Algorithm


@dataclass(frozen=True)
class NodeUpdate:
    """Fresh node values from one iteration.

    Attributes
    ----------
    values : tf.Tensor
        NodeValues, shape ``(n,)`` — maximised Bellman values (VFI) or
        Euler-consistent consumption (FPI, TI).
    controls : tf.Tensor
        Consumption at each node, shape ``(n,)``.
    """

    values: tf.Tensor
    controls: tf.Tensor


@runtime_checkable
class ResidualStrategy(Protocol):
    """Interface for the per-algorithm node computation."""

    algorithm: Algorithm

    def initial_coefficients(self) -> tf.Tensor:
        """Default starting coefficients for the algorithm."""
        ...

    def node_values(self, coefficients: tf.Tensor) -> NodeUpdate:
        """Compute node values from frozen previous coefficients."""
        ...
