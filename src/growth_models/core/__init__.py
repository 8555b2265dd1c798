"""Core utilities shared by the growth-model solvers.

Provide shared type definitions and the scalar optimisation capability
(bounded maximisation and bracketed root-finding) used by the
per-node sub-problems.
"""

from growth_models.core.types import TENSORFLOW_DTYPE, NUMPY_DTYPE, Tensor, Array
from growth_models.core.optimize import brackets_root, find_root, maximize_scalar
