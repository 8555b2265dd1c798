"""Function approximation on a bounded capital domain.

Modules
-------
scaling
    Affine map between the physical domain and [-1, 1].
chebyshev
    Chebyshev nodes, basis evaluation, design matrix and approximant.
"""

from growth_models.approximation.chebyshev import (
    ChebyshevApproximant,
    ChebyshevBasis,
)
from growth_models.approximation.scaling import StateScaler

__all__ = [
    "ChebyshevApproximant",
    "ChebyshevBasis",
    "StateScaler",
]
