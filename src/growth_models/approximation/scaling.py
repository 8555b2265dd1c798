# growth_models/approximation/scaling.py
"""
Affine map between the physical capital domain and [-1, 1].

Chebyshev polynomials live on the canonical interval [-1, 1].  The
scaler maps physical states there and back.  It never clamps: a state
outside [lower, upper] maps outside [-1, 1] and the basis extrapolates.

Example:
    >>> scaler = StateScaler(lower=0.1, upper=0.4)
    >>> z = scaler.to_canonical(capital)
    >>> capital_again = scaler.to_physical(z)
"""

from dataclasses import dataclass

from growth_models.core.types import Numeric


@dataclass(frozen=True)
class StateScaler:
    """
    Maps state variables between physical and canonical domains.

    Accepts Python floats, NumPy arrays and TensorFlow tensors alike.

    Attributes:
        lower: Lower bound of the physical domain.
        upper: Upper bound of the physical domain.

    Raises:
        ValueError: If ``lower >= upper``.
    """

    lower: float
    upper: float

    def __post_init__(self) -> None:
        if not self.lower < self.upper:
            raise ValueError(
                f"Scaler domain must satisfy lower < upper, "
                f"got ({self.lower}, {self.upper})."
            )

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def to_canonical(self, x: Numeric) -> Numeric:
        """Map ``x`` from [lower, upper] to [-1, 1]."""
        return 2.0 * (x - self.lower) / self.width - 1.0

    def to_physical(self, z: Numeric) -> Numeric:
        """Map ``z`` from [-1, 1] to [lower, upper]."""
        return self.lower + 0.5 * (z + 1.0) * self.width
