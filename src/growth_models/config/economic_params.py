# growth_models/config/economic_params.py
"""
Economic parameter definitions and loading utilities.

This module defines the primitives of the deterministic growth model:
Cobb-Douglas production f(k) = k^alpha, CRRA utility with curvature eta,
and the discount factor beta.  Parameters are immutable after
initialization to prevent accidental modification during a solve.

Example:
    >>> from growth_models.config.economic_params import load_economic_params
    >>> params = load_economic_params("hyperparam/growth_params.json")
    >>> print(f"Discount factor: {params.discount_factor}")
"""

from dataclasses import dataclass, fields
import sys
import logging

from growth_models.io.file_utils import load_json_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EconomicParams:
    """
    Immutable container for the growth-model primitives.

    Attributes:
        capital_share: Output elasticity of capital (alpha), in (0, 1).
        discount_factor: Time preference parameter (beta), in (0, 1).
        risk_aversion: CRRA utility curvature (eta), positive.  eta == 1
            selects log utility.

    Raises:
        ValueError: If any parameter is outside its valid range.
    """

    capital_share: float = 0.75
    discount_factor: float = 0.95
    risk_aversion: float = 2.0

    def __post_init__(self) -> None:
        """Validate parameters after initialization."""
        self._validate_capital_share()
        self._validate_discount_factor()
        self._validate_risk_aversion()

    def _validate_capital_share(self) -> None:
        if not (0 < self.capital_share < 1):
            raise ValueError(
                f"Capital share must be in (0, 1), got {self.capital_share}"
            )

    def _validate_discount_factor(self) -> None:
        """Ensure discount factor is economically meaningful."""
        if not (0 < self.discount_factor < 1):
            raise ValueError(
                f"Discount factor must be in (0, 1), got {self.discount_factor}"
            )

    def _validate_risk_aversion(self) -> None:
        if not self.risk_aversion > 0:
            raise ValueError(
                f"Risk aversion must be positive, got {self.risk_aversion}"
            )


def load_economic_params(filename: str) -> EconomicParams:
    """
    Load economic parameters from a JSON file.

    Args:
        filename: Path to the JSON configuration file.

    Returns:
        Populated EconomicParams instance.

    Raises:
        SystemExit: If file cannot be read or contains unknown keys.
        ValueError: If a parameter is outside its valid range.
    """
    data = load_json_file(filename)
    valid_keys = {f.name for f in fields(EconomicParams)}
    unknown = set(data) - valid_keys
    if unknown:
        logger.error(f"Unknown economic parameters in {filename}: {sorted(unknown)}")
        sys.exit(1)
    return EconomicParams(**data)
