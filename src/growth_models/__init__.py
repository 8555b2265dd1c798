"""Chebyshev collocation and grid solvers for the deterministic growth model."""

__version__ = "0.1.0"
