"""Immutable configuration for the growth model and its solvers."""
