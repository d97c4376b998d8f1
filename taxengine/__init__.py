"""Deterministic U.S. federal tax computations for investment accounts."""

__version__ = "0.1.0"
