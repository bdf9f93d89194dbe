"""Stochastic forest-fire propagation on a square grid, with a band-partitioned variant, statistics and a display window."""

__version__ = "0.1.0"
__all__ = ["__version__"]