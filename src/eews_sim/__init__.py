"""Earthquake early-warning scene simulation core."""

__version__ = "0.1.0"
