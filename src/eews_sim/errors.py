"""Exception types raised by the simulation core."""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for all simulation errors."""


class InvalidParameter(SimulationError, ValueError):
    """A building's structural constants cannot be evaluated."""


class InvalidEvent(SimulationError, ValueError):
    """Earthquake parameters are out of range."""


class FeedError(SimulationError):
    """The earthquake feed record is missing fields or is not valid JSON."""


class BuildingDataError(SimulationError):
    """A building definitions file could not be loaded."""
