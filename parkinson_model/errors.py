"""Exceptions raised by the nervous-system model."""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for errors raised by the simulation core."""


class ValidationError(SimulationError, ValueError):
    """Raised when an element, edge or configuration value is rejected."""


class EmptyPopulationError(SimulationError, LookupError):
    """Raised when a random selection has no eligible candidates."""


__all__ = ["EmptyPopulationError", "SimulationError", "ValidationError"]
