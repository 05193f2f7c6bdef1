"""Exception types raised by map configuration and generation."""

from __future__ import annotations


class EdenHexError(Exception):
    """Base class for all edenhex errors."""


class ConfigurationError(EdenHexError, ValueError):
    """Invalid map configuration, reported before generation starts."""


class GenerationPreconditionError(EdenHexError):
    """A generation pass was asked to do something it cannot finish.

    Raised instead of looping forever, e.g. when the forest quota exceeds
    the number of background cells available for conversion.
    """


class GridFrozenError(EdenHexError, RuntimeError):
    """Attempted write to a terrain grid after generation completed."""
