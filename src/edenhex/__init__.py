"""Edenhex: procedural hex-map generation for a turn-based strategy prototype."""

__version__ = "0.3.0"
