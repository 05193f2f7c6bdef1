"""
Map configuration for edenhex.

ALL generation parameters live here. Nothing in the generator is hardcoded
apart from the well-known tile type names.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from edenhex.core.errors import ConfigurationError
from edenhex.core.hex_coords import Orientation
from edenhex.core.tile_types import TileType, default_tile_types


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class MapConfig:
    """
    Map configuration consumed once at generation start.

    Use ``validate()`` before generating; ``to_dict()`` / ``from_dict()``
    for serialization and comparison.
    """

    # === Identity ===
    map_name: str = "default"
    random_seed: int | None = None

    # === Grid ===
    width: int = 5
    height: int = 5
    orientation: Orientation = Orientation.FLAT_TOPPED
    outer_size: float = 1.0  # Hex corner radius, used for positions only

    # === Tile types (order matters: the first absorbs rounding error) ===
    tile_types: list[TileType] = field(default_factory=default_tile_types)

    # === Generation ===
    mountain_clusters: int = 3
    lake_chance: float = 0.1  # Per river cell chance of branching a lake

    # === Spawning ===
    min_alien_base_distance: int = 3

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    def tile_type(self, name: str) -> TileType | None:
        """Look up a configured tile type by name."""
        for t in self.tile_types:
            if t.name == name:
                return t
        return None

    def validate(self) -> None:
        """Raise ConfigurationError if the config cannot be generated.

        A plain-string orientation is normalised to ``Orientation``.
        """
        if not isinstance(self.width, int) or not isinstance(self.height, int):
            raise ConfigurationError("Grid dimensions must be integers")
        try:
            self.orientation = Orientation(self.orientation)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"Unknown orientation {self.orientation!r}; expected 'flat' or 'pointy'"
            )
        if self.random_seed is not None and not _is_int(self.random_seed):
            raise ConfigurationError("random_seed must be an integer or None")
        if not _is_number(self.outer_size) or self.outer_size <= 0:
            raise ConfigurationError("outer_size must be a positive number")
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"Grid dimensions must be positive, got {self.width}x{self.height}"
            )
        if not self.tile_types:
            raise ConfigurationError("At least one tile type must be configured")

        names = [t.name for t in self.tile_types]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ConfigurationError(f"Duplicate tile type names: {duplicates}")

        untyped = [t.name for t in self.tile_types if not _is_number(t.spawn_weight)]
        if untyped:
            raise ConfigurationError(f"Spawn weights must be numbers for: {untyped}")

        negative = [t.name for t in self.tile_types if t.spawn_weight < 0]
        if negative:
            raise ConfigurationError(f"Negative spawn weights for: {negative}")
        if sum(t.spawn_weight for t in self.tile_types) <= 0:
            raise ConfigurationError("At least one tile type needs a positive weight")

        if not _is_int(self.mountain_clusters) or self.mountain_clusters < 1:
            raise ConfigurationError("mountain_clusters must be >= 1")
        if not _is_number(self.lake_chance) or not 0.0 <= self.lake_chance <= 1.0:
            raise ConfigurationError("lake_chance must be within [0, 1]")
        if not _is_int(self.min_alien_base_distance) or self.min_alien_base_distance < 0:
            raise ConfigurationError("min_alien_base_distance must be an integer >= 0")

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        d: dict[str, Any] = {}
        for k, v in self.__dict__.items():
            if k.startswith("_"):
                continue
            d[k] = v
        d["orientation"] = Orientation(self.orientation).value
        d["tile_types"] = [t.to_dict() for t in self.tile_types]
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> MapConfig:
        """Deserialize from a dict. Unknown keys raise TypeError."""
        kwargs = {k: v for k, v in d.items() if not k.startswith("_")}
        if "orientation" in kwargs:
            kwargs["orientation"] = Orientation(kwargs["orientation"])
        if "tile_types" in kwargs:
            kwargs["tile_types"] = [
                t if isinstance(t, TileType) else TileType.from_dict(t)
                for t in kwargs["tile_types"]
            ]
        return cls(**kwargs)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)

    @classmethod
    def from_json(cls, s: str) -> MapConfig:
        return cls.from_dict(json.loads(s))

    def diff(self, other: MapConfig) -> dict[str, tuple[Any, Any]]:
        """Return parameters that differ between two configs."""
        diffs: dict[str, tuple[Any, Any]] = {}
        mine = self.to_dict()
        theirs = other.to_dict()
        for k, v1 in mine.items():
            v2 = theirs.get(k)
            if v1 != v2:
                diffs[k] = (v1, v2)
        return diffs
