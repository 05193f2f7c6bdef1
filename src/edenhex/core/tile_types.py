"""
Tile type definitions.

A tile type is a named terrain category with a relative spawn weight.
The height range and material are only read by the rendering consumer;
the generator treats them as opaque.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

PLAINS = "Plains"
FOREST = "Forest"
MOUNTAINS = "Mountains"
RIVER = "River"
ALIEN_BASE = "Alien Base"


@dataclass(frozen=True)
class TileType:
    """A terrain category.

    Attributes:
        name: Unique key; the generator looks categories up by name.
        min_height: Lower bound of the rendered tile height.
        max_height: Upper bound of the rendered tile height.
        material: Opaque visual-material reference for the renderer.
        spawn_weight: Relative frequency (not a count). Must be >= 0.
    """

    name: str
    min_height: float = 0.5
    max_height: float = 1.5
    material: str | None = None
    spawn_weight: float = 1.0

    def sample_height(self, rng: np.random.Generator) -> float:
        """Draw a render height uniformly from [min_height, max_height)."""
        return float(rng.uniform(self.min_height, self.max_height))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "min_height": self.min_height,
            "max_height": self.max_height,
            "material": self.material,
            "spawn_weight": self.spawn_weight,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> TileType:
        return cls(
            name=d["name"],
            min_height=d.get("min_height", 0.5),
            max_height=d.get("max_height", 1.5),
            material=d.get("material"),
            spawn_weight=d.get("spawn_weight", 1.0),
        )


def default_tile_types() -> list[TileType]:
    """The five categories of the prototype map, Plains first."""
    return [
        TileType(PLAINS, 0.8, 1.0, "plains", 0.5),
        TileType(FOREST, 1.0, 1.3, "forest", 0.2),
        TileType(MOUNTAINS, 1.8, 2.6, "mountains", 0.15),
        TileType(RIVER, 0.4, 0.6, "river", 0.1),
        TileType(ALIEN_BASE, 1.2, 1.6, "alien_base", 0.05),
    ]
