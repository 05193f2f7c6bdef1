"""
Map presets: pre-configured map templates.

Each preset returns a MapConfig tuned for a particular kind of game.
"""

from __future__ import annotations

from typing import Callable

from edenhex.core.config import MapConfig
from edenhex.core.hex_coords import Orientation
from edenhex.core.tile_types import (
    ALIEN_BASE,
    FOREST,
    MOUNTAINS,
    PLAINS,
    RIVER,
    TileType,
)


def default() -> MapConfig:
    """The prototype's stock 5x5 board."""
    return MapConfig(map_name="default")


def small_skirmish() -> MapConfig:
    """A 10x10 board with no alien presence."""
    return MapConfig(
        map_name="small_skirmish",
        width=10,
        height=10,
        tile_types=[
            TileType(PLAINS, 0.8, 1.0, "plains", 0.5),
            TileType(FOREST, 1.0, 1.3, "forest", 0.2),
            TileType(MOUNTAINS, 1.8, 2.6, "mountains", 0.2),
            TileType(RIVER, 0.4, 0.6, "river", 0.1),
        ],
        mountain_clusters=2,
        min_alien_base_distance=0,
    )


def river_lands() -> MapConfig:
    """Wet lowlands: lots of river cells and frequent lakes."""
    return MapConfig(
        map_name="river_lands",
        width=16,
        height=12,
        tile_types=[
            TileType(PLAINS, 0.8, 1.0, "plains", 0.45),
            TileType(FOREST, 1.0, 1.3, "forest", 0.2),
            TileType(MOUNTAINS, 1.8, 2.6, "mountains", 0.05),
            TileType(RIVER, 0.4, 0.6, "river", 0.25),
            TileType(ALIEN_BASE, 1.2, 1.6, "alien_base", 0.05),
        ],
        mountain_clusters=1,
        lake_chance=0.3,
    )


def alien_frontier() -> MapConfig:
    """A large alien region pressing on a mountainous frontier."""
    return MapConfig(
        map_name="alien_frontier",
        width=20,
        height=14,
        tile_types=[
            TileType(PLAINS, 0.8, 1.0, "plains", 0.45),
            TileType(FOREST, 1.0, 1.3, "forest", 0.15),
            TileType(MOUNTAINS, 1.8, 2.6, "mountains", 0.2),
            TileType(RIVER, 0.4, 0.6, "river", 0.05),
            TileType(ALIEN_BASE, 1.2, 1.6, "alien_base", 0.15),
        ],
        mountain_clusters=6,
        min_alien_base_distance=5,
    )


def pointy_continent() -> MapConfig:
    """Default weights on a pointy-topped 24x16 board."""
    return MapConfig(
        map_name="pointy_continent",
        width=24,
        height=16,
        orientation=Orientation.POINTY_TOPPED,
        mountain_clusters=5,
        min_alien_base_distance=4,
    )


PRESETS: dict[str, Callable[[], MapConfig]] = {
    "default": default,
    "small_skirmish": small_skirmish,
    "river_lands": river_lands,
    "alien_frontier": alien_frontier,
    "pointy_continent": pointy_continent,
}


def get_preset(name: str) -> MapConfig:
    """Return a fresh MapConfig for the named preset.

    Raises:
        KeyError: If the preset name is not found.
    """
    if name not in PRESETS:
        raise KeyError(
            f"Unknown preset '{name}'. Available: {list(PRESETS.keys())}"
        )
    return PRESETS[name]()


def list_presets() -> list[str]:
    return list(PRESETS.keys())
