"""Serialization helpers shared by the API routers."""

from __future__ import annotations

from typing import Any


def serialize_map(session) -> dict[str, Any]:
    generator = session.generator
    return {
        "id": session.id,
        "name": session.name,
        "width": session.config.width,
        "height": session.config.height,
        "orientation": session.config.orientation.value,
        "current_turn": session.game.current_turn,
        "quotas": dict(generator.quotas),
        "counts": generator.grid.counts(),
        "config": session.config.to_dict(),
    }


def serialize_tile(generator, col: int, row: int) -> dict[str, Any] | None:
    """Full detail for one cell, or None if it is off the board."""
    tile = generator.tile_at(col, row)
    if tile is None:
        return None
    x, y = generator.hex_center((col, row))
    return {
        "col": col,
        "row": row,
        "name": tile.name,
        "min_height": tile.min_height,
        "max_height": tile.max_height,
        "material": tile.material,
        "center": [round(x, 4), round(y, 4)],
        "neighbors": [list(n) for n in generator.neighbors((col, row))],
        "distance_to_alien_base": generator.distance_to_nearest_alien_base((col, row)),
    }
