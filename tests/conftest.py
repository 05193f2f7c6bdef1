"""
Shared test configuration.

Clears EDENHEX_MAX_SESSIONS so a developer's .env cannot change session
eviction behaviour under test, and provides common map configs.
"""

import pytest

from edenhex.core.config import MapConfig
from edenhex.core.tile_types import (
    ALIEN_BASE,
    FOREST,
    MOUNTAINS,
    PLAINS,
    RIVER,
    TileType,
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    monkeypatch.delenv("EDENHEX_MAX_SESSIONS", raising=False)
    yield


@pytest.fixture
def scenario_config():
    """10x10 flat-topped board with weights Plains 5, Forest 2, Mountains 2, River 1."""
    return MapConfig(
        width=10,
        height=10,
        tile_types=[
            TileType(PLAINS, spawn_weight=5),
            TileType(FOREST, spawn_weight=2),
            TileType(MOUNTAINS, spawn_weight=2),
            TileType(RIVER, spawn_weight=1),
        ],
        random_seed=1234,
    )


@pytest.fixture
def full_config():
    """12x9 board with all five tile types, including an alien base."""
    return MapConfig(
        width=12,
        height=9,
        tile_types=[
            TileType(PLAINS, spawn_weight=0.5),
            TileType(FOREST, spawn_weight=0.2),
            TileType(MOUNTAINS, spawn_weight=0.15),
            TileType(RIVER, spawn_weight=0.1),
            TileType(ALIEN_BASE, spawn_weight=0.05),
        ],
        random_seed=7,
    )
