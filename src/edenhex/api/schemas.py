"""
Pydantic models for API request/response validation.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from typing import Any


# === Maps ===

class CreateMapRequest(BaseModel):
    config: dict[str, Any] | None = None
    preset: str | None = None
    name: str | None = None
    seed: int | None = None


class MapSummary(BaseModel):
    id: str
    name: str
    width: int
    height: int
    orientation: str
    current_turn: int


class MapResponse(MapSummary):
    quotas: dict[str, int]
    counts: dict[str, int]
    config: dict[str, Any]


class TileResponse(BaseModel):
    col: int
    row: int
    name: str
    min_height: float
    max_height: float
    material: str | None
    center: list[float]
    neighbors: list[list[int]]
    distance_to_alien_base: int | None


class SpawnResponse(BaseModel):
    found: bool
    col: int | None = None
    row: int | None = None
    min_distance: int


# === Game ===

class SpawnUnitRequest(BaseModel):
    kind: str = "settler"
    col: int | None = None
    row: int | None = None
    min_distance: int | None = Field(default=None, ge=0)


class MoveRequest(BaseModel):
    col: int
    row: int


class BuildRequest(BaseModel):
    building: str
