"""
Building kinds and their behaviour table.

Eden stress is the environmental cost of a building: a one-off amount
when it is built and a recurring amount every turn afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BuildingKind(str, Enum):
    FACTORY = "factory"
    RESEARCH_LAB = "research_lab"
    FLOOD_BARRIER = "flood_barrier"


@dataclass(frozen=True)
class BuildingStats:
    name: str
    production_cost: int
    production_bonus: int = 0
    science_bonus: int = 0
    eden_stress_on_build: int = 0
    eden_stress_per_turn: int = 0


BUILDING_STATS: dict[BuildingKind, BuildingStats] = {
    BuildingKind.FACTORY: BuildingStats(
        name="Factory",
        production_cost=20,
        production_bonus=4,
        eden_stress_per_turn=2,
    ),
    BuildingKind.RESEARCH_LAB: BuildingStats(
        name="Research Lab",
        production_cost=15,
        science_bonus=4,
    ),
    BuildingKind.FLOOD_BARRIER: BuildingStats(
        name="Flood Barrier",
        production_cost=10,
        eden_stress_on_build=1,
    ),
}
