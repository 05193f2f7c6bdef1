"""City state: yields, buildings and territory."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from edenhex.core import hex_coords
from edenhex.core.hex_coords import GridCoord, Orientation
from edenhex.game.buildings import BUILDING_STATS, BuildingKind

logger = logging.getLogger(__name__)


@dataclass
class City:
    """A founded city.

    Attributes:
        name: Display name.
        position: Cell the city stands on.
        population: Current population.
        base_production: Production before building bonuses.
        base_science: Science before building bonuses.
        territory_radius: Hex radius of the city's territory.
        current_production: Production accumulated over past turns.
        buildings: Constructed buildings, in build order.
    """

    name: str
    position: GridCoord
    population: int = 5
    base_production: int = 5
    base_science: int = 3
    territory_radius: int = 1
    current_production: int = 0
    buildings: list[BuildingKind] = field(default_factory=list)

    def total_production(self) -> int:
        return self.base_production + sum(
            BUILDING_STATS[b].production_bonus for b in self.buildings
        )

    def total_science(self) -> int:
        return self.base_science + sum(
            BUILDING_STATS[b].science_bonus for b in self.buildings
        )

    def add_building(self, kind: BuildingKind) -> int:
        """Add a completed building. Returns the one-off eden stress incurred."""
        self.buildings.append(kind)
        stats = BUILDING_STATS[kind]
        logger.debug("%s completed %s", self.name, stats.name)
        return stats.eden_stress_on_build

    def process_turn(self) -> int:
        """Accumulate production. Returns the per-turn eden stress incurred."""
        self.current_production += self.total_production()
        stress = sum(BUILDING_STATS[b].eden_stress_per_turn for b in self.buildings)
        logger.debug(
            "%s - production %d, science %d, stress %d",
            self.name, self.total_production(), self.total_science(), stress,
        )
        return stress

    def territory(
        self, orientation: Orientation, width: int, height: int
    ) -> list[GridCoord]:
        """In-bounds cells within ``territory_radius`` hex steps of the city."""
        return hex_coords.cells_within(
            self.position, self.territory_radius, orientation, width, height
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "position": list(self.position),
            "population": self.population,
            "production": self.total_production(),
            "science": self.total_science(),
            "current_production": self.current_production,
            "territory_radius": self.territory_radius,
            "buildings": [b.value for b in self.buildings],
        }
