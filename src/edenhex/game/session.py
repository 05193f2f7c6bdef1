"""
Game session: turns, units and cities on a generated map.

The session is constructed explicitly around a TerrainGenerator and
passed to whoever needs it; there is no global instance. It reads the
terrain grid but never writes to it. All adjacency and distance checks
go through the generator, which delegates to ``hex_coords``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from edenhex.core.hex_coords import GridCoord
from edenhex.core.terrain_generator import TerrainGenerator
from edenhex.core.tile_types import ALIEN_BASE, MOUNTAINS
from edenhex.game.buildings import BUILDING_STATS, BuildingKind
from edenhex.game.city import City
from edenhex.game.units import Unit, UnitKind

logger = logging.getLogger(__name__)

TurnCallback = Callable[["GameSession"], None]


class GameSession:
    """Turn state for one game on one map.

    Attributes:
        generator: The generator owning the (frozen) terrain grid.
        current_turn: 1-based turn counter.
        is_player_turn: Whether the player may end the turn.
        units: Live units keyed by id.
        cities: Founded cities, in founding order.
        eden_stress: Environmental stress accumulated from buildings.
        on_turn_start: Callbacks fired after units are refreshed.
        on_turn_end: Callbacks fired after cities are processed.
    """

    def __init__(self, generator: TerrainGenerator) -> None:
        if generator.grid is None:
            generator.generate()
        self.generator = generator
        self.current_turn: int = 1
        self.is_player_turn: bool = True
        self.units: dict[str, Unit] = {}
        self.cities: list[City] = []
        self.eden_stress: int = 0
        self.on_turn_start: list[TurnCallback] = []
        self.on_turn_end: list[TurnCallback] = []
        self._next_unit_id = 0
        self._selected_id: str | None = None

    # ---- Terrain helpers ----

    def _tile_name(self, coord: tuple[int, int]) -> str | None:
        tile = self.generator.tile_at(*coord)
        return tile.name if tile is not None else None

    # ---- Units ----

    def spawn_unit(
        self,
        kind: UnitKind = UnitKind.SETTLER,
        position: tuple[int, int] | None = None,
        min_distance: int | None = None,
    ) -> Unit | None:
        """Place a new unit.

        Without an explicit position the spawn-point search picks a
        Plains cell far enough from the alien base.

        Returns:
            The new unit, or None if no position was given and no cell
            qualifies, or the given position is off the board.
        """
        if position is None:
            position = self.generator.find_spawn_point(min_distance)
            if position is None:
                logger.debug("No valid spawn point for %s", kind.value)
                return None
        elif self.generator.tile_at(*position) is None:
            return None

        unit_id = f"u{self._next_unit_id}"
        self._next_unit_id += 1
        unit = Unit(id=unit_id, kind=UnitKind(kind), position=GridCoord(*position))
        unit.refresh_movement()
        self.units[unit_id] = unit
        logger.debug("%s %s initialized at %s", unit.name, unit_id, unit.position)
        return unit

    def get_unit(self, unit_id: str) -> Unit:
        """Raises KeyError if the unit does not exist."""
        if unit_id not in self.units:
            raise KeyError(f"Unit '{unit_id}' not found")
        return self.units[unit_id]

    def remove_unit(self, unit_id: str) -> bool:
        if self._selected_id == unit_id:
            self._selected_id = None
        return self.units.pop(unit_id, None) is not None

    @property
    def selected_unit(self) -> Unit | None:
        if self._selected_id is None:
            return None
        return self.units.get(self._selected_id)

    def select_unit(self, unit_id: str) -> Unit:
        unit = self.get_unit(unit_id)
        self.deselect_unit()
        unit.selected = True
        self._selected_id = unit_id
        return unit

    def deselect_unit(self) -> None:
        unit = self.selected_unit
        if unit is not None:
            unit.selected = False
        self._selected_id = None

    # ---- Movement ----

    def can_move_to(self, unit: Unit, target: tuple[int, int]) -> bool:
        """Whether ``unit`` may step onto ``target`` this turn."""
        if unit.building_capital:
            logger.debug("Cannot move while building capital")
            return False
        if unit.remaining_movement <= 0:
            logger.debug("No movement remaining")
            return False
        if GridCoord(*target) not in self.generator.neighbors(unit.position):
            logger.debug("Target %s is not adjacent", target)
            return False
        if self._tile_name(target) == MOUNTAINS:
            logger.debug("Cannot move to mountains")
            return False
        return True

    def move_unit(self, unit_id: str, target: tuple[int, int]) -> bool:
        """Move a unit one cell, consuming one movement point."""
        unit = self.get_unit(unit_id)
        if not self.can_move_to(unit, target):
            return False
        unit.position = GridCoord(*target)
        unit.remaining_movement -= 1
        logger.debug(
            "%s moved to %s. Remaining movement: %d",
            unit.name, unit.position, unit.remaining_movement,
        )
        return True

    def valid_moves(self, unit_id: str) -> list[GridCoord]:
        unit = self.get_unit(unit_id)
        return [
            cell for cell in self.generator.neighbors(unit.position)
            if self.can_move_to(unit, cell)
        ]

    # ---- Capitals ----

    def can_build_capital(self, unit_id: str) -> bool:
        unit = self.get_unit(unit_id)
        if not unit.stats.can_found_capital:
            return False
        if unit.has_built_capital:
            logger.debug("Already built capital")
            return False
        if unit.building_capital:
            logger.debug("Already building capital")
            return False
        if self._tile_name(unit.position) == MOUNTAINS:
            logger.debug("Cannot build capital on mountains")
            return False
        for neighbor in self.generator.neighbors(unit.position):
            if self._tile_name(neighbor) == ALIEN_BASE:
                logger.debug("Cannot build capital adjacent to alien base")
                return False
        return True

    def start_building_capital(self, unit_id: str) -> bool:
        """Begin founding a capital; the settler cannot move meanwhile."""
        if not self.can_build_capital(unit_id):
            return False
        unit = self.units[unit_id]
        unit.building_capital = True
        unit.build_turns_remaining = unit.stats.capital_build_turns
        unit.remaining_movement = 0
        logger.debug("%s started building capital at %s", unit.id, unit.position)
        return True

    def _complete_capital(self, unit: Unit) -> City:
        city = City(name="Capital", position=unit.position)
        self.cities.append(city)
        unit.has_built_capital = True
        unit.building_capital = False
        self.remove_unit(unit.id)
        logger.info("Capital founded at %s", city.position)
        return city

    # ---- Cities ----

    def get_city(self, name: str) -> City:
        for city in self.cities:
            if city.name == name:
                return city
        raise KeyError(f"City '{name}' not found")

    def construct_building(self, city_name: str, kind: BuildingKind) -> bool:
        """Spend accumulated production on a building, if affordable."""
        city = self.get_city(city_name)
        cost = BUILDING_STATS[kind].production_cost
        if city.current_production < cost:
            return False
        city.current_production -= cost
        self.eden_stress += city.add_building(kind)
        return True

    def territory(self, city_name: str) -> list[GridCoord]:
        gen = self.generator
        return self.get_city(city_name).territory(gen.orientation, gen.width, gen.height)

    # ---- Turns ----

    def _start_turn(self) -> None:
        logger.info("=== Turn %d started ===", self.current_turn)
        for unit in list(self.units.values()):
            unit.refresh_movement()
            if unit.building_capital:
                unit.remaining_movement = 0
                unit.build_turns_remaining -= 1
                if unit.build_turns_remaining <= 0:
                    self._complete_capital(unit)
        for callback in self.on_turn_start:
            callback(self)

    def end_turn(self) -> bool:
        """Process cities and advance to the next turn."""
        if not self.is_player_turn:
            return False
        logger.info("=== Turn %d ending ===", self.current_turn)
        for city in self.cities:
            self.eden_stress += city.process_turn()
        for callback in self.on_turn_end:
            callback(self)
        self.current_turn += 1
        self._start_turn()
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_turn": self.current_turn,
            "is_player_turn": self.is_player_turn,
            "eden_stress": self.eden_stress,
            "units": [u.to_dict() for u in self.units.values()],
            "cities": [c.to_dict() for c in self.cities],
        }
