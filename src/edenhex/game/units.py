"""
Unit kinds and their behaviour table.

Units are plain records tagged with a ``UnitKind``; per-kind behaviour
(movement allowance, vision, whether the unit can found a capital) is
looked up in ``UNIT_STATS`` rather than encoded in subclasses.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from edenhex.core.hex_coords import GridCoord


class UnitKind(str, Enum):
    UNIT = "unit"
    SETTLER = "settler"


@dataclass(frozen=True)
class UnitStats:
    name: str
    max_movement: int
    vision_radius: int
    can_found_capital: bool = False
    capital_build_turns: int = 0


UNIT_STATS: dict[UnitKind, UnitStats] = {
    UnitKind.UNIT: UnitStats(name="Unit", max_movement=2, vision_radius=2),
    UnitKind.SETTLER: UnitStats(
        name="Settler",
        max_movement=2,
        vision_radius=2,
        can_found_capital=True,
        capital_build_turns=1,
    ),
}


@dataclass
class Unit:
    """A unit on the board.

    Attributes:
        id: Unique identifier within a session.
        kind: Variant tag; behaviour comes from ``UNIT_STATS[kind]``.
        position: Current cell.
        remaining_movement: Moves left this turn.
        selected: Whether the player has this unit selected.
        has_built_capital: Settlers only; set once a capital is founded.
        building_capital: Settlers only; True while construction runs.
        build_turns_remaining: Turns until the capital completes.
    """

    id: str
    kind: UnitKind
    position: GridCoord
    remaining_movement: int = 0
    selected: bool = False
    has_built_capital: bool = False
    building_capital: bool = False
    build_turns_remaining: int = 0

    @property
    def stats(self) -> UnitStats:
        return UNIT_STATS[self.kind]

    @property
    def name(self) -> str:
        return self.stats.name

    def refresh_movement(self) -> None:
        self.remaining_movement = self.stats.max_movement

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "name": self.name,
            "position": list(self.position),
            "remaining_movement": self.remaining_movement,
            "max_movement": self.stats.max_movement,
            "selected": self.selected,
            "building_capital": self.building_capital,
            "build_turns_remaining": self.build_turns_remaining,
        }
