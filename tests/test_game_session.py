"""
Tests for the game session layer.

Boards are built by hand so terrain-dependent rules (mountains block
movement, no capitals next to the alien base) can be checked exactly.
"""

import pytest

from edenhex.core.config import MapConfig
from edenhex.core.terrain_generator import TerrainGenerator
from edenhex.core.terrain_grid import TerrainGrid
from edenhex.core.tile_types import ALIEN_BASE, MOUNTAINS, PLAINS
from edenhex.game.buildings import BUILDING_STATS, BuildingKind
from edenhex.game.city import City
from edenhex.game.session import GameSession
from edenhex.game.units import UNIT_STATS, UnitKind


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_session(
    layout: dict[tuple[int, int], str] | None = None,
    width: int = 6,
    height: int = 6,
) -> GameSession:
    """All-Plains board with the given cells overridden by type name."""
    config = MapConfig(width=width, height=height, random_seed=0)
    gen = TerrainGenerator(config)
    grid = TerrainGrid(width, height, config.tile_types)
    grid.fill(grid.index_of(PLAINS))
    for (col, row), name in (layout or {}).items():
        grid.set_tile(col, row, grid.index_of(name))
    grid.freeze()
    gen.grid = grid
    return GameSession(gen)


# ===========================================================================
# Units
# ===========================================================================


class TestUnits:
    def test_unit_stats_table(self):
        assert UNIT_STATS[UnitKind.SETTLER].can_found_capital
        assert not UNIT_STATS[UnitKind.UNIT].can_found_capital
        assert UNIT_STATS[UnitKind.UNIT].max_movement == 2

    def test_spawn_at_position(self):
        game = _make_session()
        unit = game.spawn_unit(UnitKind.UNIT, position=(2, 2))
        assert unit.position == (2, 2)
        assert unit.remaining_movement == 2
        assert game.units[unit.id] is unit

    def test_spawn_off_board(self):
        game = _make_session()
        assert game.spawn_unit(UnitKind.UNIT, position=(6, 0)) is None
        assert game.units == {}

    def test_spawn_uses_search(self):
        game = _make_session({(2, 2): ALIEN_BASE}, width=8, height=8)
        unit = game.spawn_unit(UnitKind.SETTLER, min_distance=3)
        assert unit is not None
        assert game.generator.distance_to_nearest_alien_base(unit.position) >= 3
        assert game.generator.tile_at(*unit.position).name == PLAINS

    def test_spawn_fails_when_unsatisfiable(self):
        game = _make_session({(2, 2): ALIEN_BASE}, width=5, height=5)
        assert game.spawn_unit(UnitKind.SETTLER, min_distance=100) is None

    def test_unit_ids_unique(self):
        game = _make_session()
        a = game.spawn_unit(UnitKind.UNIT, position=(0, 0))
        b = game.spawn_unit(UnitKind.UNIT, position=(0, 0))
        assert a.id != b.id

    def test_get_unknown_unit(self):
        game = _make_session()
        with pytest.raises(KeyError):
            game.get_unit("nope")

    def test_select_and_deselect(self):
        game = _make_session()
        a = game.spawn_unit(UnitKind.UNIT, position=(0, 0))
        b = game.spawn_unit(UnitKind.UNIT, position=(1, 1))
        game.select_unit(a.id)
        game.select_unit(b.id)
        assert not a.selected
        assert b.selected
        assert game.selected_unit is b
        game.deselect_unit()
        assert game.selected_unit is None
        assert not b.selected

    def test_select_unknown_keeps_selection(self):
        game = _make_session()
        unit = game.spawn_unit(UnitKind.UNIT, position=(0, 0))
        game.select_unit(unit.id)
        with pytest.raises(KeyError):
            game.select_unit("nope")
        assert game.selected_unit is unit
        assert unit.selected

    def test_session_creates_map_if_needed(self):
        gen = TerrainGenerator(MapConfig(random_seed=1))
        game = GameSession(gen)
        assert gen.grid is not None
        assert game.current_turn == 1


# ===========================================================================
# Movement
# ===========================================================================


class TestMovement:
    def test_move_to_adjacent(self):
        game = _make_session()
        unit = game.spawn_unit(UnitKind.UNIT, position=(2, 2))
        assert game.move_unit(unit.id, (2, 3))
        assert unit.position == (2, 3)
        assert unit.remaining_movement == 1

    def test_move_to_non_adjacent(self):
        game = _make_session()
        unit = game.spawn_unit(UnitKind.UNIT, position=(2, 2))
        assert not game.move_unit(unit.id, (4, 4))
        assert unit.position == (2, 2)

    def test_move_off_board(self):
        game = _make_session()
        unit = game.spawn_unit(UnitKind.UNIT, position=(0, 0))
        assert not game.move_unit(unit.id, (-1, 0))

    def test_mountains_block(self):
        game = _make_session({(2, 3): MOUNTAINS})
        unit = game.spawn_unit(UnitKind.UNIT, position=(2, 2))
        assert not game.move_unit(unit.id, (2, 3))
        assert (2, 3) not in game.valid_moves(unit.id)

    def test_movement_runs_out(self):
        game = _make_session()
        unit = game.spawn_unit(UnitKind.UNIT, position=(2, 2))
        assert game.move_unit(unit.id, (2, 3))
        assert game.move_unit(unit.id, (2, 4))
        assert not game.move_unit(unit.id, (2, 5))
        assert game.valid_moves(unit.id) == []

    def test_end_turn_refreshes_movement(self):
        game = _make_session()
        unit = game.spawn_unit(UnitKind.UNIT, position=(2, 2))
        game.move_unit(unit.id, (2, 3))
        game.move_unit(unit.id, (2, 4))
        game.end_turn()
        assert unit.remaining_movement == 2

    def test_valid_moves_are_neighbours(self):
        game = _make_session()
        unit = game.spawn_unit(UnitKind.UNIT, position=(3, 3))
        assert set(game.valid_moves(unit.id)) == set(game.generator.neighbors((3, 3)))


# ===========================================================================
# Capitals
# ===========================================================================


class TestCapital:
    def test_only_settlers_found_capitals(self):
        game = _make_session()
        unit = game.spawn_unit(UnitKind.UNIT, position=(2, 2))
        assert not game.can_build_capital(unit.id)

    def test_not_on_mountains(self):
        game = _make_session({(2, 2): MOUNTAINS})
        settler = game.spawn_unit(UnitKind.SETTLER, position=(2, 2))
        assert not game.can_build_capital(settler.id)

    def test_not_adjacent_to_alien_base(self):
        game = _make_session({(2, 3): ALIEN_BASE})
        settler = game.spawn_unit(UnitKind.SETTLER, position=(2, 2))
        assert not game.can_build_capital(settler.id)

    def test_two_away_from_alien_base_is_fine(self):
        game = _make_session({(2, 4): ALIEN_BASE})
        settler = game.spawn_unit(UnitKind.SETTLER, position=(2, 2))
        assert game.can_build_capital(settler.id)

    def test_building_takes_a_turn(self):
        game = _make_session()
        settler = game.spawn_unit(UnitKind.SETTLER, position=(2, 2))
        assert game.start_building_capital(settler.id)
        assert settler.building_capital
        assert settler.remaining_movement == 0
        assert not game.start_building_capital(settler.id)
        assert not game.move_unit(settler.id, (2, 3))
        assert game.cities == []

        game.end_turn()

        assert settler.id not in game.units
        assert len(game.cities) == 1
        capital = game.cities[0]
        assert capital.name == "Capital"
        assert capital.position == (2, 2)

    def test_selected_settler_cleared_on_founding(self):
        game = _make_session()
        settler = game.spawn_unit(UnitKind.SETTLER, position=(2, 2))
        game.select_unit(settler.id)
        game.start_building_capital(settler.id)
        game.end_turn()
        assert game.selected_unit is None


# ===========================================================================
# Cities and turns
# ===========================================================================


def _found_capital(game: GameSession, position=(2, 2)) -> City:
    settler = game.spawn_unit(UnitKind.SETTLER, position=position)
    game.start_building_capital(settler.id)
    game.end_turn()
    return game.get_city("Capital")


class TestCities:
    def test_city_yields(self):
        city = City(name="Test", position=(0, 0))
        assert city.total_production() == 5
        assert city.total_science() == 3
        city.add_building(BuildingKind.FACTORY)
        city.add_building(BuildingKind.RESEARCH_LAB)
        assert city.total_production() == 9
        assert city.total_science() == 7

    def test_building_table(self):
        assert BUILDING_STATS[BuildingKind.FACTORY].production_cost == 20
        assert BUILDING_STATS[BuildingKind.FLOOD_BARRIER].eden_stress_on_build == 1

    def test_production_accumulates(self):
        game = _make_session()
        city = _found_capital(game)
        assert city.current_production == 0
        game.end_turn()
        game.end_turn()
        assert city.current_production == 10

    def test_construct_requires_production(self):
        game = _make_session()
        city = _found_capital(game)
        assert not game.construct_building("Capital", BuildingKind.FLOOD_BARRIER)
        game.end_turn()
        game.end_turn()
        assert game.construct_building("Capital", BuildingKind.FLOOD_BARRIER)
        assert city.current_production == 0
        assert game.eden_stress == 1

    def test_factory_stress_per_turn(self):
        game = _make_session()
        city = _found_capital(game)
        city.current_production = 20
        assert game.construct_building("Capital", BuildingKind.FACTORY)
        game.end_turn()
        assert game.eden_stress == 2
        assert city.current_production == 9

    def test_unknown_city(self):
        game = _make_session()
        with pytest.raises(KeyError):
            game.construct_building("Atlantis", BuildingKind.FACTORY)

    def test_territory_uses_hex_distance(self):
        game = _make_session()
        _found_capital(game, position=(3, 3))
        territory = game.territory("Capital")
        assert len(territory) == 7
        assert all(game.generator.distance((3, 3), c) <= 1 for c in territory)

    def test_territory_clipped_at_corner(self):
        game = _make_session()
        _found_capital(game, position=(0, 0))
        assert set(game.territory("Capital")) == {(0, 0), (1, 0), (0, 1)}


class TestTurns:
    def test_turn_advances(self):
        game = _make_session()
        assert game.end_turn()
        assert game.current_turn == 2

    def test_not_player_turn(self):
        game = _make_session()
        game.is_player_turn = False
        assert not game.end_turn()
        assert game.current_turn == 1

    def test_callbacks_fire_in_order(self):
        game = _make_session()
        events = []
        game.on_turn_end.append(lambda g: events.append(("end", g.current_turn)))
        game.on_turn_start.append(lambda g: events.append(("start", g.current_turn)))
        game.end_turn()
        assert events == [("end", 1), ("start", 2)]

    def test_to_dict(self):
        game = _make_session()
        game.spawn_unit(UnitKind.SETTLER, position=(1, 1))
        d = game.to_dict()
        assert d["current_turn"] == 1
        assert d["units"][0]["kind"] == "settler"
        assert d["cities"] == []
