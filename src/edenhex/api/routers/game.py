"""Game endpoints: units, capitals, buildings and turns."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request

from edenhex.api.schemas import BuildRequest, MoveRequest, SpawnUnitRequest
from edenhex.game.buildings import BuildingKind
from edenhex.game.units import UnitKind

router = APIRouter()


def _get_game(request: Request, session_id: str):
    mgr = request.app.state.session_manager
    try:
        return mgr.get_session(session_id).game
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")


def _get_unit(game, unit_id: str):
    try:
        return game.get_unit(unit_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unit '{unit_id}' not found")


@router.get("/{session_id}/state")
def get_state(session_id: str, request: Request) -> dict[str, Any]:
    return _get_game(request, session_id).to_dict()


@router.post("/{session_id}/units")
def spawn_unit(session_id: str, req: SpawnUnitRequest, request: Request) -> dict[str, Any]:
    game = _get_game(request, session_id)
    try:
        kind = UnitKind(req.kind)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown unit kind '{req.kind}'")

    position = None
    if req.col is not None and req.row is not None:
        position = (req.col, req.row)

    unit = game.spawn_unit(kind, position=position, min_distance=req.min_distance)
    if unit is None:
        raise HTTPException(status_code=409, detail="No valid spawn position")
    return unit.to_dict()


@router.post("/{session_id}/units/{unit_id}/move")
def move_unit(
    session_id: str, unit_id: str, req: MoveRequest, request: Request,
) -> dict[str, Any]:
    game = _get_game(request, session_id)
    unit = _get_unit(game, unit_id)
    moved = game.move_unit(unit_id, (req.col, req.row))
    return {"moved": moved, "unit": unit.to_dict()}


@router.get("/{session_id}/units/{unit_id}/moves")
def valid_moves(session_id: str, unit_id: str, request: Request) -> dict[str, Any]:
    game = _get_game(request, session_id)
    _get_unit(game, unit_id)
    return {"moves": [list(c) for c in game.valid_moves(unit_id)]}


@router.post("/{session_id}/units/{unit_id}/build-capital")
def build_capital(session_id: str, unit_id: str, request: Request) -> dict[str, Any]:
    game = _get_game(request, session_id)
    unit = _get_unit(game, unit_id)
    started = game.start_building_capital(unit_id)
    return {"started": started, "unit": unit.to_dict()}


@router.post("/{session_id}/cities/{city_name}/build")
def build_in_city(
    session_id: str, city_name: str, req: BuildRequest, request: Request,
) -> dict[str, Any]:
    game = _get_game(request, session_id)
    try:
        kind = BuildingKind(req.building)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown building '{req.building}'")
    try:
        built = game.construct_building(city_name, kind)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"City '{city_name}' not found")
    return {"built": built, "eden_stress": game.eden_stress}


@router.post("/{session_id}/end-turn")
def end_turn(session_id: str, request: Request) -> dict[str, Any]:
    game = _get_game(request, session_id)
    game.end_turn()
    return game.to_dict()
