"""Map session endpoints: generation, grid view, tile detail and spawn queries."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Query, Request

from edenhex.api.schemas import (
    CreateMapRequest,
    MapResponse,
    MapSummary,
    SpawnResponse,
    TileResponse,
)
from edenhex.api.serializers import serialize_map, serialize_tile
from edenhex.core.config import MapConfig
from edenhex.core.presets import get_preset

router = APIRouter()


def _get_session(request: Request, session_id: str):
    mgr = request.app.state.session_manager
    try:
        return mgr.get_session(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")


@router.post("", response_model=MapResponse)
def create_map(req: CreateMapRequest, request: Request):
    mgr = request.app.state.session_manager

    try:
        if req.preset:
            config = get_preset(req.preset)
        elif req.config:
            config = MapConfig.from_dict(req.config)
        else:
            config = MapConfig()
    except KeyError as exc:
        raise HTTPException(status_code=400, detail=str(exc.args[0]))
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    if req.seed is not None:
        config.random_seed = req.seed

    try:
        session = mgr.create_session(config=config, name=req.name)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return serialize_map(session)


@router.get("", response_model=list[MapSummary])
def list_maps(request: Request):
    return request.app.state.session_manager.list_sessions()


@router.get("/{session_id}", response_model=MapResponse)
def get_map(session_id: str, request: Request):
    return serialize_map(_get_session(request, session_id))


@router.delete("/{session_id}")
def delete_map(session_id: str, request: Request) -> dict[str, Any]:
    mgr = request.app.state.session_manager
    if not mgr.delete_session(session_id):
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")
    return {"deleted": True}


@router.get("/{session_id}/grid")
def get_grid(session_id: str, request: Request) -> dict[str, Any]:
    """Row-major matrix of tile names plus per-type counts."""
    session = _get_session(request, session_id)
    grid = session.generator.grid
    data = grid.to_dict()
    data["orientation"] = session.config.orientation.value
    data["counts"] = grid.counts()
    return data


@router.get("/{session_id}/tile/{col}/{row}", response_model=TileResponse)
def get_tile(session_id: str, col: int, row: int, request: Request):
    session = _get_session(request, session_id)
    tile = serialize_tile(session.generator, col, row)
    if tile is None:
        raise HTTPException(status_code=404, detail=f"Tile ({col}, {row}) is off the board")
    return tile


@router.get("/{session_id}/distance/{col}/{row}")
def get_alien_base_distance(
    session_id: str, col: int, row: int, request: Request,
) -> dict[str, Any]:
    """Hex distance to the nearest Alien Base cell (null if there is none)."""
    session = _get_session(request, session_id)
    generator = session.generator
    if generator.tile_at(col, row) is None:
        raise HTTPException(status_code=404, detail=f"Tile ({col}, {row}) is off the board")
    return {
        "col": col,
        "row": row,
        "distance": generator.distance_to_nearest_alien_base((col, row)),
    }


@router.get("/{session_id}/spawn", response_model=SpawnResponse)
def find_spawn(
    session_id: str,
    request: Request,
    min_distance: int | None = Query(default=None, ge=0),
):
    """Pick a Plains cell far enough from the alien base, or report none."""
    session = _get_session(request, session_id)
    if min_distance is None:
        min_distance = session.config.min_alien_base_distance
    point = session.generator.find_spawn_point(min_distance)
    if point is None:
        return {"found": False, "min_distance": min_distance}
    return {"found": True, "col": point.col, "row": point.row, "min_distance": min_distance}
