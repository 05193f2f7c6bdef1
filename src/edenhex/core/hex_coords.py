"""
Hex coordinate system for rectangular hex boards.

Cells are stored and addressed in offset coordinates (col, row). Two
orientations are supported, each with its own adjacency pattern:

    Flat-topped:   odd columns sit half a hex lower than even columns.
                   Diagonal neighbours of an even column are at row - 1
                   and row; of an odd column at row and row + 1.
    Pointy-topped: odd rows sit half a hex to the right of even rows.
                   Diagonal neighbours of an even row are at col - 1 and
                   col; of an odd row at col and col + 1.

Cube coordinates (x, y, z) with x + y + z = 0 are derived only for
distance math. Every adjacency, distance and position query in the
project goes through this module.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Iterator, NamedTuple


class Orientation(str, Enum):
    """Hex grid orientations."""

    FLAT_TOPPED = "flat"
    POINTY_TOPPED = "pointy"


class GridCoord(NamedTuple):
    """Offset coordinate of a cell: (column, row)."""

    col: int
    row: int


class CubeCoord(NamedTuple):
    """Cube coordinate. Satisfies x + y + z = 0."""

    x: int
    y: int
    z: int


# Six direction vectors (dc, dr), keyed by orientation and parity of the
# column (flat-topped) or row (pointy-topped). Index 0 = even, 1 = odd.
_OFFSETS: dict[Orientation, tuple[tuple[tuple[int, int], ...], ...]] = {
    Orientation.FLAT_TOPPED: (
        ((1, 0), (-1, 0), (0, 1), (0, -1), (1, -1), (-1, -1)),
        ((1, 0), (-1, 0), (0, 1), (0, -1), (1, 1), (-1, 1)),
    ),
    Orientation.POINTY_TOPPED: (
        ((1, 0), (-1, 0), (0, 1), (0, -1), (-1, 1), (-1, -1)),
        ((1, 0), (-1, 0), (0, 1), (0, -1), (1, 1), (1, -1)),
    ),
}


def in_bounds(coord: tuple[int, int], width: int, height: int) -> bool:
    """Whether ``coord`` lies inside a ``width`` x ``height`` board."""
    col, row = coord
    return 0 <= col < width and 0 <= row < height


def neighbor_offsets(
    coord: tuple[int, int], orientation: Orientation
) -> tuple[tuple[int, int], ...]:
    """Return the six (dc, dr) direction vectors that apply at ``coord``."""
    col, row = coord
    parity = col & 1 if orientation == Orientation.FLAT_TOPPED else row & 1
    return _OFFSETS[Orientation(orientation)][parity]


def neighbors(
    coord: tuple[int, int],
    orientation: Orientation,
    width: int,
    height: int,
) -> list[GridCoord]:
    """Return the in-bounds neighbours of a cell.

    Out-of-bounds neighbours are silently dropped. The order is fixed
    (the direction order of ``neighbor_offsets``) so that callers that
    pick a neighbour by index stay reproducible under a fixed seed.

    Args:
        coord: Cell as (col, row).
        orientation: Grid orientation.
        width: Board width in columns.
        height: Board height in rows.

    Returns:
        Up to six neighbouring GridCoords, without duplicates.
    """
    col, row = coord
    result: list[GridCoord] = []
    for dc, dr in neighbor_offsets(coord, orientation):
        nc, nr = col + dc, row + dr
        if 0 <= nc < width and 0 <= nr < height:
            result.append(GridCoord(nc, nr))
    return result


def to_cube(coord: tuple[int, int], orientation: Orientation) -> CubeCoord:
    """Convert an offset coordinate to cube coordinates.

    Flat-topped boards keep the column as the x axis and shift the row by
    the column's even-adjusted half; pointy-topped boards swap the roles
    of column and row.
    """
    col, row = coord
    if orientation == Orientation.FLAT_TOPPED:
        x = col
        z = row - (col - (col & 1)) // 2
    else:
        x = col - (row - (row & 1)) // 2
        z = row
    return CubeCoord(x, -x - z, z)


def distance(
    a: tuple[int, int], b: tuple[int, int], orientation: Orientation
) -> int:
    """Hex distance between two offset coordinates.

    Computed as (|dx| + |dy| + |dz|) / 2 on the cube-converted
    coordinates. The sum is always even for valid cube coordinates.
    """
    ca = to_cube(a, orientation)
    cb = to_cube(b, orientation)
    total = abs(ca.x - cb.x) + abs(ca.y - cb.y) + abs(ca.z - cb.z)
    return total // 2


def is_edge(coord: tuple[int, int], width: int, height: int) -> bool:
    """Whether a cell lies on any of the four board edges."""
    col, row = coord
    return col == 0 or col == width - 1 or row == 0 or row == height - 1


def edge_cells(width: int, height: int) -> list[GridCoord]:
    """All cells on the board perimeter, each listed once."""
    return [
        GridCoord(col, row)
        for row in range(height)
        for col in range(width)
        if is_edge((col, row), width, height)
    ]


def iter_cells(width: int, height: int) -> Iterator[GridCoord]:
    """Iterate every cell of the board in row-major order."""
    for row in range(height):
        for col in range(width):
            yield GridCoord(col, row)


def cells_within(
    center: tuple[int, int],
    radius: int,
    orientation: Orientation,
    width: int,
    height: int,
) -> list[GridCoord]:
    """Return all in-bounds cells within ``radius`` hex steps of ``center``."""
    return [
        cell
        for cell in iter_cells(width, height)
        if distance(center, cell, orientation) <= radius
    ]


def hex_center(
    coord: tuple[int, int],
    orientation: Orientation,
    outer_size: float = 1.0,
) -> tuple[float, float]:
    """Map a cell to the centre of its hexagon in board space.

    The shifted column (flat-topped) or row (pointy-topped) is the odd
    one, matching the adjacency pattern above. The y axis grows
    downwards, row 0 at the top.

    Args:
        coord: Cell as (col, row).
        orientation: Grid orientation.
        outer_size: Distance from the hex centre to a corner.

    Returns:
        (x, y) centre position.
    """
    col, row = coord
    if orientation == Orientation.FLAT_TOPPED:
        hex_height = math.sqrt(3.0) * outer_size
        x = col * 1.5 * outer_size
        y = row * hex_height + (hex_height * 0.5 if col & 1 else 0.0)
    else:
        hex_width = math.sqrt(3.0) * outer_size
        x = col * hex_width + (hex_width * 0.5 if row & 1 else 0.0)
        y = row * 1.5 * outer_size
    return (x, y)


__all__ = [
    "Orientation",
    "GridCoord",
    "CubeCoord",
    "in_bounds",
    "neighbor_offsets",
    "neighbors",
    "to_cube",
    "distance",
    "is_edge",
    "edge_cells",
    "iter_cells",
    "cells_within",
    "hex_center",
]
