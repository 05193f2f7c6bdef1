"""
Dense terrain grid.

Cells hold indices into an immutable tuple of tile types (an arena), so
the grid itself is a plain ``int16`` numpy array of shape
``(width, height)`` indexed ``[col, row]``. ``-1`` marks an unassigned
cell. After generation the grid is frozen: the array is made read-only
and further writes raise ``GridFrozenError``.
"""

from __future__ import annotations

from collections import Counter
from typing import Any

import numpy as np

from edenhex.core.errors import GridFrozenError
from edenhex.core.hex_coords import GridCoord, iter_cells
from edenhex.core.tile_types import TileType

UNASSIGNED = -1


class TerrainGrid:
    """A ``width`` x ``height`` board of tile-type assignments.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        tile_types: The arena of tile types that cells index into.
        cells: ``int16`` array of tile-type indices, ``[col, row]``.
    """

    def __init__(self, width: int, height: int, tile_types: list[TileType]) -> None:
        self.width: int = width
        self.height: int = height
        self.tile_types: tuple[TileType, ...] = tuple(tile_types)
        self._index_by_name: dict[str, int] = {
            t.name: i for i, t in enumerate(self.tile_types)
        }
        self.cells: np.ndarray = np.full((width, height), UNASSIGNED, dtype=np.int16)
        self._frozen = False

    def __len__(self) -> int:
        return self.width * self.height

    # ---- Type lookup ----

    def index_of(self, name: str) -> int | None:
        """Arena index of a tile type name, or None if not configured."""
        return self._index_by_name.get(name)

    # ---- Reads ----

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def index_at(self, col: int, row: int) -> int:
        """Raw arena index at a cell (``UNASSIGNED`` if not yet set)."""
        return int(self.cells[col, row])

    def tile_at(self, col: int, row: int) -> TileType | None:
        """Tile type at a cell, or None if out of bounds or unassigned."""
        if not self.in_bounds(col, row):
            return None
        index = int(self.cells[col, row])
        if index == UNASSIGNED:
            return None
        return self.tile_types[index]

    def name_at(self, col: int, row: int) -> str | None:
        tile = self.tile_at(col, row)
        return tile.name if tile is not None else None

    def is_type(self, col: int, row: int, index: int | None) -> bool:
        """Whether a cell currently holds the tile type at ``index``."""
        return index is not None and int(self.cells[col, row]) == index

    def cells_of(self, name: str) -> list[GridCoord]:
        """All cells currently holding the named type, row-major order."""
        index = self.index_of(name)
        if index is None:
            return []
        return [
            cell for cell in iter_cells(self.width, self.height)
            if int(self.cells[cell.col, cell.row]) == index
        ]

    def counts(self) -> dict[str, int]:
        """Number of cells per tile type name (zero for absent types)."""
        tally = Counter(int(i) for i in self.cells.ravel() if i != UNASSIGNED)
        return {t.name: tally.get(i, 0) for i, t in enumerate(self.tile_types)}

    def is_complete(self) -> bool:
        """True when every cell holds a tile type."""
        return bool((self.cells != UNASSIGNED).all())

    # ---- Writes (generation only) ----

    @property
    def frozen(self) -> bool:
        return self._frozen

    def set_tile(self, col: int, row: int, index: int) -> None:
        if self._frozen:
            raise GridFrozenError("Terrain grid is read-only after generation")
        self.cells[col, row] = index

    def fill(self, index: int) -> None:
        if self._frozen:
            raise GridFrozenError("Terrain grid is read-only after generation")
        self.cells.fill(index)

    def freeze(self) -> None:
        """Make the grid read-only. Idempotent."""
        self.cells.flags.writeable = False
        self._frozen = True

    # ---- Views ----

    def to_dict(self) -> dict[str, Any]:
        """Serialize as a row-major matrix of tile names."""
        return {
            "width": self.width,
            "height": self.height,
            "rows": [
                [self.name_at(col, row) for col in range(self.width)]
                for row in range(self.height)
            ],
        }

    def render_ascii(self) -> str:
        """One character per cell (first letter of the type name, '?' unset).

        Rows are joined with newlines; handy for debugging and examples.
        """
        lines = []
        for row in range(self.height):
            chars = []
            for col in range(self.width):
                name = self.name_at(col, row)
                chars.append(name[0] if name else "?")
            lines.append(" ".join(chars))
        return "\n".join(lines)
