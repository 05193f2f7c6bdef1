"""
Procedural terrain generator for edenhex hex maps.

Partitions a width x height hex board into terrain categories under
weighted quotas. Four passes mutate a single grid in a fixed order,
all drawing from one seeded numpy RNG:

    1. Base fill        every cell Plains, then random Forest conversions
    2. Mountains        probabilistic BFS clusters over Plains/Forest
    3. Rivers & lakes   edge-to-edge random walks with lake pockets
    4. Alien base       one contiguous BFS region that overwrites anything

Reordering the passes or their random draws changes the output for a
given seed. After the last pass the grid is frozen.
"""

from __future__ import annotations

import dataclasses
import logging
from collections import deque

import numpy as np

from edenhex.core import hex_coords
from edenhex.core.config import MapConfig
from edenhex.core.errors import ConfigurationError, GenerationPreconditionError
from edenhex.core.hex_coords import GridCoord, Orientation
from edenhex.core.terrain_grid import TerrainGrid
from edenhex.core.tile_types import (
    ALIEN_BASE,
    FOREST,
    MOUNTAINS,
    PLAINS,
    RIVER,
    TileType,
)

logger = logging.getLogger(__name__)

# Chance that a freshly converted mountain cell pushes each neighbour
# onto the growth frontier.
MOUNTAIN_SPREAD_CHANCE = 0.7

# Chance that each neighbour of a lake-spawning river cell joins the lake.
LAKE_NEIGHBOR_CHANCE = 0.5

MAX_RIVER_ATTEMPTS = 50

# A river walk may only stop at an edge after more than this many steps.
MIN_RIVER_STEPS_BEFORE_EXIT = 3

# Alien base seeds are drawn this far from the low edges (clamped on
# small boards).
ALIEN_BASE_EDGE_MARGIN = 2

# Forest rejection sampling gives up after cells * factor draws. With the
# forest quota bounded by the cell count this is never reached in
# practice.
FOREST_SAMPLING_FACTOR = 1000


def compute_quotas(tile_types: list[TileType], total_cells: int) -> dict[str, int]:
    """Compute per-type target cell counts from spawn weights.

    Each type gets ``round(total_cells * weight / total_weight)``. The
    rounding discrepancy, positive or negative, is added entirely to the
    first configured type. This is deliberately crude: with many weights
    and a small board that one type can be visibly over- or
    under-represented.

    Args:
        tile_types: Configured types, in configuration order.
        total_cells: ``width * height``.

    Returns:
        Mapping of type name to target count; values sum to ``total_cells``.

    Raises:
        ConfigurationError: If no types are given or all weights are zero.
    """
    if not tile_types:
        raise ConfigurationError("At least one tile type must be configured")
    total_weight = sum(t.spawn_weight for t in tile_types)
    if total_weight <= 0:
        raise ConfigurationError("At least one tile type needs a positive weight")

    quotas: dict[str, int] = {}
    assigned = 0
    for t in tile_types:
        count = int(round(total_cells * (t.spawn_weight / total_weight)))
        quotas[t.name] = count
        assigned += count

    if assigned != total_cells:
        quotas[tile_types[0].name] += total_cells - assigned

    return quotas


class TerrainGenerator:
    """Owns the terrain grid and answers distance/spawn queries on it.

    A generator is single-use for reproducibility: calling ``generate()``
    a second time continues the same random stream. Build a fresh
    generator from the same config and seed to reproduce a map.

    Attributes:
        config: The map configuration.
        rng: Shared random source for every pass and for spawn picks.
        grid: The finished (frozen) grid, or None before ``generate()``.
        quotas: Target counts computed for the last run.
    """

    def __init__(
        self,
        config: MapConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config if config is not None else MapConfig()
        self.rng = rng if rng is not None else np.random.default_rng(
            self.config.random_seed
        )
        self.grid: TerrainGrid | None = None
        self.quotas: dict[str, int] = {}

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def orientation(self) -> Orientation:
        return Orientation(self.config.orientation)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate(self) -> TerrainGrid:
        """Run all four passes and return the frozen grid."""
        self.config.validate()

        self.grid = TerrainGrid(self.width, self.height, self.config.tile_types)
        self.quotas = compute_quotas(self.config.tile_types, self.config.total_cells)
        logger.debug("Quotas for %s: %s", self.config.map_name, self.quotas)

        self._fill_base_terrain()
        self._place_mountain_clusters()
        self._generate_rivers()
        self._place_alien_base()

        self.grid.freeze()
        logger.info(
            "Generated %dx%d %s map '%s': %s",
            self.width, self.height, self.orientation.value,
            self.config.map_name, self.grid.counts(),
        )
        return self.grid

    def _fill_base_terrain(self) -> None:
        grid = self.grid
        background = self._background_index()
        grid.fill(background)

        plains = grid.index_of(PLAINS)
        forest = grid.index_of(FOREST)
        if forest is None or plains is None:
            return

        target = self.quotas.get(FOREST, 0)
        total = len(grid)
        if target > total:
            raise GenerationPreconditionError(
                f"Forest quota {target} exceeds the {total} cells available"
            )

        max_draws = total * FOREST_SAMPLING_FACTOR
        draws = 0
        placed = 0
        while placed < target:
            if draws >= max_draws:
                raise GenerationPreconditionError(
                    f"Placed only {placed}/{target} forest cells in {draws} draws"
                )
            draws += 1
            col = int(self.rng.integers(0, self.width))
            row = int(self.rng.integers(0, self.height))
            if grid.is_type(col, row, plains):
                grid.set_tile(col, row, forest)
                placed += 1

        logger.debug("Base fill: %d forest cells in %d draws", placed, draws)

    def _place_mountain_clusters(self) -> None:
        grid = self.grid
        mountain = grid.index_of(MOUNTAINS)
        if mountain is None:
            return

        target = self.quotas.get(MOUNTAINS, 0)
        clusters = self.config.mountain_clusters
        per_cluster = max(1, target // clusters)
        convertible = {
            i for i in (grid.index_of(PLAINS), grid.index_of(FOREST))
            if i is not None and i != mountain
        }

        placed = 0
        for _ in range(clusters):
            if placed >= target:
                break
            seed = GridCoord(
                int(self.rng.integers(0, self.width)),
                int(self.rng.integers(0, self.height)),
            )
            queue = deque([seed])
            visited = {seed}
            cluster_placed = 0
            cluster_target = min(per_cluster, target - placed)

            while queue and cluster_placed < cluster_target:
                current = queue.popleft()
                if grid.index_at(*current) not in convertible:
                    continue
                grid.set_tile(current.col, current.row, mountain)
                cluster_placed += 1
                placed += 1

                for neighbor in self.neighbors(current):
                    if neighbor not in visited and self.rng.random() < MOUNTAIN_SPREAD_CHANCE:
                        visited.add(neighbor)
                        queue.append(neighbor)

        logger.debug("Mountains: %d/%d cells placed", placed, target)

    def _generate_rivers(self) -> None:
        grid = self.grid
        river = grid.index_of(RIVER)
        if river is None:
            return

        mountain = grid.index_of(MOUNTAINS)
        target = self.quotas.get(RIVER, 0)
        lake_chance = self.config.lake_chance
        max_length = self.width + self.height
        placed = 0
        attempts = 0

        while placed < target and attempts < MAX_RIVER_ATTEMPTS:
            attempts += 1
            current = self._random_edge_cell()
            path: list[GridCoord] = []
            visited: set[GridCoord] = set()
            steps = 0

            # placed only moves when a path is committed, so within one
            # walk the quota check is against the previous trials.
            while steps < max_length and placed < target:
                if current not in visited:
                    visited.add(current)
                    if not grid.is_type(current.col, current.row, mountain):
                        path.append(current)
                        if self.rng.random() < lake_chance and placed < target - 2:
                            for neighbor in self.neighbors(current):
                                if (
                                    neighbor not in visited
                                    and not grid.is_type(neighbor.col, neighbor.row, mountain)
                                    and self.rng.random() < LAKE_NEIGHBOR_CHANCE
                                ):
                                    path.append(neighbor)
                                    visited.add(neighbor)

                options = self.neighbors(current)
                if not options:
                    break
                current = options[int(self.rng.integers(0, len(options)))]
                steps += 1

                if (
                    hex_coords.is_edge(current, self.width, self.height)
                    and steps > MIN_RIVER_STEPS_BEFORE_EXIT
                ):
                    break

            for pos in path:
                if placed >= target:
                    break
                if not grid.is_type(pos.col, pos.row, mountain):
                    grid.set_tile(pos.col, pos.row, river)
                    placed += 1

        logger.debug(
            "Rivers: %d/%d placements in %d attempts", placed, target, attempts
        )

    def _place_alien_base(self) -> None:
        grid = self.grid
        alien = grid.index_of(ALIEN_BASE)
        if alien is None:
            return

        target = self.quotas.get(ALIEN_BASE, 0)
        if target <= 0:
            return

        seed = GridCoord(
            self._interior_index(self.width),
            self._interior_index(self.height),
        )
        queue = deque([seed])
        visited = {seed}
        placed = 0
        while queue and placed < target:
            current = queue.popleft()
            grid.set_tile(current.col, current.row, alien)
            placed += 1

            for neighbor in self.neighbors(current):
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)

        logger.debug("Alien base: %d/%d cells grown from %s", placed, target, seed)

    # ---- Generation helpers ----

    def _background_index(self) -> int:
        """Plains, or the first configured type when Plains is absent."""
        index = self.grid.index_of(PLAINS)
        return index if index is not None else 0

    def _random_edge_cell(self) -> GridCoord:
        edge = int(self.rng.integers(0, 4))
        if edge == 0:
            return GridCoord(int(self.rng.integers(0, self.width)), 0)
        if edge == 1:
            return GridCoord(int(self.rng.integers(0, self.width)), self.height - 1)
        if edge == 2:
            return GridCoord(0, int(self.rng.integers(0, self.height)))
        return GridCoord(self.width - 1, int(self.rng.integers(0, self.height)))

    def _interior_index(self, size: int) -> int:
        low = min(ALIEN_BASE_EDGE_MARGIN, size - 1)
        high = max(low + 1, size - ALIEN_BASE_EDGE_MARGIN)
        return int(self.rng.integers(low, high))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _require_grid(self) -> TerrainGrid:
        if self.grid is None:
            raise RuntimeError("Map has not been generated yet")
        return self.grid

    def tile_at(self, col: int, row: int) -> TileType | None:
        """Tile type at a cell, or None if out of bounds."""
        return self._require_grid().tile_at(col, row)

    def neighbors(self, coord: tuple[int, int]) -> list[GridCoord]:
        return hex_coords.neighbors(coord, self.orientation, self.width, self.height)

    def distance(self, a: tuple[int, int], b: tuple[int, int]) -> int:
        return hex_coords.distance(a, b, self.orientation)

    def hex_center(self, coord: tuple[int, int]) -> tuple[float, float]:
        return hex_coords.hex_center(coord, self.orientation, self.config.outer_size)

    def distance_to_nearest_alien_base(self, coord: tuple[int, int]) -> int | None:
        """Minimum hex distance from ``coord`` to any Alien Base cell.

        Scans the full grid. Returns None if the map has no Alien Base.
        """
        bases = self._require_grid().cells_of(ALIEN_BASE)
        if not bases:
            return None
        return min(self.distance(coord, base) for base in bases)

    def spawn_candidates(self, min_distance: int | None = None) -> list[GridCoord]:
        """Plains cells at least ``min_distance`` from every Alien Base cell."""
        if min_distance is None:
            min_distance = self.config.min_alien_base_distance
        grid = self._require_grid()
        bases = grid.cells_of(ALIEN_BASE)
        return [
            cell for cell in grid.cells_of(PLAINS)
            if all(self.distance(cell, base) >= min_distance for base in bases)
        ]

    def find_spawn_point(self, min_distance: int | None = None) -> GridCoord | None:
        """Pick a qualifying Plains cell uniformly at random.

        Args:
            min_distance: Minimum hex distance from every Alien Base cell.
                Defaults to ``config.min_alien_base_distance``.

        Returns:
            A GridCoord, or None when no cell satisfies the constraint.
            The constraint is never relaxed here.
        """
        candidates = self.spawn_candidates(min_distance)
        if not candidates:
            logger.debug("No spawn point at distance >= %s", min_distance)
            return None
        return candidates[int(self.rng.integers(0, len(candidates)))]


def generate_map(config: MapConfig | None = None, seed: int | None = None) -> TerrainGenerator:
    """Build a generator, run it, and return it ready for queries.

    Args:
        config: Map configuration (defaults to ``MapConfig()``).
        seed: Overrides ``config.random_seed`` when given.

    Returns:
        The TerrainGenerator holding the finished grid.
    """
    config = config if config is not None else MapConfig()
    if seed is not None:
        config = dataclasses.replace(config, random_seed=seed)
    generator = TerrainGenerator(config)
    generator.generate()
    return generator
