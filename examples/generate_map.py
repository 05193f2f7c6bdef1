#!/usr/bin/env python3
"""Generate a preset map, print it, and place a settler."""

import sys

from edenhex.core.presets import get_preset, list_presets
from edenhex.core.terrain_generator import generate_map
from edenhex.game.session import GameSession


def main():
    preset = sys.argv[1] if len(sys.argv) > 1 else "alien_frontier"
    seed = int(sys.argv[2]) if len(sys.argv) > 2 else 42
    if preset not in list_presets():
        print(f"Unknown preset '{preset}'. Available: {', '.join(list_presets())}")
        return 1

    config = get_preset(preset)
    print(f"=== Edenhex: {config.map_name} (seed {seed}) ===")
    print(f"Grid: {config.width}x{config.height} {config.orientation.value}-topped")
    print(f"Mountain clusters: {config.mountain_clusters}")
    print(f"Lake chance: {config.lake_chance}")
    print()

    generator = generate_map(config, seed=seed)
    grid = generator.grid
    counts = grid.counts()

    print(f"{'Type':<12} {'Quota':>6} {'Placed':>7}")
    print("-" * 27)
    for name, quota in generator.quotas.items():
        print(f"{name:<12} {quota:6d} {counts[name]:7d}")
    print()

    print(grid.render_ascii())
    print()

    game = GameSession(generator)
    settler = game.spawn_unit()
    if settler is None:
        print(f"No Plains cell is {config.min_alien_base_distance}+ hexes from the alien base")
        return 0

    nearest = generator.distance_to_nearest_alien_base(settler.position)
    print(f"Settler spawned at {tuple(settler.position)}, {nearest} hexes from the alien base")
    if game.start_building_capital(settler.id):
        game.end_turn()
        for city in game.cities:
            print(f"{city.name} founded at {tuple(city.position)} on turn {game.current_turn}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
