"""Power propagation through dust and consumer activation.

Propagation is an unweighted multi-source breadth-first relaxation: every
seed injects its power, each dust hop costs one unit, and a dust cell keeps
the best value that reached it. The result per dust cell equals
``seed_power - hop_distance`` to the best seed, clipped at zero.
"""

from __future__ import annotations

from collections import deque
from dataclasses import replace

from redstone_sandbox.config.constants import MAX_POWER
from redstone_sandbox.domain.grid import Grid
from redstone_sandbox.domain.tiles import (
    CONSUMER_KINDS,
    DIRECTIONAL_EMITTERS,
    SEED_KINDS,
    Coord,
    TileKind,
)

PowerMap = dict[Coord, int]


def is_hard_powered(grid: Grid, coord: Coord) -> bool:
    """True when a powered emitter delivers power straight into the solid at ``coord``.

    Directional emitters only count when they face into the cell; other
    powered non-dust neighbours always count.
    """
    for cell, neighbor in grid.neighbors(coord):
        if neighbor is None or neighbor.kind is TileKind.DUST or neighbor.power == 0:
            continue
        if neighbor.kind in DIRECTIONAL_EMITTERS:
            if neighbor.facing.step(cell) == coord:
                return True
            continue
        return True
    return False


def seed_power(grid: Grid) -> PowerMap:
    """Initial power map: powered emitters plus hard-powered solids at full power."""
    seeds: PowerMap = {
        coord: tile.power
        for coord, tile in grid.items()
        if tile.kind in SEED_KINDS and tile.power > 0
    }
    for coord, tile in grid.items():
        if tile.is_solid and is_hard_powered(grid, coord):
            seeds[coord] = MAX_POWER
    return seeds


def propagate(grid: Grid) -> PowerMap:
    """Spread seed power through dust; returns power for every reached cell."""
    power_map = seed_power(grid)
    queue: deque[tuple[Coord, int]] = deque(power_map.items())
    while queue:
        coord, power = queue.popleft()
        for cell, neighbor in grid.neighbors(coord):
            if neighbor is None or neighbor.kind is not TileKind.DUST:
                continue
            candidate = max(0, power - 1)
            if candidate > power_map.get(cell, 0):
                power_map[cell] = candidate
                queue.append((cell, candidate))
    return power_map


def apply_power(grid: Grid, power_map: PowerMap) -> Grid:
    """Write propagated power onto the tiles that received it."""
    result = grid.copy()
    for coord, power in power_map.items():
        tile = result.get(coord)
        if tile is not None and tile.power != power:
            result[coord] = replace(tile, power=min(MAX_POWER, max(0, power)))
    return result


def activate_consumers(grid: Grid, power_map: PowerMap) -> Grid:
    """Set ``active`` on lamps, pistons, TNT, dispensers, note blocks and antennas.

    A consumer is active iff it or any neighbour carries propagated power.
    TNT only ever latches on here; disarming is not possible.
    """
    result = grid.copy()
    for coord, tile in grid.items():
        if tile.kind not in CONSUMER_KINDS:
            continue
        powered = power_map.get(coord, 0) > 0 or any(
            power_map.get(cell, 0) > 0 for cell, _ in grid.neighbors(coord)
        )
        if tile.kind is TileKind.TNT:
            if powered and not tile.active:
                result[coord] = replace(tile, active=True)
        elif tile.active != powered:
            result[coord] = replace(tile, active=powered)
    return result
