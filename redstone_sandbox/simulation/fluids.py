"""Dispenser emission and flood-fill fluid levelling.

Both passes read the post-activation grid of the current tick and write
into a separate result grid, so a cell filled this tick does not feed its
neighbours until the next tick.
"""

from __future__ import annotations

from redstone_sandbox.domain.grid import Grid
from redstone_sandbox.domain.tiles import (
    REPLACEABLE_KINDS,
    Coord,
    Tile,
    TileKind,
    dispensed_tile,
)


def dispense(previous: Grid, grid: Grid, result: Grid) -> None:
    """Emit dispenser contents on a rising edge of ``active``, into ``result``."""
    for coord in grid.scan_order():
        tile = grid[coord]
        if tile.kind is not TileKind.DISPENSER or not tile.active:
            continue
        before = previous.get(coord)
        if before is not None and before.active:
            continue
        if tile.contents is TileKind.AIR:
            continue
        target = tile.facing.step(coord)
        if result.in_bounds(target) and target not in result:
            result[target] = dispensed_tile(tile.contents, tile.facing)


def _can_flood(tile: Tile | None) -> bool:
    if tile is None:
        return True
    if tile.is_fluid:
        return False
    return tile.kind in REPLACEABLE_KINDS


def _best_level(grid: Grid, coord: Coord, kind: TileKind) -> int:
    levels = [n.level - 1 for _, n in grid.neighbors(coord) if n is not None and n.kind is kind]
    return max([0, *levels])


def fluid_interest(grid: Grid) -> set[Coord]:
    """Every fluid cell plus its orthogonal neighbours."""
    cells: set[Coord] = set()
    for coord, tile in grid.items():
        if tile.is_fluid:
            cells.add(coord)
            cells.update(cell for cell, _ in grid.neighbors(coord))
    return cells


def flow_fluids(grid: Grid, result: Grid) -> None:
    """Level water and lava from ``grid`` into ``result``.

    Water wins ties. Only empty cells and replaceable kinds are flooded; a
    flowing (non-source) cell keeps its level and recedes only when neither
    kind can reach it.
    """
    for coord in sorted(fluid_interest(grid), key=lambda c: (c[1], c[0])):
        if not grid.in_bounds(coord):
            continue
        tile = grid.get(coord)
        if tile is not None and tile.is_fluid and tile.is_source:
            continue

        water = _best_level(grid, coord, TileKind.WATER)
        lava = _best_level(grid, coord, TileKind.LAVA)
        if water > 0 and water >= lava:
            if _can_flood(tile):
                result[coord] = Tile(kind=TileKind.WATER, level=water)
        elif lava > 0:
            if _can_flood(tile):
                result[coord] = Tile(kind=TileKind.LAVA, level=lava)
        elif tile is not None and tile.is_fluid:
            result.pop(coord)
