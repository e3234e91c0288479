"""Piston push/pull resolution over bounded adhesion groups.

Group moves are atomic: every member is lifted off the grid before any
member is written to its destination, so overlapping source and
destination cells never overwrite each other.

Pistons resolve in row-major scan order (y, then x) against the grid as
already mutated by earlier pistons in the same tick. The outcome is
order-sensitive for pistons whose groups overlap.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from dataclasses import replace

from redstone_sandbox.config.constants import PUSH_LIMIT
from redstone_sandbox.domain.grid import Grid
from redstone_sandbox.domain.tiles import PISTON_KINDS, Coord, Direction, Tile, TileKind

logger = logging.getLogger(__name__)


def adhesion_group(grid: Grid, start: Coord, exclude: Iterable[Coord] = ()) -> list[Coord] | None:
    """Return ``start`` plus every tile chained to it through slime.

    Two orthogonal neighbours stick together when at least one of them is
    slime. Returns ``[]`` for an empty or piston-head start cell and
    ``None`` when the group touches an immovable tile or grows past
    ``PUSH_LIMIT``.
    """
    first = grid.get(start)
    if first is None or first.kind is TileKind.PISTON_HEAD:
        return []
    if first.is_immovable:
        return None

    skip = set(exclude)
    group: dict[Coord, None] = {start: None}
    queue: deque[Coord] = deque([start])
    while queue:
        current = queue.popleft()
        tile = grid[current]
        for cell, neighbor in grid.neighbors(current):
            if cell in skip or cell in group:
                continue
            if neighbor is None or neighbor.kind is TileKind.PISTON_HEAD:
                continue
            if tile.kind is TileKind.SLIME or neighbor.kind is TileKind.SLIME:
                if neighbor.is_immovable:
                    return None
                group[cell] = None
                queue.append(cell)
        if len(group) > PUSH_LIMIT:
            return None
    return list(group)


def push_group(grid: Grid, front: Coord, facing: Direction, piston: Coord) -> list[Coord] | None:
    """Collect everything a piston at ``piston`` would shove from ``front``.

    Returns the member list (possibly empty) when the push is possible,
    ``None`` when it is blocked.
    """
    start = grid.get(front)
    if start is None:
        return []
    if start.is_immovable:
        return None

    initial = adhesion_group(grid, front, exclude=(piston,))
    if initial is None:
        return None
    group: dict[Coord, None] = dict.fromkeys(initial)

    changed = True
    while changed:
        changed = False
        for member in list(group):
            ahead = facing.step(member)
            tile = grid.get(ahead)
            if tile is None or ahead in group:
                continue
            if tile.is_immovable:
                return None
            added = adhesion_group(grid, ahead, exclude=(piston,))
            if added is None:
                return None
            for cell in added:
                if cell not in group:
                    group[cell] = None
                    changed = True
        if len(group) > PUSH_LIMIT:
            return None

    for member in group:
        target = facing.step(member)
        if not grid.in_bounds(target):
            return None
        if target in grid and target not in group:
            return None
    return list(group)


def relocate(grid: Grid, group: list[Coord], facing: Direction) -> None:
    """Move every member of ``group`` one cell along ``facing``, in place.

    A moved piston leaves its head behind, so any head it owned is removed
    and the piston arrives retracted. Ownership is read from the grid, since
    the consumer pass may already have cleared the piston's ``active`` flag.
    """
    lifted = [(coord, grid.pop(coord)) for coord in group]
    for coord, tile in lifted:
        if tile is not None:
            grid[facing.step(coord)] = tile
    for coord, tile in lifted:
        if tile is not None and tile.kind in PISTON_KINDS:
            _drop_head(grid, coord, tile)
            grid[facing.step(coord)] = replace(tile, active=False)


def _drop_head(grid: Grid, coord: Coord, piston: Tile) -> None:
    head = piston.facing.step(coord)
    tile = grid.get(head)
    if tile is not None and tile.kind is TileKind.PISTON_HEAD and tile.facing is piston.facing:
        del grid[head]


def _pull_is_clear(grid: Grid, group: list[Coord], toward: Direction) -> bool:
    members = set(group)
    for member in group:
        target = toward.step(member)
        if not grid.in_bounds(target):
            return False
        if target in grid and target not in members:
            return False
    return True


def _extend(grid: Grid, coord: Coord, piston: Tile) -> None:
    head = piston.facing.step(coord)
    group = push_group(grid, head, piston.facing, coord) if grid.in_bounds(head) else None
    if group is None:
        logger.debug("push blocked for piston at %s", coord)
        grid[coord] = replace(piston, active=False)
        return
    relocate(grid, group, piston.facing)
    grid[head] = Tile(kind=TileKind.PISTON_HEAD, facing=piston.facing, active=True)


def _retract(grid: Grid, coord: Coord, piston: Tile) -> None:
    head = piston.facing.step(coord)
    head_tile = grid.get(head)
    if head_tile is None or head_tile.kind is not TileKind.PISTON_HEAD:
        return
    del grid[head]
    if piston.kind is not TileKind.STICKY_PISTON:
        return

    anchor = piston.facing.step(coord, 2)
    target = grid.get(anchor)
    if target is None or target.is_immovable:
        return
    group = adhesion_group(grid, anchor, exclude=(head, coord))
    if not group:
        return
    toward = piston.facing.opposite
    if not _pull_is_clear(grid, group, toward):
        logger.debug("pull blocked for sticky piston at %s", coord)
        return
    relocate(grid, group, toward)


def resolve_pistons(previous: Grid, grid: Grid) -> Grid:
    """Extend pistons on a rising edge of ``active`` and retract them on a falling edge.

    A push that cannot complete leaves the piston retracted with
    ``active=False``; while its input stays powered it retries on the next
    tick.
    """
    result = grid.copy()
    pistons = [
        (coord, grid[coord]) for coord in grid.scan_order() if grid[coord].kind in PISTON_KINDS
    ]
    for coord, piston in pistons:
        before = previous.get(coord)
        was_active = before is not None and before.kind in PISTON_KINDS and before.active
        rising = piston.active and not was_active
        # An earlier piston may have moved this one away; it arrived retracted.
        if result.get(coord) is not piston:
            continue
        if rising:
            _extend(result, coord, piston)
        elif not piston.active and was_active:
            _retract(result, coord, piston)
    return result
