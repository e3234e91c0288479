"""External interaction entry points, applied strictly between ticks.

Each function edits a ``Grid`` in place and returns ``True`` when the grid
changed. Interacting with an empty cell is a no-op.
"""

from __future__ import annotations

from dataclasses import replace

from redstone_sandbox.config.constants import (
    ARMED_SENSOR_TICKS,
    MAX_REPEATER_DELAY,
    NUM_CHANNELS,
    NUM_PITCHES,
)
from redstone_sandbox.domain.grid import Grid
from redstone_sandbox.domain.tiles import (
    PISTON_KINDS,
    ComparatorMode,
    Coord,
    Direction,
    Tile,
    TileKind,
    make_tile,
)


def _require_in_bounds(grid: Grid, coord: Coord) -> None:
    if not grid.in_bounds(coord):
        raise ValueError(f"coordinate {coord} is outside the {grid.size}x{grid.size} grid")


def _drop_piston_head(grid: Grid, coord: Coord, tile: Tile) -> None:
    """Remove the head in front of an extended piston at ``coord``."""
    if tile.kind not in PISTON_KINDS or not tile.active:
        return
    head = tile.facing.step(coord)
    head_tile = grid.get(head)
    if head_tile is not None and head_tile.kind is TileKind.PISTON_HEAD:
        del grid[head]


def place(grid: Grid, coord: Coord, kind: TileKind, facing: Direction = Direction.N) -> bool:
    """Place a new tile of ``kind`` at ``coord``.

    Placing onto a dispenser loads it with ``kind`` instead of replacing it;
    placing ``AIR`` deletes.
    """
    _require_in_bounds(grid, coord)
    if kind is TileKind.AIR:
        return delete(grid, coord)
    existing = grid.get(coord)
    if existing is not None and existing.kind is TileKind.DISPENSER and kind is not TileKind.DISPENSER:
        grid[coord] = replace(existing, contents=kind)
        return True
    if existing is not None:
        _drop_piston_head(grid, coord, existing)
    grid[coord] = make_tile(kind, facing)
    return True


def toggle(grid: Grid, coord: Coord) -> bool:
    """Primary interaction with the tile at ``coord``."""
    tile = grid.get(coord)
    if tile is None:
        return False
    kind = tile.kind
    if kind is TileKind.LEVER:
        updated = replace(tile, active=not tile.active)
    elif kind is TileKind.BUTTON:
        if tile.active:
            return False
        updated = replace(tile, active=True)
    elif kind is TileKind.DAYLIGHT_SENSOR:
        updated = replace(tile, inverted=not tile.inverted)
    elif kind in (TileKind.TARGET, TileKind.SCULK_SENSOR):
        updated = replace(tile, active=True, cooldown=ARMED_SENSOR_TICKS)
    elif kind is TileKind.COMPARATOR:
        mode = (
            ComparatorMode.SUBTRACT
            if tile.comparator_mode is ComparatorMode.COMPARE
            else ComparatorMode.COMPARE
        )
        updated = replace(tile, comparator_mode=mode)
    elif kind is TileKind.NOTE_BLOCK:
        updated = replace(tile, pitch=(tile.pitch + 1) % NUM_PITCHES)
    elif kind in (TileKind.ANTENNA, TileKind.RECEIVER):
        updated = replace(tile, channel=(tile.channel + 1) % NUM_CHANNELS)
    else:
        return False
    grid[coord] = updated
    return True


def release_button(grid: Grid, coord: Coord) -> bool:
    """Spring a pressed button back up."""
    tile = grid.get(coord)
    if tile is None or tile.kind is not TileKind.BUTTON or not tile.active:
        return False
    grid[coord] = replace(tile, active=False)
    return True


def set_pressed(grid: Grid, coord: Coord, pressed: bool) -> bool:
    """Step onto (``pressed=True``) or off a pressure plate."""
    tile = grid.get(coord)
    if tile is None or tile.kind is not TileKind.PRESSURE_PLATE or tile.active == pressed:
        return False
    grid[coord] = replace(tile, active=pressed)
    return True


def cycle_delay(grid: Grid, coord: Coord) -> bool:
    """Cycle a repeater's delay 1 -> 2 -> 3 -> 4 -> 1."""
    tile = grid.get(coord)
    if tile is None or tile.kind is not TileKind.REPEATER:
        return False
    grid[coord] = replace(tile, delay=(tile.delay % MAX_REPEATER_DELAY) + 1)
    return True


def rotate(grid: Grid, coord: Coord) -> bool:
    """Turn the tile at ``coord`` clockwise."""
    tile = grid.get(coord)
    if tile is None:
        return False
    grid[coord] = replace(tile, facing=tile.facing.rotated())
    return True


def delete(grid: Grid, coord: Coord) -> bool:
    """Remove the tile at ``coord``, along with its head if it is an extended piston."""
    tile = grid.pop(coord)
    if tile is None:
        return False
    _drop_piston_head(grid, coord, tile)
    return True


def move(grid: Grid, source: Coord, target: Coord) -> bool:
    """Relocate one tile, overwriting whatever occupies ``target``.

    An extended piston loses its head and arrives retracted.
    """
    _require_in_bounds(grid, target)
    if source == target:
        return False
    tile = grid.pop(source)
    if tile is None:
        return False
    if tile.kind in PISTON_KINDS and tile.active:
        _drop_piston_head(grid, source, tile)
        tile = replace(tile, active=False)
    grid[target] = tile
    return True


def note_triggers(previous: Grid, current: Grid) -> list[Coord]:
    """Note blocks whose neighbour power rose from 0 to > 0 between two snapshots."""

    def powered(grid: Grid, coord: Coord) -> bool:
        return any(n is not None and n.power > 0 for _, n in grid.neighbors(coord))

    return [
        coord
        for coord in current.scan_order()
        if current[coord].kind is TileKind.NOTE_BLOCK
        and powered(current, coord)
        and not powered(previous, coord)
    ]
