"""Per-kind component logic and explosion resolution.

Every evaluator reads neighbours from the *previous* grid only and returns a
new tile; nothing written during this pass is visible to other evaluators
in the same pass. ``EVALUATORS`` maps every placeable ``TileKind`` to its
evaluator.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, replace

from redstone_sandbox.config.constants import (
    EXPLOSION_RADIUS,
    HALF_DAY,
    MAX_POWER,
    TNT_FUSE,
)
from redstone_sandbox.config.types import Settings
from redstone_sandbox.domain.grid import Grid
from redstone_sandbox.domain.tiles import ComparatorMode, Coord, Tile, TileKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogicContext:
    """Pass-local inputs shared by all evaluators of one tick."""

    settings: Settings
    active_channels: frozenset[int]


Evaluator = Callable[[Tile, Coord, Grid, LogicContext], Tile]


def active_channels(grid: Grid) -> frozenset[int]:
    """Channels with at least one active antenna anywhere on the grid."""
    return frozenset(
        tile.channel for tile in grid.tiles.values() if tile.kind is TileKind.ANTENNA and tile.active
    )


def _switch(tile: Tile, coord: Coord, previous: Grid, ctx: LogicContext) -> Tile:
    return replace(tile, power=MAX_POWER if tile.active else 0)


def _redstone_block(tile: Tile, coord: Coord, previous: Grid, ctx: LogicContext) -> Tile:
    return replace(tile, power=MAX_POWER)


def _counter(tile: Tile, coord: Coord, previous: Grid, ctx: LogicContext) -> Tile:
    value = (tile.value % MAX_POWER) + 1
    return replace(tile, value=value, power=value, active=True)


def _torch(tile: Tile, coord: Coord, previous: Grid, ctx: LogicContext) -> Tile:
    attached = previous.get(tile.facing.opposite.step(coord))
    powered = attached is not None and attached.is_solid and attached.power > 0
    return replace(tile, active=not powered, power=0 if powered else MAX_POWER)


def _repeater(tile: Tile, coord: Coord, previous: Grid, ctx: LogicContext) -> Tile:
    input_active = previous.power_at(tile.facing.opposite.step(coord)) > 0
    pending = tile.active if tile.pending_target is None else tile.pending_target
    cooldown = tile.cooldown or 0
    active = tile.active

    if input_active != pending:
        pending = input_active
        cooldown = tile.delay
    if cooldown > 0:
        cooldown -= 1
        if cooldown == 0:
            active = pending

    return replace(
        tile,
        active=active,
        power=MAX_POWER if active else 0,
        pending_target=pending,
        cooldown=cooldown,
    )


def _comparator(tile: Tile, coord: Coord, previous: Grid, ctx: LogicContext) -> Tile:
    rear = previous.power_at(tile.facing.opposite.step(coord))
    side = max(previous.power_at(d.step(coord)) for d in tile.facing.sides())
    if tile.comparator_mode is ComparatorMode.SUBTRACT:
        output = max(0, rear - side)
    else:
        output = rear if rear >= side else 0
    return replace(tile, power=output, active=output > 0)


def _observer(tile: Tile, coord: Coord, previous: Grid, ctx: LogicContext) -> Tile:
    watched = previous.get(tile.facing.step(coord))
    kind = watched.kind if watched is not None else TileKind.AIR
    power = watched.power if watched is not None else 0
    active = watched.active if watched is not None else False

    changed = (kind, power, active) != (
        tile.observed_kind,
        tile.observed_power,
        tile.observed_active,
    )
    pulse = changed and not tile.active
    return replace(
        tile,
        active=pulse,
        power=MAX_POWER if pulse else 0,
        observed_kind=kind,
        observed_power=power,
        observed_active=active,
    )


def daylight_output(day_time: int, inverted: bool) -> int:
    """Sine-shaped light level over the day half (or the night half when inverted)."""
    if inverted:
        if day_time < HALF_DAY:
            return 0
        phase = day_time - HALF_DAY
    else:
        if day_time >= HALF_DAY:
            return 0
        phase = day_time
    return max(0, math.floor(MAX_POWER * math.sin(math.pi * phase / HALF_DAY)))


def _daylight_sensor(tile: Tile, coord: Coord, previous: Grid, ctx: LogicContext) -> Tile:
    output = daylight_output(ctx.settings.day_time, tile.inverted)
    return replace(tile, power=output, active=output > 0)


def _armed_sensor(tile: Tile, coord: Coord, previous: Grid, ctx: LogicContext) -> Tile:
    if not tile.active:
        return replace(tile, power=0)
    cooldown = (tile.cooldown or 0) - 1
    if cooldown <= 0:
        return replace(tile, power=MAX_POWER, active=False, cooldown=0)
    return replace(tile, power=MAX_POWER, cooldown=cooldown)


def _tnt(tile: Tile, coord: Coord, previous: Grid, ctx: LogicContext) -> Tile:
    powered = any(n is not None and n.power > 0 for _, n in previous.neighbors(coord))
    if not (powered or tile.active):
        return replace(tile, power=0)
    fuse = TNT_FUSE if tile.cooldown is None else tile.cooldown
    return replace(tile, power=0, active=True, cooldown=fuse - 1)


def _receiver(tile: Tile, coord: Coord, previous: Grid, ctx: LogicContext) -> Tile:
    on = tile.channel in ctx.active_channels
    return replace(tile, power=MAX_POWER if on else 0, active=on)


def _passive(tile: Tile, coord: Coord, previous: Grid, ctx: LogicContext) -> Tile:
    if tile.power == 0:
        return tile
    return replace(tile, power=0)


EVALUATORS: dict[TileKind, Evaluator] = {
    TileKind.LEVER: _switch,
    TileKind.BUTTON: _switch,
    TileKind.PRESSURE_PLATE: _switch,
    TileKind.REDSTONE_BLOCK: _redstone_block,
    TileKind.COUNTER: _counter,
    TileKind.TORCH: _torch,
    TileKind.REPEATER: _repeater,
    TileKind.COMPARATOR: _comparator,
    TileKind.OBSERVER: _observer,
    TileKind.DAYLIGHT_SENSOR: _daylight_sensor,
    TileKind.SCULK_SENSOR: _armed_sensor,
    TileKind.TARGET: _armed_sensor,
    TileKind.TNT: _tnt,
    TileKind.RECEIVER: _receiver,
    # Consumers and passive tiles: power comes from propagation only.
    TileKind.DUST: _passive,
    TileKind.ANTENNA: _passive,
    TileKind.LAMP: _passive,
    TileKind.NOTE_BLOCK: _passive,
    TileKind.DISPENSER: _passive,
    TileKind.PISTON: _passive,
    TileKind.STICKY_PISTON: _passive,
    TileKind.PISTON_HEAD: _passive,
    TileKind.WATER: _passive,
    TileKind.LAVA: _passive,
    TileKind.BLOCK: _passive,
    TileKind.GLASS: _passive,
    TileKind.SLIME: _passive,
    TileKind.OBSIDIAN: _passive,
}


def evaluate_components(previous: Grid, settings: Settings) -> Grid:
    """Apply each tile's own logic against the frozen previous grid."""
    ctx = LogicContext(settings=settings, active_channels=active_channels(previous))
    result = Grid(size=previous.size)
    for coord, tile in previous.items():
        result[coord] = EVALUATORS[tile.kind](tile, coord, previous, ctx)
    return result


def blast_cells(center: Coord) -> list[Coord]:
    """Cells within ``EXPLOSION_RADIUS`` of ``center`` (center included)."""
    reach = int(EXPLOSION_RADIUS)
    cx, cy = center
    return [
        (cx + dx, cy + dy)
        for dy in range(-reach, reach + 1)
        for dx in range(-reach, reach + 1)
        if math.hypot(dx, dy) <= EXPLOSION_RADIUS
    ]


def resolve_explosions(grid: Grid, settings: Settings) -> Grid:
    """Detonate every armed TNT whose fuse has burnt down.

    Blast radii are computed against the pre-explosion grid, so chained TNT
    inside a blast is removed rather than triggered.
    """
    fused = [
        coord
        for coord, tile in grid.items()
        if tile.kind is TileKind.TNT and tile.active and (tile.cooldown or 0) <= 0
    ]
    if not fused:
        return grid

    result = grid.copy()
    for center in fused:
        result.pop(center)
        if not settings.tnt_destructive:
            continue
        for cell in blast_cells(center):
            tile = grid.get(cell)
            if tile is not None and tile.kind is not TileKind.OBSIDIAN:
                result.pop(cell)
    logger.debug("detonated %d TNT at %s", len(fused), sorted(fused))
    return result
