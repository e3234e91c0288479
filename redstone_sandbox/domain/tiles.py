"""Tile kinds, directions and the immutable ``Tile`` record.

Every cell of the sandbox holds at most one ``Tile``. A tile is a tagged
record: ``kind`` selects which of the optional fields carry meaning, the
rest keep their neutral defaults. Tiles are frozen; the tick engine and the
interaction entry points derive updated tiles with ``dataclasses.replace``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from redstone_sandbox.config.constants import (
    FLUID_MAX_LEVEL,
    MAX_POWER,
    MAX_REPEATER_DELAY,
    NUM_CHANNELS,
    NUM_PITCHES,
)

Coord = tuple[int, int]
"""Grid coordinate ``(x, y)``; y grows southwards."""


class Direction(Enum):
    """Facing of a tile."""

    N = "N"
    E = "E"
    S = "S"
    W = "W"

    @property
    def vector(self) -> Coord:
        return _VECTORS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def rotated(self) -> Direction:
        """Next facing clockwise (N -> E -> S -> W -> N)."""
        order = list(Direction)
        return order[(order.index(self) + 1) % len(order)]

    def sides(self) -> tuple[Direction, Direction]:
        """The two directions perpendicular to this one."""
        if self in (Direction.N, Direction.S):
            return (Direction.W, Direction.E)
        return (Direction.N, Direction.S)

    def step(self, coord: Coord, distance: int = 1) -> Coord:
        """Return ``coord`` moved ``distance`` cells along this direction."""
        dx, dy = self.vector
        return (coord[0] + dx * distance, coord[1] + dy * distance)


_VECTORS: dict[Direction, Coord] = {
    Direction.N: (0, -1),
    Direction.E: (1, 0),
    Direction.S: (0, 1),
    Direction.W: (-1, 0),
}

_OPPOSITES: dict[Direction, Direction] = {
    Direction.N: Direction.S,
    Direction.S: Direction.N,
    Direction.E: Direction.W,
    Direction.W: Direction.E,
}


class TileKind(Enum):
    """Every kind of tile the sandbox knows about.

    ``AIR`` is never stored in a grid; it stands for "nothing" in dispenser
    contents and observer snapshots.
    """

    AIR = "AIR"
    DUST = "DUST"
    LEVER = "LEVER"
    BUTTON = "BUTTON"
    PRESSURE_PLATE = "PRESSURE_PLATE"
    REDSTONE_BLOCK = "REDSTONE_BLOCK"
    COUNTER = "COUNTER"
    TORCH = "TORCH"
    REPEATER = "REPEATER"
    COMPARATOR = "COMPARATOR"
    OBSERVER = "OBSERVER"
    DAYLIGHT_SENSOR = "DAYLIGHT_SENSOR"
    SCULK_SENSOR = "SCULK_SENSOR"
    TARGET = "TARGET"
    PISTON = "PISTON"
    STICKY_PISTON = "STICKY_PISTON"
    PISTON_HEAD = "PISTON_HEAD"
    WATER = "WATER"
    LAVA = "LAVA"
    DISPENSER = "DISPENSER"
    ANTENNA = "ANTENNA"
    RECEIVER = "RECEIVER"
    BLOCK = "BLOCK"
    GLASS = "GLASS"
    SLIME = "SLIME"
    OBSIDIAN = "OBSIDIAN"
    LAMP = "LAMP"
    NOTE_BLOCK = "NOTE_BLOCK"
    TNT = "TNT"


class ComparatorMode(Enum):
    """Comparator operating mode."""

    COMPARE = "COMPARE"
    SUBTRACT = "SUBTRACT"


# Kinds a torch can sit on, that can be hard powered, and that count as
# "attached" for torches.
SOLID_KINDS: frozenset[TileKind] = frozenset(
    {
        TileKind.BLOCK,
        TileKind.PISTON,
        TileKind.PISTON_HEAD,
        TileKind.STICKY_PISTON,
        TileKind.GLASS,
        TileKind.SLIME,
        TileKind.LAMP,
        TileKind.NOTE_BLOCK,
        TileKind.OBSERVER,
        TileKind.REDSTONE_BLOCK,
        TileKind.TNT,
        TileKind.TARGET,
        TileKind.OBSIDIAN,
        TileKind.DISPENSER,
        TileKind.DAYLIGHT_SENSOR,
        TileKind.SCULK_SENSOR,
        TileKind.ANTENNA,
        TileKind.RECEIVER,
        TileKind.COUNTER,
    }
)

IMMOVABLE_KINDS: frozenset[TileKind] = frozenset({TileKind.OBSIDIAN, TileKind.PISTON_HEAD})

REPLACEABLE_KINDS: frozenset[TileKind] = frozenset(
    {
        TileKind.DUST,
        TileKind.TORCH,
        TileKind.LEVER,
        TileKind.BUTTON,
        TileKind.REPEATER,
        TileKind.COMPARATOR,
        TileKind.PRESSURE_PLATE,
    }
)

DIRECTIONAL_EMITTERS: frozenset[TileKind] = frozenset(
    {TileKind.TORCH, TileKind.REPEATER, TileKind.COMPARATOR, TileKind.OBSERVER}
)

SEED_KINDS: frozenset[TileKind] = frozenset(
    {
        TileKind.LEVER,
        TileKind.BUTTON,
        TileKind.PRESSURE_PLATE,
        TileKind.TORCH,
        TileKind.REPEATER,
        TileKind.COMPARATOR,
        TileKind.OBSERVER,
        TileKind.REDSTONE_BLOCK,
        TileKind.TARGET,
        TileKind.DAYLIGHT_SENSOR,
        TileKind.SCULK_SENSOR,
        TileKind.RECEIVER,
        TileKind.COUNTER,
    }
)

CONSUMER_KINDS: frozenset[TileKind] = frozenset(
    {
        TileKind.LAMP,
        TileKind.PISTON,
        TileKind.STICKY_PISTON,
        TileKind.TNT,
        TileKind.DISPENSER,
        TileKind.NOTE_BLOCK,
        TileKind.ANTENNA,
    }
)

PISTON_KINDS: frozenset[TileKind] = frozenset({TileKind.PISTON, TileKind.STICKY_PISTON})

FLUID_KINDS: frozenset[TileKind] = frozenset({TileKind.WATER, TileKind.LAVA})


@dataclass(frozen=True)
class Tile:
    """State of one occupied cell.

    Common fields are ``power``, ``facing`` and ``active``; the remaining
    fields are only read for the kinds that use them:

    - repeater: ``delay``, ``pending_target``, ``cooldown``
    - comparator: ``comparator_mode``
    - fluids: ``level``, ``is_source``
    - observer: ``observed_kind``, ``observed_power``, ``observed_active``
    - counter: ``value``
    - antenna / receiver: ``channel``
    - dispenser: ``contents``
    - note block: ``pitch``
    - daylight sensor: ``inverted``
    - TNT, sculk sensor, target: ``cooldown``
    """

    kind: TileKind
    power: int = 0
    facing: Direction = Direction.N
    active: bool = False
    delay: int = 1
    pending_target: bool | None = None
    cooldown: int | None = None
    comparator_mode: ComparatorMode = ComparatorMode.COMPARE
    level: int = 0
    is_source: bool = False
    observed_kind: TileKind = TileKind.AIR
    observed_power: int = 0
    observed_active: bool = False
    value: int = 1
    channel: int = 0
    contents: TileKind = TileKind.AIR
    pitch: int = 0
    inverted: bool = False

    def __post_init__(self) -> None:
        if self.kind is TileKind.AIR:
            raise ValueError("AIR is not a placeable tile kind")
        if not 0 <= self.power <= MAX_POWER:
            raise ValueError(f"power must be in [0, {MAX_POWER}]")
        if not 1 <= self.delay <= MAX_REPEATER_DELAY:
            raise ValueError(f"delay must be in [1, {MAX_REPEATER_DELAY}]")
        if not 0 <= self.channel < NUM_CHANNELS:
            raise ValueError(f"channel must be in [0, {NUM_CHANNELS - 1}]")
        if not 0 <= self.pitch < NUM_PITCHES:
            raise ValueError(f"pitch must be in [0, {NUM_PITCHES - 1}]")
        if not 1 <= self.value <= MAX_POWER:
            raise ValueError(f"value must be in [1, {MAX_POWER}]")
        if self.kind in FLUID_KINDS and not 1 <= self.level <= FLUID_MAX_LEVEL:
            raise ValueError(f"fluid level must be in [1, {FLUID_MAX_LEVEL}]")

    @property
    def is_solid(self) -> bool:
        return self.kind in SOLID_KINDS

    @property
    def is_immovable(self) -> bool:
        return self.kind in IMMOVABLE_KINDS

    @property
    def is_fluid(self) -> bool:
        return self.kind in FLUID_KINDS


def make_tile(kind: TileKind, facing: Direction = Direction.N) -> Tile:
    """Construct a freshly placed tile with kind-appropriate defaults."""
    if kind in FLUID_KINDS:
        return Tile(kind=kind, facing=facing, level=FLUID_MAX_LEVEL, is_source=True)
    if kind is TileKind.TORCH:
        return Tile(kind=kind, facing=facing, active=True)
    if kind is TileKind.REDSTONE_BLOCK:
        return Tile(kind=kind, facing=facing, power=MAX_POWER)
    if kind is TileKind.REPEATER:
        return Tile(kind=kind, facing=facing, delay=1, cooldown=0)
    return Tile(kind=kind, facing=facing)


def dispensed_tile(kind: TileKind, facing: Direction) -> Tile:
    """Tile emitted by a dispenser: placement defaults, fluids as flowing level 7."""
    if kind in FLUID_KINDS:
        return Tile(kind=kind, facing=facing, level=FLUID_MAX_LEVEL, is_source=False)
    return make_tile(kind, facing)
