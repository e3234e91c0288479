"""Domain layer: tiles, the sparse grid, interaction entry points and detectors."""

from redstone_sandbox.domain.filters import (
    OscillationDetector,
    SteadyStateDetector,
)
from redstone_sandbox.domain.grid import Grid, GridSnapshot
from redstone_sandbox.domain.interactions import (
    cycle_delay,
    delete,
    move,
    note_triggers,
    place,
    release_button,
    rotate,
    set_pressed,
    toggle,
)
from redstone_sandbox.domain.tiles import (
    ComparatorMode,
    Coord,
    Direction,
    Tile,
    TileKind,
    make_tile,
)

__all__ = [
    "ComparatorMode",
    "Coord",
    "Direction",
    "Grid",
    "GridSnapshot",
    "OscillationDetector",
    "SteadyStateDetector",
    "Tile",
    "TileKind",
    "cycle_delay",
    "delete",
    "make_tile",
    "move",
    "note_triggers",
    "place",
    "release_button",
    "rotate",
    "set_pressed",
    "toggle",
]
