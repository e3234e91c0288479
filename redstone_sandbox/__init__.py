"""Discrete-tick simulator for a 2D circuit sandbox.

``advance(grid, settings)`` is the whole engine: a pure transform from one
grid snapshot to the next.
"""

from redstone_sandbox.config.types import Settings
from redstone_sandbox.domain.grid import Grid
from redstone_sandbox.domain.tiles import Direction, Tile, TileKind, make_tile
from redstone_sandbox.simulation.step import advance

__all__ = [
    "Direction",
    "Grid",
    "Settings",
    "Tile",
    "TileKind",
    "advance",
    "make_tile",
]
