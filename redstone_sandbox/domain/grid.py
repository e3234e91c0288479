"""Sparse, bounded square grid of tiles.

Absence of a coordinate means the cell is empty ("air"); there is no
separate exists flag. Lookups outside the grid or on empty cells return
``None`` / zero power and never raise.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from redstone_sandbox.config.constants import GRID_SIZE
from redstone_sandbox.domain.tiles import Coord, Direction, Tile

GridSnapshot = frozenset[tuple[Coord, Tile]]
"""Hashable, order-independent view of a grid's contents."""


@dataclass
class Grid:
    """Square grid of side ``size`` holding tiles keyed by ``(x, y)``."""

    size: int = GRID_SIZE
    tiles: dict[Coord, Tile] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError("size must be >= 1")

    def __contains__(self, coord: object) -> bool:
        return coord in self.tiles

    def __getitem__(self, coord: Coord) -> Tile:
        return self.tiles[coord]

    def __setitem__(self, coord: Coord, tile: Tile) -> None:
        self.tiles[coord] = tile

    def __delitem__(self, coord: Coord) -> None:
        del self.tiles[coord]

    def __iter__(self) -> Iterator[Coord]:
        return iter(self.tiles)

    def __len__(self) -> int:
        return len(self.tiles)

    def get(self, coord: Coord) -> Tile | None:
        return self.tiles.get(coord)

    def pop(self, coord: Coord) -> Tile | None:
        return self.tiles.pop(coord, None)

    def items(self) -> Iterator[tuple[Coord, Tile]]:
        return iter(self.tiles.items())

    def in_bounds(self, coord: Coord) -> bool:
        x, y = coord
        return 0 <= x < self.size and 0 <= y < self.size

    def power_at(self, coord: Coord) -> int:
        """Power of the tile at ``coord``; empty cells carry 0."""
        tile = self.tiles.get(coord)
        return tile.power if tile is not None else 0

    def neighbors(self, coord: Coord) -> list[tuple[Coord, Tile | None]]:
        """Orthogonal neighbours (N, S, W, E) with their tiles, empty cells as ``None``."""
        cells = [d.step(coord) for d in (Direction.N, Direction.S, Direction.W, Direction.E)]
        return [(cell, self.tiles.get(cell)) for cell in cells]

    def scan_order(self) -> list[Coord]:
        """Occupied coordinates in row-major order (y, then x)."""
        return sorted(self.tiles, key=lambda c: (c[1], c[0]))

    def copy(self) -> Grid:
        """Shallow copy; tiles are immutable so sharing them is safe."""
        return Grid(size=self.size, tiles=dict(self.tiles))

    def snapshot(self) -> GridSnapshot:
        return frozenset(self.tiles.items())
