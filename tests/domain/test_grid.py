"""Tests for redstone_sandbox.domain.grid."""

from __future__ import annotations

import pytest

from redstone_sandbox.domain.grid import Grid
from redstone_sandbox.domain.tiles import Tile, TileKind


class TestGrid:
    def test_missing_cells_read_as_empty(self) -> None:
        grid = Grid()
        assert grid.get((3, 3)) is None
        assert grid.power_at((3, 3)) == 0
        assert grid.power_at((-5, 100)) == 0

    def test_rejects_non_positive_size(self) -> None:
        with pytest.raises(ValueError):
            Grid(size=0)

    def test_in_bounds(self) -> None:
        grid = Grid(size=4)
        assert grid.in_bounds((0, 0))
        assert grid.in_bounds((3, 3))
        assert not grid.in_bounds((4, 0))
        assert not grid.in_bounds((0, -1))

    def test_neighbors_report_empty_cells(self) -> None:
        grid = Grid()
        grid[(1, 0)] = Tile(kind=TileKind.DUST, power=5)
        neighbors = dict(grid.neighbors((1, 1)))
        assert set(neighbors) == {(1, 0), (1, 2), (0, 1), (2, 1)}
        assert neighbors[(1, 0)] == Tile(kind=TileKind.DUST, power=5)
        assert neighbors[(0, 1)] is None

    def test_scan_order_is_row_major(self) -> None:
        grid = Grid()
        for coord in [(5, 1), (0, 2), (2, 1), (9, 0)]:
            grid[coord] = Tile(kind=TileKind.BLOCK)
        assert grid.scan_order() == [(9, 0), (2, 1), (5, 1), (0, 2)]

    def test_copy_is_independent(self) -> None:
        grid = Grid()
        grid[(0, 0)] = Tile(kind=TileKind.BLOCK)
        clone = grid.copy()
        del clone[(0, 0)]
        assert (0, 0) in grid
        assert (0, 0) not in clone

    def test_snapshot_ignores_insertion_order(self) -> None:
        a, b = Grid(), Grid()
        a[(0, 0)] = Tile(kind=TileKind.BLOCK)
        a[(1, 0)] = Tile(kind=TileKind.GLASS)
        b[(1, 0)] = Tile(kind=TileKind.GLASS)
        b[(0, 0)] = Tile(kind=TileKind.BLOCK)
        assert a.snapshot() == b.snapshot()
