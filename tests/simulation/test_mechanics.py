"""Tests for piston push/pull resolution."""

from __future__ import annotations

import pytest

from redstone_sandbox.config.types import Settings
from redstone_sandbox.domain import interactions
from redstone_sandbox.domain.grid import Grid
from redstone_sandbox.domain.tiles import Direction, Tile, TileKind
from redstone_sandbox.simulation.mechanics import adhesion_group, push_group, relocate
from redstone_sandbox.simulation.step import advance


def _tick(grid: Grid, n: int = 1) -> Grid:
    for _ in range(n):
        grid = advance(grid, Settings())
    return grid


def _piston_rig(kind: TileKind = TileKind.PISTON) -> Grid:
    """Piston at (5, 5) facing east with a block in front and a lever below."""
    grid = Grid()
    grid[(5, 5)] = Tile(kind=kind, facing=Direction.E)
    grid[(6, 5)] = Tile(kind=TileKind.BLOCK)
    grid[(5, 6)] = Tile(kind=TileKind.LEVER)
    return grid


class TestAdhesionGroup:
    def test_slime_collects_orthogonal_neighbours(self) -> None:
        grid = Grid()
        grid[(5, 5)] = Tile(kind=TileKind.SLIME)
        grid[(5, 4)] = Tile(kind=TileKind.BLOCK)
        grid[(6, 5)] = Tile(kind=TileKind.BLOCK)
        grid[(7, 5)] = Tile(kind=TileKind.BLOCK)
        assert set(adhesion_group(grid, (5, 5)) or []) == {(5, 5), (5, 4), (6, 5)}

    def test_plain_blocks_do_not_stick(self) -> None:
        grid = Grid()
        grid[(5, 5)] = Tile(kind=TileKind.BLOCK)
        grid[(6, 5)] = Tile(kind=TileKind.BLOCK)
        assert adhesion_group(grid, (5, 5)) == [(5, 5)]

    def test_empty_start_is_empty_group(self) -> None:
        assert adhesion_group(Grid(), (0, 0)) == []

    def test_obsidian_in_group_blocks(self) -> None:
        grid = Grid()
        grid[(5, 5)] = Tile(kind=TileKind.SLIME)
        grid[(5, 6)] = Tile(kind=TileKind.OBSIDIAN)
        assert adhesion_group(grid, (5, 5)) is None

    def test_oversized_group_blocks(self) -> None:
        grid = Grid()
        for x in range(13):
            grid[(x, 0)] = Tile(kind=TileKind.SLIME)
        assert adhesion_group(grid, (0, 0)) is None

    def test_excluded_cells_are_skipped(self) -> None:
        grid = Grid()
        grid[(5, 5)] = Tile(kind=TileKind.SLIME)
        grid[(4, 5)] = Tile(kind=TileKind.PISTON, facing=Direction.E)
        assert adhesion_group(grid, (5, 5), exclude=[(4, 5)]) == [(5, 5)]


class TestPushGroup:
    def test_line_of_blocks_is_pushed_together(self) -> None:
        grid = Grid()
        for x in (3, 4, 5):
            grid[(x, 5)] = Tile(kind=TileKind.BLOCK)
        group = push_group(grid, (3, 5), Direction.E, piston=(2, 5))
        assert set(group or []) == {(3, 5), (4, 5), (5, 5)}

    def test_empty_front_is_empty_push(self) -> None:
        assert push_group(Grid(), (3, 5), Direction.E, piston=(2, 5)) == []

    def test_push_off_the_edge_is_blocked(self) -> None:
        grid = Grid()
        grid[(23, 5)] = Tile(kind=TileKind.BLOCK)
        assert push_group(grid, (23, 5), Direction.E, piston=(22, 5)) is None


def test_relocate_handles_overlapping_cells() -> None:
    grid = Grid()
    grid[(1, 0)] = Tile(kind=TileKind.BLOCK)
    grid[(2, 0)] = Tile(kind=TileKind.GLASS)
    relocate(grid, [(1, 0), (2, 0)], Direction.E)
    assert grid[(2, 0)].kind is TileKind.BLOCK
    assert grid[(3, 0)].kind is TileKind.GLASS
    assert (1, 0) not in grid


def test_relocated_extended_piston_drops_its_head() -> None:
    grid = Grid()
    grid[(1, 1)] = Tile(kind=TileKind.PISTON, facing=Direction.E, active=True)
    grid[(2, 1)] = Tile(kind=TileKind.PISTON_HEAD, facing=Direction.E, active=True)
    relocate(grid, [(1, 1)], Direction.S)
    assert (2, 1) not in grid
    assert grid[(1, 2)] == Tile(kind=TileKind.PISTON, facing=Direction.E)


class TestPistons:
    def test_push_places_head_and_moves_block(self) -> None:
        grid = _piston_rig()
        interactions.toggle(grid, (5, 6))
        grid = _tick(grid)
        assert grid[(5, 5)].active is True
        assert grid[(6, 5)].kind is TileKind.PISTON_HEAD
        assert grid[(7, 5)].kind is TileKind.BLOCK

    def test_extended_piston_is_stable(self) -> None:
        grid = _piston_rig()
        interactions.toggle(grid, (5, 6))
        grid = _tick(grid)
        again = _tick(grid, 3)
        assert again[(7, 5)].kind is TileKind.BLOCK
        assert (8, 5) not in again

    def test_plain_piston_leaves_block_on_retract(self) -> None:
        grid = _piston_rig()
        interactions.toggle(grid, (5, 6))
        grid = _tick(grid)
        interactions.toggle(grid, (5, 6))
        grid = _tick(grid)
        assert grid[(5, 5)].active is False
        assert (6, 5) not in grid
        assert grid[(7, 5)].kind is TileKind.BLOCK

    def test_sticky_piston_pulls_block_back(self) -> None:
        grid = _piston_rig(TileKind.STICKY_PISTON)
        interactions.toggle(grid, (5, 6))
        grid = _tick(grid)
        interactions.toggle(grid, (5, 6))
        grid = _tick(grid)
        assert grid[(6, 5)].kind is TileKind.BLOCK
        assert (7, 5) not in grid

    @pytest.mark.parametrize(("count", "moves"), [(12, True), (13, False)])
    def test_push_limit(self, count: int, moves: bool) -> None:
        grid = Grid()
        grid[(0, 5)] = Tile(kind=TileKind.PISTON, facing=Direction.E)
        grid[(0, 6)] = Tile(kind=TileKind.LEVER, active=True)
        for x in range(1, count + 1):
            grid[(x, 5)] = Tile(kind=TileKind.SLIME)
        grid = _tick(grid, 2)
        if moves:
            assert grid[(1, 5)].kind is TileKind.PISTON_HEAD
            assert all(grid[(x, 5)].kind is TileKind.SLIME for x in range(2, count + 2))
        else:
            assert all(grid[(x, 5)].kind is TileKind.SLIME for x in range(1, count + 1))
            assert grid[(0, 5)].active is False

    def test_obsidian_blocks_push(self) -> None:
        grid = _piston_rig()
        grid[(7, 5)] = Tile(kind=TileKind.OBSIDIAN)
        interactions.toggle(grid, (5, 6))
        grid = _tick(grid)
        assert grid[(5, 5)].active is False
        assert grid[(6, 5)].kind is TileKind.BLOCK

    def test_push_against_grid_edge_is_blocked(self) -> None:
        grid = Grid()
        grid[(22, 5)] = Tile(kind=TileKind.PISTON, facing=Direction.E)
        grid[(23, 5)] = Tile(kind=TileKind.BLOCK)
        grid[(22, 6)] = Tile(kind=TileKind.LEVER, active=True)
        grid = _tick(grid)
        assert grid[(22, 5)].active is False
        assert grid[(23, 5)].kind is TileKind.BLOCK

    def test_blocked_piston_retries_once_clear(self) -> None:
        grid = _piston_rig()
        grid[(6, 5)] = Tile(kind=TileKind.OBSIDIAN)
        interactions.toggle(grid, (5, 6))
        grid = _tick(grid)
        assert grid[(5, 5)].active is False
        interactions.delete(grid, (6, 5))
        grid = _tick(grid)
        assert grid[(5, 5)].active is True
        assert grid[(6, 5)].kind is TileKind.PISTON_HEAD

    def test_piston_pushed_before_extending_arrives_retracted(self) -> None:
        grid = Grid()
        grid[(2, 5)] = Tile(kind=TileKind.PISTON, facing=Direction.E)
        grid[(2, 6)] = Tile(kind=TileKind.LEVER, active=True)
        grid[(3, 5)] = Tile(kind=TileKind.PISTON, facing=Direction.N)
        grid[(3, 6)] = Tile(kind=TileKind.REDSTONE_BLOCK, power=15)
        grid = _tick(grid)
        assert grid[(3, 5)].kind is TileKind.PISTON_HEAD
        pushed = grid[(4, 5)]
        assert pushed.kind is TileKind.PISTON
        assert pushed.active is False
        assert (4, 4) not in grid

    def test_heads_are_never_pushed(self) -> None:
        grid = Grid()
        grid[(5, 5)] = Tile(kind=TileKind.PISTON_HEAD, facing=Direction.S, active=True)
        assert push_group(grid, (5, 5), Direction.E, piston=(4, 5)) is None

    def test_extended_piston_shoved_sideways_loses_its_head(self) -> None:
        grid = Grid()
        grid[(5, 3)] = Tile(kind=TileKind.LEVER, active=True)
        grid[(5, 4)] = Tile(kind=TileKind.PISTON, facing=Direction.S)
        grid[(5, 5)] = Tile(kind=TileKind.PISTON, facing=Direction.E, active=True)
        grid[(6, 5)] = Tile(kind=TileKind.PISTON_HEAD, facing=Direction.E, active=True)
        grid = _tick(grid)
        assert grid[(5, 5)].kind is TileKind.PISTON_HEAD
        assert grid[(5, 5)].facing is Direction.S
        assert grid[(5, 6)].kind is TileKind.PISTON
        assert grid[(5, 6)].active is False
        assert (6, 5) not in grid


class TestStickyPull:
    @staticmethod
    def _extended_rig() -> Grid:
        """Sticky piston at (5, 5) that has pushed a slime + block pair east."""
        grid = Grid()
        grid[(5, 5)] = Tile(kind=TileKind.STICKY_PISTON, facing=Direction.E)
        grid[(5, 6)] = Tile(kind=TileKind.LEVER)
        grid[(6, 5)] = Tile(kind=TileKind.SLIME)
        grid[(6, 4)] = Tile(kind=TileKind.BLOCK)
        interactions.toggle(grid, (5, 6))
        return _tick(grid)

    def test_push_carries_the_slime_group(self) -> None:
        grid = self._extended_rig()
        assert grid[(6, 5)].kind is TileKind.PISTON_HEAD
        assert grid[(7, 5)].kind is TileKind.SLIME
        assert grid[(7, 4)].kind is TileKind.BLOCK
        assert (6, 4) not in grid

    def test_pull_brings_back_the_whole_group(self) -> None:
        grid = self._extended_rig()
        interactions.toggle(grid, (5, 6))
        grid = _tick(grid)
        assert grid[(5, 5)].active is False
        assert grid[(6, 5)].kind is TileKind.SLIME
        assert grid[(6, 4)].kind is TileKind.BLOCK
        assert (7, 5) not in grid
        assert (7, 4) not in grid

    def test_blocked_pull_is_skipped_but_head_is_removed(self) -> None:
        grid = self._extended_rig()
        grid[(6, 4)] = Tile(kind=TileKind.GLASS)
        interactions.toggle(grid, (5, 6))
        grid = _tick(grid)
        assert grid[(5, 5)].active is False
        assert (6, 5) not in grid
        assert grid[(7, 5)].kind is TileKind.SLIME
        assert grid[(7, 4)].kind is TileKind.BLOCK
        assert grid[(6, 4)].kind is TileKind.GLASS
