"""Tests for redstone_sandbox.domain.tiles."""

from __future__ import annotations

import dataclasses

import pytest

from redstone_sandbox.domain.tiles import (
    ComparatorMode,
    Direction,
    Tile,
    TileKind,
    dispensed_tile,
    make_tile,
)


class TestDirection:
    def test_vectors_use_screen_coordinates(self) -> None:
        assert Direction.N.vector == (0, -1)
        assert Direction.S.vector == (0, 1)
        assert Direction.E.vector == (1, 0)
        assert Direction.W.vector == (-1, 0)

    def test_rotation_cycles_clockwise(self) -> None:
        assert Direction.N.rotated() is Direction.E
        assert Direction.E.rotated() is Direction.S
        assert Direction.S.rotated() is Direction.W
        assert Direction.W.rotated() is Direction.N

    @pytest.mark.parametrize("direction", list(Direction))
    def test_opposite_is_involution(self, direction: Direction) -> None:
        assert direction.opposite.opposite is direction
        assert direction.opposite is not direction

    def test_sides_are_perpendicular(self) -> None:
        assert set(Direction.N.sides()) == {Direction.W, Direction.E}
        assert set(Direction.E.sides()) == {Direction.N, Direction.S}

    def test_step(self) -> None:
        assert Direction.E.step((3, 4)) == (4, 4)
        assert Direction.N.step((3, 4), 2) == (3, 2)


class TestTileValidation:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"power": 16},
            {"power": -1},
            {"delay": 0},
            {"delay": 5},
            {"channel": 10},
            {"pitch": 25},
            {"value": 0},
        ],
    )
    def test_rejects_out_of_range_fields(self, kwargs: dict[str, int]) -> None:
        with pytest.raises(ValueError):
            Tile(kind=TileKind.BLOCK, **kwargs)

    def test_fluid_requires_level(self) -> None:
        with pytest.raises(ValueError, match="level"):
            Tile(kind=TileKind.WATER)

    def test_air_is_not_a_tile(self) -> None:
        with pytest.raises(ValueError, match="AIR"):
            Tile(kind=TileKind.AIR)

    def test_tiles_are_frozen_and_hashable(self) -> None:
        tile = Tile(kind=TileKind.DUST, power=3)
        with pytest.raises(dataclasses.FrozenInstanceError):
            tile.power = 4  # type: ignore[misc]
        assert hash(tile) == hash(Tile(kind=TileKind.DUST, power=3))


class TestMakeTile:
    def test_torch_starts_active(self) -> None:
        assert make_tile(TileKind.TORCH).active is True

    def test_fluids_start_as_full_sources(self) -> None:
        water = make_tile(TileKind.WATER)
        assert water.is_source is True
        assert water.level == 7

    def test_redstone_block_starts_powered(self) -> None:
        assert make_tile(TileKind.REDSTONE_BLOCK).power == 15

    def test_component_defaults(self) -> None:
        assert make_tile(TileKind.REPEATER).delay == 1
        assert make_tile(TileKind.COMPARATOR).comparator_mode is ComparatorMode.COMPARE
        assert make_tile(TileKind.COUNTER).value == 1
        assert make_tile(TileKind.ANTENNA).channel == 0
        assert make_tile(TileKind.DISPENSER).contents is TileKind.AIR

    def test_facing_is_kept(self) -> None:
        assert make_tile(TileKind.PISTON, Direction.W).facing is Direction.W

    def test_dispensed_fluid_is_flowing(self) -> None:
        lava = dispensed_tile(TileKind.LAVA, Direction.S)
        assert lava.is_source is False
        assert lava.level == 7
        assert dispensed_tile(TileKind.TORCH, Direction.S).active is True
