from redstone_sandbox.domain.filters import OscillationDetector, SteadyStateDetector
from redstone_sandbox.domain.grid import Grid
from redstone_sandbox.domain.tiles import Tile, TileKind

import pytest


def _snapshot(power: int):
    grid = Grid()
    grid[(0, 0)] = Tile(kind=TileKind.DUST, power=power)
    return grid.snapshot()


def test_steady_state_detector_triggers_after_exact_window() -> None:
    detector = SteadyStateDetector(window=3)
    snapshot = _snapshot(1)

    assert detector.observe(snapshot) is False
    assert detector.observe(snapshot) is False
    assert detector.observe(snapshot) is False
    assert detector.observe(snapshot) is True


def test_steady_state_detector_resets_after_change() -> None:
    detector = SteadyStateDetector(window=2)
    snap_a = _snapshot(1)
    snap_b = _snapshot(2)

    assert detector.observe(snap_a) is False
    assert detector.observe(snap_a) is False
    assert detector.observe(snap_b) is False
    assert detector.observe(snap_b) is False
    assert detector.observe(snap_b) is True


def test_steady_state_detector_rejects_zero_window() -> None:
    with pytest.raises(ValueError):
        SteadyStateDetector(window=0)


def test_oscillation_detector_finds_two_cycle() -> None:
    detector = OscillationDetector(max_period=2, history_size=4)
    a, b = _snapshot(1), _snapshot(2)
    assert detector.observe(a) is None
    assert detector.observe(b) is None
    assert detector.observe(a) is None
    assert detector.observe(b) == 2


def test_oscillation_detector_ignores_frozen_grid() -> None:
    detector = OscillationDetector(max_period=2, history_size=4)
    a = _snapshot(1)
    assert all(detector.observe(a) is None for _ in range(6))


def test_oscillation_detector_finds_three_cycle() -> None:
    detector = OscillationDetector(max_period=4, history_size=8)
    cycle = [_snapshot(1), _snapshot(2), _snapshot(3)]
    seen = [detector.observe(cycle[i % 3]) for i in range(6)]
    assert seen[-1] == 3
    assert all(period is None for period in seen[:-1])


def test_oscillation_detector_validates_arguments() -> None:
    with pytest.raises(ValueError):
        OscillationDetector(max_period=1)
    with pytest.raises(ValueError):
        OscillationDetector(max_period=4, history_size=7)
