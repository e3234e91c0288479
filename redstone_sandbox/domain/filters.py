"""Run-termination detectors over successive grid snapshots."""

from __future__ import annotations

from collections import deque

from redstone_sandbox.domain.grid import GridSnapshot


class SteadyStateDetector:
    """Detect N consecutive unchanged snapshots."""

    def __init__(self, window: int) -> None:
        if window < 1:
            raise ValueError("window must be >= 1")
        self.window = window
        self._last_snapshot: GridSnapshot | None = None
        self._unchanged_count = 0

    def observe(self, snapshot: GridSnapshot) -> bool:
        """Return True once snapshot has remained unchanged for `window` checks."""
        if self._last_snapshot is None:
            self._last_snapshot = snapshot
            return False

        if snapshot == self._last_snapshot:
            self._unchanged_count += 1
        else:
            self._unchanged_count = 0
            self._last_snapshot = snapshot

        return self._unchanged_count >= self.window


class OscillationDetector:
    """Detect short-period cycles (clocks, blinkers) in recent snapshots.

    Period 1 (a frozen grid) is left to ``SteadyStateDetector``.
    """

    def __init__(self, max_period: int = 16, history_size: int = 64) -> None:
        if max_period < 2:
            raise ValueError("max_period must be >= 2")
        if history_size < max_period * 2:
            raise ValueError("history_size must be >= 2 * max_period")
        self.max_period = max_period
        self._history: deque[GridSnapshot] = deque(maxlen=history_size)

    def observe(self, snapshot: GridSnapshot) -> int | None:
        """Return the smallest period seen twice in a row, or None."""
        self._history.append(snapshot)
        history = list(self._history)
        for period in range(2, self.max_period + 1):
            if len(history) < period * 2:
                break
            recent = history[-period:]
            before = history[-2 * period : -period]
            if recent == before and len(set(recent)) > 1:
                return period
        return None
