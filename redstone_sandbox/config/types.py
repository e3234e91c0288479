"""Configuration dataclasses for the tick engine and batch runs.

``Settings`` is the small record consumed by every tick; ``RunConfig`` and
``RunResult`` parameterise and summarise one batch run of a blueprint.
"""

from __future__ import annotations

from dataclasses import dataclass

from redstone_sandbox.config.constants import (
    DAY_LENGTH,
    DEFAULT_DAY_TIME,
    NUM_TICKS,
    STEADY_STATE_WINDOW,
)

__all__ = [
    "RunConfig",
    "RunResult",
    "Settings",
]


@dataclass(frozen=True)
class Settings:
    """Global inputs of one tick: the day clock and the TNT blast policy."""

    day_time: int = DEFAULT_DAY_TIME
    tnt_destructive: bool = True

    def __post_init__(self) -> None:
        if not 0 <= self.day_time < DAY_LENGTH:
            raise ValueError(f"day_time must be in [0, {DAY_LENGTH})")

    def next_day_time(self) -> Settings:
        """Return settings with the day clock advanced by one tick (wrapping)."""
        return Settings(
            day_time=(self.day_time + 1) % DAY_LENGTH,
            tnt_destructive=self.tnt_destructive,
        )


@dataclass(frozen=True)
class RunConfig:
    """Runtime knobs for a batch run of one blueprint."""

    ticks: int = NUM_TICKS
    day_time: int = DEFAULT_DAY_TIME
    tnt_destructive: bool = True
    write_tick_log: bool = False
    stop_on_steady_state: bool = False
    steady_state_window: int = STEADY_STATE_WINDOW
    run_id: str = "run"

    def __post_init__(self) -> None:
        if self.ticks < 1:
            raise ValueError("ticks must be >= 1")
        if self.steady_state_window < 1:
            raise ValueError("steady_state_window must be >= 1")
        if not self.run_id:
            raise ValueError("run_id must not be empty")
        Settings(day_time=self.day_time, tnt_destructive=self.tnt_destructive)

    def initial_settings(self) -> Settings:
        """Settings in force before the first tick."""
        return Settings(day_time=self.day_time, tnt_destructive=self.tnt_destructive)


@dataclass(frozen=True)
class RunResult:
    """Top-level result for one batch run."""

    run_id: str
    ticks_run: int
    steady_at: int | None
    oscillation_period: int | None
    final_tile_count: int
    final_day_time: int
