"""Configuration layer: constants and typed config dataclasses."""

from redstone_sandbox.config.constants import (
    ARMED_SENSOR_TICKS,
    BUTTON_RELEASE_TICKS,
    DAY_LENGTH,
    EXPLOSION_RADIUS,
    FLUID_MAX_LEVEL,
    FLUSH_THRESHOLD,
    GRID_SIZE,
    MAX_POWER,
    PUSH_LIMIT,
    TNT_FUSE,
)
from redstone_sandbox.config.types import RunConfig, RunResult, Settings

__all__ = [
    "ARMED_SENSOR_TICKS",
    "BUTTON_RELEASE_TICKS",
    "DAY_LENGTH",
    "EXPLOSION_RADIUS",
    "FLUID_MAX_LEVEL",
    "FLUSH_THRESHOLD",
    "GRID_SIZE",
    "MAX_POWER",
    "PUSH_LIMIT",
    "RunConfig",
    "RunResult",
    "Settings",
    "TNT_FUSE",
]
