"""Centralized domain constants for the circuit sandbox.

All magic numbers shared by the tick engine, the interaction entry points
and the batch runner are defined here. Consuming modules should import from
this module rather than defining their own inline literals.
"""

from __future__ import annotations

GRID_SIZE = 24
"""Default side length of the square grid in cells."""

MAX_POWER = 15
"""Maximum signal strength carried by any tile."""

PUSH_LIMIT = 12
"""Maximum number of tiles a piston may move in one action."""

TNT_FUSE = 40
"""Armed ticks before a TNT tile detonates."""

EXPLOSION_RADIUS = 2.2
"""Euclidean blast radius (in cells) of a destructive TNT detonation."""

ARMED_SENSOR_TICKS = 8
"""Ticks a sculk sensor or target block stays active once struck."""

FLUID_MAX_LEVEL = 7
"""Level of a fluid source; flowing fluid decays by one per cell."""

DAY_LENGTH = 2400
"""Length of a full day/night cycle in ticks."""

HALF_DAY = 1200
"""Ticks in each of the day and night halves."""

DEFAULT_DAY_TIME = 600
"""Initial day time (peak daylight)."""

MAX_REPEATER_DELAY = 4
"""Longest selectable repeater delay in ticks."""

NUM_CHANNELS = 10
"""Number of wireless channels (0..9)."""

NUM_PITCHES = 25
"""Number of note-block pitches (0..24)."""

BUTTON_RELEASE_TICKS = 15
"""Ticks after which a pressed button springs back."""

TICK_INTERVAL_MS = 100
"""Wall-clock pacing suggested to hosts that drive the tick loop."""

FLUSH_THRESHOLD = 8_192
"""Flush tick log rows to Parquet once this in-memory row count is reached."""

NUM_TICKS = 200
"""Default number of ticks for a batch run."""

STEADY_STATE_WINDOW = 2
"""Default number of consecutive unchanged ticks that count as a steady state."""
