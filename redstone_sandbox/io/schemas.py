"""Parquet schema definitions for batch-run artifacts.

Every module that writes or reads run logs works against these column
contracts.
"""

from __future__ import annotations

import pyarrow as pa

RUN_LOG_SCHEMA_VERSION = 1

# ---------------------------------------------------------------------------
# Per-tile log
# ---------------------------------------------------------------------------

TICK_LOG_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("tick", pa.int64()),
        ("x", pa.int64()),
        ("y", pa.int64()),
        ("kind", pa.string()),
        ("facing", pa.string()),
        ("power", pa.int64()),
        ("active", pa.bool_()),
    ]
)

# ---------------------------------------------------------------------------
# Per-tick metrics
# ---------------------------------------------------------------------------

TICK_METRIC_NAMES = [
    "tile_count",
    "powered_dust",
    "mean_dust_power",
    "active_count",
    "dust_networks",
    "fluid_cells",
]

TICK_METRICS_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("run_id", pa.string()),
        ("tick", pa.int64()),
        ("day_time", pa.int64()),
        ("tile_count", pa.int64()),
        ("powered_dust", pa.int64()),
        ("mean_dust_power", pa.float64()),
        ("active_count", pa.int64()),
        ("dust_networks", pa.int64()),
        ("fluid_cells", pa.int64()),
    ]
)
