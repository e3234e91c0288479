"""Parquet persistence helpers for the tick log and metrics streams."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from redstone_sandbox.domain.grid import Grid
from redstone_sandbox.io.schemas import TICK_LOG_SCHEMA


def new_tick_columns() -> dict[str, list[int | str | bool]]:
    """Empty column buffers matching ``TICK_LOG_SCHEMA``."""
    return {name: [] for name in TICK_LOG_SCHEMA.names}


def append_grid_rows(
    columns: dict[str, list[int | str | bool]], run_id: str, tick: int, grid: Grid
) -> None:
    """Append one row per occupied cell, in scan order."""
    for x, y in grid.scan_order():
        tile = grid[(x, y)]
        columns["run_id"].append(run_id)
        columns["tick"].append(tick)
        columns["x"].append(x)
        columns["y"].append(y)
        columns["kind"].append(tile.kind.value)
        columns["facing"].append(tile.facing.value)
        columns["power"].append(tile.power)
        columns["active"].append(tile.active)


def flush_tick_columns(
    tick_columns: dict[str, list[int | str | bool]],
    tick_log_path: Path,
    tick_writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated tick rows to Parquet and clear in-memory buffers."""
    if not tick_columns["run_id"]:
        return tick_writer
    tick_table = pa.Table.from_pydict(tick_columns, schema=TICK_LOG_SCHEMA)
    if tick_writer is None:
        tick_writer = pq.ParquetWriter(tick_log_path, TICK_LOG_SCHEMA)
    tick_writer.write_table(tick_table)
    for values in tick_columns.values():
        values.clear()
    return tick_writer
