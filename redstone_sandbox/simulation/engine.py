"""Batch runner: tick a blueprint, persist Parquet logs and a final blueprint."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from redstone_sandbox.config.constants import FLUSH_THRESHOLD
from redstone_sandbox.config.types import RunConfig, RunResult
from redstone_sandbox.domain.filters import OscillationDetector, SteadyStateDetector
from redstone_sandbox.domain.grid import Grid
from redstone_sandbox.io import paths
from redstone_sandbox.io.blueprint import save_blueprint
from redstone_sandbox.io.schemas import (
    RUN_LOG_SCHEMA_VERSION,
    TICK_METRIC_NAMES,
    TICK_METRICS_SCHEMA,
)
from redstone_sandbox.metrics.circuit import compute_tick_metrics
from redstone_sandbox.simulation.persistence import (
    append_grid_rows,
    flush_tick_columns,
    new_tick_columns,
)
from redstone_sandbox.simulation.step import advance

logger = logging.getLogger(__name__)


def run_sandbox(grid: Grid, out_dir: Path, config: RunConfig | None = None) -> RunResult:
    """Tick ``grid`` for up to ``config.ticks`` ticks and persist the run.

    Writes ``logs/tick_metrics.parquet`` always, ``logs/tick_log.parquet``
    when ``config.write_tick_log`` is set, plus ``final_grid.json`` and
    ``summary.json``. The input grid is not modified.
    """
    run_config = config or RunConfig()
    out_dir = Path(out_dir)
    paths.logs_dir(out_dir).mkdir(parents=True, exist_ok=True)

    settings = run_config.initial_settings()
    steady = SteadyStateDetector(window=run_config.steady_state_window)
    oscillation = OscillationDetector()
    steady_at: int | None = None
    period: int | None = None

    tick_columns = new_tick_columns()
    tick_writer: pq.ParquetWriter | None = None
    metric_columns: dict[str, list[int | float | str]] = {
        name: [] for name in TICK_METRICS_SCHEMA.names
    }

    current = grid
    ticks_run = 0
    try:
        for tick in range(run_config.ticks):
            settings = settings.next_day_time()
            current = advance(current, settings)
            ticks_run = tick + 1

            metrics = compute_tick_metrics(current)
            metric_columns["schema_version"].append(RUN_LOG_SCHEMA_VERSION)
            metric_columns["run_id"].append(run_config.run_id)
            metric_columns["tick"].append(tick)
            metric_columns["day_time"].append(settings.day_time)
            for name in TICK_METRIC_NAMES:
                metric_columns[name].append(metrics[name])

            if run_config.write_tick_log:
                append_grid_rows(tick_columns, run_config.run_id, tick, current)
                if len(tick_columns["run_id"]) >= FLUSH_THRESHOLD:
                    tick_writer = flush_tick_columns(
                        tick_columns, paths.tick_log_path(out_dir), tick_writer
                    )

            snapshot = current.snapshot()
            if period is None:
                period = oscillation.observe(snapshot)
            if steady.observe(snapshot) and steady_at is None:
                steady_at = tick
                logger.info("run %s reached a steady state at tick %d", run_config.run_id, tick)
                if run_config.stop_on_steady_state:
                    break
        if run_config.write_tick_log:
            tick_writer = flush_tick_columns(
                tick_columns, paths.tick_log_path(out_dir), tick_writer
            )
    finally:
        if tick_writer is not None:
            tick_writer.close()

    pq.write_table(
        pa.Table.from_pydict(metric_columns, schema=TICK_METRICS_SCHEMA),
        paths.tick_metrics_path(out_dir),
    )
    save_blueprint(current, paths.final_grid_path(out_dir))

    result = RunResult(
        run_id=run_config.run_id,
        ticks_run=ticks_run,
        steady_at=steady_at,
        oscillation_period=period,
        final_tile_count=len(current),
        final_day_time=settings.day_time,
    )
    paths.summary_path(out_dir).write_text(
        json.dumps(asdict(result), ensure_ascii=False, indent=2)
    )
    return result
