"""Path construction helpers for run output directories."""

from __future__ import annotations

from pathlib import Path


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def tick_log_path(out_dir: Path) -> Path:
    """Return path to the per-tile tick log Parquet file."""
    return logs_dir(out_dir) / "tick_log.parquet"


def tick_metrics_path(out_dir: Path) -> Path:
    """Return path to the per-tick metrics Parquet file."""
    return logs_dir(out_dir) / "tick_metrics.parquet"


def final_grid_path(out_dir: Path) -> Path:
    """Return path to the JSON blueprint of the final grid."""
    return out_dir / "final_grid.json"


def summary_path(out_dir: Path) -> Path:
    """Return path to the run summary JSON file."""
    return out_dir / "summary.json"
