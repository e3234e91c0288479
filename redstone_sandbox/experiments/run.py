"""CLI entrypoint for batch runs of a blueprint.

This module owns CLI argument parsing only. Domain logic lives in:

- ``redstone_sandbox.io.blueprint``        – blueprint loading
- ``redstone_sandbox.config``              – configuration dataclasses
- ``redstone_sandbox.simulation.engine``   – ``run_sandbox`` batch runner
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path

from redstone_sandbox.config.types import RunConfig
from redstone_sandbox.io.blueprint import BlueprintError, load_blueprint
from redstone_sandbox.simulation.engine import run_sandbox

# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})

# RunConfig fields settable from the CLI or a config file, with their types.
_RUN_FIELDS: dict[str, type] = {
    "ticks": int,
    "day_time": int,
    "tnt_destructive": bool,
    "write_tick_log": bool,
    "stop_on_steady_state": bool,
    "steady_state_window": int,
    "run_id": str,
}


def _coerce(raw: object, key: str, expected: type) -> object:
    """Coerce a CLI or config-file value to ``expected`` (bool, int or str).

    Config files are hand-written JSON, so ``"no"`` is a bool and ``"40"`` is
    an int; a bool is never accepted where a number or name is expected.
    """
    if expected is bool:
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, str):
            word = raw.strip().lower()
            if word in _TRUE_WORDS:
                return True
            if word in _FALSE_WORDS:
                return False
        raise ValueError(f"{key} must be a boolean value")
    if isinstance(raw, bool):
        raise ValueError(f"{key} must not be a boolean value")
    if expected is int:
        if isinstance(raw, int):
            return raw
        if isinstance(raw, str) and raw.strip().lstrip("-").isdigit():
            return int(raw)
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, (str, Path)):
        return str(raw)
    raise ValueError(f"{key} must be a string value")


def _run_config(
    args: argparse.Namespace, file_cfg: dict[str, object], default_run_id: str
) -> RunConfig:
    """Resolve each run field CLI > file > RunConfig default."""
    values: dict[str, object] = {}
    for key, expected in _RUN_FIELDS.items():
        raw = getattr(args, key)
        if raw is None:
            raw = file_cfg.get(key)
        if raw is None and key == "run_id":
            raw = default_run_id
        if raw is not None:
            values[key] = _coerce(raw, key, expected)
    return RunConfig(**values)


def _resolve_path(cli_val: Path | None, key: str, file_cfg: dict[str, object]) -> Path | None:
    raw = cli_val if cli_val is not None else file_cfg.get(key)
    if raw is None:
        return None
    return Path(str(_coerce(raw, key, str)))



def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Run a circuit sandbox blueprint")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--blueprint", type=Path, default=None, help="JSON blueprint file")
    parser.add_argument("--ticks", type=int, default=None)
    parser.add_argument("--day-time", type=int, default=None)
    parser.add_argument(
        "--tnt-destructive", action=argparse.BooleanOptionalAction, default=None
    )
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument("--run-id", type=str, default=None)
    parser.add_argument(
        "--write-tick-log", action=argparse.BooleanOptionalAction, default=None
    )
    parser.add_argument(
        "--stop-on-steady-state", action=argparse.BooleanOptionalAction, default=None
    )
    parser.add_argument("--steady-state-window", type=int, default=None)
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for a batch run.

    Supports ``--config path/to/config.json`` for reproducibility. CLI
    arguments override config-file values; config-file values override
    built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")
        if not isinstance(file_cfg, dict):
            parser.error(f"Config file must hold a JSON object: {args.config}")

    try:
        blueprint_path = _resolve_path(args.blueprint, "blueprint", file_cfg)
        if blueprint_path is None:
            parser.error("--blueprint is required (on the command line or in --config)")
        out_dir = _resolve_path(args.out_dir, "out_dir", file_cfg) or Path("data")
        run_config = _run_config(args, file_cfg, blueprint_path.stem)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        grid = load_blueprint(blueprint_path)
    except BlueprintError as exc:
        parser.error(f"Blueprint could not be loaded: {exc}")

    result = run_sandbox(grid, out_dir, run_config)
    summary = {"out_dir": str(out_dir), **asdict(result)}
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
