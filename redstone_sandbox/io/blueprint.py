"""Whole-grid export/import as a JSON document keyed by ``"x,y"``.

Document layout::

    {"size": 24, "tiles": {"3,4": {"kind": "DUST", "power": 12}, ...}}

Only fields that differ from the ``Tile`` defaults are written. A blueprint
string is the document's JSON text wrapped in base64. Any decoding failure
raises ``BlueprintError`` before a ``Grid`` is produced, so callers can keep
their live grid untouched.
"""

from __future__ import annotations

import base64
import json
from dataclasses import fields
from enum import Enum
from pathlib import Path
from typing import Any

from redstone_sandbox.config.constants import GRID_SIZE
from redstone_sandbox.domain.grid import Grid
from redstone_sandbox.domain.tiles import ComparatorMode, Coord, Direction, Tile, TileKind


class BlueprintError(ValueError):
    """Raised when a persisted grid cannot be decoded."""


_ENUM_FIELDS: dict[str, type[Enum]] = {
    "kind": TileKind,
    "facing": Direction,
    "comparator_mode": ComparatorMode,
    "observed_kind": TileKind,
    "contents": TileKind,
}
_BOOL_FIELDS = {"active", "is_source", "observed_active", "inverted"}
_OPTIONAL_BOOL_FIELDS = {"pending_target"}
_OPTIONAL_INT_FIELDS = {"cooldown"}
_TILE_FIELDS = {f.name: f for f in fields(Tile)}


def _encode_key(coord: Coord) -> str:
    return f"{coord[0]},{coord[1]}"


def _decode_key(key: str) -> Coord:
    parts = key.split(",")
    if len(parts) != 2:
        raise BlueprintError(f"tile key must use 'x,y' format, got {key!r}")
    try:
        return (int(parts[0]), int(parts[1]))
    except ValueError as exc:
        raise BlueprintError(f"tile key must contain integers, got {key!r}") from exc


def tile_to_dict(tile: Tile) -> dict[str, Any]:
    """Serialise a tile, omitting fields equal to their defaults."""
    payload: dict[str, Any] = {"kind": tile.kind.value}
    for name, spec in _TILE_FIELDS.items():
        if name == "kind":
            continue
        value = getattr(tile, name)
        if value == spec.default:
            continue
        payload[name] = value.value if isinstance(value, Enum) else value
    return payload


def tile_from_dict(payload: object) -> Tile:
    """Rebuild a tile from its serialised form."""
    if not isinstance(payload, dict):
        raise BlueprintError("tile entry must be a JSON object")
    unknown = set(payload) - set(_TILE_FIELDS)
    if unknown:
        raise BlueprintError(f"unknown tile fields: {sorted(unknown)}")
    if "kind" not in payload:
        raise BlueprintError("tile entry is missing 'kind'")

    kwargs: dict[str, Any] = {}
    for name, raw in payload.items():
        if name in _ENUM_FIELDS:
            try:
                kwargs[name] = _ENUM_FIELDS[name](raw)
            except ValueError as exc:
                raise BlueprintError(f"invalid {name}: {raw!r}") from exc
        elif name in _BOOL_FIELDS:
            if not isinstance(raw, bool):
                raise BlueprintError(f"{name} must be a boolean")
            kwargs[name] = raw
        elif name in _OPTIONAL_BOOL_FIELDS:
            if raw is not None and not isinstance(raw, bool):
                raise BlueprintError(f"{name} must be a boolean or null")
            kwargs[name] = raw
        else:
            if isinstance(raw, bool) or not isinstance(raw, int):
                if not (raw is None and name in _OPTIONAL_INT_FIELDS):
                    raise BlueprintError(f"{name} must be an integer")
            kwargs[name] = raw
    try:
        return Tile(**kwargs)
    except ValueError as exc:
        raise BlueprintError(f"invalid tile: {exc}") from exc


def grid_to_document(grid: Grid) -> dict[str, Any]:
    return {
        "size": grid.size,
        "tiles": {_encode_key(coord): tile_to_dict(grid[coord]) for coord in grid.scan_order()},
    }


def grid_from_document(document: object) -> Grid:
    """Build a grid from a decoded JSON document; tiles outside the grid are rejected."""
    if not isinstance(document, dict):
        raise BlueprintError("blueprint must be a JSON object")
    size = document.get("size", GRID_SIZE)
    if isinstance(size, bool) or not isinstance(size, int) or size < 1:
        raise BlueprintError("size must be a positive integer")
    tiles = document.get("tiles", {})
    if not isinstance(tiles, dict):
        raise BlueprintError("tiles must be a JSON object")

    grid = Grid(size=size)
    for key, payload in tiles.items():
        coord = _decode_key(key)
        if not grid.in_bounds(coord):
            raise BlueprintError(f"tile {key} lies outside the {size}x{size} grid")
        grid[coord] = tile_from_dict(payload)
    return grid


def export_blueprint(grid: Grid) -> str:
    """Encode ``grid`` as a base64 blueprint string."""
    text = json.dumps(grid_to_document(grid), separators=(",", ":"), sort_keys=True)
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def import_blueprint(blueprint: str) -> Grid:
    """Decode a base64 blueprint string into a new grid."""
    try:
        text = base64.b64decode(blueprint.strip(), validate=True).decode("utf-8")
    except ValueError as exc:
        raise BlueprintError("blueprint is not valid base64 text") from exc
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise BlueprintError(f"blueprint is not valid JSON: {exc}") from exc
    return grid_from_document(document)


def save_blueprint(grid: Grid, path: Path) -> Path:
    """Write ``grid`` to ``path`` as pretty-printed JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(grid_to_document(grid), ensure_ascii=False, indent=2)
    path.write_text(text, encoding="utf-8")
    return path


def load_blueprint(path: Path) -> Grid:
    """Read a JSON blueprint file written by ``save_blueprint``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise BlueprintError(f"blueprint file could not be read: {path}: {exc}") from exc
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise BlueprintError(f"blueprint file is not valid JSON: {path}: {exc}") from exc
    return grid_from_document(document)
