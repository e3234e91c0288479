"""Persistence layer: blueprints, Parquet schemas and output paths."""

from redstone_sandbox.io.blueprint import (
    BlueprintError,
    export_blueprint,
    grid_from_document,
    grid_to_document,
    import_blueprint,
    load_blueprint,
    save_blueprint,
)

__all__ = [
    "BlueprintError",
    "export_blueprint",
    "grid_from_document",
    "grid_to_document",
    "import_blueprint",
    "load_blueprint",
    "save_blueprint",
]
