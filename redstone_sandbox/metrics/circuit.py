"""Per-tick circuit metrics: power field, activity, dust networks, fluids."""

from __future__ import annotations

import networkx as nx
import numpy as np

from redstone_sandbox.domain.grid import Grid
from redstone_sandbox.domain.tiles import TileKind


def power_array(grid: Grid) -> np.ndarray:
    """Dense ``(size, size)`` array of tile power, indexed ``[y, x]``."""
    field = np.zeros((grid.size, grid.size), dtype=np.int64)
    for (x, y), tile in grid.items():
        if grid.in_bounds((x, y)):
            field[y, x] = tile.power
    return field


def dust_graph(grid: Grid) -> nx.Graph:
    """Graph whose nodes are dust cells and edges join orthogonal dust neighbours."""
    graph = nx.Graph()
    for coord, tile in grid.items():
        if tile.kind is not TileKind.DUST:
            continue
        graph.add_node(coord)
        for cell, neighbor in grid.neighbors(coord):
            if neighbor is not None and neighbor.kind is TileKind.DUST:
                graph.add_edge(coord, cell)
    return graph


def dust_network_count(grid: Grid) -> int:
    """Number of separate dust wires on the grid."""
    return nx.number_connected_components(dust_graph(grid))


def compute_tick_metrics(grid: Grid) -> dict[str, int | float]:
    """Scalar metrics of one grid snapshot, keyed by ``TICK_METRIC_NAMES``."""
    field = power_array(grid)
    dust_mask = np.zeros_like(field, dtype=bool)
    for (x, y), tile in grid.items():
        if tile.kind is TileKind.DUST and grid.in_bounds((x, y)):
            dust_mask[y, x] = True
    dust_powers = field[dust_mask]

    return {
        "tile_count": len(grid),
        "powered_dust": int(np.count_nonzero(dust_powers)),
        "mean_dust_power": float(dust_powers.mean()) if dust_powers.size else 0.0,
        "active_count": sum(1 for _, tile in grid.items() if tile.active),
        "dust_networks": dust_network_count(grid),
        "fluid_cells": sum(1 for _, tile in grid.items() if tile.is_fluid),
    }
