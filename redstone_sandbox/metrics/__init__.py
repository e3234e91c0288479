"""Circuit metrics computed from grid snapshots."""

from redstone_sandbox.metrics.circuit import (
    compute_tick_metrics,
    dust_graph,
    dust_network_count,
    power_array,
)

__all__ = [
    "compute_tick_metrics",
    "dust_graph",
    "dust_network_count",
    "power_array",
]
