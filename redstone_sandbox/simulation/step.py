"""One atomic tick: ``advance(grid, settings) -> Grid``.

Pass order:

1. wireless channel registry and component logic (previous grid only)
2. explosion resolution
3. power propagation and consumer activation
4. dispensers and fluids
5. pistons

The input grid is never mutated and no intermediate grid escapes this
module. Callers must not interleave external edits with a running tick.
"""

from __future__ import annotations

import logging

from redstone_sandbox.config.types import Settings
from redstone_sandbox.domain.grid import Grid
from redstone_sandbox.simulation.fluids import dispense, flow_fluids
from redstone_sandbox.simulation.logic import evaluate_components, resolve_explosions
from redstone_sandbox.simulation.mechanics import resolve_pistons
from redstone_sandbox.simulation.power import activate_consumers, apply_power, propagate

logger = logging.getLogger(__name__)


def advance(grid: Grid, settings: Settings) -> Grid:
    """Return the grid one tick after ``grid`` under ``settings``."""
    logic = evaluate_components(grid, settings)
    logic = resolve_explosions(logic, settings)

    power_map = propagate(logic)
    powered = apply_power(logic, power_map)
    powered = activate_consumers(powered, power_map)

    settled = powered.copy()
    dispense(grid, powered, settled)
    flow_fluids(powered, settled)

    result = resolve_pistons(grid, settled)
    logger.debug(
        "tick day_time=%d tiles=%d powered_cells=%d",
        settings.day_time,
        len(result),
        len(power_map),
    )
    return result
