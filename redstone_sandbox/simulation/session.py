"""Host-side session: owns the live grid, the day clock and the pause flag.

``Sandbox`` is what a UI or server holds on to. Every entry point and every
tick runs under one lock, so a tick is a single critical section and edits
always land between ticks.
"""

from __future__ import annotations

import logging
import threading

from redstone_sandbox.config.constants import BUTTON_RELEASE_TICKS
from redstone_sandbox.config.types import Settings
from redstone_sandbox.domain import interactions
from redstone_sandbox.domain.grid import Grid
from redstone_sandbox.domain.tiles import Coord, Direction, TileKind
from redstone_sandbox.io.blueprint import export_blueprint, import_blueprint
from redstone_sandbox.simulation.step import advance

logger = logging.getLogger(__name__)


class Sandbox:
    """A live, pausable circuit sandbox."""

    def __init__(self, grid: Grid | None = None, settings: Settings | None = None) -> None:
        self.grid = grid if grid is not None else Grid()
        self.settings = settings if settings is not None else Settings()
        self.paused = False
        self.tick_count = 0
        self._button_release: dict[Coord, int] = {}
        self._lock = threading.Lock()

    def tick(self) -> list[Coord]:
        """Advance one tick unless paused; returns note blocks triggered this tick."""
        with self._lock:
            if self.paused:
                return []
            previous = self.grid
            self.settings = self.settings.next_day_time()
            self.grid = advance(previous, self.settings)
            self.tick_count += 1
            self._release_due_buttons()
            return interactions.note_triggers(previous, self.grid)

    def _release_due_buttons(self) -> None:
        due = [c for c, at in self._button_release.items() if at <= self.tick_count]
        for coord in due:
            del self._button_release[coord]
            interactions.release_button(self.grid, coord)

    def place(self, coord: Coord, kind: TileKind, facing: Direction = Direction.N) -> bool:
        with self._lock:
            return interactions.place(self.grid, coord, kind, facing)

    def toggle(self, coord: Coord) -> bool:
        with self._lock:
            changed = interactions.toggle(self.grid, coord)
            tile = self.grid.get(coord)
            if changed and tile is not None and tile.kind is TileKind.BUTTON:
                self._button_release[coord] = self.tick_count + BUTTON_RELEASE_TICKS
            return changed

    def set_pressed(self, coord: Coord, pressed: bool) -> bool:
        with self._lock:
            return interactions.set_pressed(self.grid, coord, pressed)

    def cycle_delay(self, coord: Coord) -> bool:
        with self._lock:
            return interactions.cycle_delay(self.grid, coord)

    def rotate(self, coord: Coord) -> bool:
        with self._lock:
            return interactions.rotate(self.grid, coord)

    def delete(self, coord: Coord) -> bool:
        with self._lock:
            self._button_release.pop(coord, None)
            return interactions.delete(self.grid, coord)

    def move(self, source: Coord, target: Coord) -> bool:
        with self._lock:
            self._button_release.pop(source, None)
            return interactions.move(self.grid, source, target)

    def export_blueprint(self) -> str:
        with self._lock:
            return export_blueprint(self.grid)

    def import_blueprint(self, text: str) -> None:
        """Replace the live grid; on decode failure the grid is left untouched."""
        grid = import_blueprint(text)
        with self._lock:
            self.grid = grid
            self._button_release.clear()
        logger.info("imported blueprint with %d tiles", len(grid))
