"""Simulation engine: the tick transform, the live session and the batch runner."""

from redstone_sandbox.simulation.engine import run_sandbox
from redstone_sandbox.simulation.session import Sandbox
from redstone_sandbox.simulation.step import advance

__all__ = [
    "Sandbox",
    "advance",
    "run_sandbox",
]
