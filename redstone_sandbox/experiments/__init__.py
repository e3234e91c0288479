"""Command-line orchestration of batch runs."""

from redstone_sandbox.experiments.run import main

__all__ = ["main"]
