"""
Flappy Liberal: a single-screen side-scroller built around a fixed-tick
simulation engine, with a pygame front end and a pluggable scoreboard.
"""

from .data_models import Phase, Snapshot
from .engine import SimulationEngine

__all__ = ["Phase", "Snapshot", "SimulationEngine"]
__version__ = "1.0.0"
