"""
World state for the mine simulation.

This module provides:
- Grid: Cell storage and spatial queries
- LevelDescriptor: Static level description produced by the loader
- WorldSnapshot: One frame of the simulated world
"""

from .grid import Grid
from .level import LevelDescriptor
from .snapshot import WorldSnapshot

__all__ = [
    "Grid",
    "LevelDescriptor",
    "WorldSnapshot",
]
