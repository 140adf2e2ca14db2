"""
LevelDescriptor - Static description of a level.

Produced once by the loader and never mutated afterwards. Snapshots copy
the grid out of it; nothing writes back.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict

from .grid import Grid
from ..core.objects import char_to_cell
from ..config import (
    DEFAULT_GROWTH,
    DEFAULT_RAZORS,
    DEFAULT_WATER,
    DEFAULT_FLOODING,
    DEFAULT_WATERPROOF,
)


@dataclass(frozen=True)
class LevelDescriptor:
    """
    Everything the loader knows about a level.

    Attributes:
        name: Level name (file name for loaded levels)
        grid: Initial grid
        trampolines: Trampoline id -> target id (many-to-one)
        growth: Ticks between beard growth passes
        razors: Razors held at start
        lambdas: Lambdas that must be collected to open the lift
        water: Initial water row (0 = dry)
        flooding: Ticks between water rises (0 = never)
        waterproof: Consecutive submerged ticks the robot survives
    """
    name: str
    grid: Grid
    trampolines: Dict[str, str] = field(default_factory=dict)
    growth: int = DEFAULT_GROWTH
    razors: int = DEFAULT_RAZORS
    lambdas: int = 0
    water: int = DEFAULT_WATER
    flooding: int = DEFAULT_FLOODING
    waterproof: int = DEFAULT_WATERPROOF

    @property
    def beard_timer(self) -> int:
        """Growth timer given to freshly created beard cells."""
        return max(self.growth - 1, 0)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to a JSON-friendly dictionary.

        The grid is stored as its authored lines (top row first).
        """
        return {
            "name": self.name,
            "map": self.grid.to_lines(),
            "trampolines": dict(self.trampolines),
            "growth": self.growth,
            "razors": self.razors,
            "lambdas": self.lambdas,
            "water": self.water,
            "flooding": self.flooding,
            "waterproof": self.waterproof,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LevelDescriptor:
        """Deserialize from ``to_dict()`` output."""
        growth = data.get("growth", DEFAULT_GROWTH)
        timer = max(growth - 1, 0)
        rows = [[char_to_cell(ch, timer) for ch in line] for line in reversed(data["map"])]
        return cls(
            name=data["name"],
            grid=Grid.from_rows(rows),
            trampolines=dict(data.get("trampolines", {})),
            growth=growth,
            razors=data.get("razors", DEFAULT_RAZORS),
            lambdas=data["lambdas"],
            water=data.get("water", DEFAULT_WATER),
            flooding=data.get("flooding", DEFAULT_FLOODING),
            waterproof=data.get("waterproof", DEFAULT_WATERPROOF),
        )

    def __str__(self) -> str:
        return f"Level({self.name}, {self.grid.width}x{self.grid.height}, lambdas={self.lambdas})"
