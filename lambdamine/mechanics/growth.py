"""
Beard growth.

On growth ticks every beard cell spreads into its 4-adjacent Empty and
Earth cells. The pass reads the pre-growth grid, so beard created in this
pass does not spread again until the next growth tick.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Set

from .traversal import scan_order
from ..core.types import Cell, CellKind, Position
from ..core.objects import is_earth, is_empty
from ..world.grid import Grid


@dataclass
class GrowthResult:
    """
    Attributes:
        triggered: True if this was a growth tick
        grown: Positions converted to beard, in scan order
    """
    triggered: bool
    grown: List[Position] = field(default_factory=list)

    @property
    def log(self) -> str:
        if not self.triggered:
            return ""
        return f"Beard grows into {len(self.grown)} cell(s)"


class BeardGrowth:
    """Stateless beard growth rule."""

    @staticmethod
    def is_growth_tick(tick: int, rate: int) -> bool:
        return rate > 0 and tick % rate == 0

    def apply(self, grid: Grid, tick: int, rate: int, timer: int) -> GrowthResult:
        """
        Grow every beard on a growth tick.

        Args:
            grid: Working grid (modified in-place)
            tick: Number of the tick being processed
            rate: Ticks between growth passes
            timer: Growth timer for new beard cells

        Returns:
            GrowthResult
        """
        if not self.is_growth_tick(tick, rate):
            return GrowthResult(triggered=False)

        source = grid.copy()
        grown: List[Position] = []
        seen: Set[Position] = set()
        for pos in scan_order(source.find(CellKind.BEARD)):
            for neighbour in source.neighbors(pos):
                cell = source.get(neighbour)
                if (is_empty(cell) or is_earth(cell)) and neighbour not in seen:
                    grid.set(neighbour, Cell.beard(timer))
                    grown.append(neighbour)
                    seen.add(neighbour)

        return GrowthResult(triggered=True, grown=scan_order(grown))
