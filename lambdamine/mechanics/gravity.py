"""
RockPhysics - gravity and sliding.

Every rock is evaluated once per tick against the grid as it stood when
this step began; moves are written to the working grid as they are found.
A rock never moves into a cell that held a rock at step start. Two rocks
sliding towards the same cell are resolved in scan order: the first one
claims the cell and the other stays put.

The robot's cell does not hold rocks up. A rock whose fall or slide ends
on the robot's position crushes it.

A higher-order rock also falls onto a lambda, taking the lambda's cell.
When a higher-order rock comes to rest after moving (the cell below its
new position was not Empty at step start) it breaks into a lambda.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .traversal import scan_order
from ..core.types import Cell, CellKind, Position, EMPTY, LAMBDA
from ..core.objects import is_empty, is_higher_order_rock, is_lambda, is_robot, is_rock, is_wall
from ..world.grid import Grid


@dataclass
class RockMove:
    """One rock displacement."""
    rock: Cell
    origin: Position
    dest: Position
    kind: str  # "fall", "slide_right", "slide_left"

    def __str__(self) -> str:
        return f"{self.rock} {self.kind.replace('_', ' ')} {self.origin} -> {self.dest}"


@dataclass
class RockResult:
    """
    Attributes:
        moves: Rock moves applied this tick, in scan order
        crushed: True if a rock landed on the robot
        crushed_at: Robot position when crushed
        destroyed_lambdas: Lambda cells taken by falling higher-order rocks
        broken: Cells where a higher-order rock broke into a lambda
    """
    moves: List[RockMove] = field(default_factory=list)
    crushed: bool = False
    crushed_at: Optional[Position] = None
    destroyed_lambdas: List[Position] = field(default_factory=list)
    broken: List[Position] = field(default_factory=list)

    @property
    def logs(self) -> List[str]:
        logs = [str(m) for m in self.moves]
        logs.extend(f"Lambda at {p} smashed by a higher-order rock" for p in self.destroyed_lambdas)
        logs.extend(f"Higher-order rock at {p} breaks into a lambda" for p in self.broken)
        if self.crushed:
            logs.append(f"Robot crushed by a rock at {self.crushed_at}")
        return logs


class RockPhysics:
    """Stateless gravity rule for rocks."""

    def apply(self, grid: Grid) -> RockResult:
        """
        Let every rock fall or slide once.

        Args:
            grid: Working grid (modified in-place)

        Returns:
            RockResult
        """
        source = grid.copy()
        result = RockResult()
        claimed = set()

        for pos in scan_order(source.find(CellKind.ROCK)):
            rock = source.get(pos)
            found = self._destination(source, pos, rock)
            if found is None:
                continue
            dest, kind = found
            if dest in claimed:
                continue
            claimed.add(dest)

            landed_on = source.get(dest)
            if is_robot(landed_on):
                result.crushed = True
                result.crushed_at = dest
            elif is_lambda(landed_on):
                result.destroyed_lambdas.append(dest)

            placed = rock
            if is_higher_order_rock(rock) and not is_robot(landed_on) and self._rests(source, dest):
                placed = LAMBDA
                result.broken.append(dest)

            grid.set(pos, EMPTY)
            grid.set(dest, placed)
            result.moves.append(RockMove(rock=rock, origin=pos, dest=dest, kind=kind))

        return result

    def _destination(self, source: Grid, pos: Position, rock: Cell) -> Optional[Tuple[Position, str]]:
        """Where the rock at ``pos`` goes this tick, or None if it stays."""
        x, y = pos
        below = (x, y - 1)
        under = source.get(below)

        if self._open(under):
            return below, "fall"
        if is_higher_order_rock(rock) and is_lambda(under):
            return below, "fall"

        if is_rock(under) or is_wall(under):
            if is_empty(source.get((x + 1, y))) and self._open(source.get((x + 1, y - 1))):
                return (x + 1, y - 1), "slide_right"
            if is_empty(source.get((x - 1, y))) and self._open(source.get((x - 1, y - 1))):
                return (x - 1, y - 1), "slide_left"

        return None

    @staticmethod
    def _rests(source: Grid, dest: Position) -> bool:
        x, y = dest
        return not is_empty(source.get((x, y - 1)))

    @staticmethod
    def _open(cell: Cell) -> bool:
        """A rock may move into Empty cells and onto the robot."""
        return is_empty(cell) or is_robot(cell)
