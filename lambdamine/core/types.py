"""
Core type definitions for the mine simulation.

This module contains all fundamental types, enums, and value objects used
throughout the system. No game logic, just pure data structures.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

# ============================================================================
# SPATIAL TYPES
# ============================================================================

# Grid position: (column, row) where:
# - column increases to the RIGHT
# - row increases UPWARD
# - (1, 1) is the BOTTOM-LEFT cell of the authored map
Position = Tuple[int, int]


class Direction(Enum):
    """
    Movement directions using mathematical coordinates (row+ = UP).
    Each direction provides a delta tuple (dx, dy).
    """
    UP = (0, 1)
    DOWN = (0, -1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self) -> Tuple[int, int]:
        """Get the (dx, dy) movement delta."""
        return self.value

    @property
    def is_horizontal(self) -> bool:
        return self.value[1] == 0

    def apply(self, pos: Position) -> Position:
        """Return the position one step from ``pos`` in this direction."""
        return (pos[0] + self.value[0], pos[1] + self.value[1])

    def __str__(self) -> str:
        return self.name


# ============================================================================
# CELL OBJECTS
# ============================================================================

class CellKind(Enum):
    """The closed set of things a grid cell can hold."""
    EMPTY = 0
    WALL = 1
    EARTH = 2
    ROBOT = 3
    ROCK = 4
    LAMBDA = 5
    LIFT = 6
    TRAMPOLINE = 7
    TARGET = 8
    BEARD = 9
    RAZOR = 10

    def __str__(self) -> str:
        return self.name.lower()


class RockType(Enum):
    """Rock variants."""
    SIMPLE = "simple"
    HIGHER_ORDER = "higher_order"


class LiftState(Enum):
    """Lift variants."""
    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class Cell:
    """
    Contents of one grid cell.

    A tagged union: ``kind`` selects the variant and only the payload field
    belonging to that variant is set. Build cells through the factory
    methods rather than the constructor.

    Attributes:
        kind: Variant tag
        rock_type: Payload of ROCK cells
        lift_state: Payload of LIFT cells
        ident: Identifier of TRAMPOLINE ('A'-'I') and TARGET ('0'-'9') cells
        growth_timer: Payload of BEARD cells (ticks until the next growth)
    """
    kind: CellKind
    rock_type: Optional[RockType] = None
    lift_state: Optional[LiftState] = None
    ident: Optional[str] = None
    growth_timer: Optional[int] = None

    # Factory methods
    @staticmethod
    def empty() -> Cell:
        return EMPTY

    @staticmethod
    def rock(rock_type: RockType = RockType.SIMPLE) -> Cell:
        return Cell(CellKind.ROCK, rock_type=rock_type)

    @staticmethod
    def lift(state: LiftState = LiftState.CLOSED) -> Cell:
        return Cell(CellKind.LIFT, lift_state=state)

    @staticmethod
    def trampoline(ident: str) -> Cell:
        return Cell(CellKind.TRAMPOLINE, ident=ident)

    @staticmethod
    def target(ident: str) -> Cell:
        return Cell(CellKind.TARGET, ident=ident)

    @staticmethod
    def beard(growth_timer: int) -> Cell:
        return Cell(CellKind.BEARD, growth_timer=growth_timer)

    def sort_key(self) -> tuple:
        """Ordering key: variant first, then payload."""
        return (
            self.kind.value,
            self.rock_type.value if self.rock_type else "",
            self.lift_state.value if self.lift_state else "",
            self.ident or "",
            self.growth_timer if self.growth_timer is not None else -1,
        )

    def __lt__(self, other: Cell) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        if self.kind == CellKind.ROCK:
            return f"rock({self.rock_type.value})"
        if self.kind == CellKind.LIFT:
            return f"lift({self.lift_state.value})"
        if self.kind in (CellKind.TRAMPOLINE, CellKind.TARGET):
            return f"{self.kind}({self.ident})"
        if self.kind == CellKind.BEARD:
            return f"beard({self.growth_timer})"
        return str(self.kind)


# Payload-less variants are shared singletons
EMPTY = Cell(CellKind.EMPTY)
WALL = Cell(CellKind.WALL)
EARTH = Cell(CellKind.EARTH)
ROBOT = Cell(CellKind.ROBOT)
LAMBDA = Cell(CellKind.LAMBDA)
RAZOR = Cell(CellKind.RAZOR)
SIMPLE_ROCK = Cell(CellKind.ROCK, rock_type=RockType.SIMPLE)
HIGHER_ORDER_ROCK = Cell(CellKind.ROCK, rock_type=RockType.HIGHER_ORDER)
OPEN_LIFT = Cell(CellKind.LIFT, lift_state=LiftState.OPEN)
CLOSED_LIFT = Cell(CellKind.LIFT, lift_state=LiftState.CLOSED)


# ============================================================================
# PROGRESS
# ============================================================================

class Progress(Enum):
    """Possible game progress states."""
    RUNNING = "running"
    WIN = "win"
    LOSS = "loss"
    ABORT = "abort"
    RESTART = "restart"
    SKIP = "skip"

    def __str__(self) -> str:
        return self.value.title()


class LossReason(Enum):
    """Why a game was lost."""
    CRUSHED_BY_ROCK = "crushed_by_rock"
    DROWNED = "drowned"

    def __str__(self) -> str:
        return self.value.replace("_", " ")


@dataclass(frozen=True)
class Verdict:
    """
    Progress verdict of a snapshot.

    Attributes:
        progress: Progress state (RUNNING is the only non-terminal one)
        reason: Set only for LOSS
    """
    progress: Progress
    reason: Optional[LossReason] = None

    @property
    def is_terminal(self) -> bool:
        """Check if the game has ended."""
        return self.progress != Progress.RUNNING

    @staticmethod
    def running() -> Verdict:
        return RUNNING

    @staticmethod
    def loss(reason: LossReason) -> Verdict:
        return Verdict(Progress.LOSS, reason)

    def to_dict(self) -> dict:
        return {
            "progress": self.progress.name,
            "reason": self.reason.name if self.reason else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Verdict:
        reason = data.get("reason")
        return cls(
            progress=Progress[data["progress"]],
            reason=LossReason[reason] if reason else None,
        )

    def __str__(self) -> str:
        if self.reason is not None:
            return f"{self.progress}: {self.reason}"
        return str(self.progress)


RUNNING = Verdict(Progress.RUNNING)
WIN = Verdict(Progress.WIN)
ABORT = Verdict(Progress.ABORT)
RESTART = Verdict(Progress.RESTART)
SKIP = Verdict(Progress.SKIP)
