"""
Action definitions and utilities.

Actions are the player's commands, one per tick. This module provides:
- Action enum
- Route symbol conversion (contest-style strings such as "RRDLA")
- Action serialization
"""

from __future__ import annotations
from enum import Enum
from typing import Iterable, List, Optional

from .types import Direction
from ..config import ROUTE_SYMBOLS


class Action(Enum):
    """
    An action the robot (or the player) can take during one tick.

    ABORT, RESTART and SKIP are meta-actions: they end the current game
    without any physics being applied.
    """
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    WAIT = "wait"
    USE_RAZOR = "use_razor"
    ABORT = "abort"
    RESTART = "restart"
    SKIP = "skip"

    @property
    def direction(self) -> Optional[Direction]:
        """Movement direction for directional actions, None otherwise."""
        return _DIRECTIONS.get(self)

    @property
    def is_meta(self) -> bool:
        return self in (Action.ABORT, Action.RESTART, Action.SKIP)

    @property
    def symbol(self) -> Optional[str]:
        """Route symbol, or None for actions that have no route form."""
        return ROUTE_SYMBOLS.get(self.name)

    @classmethod
    def from_symbol(cls, symbol: str) -> Action:
        """
        Create an action from a route symbol or an action name.

        Args:
            symbol: Route symbol ("U", "D", "L", "R", "W", "S", "A") or
                an action name such as "restart"

        Returns:
            Action instance

        Raises:
            ValueError: If the symbol is unknown
        """
        for name, sym in ROUTE_SYMBOLS.items():
            if sym == symbol:
                return cls[name]
        try:
            return cls(symbol.lower())
        except ValueError:
            raise ValueError(f"Unknown action symbol: {symbol!r}") from None

    def to_dict(self) -> str:
        return self.name

    @classmethod
    def from_dict(cls, data: str) -> Action:
        return cls[data]

    def __str__(self) -> str:
        return self.symbol or self.name


_DIRECTIONS = {
    Action.UP: Direction.UP,
    Action.DOWN: Direction.DOWN,
    Action.LEFT: Direction.LEFT,
    Action.RIGHT: Direction.RIGHT,
}


def parse_route(route: str) -> List[Action]:
    """
    Parse a contest-style route string into actions.

    Whitespace is ignored. Raises ValueError on unknown symbols.
    """
    return [Action.from_symbol(ch) for ch in route if not ch.isspace()]


def format_route(actions: Iterable[Action]) -> str:
    """Render actions as a route string; actions without a symbol use their name in brackets."""
    return "".join(a.symbol if a.symbol else f"[{a.name}]" for a in actions)
