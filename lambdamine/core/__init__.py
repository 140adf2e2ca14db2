"""
Core types and constants for the mine simulation.
"""

# Instead of from lambdamine.core.types import Cell, you can do: from lambdamine.core import Cell
from .types import (
    Position,
    Direction,
    Cell,
    CellKind,
    RockType,
    LiftState,
    Progress,
    LossReason,
    Verdict,
)
from .actions import Action, parse_route, format_route
from .objects import InvalidCharacterError, char_to_cell, cell_to_char


__all__ = [
    "Position",
    "Direction",
    "Cell",
    "CellKind",
    "RockType",
    "LiftState",
    "Progress",
    "LossReason",
    "Verdict",
    "Action",
    "parse_route",
    "format_route",
    "InvalidCharacterError",
    "char_to_cell",
    "cell_to_char",
]
