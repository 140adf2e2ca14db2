"""
Predicates over cell objects and the map character codec.

Every site that needs to know what a cell *is* goes through these helpers,
so adding a variant means touching this module and ``types.py`` only.
"""

from __future__ import annotations

from .types import (
    Cell,
    CellKind,
    LiftState,
    RockType,
    EMPTY,
    WALL,
    EARTH,
    ROBOT,
    LAMBDA,
    RAZOR,
    SIMPLE_ROCK,
    HIGHER_ORDER_ROCK,
    OPEN_LIFT,
    CLOSED_LIFT,
)

TRAMPOLINE_IDS = "ABCDEFGHI"
TARGET_IDS = "0123456789"


class InvalidCharacterError(ValueError):
    """Raised when a map character has no cell mapping."""

    def __init__(self, char: str):
        self.char = char
        super().__init__(f"Cannot convert {char!r} to a cell: no mapping found")


# ============================================================================
# PREDICATES
# ============================================================================

def is_empty(cell: Cell) -> bool:
    return cell.kind == CellKind.EMPTY


def is_wall(cell: Cell) -> bool:
    return cell.kind == CellKind.WALL


def is_earth(cell: Cell) -> bool:
    return cell.kind == CellKind.EARTH


def is_robot(cell: Cell) -> bool:
    return cell.kind == CellKind.ROBOT


def is_rock(cell: Cell) -> bool:
    return cell.kind == CellKind.ROCK


def is_simple_rock(cell: Cell) -> bool:
    return cell.kind == CellKind.ROCK and cell.rock_type == RockType.SIMPLE


def is_higher_order_rock(cell: Cell) -> bool:
    return cell.kind == CellKind.ROCK and cell.rock_type == RockType.HIGHER_ORDER


def is_lambda(cell: Cell) -> bool:
    return cell.kind == CellKind.LAMBDA


def is_lambda_like(cell: Cell) -> bool:
    """Lambdas and higher-order rocks, which break into lambdas."""
    return is_lambda(cell) or is_higher_order_rock(cell)


def is_lift(cell: Cell) -> bool:
    return cell.kind == CellKind.LIFT


def is_lift_open(cell: Cell) -> bool:
    return cell.kind == CellKind.LIFT and cell.lift_state == LiftState.OPEN


def is_lift_closed(cell: Cell) -> bool:
    return cell.kind == CellKind.LIFT and cell.lift_state == LiftState.CLOSED


def is_trampoline(cell: Cell) -> bool:
    return cell.kind == CellKind.TRAMPOLINE


def is_target(cell: Cell) -> bool:
    return cell.kind == CellKind.TARGET


def is_beard(cell: Cell) -> bool:
    return cell.kind == CellKind.BEARD


def is_razor(cell: Cell) -> bool:
    return cell.kind == CellKind.RAZOR


# ============================================================================
# CHARACTER CODEC
# ============================================================================

_SIMPLE_CHARS = {
    "R": ROBOT,
    "#": WALL,
    "*": SIMPLE_ROCK,
    "@": HIGHER_ORDER_ROCK,
    "\\": LAMBDA,
    "L": CLOSED_LIFT,
    "O": OPEN_LIFT,
    ".": EARTH,
    " ": EMPTY,
    "!": RAZOR,
}


def char_to_cell(char: str, beard_timer: int = 0) -> Cell:
    """
    Convert a map character into a cell.

    Args:
        char: Single map character
        beard_timer: Growth timer given to beard cells ('W')

    Returns:
        The corresponding cell

    Raises:
        InvalidCharacterError: If the character has no mapping
    """
    cell = _SIMPLE_CHARS.get(char)
    if cell is not None:
        return cell
    if char == "W":
        return Cell.beard(beard_timer)
    if len(char) == 1 and char in TRAMPOLINE_IDS:
        return Cell.trampoline(char)
    if len(char) == 1 and char in TARGET_IDS:
        return Cell.target(char)
    raise InvalidCharacterError(char)


def cell_to_char(cell: Cell) -> str:
    """Convert a cell back into its map character."""
    kind = cell.kind
    if kind == CellKind.EMPTY:
        return " "
    if kind == CellKind.WALL:
        return "#"
    if kind == CellKind.EARTH:
        return "."
    if kind == CellKind.ROBOT:
        return "R"
    if kind == CellKind.ROCK:
        return "@" if cell.rock_type == RockType.HIGHER_ORDER else "*"
    if kind == CellKind.LAMBDA:
        return "\\"
    if kind == CellKind.LIFT:
        return "O" if cell.lift_state == LiftState.OPEN else "L"
    if kind in (CellKind.TRAMPOLINE, CellKind.TARGET):
        return cell.ident
    if kind == CellKind.BEARD:
        return "W"
    if kind == CellKind.RAZOR:
        return "!"
    raise ValueError(f"Unhandled cell kind: {kind}")
