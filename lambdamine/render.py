"""
Text rendering of a snapshot.

The renderer only reads snapshots; it never feeds anything back into the
engine. Output is plain text unless ``color=True``, which wraps map cells
in ANSI SGR sequences for a terminal.
"""

from __future__ import annotations
from typing import Dict, List, Optional

from .core.types import Cell, CellKind, LiftState, Progress
from .world import WorldSnapshot

# ANSI SGR sequences
RESET = "\033[0m"
WATER_COLOR = "\033[94m"            # bright blue, every cell at or below the water row
OBJECT_COLORS: Dict[CellKind, str] = {
    CellKind.ROBOT: "\033[34m",
    CellKind.ROCK: "\033[91m",
    CellKind.LAMBDA: "\033[36m",
    CellKind.TRAMPOLINE: "\033[95m",
    CellKind.TARGET: "\033[35m",
}
LIFT_COLORS: Dict[LiftState, str] = {
    LiftState.CLOSED: "\033[32m",
    LiftState.OPEN: "\033[92m",
}


def cell_color(cell: Cell) -> str:
    """SGR sequence for a cell, or "" for cells drawn in the default colour."""
    if cell.kind == CellKind.LIFT:
        return LIFT_COLORS[cell.lift_state]
    return OBJECT_COLORS.get(cell.kind, "")


def render_grid(
    snapshot: WorldSnapshot,
    water_char: Optional[str] = None,
    color: bool = False,
) -> List[str]:
    """
    Map lines, top row first.

    Args:
        snapshot: Snapshot to draw
        water_char: If given, empty cells at or below the water row use it
        color: Wrap cells in ANSI colour sequences
    """
    grid = snapshot.grid
    lines = grid.to_lines()
    flood_chars = bool(water_char) and snapshot.water > 0
    if not color and not flood_chars:
        return lines

    drawn = []
    for y in range(grid.height, 0, -1):
        line = lines[grid.to_screen_y(y)]
        flooded = y <= snapshot.water
        chars = []
        for x, ch in enumerate(line, start=1):
            cell = grid.get((x, y))
            if flood_chars and flooded and cell.kind == CellKind.EMPTY:
                ch = water_char
            if color:
                code = WATER_COLOR if flooded else cell_color(cell)
                if code:
                    ch = f"{code}{ch}{RESET}"
            chars.append(ch)
        drawn.append("".join(chars))
    return drawn


def status_line(snapshot: WorldSnapshot) -> str:
    level = snapshot.level
    parts = [
        f"Tick {snapshot.tick}",
        f"Lambdas {snapshot.lambdas}/{snapshot.required}",
        f"Razors {snapshot.razors}",
        f"Moves {snapshot.moves}",
    ]
    if level.water or level.flooding:
        parts.append(f"Water {snapshot.water}")
    parts.append(str(snapshot.verdict))
    return " | ".join(parts)


def render_text(
    snapshot: WorldSnapshot,
    *,
    legend: bool = True,
    water_char: Optional[str] = None,
    color: bool = False,
) -> str:
    """
    Render a snapshot as text.

    Layout:
        <map rows, top first>
        Trampolines: A -> 1, B -> 1      (legend, only if the level has any)
        Air: 7                           (only while submerged)
        Tick 3 | Lambdas 1/2 | Razors 0 | Moves 3 | Running

    Only map rows are coloured when ``color`` is set.

    Returns:
        Multi-line string without a trailing newline
    """
    lines = render_grid(snapshot, water_char, color)

    trampolines = snapshot.level.trampolines
    if legend and trampolines:
        pairs = ", ".join(f"{t} -> {trampolines[t]}" for t in sorted(trampolines))
        lines.append(f"Trampolines: {pairs}")

    if snapshot.submerged and snapshot.verdict.progress == Progress.RUNNING:
        lines.append(f"Air: {snapshot.air}")

    lines.append(status_line(snapshot))
    return "\n".join(lines)
