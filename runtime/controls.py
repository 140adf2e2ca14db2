"""
Keyboard controls for the interactive player.

Keys follow the usual WASD and vi layouts and are case sensitive. Route
symbols ("U", "L", "R", ...) are not keys; replay a route with
``lambdamine-play play --route``.
"""

from __future__ import annotations
from typing import Dict, List, Optional

from lambdamine.core.actions import Action

KEY_MAP: Dict[str, Action] = {
    # WASD
    "w": Action.UP,
    "a": Action.LEFT,
    "s": Action.DOWN,
    "d": Action.RIGHT,
    # vi
    "k": Action.UP,
    "h": Action.LEFT,
    "j": Action.DOWN,
    "l": Action.RIGHT,
    # Other
    ".": Action.WAIT,
    " ": Action.WAIT,
    "r": Action.USE_RAZOR,
    "q": Action.ABORT,
    "n": Action.SKIP,
    "x": Action.RESTART,
}


def action_for_key(key: str) -> Optional[Action]:
    """Action bound to ``key``, or None if the key is not bound."""
    return KEY_MAP.get(key)


def actions_for_line(line: str) -> List[Action]:
    """
    Actions for one line of typed input; unbound keys are dropped.

    An empty line means a single wait.
    """
    if line == "":
        return [Action.WAIT]
    actions = []
    for key in line:
        action = action_for_key(key)
        if action is not None:
            actions.append(action)
    return actions


def help_text() -> str:
    return (
        "Move: w/a/s/d or k/h/j/l   Wait: . or space   Razor: r\n"
        "Abort: q   Skip level: n   Restart: x   (replay a route with --route)"
    )
