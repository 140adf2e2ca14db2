"""
lambdamine - deterministic tick engine for the lambda mine puzzle.

Quick start:
    from lambdamine import load_level, initialize, step, Action

    snapshot = initialize(load_level("levels/intro.map").unwrap())
    snapshot, verdict = step(snapshot, Action.LEFT)
"""

from .core import (
    Action,
    Cell,
    CellKind,
    Direction,
    LossReason,
    Position,
    Progress,
    Verdict,
    format_route,
    parse_route,
)
from .engine import StepResult, TickEngine, initialize, step
from .errors import EngineInvariantError, LevelError, LevelErrorKind, LevelLoadError
from .loader import LevelMetadata, LevelResult, list_levels, load_level, parse_level
from .render import render_text
from .world import Grid, LevelDescriptor, WorldSnapshot

__version__ = "0.1.0"

__all__ = [
    "Action",
    "Cell",
    "CellKind",
    "Direction",
    "LossReason",
    "Position",
    "Progress",
    "Verdict",
    "format_route",
    "parse_route",
    "StepResult",
    "TickEngine",
    "initialize",
    "step",
    "EngineInvariantError",
    "LevelError",
    "LevelErrorKind",
    "LevelLoadError",
    "LevelMetadata",
    "LevelResult",
    "list_levels",
    "load_level",
    "parse_level",
    "render_text",
    "Grid",
    "LevelDescriptor",
    "WorldSnapshot",
]
