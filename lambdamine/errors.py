"""
Error types for the mine simulation.

Two families:
- Level errors: a level description could not be turned into a descriptor.
  The loader reports them as values (see ``loader.LevelResult``);
  ``LevelLoadError`` is the exception form for callers that unwrap.
- Engine invariant violations: programming errors such as stepping a
  finished game. They are never caught inside the engine.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class LevelErrorKind(Enum):
    """Ways a level description can be malformed."""
    INVALID_CHARACTER = "invalid_character"
    INVALID_METADATA = "invalid_metadata"
    MISSING_ROBOT = "missing_robot"
    MISSING_LIFT = "missing_lift"
    UNKNOWN_TARGET = "unknown_target"
    FILE_NOT_FOUND = "file_not_found"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class LevelError:
    """
    Structured description of a level error.

    Attributes:
        kind: Machine-readable error kind
        level_name: Name of the offending level
        message: Human-readable message
        character: Offending map character (INVALID_CHARACTER only)
        line: Offending line of the level text, if any
    """
    kind: LevelErrorKind
    level_name: str
    message: str
    character: Optional[str] = None
    line: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.name,
            "level_name": self.level_name,
            "message": self.message,
            "character": self.character,
            "line": self.line,
        }

    def __str__(self) -> str:
        return f"{self.level_name}: {self.message}"


class LevelLoadError(Exception):
    """Raised by ``LevelResult.unwrap()`` for a failed load."""

    def __init__(self, error: LevelError):
        self.error = error
        super().__init__(str(error))


class EngineInvariantError(RuntimeError):
    """The engine was driven into a state it must never reach."""
