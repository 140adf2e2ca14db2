"""
Level loader - turns the textual level format into a LevelDescriptor.

Format:
    <map lines>          rectangular block of map characters (top row first)
    <blank line>
    Growth N             metadata lines, any order, all optional
    Razors N
    Water N
    Flooding N
    Waterproof N
    Trampoline A targets 1

Loading never raises for a malformed level: the result is a ``LevelResult``
holding either a descriptor or a ``LevelError``. Call ``unwrap()`` to get
the descriptor or a ``LevelLoadError``.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from infra.logger import get_logger

from .config import (
    DEFAULT_GROWTH,
    DEFAULT_RAZORS,
    DEFAULT_WATER,
    DEFAULT_FLOODING,
    DEFAULT_WATERPROOF,
    LEVEL_SUFFIX,
    METADATA_KEYS,
)
from .core.objects import InvalidCharacterError, TARGET_IDS, TRAMPOLINE_IDS, char_to_cell, is_lambda_like
from .core.types import Cell, CellKind
from .errors import LevelError, LevelErrorKind, LevelLoadError
from .world import Grid, LevelDescriptor

log = get_logger(__name__)


class LevelMetadata(BaseModel):
    """Validated metadata block of a level file."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    growth: int = Field(default=DEFAULT_GROWTH, ge=1, description="Ticks between beard growth passes")
    razors: int = Field(default=DEFAULT_RAZORS, ge=0, description="Razors held at start")
    water: int = Field(default=DEFAULT_WATER, ge=0, description="Initial water row")
    flooding: int = Field(default=DEFAULT_FLOODING, ge=0, description="Ticks between water rises")
    waterproof: int = Field(default=DEFAULT_WATERPROOF, ge=0, description="Submerged ticks survivable")
    trampolines: Dict[str, str] = Field(default_factory=dict, description="Trampoline id -> target id")


@dataclass(frozen=True)
class LevelResult:
    """
    Outcome of loading a level: exactly one of ``level`` / ``error`` is set.
    """
    level: Optional[LevelDescriptor] = None
    error: Optional[LevelError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> LevelDescriptor:
        """
        Return the descriptor.

        Raises:
            LevelLoadError: If loading failed
        """
        if self.error is not None:
            raise LevelLoadError(self.error)
        return self.level

    @staticmethod
    def success(level: LevelDescriptor) -> LevelResult:
        return LevelResult(level=level)

    @staticmethod
    def fail(
        kind: LevelErrorKind,
        level_name: str,
        message: str,
        character: Optional[str] = None,
        line: Optional[str] = None,
    ) -> LevelResult:
        error = LevelError(kind=kind, level_name=level_name, message=message, character=character, line=line)
        log.warning("Level load failed: %s", error)
        return LevelResult(error=error)


# ============================================================================
# PARSING
# ============================================================================

def split_sections(text: str) -> Tuple[List[str], List[str]]:
    """
    Split level text into map lines and non-blank metadata lines.

    The map ends at the first blank line.
    """
    lines = text.splitlines()
    for i, line in enumerate(lines):
        if line == "":
            return lines[:i], [m for m in lines[i + 1:] if m.strip()]
    return lines, []


def _parse_metadata(lines: List[str], name: str) -> Union[LevelMetadata, LevelResult]:
    raw: Dict[str, object] = {}
    trampolines: Dict[str, str] = {}

    for line in lines:
        tokens = line.split()
        key = tokens[0]
        if key in METADATA_KEYS:
            if len(tokens) != 2:
                return LevelResult.fail(
                    LevelErrorKind.INVALID_METADATA, name, f"Expected '{key} N', got {line!r}", line=line
                )
            # Later lines override earlier ones
            raw[key.lower()] = tokens[1]
        elif key == "Trampoline":
            if (len(tokens) != 4 or tokens[2] != "targets"
                    or len(tokens[1]) != 1 or tokens[1] not in TRAMPOLINE_IDS
                    or len(tokens[3]) != 1 or tokens[3] not in TARGET_IDS):
                return LevelResult.fail(
                    LevelErrorKind.INVALID_METADATA, name,
                    f"Expected 'Trampoline <A-I> targets <0-9>', got {line!r}", line=line,
                )
            trampolines[tokens[1]] = tokens[3]
        else:
            log.debug("Level %s: ignoring metadata line %r", name, line)

    try:
        return LevelMetadata(trampolines=trampolines, **raw)
    except ValidationError as exc:
        first = exc.errors()[0]
        field_name = str(first["loc"][0]) if first.get("loc") else "metadata"
        key = field_name.capitalize()
        offending = next((m for m in lines if m.split()[0] == key), None)
        return LevelResult.fail(
            LevelErrorKind.INVALID_METADATA, name, f"Invalid {key} value: {first['msg']}", line=offending
        )


def _parse_map(lines: List[str], name: str, beard_timer: int) -> Union[Grid, LevelResult]:
    rows: List[List[Cell]] = []
    # Last authored line is row 1
    for line in reversed(lines):
        row: List[Cell] = []
        for ch in line:
            try:
                row.append(char_to_cell(ch, beard_timer))
            except InvalidCharacterError as exc:
                return LevelResult.fail(
                    LevelErrorKind.INVALID_CHARACTER, name,
                    f"Invalid map character {exc.char!r}", character=exc.char, line=line,
                )
        rows.append(row)
    return Grid.from_rows(rows)


def parse_level(text: str, name: str = "<string>") -> LevelResult:
    """
    Parse level text into a descriptor.

    Args:
        text: Full level text
        name: Level name used in errors and in the descriptor

    Returns:
        LevelResult with the descriptor or the first error found
    """
    map_lines, meta_lines = split_sections(text)

    metadata = _parse_metadata(meta_lines, name)
    if isinstance(metadata, LevelResult):
        return metadata

    if not map_lines or not any(map_lines):
        return LevelResult.fail(LevelErrorKind.MISSING_ROBOT, name, "Level has no map")

    grid = _parse_map(map_lines, name, max(metadata.growth - 1, 0))
    if isinstance(grid, LevelResult):
        return grid

    robots = grid.find(CellKind.ROBOT)
    if len(robots) != 1:
        return LevelResult.fail(
            LevelErrorKind.MISSING_ROBOT, name, f"Expected exactly one robot, found {len(robots)}"
        )
    lifts = grid.find(CellKind.LIFT)
    if len(lifts) != 1:
        return LevelResult.fail(
            LevelErrorKind.MISSING_LIFT, name, f"Expected exactly one lift, found {len(lifts)}"
        )

    targets = {grid.get(p).ident for p in grid.find(CellKind.TARGET)}
    for pos in grid.find(CellKind.TRAMPOLINE):
        ident = grid.get(pos).ident
        dest = metadata.trampolines.get(ident)
        if dest is None or dest not in targets:
            return LevelResult.fail(
                LevelErrorKind.UNKNOWN_TARGET, name,
                f"Trampoline {ident} at {pos} has no target on the map", character=ident,
            )

    level = LevelDescriptor(
        name=name,
        grid=grid,
        trampolines=dict(metadata.trampolines),
        growth=metadata.growth,
        razors=metadata.razors,
        lambdas=grid.count(is_lambda_like),
        water=metadata.water,
        flooding=metadata.flooding,
        waterproof=metadata.waterproof,
    )
    log.debug("Parsed %s", level)
    return LevelResult.success(level)


def load_level(path: Union[str, Path]) -> LevelResult:
    """
    Load a level file; the level is named after the file.

    Returns:
        LevelResult (FILE_NOT_FOUND if the file does not exist)
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return LevelResult.fail(LevelErrorKind.FILE_NOT_FOUND, path.name, f"Level file not found: {path}")
    return parse_level(text, path.name)


def list_levels(directory: Union[str, Path]) -> List[Path]:
    """Level files in ``directory``, sorted by name."""
    return sorted(Path(directory).glob(f"*{LEVEL_SUFFIX}"))
