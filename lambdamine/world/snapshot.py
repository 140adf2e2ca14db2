"""
WorldSnapshot - One frame of the simulated mine.

A snapshot is the unit the tick engine transitions. It is never mutated
once handed out: the engine derives the next frame with ``evolve()``,
which copies the grid and the target indexes so two snapshots never share
mutable state.
"""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .grid import Grid
from .level import LevelDescriptor
from ..core.actions import Action, format_route
from ..core.objects import char_to_cell, is_lambda_like, is_lift_open
from ..core.types import CellKind, Position, Verdict, RUNNING


@dataclass
class WorldSnapshot:
    """
    Complete world state at one tick.

    Attributes:
        level: Static descriptor this game was started from
        grid: Current grid (holds exactly one Robot and one Lift cell)
        robot: Robot position
        lift: Lift position
        tick: Number of ticks applied so far
        air: Submerged ticks the robot can still survive
        water: Current water row; rows at or below it are submerged
        targets: Target id -> target position (consumed targets are removed)
        target_sources: Target id -> positions of the trampolines leading there
        verdict: Progress verdict
        lambdas: Lambdas collected so far
        razors: Razors held
        moves: Actions resolved so far
        history: Every action received, in order (display/replay only)
    """
    level: LevelDescriptor
    grid: Grid
    robot: Position
    lift: Position
    tick: int = 0
    air: int = 0
    water: int = 0
    targets: Dict[str, Position] = field(default_factory=dict)
    target_sources: Dict[str, List[Position]] = field(default_factory=dict)
    verdict: Verdict = RUNNING
    lambdas: int = 0
    razors: int = 0
    moves: int = 0
    history: List[Action] = field(default_factory=list)

    @classmethod
    def from_level(cls, level: LevelDescriptor) -> WorldSnapshot:
        """
        Create the initial snapshot of a level.

        Robot and lift are located by scanning the grid; the target indexes
        are built from the level's trampoline mapping.

        Raises:
            ValueError: If the grid lacks exactly one robot or one lift
        """
        grid = level.grid.copy()
        robots = grid.find(CellKind.ROBOT)
        lifts = grid.find(CellKind.LIFT)
        if len(robots) != 1:
            raise ValueError(f"Level {level.name} must contain exactly one robot, found {len(robots)}")
        if len(lifts) != 1:
            raise ValueError(f"Level {level.name} must contain exactly one lift, found {len(lifts)}")

        targets: Dict[str, Position] = {
            cell.ident: pos for pos, cell in grid.items() if cell.kind == CellKind.TARGET
        }
        target_sources: Dict[str, List[Position]] = {}
        for pos, cell in grid.items():
            if cell.kind != CellKind.TRAMPOLINE:
                continue
            dest = level.trampolines.get(cell.ident)
            if dest is not None:
                target_sources.setdefault(dest, []).append(pos)

        return cls(
            level=level,
            grid=grid,
            robot=robots[0],
            lift=lifts[0],
            tick=0,
            air=level.waterproof,
            water=level.water,
            targets=targets,
            target_sources=target_sources,
            verdict=RUNNING,
            lambdas=0,
            razors=level.razors,
            moves=0,
            history=[],
        )

    # ========================================================================
    # DERIVATION
    # ========================================================================

    def evolve(self, **changes: Any) -> WorldSnapshot:
        """
        Return a new snapshot with some fields replaced.

        Mutable containers that are not replaced are copied, so the result
        never aliases this snapshot.
        """
        changes.setdefault("grid", self.grid.copy())
        changes.setdefault("targets", dict(self.targets))
        changes.setdefault(
            "target_sources", {k: list(v) for k, v in self.target_sources.items()}
        )
        changes.setdefault("history", list(self.history))
        return dataclasses.replace(self, **changes)

    def clone(self) -> WorldSnapshot:
        """Independent copy of this snapshot."""
        return self.evolve()

    # ========================================================================
    # QUERIES
    # ========================================================================

    @property
    def is_terminal(self) -> bool:
        return self.verdict.is_terminal

    @property
    def submerged(self) -> bool:
        """True if the robot's row is at or below the water row."""
        return self.robot[1] <= self.water

    @property
    def route(self) -> str:
        """Action history as a route string."""
        return format_route(self.history)

    @property
    def required(self) -> int:
        """
        Lambdas needed to open the lift.

        The level quota, capped by what is still collectible: lambdas taken by
        a falling higher-order rock no longer count against the robot.
        """
        return min(self.level.lambdas, self.lambdas + self.grid.count(is_lambda_like))

    @property
    def lift_open(self) -> bool:
        # The robot can only be standing on the lift if it is open
        return self.robot == self.lift or is_lift_open(self.grid.get(self.lift))

    # ========================================================================
    # SERIALIZATION
    # ========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize snapshot to dictionary.

        Returns:
            JSON-serializable dictionary of the complete frame
        """
        return {
            "level": self.level.to_dict(),
            "map": self.grid.to_lines(),
            "robot": list(self.robot),
            "lift": list(self.lift),
            "tick": self.tick,
            "air": self.air,
            "water": self.water,
            "targets": {k: list(v) for k, v in self.targets.items()},
            "target_sources": {k: [list(p) for p in v] for k, v in self.target_sources.items()},
            "verdict": self.verdict.to_dict(),
            "lambdas": self.lambdas,
            "razors": self.razors,
            "moves": self.moves,
            "history": [a.to_dict() for a in self.history],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> WorldSnapshot:
        """
        Deserialize a snapshot from dictionary.

        Args:
            data: Dictionary from to_dict()

        Returns:
            Reconstructed WorldSnapshot
        """
        level = LevelDescriptor.from_dict(data["level"])
        rows = [
            [char_to_cell(ch, level.beard_timer) for ch in line]
            for line in reversed(data["map"])
        ]
        return cls(
            level=level,
            grid=Grid.from_rows(rows),
            robot=tuple(data["robot"]),
            lift=tuple(data["lift"]),
            tick=data["tick"],
            air=data["air"],
            water=data["water"],
            targets={k: tuple(v) for k, v in data["targets"].items()},
            target_sources={k: [tuple(p) for p in v] for k, v in data["target_sources"].items()},
            verdict=Verdict.from_dict(data["verdict"]),
            lambdas=data["lambdas"],
            razors=data["razors"],
            moves=data["moves"],
            history=[Action.from_dict(a) for a in data["history"]],
        )

    def to_json(self, filepath: Optional[str] = None, indent: int = 2) -> str:
        """
        Serialize to JSON.

        Args:
            filepath: If provided, write to file
            indent: JSON indentation (default: 2)

        Returns:
            JSON string
        """
        json_str = json.dumps(self.to_dict(), indent=indent, ensure_ascii=True)

        if filepath:
            with open(filepath, "w") as f:
                f.write(json_str)

        return json_str

    @classmethod
    def from_json(cls, json_str: Optional[str] = None, filepath: Optional[str] = None) -> WorldSnapshot:
        """
        Deserialize from JSON.

        Raises:
            ValueError: If neither json_str nor filepath provided
        """
        if filepath:
            with open(filepath, "r") as f:
                json_str = f.read()

        if not json_str:
            raise ValueError("Must provide either json_str or filepath")

        return cls.from_dict(json.loads(json_str))

    def __str__(self) -> str:
        """String representation."""
        return (f"WorldSnapshot(level={self.level.name}, tick={self.tick}, "
                f"robot={self.robot}, lambdas={self.lambdas}/{self.level.lambdas}, "
                f"verdict={self.verdict})")
