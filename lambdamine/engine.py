"""
TickEngine - Main simulation interface.

This is the primary API of the mine simulation. It turns one snapshot plus
one action into the next snapshot and its verdict.

Usage:
    from lambdamine import initialize, step, Action
    from lambdamine.loader import load_level

    level = load_level("levels/intro.map").unwrap()
    snapshot = initialize(level)

    while not snapshot.is_terminal:
        action = read_action()  # Your driver here
        snapshot, verdict = step(snapshot, action)

    print(f"Verdict: {snapshot.verdict}")

Tick order (all rules read the state left by the previous rule):
    1. Meta-actions (abort/restart/skip) end the game, no physics
    2. Action resolution
    3. Beard growth
    4. Rock physics
    5. Water and air accounting
    6. Win check
    7. Tick counter increments
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple

from infra.logger import get_logger

from .core.actions import Action
from .core.types import Verdict
from .errors import EngineInvariantError
from .mechanics import (
    ActionResolver,
    ActionResult,
    BeardGrowth,
    GrowthResult,
    RockPhysics,
    RockResult,
    WaterSystem,
    WaterResult,
    ProgressEvaluator,
    ProgressResult,
)
from .world import LevelDescriptor, WorldSnapshot

log = get_logger(__name__)


@dataclass
class StepResult:
    """
    Everything produced by one tick.

    Attributes:
        snapshot: The next snapshot
        verdict: Its verdict (same as snapshot.verdict)
        progress: Progress check with a readable reason
        action: Action resolution outcome (None for meta-actions)
        growth: Beard growth outcome (None for meta-actions)
        rocks: Rock physics outcome (None for meta-actions)
        water: Water accounting outcome (None for meta-actions)
        logs: Human-readable logs in execution order
    """
    snapshot: WorldSnapshot
    verdict: Verdict
    progress: ProgressResult
    action: ActionResult | None = None
    growth: GrowthResult | None = None
    rocks: RockResult | None = None
    water: WaterResult | None = None
    logs: List[str] = field(default_factory=list)

    @property
    def done(self) -> bool:
        return self.verdict.is_terminal


class TickEngine:
    """
    Tick engine - orchestrates all rule systems for one tick.

    The engine holds no game state: every call takes a snapshot and returns
    a new one. The input snapshot is never modified.
    """

    def __init__(self):
        # Mechanics modules (stateless, can be reused)
        self._actions = ActionResolver()
        self._growth = BeardGrowth()
        self._rocks = RockPhysics()
        self._water = WaterSystem()
        self._progress = ProgressEvaluator()

    def initialize(self, level: LevelDescriptor) -> WorldSnapshot:
        """
        Create the starting snapshot for a level.

        Args:
            level: Level descriptor from the loader

        Returns:
            Initial snapshot (tick 0, RUNNING)
        """
        snapshot = WorldSnapshot.from_level(level)
        log.info("Level %s initialized: robot at %s, lift at %s, %d lambda(s) required",
                 level.name, snapshot.robot, snapshot.lift, level.lambdas)
        return snapshot

    def step(self, snapshot: WorldSnapshot, action: Action) -> StepResult:
        """
        Execute one tick.

        Args:
            snapshot: Current snapshot (must be RUNNING)
            action: The player's action for this tick

        Returns:
            StepResult with the next snapshot and its verdict

        Raises:
            EngineInvariantError: If the snapshot is already terminal
        """
        if snapshot.is_terminal:
            raise EngineInvariantError(
                f"Cannot step level {snapshot.level.name}: game already ended ({snapshot.verdict})"
            )

        # 1. Meta-actions short-circuit the tick
        meta = self._progress.check_meta(action)
        if meta.is_game_over:
            history = snapshot.history + [action]
            nxt = snapshot.evolve(verdict=meta.verdict, history=history)
            log.info("Level %s ended at tick %d: %s", snapshot.level.name, snapshot.tick, meta)
            return StepResult(snapshot=nxt, verdict=meta.verdict, progress=meta, logs=[meta.reason])

        level = snapshot.level
        tick = snapshot.tick + 1
        nxt = snapshot.evolve()

        # 2. Action resolution
        action_result = self._actions.resolve(snapshot, nxt, action)

        # 3. Beard growth
        growth_result = self._growth.apply(nxt.grid, tick, level.growth, level.beard_timer)

        # 4. Rock physics
        rock_result = self._rocks.apply(nxt.grid)

        # 5. Water and air
        water_result = self._water.apply(
            nxt.water, nxt.air, nxt.robot, tick, level.flooding, level.waterproof
        )
        nxt.water = water_result.water
        nxt.air = water_result.air

        # 6. Verdict
        progress = self._progress.check_all(
            crushed=rock_result.crushed,
            drowned=water_result.drowned,
            entered_lift=action_result.entered_lift,
            lambdas=nxt.lambdas,
            required=nxt.required,
        )
        nxt.verdict = progress.verdict

        # 7. Advance the clock
        nxt.tick = tick

        logs = [action_result.log]
        if growth_result.log:
            logs.append(growth_result.log)
        logs.extend(rock_result.logs)
        if water_result.log:
            logs.append(water_result.log)

        log.debug("Tick %d [%s]: %s", tick, action, " | ".join(logs))
        if progress.is_game_over:
            log.info("Level %s ended at tick %d: %s", level.name, tick, progress)

        return StepResult(
            snapshot=nxt,
            verdict=nxt.verdict,
            progress=progress,
            action=action_result,
            growth=growth_result,
            rocks=rock_result,
            water=water_result,
            logs=logs,
        )


_default_engine = TickEngine()


def initialize(level: LevelDescriptor) -> WorldSnapshot:
    """Create the starting snapshot for a level."""
    return _default_engine.initialize(level)


def step(snapshot: WorldSnapshot, action: Action) -> Tuple[WorldSnapshot, Verdict]:
    """Apply one tick; returns (next snapshot, verdict)."""
    result = _default_engine.step(snapshot, action)
    return result.snapshot, result.verdict
