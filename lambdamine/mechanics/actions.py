"""
ActionResolver - Player action resolution.

This module handles:
- Validating the requested move against the pre-tick grid
- Excavation, collection and rock pushes
- Teleporting through trampolines
- Razor use
- Generating action logs
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..core.actions import Action
from ..core.types import CellKind, Direction, Position, EMPTY, ROBOT, SIMPLE_ROCK, OPEN_LIFT
from ..core.objects import is_beard, is_empty, is_lift_closed, is_simple_rock

if TYPE_CHECKING:
    from ..world.snapshot import WorldSnapshot


@dataclass
class ActionResult:
    """
    Result of resolving the player's action for one tick.

    Attributes:
        action: The requested action
        success: Whether the action changed anything
        old_pos: Robot position before the action
        new_pos: Robot position after the action (same as old if rejected)
        entered_lift: True if the robot moved onto an open lift this tick
        failure_reason: Machine-readable reason code when the action is rejected
        log: Human-readable description
    """
    action: Action
    success: bool
    old_pos: Position
    new_pos: Position
    entered_lift: bool = False
    failure_reason: Optional[str] = None
    log: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize action result to a plain dict."""
        return {
            "action": self.action.name,
            "success": self.success,
            "old_pos": self.old_pos,
            "new_pos": self.new_pos,
            "entered_lift": self.entered_lift,
            "failure_reason": self.failure_reason,
            "log": self.log,
        }


class ActionResolver:
    """
    Stateless resolver for the player's action.

    Reads come from the pre-tick snapshot (``before``); writes go to the
    engine's working copy (``after``), which starts as a copy of ``before``.
    """

    def resolve(self, before: WorldSnapshot, after: WorldSnapshot, action: Action) -> ActionResult:
        """
        Resolve one non-meta action.

        The action is always appended to the history and counted as a
        move, whether or not it changed anything.

        Args:
            before: Pre-tick snapshot (read only)
            after: Working copy (modified in-place)
            action: Requested action

        Returns:
            ActionResult describing the outcome
        """
        after.history.append(action)
        after.moves += 1

        self._open_lift_if_ready(after, before.lambdas)

        if action == Action.WAIT:
            result = self._success(action, before.robot, before.robot, "Robot waits")
        elif action == Action.USE_RAZOR:
            result = self._use_razor(before, after, action)
        elif action.direction is not None:
            result = self._move(before, after, action, action.direction)
        else:
            raise ValueError(f"Action {action.name} cannot be resolved as a robot action")

        # Collecting the last lambda opens the lift in the same tick
        self._open_lift_if_ready(after, after.lambdas)
        return result

    # ========================================================================
    # MOVEMENT
    # ========================================================================

    def _move(self, before: WorldSnapshot, after: WorldSnapshot, action: Action, direction: Direction) -> ActionResult:
        origin = before.robot
        dest = direction.apply(origin)
        # The working grid differs from the pre-tick grid only by a lift flip
        cell = after.grid.get(dest)
        kind = cell.kind

        if kind in (CellKind.EMPTY, CellKind.EARTH):
            verb = "digs" if kind == CellKind.EARTH else "moves"
            self._relocate(after, dest)
            return self._success(action, origin, dest, f"Robot {verb} {direction.name} to {dest}")

        if kind == CellKind.LAMBDA:
            self._relocate(after, dest)
            after.lambdas += 1
            return self._success(
                action, origin, dest,
                f"Robot collects a lambda at {dest} ({after.lambdas}/{after.required})",
            )

        if kind == CellKind.RAZOR:
            self._relocate(after, dest)
            after.razors += 1
            return self._success(action, origin, dest, f"Robot picks up a razor at {dest}")

        if kind == CellKind.ROCK:
            beyond = direction.apply(dest)
            if not direction.is_horizontal:
                return self._failure(action, origin, "ROCK_VERTICAL", f"Robot cannot push a rock {direction.name}")
            if not is_simple_rock(cell):
                return self._failure(action, origin, "ROCK_HIGHER_ORDER", "Robot cannot push a higher-order rock")
            if not is_empty(before.grid.get(beyond)):
                return self._failure(action, origin, "ROCK_BLOCKED", f"Rock at {dest} is blocked at {beyond}")
            after.grid.set(beyond, SIMPLE_ROCK)
            self._relocate(after, dest)
            return self._success(action, origin, dest, f"Robot pushes a rock {direction.name} to {beyond}")

        if kind == CellKind.LIFT:
            if is_lift_closed(cell):
                return self._failure(action, origin, "LIFT_CLOSED", f"Lift at {dest} is closed")
            self._relocate(after, dest)
            result = self._success(action, origin, dest, f"Robot enters the lift at {dest}")
            result.entered_lift = True
            return result

        if kind == CellKind.TRAMPOLINE:
            return self._teleport(after, action, origin, cell.ident)

        # WALL, BEARD, TARGET
        return self._failure(action, origin, "BLOCKED", f"Robot blocked by {cell} at {dest}")

    def _teleport(self, after: WorldSnapshot, action: Action, origin: Position, trampoline: str) -> ActionResult:
        target = after.level.trampolines.get(trampoline)
        if target is None or target not in after.targets:
            return self._failure(action, origin, "NO_TARGET", f"Trampoline {trampoline} leads nowhere")

        dest = after.targets.pop(target)
        for source in after.target_sources.pop(target, []):
            after.grid.set(source, EMPTY)
        after.grid.set(dest, EMPTY)
        self._relocate(after, dest)
        return self._success(action, origin, dest, f"Robot jumps on trampoline {trampoline} to target {target} at {dest}")

    def _relocate(self, after: WorldSnapshot, dest: Position) -> None:
        """Move the robot cell, restoring the lift if the robot was standing on it."""
        origin = after.robot
        after.grid.set(origin, OPEN_LIFT if origin == after.lift else EMPTY)
        after.grid.set(dest, ROBOT)
        after.robot = dest

    # ========================================================================
    # TOOLS
    # ========================================================================

    def _use_razor(self, before: WorldSnapshot, after: WorldSnapshot, action: Action) -> ActionResult:
        origin = before.robot
        if after.razors <= 0:
            return self._failure(action, origin, "NO_RAZORS", "Robot has no razors")

        after.razors -= 1
        cut = 0
        for pos in before.grid.neighbors(origin):
            if is_beard(before.grid.get(pos)):
                after.grid.set(pos, EMPTY)
                cut += 1
        return self._success(action, origin, origin, f"Robot uses a razor and cuts {cut} beard cell(s)")

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _open_lift_if_ready(self, after: WorldSnapshot, collected: int) -> None:
        if collected >= after.required and is_lift_closed(after.grid.get(after.lift)):
            after.grid.set(after.lift, OPEN_LIFT)

    @staticmethod
    def _success(action: Action, old_pos: Position, new_pos: Position, log: str) -> ActionResult:
        return ActionResult(action=action, success=True, old_pos=old_pos, new_pos=new_pos, log=log)

    @staticmethod
    def _failure(action: Action, pos: Position, reason: str, log: str) -> ActionResult:
        return ActionResult(
            action=action,
            success=False,
            old_pos=pos,
            new_pos=pos,
            failure_reason=reason,
            log=log,
        )
