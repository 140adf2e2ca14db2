"""
Progress evaluation for the mine simulation.

This module provides pure logic for determining the verdict of a tick:
- Meta-actions (abort, restart, skip)
- Crushing by a falling rock
- Drowning
- Reaching the open lift with enough lambdas
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict

from ..core.actions import Action
from ..core.types import LossReason, Verdict, RUNNING, WIN, ABORT, RESTART, SKIP


@dataclass
class ProgressResult:
    """
    Result of a progress check.

    Attributes:
        verdict: Verdict for the tick
        reason: Human-readable explanation of the outcome
    """
    verdict: Verdict
    reason: str

    @property
    def is_game_over(self) -> bool:
        """Check if the game has ended."""
        return self.verdict.is_terminal

    def __str__(self) -> str:
        """Human-readable representation."""
        if not self.is_game_over:
            return "Game in progress"
        return f"{self.verdict}: {self.reason}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize progress result to a plain dict."""
        return {"verdict": self.verdict.to_dict(), "reason": self.reason}


_META_VERDICTS = {
    Action.ABORT: ABORT,
    Action.RESTART: RESTART,
    Action.SKIP: SKIP,
}


class ProgressEvaluator:
    """
    Stateless checker for end-of-tick verdicts.

    Only runs against a snapshot that was RUNNING before the tick; terminal
    verdicts are sticky and the engine refuses to step past them.

    Usage:
        evaluator = ProgressEvaluator()
        result = evaluator.check_all(crushed=False, drowned=False,
                                     entered_lift=True, lambdas=3, required=3)
        if result.is_game_over:
            print(f"Game Over: {result.reason}")
    """

    def check_meta(self, action: Action) -> ProgressResult:
        """Verdict for a meta-action; RUNNING for anything else."""
        verdict = _META_VERDICTS.get(action)
        if verdict is None:
            return ProgressResult(RUNNING, "Not a meta-action")
        return ProgressResult(verdict, f"Player requested {action.name.lower()}")

    def check_all(
        self,
        *,
        crushed: bool,
        drowned: bool,
        entered_lift: bool,
        lambdas: int,
        required: int,
    ) -> ProgressResult:
        """
        Check all physical end conditions in step order.

        The first terminal verdict in step order wins:
        1. Crushed by a rock (rock physics)
        2. Drowned (water accounting)
        3. Win (entered the open lift with the quota met)

        Returns:
            ProgressResult for the tick
        """
        result = self.check_crushed(crushed)
        if result.is_game_over:
            return result

        result = self.check_drowned(drowned)
        if result.is_game_over:
            return result

        result = self.check_win(entered_lift, lambdas, required)
        if result.is_game_over:
            return result

        return ProgressResult(RUNNING, "Game ongoing")

    def check_crushed(self, crushed: bool) -> ProgressResult:
        if crushed:
            return ProgressResult(Verdict.loss(LossReason.CRUSHED_BY_ROCK), "Robot crushed by a falling rock")
        return ProgressResult(RUNNING, "Robot not crushed")

    def check_drowned(self, drowned: bool) -> ProgressResult:
        if drowned:
            return ProgressResult(Verdict.loss(LossReason.DROWNED), "Robot ran out of air")
        return ProgressResult(RUNNING, "Robot has air")

    def check_win(self, entered_lift: bool, lambdas: int, required: int) -> ProgressResult:
        """
        Win only on a tick where the robot entered the open lift with the
        lambda quota met at the moment of entry.
        """
        if entered_lift and lambdas >= required:
            return ProgressResult(WIN, f"Robot reached the lift with {lambdas}/{required} lambdas")
        return ProgressResult(RUNNING, f"Lambdas {lambdas}/{required}")
