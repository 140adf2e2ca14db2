from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from lambdamine import TickEngine, StepResult, load_level
from lambdamine.core.actions import Action
from lambdamine.core.types import Progress, Verdict
from lambdamine.world import LevelDescriptor, WorldSnapshot

from infra.logger import get_logger

log = get_logger(__name__)


@dataclass
class GameRecord:
    """Summary of one finished game."""
    level_name: str
    verdict: Verdict
    lambdas: int
    moves: int
    ticks: int
    route: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level_name": self.level_name,
            "verdict": self.verdict.to_dict(),
            "lambdas": self.lambdas,
            "moves": self.moves,
            "ticks": self.ticks,
            "route": self.route,
        }

    @classmethod
    def from_snapshot(cls, snapshot: WorldSnapshot) -> GameRecord:
        return cls(
            level_name=snapshot.level.name,
            verdict=snapshot.verdict,
            lambdas=snapshot.lambdas,
            moves=snapshot.moves,
            ticks=snapshot.tick,
            route=snapshot.route,
        )


class GameRunner:
    """
    Session driver: plays a list of level files one after another.

    Meta-actions are handled here, outside the engine:
    - RESTART reloads the current level from its file and starts over
    - SKIP moves on to the next level
    Any other terminal verdict leaves the finished snapshot in place until
    ``advance()`` is called.
    """

    def __init__(
        self,
        level_paths: Sequence[Union[str, Path]],
        record_dir: Union[str, Path, None] = None,
    ):
        if not level_paths:
            raise ValueError("GameRunner needs at least one level")
        self.level_paths: List[Path] = [Path(p) for p in level_paths]
        self.record_dir = Path(record_dir) if record_dir is not None else None

        self.engine = TickEngine()
        self.records: List[GameRecord] = []
        self.index = 0
        self._level: Optional[LevelDescriptor] = None
        self._snapshot: Optional[WorldSnapshot] = None
        self._last: Optional[StepResult] = None

        self._start_level()
        log.info("GameRunner initialized with %d level(s)", len(self.level_paths))

    # ------------------------------------------------------------------#
    # Core API
    # ------------------------------------------------------------------#
    @property
    def snapshot(self) -> Optional[WorldSnapshot]:
        return self._snapshot

    @property
    def level(self) -> Optional[LevelDescriptor]:
        return self._level

    @property
    def last_result(self) -> Optional[StepResult]:
        return self._last

    @property
    def current_path(self) -> Optional[Path]:
        if self.finished:
            return None
        return self.level_paths[self.index]

    @property
    def finished(self) -> bool:
        """True once every level has been played or skipped."""
        return self.index >= len(self.level_paths)

    def step(self, action: Action) -> StepResult:
        """
        Apply one action to the current level.

        Raises:
            RuntimeError: If the session is over
            EngineInvariantError: If the current game already ended
        """
        if self._snapshot is None:
            raise RuntimeError("No level in progress")

        result = self.engine.step(self._snapshot, action)
        self._snapshot = result.snapshot
        self._last = result

        if result.done:
            self._finish(result.snapshot)
            progress = result.verdict.progress
            if progress == Progress.RESTART:
                log.info("Restarting %s", self._level.name)
                self._start_level()
            elif progress == Progress.SKIP:
                log.info("Skipping %s", self._level.name)
                self.advance()

        return result

    def play(self, actions: Iterable[Action]) -> WorldSnapshot:
        """
        Feed actions to the current level until they run out or the game ends.

        Returns:
            The last snapshot reached
        """
        for action in actions:
            if self._snapshot is None or self._snapshot.is_terminal:
                break
            self.step(action)
        return self._snapshot

    def advance(self) -> None:
        """Move on to the next level (or end the session)."""
        self.index += 1
        if self.finished:
            self._level = None
            self._snapshot = None
            log.info("Session finished: %d game(s) recorded", len(self.records))
            return
        self._start_level()

    # ------------------------------------------------------------------#
    # Helpers
    # ------------------------------------------------------------------#
    def _start_level(self) -> None:
        # Always reload from source so a restart sees the file as authored
        path = self.level_paths[self.index]
        self._level = load_level(path).unwrap()
        self._snapshot = self.engine.initialize(self._level)
        self._last = None

    def _finish(self, snapshot: WorldSnapshot) -> None:
        record = GameRecord.from_snapshot(snapshot)
        self.records.append(record)
        log.info("Game over on %s: %s after %d move(s)", record.level_name, record.verdict, record.moves)
        if self.record_dir is not None:
            self._write_record(record, snapshot)

    def _write_record(self, record: GameRecord, snapshot: WorldSnapshot) -> Path:
        self.record_dir.mkdir(parents=True, exist_ok=True)
        stem = Path(record.level_name).stem
        path = self.record_dir / f"{stem}-{len(self.records):03d}.json"
        payload = {"record": record.to_dict(), "final": snapshot.to_dict()}
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        log.debug("Wrote game record to %s", path)
        return path
