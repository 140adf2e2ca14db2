import json

import pytest

from lambdamine import Action, LevelLoadError
from lambdamine.core.types import Progress
from runtime import cli
from runtime.controls import action_for_key, actions_for_line
from runtime.runner import GameRunner

from conftest import level_text

FIRST = ["#####", "#R\\L#", "#####"]
SECOND = ["####", "#RL#", "####"]


@pytest.fixture
def level_files(tmp_path):
    first = tmp_path / "a_first.map"
    second = tmp_path / "b_second.map"
    first.write_text(level_text(FIRST), encoding="utf-8")
    second.write_text(level_text(SECOND), encoding="utf-8")
    return [first, second]


# ============================================================================
# CONTROLS
# ============================================================================

@pytest.mark.parametrize(
    "key, action",
    [
        ("w", Action.UP), ("a", Action.LEFT), ("s", Action.DOWN), ("d", Action.RIGHT),
        ("k", Action.UP), ("h", Action.LEFT), ("j", Action.DOWN), ("l", Action.RIGHT),
        (".", Action.WAIT), (" ", Action.WAIT), ("r", Action.USE_RAZOR),
        ("q", Action.ABORT), ("n", Action.SKIP), ("x", Action.RESTART),
    ],
)
def test_key_bindings(key, action):
    assert action_for_key(key) == action


def test_unbound_keys():
    assert action_for_key("z") is None
    assert action_for_key("Z") is None
    assert actions_for_line("dz?d") == [Action.RIGHT, Action.RIGHT]
    assert actions_for_line("") == [Action.WAIT]


@pytest.mark.parametrize("key", ["U", "D", "L", "R", "W", "S", "A", "Q"])
def test_upper_case_keys_are_not_route_symbols(key):
    assert action_for_key(key) is None


def test_typed_route_symbols_do_not_move_the_robot():
    assert actions_for_line("LLRW") == []
    assert actions_for_line("lLdD") == [Action.RIGHT, Action.RIGHT]


# ============================================================================
# RUNNER
# ============================================================================

def test_runner_plays_and_records(level_files):
    runner = GameRunner(level_files)
    assert runner.level.name == "a_first.map"

    runner.play([Action.RIGHT, Action.RIGHT, Action.WAIT])
    assert runner.snapshot.verdict.progress == Progress.WIN
    assert len(runner.records) == 1
    record = runner.records[0]
    assert (record.level_name, record.lambdas, record.moves, record.route) == ("a_first.map", 1, 2, "RR")

    runner.advance()
    assert runner.level.name == "b_second.map"
    assert runner.snapshot.tick == 0


def test_restart_reloads_level_from_file(level_files):
    runner = GameRunner(level_files)
    runner.step(Action.RIGHT)
    level_files[0].write_text(level_text(["######", "#R \\L#", "######"]), encoding="utf-8")

    result = runner.step(Action.RESTART)
    assert result.verdict.progress == Progress.RESTART
    assert runner.records[-1].verdict.progress == Progress.RESTART
    assert runner.snapshot.tick == 0
    assert runner.snapshot.grid.width == 6
    assert runner.level.name == "a_first.map"


def test_skip_moves_to_next_level_and_ends_session(level_files):
    runner = GameRunner(level_files)
    runner.step(Action.SKIP)
    assert runner.level.name == "b_second.map"
    runner.step(Action.SKIP)
    assert runner.finished
    assert runner.snapshot is None
    assert [r.verdict.progress for r in runner.records] == [Progress.SKIP, Progress.SKIP]
    with pytest.raises(RuntimeError):
        runner.step(Action.WAIT)


def test_records_are_written_when_requested(level_files, tmp_path):
    out = tmp_path / "records"
    runner = GameRunner(level_files, record_dir=out)
    runner.play([Action.RIGHT, Action.RIGHT])
    files = sorted(out.glob("*.json"))
    assert [f.name for f in files] == ["a_first-001.json"]
    payload = json.loads(files[0].read_text(encoding="utf-8"))
    assert payload["record"]["verdict"]["progress"] == "WIN"
    assert payload["final"]["robot"] == [4, 2]


def test_runner_rejects_broken_level(tmp_path):
    broken = tmp_path / "broken.map"
    broken.write_text("#R?L#\n", encoding="utf-8")
    with pytest.raises(LevelLoadError):
        GameRunner([broken])


# ============================================================================
# CLI
# ============================================================================

@pytest.fixture
def no_logging_setup(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)


def test_cli_route_replay(level_files, capsys, no_logging_setup):
    assert cli.main(["play", str(level_files[0]), "--route", "RR"]) == 0
    out = capsys.readouterr().out
    assert "| Win" in out
    assert "Route: RR" in out


def test_cli_color_flag(level_files, capsys, no_logging_setup):
    assert cli.main(["play", str(level_files[0]), "--route", "R"]) == 0
    assert "\x1b[" not in capsys.readouterr().out

    assert cli.main(["play", str(level_files[0]), "--route", "R", "--color"]) == 0
    assert "\x1b[" in capsys.readouterr().out


def test_cli_bad_route(level_files, capsys, no_logging_setup):
    assert cli.main(["play", str(level_files[0]), "--route", "RZ"]) == 2
    assert "Bad route" in capsys.readouterr().out


def test_cli_missing_level(tmp_path, capsys, no_logging_setup):
    assert cli.main(["play", str(tmp_path / "missing.map")]) == 1
    assert "Cannot load level" in capsys.readouterr().out


def test_interactive_session(level_files, capsys):
    lines = iter(["dd", "n"])

    def read_line(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    runner = GameRunner(level_files)
    assert cli.run_interactive(runner, None, read_line=read_line) == 0
    assert runner.finished
    assert [r.verdict.progress for r in runner.records] == [Progress.WIN, Progress.SKIP]
    out = capsys.readouterr().out
    assert "Game over: Win" in out
    assert "a_first.map: Win" in out
