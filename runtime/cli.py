"""
Command line front end.

    lambdamine-play play levels/intro.map levels/flood.map
    lambdamine-play play levels/intro.map --route "LDRRA"
    lambdamine-play play levels/flood.map --color
    lambdamine-play list
"""

import argparse
from typing import Callable, List, Optional, Sequence

from lambdamine import LevelLoadError, list_levels, parse_route, render_text
from lambdamine.core.types import Progress

from infra.logger import DEFAULT_LOGFILE, configure_logging, get_logger
from infra.paths import LEVELS_DIR, REPLAY_DIR
from .controls import actions_for_line, help_text
from .runner import GameRunner

log = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lambdamine-play", description="Lambda mine player")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    parser.add_argument(
        "--logfile", nargs="?", const=str(DEFAULT_LOGFILE), default=None,
        help=f"Also append logs to this file (default when given without a path: {DEFAULT_LOGFILE})",
    )

    sub = parser.add_subparsers(dest="command")

    play = sub.add_parser("play", help="Play one or more levels")
    play.add_argument("levels", nargs="*", help=f"Level files (default: every level in {LEVELS_DIR})")
    play.add_argument("--route", default=None, help="Replay a route string on the first level instead of reading keys")
    play.add_argument("--water-char", default="~", help="Character drawn for flooded empty cells")
    play.add_argument("--color", action="store_true", help="Colour the map with ANSI escape codes")
    play.add_argument(
        "--records", nargs="?", const=str(REPLAY_DIR), default=None,
        help=f"Write finished-game records to this directory (default when given without a path: {REPLAY_DIR})",
    )

    sub.add_parser("list", help=f"List the levels in {LEVELS_DIR}")
    return parser


def run_route(runner: GameRunner, route: str, water_char: Optional[str], color: bool = False) -> int:
    snapshot = runner.play(parse_route(route))
    print(render_text(snapshot, water_char=water_char, color=color))
    print(f"Route: {snapshot.route}")
    return 0


def run_interactive(
    runner: GameRunner,
    water_char: Optional[str],
    read_line: Callable[[str], str] = input,
    color: bool = False,
) -> int:
    print(help_text())
    while not runner.finished:
        snapshot = runner.snapshot
        print()
        print(f"== {snapshot.level.name} ==")
        print(render_text(snapshot, water_char=water_char, color=color))

        try:
            line = read_line("> ")
        except EOFError:
            print()
            break

        for action in actions_for_line(line):
            result = runner.step(action)
            if result.done:
                break
        else:
            continue

        verdict = result.verdict
        if verdict.progress in (Progress.RESTART, Progress.SKIP):
            continue

        print(render_text(result.snapshot, water_char=water_char, color=color))
        print(f"Game over: {verdict}")
        if verdict.progress == Progress.ABORT:
            break
        runner.advance()

    for record in runner.records:
        print(f"{record.level_name}: {record.verdict} ({record.lambdas} lambdas, {record.moves} moves) {record.route}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, json=args.json_logs, logfile=args.logfile)

    if args.command == "list":
        for path in list_levels(LEVELS_DIR):
            print(path.name)
        return 0

    if args.command != "play":
        parser.print_help()
        return 2

    levels: List[str] = args.levels or [str(p) for p in list_levels(LEVELS_DIR)]
    if not levels:
        print(f"No levels found in {LEVELS_DIR}")
        return 1

    log.info("Starting session with %d level(s)", len(levels))
    try:
        runner = GameRunner(levels, record_dir=args.records)
    except LevelLoadError as exc:
        print(f"Cannot load level: {exc}")
        return 1

    if args.route is not None:
        try:
            return run_route(runner, args.route, args.water_char, args.color)
        except ValueError as exc:
            print(f"Bad route: {exc}")
            return 2
    return run_interactive(runner, args.water_char, color=args.color)


if __name__ == "__main__":
    raise SystemExit(main())
