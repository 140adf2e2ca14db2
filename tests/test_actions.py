from lambdamine import Action, step
from lambdamine.core.types import (
    Cell,
    Progress,
    EMPTY,
    ROBOT,
    SIMPLE_ROCK,
    HIGHER_ORDER_ROCK,
    OPEN_LIFT,
    CLOSED_LIFT,
    WIN,
    RUNNING,
)
from lambdamine.engine import TickEngine


def run(snapshot, *actions):
    for action in actions:
        snapshot, _ = step(snapshot, action)
    return snapshot


def test_corridor_move_then_blocked_push(make_snapshot):
    # 5x3 corridor with a rock two cells right of the robot; the lift sits in the floor
    snap = make_snapshot([
        "#####",
        "#R *#",
        "##L##",
    ])
    snap, verdict = step(snap, Action.RIGHT)
    assert verdict == RUNNING
    assert snap.robot == (3, 2)
    assert snap.grid.get((4, 2)) == SIMPLE_ROCK

    result = TickEngine().step(snap, Action.RIGHT)
    assert not result.action.success
    assert result.action.failure_reason == "ROCK_BLOCKED"
    assert result.snapshot.robot == (3, 2)
    assert result.snapshot.grid.get((4, 2)) == SIMPLE_ROCK
    assert result.snapshot.moves == 2


def test_push_rock_right_until_wall(make_snapshot):
    snap = make_snapshot([
        "###L##",
        "#R*  #",
        "######",
    ])
    snap = run(snap, Action.RIGHT)
    assert snap.robot == (3, 2)
    assert snap.grid.get((4, 2)) == SIMPLE_ROCK
    assert snap.grid.get((2, 2)) == EMPTY

    snap = run(snap, Action.RIGHT)
    assert snap.robot == (4, 2)
    assert snap.grid.get((5, 2)) == SIMPLE_ROCK

    result = TickEngine().step(snap, Action.RIGHT)
    assert result.action.failure_reason == "ROCK_BLOCKED"
    assert result.snapshot.robot == (4, 2)


def test_vertical_push_is_rejected(make_snapshot):
    snap = make_snapshot([
        "#####",
        "#R  #",
        "#*  #",
        "##L##",
    ])
    result = TickEngine().step(snap, Action.DOWN)
    assert result.action.failure_reason == "ROCK_VERTICAL"
    assert result.snapshot.robot == (2, 3)
    assert result.snapshot.grid.get((2, 2)) == SIMPLE_ROCK


def test_higher_order_rock_cannot_be_pushed(make_snapshot):
    snap = make_snapshot([
        "#####",
        "#R@ #",
        "###L#",
    ])
    result = TickEngine().step(snap, Action.RIGHT)
    assert result.action.failure_reason == "ROCK_HIGHER_ORDER"
    assert result.snapshot.grid.get((3, 2)) == HIGHER_ORDER_ROCK


def test_digging_earth_and_wall_rejection(make_snapshot):
    snap = make_snapshot([
        "#####",
        "#R. #",
        "##L##",
    ])
    snap = run(snap, Action.RIGHT)
    assert snap.robot == (3, 2)
    assert snap.grid.get((2, 2)) == EMPTY

    result = TickEngine().step(snap, Action.UP)
    assert result.action.failure_reason == "BLOCKED"
    assert result.snapshot.robot == (3, 2)
    assert result.snapshot.moves == 2


def test_collecting_last_lambda_opens_lift_and_entering_wins(make_snapshot):
    snap = make_snapshot([
        "#####",
        "#R\\L#",
        "#####",
    ])
    assert snap.grid.get((4, 2)) == CLOSED_LIFT

    snap, verdict = step(snap, Action.RIGHT)
    assert verdict == RUNNING
    assert snap.lambdas == 1
    assert snap.grid.get((4, 2)) == OPEN_LIFT

    snap, verdict = step(snap, Action.RIGHT)
    assert verdict == WIN
    assert snap.robot == (4, 2)
    assert snap.tick == 2


def test_closed_lift_is_a_wall(make_snapshot):
    snap = make_snapshot([
        "#####",
        "#RL\\#",
        "#####",
    ])
    result = TickEngine().step(snap, Action.RIGHT)
    assert result.action.failure_reason == "LIFT_CLOSED"
    assert result.verdict == RUNNING
    assert result.snapshot.robot == (2, 2)


def test_lift_opens_immediately_when_no_lambdas_are_required(make_snapshot):
    snap = make_snapshot([
        "####",
        "#RL#",
        "####",
    ])
    snap, verdict = step(snap, Action.RIGHT)
    assert verdict == WIN
    assert snap.tick == 1


def test_open_lift_without_quota_is_walkable_but_not_a_win(make_snapshot):
    snap = make_snapshot([
        "#####",
        "#RO\\#",
        "#####",
    ])
    snap, verdict = step(snap, Action.RIGHT)
    assert verdict == RUNNING
    assert snap.robot == (3, 2)

    snap, verdict = step(snap, Action.RIGHT)
    assert verdict == RUNNING
    assert snap.lambdas == 1
    # Leaving the lift puts it back
    assert snap.grid.get((3, 2)) == OPEN_LIFT

    snap, verdict = step(snap, Action.LEFT)
    assert verdict == WIN


def test_razor_pickup(make_snapshot):
    snap = make_snapshot([
        "#####",
        "#R! #",
        "##L##",
    ])
    snap = run(snap, Action.RIGHT)
    assert snap.razors == 1
    assert snap.grid.get((3, 2)) == ROBOT


def test_beard_blocks_and_razor_cuts_adjacent_beard(make_snapshot):
    snap = make_snapshot(
        [
            "#####",
            "#W  #",
            "#RW #",
            "##L##",
        ],
        Razors=1,
    )
    result = TickEngine().step(snap, Action.RIGHT)
    assert result.action.failure_reason == "BLOCKED"

    snap = run(result.snapshot, Action.USE_RAZOR)
    assert snap.razors == 0
    assert snap.grid.get((2, 3)) == EMPTY
    assert snap.grid.get((3, 2)) == EMPTY
    assert snap.robot == (2, 2)

    result = TickEngine().step(snap, Action.USE_RAZOR)
    assert result.action.failure_reason == "NO_RAZORS"
    assert result.snapshot.moves == 3


def test_trampoline_consumes_the_whole_group(make_snapshot):
    snap = make_snapshot(
        [
            "#########",
            "#RA 1 B #",
            "####L####",
        ],
        trampolines={"A": "1", "B": "1"},
    )
    snap = run(snap, Action.RIGHT)
    assert snap.robot == (5, 2)
    assert snap.grid.get((3, 2)) == EMPTY
    assert snap.grid.get((7, 2)) == EMPTY
    assert snap.grid.get((5, 2)) == ROBOT
    assert snap.targets == {}
    assert snap.target_sources == {}

    # The sibling trampoline is now plain floor
    snap = run(snap, Action.RIGHT, Action.RIGHT)
    assert snap.robot == (7, 2)


def test_target_cell_is_not_walkable(make_snapshot):
    snap = make_snapshot(
        [
            "######",
            "#R1A #",
            "###L##",
        ],
        trampolines={"A": "1"},
    )
    result = TickEngine().step(snap, Action.RIGHT)
    assert result.action.failure_reason == "BLOCKED"
    assert result.snapshot.grid.get((3, 2)) == Cell.target("1")


def test_history_records_every_requested_action(make_snapshot):
    snap = make_snapshot([
        "#####",
        "#R  #",
        "##L##",
    ])
    snap = run(snap, Action.UP, Action.RIGHT, Action.WAIT)
    assert snap.history == [Action.UP, Action.RIGHT, Action.WAIT]
    assert snap.route == "URW"
    assert snap.moves == 3
    assert snap.verdict.progress == Progress.RUNNING
