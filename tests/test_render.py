from lambdamine import Action, render_text, step
from lambdamine.core.types import CellKind, LiftState
from lambdamine.render import LIFT_COLORS, OBJECT_COLORS, RESET, WATER_COLOR


def test_render_plain_level(make_snapshot):
    snap = make_snapshot([
        "#####",
        "#R\\L#",
        "#####",
    ])
    assert render_text(snap).splitlines() == [
        "#####",
        "#R\\L#",
        "#####",
        "Tick 0 | Lambdas 0/1 | Razors 0 | Moves 0 | Running",
    ]


def test_render_after_win(make_snapshot):
    snap = make_snapshot([
        "#####",
        "#R\\L#",
        "#####",
    ])
    snap, _ = step(snap, Action.RIGHT)
    snap, _ = step(snap, Action.RIGHT)
    lines = render_text(snap).splitlines()
    assert lines[1] == "#  R#"
    assert lines[-1] == "Tick 2 | Lambdas 1/1 | Razors 0 | Moves 2 | Win"


def test_render_trampoline_legend(make_snapshot):
    snap = make_snapshot(
        [
            "#########",
            "#RA 1 B #",
            "####L####",
        ],
        trampolines={"B": "1", "A": "1"},
    )
    lines = render_text(snap).splitlines()
    assert "Trampolines: A -> 1, B -> 1" in lines
    assert "Trampolines" not in render_text(snap, legend=False)


def test_render_water_and_air(make_snapshot):
    snap = make_snapshot(
        [
            "#####",
            "#R  #",
            "#  L#",
            "#####",
        ],
        Water=3,
        Waterproof=4,
    )
    lines = render_text(snap, water_char="~").splitlines()
    assert lines[:4] == ["#####", "#R~~#", "#~~L#", "#####"]
    assert "Air: 4" in lines
    assert lines[-1].endswith("Water 3 | Running")


def test_render_is_plain_unless_color_is_requested(make_snapshot):
    snap = make_snapshot([
        "#####",
        "#R\\L#",
        "#####",
    ])
    assert "\x1b[" not in render_text(snap)

    lines = render_text(snap, color=True).splitlines()
    assert lines[0] == "#####"
    assert lines[1] == (
        "#"
        + OBJECT_COLORS[CellKind.ROBOT] + "R" + RESET
        + OBJECT_COLORS[CellKind.LAMBDA] + "\\" + RESET
        + LIFT_COLORS[LiftState.CLOSED] + "L" + RESET
        + "#"
    )
    assert "\x1b[" not in lines[-1]


def test_color_render_paints_flooded_rows(make_snapshot):
    snap = make_snapshot(
        [
            "#####",
            "#R  #",
            "#* L#",
            "#####",
        ],
        Water=2,
    )
    lines = render_text(snap, water_char="~", color=True).splitlines()
    assert lines[1].startswith("#" + OBJECT_COLORS[CellKind.ROBOT] + "R")
    assert lines[2] == "".join(WATER_COLOR + ch + RESET for ch in "#*~L#")
    assert lines[3] == "".join(WATER_COLOR + "#" + RESET for _ in range(5))
