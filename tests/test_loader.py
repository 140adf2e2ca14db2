import pytest

from lambdamine import LevelErrorKind, LevelLoadError, list_levels, load_level, parse_level
from lambdamine.core.types import CellKind, ROBOT, WALL, EMPTY, CLOSED_LIFT
from lambdamine.mechanics.traversal import scan_order
from lambdamine.world import Grid
from infra.paths import LEVELS_DIR

from conftest import level_text


def test_last_line_becomes_row_one(make_level):
    level = make_level([
        "#####",
        "#R  #",
        "#  \\L",
        "#####",
    ])
    grid = level.grid
    assert (grid.width, grid.height) == (5, 4)
    assert grid.get((2, 3)) == ROBOT
    assert grid.get((5, 2)) == CLOSED_LIFT
    assert grid.get((1, 1)) == WALL
    assert grid.to_lines()[1] == "#R  #"


def test_short_lines_are_padded_with_empty(make_level):
    level = make_level([
        "#####",
        "#R",
        "#\\ L#",
    ])
    assert level.grid.width == 5
    assert level.grid.get((4, 2)) == EMPTY
    assert level.grid.get((5, 2)) == EMPTY


def test_outside_the_map_reads_as_wall():
    grid = Grid(2, 2)
    assert grid.get((0, 1)) == WALL
    assert grid.get((3, 3)) == WALL
    with pytest.raises(ValueError):
        grid.set((3, 1), ROBOT)


def test_scan_order_is_bottom_row_first_then_left_to_right():
    assert scan_order([(2, 2), (1, 3), (3, 1), (1, 1)]) == [(1, 1), (3, 1), (2, 2), (1, 3)]


def test_metadata_defaults(make_level):
    level = make_level(["R\\L"])
    assert level.growth == 25
    assert level.razors == 0
    assert level.water == 0
    assert level.flooding == 0
    assert level.waterproof == 10
    assert level.lambdas == 1
    assert level.beard_timer == 24


def test_metadata_lines_are_read(make_level):
    level = make_level(["R 1A L"], trampolines={"A": "1"}, Growth=10, Razors=2, Water=1, Flooding=5, Waterproof=3)
    assert (level.growth, level.razors, level.water, level.flooding, level.waterproof) == (10, 2, 1, 5, 3)
    assert level.trampolines == {"A": "1"}
    assert level.lambdas == 0


def test_higher_order_rocks_count_towards_the_quota(make_level):
    level = make_level(["R@\\\\L"])
    assert level.lambdas == 3


def test_invalid_character_reports_character_and_level():
    result = parse_level(level_text(["#R?L#"]), "broken.map")
    assert not result.ok
    assert result.level is None
    assert result.error.kind == LevelErrorKind.INVALID_CHARACTER
    assert result.error.character == "?"
    assert result.error.level_name == "broken.map"
    assert result.error.line == "#R?L#"


@pytest.mark.parametrize("meta", ["Growth many", "Water -1", "Growth 0", "Razors 1 2", "Trampoline A to 1"])
def test_invalid_metadata(meta):
    result = parse_level("R L\n\n" + meta + "\n", "meta.map")
    assert result.error.kind == LevelErrorKind.INVALID_METADATA
    assert result.error.level_name == "meta.map"


def test_unknown_metadata_lines_are_ignored():
    result = parse_level("R L\n\nAuthor somebody\nRazors 1\n", "extra.map")
    assert result.ok
    assert result.level.razors == 1


@pytest.mark.parametrize(
    "rows, kind",
    [
        (["#  L#"], LevelErrorKind.MISSING_ROBOT),
        (["#RRL#"], LevelErrorKind.MISSING_ROBOT),
        (["#R  #"], LevelErrorKind.MISSING_LIFT),
        (["#RLO#"], LevelErrorKind.MISSING_LIFT),
    ],
)
def test_robot_and_lift_must_be_unique(rows, kind):
    assert parse_level(level_text(rows)).error.kind == kind


def test_trampoline_without_target_is_rejected():
    result = parse_level(level_text(["RA L"], trampolines={"A": "1"}))
    assert result.error.kind == LevelErrorKind.UNKNOWN_TARGET
    result = parse_level(level_text(["RA 1L"]))
    assert result.error.kind == LevelErrorKind.UNKNOWN_TARGET


def test_unwrap_raises_for_errors():
    result = parse_level(level_text(["#R?L#"]), "broken.map")
    with pytest.raises(LevelLoadError) as info:
        result.unwrap()
    assert info.value.error.character == "?"


def test_load_level_names_level_after_file(tmp_path):
    path = tmp_path / "tiny.map"
    path.write_text(level_text(["#R\\L#"], Waterproof=4), encoding="utf-8")
    level = load_level(path).unwrap()
    assert level.name == "tiny.map"
    assert level.waterproof == 4
    assert level.grid.find(CellKind.ROBOT) == [(2, 1)]


def test_missing_file_is_an_error_value(tmp_path):
    result = load_level(tmp_path / "nope.map")
    assert result.error.kind == LevelErrorKind.FILE_NOT_FOUND
    assert result.error.level_name == "nope.map"


def test_bundled_levels_load():
    paths = list_levels(LEVELS_DIR)
    assert paths, "no bundled levels found"
    assert paths == sorted(paths)
    for path in paths:
        result = load_level(path)
        assert result.ok, str(result.error)
