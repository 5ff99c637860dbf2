# tests/test_scene.py
"""
Scene parsing: tile tokens, legends and the JSON files shipped in maps/.
"""

import json

import pytest

from tilepath.core.errors import SceneFormatError
from tilepath.core.scene import grid_from_rows, load_scene, parse_scene, parse_tile
from tilepath.core.types import Tile


@pytest.mark.parametrize(
    "token,navigable,exits",
    [
        (".", True, "LRUD"),
        ("#", False, ""),
        ("-", True, ""),
        ("LR", True, "LR"),
        ("du", True, "UD"),
        ("*", True, "LRUD"),
        ("#R", False, "R"),
    ],
)
def test_parse_tile_tokens(token, navigable, exits) -> None:
    tile = parse_tile(token)
    assert tile.navigable is navigable
    assert tile.exits() == exits


def test_parse_tile_object_and_legend() -> None:
    assert parse_tile({"navigable": False, "exits": "L"}) == Tile(False, True, False, False, False)
    legend = {"o": {"exits": "UD"}}
    assert parse_tile("o", legend) == Tile(True, False, False, True, True)


@pytest.mark.parametrize("token", ["X", "", "LQ", 3, {"navigable": "yes"}])
def test_parse_tile_rejects_garbage(token) -> None:
    with pytest.raises(SceneFormatError):
        parse_tile(token)


def test_bad_token_error_names_the_cell() -> None:
    with pytest.raises(SceneFormatError, match=r"row 1, col 2"):
        grid_from_rows([". . .", ". . Z"])


def test_ragged_rows_are_rejected() -> None:
    with pytest.raises(SceneFormatError):
        grid_from_rows([". . .", ". ."])


def test_rows_may_be_lists() -> None:
    grid = grid_from_rows([[".", "#"], ["R", {"exits": ""}]])
    assert grid.cell_at(1, 0).navigable is False
    assert grid.cell_at(1, 1).exits() == ""


def test_parse_scene_defaults() -> None:
    scene = parse_scene({"rows": [". ."]})
    assert scene.name == "custom"
    assert scene.cell_size == 1.0
    assert scene.origin == (0.0, 0.0)
    assert (scene.grid.width, scene.grid.height) == (2, 1)


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"rows": []},
        {"rows": [". ."], "width": 3},
        {"rows": [". ."], "height": 2},
        {"rows": [". ."], "cell_size": 0},
        {"rows": [". ."], "origin": [1.0]},
    ],
)
def test_parse_scene_rejects_bad_layouts(data) -> None:
    with pytest.raises(SceneFormatError):
        parse_scene(data)


def test_load_crate_yard(maps_dir) -> None:
    scene = load_scene(maps_dir / "crate_yard.json")
    assert scene.name == "crate_yard"
    assert (scene.grid.width, scene.grid.height) == (5, 4)
    assert scene.origin == (-2.5, -2.0)
    assert scene.grid.cell_at(2, 2).exits() == "D"
    assert scene.grid.cell_at(0, 3).navigable is False


def test_load_scene_names_unnamed_maps_after_file(maps_dir) -> None:
    scene = load_scene(maps_dir / "one_way_corridor.json")
    assert scene.name == "one_way_corridor"
    assert scene.cell_size == 32.0
    assert scene.grid.cell_at(0, 0).exits() == "R"


def test_load_scene_invalid_json(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{ not json")
    with pytest.raises(SceneFormatError, match="broken.json"):
        load_scene(path)


def test_load_scene_round_trips_through_json(tmp_path) -> None:
    path = tmp_path / "tiny.json"
    path.write_text(json.dumps({"name": "tiny", "rows": ["R -"]}))
    scene = load_scene(path)
    assert scene.name == "tiny"
    assert scene.grid.neighbors_of((0, 0)) == [(1, 0)]


def test_scene_locator_uses_scene_geometry(maps_dir) -> None:
    scene = load_scene(maps_dir / "one_way_corridor.json")
    locator = scene.locator(probe_radius=0.0)
    assert (locator.width, locator.height) == (3, 1)
    assert locator.locate((70.0, 5.0)) == (2, 0)


@pytest.mark.parametrize(
    "extra",
    [
        {"cell_size": float("nan")},
        {"cell_size": float("inf")},
        {"cell_size": "big"},
        {"origin": ["left", 0.0]},
        {"origin": [0.0, None]},
        {"origin": [float("-inf"), 0.0]},
        {"width": "two"},
        {"height": float("nan")},
    ],
)
def test_parse_scene_rejects_bad_geometry(extra) -> None:
    with pytest.raises(SceneFormatError):
        parse_scene({"rows": [". ."], **extra})


def test_load_scene_rejects_nan_cell_size(tmp_path) -> None:
    path = tmp_path / "nan.json"
    path.write_text('{"rows": [". ."], "cell_size": NaN}')
    with pytest.raises(SceneFormatError, match="cell_size"):
        load_scene(path)


def test_scene_locator_defaults_to_floor_division(maps_dir) -> None:
    locator = load_scene(maps_dir / "one_way_corridor.json").locator()
    assert locator.probe_radius == 0.0
    assert locator.locate((-0.1, 16.0)) is None
