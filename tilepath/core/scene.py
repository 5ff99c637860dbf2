# tilepath/core/scene.py
#!/usr/bin/env python3
"""
Scene loading: JSON tile layout -> Scene (Grid + world geometry).

Map format (all keys except "rows" optional):

    {
      "name": "crate_yard",
      "width": 4, "height": 2,
      "cell_size": 1.0,
      "origin": [0.0, 0.0],
      "legend": {"o": {"navigable": true, "exits": "UD"}},
      "rows": [
        ". . R #",
        "o - #R LU"
      ]
    }

Tokens:
  "."          navigable, all exits
  "#"          blocked, no exits
  "-"          navigable, no exits
  "LRUD" / "*" navigable, only the listed exits ("*" = all)
  "#" + letters  blocked, but keeps the listed exits
"""

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from tilepath.core.errors import SceneFormatError
from tilepath.core.locator import Locator
from tilepath.core.types import DIRECTIONS, Grid, Tile

EXIT_LETTERS = "".join(d for d, _, _, _ in DIRECTIONS)

TokenLike = Union[str, Mapping[str, Any]]


@dataclass(frozen=True)
class Scene:
    grid: Grid
    cell_size: float = 1.0
    origin: Tuple[float, float] = (0.0, 0.0)
    name: str = "custom"

    def locator(self, probe_radius: float = 0.0) -> Locator:
        return Locator(self.grid.width, self.grid.height,
                       cell_size=self.cell_size, origin=self.origin,
                       probe_radius=probe_radius)


# ---------- tiles ----------

def _tile_from_exits(navigable: bool, exits: str) -> Tile:
    exits = exits.upper()
    if "*" in exits:
        exits = EXIT_LETTERS
    bad = set(exits) - set(EXIT_LETTERS)
    if bad:
        raise SceneFormatError(f"unknown exit letter(s) {''.join(sorted(bad))!r}")
    return Tile(navigable, *(d in exits for d in EXIT_LETTERS))


def _tile_from_mapping(entry: Mapping[str, Any]) -> Tile:
    if not isinstance(entry, Mapping):
        raise SceneFormatError(f"legend entries must be objects, got {entry!r}")
    navigable = entry.get("navigable", True)
    exits = entry.get("exits", EXIT_LETTERS)
    if not isinstance(navigable, bool) or not isinstance(exits, str):
        raise SceneFormatError(f"bad tile object {dict(entry)!r}")
    return _tile_from_exits(navigable, exits)


def parse_tile(token: TokenLike, legend: Optional[Mapping[str, Any]] = None) -> Tile:
    """Turn one cell token (or tile object) into a Tile."""
    if isinstance(token, Mapping):
        return _tile_from_mapping(token)
    if not isinstance(token, str) or not token:
        raise SceneFormatError(f"bad tile token {token!r}")
    if legend and token in legend:
        return _tile_from_mapping(legend[token])
    if token == ".":
        return Tile()
    if token == "-":
        return Tile(True, False, False, False, False)
    if token.startswith("#"):
        return _tile_from_exits(False, token[1:])
    return _tile_from_exits(True, token)


# ---------- grids ----------

def _split_row(row: Union[str, Sequence[TokenLike]]) -> List[TokenLike]:
    if isinstance(row, str):
        return row.split()
    return list(row)


def grid_from_rows(rows: Sequence[Union[str, Sequence[TokenLike]]],
                   legend: Optional[Mapping[str, Any]] = None) -> Grid:
    if not rows:
        raise SceneFormatError("scene has no rows")
    tiles: List[Tuple[Tile, ...]] = []
    for y, row in enumerate(rows):
        parsed = []
        for x, token in enumerate(_split_row(row)):
            try:
                parsed.append(parse_tile(token, legend))
            except SceneFormatError as e:
                raise SceneFormatError(f"row {y}, col {x}: {e}") from e
        tiles.append(tuple(parsed))
    return Grid(len(tiles[0]), len(tiles), tuple(tiles))


# ---------- scenes ----------

def _finite(value: Any, what: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise SceneFormatError(f"{what} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise SceneFormatError(f"{what} must be finite, got {value!r}")
    return number


def parse_scene(data: Mapping[str, Any]) -> Scene:
    if "rows" not in data:
        raise SceneFormatError("scene is missing 'rows'")
    grid = grid_from_rows(data["rows"], data.get("legend"))

    for key, actual in (("width", grid.width), ("height", grid.height)):
        if key in data and _finite(data[key], key) != actual:
            raise SceneFormatError(f"declared {key} {data[key]} but rows give {actual}")

    cell_size = _finite(data.get("cell_size", 1.0), "cell_size")
    if cell_size <= 0:
        raise SceneFormatError(f"cell_size must be positive, got {cell_size}")
    origin = data.get("origin", (0.0, 0.0))
    if not isinstance(origin, (list, tuple)) or len(origin) != 2:
        raise SceneFormatError(f"origin must be [x, y], got {origin!r}")

    return Scene(grid=grid,
                 cell_size=cell_size,
                 origin=(_finite(origin[0], "origin x"), _finite(origin[1], "origin y")),
                 name=str(data.get("name", "custom")))


def load_scene(path: Union[str, Path]) -> Scene:
    path = Path(path)
    with open(path, "r") as f:
        try:
            data: Dict[str, Any] = json.load(f)
        except json.JSONDecodeError as e:
            raise SceneFormatError(f"{path.name}: {e}") from e
    scene = parse_scene(data)
    if "name" not in data:
        scene = Scene(scene.grid, scene.cell_size, scene.origin, path.stem)
    return scene
