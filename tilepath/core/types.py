# tilepath/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Dict, Any, Sequence

from tilepath.core.errors import GridBoundsError, SceneFormatError

Cell = Tuple[int, int]  # (col, row)

# (letter, dcol, drow, Tile attribute) in neighbor scan order
DIRECTIONS: Tuple[Tuple[str, int, int, str], ...] = (
    ("L", -1,  0, "can_exit_left"),
    ("R", +1,  0, "can_exit_right"),
    ("U",  0, -1, "can_exit_up"),
    ("D",  0, +1, "can_exit_down"),
)


@dataclass(frozen=True)
class Tile:
    navigable: bool = True
    can_exit_left: bool = True
    can_exit_right: bool = True
    can_exit_up: bool = True
    can_exit_down: bool = True

    def exits(self) -> str:
        """Exit letters in L, R, U, D order, e.g. "LR"."""
        return "".join(d for d, _, _, attr in DIRECTIONS if getattr(self, attr))


@dataclass(frozen=True)
class Grid:
    width: int
    height: int
    tiles: Tuple[Tuple[Tile, ...], ...]   # [row][col]

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise SceneFormatError(f"grid must be at least 1x1, got {self.width}x{self.height}")
        if len(self.tiles) != self.height:
            raise SceneFormatError(f"expected {self.height} rows, got {len(self.tiles)}")
        for y, row in enumerate(self.tiles):
            if len(row) != self.width:
                raise SceneFormatError(f"row {y}: expected {self.width} tiles, got {len(row)}")

    @classmethod
    def from_flags(cls, rows: Sequence[Sequence[Tile]]) -> "Grid":
        tiles = tuple(tuple(r) for r in rows)
        width = len(tiles[0]) if tiles else 0
        return cls(width, len(tiles), tiles)

    def in_bounds(self, c: Cell) -> bool:
        x, y = c
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, col: int, row: int) -> Tile:
        if not (0 <= col < self.width and 0 <= row < self.height):
            raise GridBoundsError(col, row, self.width, self.height)
        return self.tiles[row][col]

    def neighbors_of(self, c: Cell) -> List[Cell]:
        """
        Cells enterable from c in one step.

        The SOURCE tile's exit flag gates departure, the CANDIDATE's
        `navigable` flag gates entry. The candidate's own exit flags play
        no part, so the resulting graph may be directed.
        """
        x, y = c
        tile = self.cell_at(x, y)
        out: List[Cell] = []
        for _, dx, dy, attr in DIRECTIONS:
            if not getattr(tile, attr):
                continue
            n = (x + dx, y + dy)
            if self.in_bounds(n) and self.tiles[n[1]][n[0]].navigable:
                out.append(n)
        return out

    # ---------- index-addressed helpers ----------

    def __len__(self) -> int:
        return self.width * self.height

    def index_of(self, c: Cell) -> int:
        x, y = c
        if not self.in_bounds(c):
            raise GridBoundsError(x, y, self.width, self.height)
        return y * self.width + x

    def cell_of(self, index: int) -> Cell:
        if not 0 <= index < len(self):
            raise IndexError(f"index {index} outside grid of {len(self)} cells")
        return (index % self.width, index // self.width)

    def navigable_cells(self) -> List[Cell]:
        return [(x, y)
                for y, row in enumerate(self.tiles)
                for x, t in enumerate(row) if t.navigable]


@dataclass
class SearchResult:
    status: str                   # "idle" | "running" | "done" | "no_path" | "unresolved"
    start: Optional[Cell] = None
    goal: Optional[Cell] = None
    path: List[Cell] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.status == "done"
