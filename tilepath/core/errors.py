# tilepath/core/errors.py
#!/usr/bin/env python3
"""
Exception taxonomy for tilepath.

- SceneFormatError        -> the scene/grid description is malformed
- GridBoundsError         -> a cell outside the grid reached an accessor (bug)
- UnresolvedPositionError -> a world position maps to no cell (precondition)
- PathInvariantError      -> a parent chain is not strictly decreasing in g

Search exhaustion is NOT an error: it is an empty path / status "no_path".
"""

from typing import Any, Optional


class TilepathError(Exception):
    """Base class for every error raised by tilepath."""


class SceneFormatError(TilepathError, ValueError):
    pass


class GridBoundsError(TilepathError, IndexError):
    def __init__(self, col: int, row: int, width: int, height: int):
        super().__init__(f"cell ({col}, {row}) outside grid {width}x{height}")
        self.col = col
        self.row = row


class UnresolvedPositionError(TilepathError, LookupError):
    def __init__(self, which: str, position: Any, scene: Optional[str] = None):
        where = f" in scene '{scene}'" if scene else ""
        super().__init__(f"{which} position {position!r} is not on any grid cell{where}")
        self.which = which          # "start" | "goal"
        self.position = position


class PathInvariantError(TilepathError, RuntimeError):
    pass
