# tilepath/core/locator.py
#!/usr/bin/env python3
"""
Locator — world position -> grid cell.

World frame: `origin` is the top-left corner of cell (0, 0); x grows with
columns and y grows with rows (screen convention, same as the grid origin
used when drawing the map).

A position is probed with a small circle of `probe_radius`. Every cell whose
square touches the circle is a candidate; the candidate whose centre is
nearest wins, exact ties go to the smallest (row, col). The default zero
radius is plain floor division: anything outside the grid is not found.
A radius of 0.2 behaves like a collider overlap-circle query, which also
catches positions just past the edge.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from pygame.math import Vector2

from tilepath.core.types import Cell

PositionLike = Union[Vector2, Tuple[float, float]]


@dataclass(frozen=True)
class Locator:
    width: int
    height: int
    cell_size: float = 1.0
    origin: Tuple[float, float] = (0.0, 0.0)
    probe_radius: float = 0.0

    def __post_init__(self):
        if not math.isfinite(self.cell_size) or self.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")
        if not all(math.isfinite(v) for v in self.origin):
            raise ValueError(f"origin must be finite, got {self.origin}")
        if not (math.isfinite(self.probe_radius) and self.probe_radius >= 0):
            raise ValueError(f"probe_radius must be finite and >= 0, got {self.probe_radius}")

    def _local(self, position: PositionLike) -> Vector2:
        return Vector2(position) - Vector2(self.origin)

    def cell_center(self, c: Cell) -> Vector2:
        x, y = c
        half = self.cell_size / 2
        return Vector2(self.origin) + Vector2(x * self.cell_size + half,
                                              y * self.cell_size + half)

    def _touches(self, p: Vector2, c: Cell) -> bool:
        """Does the probe circle around local point p touch cell c's square?"""
        s = self.cell_size
        x0, y0 = c[0] * s, c[1] * s
        nearest = Vector2(min(max(p.x, x0), x0 + s), min(max(p.y, y0), y0 + s))
        return p.distance_squared_to(nearest) <= self.probe_radius ** 2

    def candidates(self, position: PositionLike) -> List[Cell]:
        p = self._local(position)
        if not (math.isfinite(p.x) and math.isfinite(p.y)):
            return []
        s, r = self.cell_size, self.probe_radius
        c0 = max(0, math.floor((p.x - r) / s))
        c1 = min(self.width - 1, math.floor((p.x + r) / s))
        r0 = max(0, math.floor((p.y - r) / s))
        r1 = min(self.height - 1, math.floor((p.y + r) / s))
        return [(x, y)
                for y in range(r0, r1 + 1)
                for x in range(c0, c1 + 1)
                if self._touches(p, (x, y))]

    def locate(self, position: PositionLike) -> Optional[Cell]:
        found = self.candidates(position)
        if not found:
            return None
        world = Vector2(position)
        return min(found, key=lambda c: (world.distance_squared_to(self.cell_center(c)), c[1], c[0]))

    def contains(self, position: PositionLike) -> bool:
        return self.locate(position) is not None
