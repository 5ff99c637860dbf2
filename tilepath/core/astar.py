# tilepath/core/astar.py
#!/usr/bin/env python3
"""
A* over a directional tile Grid.

- Manhattan heuristic (unit edge cost, 4-connected, so it stays admissible).
- Frontier selection: lowest f; on equal f the node that entered the frontier
  first wins (strict `<` while scanning in insertion order).
- Relaxation only on a strictly lower g, so equal-cost alternatives never
  steal the parent found first.

Per-search state lives in a fresh, index-addressed list of SearchNode built
by every run(); nothing survives between runs.

Two frontier implementations give identical output:
- ScanFrontier : list + linear scan (reference behaviour)
- HeapFrontier : heapq keyed (f, insertion seq, index), stale entries skipped
"""

import heapq
import logging
from dataclasses import dataclass, field
from math import inf
from typing import Dict, List, Optional, Tuple

from tilepath.core.errors import GridBoundsError
from tilepath.core.path_builder import build_path
from tilepath.core.types import Cell, Grid, SearchResult

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class SearchNode:
    cell: Cell
    index: int
    g: float = inf
    f: float = inf
    parent: Optional["SearchNode"] = field(default=None, repr=False)


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


# -------------------- frontiers --------------------

class ScanFrontier:
    """Open set as a plain list in insertion order."""

    def __init__(self):
        self._items: List[SearchNode] = []
        self._members: set = set()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, node: SearchNode) -> bool:
        return node.index in self._members

    def add(self, node: SearchNode) -> None:
        self._items.append(node)
        self._members.add(node.index)

    def update(self, node: SearchNode) -> None:
        pass  # the scan reads f directly

    def pop_best(self) -> SearchNode:
        best_i = 0
        for i in range(1, len(self._items)):
            if self._items[i].f < self._items[best_i].f:
                best_i = i
        node = self._items.pop(best_i)
        self._members.discard(node.index)
        return node


class HeapFrontier:
    """Open set as a heap; the insertion seq reproduces the scan tie-break."""

    def __init__(self):
        self._pq: List[Tuple[float, int, int]] = []   # (f, seq, index)
        self._seq_of: Dict[int, int] = {}             # members only
        self._nodes: Dict[int, SearchNode] = {}
        self._seq = 0

    def __len__(self) -> int:
        return len(self._seq_of)

    def __contains__(self, node: SearchNode) -> bool:
        return node.index in self._seq_of

    def add(self, node: SearchNode) -> None:
        self._seq += 1
        self._seq_of[node.index] = self._seq
        self._nodes[node.index] = node
        heapq.heappush(self._pq, (node.f, self._seq, node.index))

    def update(self, node: SearchNode) -> None:
        heapq.heappush(self._pq, (node.f, self._seq_of[node.index], node.index))

    def pop_best(self) -> SearchNode:
        while self._pq:
            f, _, idx = heapq.heappop(self._pq)
            node = self._nodes.get(idx)
            # Ignore stale pops
            if idx not in self._seq_of or node.f != f:
                continue
            del self._seq_of[idx]
            del self._nodes[idx]
            return node
        raise IndexError("pop from empty frontier")


FRONTIERS = {"scan": ScanFrontier, "heap": HeapFrontier}


def make_frontier(kind: str):
    try:
        return FRONTIERS[kind]()
    except KeyError:
        raise ValueError(f"unknown frontier {kind!r} (expected one of {sorted(FRONTIERS)})") from None


# -------------------- search --------------------

@dataclass
class AStarSearch:
    grid: Grid
    frontier: str = "scan"
    name: str = "A*"

    status: str = field(default="idle", init=False)
    popped_count: int = field(default=0, init=False)

    def __post_init__(self):
        if self.frontier not in FRONTIERS:
            raise ValueError(f"unknown frontier {self.frontier!r} (expected one of {sorted(FRONTIERS)})")

    def run(self, start: Cell, goal: Cell) -> SearchResult:
        """Search start -> goal to completion; returns status "done" or "no_path"."""
        for c in (start, goal):
            if not self.grid.in_bounds(c):
                raise GridBoundsError(c[0], c[1], self.grid.width, self.grid.height)

        grid = self.grid
        nodes = [SearchNode(grid.cell_of(i), i) for i in range(len(grid))]
        open_set = make_frontier(self.frontier)
        closed: set = set()
        self.popped_count = 0
        self.status = "running"

        s = nodes[grid.index_of(start)]
        s.g = 0
        s.f = s.g + manhattan(start, goal)
        open_set.add(s)

        while len(open_set) > 0:
            u = open_set.pop_best()
            self.popped_count += 1

            if u.cell == goal:
                self.status = "done"
                path = build_path(u, limit=len(grid))
                logger.debug("%s %s -> %s: %d cells after %d pops",
                             self.name, start, goal, len(path), self.popped_count)
                return SearchResult(status="done", start=start, goal=goal, path=path,
                                    metrics=self._metrics(open_set, closed, path, u.g))

            closed.add(u.index)

            for cell in grid.neighbors_of(u.cell):
                v = nodes[grid.index_of(cell)]
                if v.index in closed:
                    continue
                if v not in open_set:
                    open_set.add(v)

                alt = u.g + 1
                if alt >= v.g:
                    continue
                v.parent = u
                v.g = alt
                v.f = v.g + manhattan(v.cell, goal)
                open_set.update(v)

        self.status = "no_path"
        logger.debug("%s %s -> %s: exhausted after %d pops",
                     self.name, start, goal, self.popped_count)
        return SearchResult(status="no_path", start=start, goal=goal,
                            metrics=self._metrics(open_set, closed, [], None))

    # -------------------- metrics --------------------

    def _metrics(self, open_set, closed: set, path: List[Cell], total_cost) -> dict:
        return {
            "algo": self.name,
            "frontier": self.frontier,
            "popped": self.popped_count,
            "open_size": len(open_set),
            "closed_count": len(closed),
            "path_len": len(path),
            "total_cost": total_cost,
        }
