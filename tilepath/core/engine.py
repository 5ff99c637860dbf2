# tilepath/core/engine.py
#!/usr/bin/env python3
"""
Pathfinder — the one entry point the rest of a game talks to.

    finder = Pathfinder(lambda: load_scene("maps/crate_yard.json"))
    cells = finder.find_path(player_pos, click_pos)   # [] if no route

Each call takes a fresh Scene snapshot (when given a callable), resolves both
world positions to cells, runs A* and hands back (col, row) cells in
start -> goal order.

Unresolved positions never start a search. plan() reports them as status
"unresolved" (distinct from an exhausted "no_path"); find_path() returns []
unless Settings.strict_positions is on, in which case it raises
UnresolvedPositionError.
"""

import logging
from typing import Callable, List, Optional, Union

from tilepath.config import Settings, resolve_settings
from tilepath.core.astar import AStarSearch
from tilepath.core.errors import UnresolvedPositionError
from tilepath.core.locator import PositionLike
from tilepath.core.scene import Scene
from tilepath.core.types import Cell, SearchResult

logger = logging.getLogger(__name__)

SceneSource = Union[Scene, Callable[[], Scene]]


class Pathfinder:
    def __init__(self, scene_source: SceneSource, *, settings: Optional[Settings] = None):
        self._source = scene_source
        self.settings = settings if settings is not None else resolve_settings()

    def snapshot(self) -> Scene:
        """Current scene; callables are rebuilt on every call."""
        if isinstance(self._source, Scene):
            return self._source
        return self._source()

    # ---------- searches ----------

    def plan(self, start_pos: PositionLike, goal_pos: PositionLike) -> SearchResult:
        scene = self.snapshot()
        locator = scene.locator(self.settings.probe_radius)
        start = locator.locate(start_pos)
        goal = locator.locate(goal_pos)

        unresolved = [which for which, c in (("start", start), ("goal", goal)) if c is None]
        if unresolved:
            logger.warning("scene '%s': %s position not on grid (start=%r, goal=%r)",
                           scene.name, " and ".join(unresolved), start_pos, goal_pos)
            return SearchResult(status="unresolved", start=start, goal=goal,
                                metrics={"reason": unresolved, "scene": scene.name,
                                         "positions": {"start": start_pos, "goal": goal_pos}})

        return self._search(scene, start, goal)

    def find_path(self, start_pos: PositionLike, goal_pos: PositionLike) -> List[Cell]:
        result = self.plan(start_pos, goal_pos)
        if result.status == "unresolved" and self.settings.strict_positions:
            which = result.metrics["reason"][0]
            raise UnresolvedPositionError(which, result.metrics["positions"][which],
                                          result.metrics["scene"])
        return list(result.path)

    def find_path_between_cells(self, start: Cell, goal: Cell) -> List[Cell]:
        return list(self._search(self.snapshot(), start, goal).path)

    def _search(self, scene: Scene, start: Cell, goal: Cell) -> SearchResult:
        algo = AStarSearch(scene.grid, frontier=self.settings.frontier)
        result = algo.run(start, goal)
        logger.debug("scene '%s': %s -> %s %s (%s)",
                     scene.name, start, goal, result.status, result.metrics)
        return result
