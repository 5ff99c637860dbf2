# tilepath/core/path_builder.py
#!/usr/bin/env python3
from typing import List, Optional

from tilepath.core.errors import PathInvariantError
from tilepath.core.types import Cell


def build_path(goal_node, limit: Optional[int] = None) -> List[Cell]:
    """
    Walk parent links from the goal node back to the start and return the
    cells in start -> goal order.

    Every parent must have a strictly smaller g than its child; `limit`
    (normally width * height) caps the walk. Breaking either means the
    search state is corrupt, so PathInvariantError is raised.
    """
    path: List[Cell] = [goal_node.cell]
    cur = goal_node
    while cur.parent is not None:
        nxt = cur.parent
        if not nxt.g < cur.g:
            raise PathInvariantError(
                f"parent {nxt.cell} (g={nxt.g}) not cheaper than {cur.cell} (g={cur.g})")
        path.append(nxt.cell)
        if limit is not None and len(path) > limit:
            raise PathInvariantError(f"parent chain longer than {limit} cells")
        cur = nxt
    path.reverse()
    return path
