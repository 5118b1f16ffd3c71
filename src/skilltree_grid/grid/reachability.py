"""Breadth-first reachability over the pipe network."""

from __future__ import annotations

import logging
from collections import deque

from skilltree_grid.grid.cells import GridStore
from skilltree_grid.grid.geometry import Point

logger = logging.getLogger(__name__)


def find_reachable(store: GridStore, root: Point) -> set[Point]:
  """
  Get every cell reachable from root through mutually connected cells.

  A step from a cell toward one of its connections is only taken if the
  neighbor exists, is traversable and records the opposite connection back.
  The root itself is always in the result.
  """
  visited: set[Point] = {root}
  queue: deque[Point] = deque([root])

  while queue:
    current = queue.popleft()
    cell = store.get(current)
    if cell is None:
      continue

    for direction in cell.connections:
      neighbor_pos = current + direction.offset
      neighbor = store.get(neighbor_pos)
      if neighbor is None:
        continue
      if not neighbor.is_traversable or not neighbor.has_connection(direction.opposite):
        continue
      if neighbor_pos not in visited:
        visited.add(neighbor_pos)
        queue.append(neighbor_pos)

  logger.debug(f"Reached {len(visited)} of {len(store)} cells from {root}")
  return visited
