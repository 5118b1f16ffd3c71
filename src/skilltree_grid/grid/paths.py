"""
Rasterize edges into orthogonal pipe routes.

Each route is an L shape: walk the full x distance first, then the full y
distance, one unit per step. Every step records a connection on both cells
it joins, so connection symmetry holds by construction.
"""

from __future__ import annotations

from skilltree_grid.grid.cells import GridStore
from skilltree_grid.grid.geometry import Direction, Point, sign


def rasterize_path(start: Point, end: Point) -> list[Point]:
  """
  Get the cells visited walking from start to end, x axis first.

  The start cell itself is not included; the end cell is the last entry.
  Start == end yields an empty path.
  """
  path: list[Point] = []
  x, y = start.x, start.y

  while x != end.x:
    x += sign(end.x - x)
    path.append(Point(x, y))

  while y != end.y:
    y += sign(end.y - y)
    path.append(Point(x, y))

  return path


def add_connection(store: GridStore, from_pos: Point, to_pos: Point) -> Direction:
  """
  Connect two adjacent cells in both directions and mark them traversable.

  Returns the direction from from_pos to to_pos.

  Raises:
      InvalidDeltaError: If the cells are not one cardinal step apart
  """
  direction = Direction.from_delta(to_pos - from_pos)
  from_cell = store.get_or_create(from_pos)
  to_cell = store.get_or_create(to_pos)

  from_cell.add_connection(direction)
  to_cell.add_connection(direction.opposite)

  from_cell.is_traversable = True
  to_cell.is_traversable = True
  return direction


def build_pipe_path(store: GridStore, start: Point, end: Point) -> list[Point]:
  """Rasterize a route from start to end into the store. Returns the route."""
  path = rasterize_path(start, end)
  previous = start
  for step in path:
    add_connection(store, previous, step)
    previous = step
  return path
