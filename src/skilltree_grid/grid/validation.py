"""
Consistency checks for a built grid.

These mirror the invariants the build is supposed to guarantee, so a
caller (or a test) can confirm a result before rendering it.
"""

from __future__ import annotations

from collections import defaultdict

from skilltree_grid.grid.cells import CellType, GridStore
from skilltree_grid.grid.geometry import Point


def validate_connection_symmetry(store: GridStore) -> tuple[bool, list[str]]:
  """
  Check that every connection is recorded on both cells it joins.

  Returns (is_valid, error_messages).
  """
  errors: list[str] = []
  for cell in store:
    for direction in cell.connections:
      neighbor_pos = cell.position + direction.offset
      neighbor = store.get(neighbor_pos)
      if neighbor is None:
        errors.append(
          f"Cell {cell.position} connects {direction.value} to missing cell {neighbor_pos}"
        )
      elif not neighbor.has_connection(direction.opposite):
        errors.append(
          f"Cell {cell.position} connects {direction.value} but {neighbor_pos} "
          f"has no {direction.opposite.value} connection back"
        )
  return len(errors) == 0, errors


def find_node_collisions(store: GridStore) -> dict[Point, list[str]]:
  """Get cells that more than one node was quantized onto."""
  by_cell: dict[Point, list[str]] = defaultdict(list)
  for node_id, instance in store.instances.items():
    by_cell[instance.cell.position].append(node_id)
  return {pos: ids for pos, ids in by_cell.items() if len(ids) > 1}


def validate_grid(store: GridStore) -> tuple[bool, list[str]]:
  """
  Validate a built grid.

  Checks:
  - Connection symmetry
  - Every connected cell is traversable and no longer empty
  - No two nodes share a cell

  Returns (is_valid, error_messages).
  """
  _, errors = validate_connection_symmetry(store)

  for cell in store:
    if cell.connection_count == 0:
      continue
    if not cell.is_traversable:
      errors.append(f"Cell {cell.position} has connections but is not traversable")
    if cell.type == CellType.EMPTY:
      errors.append(f"Cell {cell.position} has connections but is still empty")

  for pos, ids in sorted(find_node_collisions(store).items(), key=lambda kv: (kv[0].y, kv[0].x)):
    errors.append(f"Nodes {', '.join(sorted(ids))} share cell {pos}")

  return len(errors) == 0, errors
