"""
Quantize freeform UI positions onto the integer grid.

All nodes of a tree share one origin: the minimum UI x and y across the
tree. Each node lands on round((ui - min_ui) / ui_units_per_cell) per axis.
Python's round() is round-half-to-even, so a node exactly half a cell away
snaps to the even neighbor.
"""

from __future__ import annotations

from typing import Iterable

from skilltree_grid.data.tree_model import Node, UiRect
from skilltree_grid.grid.geometry import Point


def compute_min_ui(nodes: Iterable[Node]) -> tuple[float, float]:
  """
  Get the minimum UI x and y over all nodes.

  Raises:
      ValueError: If there are no nodes
  """
  nodes = list(nodes)
  if not nodes:
    raise ValueError("Cannot compute a grid origin for zero nodes")
  return (
    min(node.ui.x for node in nodes),
    min(node.ui.y for node in nodes),
  )


def ui_to_grid(ui: UiRect, min_ui: tuple[float, float], ui_units_per_cell: float) -> Point:
  """Map a UI rect's position to a grid coordinate."""
  return Point(
    round((ui.x - min_ui[0]) / ui_units_per_cell),
    round((ui.y - min_ui[1]) / ui_units_per_cell),
  )


class CoordinateMapper:
  """Grid mapping bound to one tree's origin and scale."""

  def __init__(self, nodes: Iterable[Node], ui_units_per_cell: float):
    if ui_units_per_cell <= 0:
      raise ValueError(f"ui_units_per_cell must be positive, got {ui_units_per_cell}")
    self.min_ui = compute_min_ui(nodes)
    self.ui_units_per_cell = ui_units_per_cell

  def to_grid(self, node: Node) -> Point:
    return ui_to_grid(node.ui, self.min_ui, self.ui_units_per_cell)

  def map_all(self, nodes: Iterable[Node]) -> dict[str, Point]:
    """Map every node id to its grid coordinate."""
    return {node.id: self.to_grid(node) for node in nodes}
