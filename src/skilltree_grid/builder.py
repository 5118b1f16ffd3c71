"""
Skill tree grid build pipeline.

Turns one tree of a skill tree export into a pipe grid:

1. Quantize node UI positions onto a shared integer grid
2. Place node cells (root, skill or junction)
3. Route every edge as an x-then-y pipe path
4. Classify pipe cells and create a render request per non-empty cell
5. Flood fill from the root through mutually connected cells
6. Mark purchased, reachable skills active and recolor their visuals

A build is synchronous and not reentrant. Every build starts by clearing
the grid store, so nothing but the purchased-id set survives between
builds.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import AbstractSet, Any

from skilltree_grid.config.grid_config import GridConfig
from skilltree_grid.data.tree_model import (
  Node,
  SkillTreeExport,
  SkillTreeParseError,
  TreeDefinition,
  parse_export,
)
from skilltree_grid.grid.activation import NodeState, resolve_activation
from skilltree_grid.grid.cells import CellType, GridStore, SkillNodeInstance
from skilltree_grid.grid.coordinates import CoordinateMapper
from skilltree_grid.grid.geometry import Point
from skilltree_grid.grid.paths import build_pipe_path
from skilltree_grid.grid.reachability import find_reachable
from skilltree_grid.rendering.visuals import CellVisual, build_cell_visuals

logger = logging.getLogger(__name__)


class SkillTreeBuildError(ValueError):
  """Raised when a build cannot start because its input is unusable."""


# =============================================================================
# Data Structures
# =============================================================================


@dataclass
class BuildResult:
  """Everything one build produced."""

  tree_name: str
  root_id: str
  store: GridStore
  positions: dict[str, Point] = field(default_factory=dict)
  visited: set[Point] = field(default_factory=set)
  visuals: dict[Point, CellVisual] = field(default_factory=dict)
  node_states: dict[str, NodeState] = field(default_factory=dict)

  @property
  def root_position(self) -> Point | None:
    return self.store.root_position

  def is_reachable(self, node_id: str) -> bool:
    position = self.positions.get(node_id)
    return position is not None and position in self.visited

  def to_dict(self) -> dict[str, Any]:
    """Convert to JSON-serializable dict."""
    cells = sorted(self.store, key=lambda c: (c.position.y, c.position.x))
    return {
      "tree": self.tree_name,
      "root": self.root_id,
      "root_position": self.root_position.to_tuple() if self.root_position else None,
      "cells": [
        {
          "grid": cell.position.to_tuple(),
          "type": cell.type.value,
          "connections": [d.value for d in cell.connections],
          "traversable": cell.is_traversable,
          "node": cell.node.id if cell.node else None,
        }
        for cell in cells
      ],
      "visuals": [
        self.visuals[cell.position].to_dict() for cell in cells if cell.position in self.visuals
      ],
      "nodes": {
        node_id: {
          "grid": self.positions[node_id].to_tuple(),
          "state": state.value,
        }
        for node_id, state in sorted(self.node_states.items())
      },
    }


# =============================================================================
# Node Placement
# =============================================================================


def determine_cell_type(node: Node, root_id: str) -> CellType:
  """Cell type for a node. The designated root wins over the type tag."""
  if node.id == root_id:
    return CellType.ROOT_SKILL
  node_type = node.type.lower()
  if node_type.startswith("skill"):
    return CellType.SKILL
  if node_type == "root":
    return CellType.ROOT_SKILL
  return CellType.JUNCTION


def place_node(
  store: GridStore,
  node: Node,
  position: Point,
  root_id: str,
  purchased_ids: AbstractSet[str],
) -> SkillNodeInstance:
  """Occupy a grid cell with a node and register its runtime instance."""
  cell = store.get_or_create(position)
  if cell.node is not None and cell.node.id != node.id:
    logger.warning(f"Nodes '{cell.node.id}' and '{node.id}' both map to cell {position}")

  cell.node = node
  cell.type = determine_cell_type(node, root_id)
  cell.is_traversable = True

  instance = SkillNodeInstance(
    node_id=node.id,
    cell=cell,
    purchased=node.id == root_id or node.id in purchased_ids,
  )

  if node.id == root_id:
    store.root_position = position

  store.instances[node.id] = instance
  return instance


# =============================================================================
# Main Algorithm
# =============================================================================


def build_tree_grid(
  tree: TreeDefinition,
  config: GridConfig,
  purchased_ids: AbstractSet[str] = frozenset(),
  store: GridStore | None = None,
) -> BuildResult:
  """
  Build the pipe grid for one tree.

  Args:
      tree: Tree to build
      config: Sizing and color configuration
      purchased_ids: Ids of purchased skills (read only)
      store: Store to build into; it is cleared first. A new one if None.

  Returns:
      BuildResult holding the grid, visuals and node states

  Raises:
      SkillTreeBuildError: If two nodes share an id
  """
  store = store if store is not None else GridStore()
  store.clear()

  try:
    node_lookup = tree.node_lookup()
  except SkillTreeParseError as e:
    raise SkillTreeBuildError(str(e)) from e

  result = BuildResult(tree_name=tree.tree_name, root_id=tree.root_node_id, store=store)

  if not tree.nodes:
    logger.warning(f"Tree '{tree.tree_name}' has no nodes, nothing to build")
    return result

  mapper = CoordinateMapper(tree.nodes, config.ui_units_per_cell)
  result.positions = mapper.map_all(tree.nodes)

  for node in tree.nodes:
    place_node(store, node, result.positions[node.id], tree.root_node_id, purchased_ids)

  skipped = 0
  for edge in tree.edges:
    if not edge.is_complete:
      logger.debug(f"Skipping edge '{edge.id}': fewer than 2 endpoints")
      skipped += 1
      continue

    start_id, end_id = edge.endpoints[0], edge.endpoints[1]
    if start_id not in node_lookup or end_id not in node_lookup:
      logger.debug(f"Skipping edge '{edge.id}': unknown endpoint")
      skipped += 1
      continue

    build_pipe_path(store, result.positions[start_id], result.positions[end_id])

  result.visuals = build_cell_visuals(store, config)

  if tree.root_node_id not in store.instances:
    logger.warning(
      f"Root node '{tree.root_node_id}' not found in tree '{tree.tree_name}', "
      "skipping activation"
    )
    result.node_states = {node_id: NodeState.INACTIVE for node_id in store.instances}
  else:
    result.visited = find_reachable(store, store.root_position)
    result.node_states = resolve_activation(store, result.visited, tree.root_node_id, config)

  logger.info(
    f"Built tree '{tree.tree_name}': {len(tree.nodes)} nodes, "
    f"{len(tree.edges) - skipped} edges routed ({skipped} skipped), "
    f"{len(result.visuals)} visuals"
  )
  return result


class SkillTreeGridBuilder:
  """
  Rebuildable grid for one tree of a skill tree document.

  The purchased-id set is held by reference: callers may mutate it between
  builds and the next build() picks the change up.
  """

  def __init__(
    self,
    document: SkillTreeExport | str | None = None,
    tree_index: int = 0,
    config: GridConfig | None = None,
    purchased_ids: set[str] | None = None,
  ):
    self.document = document
    self.tree_index = tree_index
    self.config = config or GridConfig()
    self.purchased_ids = purchased_ids if purchased_ids is not None else set()
    self.store = GridStore()
    self.result: BuildResult | None = None

  def clear(self) -> None:
    """Drop the grid, node instances and visuals of the previous build."""
    self.store.clear()
    self.result = None

  def load_document(self) -> SkillTreeExport:
    """Get the document as an export, parsing it if it is JSON text."""
    if self.document is None:
      raise SkillTreeBuildError("Missing skill tree document")
    if isinstance(self.document, SkillTreeExport):
      return self.document
    try:
      return parse_export(self.document)
    except SkillTreeParseError as e:
      raise SkillTreeBuildError(f"Failed to parse skill tree document: {e}") from e

  def select_tree(self, export: SkillTreeExport) -> TreeDefinition:
    """Get the configured tree, index clamped into range."""
    try:
      tree = export.select_tree(self.tree_index)
    except SkillTreeParseError as e:
      raise SkillTreeBuildError(str(e)) from e
    if not 0 <= self.tree_index < len(export.trees):
      logger.debug(f"Tree index {self.tree_index} clamped into 0..{len(export.trees) - 1}")
    return tree

  def build(self) -> BuildResult:
    """
    Rebuild the grid from scratch.

    Raises:
        SkillTreeBuildError: If the document is missing or malformed. The
            grid is left cleared.
    """
    self.clear()
    export = self.load_document()
    tree = self.select_tree(export)
    self.result = build_tree_grid(tree, self.config, self.purchased_ids, self.store)
    return self.result


# =============================================================================
# Summary / Export
# =============================================================================


def get_build_summary(result: BuildResult) -> dict[str, Any]:
  """Get a summary of a build for display."""
  by_type: dict[str, int] = {}
  for cell in result.store:
    by_type[cell.type.value] = by_type.get(cell.type.value, 0) + 1

  by_state: dict[str, int] = {}
  for state in result.node_states.values():
    by_state[state.value] = by_state.get(state.value, 0) + 1

  return {
    "tree": result.tree_name,
    "root": result.root_id,
    "root_position": result.root_position.to_tuple() if result.root_position else None,
    "total_cells": len(result.store),
    "cells_by_type": by_type,
    "visuals": len(result.visuals),
    "reachable_cells": len(result.visited),
    "nodes_by_state": by_state,
  }


def save_build_result(result: BuildResult, path: Path | str) -> Path:
  """Save a build result to a JSON file."""
  path = Path(path)
  path.parent.mkdir(parents=True, exist_ok=True)
  with open(path, "w") as f:
    json.dump(result.to_dict(), f, indent=2)
  return path
