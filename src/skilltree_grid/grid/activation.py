"""
Decide which skills are active and recolor their visuals.

A skill is active when it is both purchased and reachable from the root
through the pipe network. The root is always shown in the root color.
"""

from __future__ import annotations

import logging
from enum import Enum

from skilltree_grid.config.grid_config import GridConfig
from skilltree_grid.grid.cells import GridStore
from skilltree_grid.grid.geometry import Point

logger = logging.getLogger(__name__)


class NodeState(Enum):
  """Visual state of a node after activation."""

  ROOT = "root"
  ACTIVE = "active"
  INACTIVE = "inactive"


def resolve_activation(
  store: GridStore,
  visited: set[Point],
  root_id: str,
  config: GridConfig,
) -> dict[str, NodeState]:
  """
  Compute every node's state and push the matching color to its visual.

  Args:
      store: Grid store holding the node instances
      visited: Cells reachable from the root
      root_id: Id of the tree's root node
      config: Supplies the active, inactive and root colors

  Returns:
      Node id -> NodeState for every instance
  """
  states: dict[str, NodeState] = {}

  for node_id, instance in store.instances.items():
    is_reachable = instance.cell.position in visited
    is_active = is_reachable and instance.purchased
    states[node_id] = NodeState.ACTIVE if is_active else NodeState.INACTIVE
    if instance.visual is not None:
      instance.visual.color = (
        config.active_skill_color if is_active else config.inactive_skill_color
      )

  root = store.instances.get(root_id)
  if root is not None:
    states[root_id] = NodeState.ROOT
    if root.visual is not None:
      root.visual.color = config.root_skill_color

  active_count = sum(1 for s in states.values() if s == NodeState.ACTIVE)
  logger.debug(f"Activation: {active_count} active of {len(states)} nodes")
  return states
