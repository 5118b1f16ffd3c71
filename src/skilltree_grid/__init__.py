"""
Skill tree pipe grid builder.

Converts a freeform skill tree (nodes with UI positions, edges between them)
into an integer grid with orthogonal pipe routing, picks an autotile sprite
and rotation for every pipe cell, and flood fills from the root to decide
which purchased skills are active.
"""

from skilltree_grid.builder import (
  BuildResult,
  SkillTreeBuildError,
  SkillTreeGridBuilder,
  build_tree_grid,
)
from skilltree_grid.config.grid_config import GridConfig
from skilltree_grid.data.tree_model import SkillTreeExport, load_export, parse_export

__all__ = [
  "BuildResult",
  "GridConfig",
  "SkillTreeBuildError",
  "SkillTreeExport",
  "SkillTreeGridBuilder",
  "build_tree_grid",
  "load_export",
  "parse_export",
]
