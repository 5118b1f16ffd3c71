"""
Render requests for grid cells.

A CellVisual is what the build hands to a rendering layer: where one cell
goes on screen, how big it is, and either a flat color (node cells) or a
rotated, tinted pipe sprite. Its color is mutable so activation can
recolor skill cells after the visuals exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from skilltree_grid.config.grid_config import Color, GridConfig
from skilltree_grid.grid.autotile import TileVariant, classify_pipe, promote_pipe_cells
from skilltree_grid.grid.cells import CellType, GridCell, GridStore
from skilltree_grid.grid.geometry import Point


@dataclass
class CellVisual:
  """A request to draw one grid cell."""

  name: str
  position: Point
  screen_x: float
  screen_y: float
  size: float
  cell_type: CellType
  color: Color
  variant: TileVariant | None = None
  sprite: str | None = None
  rotation: float = 0.0

  def to_dict(self) -> dict[str, Any]:
    """Convert to JSON-serializable dict."""
    return {
      "name": self.name,
      "grid": self.position.to_tuple(),
      "screen": (self.screen_x, self.screen_y),
      "size": self.size,
      "type": self.cell_type.value,
      "color": list(self.color),
      "variant": self.variant.value if self.variant else None,
      "sprite": self.sprite,
      "rotation": self.rotation,
    }


def sprite_for(variant: TileVariant, config: GridConfig) -> str:
  """Get the configured sprite name for a pipe variant."""
  if variant == TileVariant.STRAIGHT:
    return config.straight_sprite
  if variant == TileVariant.ELBOW:
    return config.elbow_sprite
  return config.tee_sprite


def node_color(cell_type: CellType, config: GridConfig) -> Color:
  """Initial flat color for a node cell."""
  if cell_type == CellType.ROOT_SKILL:
    return config.root_skill_color
  if cell_type == CellType.SKILL:
    return config.inactive_skill_color
  if cell_type == CellType.JUNCTION:
    return config.junction_color
  return (1.0, 1.0, 1.0, 1.0)


def screen_position(position: Point, config: GridConfig) -> tuple[float, float]:
  """Screen position of a grid cell, padding applied."""
  pad_x, pad_y = config.grid_padding
  return (
    (position.x + pad_x) * config.cell_size,
    (position.y + pad_y) * config.cell_size,
  )


def create_cell_visual(cell: GridCell, config: GridConfig) -> CellVisual:
  """Build the render request for a non-empty cell."""
  screen_x, screen_y = screen_position(cell.position, config)
  visual = CellVisual(
    name=f"Cell_{cell.position.x}_{cell.position.y}",
    position=cell.position,
    screen_x=screen_x,
    screen_y=screen_y,
    size=config.cell_size,
    cell_type=cell.type,
    color=node_color(cell.type, config),
  )

  if cell.type == CellType.PIPE:
    pipe = classify_pipe(cell)
    visual.variant = pipe.variant
    visual.sprite = sprite_for(pipe.variant, config)
    visual.rotation = pipe.rotation
    visual.color = config.pipe_color

  return visual


def build_cell_visuals(store: GridStore, config: GridConfig) -> dict[Point, CellVisual]:
  """
  Classify pipes and create a visual for every non-empty cell.

  Skill and root cells get their visual attached to the owning node
  instance so activation can recolor it later.
  """
  promote_pipe_cells(store)

  visuals: dict[Point, CellVisual] = {}
  for cell in store:
    if cell.type == CellType.EMPTY:
      continue

    visual = create_cell_visual(cell, config)
    visuals[cell.position] = visual

    if cell.type.is_skill and cell.node is not None:
      instance = store.instances.get(cell.node.id)
      if instance is not None:
        instance.visual = visual

  return visuals
