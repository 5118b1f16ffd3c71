"""
Sparse grid storage for one tree build.

Cells are keyed by integer Point and created lazily on first reference.
The store also owns the per-node runtime records; both are discarded
wholesale by clear() at the start of every build.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterator

from skilltree_grid.data.tree_model import Node
from skilltree_grid.grid.geometry import CARDINALS, Direction, Point

if TYPE_CHECKING:
  from skilltree_grid.rendering.visuals import CellVisual


class CellType(Enum):
  """What occupies a grid cell."""

  EMPTY = "empty"
  PIPE = "pipe"
  JUNCTION = "junction"
  SKILL = "skill"
  ROOT_SKILL = "root_skill"

  @property
  def is_skill(self) -> bool:
    return self in (CellType.SKILL, CellType.ROOT_SKILL)


@dataclass
class GridCell:
  """State of one grid coordinate."""

  position: Point
  type: CellType = CellType.EMPTY
  is_traversable: bool = False
  node: Node | None = None
  _connections: set[Direction] = field(default_factory=set, repr=False)

  @property
  def connections(self) -> list[Direction]:
    """Connected directions in Up, Right, Down, Left order."""
    return [d for d in CARDINALS if d in self._connections]

  @property
  def connection_count(self) -> int:
    return len(self._connections)

  def add_connection(self, direction: Direction) -> None:
    self._connections.add(direction)

  def remove_connection(self, direction: Direction) -> None:
    self._connections.discard(direction)

  def has_connection(self, direction: Direction) -> bool:
    return direction in self._connections

  def has_opposite_connections(self) -> bool:
    """True if the cell connects straight through on either axis."""
    return (
      self.has_connection(Direction.LEFT) and self.has_connection(Direction.RIGHT)
    ) or (self.has_connection(Direction.UP) and self.has_connection(Direction.DOWN))


@dataclass
class SkillNodeInstance:
  """Runtime record of one node for the current build."""

  node_id: str
  cell: GridCell
  purchased: bool = False
  visual: CellVisual | None = None


class GridStore:
  """Coordinate-keyed cells plus the node-instance table."""

  def __init__(self) -> None:
    self.cells: dict[Point, GridCell] = {}
    self.instances: dict[str, SkillNodeInstance] = {}
    self.root_position: Point | None = None

  def __len__(self) -> int:
    return len(self.cells)

  def __contains__(self, position: object) -> bool:
    return position in self.cells

  def __iter__(self) -> Iterator[GridCell]:
    return iter(self.cells.values())

  def get(self, position: Point) -> GridCell | None:
    """Get the cell at position, or None if it was never referenced."""
    return self.cells.get(position)

  def get_or_create(self, position: Point) -> GridCell:
    """Get the cell at position, creating an empty one if needed."""
    cell = self.cells.get(position)
    if cell is None:
      cell = GridCell(position)
      self.cells[position] = cell
    return cell

  def clear(self) -> None:
    """Discard every cell and node instance."""
    self.cells.clear()
    self.instances.clear()
    self.root_position = None

  def cells_of_type(self, cell_type: CellType) -> list[GridCell]:
    return [c for c in self.cells.values() if c.type == cell_type]
