"""
Autotile classification for pipe cells.

A pipe cell's sprite and rotation depend only on which of its four sides are
connected. Three sprite variants cover every case:

- straight: two opposite connections; authored vertical (Up+Down) at 0 degrees
- elbow: two adjacent connections; authored Up+Right at 0 degrees
- tee: everything else; authored Up+Right+Left (open Down) at 0 degrees

Rotations are counter-clockwise degrees in {0, 90, 180, 270}.

Cells with zero, one or four connections also classify as a tee. No tee
orientation actually matches those shapes; the behavior is kept as-is so
existing trees render the same.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from skilltree_grid.grid.cells import CellType, GridCell, GridStore
from skilltree_grid.grid.geometry import Direction


class TileVariant(Enum):
  """Pipe sprite variants."""

  STRAIGHT = "straight"
  ELBOW = "elbow"
  TEE = "tee"


@dataclass(frozen=True)
class PipeVisual:
  """Sprite variant and rotation for one pipe cell."""

  variant: TileVariant
  rotation: float


# Elbow rotation by connected pair, checked in this order
_ELBOW_ROTATIONS: list[tuple[Direction, Direction, float]] = [
  (Direction.UP, Direction.RIGHT, 0.0),
  (Direction.RIGHT, Direction.DOWN, 270.0),
  (Direction.DOWN, Direction.LEFT, 180.0),
  (Direction.LEFT, Direction.UP, 90.0),
]

# Tee rotation by the first missing side, checked in this order
_TEE_ROTATIONS: list[tuple[Direction, float]] = [
  (Direction.UP, 180.0),
  (Direction.RIGHT, 90.0),
  (Direction.DOWN, 0.0),
  (Direction.LEFT, 270.0),
]


def get_elbow_rotation(cell: GridCell) -> float:
  for first, second, rotation in _ELBOW_ROTATIONS:
    if cell.has_connection(first) and cell.has_connection(second):
      return rotation
  return 0.0


def get_tee_rotation(cell: GridCell) -> float:
  for missing, rotation in _TEE_ROTATIONS:
    if not cell.has_connection(missing):
      return rotation
  return 0.0


def classify_pipe(cell: GridCell) -> PipeVisual:
  """Pick the sprite variant and rotation for a pipe cell."""
  count = cell.connection_count
  if count == 2 and cell.has_opposite_connections():
    rotation = 90.0 if cell.has_connection(Direction.LEFT) else 0.0
    return PipeVisual(TileVariant.STRAIGHT, rotation)

  if count == 2:
    return PipeVisual(TileVariant.ELBOW, get_elbow_rotation(cell))

  return PipeVisual(TileVariant.TEE, get_tee_rotation(cell))


def promote_pipe_cells(store: GridStore) -> int:
  """
  Turn every connected empty cell into a pipe cell.

  Returns the number of cells promoted.
  """
  promoted = 0
  for cell in store:
    if cell.type == CellType.EMPTY and cell.connection_count > 0:
      cell.type = CellType.PIPE
      promoted += 1
  return promoted
