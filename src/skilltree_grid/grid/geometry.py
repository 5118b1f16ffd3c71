"""
Integer grid geometry for the skill-tree pipe grid.

Grid coordinates grow to the right along x and upward along y, so
``Direction.UP`` is ``(0, 1)``. Every connection between two cells is one
unit step along exactly one axis.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Point:
  """A 2D integer grid coordinate."""

  x: int
  y: int

  def __str__(self) -> str:
    return f"({self.x},{self.y})"

  def __add__(self, other: Point) -> Point:
    return Point(self.x + other.x, self.y + other.y)

  def __sub__(self, other: Point) -> Point:
    return Point(self.x - other.x, self.y - other.y)

  def to_tuple(self) -> tuple[int, int]:
    """Convert to a tuple."""
    return (self.x, self.y)


class InvalidDeltaError(ValueError):
  """Raised when two cells being connected are not one cardinal step apart."""


class Direction(Enum):
  """The four cardinal connection directions, in classifier priority order."""

  UP = "up"
  RIGHT = "right"
  DOWN = "down"
  LEFT = "left"

  @property
  def opposite(self) -> Direction:
    return _OPPOSITES[self]

  @property
  def offset(self) -> Point:
    """Unit step for this direction."""
    return _OFFSETS[self]

  @classmethod
  def from_delta(cls, delta: Point) -> Direction:
    """
    Get the direction of a unit step.

    Raises:
        InvalidDeltaError: If delta is not exactly one cardinal unit step
    """
    for direction, offset in _OFFSETS.items():
      if offset == delta:
        return direction
    raise InvalidDeltaError(f"Invalid delta: {delta}")


_OPPOSITES: dict[Direction, Direction] = {
  Direction.UP: Direction.DOWN,
  Direction.RIGHT: Direction.LEFT,
  Direction.DOWN: Direction.UP,
  Direction.LEFT: Direction.RIGHT,
}

_OFFSETS: dict[Direction, Point] = {
  Direction.UP: Point(0, 1),
  Direction.RIGHT: Point(1, 0),
  Direction.DOWN: Point(0, -1),
  Direction.LEFT: Point(-1, 0),
}

# Fixed iteration order used wherever directions are enumerated
CARDINALS: tuple[Direction, ...] = (
  Direction.UP,
  Direction.RIGHT,
  Direction.DOWN,
  Direction.LEFT,
)


def sign(value: int) -> int:
  """Return -1, 0 or 1 according to the sign of value."""
  return (value > 0) - (value < 0)
