"""
Tests for grid geometry: Point, Direction and unit-step conversion.
"""

import pytest

from skilltree_grid.grid.geometry import (
  CARDINALS,
  Direction,
  InvalidDeltaError,
  Point,
  sign,
)

# =============================================================================
# Point Tests
# =============================================================================


class TestPoint:
  def test_str(self) -> None:
    assert str(Point(3, 5)) == "(3,5)"

  def test_add(self) -> None:
    assert Point(1, 2) + Point(3, 4) == Point(4, 6)

  def test_sub(self) -> None:
    assert Point(4, 6) - Point(3, 4) == Point(1, 2)

  def test_hashable(self) -> None:
    assert {Point(1, 1), Point(1, 1), Point(0, 1)} == {Point(1, 1), Point(0, 1)}

  def test_to_tuple(self) -> None:
    assert Point(3, 5).to_tuple() == (3, 5)


# =============================================================================
# Direction Tests
# =============================================================================


class TestDirection:
  def test_opposites(self) -> None:
    assert Direction.UP.opposite == Direction.DOWN
    assert Direction.DOWN.opposite == Direction.UP
    assert Direction.LEFT.opposite == Direction.RIGHT
    assert Direction.RIGHT.opposite == Direction.LEFT

  def test_opposite_is_involution(self) -> None:
    for direction in CARDINALS:
      assert direction.opposite.opposite == direction

  def test_offsets_y_up(self) -> None:
    assert Direction.UP.offset == Point(0, 1)
    assert Direction.RIGHT.offset == Point(1, 0)
    assert Direction.DOWN.offset == Point(0, -1)
    assert Direction.LEFT.offset == Point(-1, 0)

  def test_offset_and_opposite_cancel(self) -> None:
    for direction in CARDINALS:
      assert direction.offset + direction.opposite.offset == Point(0, 0)

  def test_from_delta_round_trip(self) -> None:
    for direction in CARDINALS:
      assert Direction.from_delta(direction.offset) == direction

  @pytest.mark.parametrize("delta", [Point(0, 0), Point(1, 1), Point(2, 0), Point(0, -3)])
  def test_from_delta_rejects_non_unit_steps(self, delta: Point) -> None:
    with pytest.raises(InvalidDeltaError):
      Direction.from_delta(delta)

  def test_invalid_delta_is_value_error(self) -> None:
    assert issubclass(InvalidDeltaError, ValueError)

  def test_cardinal_order(self) -> None:
    assert CARDINALS == (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT)


class TestSign:
  def test_sign(self) -> None:
    assert sign(5) == 1
    assert sign(-2) == -1
    assert sign(0) == 0
