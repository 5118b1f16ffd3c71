"""
Tests for rasterizing edges into pipe paths.
"""

import pytest

from skilltree_grid.grid.cells import GridStore
from skilltree_grid.grid.geometry import Direction, InvalidDeltaError, Point
from skilltree_grid.grid.paths import add_connection, build_pipe_path, rasterize_path

# =============================================================================
# Rasterization Tests
# =============================================================================


class TestRasterizePath:
  def test_same_point(self) -> None:
    assert rasterize_path(Point(2, 2), Point(2, 2)) == []

  def test_adjacent(self) -> None:
    assert rasterize_path(Point(0, 0), Point(1, 0)) == [Point(1, 0)]

  def test_horizontal_only(self) -> None:
    assert rasterize_path(Point(3, 1), Point(0, 1)) == [Point(2, 1), Point(1, 1), Point(0, 1)]

  def test_vertical_only(self) -> None:
    assert rasterize_path(Point(0, 0), Point(0, -2)) == [Point(0, -1), Point(0, -2)]

  def test_x_before_y(self) -> None:
    """Diagonal routes walk the whole x distance before any y step."""
    assert rasterize_path(Point(0, 0), Point(1, 1)) == [Point(1, 0), Point(1, 1)]

  def test_l_shape(self) -> None:
    path = rasterize_path(Point(0, 0), Point(2, -2))
    assert path == [Point(1, 0), Point(2, 0), Point(2, -1), Point(2, -2)]

  def test_every_step_is_unit(self) -> None:
    start = Point(-3, 4)
    path = rasterize_path(start, Point(5, -1))
    previous = start
    for step in path:
      Direction.from_delta(step - previous)
      previous = step
    assert len(path) == 8 + 5


# =============================================================================
# Connection Tests
# =============================================================================


class TestAddConnection:
  def test_symmetric(self) -> None:
    store = GridStore()
    direction = add_connection(store, Point(0, 0), Point(0, 1))
    assert direction == Direction.UP
    assert store.get(Point(0, 0)).connections == [Direction.UP]
    assert store.get(Point(0, 1)).connections == [Direction.DOWN]

  def test_marks_traversable(self) -> None:
    store = GridStore()
    add_connection(store, Point(0, 0), Point(-1, 0))
    assert store.get(Point(0, 0)).is_traversable
    assert store.get(Point(-1, 0)).is_traversable

  def test_deduplicates(self) -> None:
    store = GridStore()
    add_connection(store, Point(0, 0), Point(1, 0))
    add_connection(store, Point(1, 0), Point(0, 0))
    assert store.get(Point(0, 0)).connection_count == 1
    assert store.get(Point(1, 0)).connection_count == 1

  def test_non_adjacent_raises(self) -> None:
    store = GridStore()
    with pytest.raises(InvalidDeltaError):
      add_connection(store, Point(0, 0), Point(1, 1))


class TestBuildPipePath:
  def test_elbow_connections(self) -> None:
    store = GridStore()
    path = build_pipe_path(store, Point(0, 0), Point(1, 1))
    assert path == [Point(1, 0), Point(1, 1)]
    assert store.get(Point(0, 0)).connections == [Direction.RIGHT]
    assert store.get(Point(1, 0)).connections == [Direction.UP, Direction.LEFT]
    assert store.get(Point(1, 1)).connections == [Direction.DOWN]

  def test_same_point_adds_nothing(self) -> None:
    store = GridStore()
    build_pipe_path(store, Point(4, 4), Point(4, 4))
    assert len(store) == 0

  def test_overlapping_paths_merge(self) -> None:
    store = GridStore()
    build_pipe_path(store, Point(0, 0), Point(2, 0))
    build_pipe_path(store, Point(0, 0), Point(1, 1))
    assert store.get(Point(1, 0)).connections == [
      Direction.UP,
      Direction.RIGHT,
      Direction.LEFT,
    ]
