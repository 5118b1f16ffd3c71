"""
Tests for flood fill reachability from the root cell.
"""

from skilltree_grid.grid.cells import GridStore
from skilltree_grid.grid.geometry import Direction, Point
from skilltree_grid.grid.paths import build_pipe_path
from skilltree_grid.grid.reachability import find_reachable


def line_store() -> GridStore:
  """(0,0) -> (3,0) as one straight run."""
  store = GridStore()
  build_pipe_path(store, Point(0, 0), Point(3, 0))
  return store


class TestFindReachable:
  def test_root_only(self) -> None:
    store = GridStore()
    store.get_or_create(Point(0, 0)).is_traversable = True
    assert find_reachable(store, Point(0, 0)) == {Point(0, 0)}

  def test_root_missing_from_store(self) -> None:
    assert find_reachable(GridStore(), Point(2, 2)) == {Point(2, 2)}

  def test_follows_path(self) -> None:
    visited = find_reachable(line_store(), Point(0, 0))
    assert visited == {Point(0, 0), Point(1, 0), Point(2, 0), Point(3, 0)}

  def test_disconnected_component_not_reached(self) -> None:
    store = line_store()
    build_pipe_path(store, Point(10, 10), Point(10, 12))
    visited = find_reachable(store, Point(0, 0))
    assert Point(10, 10) not in visited
    assert Point(10, 12) not in visited

  def test_one_sided_connection_is_not_followed(self) -> None:
    store = line_store()
    store.get(Point(2, 0)).remove_connection(Direction.LEFT)
    visited = find_reachable(store, Point(0, 0))
    assert visited == {Point(0, 0), Point(1, 0)}

  def test_non_traversable_neighbor_blocks(self) -> None:
    store = line_store()
    store.get(Point(2, 0)).is_traversable = False
    visited = find_reachable(store, Point(0, 0))
    assert visited == {Point(0, 0), Point(1, 0)}

  def test_removing_connections_never_grows_the_set(self) -> None:
    store = GridStore()
    build_pipe_path(store, Point(0, 0), Point(2, 2))
    build_pipe_path(store, Point(0, 0), Point(-2, 1))
    before = find_reachable(store, Point(0, 0))

    store.get(Point(-1, 0)).remove_connection(Direction.RIGHT)
    store.get(Point(0, 0)).remove_connection(Direction.LEFT)
    after = find_reachable(store, Point(0, 0))

    assert after <= before
    assert Point(-2, 1) not in after
    assert Point(2, 2) in after

  def test_loop_terminates(self) -> None:
    store = GridStore()
    build_pipe_path(store, Point(0, 0), Point(1, 1))
    build_pipe_path(store, Point(1, 1), Point(0, 0))
    visited = find_reachable(store, Point(0, 0))
    assert visited == {Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)}
