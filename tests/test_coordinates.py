"""
Tests for quantizing UI positions onto the grid.
"""

import pytest

from skilltree_grid.data.tree_model import Node, UiRect
from skilltree_grid.grid.coordinates import CoordinateMapper, compute_min_ui, ui_to_grid
from skilltree_grid.grid.geometry import Point


def node_at(node_id: str, x: float, y: float) -> Node:
  return Node(id=node_id, type="skill", ui=UiRect(x=x, y=y))


class TestComputeMinUi:
  def test_min_per_axis(self) -> None:
    nodes = [node_at("a", 50, 300), node_at("b", -20, 400), node_at("c", 10, -5)]
    assert compute_min_ui(nodes) == (-20, -5)

  def test_empty_raises(self) -> None:
    with pytest.raises(ValueError):
      compute_min_ui([])


class TestUiToGrid:
  def test_exact_multiples(self) -> None:
    assert ui_to_grid(UiRect(x=300, y=200), (0, 0), 100) == Point(3, 2)

  def test_relative_to_minimum(self) -> None:
    assert ui_to_grid(UiRect(x=150, y=-50), (-50, -250), 100) == Point(2, 2)

  def test_rounds_to_nearest(self) -> None:
    assert ui_to_grid(UiRect(x=140, y=160), (0, 0), 100) == Point(1, 2)

  def test_half_rounds_to_even(self) -> None:
    assert ui_to_grid(UiRect(x=50, y=150), (0, 0), 100) == Point(0, 2)
    assert ui_to_grid(UiRect(x=250, y=350), (0, 0), 100) == Point(2, 4)

  def test_scale(self) -> None:
    assert ui_to_grid(UiRect(x=100, y=100), (0, 0), 50) == Point(2, 2)


class TestCoordinateMapper:
  def test_minimum_lands_at_origin(self) -> None:
    nodes = [node_at("a", 500, 700), node_at("b", 700, 900)]
    mapper = CoordinateMapper(nodes, 100)
    assert mapper.to_grid(nodes[0]) == Point(0, 0)
    assert mapper.to_grid(nodes[1]) == Point(2, 2)

  def test_map_all(self) -> None:
    nodes = [node_at("a", 0, 0), node_at("b", 100, 0), node_at("c", 100, 100)]
    positions = CoordinateMapper(nodes, 100).map_all(nodes)
    assert positions == {"a": Point(0, 0), "b": Point(1, 0), "c": Point(1, 1)}

  def test_position_depends_only_on_own_ui_and_minimum(self) -> None:
    """Adding a node that keeps the minimum does not move the others."""
    base = [node_at("a", 0, 0), node_at("b", 230, 170)]
    extended = base + [node_at("c", 900, 40)]
    before = CoordinateMapper(base, 100).map_all(base)
    after = CoordinateMapper(extended, 100).map_all(extended)
    assert after["a"] == before["a"]
    assert after["b"] == before["b"]

  def test_deterministic(self) -> None:
    nodes = [node_at("a", 12.5, 87.5), node_at("b", 349.9, 250.1)]
    first = CoordinateMapper(nodes, 100).map_all(nodes)
    second = CoordinateMapper(nodes, 100).map_all(nodes)
    assert first == second

  def test_rejects_non_positive_scale(self) -> None:
    with pytest.raises(ValueError):
      CoordinateMapper([node_at("a", 0, 0)], 0)
