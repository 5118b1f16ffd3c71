"""
Skill tree export document model and JSON loader.

The export format is a camelCase JSON document holding one or more trees.
Only node positions, edges and the root id drive the grid build; gates,
junction rules and pipe-puzzle metadata are parsed and carried through so a
round trip keeps them.

Missing fields fall back to neutral defaults (empty strings, zeros, empty
lists) so partially authored documents still load. Structural problems that
make the document unusable raise SkillTreeParseError.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


class SkillTreeParseError(ValueError):
  """Raised when a skill tree document cannot be parsed."""


# =============================================================================
# Field Helpers
# =============================================================================


def _obj(raw: Any, what: str) -> dict[str, Any]:
  if raw is None:
    return {}
  if not isinstance(raw, dict):
    raise SkillTreeParseError(f"Expected an object for {what}, got {type(raw).__name__}")
  return raw


def _list(raw: Any, what: str) -> list[Any]:
  if raw is None:
    return []
  if not isinstance(raw, list):
    raise SkillTreeParseError(f"Expected a list for {what}, got {type(raw).__name__}")
  return raw


def _str(data: dict[str, Any], key: str) -> str:
  value = data.get(key)
  return "" if value is None else str(value)


def _float(data: dict[str, Any], key: str) -> float:
  value = data.get(key)
  if value is None:
    return 0.0
  try:
    return float(value)
  except (TypeError, ValueError) as e:
    raise SkillTreeParseError(f"Invalid number for '{key}': {value!r}") from e


def _int(data: dict[str, Any], key: str) -> int:
  value = data.get(key)
  if value is None:
    return 0
  try:
    return int(value)
  except (TypeError, ValueError) as e:
    raise SkillTreeParseError(f"Invalid integer for '{key}': {value!r}") from e


def _bool(data: dict[str, Any], key: str) -> bool:
  value = data.get(key)
  if value is None:
    return False
  if not isinstance(value, bool):
    raise SkillTreeParseError(f"Invalid boolean for '{key}': {value!r}")
  return value


# =============================================================================
# Data Structures
# =============================================================================


@dataclass(frozen=True)
class UiRect:
  """Authoring-tool rectangle of a node. Only x and y are used."""

  x: float = 0.0
  y: float = 0.0
  w: float = 0.0
  h: float = 0.0

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> UiRect:
    return cls(
      x=_float(data, "x"),
      y=_float(data, "y"),
      w=_float(data, "w"),
      h=_float(data, "h"),
    )

  def to_dict(self) -> dict[str, Any]:
    return {"x": self.x, "y": self.y, "w": self.w, "h": self.h}


@dataclass(frozen=True)
class Node:
  """A skill, junction or root node of a tree."""

  id: str
  name: str = ""
  type: str = ""
  style_hint: str = ""
  ui: UiRect = field(default_factory=UiRect)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> Node:
    return cls(
      id=_str(data, "id"),
      name=_str(data, "name"),
      type=_str(data, "type"),
      style_hint=_str(data, "styleHint"),
      ui=UiRect.from_dict(_obj(data.get("ui"), "node.ui")),
    )

  def to_dict(self) -> dict[str, Any]:
    return {
      "id": self.id,
      "name": self.name,
      "type": self.type,
      "styleHint": self.style_hint,
      "ui": self.ui.to_dict(),
    }


@dataclass(frozen=True)
class PipePuzzle:
  """Pipe-puzzle metadata attached to an edge (not interpreted here)."""

  kind: str = ""
  tile_types: tuple[str, ...] = ()
  rotation_step_degrees: int = 0
  path_id: str = ""
  note: str = ""

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> PipePuzzle:
    return cls(
      kind=_str(data, "kind"),
      tile_types=tuple(str(t) for t in _list(data.get("tileTypes"), "pipePuzzle.tileTypes")),
      rotation_step_degrees=_int(data, "rotationStepDegrees"),
      path_id=_str(data, "pathId"),
      note=_str(data, "note"),
    )

  def to_dict(self) -> dict[str, Any]:
    return {
      "kind": self.kind,
      "tileTypes": list(self.tile_types),
      "rotationStepDegrees": self.rotation_step_degrees,
      "pathId": self.path_id,
      "note": self.note,
    }


@dataclass(frozen=True)
class Edge:
  """An undirected connection between two nodes."""

  id: str
  endpoints: tuple[str, ...] = ()
  switchable: bool = False
  pipe_puzzle: PipePuzzle | None = None
  style_hint: str = ""
  label: str = ""

  @property
  def is_complete(self) -> bool:
    """True if the edge names at least two endpoints."""
    return len(self.endpoints) >= 2

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> Edge:
    puzzle = data.get("pipePuzzle")
    return cls(
      id=_str(data, "id"),
      endpoints=tuple(
        "" if e is None else str(e) for e in _list(data.get("endpoints"), "edge.endpoints")
      ),
      switchable=_bool(data, "switchable"),
      pipe_puzzle=(
        PipePuzzle.from_dict(_obj(puzzle, "edge.pipePuzzle")) if puzzle is not None else None
      ),
      style_hint=_str(data, "styleHint"),
      label=_str(data, "label"),
    )

  def to_dict(self) -> dict[str, Any]:
    data: dict[str, Any] = {
      "id": self.id,
      "endpoints": list(self.endpoints),
      "switchable": self.switchable,
      "styleHint": self.style_hint,
      "label": self.label,
    }
    if self.pipe_puzzle is not None:
      data["pipePuzzle"] = self.pipe_puzzle.to_dict()
    return data


@dataclass(frozen=True)
class GateFillRule:
  source: str = ""
  counts_stacked_ranks: bool = False

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> GateFillRule:
    return cls(
      source=_str(data, "source"),
      counts_stacked_ranks=_bool(data, "countsStackedRanks"),
    )

  def to_dict(self) -> dict[str, Any]:
    return {"source": self.source, "countsStackedRanks": self.counts_stacked_ranks}


@dataclass(frozen=True)
class Gate:
  """A prerequisite gate attached to a node. Carried, never evaluated."""

  id: str
  attached_to_node_id: str = ""
  type: str = ""
  required_prereq_upgrades: int = 0
  counts_toward: str = ""
  fill_rule: GateFillRule = field(default_factory=GateFillRule)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> Gate:
    return cls(
      id=_str(data, "id"),
      attached_to_node_id=_str(data, "attachedToNodeId"),
      type=_str(data, "type"),
      required_prereq_upgrades=_int(data, "requiredPrereqUpgrades"),
      counts_toward=_str(data, "countsToward"),
      fill_rule=GateFillRule.from_dict(_obj(data.get("fillRule"), "gate.fillRule")),
    )

  def to_dict(self) -> dict[str, Any]:
    return {
      "id": self.id,
      "attachedToNodeId": self.attached_to_node_id,
      "type": self.type,
      "requiredPrereqUpgrades": self.required_prereq_upgrades,
      "countsToward": self.counts_toward,
      "fillRule": self.fill_rule.to_dict(),
    }


@dataclass(frozen=True)
class JunctionTypes:
  """Rules text for the junction node kinds used by the tree."""

  junction_split: str = ""
  junction_multi_split_t_2of3: str = ""

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> JunctionTypes:
    split = _obj(data.get("junction_split"), "junctionTypes.junction_split")
    multi = _obj(
      data.get("junction_multi_split_T_2of3"),
      "junctionTypes.junction_multi_split_T_2of3",
    )
    return cls(
      junction_split=_str(split, "rule"),
      junction_multi_split_t_2of3=_str(multi, "rule"),
    )

  def to_dict(self) -> dict[str, Any]:
    return {
      "junction_split": {"rule": self.junction_split},
      "junction_multi_split_T_2of3": {"rule": self.junction_multi_split_t_2of3},
    }


@dataclass(frozen=True)
class TreeDefinition:
  """One skill tree: nodes, edges, gates and the designated root."""

  tree_name: str = ""
  nodes: tuple[Node, ...] = ()
  edges: tuple[Edge, ...] = ()
  gates: tuple[Gate, ...] = ()
  root_node_id: str = ""
  junction_types: JunctionTypes = field(default_factory=JunctionTypes)

  def node_lookup(self) -> dict[str, Node]:
    """
    Map node ids to nodes.

    Raises:
        SkillTreeParseError: If two nodes share an id
    """
    lookup: dict[str, Node] = {}
    for node in self.nodes:
      if node.id in lookup:
        raise SkillTreeParseError(
          f"Duplicate node id '{node.id}' in tree '{self.tree_name}'"
        )
      lookup[node.id] = node
    return lookup

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> TreeDefinition:
    return cls(
      tree_name=_str(data, "treeName"),
      nodes=tuple(
        Node.from_dict(_obj(n, "node")) for n in _list(data.get("nodes"), "tree.nodes")
      ),
      edges=tuple(
        Edge.from_dict(_obj(e, "edge")) for e in _list(data.get("edges"), "tree.edges")
      ),
      gates=tuple(
        Gate.from_dict(_obj(g, "gate")) for g in _list(data.get("gates"), "tree.gates")
      ),
      root_node_id=_str(data, "rootNodeId"),
      junction_types=JunctionTypes.from_dict(
        _obj(data.get("junctionTypes"), "tree.junctionTypes")
      ),
    )

  def to_dict(self) -> dict[str, Any]:
    return {
      "treeName": self.tree_name,
      "nodes": [n.to_dict() for n in self.nodes],
      "edges": [e.to_dict() for e in self.edges],
      "gates": [g.to_dict() for g in self.gates],
      "rootNodeId": self.root_node_id,
      "junctionTypes": self.junction_types.to_dict(),
    }


@dataclass(frozen=True)
class ModelNotes:
  """Free-text notes describing how the authoring tool meant the data."""

  edges_are_undirected: bool = False
  skill_active_rule: str = ""
  pipe_puzzle_rule: str = ""
  prereq_fill_rule: str = ""

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> ModelNotes:
    return cls(
      edges_are_undirected=_bool(data, "edgesAreUndirected"),
      skill_active_rule=_str(data, "skillActiveRule"),
      pipe_puzzle_rule=_str(data, "pipePuzzleRule"),
      prereq_fill_rule=_str(data, "prereqFillRule"),
    )

  def to_dict(self) -> dict[str, Any]:
    return {
      "edgesAreUndirected": self.edges_are_undirected,
      "skillActiveRule": self.skill_active_rule,
      "pipePuzzleRule": self.pipe_puzzle_rule,
      "prereqFillRule": self.prereq_fill_rule,
    }


@dataclass(frozen=True)
class SkillTreeExport:
  """Top-level export document."""

  trees: tuple[TreeDefinition, ...]
  schema_version: str = ""
  generated_from: str = ""
  model_notes: ModelNotes = field(default_factory=ModelNotes)

  def select_tree(self, index: int) -> TreeDefinition:
    """Get the tree at index, clamped into the valid range."""
    if not self.trees:
      raise SkillTreeParseError("Document contains no trees")
    return self.trees[max(0, min(index, len(self.trees) - 1))]

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> SkillTreeExport:
    trees = _list(data.get("trees"), "trees")
    if not trees:
      raise SkillTreeParseError("Document contains no trees")
    return cls(
      trees=tuple(TreeDefinition.from_dict(_obj(t, "tree")) for t in trees),
      schema_version=_str(data, "schemaVersion"),
      generated_from=_str(data, "generatedFrom"),
      model_notes=ModelNotes.from_dict(_obj(data.get("modelNotes"), "modelNotes")),
    )

  def to_dict(self) -> dict[str, Any]:
    return {
      "schemaVersion": self.schema_version,
      "generatedFrom": self.generated_from,
      "modelNotes": self.model_notes.to_dict(),
      "trees": [t.to_dict() for t in self.trees],
    }


# =============================================================================
# Loading
# =============================================================================


def parse_export(text: str) -> SkillTreeExport:
  """
  Parse a skill tree export from JSON text.

  Raises:
      SkillTreeParseError: If the text is not valid JSON, the root is not an
          object, or the document holds no trees
  """
  if not text or not text.strip():
    raise SkillTreeParseError("Document is empty")
  try:
    data = json.loads(text)
  except json.JSONDecodeError as e:
    raise SkillTreeParseError(f"Invalid JSON: {e}") from e
  if not isinstance(data, dict):
    raise SkillTreeParseError("Document root must be a JSON object")
  return SkillTreeExport.from_dict(data)


def load_export(path: Path | str) -> SkillTreeExport:
  """Load a skill tree export from a JSON file."""
  path = Path(path)
  if not path.exists():
    raise FileNotFoundError(f"Skill tree document not found: {path}")
  with open(path, encoding="utf-8") as f:
    return parse_export(f.read())


def save_export(export: SkillTreeExport, path: Path | str) -> Path:
  """Write an export document back out as JSON."""
  path = Path(path)
  with open(path, "w", encoding="utf-8") as f:
    json.dump(export.to_dict(), f, indent=2)
  return path
