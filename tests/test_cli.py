"""
Tests for the skilltree-grid command line entry point.
"""

import json

import pytest

from skilltree_grid.cli import main, parse_args

DOCUMENT = {
  "schemaVersion": "1",
  "trees": [
    {
      "treeName": "Warrior",
      "rootNodeId": "root",
      "nodes": [
        {"id": "root", "type": "root", "ui": {"x": 0, "y": 0}},
        {"id": "slash", "type": "skill_active", "ui": {"x": 100, "y": 100}},
      ],
      "edges": [{"id": "e1", "endpoints": ["root", "slash"]}],
    }
  ],
}


@pytest.fixture
def document_path(tmp_path):
  path = tmp_path / "warrior.json"
  path.write_text(json.dumps(DOCUMENT))
  return path


class TestParseArgs:
  def test_defaults(self) -> None:
    args = parse_args(["tree.json"])
    assert args.tree == 0
    assert args.purchased == []
    assert args.output is None
    assert args.export is None
    assert not args.verbose

  def test_purchased(self) -> None:
    args = parse_args(["tree.json", "--purchased", "a", "b", "--tree", "2"])
    assert args.purchased == ["a", "b"]
    assert args.tree == 2


class TestMain:
  def test_missing_document(self, tmp_path, capsys) -> None:
    assert main([str(tmp_path / "missing.json")]) == 1
    assert "Error" in capsys.readouterr().out

  def test_unparsable_document(self, tmp_path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{nope")
    assert main([str(path)]) == 1

  def test_bad_config(self, document_path, tmp_path) -> None:
    config_path = tmp_path / "grid.json"
    config_path.write_text(json.dumps({"cell_size": -4}))
    assert main([str(document_path), "--config", str(config_path)]) == 1

  def test_build_with_outputs(self, document_path, tmp_path, capsys) -> None:
    export_path = tmp_path / "out" / "grid.json"
    output_path = tmp_path / "out" / "grid.png"
    code = main(
      [
        str(document_path),
        "--purchased",
        "slash",
        "--export",
        str(export_path),
        "--output",
        str(output_path),
      ]
    )
    assert code == 0
    assert output_path.exists()

    data = json.loads(export_path.read_text())
    assert data["nodes"]["slash"]["state"] == "active"
    assert data["nodes"]["root"]["state"] == "root"

    out = capsys.readouterr().out
    assert "Warrior" in out
    assert "active: 1" in out

  def test_config_file_applied(self, document_path, tmp_path) -> None:
    config_path = tmp_path / "grid.json"
    config_path.write_text(json.dumps({"cell_size": 10}))
    export_path = tmp_path / "grid.json.out"
    assert main([str(document_path), "--config", str(config_path), "--export", str(export_path)]) == 0
    data = json.loads(export_path.read_text())
    assert all(v["size"] == 10.0 for v in data["visuals"])
