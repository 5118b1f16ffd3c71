"""
Build a skill tree pipe grid from an export document.

Usage:
  uv run skilltree-grid <document.json> [--tree N] [--purchased ID ...]

Example:
  uv run skilltree-grid trees/warrior.json \\
    --tree 0 \\
    --purchased skill_slash skill_parry \\
    --output previews/warrior.png \\
    --export previews/warrior_grid.json

Grid sizing and colors come from GridConfig defaults, then an optional
--config JSON file, then SKILLTREE_* environment variables (a .env file in
the working directory is loaded first).
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from dotenv import load_dotenv

from skilltree_grid.builder import (
  SkillTreeBuildError,
  SkillTreeGridBuilder,
  get_build_summary,
  save_build_result,
)
from skilltree_grid.config.grid_config import GridConfig, load_grid_config
from skilltree_grid.data.tree_model import SkillTreeParseError, load_export
from skilltree_grid.grid.validation import validate_grid
from skilltree_grid.rendering.grid_renderer import GridRenderer


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
  parser = argparse.ArgumentParser(
    description="Build a skill tree pipe grid and report which skills are active.",
    formatter_class=argparse.RawDescriptionHelpFormatter,
    epilog=__doc__,
  )
  parser.add_argument(
    "document",
    type=Path,
    help="Path to the skill tree export JSON",
  )
  parser.add_argument(
    "--tree",
    type=int,
    default=0,
    help="Index of the tree to build (clamped into range, default: 0)",
  )
  parser.add_argument(
    "--purchased",
    nargs="*",
    default=[],
    metavar="ID",
    help="Ids of purchased skills",
  )
  parser.add_argument(
    "--config",
    type=Path,
    default=None,
    help="JSON file with GridConfig overrides",
  )
  parser.add_argument(
    "--sprites",
    type=Path,
    default=None,
    help="Directory with pipe sprite PNGs (defaults are drawn if missing)",
  )
  parser.add_argument(
    "--output",
    type=Path,
    default=None,
    help="Write a PNG preview of the grid here",
  )
  parser.add_argument(
    "--export",
    type=Path,
    default=None,
    help="Write the build result as JSON here",
  )
  parser.add_argument(
    "--verbose",
    action="store_true",
    help="Enable debug logging",
  )
  return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
  args = parse_args(argv)

  logging.basicConfig(
    level=logging.DEBUG if args.verbose else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
  )
  load_dotenv()

  try:
    base = load_grid_config(args.config) if args.config else GridConfig()
    config = GridConfig.from_env(base)
  except (FileNotFoundError, ValueError) as e:
    print(f"❌ Error loading config: {e}")
    return 1

  try:
    document = load_export(args.document)
  except FileNotFoundError as e:
    print(f"❌ Error: {e}")
    return 1
  except SkillTreeParseError as e:
    print(f"❌ Error parsing {args.document}: {e}")
    return 1

  builder = SkillTreeGridBuilder(
    document=document,
    tree_index=args.tree,
    config=config,
    purchased_ids=set(args.purchased),
  )

  try:
    result = builder.build()
  except SkillTreeBuildError as e:
    print(f"❌ Build failed: {e}")
    return 1

  summary = get_build_summary(result)
  print(f"🌳 Tree: {summary['tree'] or '(unnamed)'} (root: {summary['root']})")
  print(f"   Root cell: {summary['root_position']}")
  print(f"   Cells: {summary['total_cells']} ({summary['visuals']} rendered)")
  for cell_type, count in sorted(summary["cells_by_type"].items()):
    print(f"     {cell_type}: {count}")
  print(f"   Reachable cells: {summary['reachable_cells']}")
  print("   Nodes by state:")
  for state, count in sorted(summary["nodes_by_state"].items()):
    print(f"     {state}: {count}")

  is_valid, errors = validate_grid(result.store)
  if not is_valid:
    print("\n⚠️  Grid warnings:")
    for error in errors:
      print(f"   - {error}")

  if args.export:
    path = save_build_result(result, args.export)
    print(f"💾 Saved build result to {path}")

  if args.output:
    renderer = GridRenderer(config=config, sprite_dir=args.sprites)
    path = renderer.save(result, args.output)
    print(f"🖼️  Saved preview to {path}")

  return 0


if __name__ == "__main__":
  exit(main())
