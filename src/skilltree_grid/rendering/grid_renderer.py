"""
Preview renderer for built skill tree grids.

Draws every CellVisual of a build result into one RGBA image:
- Node cells as flat squares in their current color
- Pipe cells as tinted sprites rotated counter-clockwise

Grid y grows upward while image rows grow downward, so positions are
flipped vertically. Sprite content is not flipped.
"""
import logging
import math
from pathlib import Path
from typing import Dict, Optional, Tuple

import numpy as np
from PIL import Image

from skilltree_grid.builder import BuildResult
from skilltree_grid.config.grid_config import Color, GridConfig
from skilltree_grid.grid.autotile import TileVariant
from skilltree_grid.rendering.sprites import load_sprites
from skilltree_grid.rendering.visuals import CellVisual

logger = logging.getLogger(__name__)


def to_rgba8(color: Color) -> Tuple[int, int, int, int]:
    """Convert a 0.0-1.0 RGBA color to 8-bit channels"""
    return tuple(int(round(max(0.0, min(1.0, c)) * 255)) for c in color)


def tint_sprite(sprite: Image.Image, color: Color) -> Image.Image:
    """Multiply a white sprite by an RGBA color"""
    pixels = np.asarray(sprite.convert('RGBA'), dtype=np.float32)
    tinted = pixels * np.array(color, dtype=np.float32)
    return Image.fromarray(np.clip(tinted, 0, 255).astype(np.uint8), 'RGBA')


class GridRenderer:
    """Renders build results to images"""

    def __init__(
        self,
        config: Optional[GridConfig] = None,
        background_color: Tuple[int, int, int, int] = (24, 24, 28, 255),
        sprite_dir: Optional[Path] = None,
    ):
        """
        Initialize grid renderer.

        Args:
            config: Grid config the results were built with (sizes, sprite names)
            background_color: RGBA canvas color
            sprite_dir: Directory holding <sprite name>.png files; defaults are
                drawn for any that are missing
        """
        self.config = config or GridConfig()
        self.background_color = background_color
        self.cell_px = max(1, int(round(self.config.cell_size)))
        self.sprites: Dict[TileVariant, Image.Image] = load_sprites(
            self.config, self.cell_px, sprite_dir
        )

    def canvas_size(self, result: BuildResult) -> Tuple[int, int]:
        """Image size that fits every visual plus the grid padding on the far side"""
        if not result.visuals:
            return (self.cell_px, self.cell_px)

        pad_x, pad_y = self.config.grid_padding
        max_x = max(v.screen_x + v.size for v in result.visuals.values())
        max_y = max(v.screen_y + v.size for v in result.visuals.values())
        width = math.ceil(max_x + pad_x * self.config.cell_size)
        height = math.ceil(max_y + pad_y * self.config.cell_size)
        return (max(width, self.cell_px), max(height, self.cell_px))

    def render(self, result: BuildResult) -> Image.Image:
        """
        Render a build result.

        Returns:
            RGBA PIL Image
        """
        width, height = self.canvas_size(result)
        img = Image.new('RGBA', (width, height), self.background_color)

        for visual in result.visuals.values():
            tile = self._render_tile(visual)
            dest_x = int(round(visual.screen_x))
            dest_y = int(round(height - visual.screen_y - visual.size))
            if dest_x < 0 or dest_y < 0:
                logger.warning(f"{visual.name} falls outside the canvas, skipping")
                continue
            img.alpha_composite(tile, dest=(dest_x, dest_y))

        logger.info(f"Rendered {len(result.visuals)} cells into {width}x{height} image")
        return img

    def _render_tile(self, visual: CellVisual) -> Image.Image:
        if visual.variant is None:
            return Image.new('RGBA', (self.cell_px, self.cell_px), to_rgba8(visual.color))

        sprite = tint_sprite(self.sprites[visual.variant], visual.color)
        if visual.rotation:
            sprite = sprite.rotate(visual.rotation)
        return sprite

    def save(self, result: BuildResult, output_path: Path | str) -> Path:
        """Render and write a PNG"""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.render(result).save(output_path)
        logger.info(f"Saved grid preview to {output_path}")
        return output_path
