"""
Pipe sprites for the preview renderer.

Sprites are white on transparent so they can be tinted with the pipe color.
Each variant is authored in its 0 degree orientation:

- straight: vertical bar (Up + Down)
- elbow: Up + Right
- tee: Up + Right + Left
"""
import logging
from pathlib import Path
from typing import Dict, Optional

from PIL import Image, ImageDraw

from skilltree_grid.config.grid_config import GridConfig
from skilltree_grid.grid.autotile import TileVariant
from skilltree_grid.rendering.visuals import sprite_for

logger = logging.getLogger(__name__)

# Pipe thickness as a fraction of the cell size
PIPE_WIDTH_RATIO = 0.36

SPRITE_FILL = (255, 255, 255, 255)


def make_pipe_sprite(variant: TileVariant, size: int) -> Image.Image:
    """
    Draw a default sprite for a pipe variant.

    Args:
        variant: Which pipe shape to draw
        size: Edge length of the square sprite in pixels

    Returns:
        RGBA image, white pipe on a transparent background
    """
    img = Image.new('RGBA', (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)

    half = max(1, int(size * PIPE_WIDTH_RATIO / 2))
    center = size // 2
    lo, hi = center - half, center + half - 1
    last = size - 1

    # Image rows grow downward, so the Up arm runs from the center to row 0
    arms = {
        'up': (lo, 0, hi, hi),
        'down': (lo, lo, hi, last),
        'left': (0, lo, hi, hi),
        'right': (lo, lo, last, hi),
    }

    if variant == TileVariant.STRAIGHT:
        sides = ['up', 'down']
    elif variant == TileVariant.ELBOW:
        sides = ['up', 'right']
    else:
        sides = ['up', 'right', 'left']

    for side in sides:
        draw.rectangle(arms[side], fill=SPRITE_FILL)

    return img


def default_sprites(size: int) -> Dict[TileVariant, Image.Image]:
    """Procedural sprites for every variant"""
    return {variant: make_pipe_sprite(variant, size) for variant in TileVariant}


def load_sprites(
    config: GridConfig,
    size: int,
    sprite_dir: Optional[Path] = None,
) -> Dict[TileVariant, Image.Image]:
    """
    Load the configured sprites, falling back to procedural ones.

    A sprite is read from ``<sprite_dir>/<sprite name>.png`` when that file
    exists; otherwise the default shape is drawn. Loaded sprites are resized
    to size x size.
    """
    sprites = default_sprites(size)
    if sprite_dir is None:
        return sprites

    sprite_dir = Path(sprite_dir)
    for variant in TileVariant:
        path = sprite_dir / f"{sprite_for(variant, config)}.png"
        if not path.exists():
            logger.debug(f"No sprite file at {path}, using default {variant.value} sprite")
            continue
        with Image.open(path) as img:
            sprites[variant] = img.convert('RGBA').resize((size, size), Image.NEAREST)
        logger.info(f"Loaded {variant.value} sprite from {path}")

    return sprites
