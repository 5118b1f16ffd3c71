"""Sizing and styling configuration for skill tree grid builds"""
import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

Color = Tuple[float, float, float, float]


# Default pipe-grid colors (RGBA, 0.0-1.0)
DEFAULT_COLORS: Dict[str, Color] = {
    'pipe_color': (0.8, 0.1, 0.1, 0.8),
    'junction_color': (0.2, 0.2, 0.2, 0.8),
    'inactive_skill_color': (0.7, 0.1, 0.1, 1.0),
    'active_skill_color': (0.2, 0.8, 0.2, 1.0),
    'root_skill_color': (1.0, 0.9, 0.2, 1.0),
}

# Default sprite names for each pipe variant
DEFAULT_SPRITES: Dict[str, str] = {
    'straight_sprite': 'pipe_straight',
    'elbow_sprite': 'pipe_elbow',
    'tee_sprite': 'pipe_tee',
}

# Environment variables read by GridConfig.from_env()
ENV_PREFIX = 'SKILLTREE_'


@dataclass(frozen=True)
class GridConfig:
    """Immutable sizing and styling values passed into every build"""
    cell_size: float = 64.0
    ui_units_per_cell: float = 100.0
    grid_padding: Tuple[float, float] = (2.0, 2.0)

    pipe_color: Color = DEFAULT_COLORS['pipe_color']
    junction_color: Color = DEFAULT_COLORS['junction_color']
    inactive_skill_color: Color = DEFAULT_COLORS['inactive_skill_color']
    active_skill_color: Color = DEFAULT_COLORS['active_skill_color']
    root_skill_color: Color = DEFAULT_COLORS['root_skill_color']

    straight_sprite: str = DEFAULT_SPRITES['straight_sprite']
    elbow_sprite: str = DEFAULT_SPRITES['elbow_sprite']
    tee_sprite: str = DEFAULT_SPRITES['tee_sprite']

    def __post_init__(self):
        if self.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")
        if self.ui_units_per_cell <= 0:
            raise ValueError(f"ui_units_per_cell must be positive, got {self.ui_units_per_cell}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict"""
        return {f.name: _to_json(getattr(self, f.name)) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GridConfig':
        """
        Build a config from a dict of overrides.

        Missing keys keep their defaults; unknown keys are rejected.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown grid config keys: {sorted(unknown)}")

        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key == 'grid_padding':
                values[key] = _pair(key, value)
            elif key in DEFAULT_COLORS:
                values[key] = _color(key, value)
            elif key in DEFAULT_SPRITES:
                values[key] = str(value)
            else:
                values[key] = float(value)
        return cls(**values)

    @classmethod
    def from_env(cls, base: Optional['GridConfig'] = None) -> 'GridConfig':
        """
        Apply SKILLTREE_* environment overrides on top of base.

        Scalars are plain numbers (SKILLTREE_CELL_SIZE=48); padding and colors
        are comma-separated (SKILLTREE_PIPE_COLOR=1,0,0,1).
        """
        base = base or cls()
        overrides: Dict[str, Any] = {}
        for f in fields(cls):
            raw = os.environ.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw.strip() == '':
                continue
            if f.name == 'grid_padding' or f.name in DEFAULT_COLORS:
                overrides[f.name] = [part.strip() for part in raw.split(',')]
            else:
                overrides[f.name] = raw.strip()
        if not overrides:
            return base
        merged = base.to_dict()
        merged.update(overrides)
        return cls.from_dict(merged)


def _to_json(value: Any) -> Any:
    if isinstance(value, tuple):
        return list(value)
    return value


def _pair(key: str, value: Any) -> Tuple[float, float]:
    parts = [float(v) for v in value]
    if len(parts) != 2:
        raise ValueError(f"{key} needs 2 values, got {len(parts)}")
    return (parts[0], parts[1])


def _color(key: str, value: Any) -> Color:
    parts = [float(v) for v in value]
    if len(parts) == 3:
        parts.append(1.0)
    if len(parts) != 4:
        raise ValueError(f"{key} needs 3 or 4 channels, got {len(parts)}")
    for channel in parts:
        if not 0.0 <= channel <= 1.0:
            raise ValueError(f"{key} channels must be within 0.0-1.0, got {channel}")
    return (parts[0], parts[1], parts[2], parts[3])


def load_grid_config(path: Path | str) -> GridConfig:
    """Load grid config overrides from a JSON file"""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Grid config not found: {path}")
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Grid config must be a JSON object: {path}")
    return GridConfig.from_dict(data)
