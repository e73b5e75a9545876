"""
Tunable constants for level generation, plus JSON persistence.

Layouts are a pure function of (width, depth, seed) and these values, so
changing any default changes every layout for every seed.
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Union

from bsp_levelgen.exceptions import SettingsError

logger = logging.getLogger(__name__)

# Rooms this size or smaller on either axis never get pillars
PILLAR_ROOM_SIZE_FLOOR = 20


@dataclass
class GeneratorSettings:
    """
    Parameters shared by the BSP tree, the room carver and the rasterizer.

    Attributes:
        min_room_size: Smallest extent a BSP leaf may be cut down to
        corridor_width: Cross-section of every corridor
        pillar_spacing: Distance between pillars inside a pillared room
        pillar_margin: Offset of the first pillar from the room edge
        pillar_clearance: Half-size of the pillar-free zone at the room centre
        pillar_min_room_size: Both room dimensions must exceed this for pillars
        pillar_chance: Probability that a large room gets pillars
        room_padding: Gap kept between a room and its leaf bounds on each side
        room_fill_min: Smallest fraction of the padded leaf a room fills
        split_aspect_ratio: Aspect ratio at which the split axis is forced
        eye_height: Y coordinate of spawn points
    """

    # BSP partitioning
    min_room_size: int = 15
    split_aspect_ratio: float = 1.25

    # Rooms
    room_padding: int = 2
    room_fill_min: float = 0.7

    # Pillars
    pillar_spacing: int = 6
    pillar_margin: int = 4
    pillar_clearance: int = 4
    pillar_min_room_size: int = 20
    pillar_chance: float = 0.7

    # Corridors
    corridor_width: int = 4

    # Spawning
    eye_height: float = 2.0

    def validate(self) -> None:
        errors = []
        if self.min_room_size < 1:
            errors.append("min_room_size must be at least 1")
        if self.corridor_width < 1:
            errors.append("corridor_width must be at least 1")
        if self.pillar_spacing < 1:
            errors.append("pillar_spacing must be at least 1")
        if self.pillar_margin < 0:
            errors.append("pillar_margin cannot be negative")
        # Any clearance below 1 lets a pillar land on the room centre
        if self.pillar_clearance < 1:
            errors.append("pillar_clearance must be at least 1")
        if self.pillar_min_room_size < PILLAR_ROOM_SIZE_FLOOR:
            errors.append(f"pillar_min_room_size must be at least {PILLAR_ROOM_SIZE_FLOOR}")
        if self.room_padding < 0:
            errors.append("room_padding cannot be negative")
        if not 0.0 < self.room_fill_min <= 1.0:
            errors.append("room_fill_min must be in (0, 1]")
        if not 0.0 <= self.pillar_chance <= 1.0:
            errors.append("pillar_chance must be in [0, 1]")
        if self.split_aspect_ratio < 1.0:
            errors.append("split_aspect_ratio must be >= 1.0")
        if errors:
            raise SettingsError(f"Invalid settings: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GeneratorSettings':
        """Build settings from a mapping, ignoring keys this version does not know."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown settings keys: {', '.join(unknown)}")
        settings = cls(**{k: v for k, v in data.items() if k in known})
        settings.validate()
        return settings


def load_settings(file_path: Union[str, Path]) -> GeneratorSettings:
    """
    Load settings from a JSON file.

    Args:
        file_path: Path to a JSON object of setting overrides

    Returns:
        Validated GeneratorSettings

    Raises:
        SettingsError: If the file is missing, not valid JSON, or holds bad values
    """
    path = Path(file_path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise SettingsError(f"Settings file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise SettingsError(f"Settings file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {path} must contain a JSON object")

    try:
        return GeneratorSettings.from_dict(data)
    except TypeError as e:
        raise SettingsError(f"Settings file {path} has invalid values: {e}") from e


def save_settings(settings: GeneratorSettings, file_path: Union[str, Path]) -> Path:
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(settings.to_dict(), f, indent=2, ensure_ascii=False)
    logger.debug(f"Saved generator settings to {path}")
    return path
