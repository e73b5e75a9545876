"""
Level export for consumers and debugging.

Serializes a LevelData to plain dictionaries / JSON, and renders it as ASCII
for a quick look at a layout from the terminal.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from bsp_levelgen.generators.layout.layout_types import LevelData, LevelGrid
from bsp_levelgen.generators.settings import GeneratorSettings

logger = logging.getLogger(__name__)

WALL_CHAR = '#'
EMPTY_CHAR = '.'
HIDDEN_CHAR = ' '
PILLAR_CHAR = 'P'


def level_to_dict(level: LevelData) -> Dict[str, Any]:
    """
    Convert a level to a JSON-serializable dictionary.

    Rooms and corridor segments are top-left anchored; walls are centred on
    their cell.
    """
    return {
        'width': level.width,
        'depth': level.depth,
        'seed': level.seed,
        'rooms': [room.to_dict() for room in level.rooms],
        'corridors': [corridor.to_dict() for corridor in level.corridors],
        'walls': [
            {'x': wall.x, 'z': wall.z, 'width': wall.width, 'depth': wall.depth}
            for wall in level.walls
        ],
    }


def export_level_json(level: LevelData, file_path: Optional[Union[str, Path]] = None,
                      indent: Optional[int] = 2) -> str:
    """
    Export a level as JSON.

    Args:
        level: Level to export
        file_path: If given, the JSON is also written there
        indent: JSON indentation; None for compact output

    Returns:
        JSON string
    """
    text = json.dumps(level_to_dict(level), indent=indent)
    if file_path is not None:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text + "\n", encoding='utf-8')
        logger.info(f"Wrote level JSON to {path}")
    return text


def render_ascii(level: LevelData, settings: Optional[GeneratorSettings] = None) -> str:
    """
    Render a level one character per grid cell.

    ``#`` is an emitted wall, ``.`` carved space, ``P`` a pillar and a blank
    a solid cell that was culled.
    """
    settings = settings or GeneratorSettings()
    grid = LevelGrid.rasterize(level.width, level.depth, level.rooms, level.corridors, settings)
    rows = [list(row) for row in grid.to_ascii(WALL_CHAR, EMPTY_CHAR, HIDDEN_CHAR).split('\n')]

    for room in level.pillared_rooms:
        gx0, gz0 = grid.world_to_cell(room.x, room.z)
        for gz in range(gz0, gz0 + int(room.depth)):
            for gx in range(gx0, gx0 + int(room.width)):
                if grid.in_bounds(gx, gz) and grid.is_wall(gx, gz):
                    rows[gz][gx] = PILLAR_CHAR

    return '\n'.join(''.join(row) for row in rows)
