"""
Layout grid and output records for generated levels.
"""

from .layout_types import (
    CellType,
    LevelData,
    LevelGrid,
    SpawnPoint,
    WallSegment,
)

__all__ = [
    'CellType',
    'LevelData',
    'LevelGrid',
    'SpawnPoint',
    'WallSegment',
]
