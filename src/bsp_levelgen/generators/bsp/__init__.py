"""
BSP (Binary Space Partitioning) Generator Module

This module provides the core BSP algorithm for procedural level generation
in the BSP Level Generator project.
"""

from .bsp_generator import (
    LevelGenerator,
    PartitionNode,
    Room,
    Corridor,
    Rectangle,
    SplitDirection,
    # Constants
    DEFAULT_SEED,
    DEFAULT_CORRIDOR_WIDTH,
    MIN_PADDED_ROOM_SIZE,
)

__all__ = [
    'LevelGenerator',
    'PartitionNode',
    'Room',
    'Corridor',
    'Rectangle',
    'SplitDirection',
    'DEFAULT_SEED',
    'DEFAULT_CORRIDOR_WIDTH',
    'MIN_PADDED_ROOM_SIZE',
]
