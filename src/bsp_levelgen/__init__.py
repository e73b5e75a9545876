"""
BSP Level Generator

Deterministic procedural level layouts: rooms, corridors and the minimal set
of wall blocks that bound them, from a width, a depth and a seed.
"""

from bsp_levelgen.exceptions import InvalidDimensionsError, LevelGenerationError, SettingsError
from bsp_levelgen.generators.bsp import Corridor, LevelGenerator, PartitionNode, Rectangle, Room
from bsp_levelgen.generators.layout import LevelData, LevelGrid, SpawnPoint, WallSegment
from bsp_levelgen.generators.random_source import DeterministicRandom
from bsp_levelgen.generators.settings import GeneratorSettings

__all__ = [
    'Corridor',
    'DeterministicRandom',
    'GeneratorSettings',
    'InvalidDimensionsError',
    'LevelData',
    'LevelGenerationError',
    'LevelGenerator',
    'LevelGrid',
    'PartitionNode',
    'Rectangle',
    'Room',
    'SettingsError',
    'SpawnPoint',
    'WallSegment',
]

__version__ = '1.0.0'
