"""
Exception types for level generation.

Only contract violations raise. A failed BSP split or a carve that falls
outside the grid is ordinary control flow and never surfaces here.
"""


class LevelGenerationError(Exception):
    pass


class InvalidDimensionsError(LevelGenerationError):
    pass


class SettingsError(LevelGenerationError):
    pass
