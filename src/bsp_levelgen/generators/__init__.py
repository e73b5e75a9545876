"""
Level generation algorithms.
"""

from .random_source import DeterministicRandom
from .settings import GeneratorSettings, load_settings, save_settings

__all__ = [
    'DeterministicRandom',
    'GeneratorSettings',
    'load_settings',
    'save_settings',
]
