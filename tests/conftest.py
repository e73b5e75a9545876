import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from bsp_levelgen import GeneratorSettings, LevelGenerator  # noqa: E402


@pytest.fixture()
def settings():
    return GeneratorSettings()


@pytest.fixture()
def generator():
    return LevelGenerator(100, 100, seed=12345)


@pytest.fixture()
def level(generator):
    return generator.generate()


@pytest.fixture()
def small_level():
    """A map too small to split: one room, no corridors."""
    return LevelGenerator(20, 20, seed=12345).generate()


@pytest.fixture()
def pillared_generator():
    return LevelGenerator(160, 120, seed=12345)
