"""
Seeded Park-Miller random source.

The generator threads one instance of this class through every node of the
BSP tree, so the whole layout is a pure function of the seed and the order of
draws. Two instances built from the same seed and driven with the same call
sequence produce identical values on every platform.
"""

import math
import numbers
from typing import Sequence, TypeVar

T = TypeVar('T')

MODULUS = 2147483647  # 2^31 - 1
MULTIPLIER = 16807


class DeterministicRandom:
    """Multiplicative linear congruential generator (minimal standard)."""

    def __init__(self, seed: int = 12345):
        if isinstance(seed, bool) or not isinstance(seed, numbers.Integral):
            raise TypeError(f"seed must be an integer, got {seed!r}")
        seed = int(seed)
        # Remainder keeps the seed's sign so negative seeds map the same way
        # on every platform.
        if seed >= 0:
            state = seed % MODULUS
        else:
            state = -(-seed % MODULUS)
        if state <= 0:
            state += MODULUS - 1
        self._state = state

    @property
    def state(self) -> int:
        """Current internal state, always in (0, MODULUS)."""
        return self._state

    def next(self) -> float:
        """Advance the stream and return a float in [0, 1)."""
        self._state = (self._state * MULTIPLIER) % MODULUS
        return (self._state - 1) / (MODULUS - 1)

    def range(self, min_value: int, max_value: int) -> int:
        """Return an integer in [min_value, max_value] using a single draw."""
        return math.floor(self.next() * (max_value - min_value + 1) + min_value)

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        return items[self.range(0, len(items) - 1)]

    def __repr__(self) -> str:
        return f"DeterministicRandom(state={self._state})"
