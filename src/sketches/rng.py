"""
Deterministic RNG context.

All generation is a pure function of (seed, call order). One context per
render; contexts are never shared between threads. Reordering draws changes
the artwork, so callers document the order they consume values in.
"""

import time
from dataclasses import dataclass, field
from typing import TypeVar, Union

import numpy as np

from .errors import InvalidParameterError

T = TypeVar("T")

SEED_MAX = 2 ** 64


@dataclass(frozen=True)
class Seed:
    """A 64-bit generator seed."""

    value: int = field(default_factory=lambda: int(time.time()))

    def __post_init__(self):
        if not 0 <= self.value < SEED_MAX:
            raise InvalidParameterError(f"seed out of range: {self.value}")

    @classmethod
    def parse(cls, text: str) -> "Seed":
        """Parse a decimal or 0x-prefixed hex seed."""
        raw = text.strip().lower()
        try:
            value = int(raw, 16) if raw.startswith("0x") else int(raw, 10)
        except ValueError:
            raise InvalidParameterError(f"invalid seed: {text}") from None
        return cls(value)

    def __str__(self) -> str:
        return str(self.value)


class RngContext:
    """Seeded, restartable random source backed by numpy's PCG64."""

    def __init__(self, seed: Union[int, Seed]):
        if isinstance(seed, Seed):
            seed = seed.value
        if not 0 <= seed < SEED_MAX:
            raise InvalidParameterError(f"seed out of range: {seed}")
        self.seed = seed
        self._gen = np.random.Generator(np.random.PCG64(seed))

    def restart(self) -> None:
        """Rewind to the start of the seeded sequence."""
        self._gen = np.random.Generator(np.random.PCG64(self.seed))

    def boolean(self) -> bool:
        return bool(self._gen.integers(0, 2))

    def integer(self, lo: int, hi: int) -> int:
        """Uniform integer in [lo, hi)."""
        if hi <= lo:
            raise InvalidParameterError(f"empty range: [{lo}, {hi})")
        return int(self._gen.integers(lo, hi))

    def uniform(self) -> float:
        """Uniform float in [0, 1)."""
        return float(self._gen.random())

    def chance(self, p: float) -> bool:
        """True with probability p."""
        return self.uniform() < p

    def pick(self, a: T, b: T) -> T:
        """Coin flip between a and b."""
        return a if self.boolean() else b

    def next_seed(self) -> int:
        """Draw an independent 64-bit seed for a child render."""
        return int(self._gen.integers(0, SEED_MAX, dtype=np.uint64))
