"""
Deterministic RNG — seeded draws for the forest generator.

One root seed, split into named sub-streams with fork(). Each concern
(fan-out, names, titles) draws from its own stream, so changing how
often one concern draws never shifts the others: the same seed keeps
the same reporting structure and names when only hidden_percent moves.
"""

from __future__ import annotations

import hashlib
import random
from typing import Sequence, TypeVar

T = TypeVar("T")


class DeterministicRNG:
    """Local seeded RNG. The global random module is never touched."""

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def fork(self, label: str) -> "DeterministicRNG":
        """Independent stream derived from (seed, label); parent state untouched."""
        digest = hashlib.sha256(f"{self.seed}:{label}".encode("utf-8")).digest()
        return DeterministicRNG(int.from_bytes(digest[:8], "big"))

    def rand_int(self, low: int, high: int) -> int:
        """Inclusive on both ends."""
        return self._rng.randint(low, high)

    def rand_choice(self, seq: Sequence[T]) -> T:
        return self._rng.choice(seq)

    def chance(self, percent: int) -> bool:
        """True with probability percent / 100. Integer percent only."""
        if percent <= 0:
            return False
        return self._rng.randint(1, 100) <= percent
