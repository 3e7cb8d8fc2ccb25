"""Deterministic ``RandomSource`` stand-ins shared by the test modules."""

from __future__ import annotations

import random
from typing import Iterable


class SeededRandom:
    def __init__(self, seed: int) -> None:
        self._r = random.Random(seed)

    def uniform_int(self, exclusive_max: int) -> int:
        return self._r.randrange(exclusive_max) if exclusive_max > 0 else 0

    def shuffle(self, sequence):
        out = list(sequence)
        self._r.shuffle(out)
        return out

    def choice(self, sequence):
        return sequence[self.uniform_int(len(sequence))]


class ScriptedRandom:
    """Replays ``draws`` in order; each draw is reduced modulo the requested bound."""

    def __init__(self, draws: Iterable[int]) -> None:
        self._draws = list(draws)
        self.requested: list[int] = []

    def uniform_int(self, exclusive_max: int) -> int:
        if not self._draws:
            raise AssertionError(f"scripted draws exhausted (bound {exclusive_max})")
        self.requested.append(exclusive_max)
        return self._draws.pop(0) % exclusive_max

    def shuffle(self, sequence):
        return list(sequence)

    def choice(self, sequence):
        return sequence[self.uniform_int(len(sequence))]
