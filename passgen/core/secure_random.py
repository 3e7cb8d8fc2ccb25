"""Unbiased integer draws and permutations backed by the OS CSPRNG.

Every generator in PassGen consumes randomness through a ``RandomSource``.
The production implementation reads ``os.urandom`` and never falls back to a
non-cryptographic generator: if the OS source fails, the failure propagates.
"""

from __future__ import annotations

import os
from typing import List, MutableSequence, Protocol, Sequence, TypeVar

T = TypeVar("T")

UINT32_SPACE = 1 << 32


class CsprngUnavailableError(OSError):
    """Raised when the operating system's secure random source cannot be read."""


def secure_random_bytes(n: int) -> bytes:
    if n <= 0:
        raise ValueError("byte count must be > 0")
    try:
        data = os.urandom(n)
    except OSError as exc:
        raise CsprngUnavailableError(f"OS CSPRNG failure requesting {n} byte(s): {exc}") from exc
    if len(data) != n:
        raise CsprngUnavailableError(
            f"OS CSPRNG returned unexpected byte count ({len(data)} != {n})"
        )
    return data


def assert_csprng_ready() -> None:
    secure_random_bytes(16)


class RandomSource(Protocol):
    def uniform_int(self, exclusive_max: int) -> int:
        ...

    def shuffle(self, sequence: Sequence[T]) -> List[T]:
        ...

    def choice(self, sequence: Sequence[T]) -> T:
        ...


class SecureRandom:
    """Rejection-sampled draws over 32-bit words from ``secure_random_bytes``."""

    def _next_uint32(self) -> int:
        return int.from_bytes(secure_random_bytes(4), "big", signed=False)

    def uniform_int(self, exclusive_max: int) -> int:
        if exclusive_max <= 0:
            return 0
        if exclusive_max > UINT32_SPACE:
            raise ValueError(f"exclusive_max must be <= 2**32, got {exclusive_max}")
        # Values at or above `limit` would give the low residues extra weight.
        limit = UINT32_SPACE - (UINT32_SPACE % exclusive_max)
        value = self._next_uint32()
        while value >= limit:
            value = self._next_uint32()
        return value % exclusive_max

    def shuffle(self, sequence: Sequence[T]) -> List[T]:
        shuffled: MutableSequence[T] = list(sequence)
        for i in range(len(shuffled) - 1, 0, -1):
            j = self.uniform_int(i + 1)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return list(shuffled)

    def choice(self, sequence: Sequence[T]) -> T:
        if not sequence:
            raise ValueError("cannot choose from an empty sequence")
        return sequence[self.uniform_int(len(sequence))]


DEFAULT_RANDOM = SecureRandom()


__all__ = [
    "CsprngUnavailableError",
    "DEFAULT_RANDOM",
    "RandomSource",
    "SecureRandom",
    "UINT32_SPACE",
    "assert_csprng_ready",
    "secure_random_bytes",
]
