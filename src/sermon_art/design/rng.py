"""Seeded pseudo-random numbers and seed derivation.

Every preset draws from a ``SeededRandom`` built from a 32-bit seed, so the
same request always yields the same layers.  The generator is Mulberry32 and
seeds come from a 32-bit FNV-1a hash of a pipe-joined key; both are
implemented on plain ints masked to 32 bits so results match other
implementations of the same algorithms bit for bit.
"""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

T = TypeVar("T")

_MASK = 0xFFFFFFFF
_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply."""
    return (a * b) & _MASK


def hash_to_seed(value: str) -> int:
    """FNV-1a over the UTF-16 code units of ``value``, as an unsigned 32-bit int."""
    h = _FNV_OFFSET
    data = value.encode("utf-16-le")
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = _imul(h, _FNV_PRIME)
    return h


def derive_preset_seed(
    project_id: str,
    preset_key: str,
    round_number: int,
    option_index: int,
    generation_id: str | None = None,
) -> int:
    """Seed for one generation request.

    A non-blank generation id pins the seed to that generation; otherwise
    the seed follows the round and option slot.
    """
    generation = (generation_id or "").strip()
    if generation:
        return hash_to_seed(f"{project_id}|{preset_key}|{generation}")
    return hash_to_seed(f"{project_id}|{preset_key}|{round_number}|{option_index}")


class SeededRandom:
    """Mulberry32 stream with a few convenience draws."""

    def __init__(self, seed: int) -> None:
        self._state = seed & _MASK

    def next(self) -> float:
        """Uniform float in [0, 1)."""
        self._state = (self._state + 0x6D2B79F5) & _MASK
        v = self._state
        v = _imul(v ^ (v >> 15), v | 1)
        v ^= (v + _imul(v ^ (v >> 7), v | 61)) & _MASK
        return ((v ^ (v >> 14)) & _MASK) / 4294967296

    def float(self, low: float, high: float) -> float:
        return low + (high - low) * self.next()

    def int(self, low: int, high: int) -> int:
        """Inclusive integer draw; a degenerate range returns ``low``."""
        if high <= low:
            return low
        return math.floor(low + self.next() * (high - low + 1))

    def bool(self, probability: float = 0.5) -> bool:
        return self.next() < probability

    def pick(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("Cannot pick from an empty sequence")
        return items[math.floor(self.next() * len(items))]
