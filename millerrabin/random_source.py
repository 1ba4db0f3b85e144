"""
Random candidate and witness generation.

Every worker draws from its own ``random.Random`` instance. Seeds for those
instances come from a numpy ``SeedSequence`` so that streams handed to
parallel workers are statistically independent, and so that a fixed seed
reproduces the exact same witnesses regardless of which strategy consumes
them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence
import random

import numpy as np


@dataclass(frozen=True)
class WitnessBatch:
    """Unit of work handed to one worker."""

    index: int
    size: int
    seed: int
    witnesses: Optional[tuple[int, ...]] = None


class WitnessSource:
    """Spawns independent per-worker seeds from one root seed."""

    def __init__(self, seed: Optional[int] = None):
        self._sequence = np.random.SeedSequence(seed)

    def spawn(self, count: int) -> list[int]:
        """Return ``count`` fresh child seeds; never repeats within a source."""
        seeds = []
        for child in self._sequence.spawn(count):
            state = child.generate_state(4, dtype=np.uint32)
            seeds.append(int.from_bytes(state.tobytes(), "little"))
        return seeds

    def rng(self) -> random.Random:
        return random.Random(self.spawn(1)[0])

    def batches(
        self,
        iterations: int,
        batch_size: int,
        witnesses: Optional[Sequence[int]] = None,
    ) -> list[WitnessBatch]:
        """Partition ``iterations`` witness draws into batches of at most ``batch_size``."""
        if batch_size <= 0:
            raise ValueError("batch_size must be > 0")

        sizes = []
        remaining = iterations
        while remaining > 0:
            size = min(batch_size, remaining)
            sizes.append(size)
            remaining -= size

        seeds = self.spawn(len(sizes))
        result = []
        offset = 0
        for index, (size, seed) in enumerate(zip(sizes, seeds)):
            fixed = None
            if witnesses is not None:
                fixed = tuple(witnesses[offset:offset + size])
            result.append(WitnessBatch(index=index, size=size, seed=seed, witnesses=fixed))
            offset += size
        return result


def random_witness(n: int, rng: random.Random) -> int:
    """Uniform random integer on the open interval (1, n)."""
    bits = n.bit_length()
    while True:
        b = rng.getrandbits(bits)
        if 1 < b < n:
            return b


def next_odd_in_range(min_bits: int, max_bits: int, rng: random.Random) -> int:
    """Random odd integer greater than 2 whose bit length lies in [min_bits, max_bits)."""
    if max_bits <= 2:
        raise ValueError("max_bits must be > 2")
    if max_bits <= min_bits:
        raise ValueError("max_bits must be greater than min_bits")

    # no odd value above 2 fits in fewer than 2 bits
    low = max(min_bits, 2)
    while True:
        bits = rng.randrange(low, max_bits)
        value = rng.getrandbits(bits) | (1 << (bits - 1))
        if value > 2 and value & 1:
            return value


def odd_integers(
    count: int,
    min_bits: int,
    max_bits: int,
    seed: Optional[int] = None,
) -> list[int]:
    """Bulk variant of :func:`next_odd_in_range` drawing from a single stream."""
    if count < 0:
        raise ValueError("count must be non-negative")
    rng = WitnessSource(seed).rng()
    return [next_odd_in_range(min_bits, max_bits, rng) for _ in range(count)]
