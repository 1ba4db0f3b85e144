"""Single-witness evaluation and batch helpers shared by all strategies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import random
import threading

from millerrabin.arithmetic import Decomposition, mod_pow
from millerrabin.random_source import WitnessBatch, random_witness


@dataclass(frozen=True)
class BatchOutcome:
    """Work done on one batch: witnesses evaluated and how many of them failed."""

    index: int
    evaluated: int
    failures: int

    @property
    def passed(self) -> bool:
        return self.failures == 0


def test_witness(n: int, n_minus_one: int, a: int, m: int, b: int) -> bool:
    """Return False if ``b`` proves ``n`` composite.

    Computes ``z = b**m mod n`` and squares it at most ``a - 1`` times. The
    witness passes if ``z`` starts at 1 or reaches ``n - 1``; reaching 1
    after round zero exposes a non-trivial square root of unity and fails.
    """
    z = mod_pow(b, m, n)
    if z == 1:
        return True

    j = 0
    while True:
        if z == n_minus_one:
            return True
        if j > 0 and z == 1:
            return False
        j += 1
        if j == a:
            return False
        z = mod_pow(z, 2, n)


# not a pytest test
test_witness.__test__ = False  # type: ignore[attr-defined]


def evaluate_batch(
    decomposition: Decomposition,
    batch: WitnessBatch,
    stop_on_failure: bool = True,
    abort: Optional[threading.Event] = None,
) -> BatchOutcome:
    rng = random.Random(batch.seed)
    evaluated = 0
    failures = 0

    for position in range(batch.size):
        if abort is not None and abort.is_set():
            break

        if batch.witnesses is not None:
            b = batch.witnesses[position]
        else:
            b = random_witness(decomposition.n, rng)

        evaluated += 1
        if not test_witness(decomposition.n, decomposition.n_minus_one, decomposition.a, decomposition.m, b):
            failures += 1
            if stop_on_failure:
                break

    return BatchOutcome(index=batch.index, evaluated=evaluated, failures=failures)
