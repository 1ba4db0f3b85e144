"""
Primality entry points: the orchestrator, the strategy registry and bulk helpers.
"""

from __future__ import annotations

from functools import partial
from typing import Iterable, Optional, Union
import logging

import dask.bag as db

from millerrabin.arithmetic import absolute, is_odd
from millerrabin.config import StrategySettings
from millerrabin.errors import InvalidCandidateError, UnknownStrategyError, check_iterations
from millerrabin.execution_strategy import (
    ParallelExhaustiveStrategy,
    ParallelShortCircuitStrategy,
    SequentialStrategy,
    WitnessTestStrategy,
)
from millerrabin.random_source import WitnessSource, next_odd_in_range

logger = logging.getLogger("millerrabin.primality")

StrategyLike = Union[str, WitnessTestStrategy]

_STRATEGIES: dict[str, type[WitnessTestStrategy]] = {
    SequentialStrategy.name: SequentialStrategy,
    ParallelShortCircuitStrategy.name: ParallelShortCircuitStrategy,
    ParallelExhaustiveStrategy.name: ParallelExhaustiveStrategy,
}


def available_strategies() -> list[str]:
    return sorted(_STRATEGIES)


def register_strategy(strategy_cls: type[WitnessTestStrategy]) -> type[WitnessTestStrategy]:
    """Register a strategy class under its ``name``; usable as a decorator.

    Names are registered once; re-registering a taken name raises ValueError.
    """
    if strategy_cls.name in _STRATEGIES:
        raise ValueError(f"strategy name already registered: {strategy_cls.name}")
    _STRATEGIES[strategy_cls.name] = strategy_cls
    return strategy_cls


def get_strategy(strategy: StrategyLike, settings: StrategySettings | None = None) -> WitnessTestStrategy:
    """Resolve a strategy instance from a name, passing instances through unchanged."""
    if isinstance(strategy, WitnessTestStrategy):
        return strategy
    strategy_cls = _STRATEGIES.get(strategy)
    if strategy_cls is None:
        raise UnknownStrategyError(str(strategy), list(_STRATEGIES))
    return strategy_cls(settings)


def is_probable_prime(
    n: int,
    strategy: StrategyLike = "sequential",
    iterations: Optional[int] = None,
) -> bool:
    """Miller-Rabin test of ``|n|``.

    Returns True if ``|n|`` is probably prime and False if it is definitely
    composite; the chance that a composite passes is at most
    ``4 ** -iterations``. A non-positive iteration count raises
    :class:`InvalidIterationCountError` instead of returning a verdict.
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidCandidateError("candidate must be an integer", n)

    resolved = get_strategy(strategy)
    if iterations is None:
        iterations = resolved.settings.iterations
    check_iterations(iterations)

    w = absolute(n)
    if w == 2:
        return True
    if not is_odd(w) or w == 1:
        return False

    return resolved.test(w, iterations)


def verdicts(
    candidates: Iterable[int],
    strategy: StrategyLike = "sequential",
    iterations: Optional[int] = None,
    parallel: bool = False,
) -> list[bool]:
    """Run :func:`is_probable_prime` over many candidates with one strategy instance.

    With ``parallel`` the candidates are spread over a Dask bag on the
    threaded scheduler; verdicts come back in input order either way.
    """
    resolved = get_strategy(strategy)
    if iterations is not None:
        check_iterations(iterations)
    candidates = list(candidates)

    if not parallel or len(candidates) <= 1:
        return [is_probable_prime(candidate, resolved, iterations) for candidate in candidates]

    workers = resolved.settings.workers
    bag = db.from_sequence(candidates, npartitions=max(1, min(workers, len(candidates))))
    results = bag.map(partial(is_probable_prime, strategy=resolved, iterations=iterations))
    return list(results.compute(scheduler="threads", num_workers=workers))


def _search_probable_prime(
    seed: int,
    bit_length: int,
    strategy: WitnessTestStrategy,
    iterations: Optional[int],
) -> int:
    rng = WitnessSource(seed).rng()
    attempts = 0
    while True:
        attempts += 1
        candidate = next_odd_in_range(bit_length, bit_length + 1, rng)
        if is_probable_prime(candidate, strategy, iterations):
            logger.debug(f"Found {bit_length}-bit probable prime after {attempts} candidates")
            return candidate


def probable_primes(
    count: int,
    bit_length: int,
    strategy: StrategyLike = "sequential",
    iterations: Optional[int] = None,
    parallel: bool = False,
    seed: Optional[int] = None,
) -> list[int]:
    """Generate ``count`` probable primes with exactly ``bit_length`` bits.

    Each search gets its own random stream. With ``parallel`` the searches
    run as a Dask bag on the threaded scheduler.
    """
    if count < 0:
        raise ValueError("count must be non-negative")
    if bit_length < 2:
        raise ValueError("bit_length must be >= 2")

    resolved = get_strategy(strategy)
    if iterations is not None:
        check_iterations(iterations)
    seeds = WitnessSource(seed).spawn(count)

    if not parallel or count <= 1:
        return [_search_probable_prime(s, bit_length, resolved, iterations) for s in seeds]

    workers = resolved.settings.workers
    bag = db.from_sequence(seeds, npartitions=max(1, min(workers, count)))
    primes = bag.map(
        partial(_search_probable_prime, bit_length=bit_length, strategy=resolved, iterations=iterations)
    )
    return list(primes.compute(scheduler="threads", num_workers=workers))
