"""Miller-Rabin probabilistic primality testing with interchangeable execution strategies."""

from millerrabin.arithmetic import Decomposition, decompose
from millerrabin.config import StrategySettings
from millerrabin.errors import (
    InvalidCandidateError,
    InvalidIterationCountError,
    MillerRabinError,
    UnknownStrategyError,
)
from millerrabin.execution_strategy import (
    ParallelExhaustiveStrategy,
    ParallelShortCircuitStrategy,
    SequentialStrategy,
    StrategyResult,
    WitnessTestStrategy,
)
from millerrabin.logging_config import VERBOSE_LEVEL, setup_logging
from millerrabin.primality import (
    available_strategies,
    get_strategy,
    is_probable_prime,
    probable_primes,
    register_strategy,
    verdicts,
)
from millerrabin.random_source import WitnessSource, next_odd_in_range, odd_integers
from millerrabin.version import __version__

__all__ = [
    "Decomposition",
    "InvalidCandidateError",
    "InvalidIterationCountError",
    "MillerRabinError",
    "ParallelExhaustiveStrategy",
    "ParallelShortCircuitStrategy",
    "SequentialStrategy",
    "StrategyResult",
    "StrategySettings",
    "UnknownStrategyError",
    "VERBOSE_LEVEL",
    "WitnessSource",
    "WitnessTestStrategy",
    "__version__",
    "available_strategies",
    "decompose",
    "get_strategy",
    "is_probable_prime",
    "next_odd_in_range",
    "odd_integers",
    "probable_primes",
    "register_strategy",
    "setup_logging",
    "verdicts",
]
