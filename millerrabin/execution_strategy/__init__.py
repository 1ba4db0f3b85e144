"""Witness test strategy implementations."""

from millerrabin.execution_strategy.base import WitnessTestStrategy
from millerrabin.execution_strategy.exhaustive import ParallelExhaustiveStrategy
from millerrabin.execution_strategy.results import Evaluation, StrategyResult
from millerrabin.execution_strategy.sequential import SequentialStrategy
from millerrabin.execution_strategy.short_circuit import ParallelShortCircuitStrategy

__all__ = [
    "Evaluation",
    "ParallelExhaustiveStrategy",
    "ParallelShortCircuitStrategy",
    "SequentialStrategy",
    "StrategyResult",
    "WitnessTestStrategy",
]
