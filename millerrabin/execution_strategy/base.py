"""Witness test strategy interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence
import logging
import time

from millerrabin.arithmetic import Decomposition, decompose
from millerrabin.config import StrategySettings
from millerrabin.errors import check_iterations
from millerrabin.execution_strategy.results import Evaluation, StrategyResult
from millerrabin.logging_config import VERBOSE_LEVEL
from millerrabin.random_source import WitnessBatch, WitnessSource

logger = logging.getLogger("millerrabin.execution_strategy")


class WitnessTestStrategy(ABC):
    """Strategy contract: evaluate random witnesses for one odd candidate and reduce to a verdict."""

    name: str = "abstract"

    def __init__(self, settings: StrategySettings | None = None):
        self.settings = settings or StrategySettings.from_env()

    def test(self, n: int, iterations: int) -> bool:
        """Return True if ``n`` is probably prime after ``iterations`` witnesses."""
        return self.run(n, iterations).verdict

    def run(
        self,
        n: int,
        iterations: int,
        witnesses: Optional[Sequence[int]] = None,
    ) -> StrategyResult:
        """Evaluate ``n`` and report the verdict together with the work performed.

        ``witnesses`` pins the exact witness values instead of drawing them,
        which makes verdicts comparable across strategies.
        """
        check_iterations(iterations)
        decomposition = decompose(n)
        batches = self.plan(decomposition, iterations, witnesses)

        start = time.time()
        evaluation = self.evaluate(decomposition, batches)
        duration = time.time() - start

        evaluated = sum(outcome.evaluated for outcome in evaluation.outcomes)
        failures = sum(outcome.failures for outcome in evaluation.outcomes)
        logger.log(
            VERBOSE_LEVEL,
            f"{self.name}: {n.bit_length()}-bit candidate, {evaluated}/{iterations} witnesses, "
            f"verdict={evaluation.verdict} in {duration:.4f}s",
        )
        return StrategyResult(
            verdict=evaluation.verdict,
            evaluated=evaluated,
            requested=iterations,
            failures=failures,
            cancelled=evaluation.cancelled,
            execution_time=duration,
            strategy_name=self.name,
            outcomes=sorted(evaluation.outcomes, key=lambda outcome: outcome.index),
        )

    def plan(
        self,
        decomposition: Decomposition,
        iterations: int,
        witnesses: Optional[Sequence[int]] = None,
    ) -> list[WitnessBatch]:
        if witnesses is not None:
            if len(witnesses) != iterations:
                raise ValueError(f"Expected {iterations} witnesses, got {len(witnesses)}")
            for b in witnesses:
                if not 1 < b < decomposition.n:
                    raise ValueError(f"Witness {b} is outside (1, {decomposition.n})")

        source = WitnessSource(self.settings.seed)
        return source.batches(iterations, self.settings.batch_size, witnesses)

    @abstractmethod
    def evaluate(self, decomposition: Decomposition, batches: list[WitnessBatch]) -> Evaluation:
        """Evaluate the planned batches and reduce them to a verdict."""
