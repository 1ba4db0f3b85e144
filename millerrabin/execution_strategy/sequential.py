"""Single-threaded strategy: one witness at a time, stop at the first failure."""

from __future__ import annotations

from millerrabin.arithmetic import Decomposition
from millerrabin.execution_strategy.base import WitnessTestStrategy
from millerrabin.execution_strategy.results import Evaluation
from millerrabin.random_source import WitnessBatch
from millerrabin.witness import evaluate_batch


class SequentialStrategy(WitnessTestStrategy):
    """Baseline strategy with deterministic trial order and no scheduling overhead."""

    name = "sequential"

    def evaluate(self, decomposition: Decomposition, batches: list[WitnessBatch]) -> Evaluation:
        outcomes = []
        for position, batch in enumerate(batches):
            outcome = evaluate_batch(decomposition, batch, stop_on_failure=True)
            outcomes.append(outcome)
            if not outcome.passed:
                return Evaluation(
                    verdict=False,
                    outcomes=outcomes,
                    cancelled=len(batches) - position - 1,
                )
        return Evaluation(verdict=True, outcomes=outcomes)
