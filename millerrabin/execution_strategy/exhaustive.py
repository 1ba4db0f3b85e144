"""Parallel strategy that always evaluates every witness and sums failures."""

from __future__ import annotations

from functools import partial
from operator import attrgetter

import dask
import dask.bag as db

from millerrabin.arithmetic import Decomposition
from millerrabin.execution_strategy.base import WitnessTestStrategy
from millerrabin.execution_strategy.results import Evaluation
from millerrabin.random_source import WitnessBatch
from millerrabin.witness import BatchOutcome, evaluate_batch


def _evaluate_all(decomposition: Decomposition, batch: WitnessBatch) -> BatchOutcome:
    return evaluate_batch(decomposition, batch, stop_on_failure=False)


class ParallelExhaustiveStrategy(WitnessTestStrategy):
    """Strategy that keeps witness batches in a Dask bag with no early exit.

    Each batch contributes its failure count; the verdict is True iff the
    total is zero. Completion order does not matter.
    """

    name = "exhaustive"

    def evaluate(self, decomposition: Decomposition, batches: list[WitnessBatch]) -> Evaluation:
        npartitions = max(1, min(self.settings.workers, len(batches)))
        outcomes = db.from_sequence(batches, npartitions=npartitions).map(
            partial(_evaluate_all, decomposition)
        )
        failures = outcomes.map(attrgetter("failures")).sum()

        collected, total_failures = dask.compute(
            outcomes,
            failures,
            scheduler="threads",
            num_workers=self.settings.workers,
        )
        return Evaluation(verdict=total_failures == 0, outcomes=list(collected))
