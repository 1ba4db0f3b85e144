"""Parallel strategy that abandons outstanding witness batches once one fails."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed as threads_as_completed
from typing import Optional
import logging
import threading
import uuid

from dask.distributed import Client, as_completed

from millerrabin.arithmetic import Decomposition
from millerrabin.cluster import get_shared_client
from millerrabin.config import StrategySettings
from millerrabin.execution_strategy.base import WitnessTestStrategy
from millerrabin.execution_strategy.results import Evaluation
from millerrabin.random_source import WitnessBatch
from millerrabin.witness import BatchOutcome, evaluate_batch

logger = logging.getLogger("millerrabin.execution_strategy.short_circuit")

# Abort flags of in-flight calls, looked up by token from worker threads
_abort_flags: dict[str, threading.Event] = {}
_abort_flags_lock = threading.RLock()


def register_abort_flag(token: str) -> threading.Event:
    with _abort_flags_lock:
        flag = threading.Event()
        _abort_flags[token] = flag
        return flag


def get_abort_flag(token: str) -> Optional[threading.Event]:
    """Flag for ``token``; None in workers that do not share this process."""
    with _abort_flags_lock:
        return _abort_flags.get(token)


def remove_abort_flag(token: str) -> None:
    with _abort_flags_lock:
        _abort_flags.pop(token, None)


def _evaluate_batch_task(decomposition: Decomposition, batch: WitnessBatch, token: str) -> BatchOutcome:
    return evaluate_batch(decomposition, batch, stop_on_failure=True, abort=get_abort_flag(token))


class ParallelShortCircuitStrategy(WitnessTestStrategy):
    """Runs witness batches as Dask futures and AND-reduces them as they complete.

    The first failing batch decides the verdict. Outstanding futures are then
    cancelled and running batches see the abort flag before their next
    witness. Cancellation only saves work: the verdict is the same when every
    batch runs to completion.
    """

    name = "parallel"

    def __init__(
        self,
        settings: StrategySettings | None = None,
        client: Client | None = None,
        use_cluster: bool = True,
    ):
        super().__init__(settings)
        self.client = client
        self.use_cluster = use_cluster

    def evaluate(self, decomposition: Decomposition, batches: list[WitnessBatch]) -> Evaluation:
        token = uuid.uuid4().hex
        abort = register_abort_flag(token)
        try:
            client = self._resolve_client()
            if client is None:
                return self._evaluate_threaded(decomposition, batches, abort)
            return self._evaluate_distributed(client, decomposition, batches, token, abort)
        finally:
            remove_abort_flag(token)

    def _resolve_client(self) -> Optional[Client]:
        if self.client is not None:
            return self.client
        if not self.use_cluster:
            return None
        return get_shared_client(self.settings.workers)

    def _evaluate_distributed(
        self,
        client: Client,
        decomposition: Decomposition,
        batches: list[WitnessBatch],
        token: str,
        abort: threading.Event,
    ) -> Evaluation:
        futures = [
            client.submit(_evaluate_batch_task, decomposition, batch, token, pure=False)
            for batch in batches
        ]
        outcomes: list[BatchOutcome] = []

        for future in as_completed(futures):
            outcome = future.result()
            outcomes.append(outcome)
            if not outcome.passed:
                abort.set()
                pending = [f for f in futures if not f.done()]
                if pending:
                    client.cancel(pending)
                logger.debug(f"Batch {outcome.index} failed, cancelled {len(pending)} pending batches")
                return Evaluation(verdict=False, outcomes=outcomes, cancelled=len(pending))

        return Evaluation(verdict=True, outcomes=outcomes)

    def _evaluate_threaded(
        self,
        decomposition: Decomposition,
        batches: list[WitnessBatch],
        abort: threading.Event,
    ) -> Evaluation:
        outcomes: list[BatchOutcome] = []

        with ThreadPoolExecutor(max_workers=self.settings.workers) as executor:
            futures = [
                executor.submit(evaluate_batch, decomposition, batch, True, abort)
                for batch in batches
            ]
            for future in threads_as_completed(futures):
                outcome = future.result()
                outcomes.append(outcome)
                if not outcome.passed:
                    abort.set()
                    cancelled = sum(1 for f in futures if f.cancel())
                    logger.debug(f"Batch {outcome.index} failed, cancelled {cancelled} queued batches")
                    return Evaluation(verdict=False, outcomes=outcomes, cancelled=cancelled)

        return Evaluation(verdict=True, outcomes=outcomes)
