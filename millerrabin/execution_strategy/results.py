"""Shared result contracts for witness test strategies."""

from __future__ import annotations

from dataclasses import dataclass, field

from millerrabin.witness import BatchOutcome


@dataclass
class Evaluation:
    """Raw reduction produced by a strategy before timing and bookkeeping."""

    verdict: bool
    outcomes: list[BatchOutcome]
    cancelled: int = 0


@dataclass
class StrategyResult:
    """Outcome of one strategy call, with the work counters used by the perf suite."""

    verdict: bool
    evaluated: int
    requested: int
    failures: int
    cancelled: int
    execution_time: float
    strategy_name: str
    outcomes: list[BatchOutcome] = field(default_factory=list)

    @property
    def short_circuited(self) -> bool:
        return self.evaluated < self.requested
