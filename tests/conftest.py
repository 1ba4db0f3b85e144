"""Shared pytest fixtures for millerrabin tests."""

from __future__ import annotations

import json
import os
from pathlib import Path
import sys
import time

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


def pytest_configure(config: pytest.Config) -> None:
    for marker, description in (
        ("unit", "fast isolated tests"),
        ("contract", "cross-strategy equivalence tests"),
        ("perf", "work-count and timing measurements"),
        ("slow", "long running tests"),
    ):
        config.addinivalue_line("markers", f"{marker}: {description}")


def _record_perf_metric(request: pytest.FixtureRequest, payload: dict[str, object]) -> None:
    config = request.config
    if not hasattr(config, "_mr_perf_metrics"):
        setattr(config, "_mr_perf_metrics", [])
    metrics: list[dict[str, object]] = getattr(config, "_mr_perf_metrics")
    metrics.append(payload)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo[None]):
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


@pytest.fixture(autouse=True)
def _collect_perf_telemetry(request: pytest.FixtureRequest):
    if request.node.get_closest_marker("perf") is None:
        yield
        return

    start_wall = time.perf_counter()
    start_cpu = time.process_time()
    try:
        yield
    finally:
        wall_s = max(0.0, time.perf_counter() - start_wall)
        cpu_s = max(0.0, time.process_time() - start_cpu)
        rep = getattr(request.node, "rep_call", None)
        outcome = rep.outcome if rep is not None else "unknown"
        _record_perf_metric(
            request,
            {
                "test_id": request.node.nodeid,
                "outcome": outcome,
                "wall_time_s": wall_s,
                "cpu_time_s": cpu_s,
                "strategies": getattr(request.node, "strategy_measurements", []),
            },
        )


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    config = session.config
    metrics: list[dict[str, object]] = getattr(config, "_mr_perf_metrics", [])
    if not metrics:
        return
    report_dir = os.environ.get("MILLERRABIN_PERF_REPORT_DIR")
    if not report_dir:
        return
    output_root = Path(report_dir).expanduser()
    output_root.mkdir(parents=True, exist_ok=True)
    payload = {
        "generated_at": time.time(),
        "exitstatus": int(exitstatus),
        "count": len(metrics),
        "tests": metrics,
    }
    (output_root / "perf_test_metrics.json").write_text(
        json.dumps(payload, indent=2, sort_keys=True),
        encoding="utf-8",
    )


@pytest.fixture(scope="session")
def dask_client():
    from dask.distributed import Client

    client = Client(
        processes=False,
        n_workers=1,
        threads_per_worker=2,
        dashboard_address=None,
        silence_logs=40,
    )
    yield client
    client.close()


@pytest.fixture
def settings():
    from millerrabin.config import StrategySettings

    return StrategySettings(iterations=20, workers=2, batch_size=4, seed=20131)


@pytest.fixture(params=["sequential", "parallel", "exhaustive"])
def strategy_name(request):
    return request.param


@pytest.fixture
def make_strategy(dask_client):
    """Build any registered strategy; the short-circuit one is bound to the test cluster."""
    from millerrabin.execution_strategy import (
        ParallelExhaustiveStrategy,
        ParallelShortCircuitStrategy,
        SequentialStrategy,
    )

    def _make(name: str, settings=None):
        if name == "sequential":
            return SequentialStrategy(settings)
        if name == "parallel":
            return ParallelShortCircuitStrategy(settings, client=dask_client)
        if name == "exhaustive":
            return ParallelExhaustiveStrategy(settings)
        raise ValueError(name)

    return _make


@pytest.fixture
def strategy(strategy_name, make_strategy, settings):
    return make_strategy(strategy_name, settings)


@pytest.fixture
def measure_strategy(request: pytest.FixtureRequest):
    """Run a strategy over candidates and attach its work and wall time to the perf report."""
    measurements: list[dict[str, object]] = []
    request.node.strategy_measurements = measurements

    def _measure(strategy, candidates, iterations, witnesses=None):
        start = time.perf_counter()
        results = [strategy.run(n, iterations, witnesses=witnesses) for n in candidates]
        entry = {
            "strategy": strategy.name,
            "candidates": len(results),
            "iterations": iterations,
            "wall_time_s": time.perf_counter() - start,
            "evaluated": sum(r.evaluated for r in results),
            "cancelled": sum(r.cancelled for r in results),
        }
        measurements.append(entry)
        return entry, results

    return _measure
