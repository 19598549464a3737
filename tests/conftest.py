"""Pytest configuration and fixtures for steporder tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from steporder.graph import DependencyGraph
from steporder.logger import reset_logger
from steporder.scheduler import AlgorithmType, SchedulingConfig, WorkerPoolConfig
from steporder.scheduler.algorithms import create_algorithm

# Step C must be finished before step A can begin, and so on.
EXAMPLE_EDGES: list[tuple[str, str]] = [
    ("C", "A"),
    ("C", "F"),
    ("A", "B"),
    ("A", "D"),
    ("B", "E"),
    ("D", "E"),
    ("F", "E"),
]

EXAMPLE_INSTRUCTIONS = """\
Step C must be finished before step A can begin.
Step C must be finished before step F can begin.
Step A must be finished before step B can begin.
Step A must be finished before step D can begin.
Step B must be finished before step E can begin.
Step D must be finished before step E can begin.
Step F must be finished before step E can begin.
"""

# Algorithms that must produce a valid ordering for any DAG
ALGORITHM_VARIANTS: list[tuple[AlgorithmType, int]] = [
    (AlgorithmType.SERIAL, 1),
    (AlgorithmType.WORKER_POOL, 1),
    (AlgorithmType.WORKER_POOL, 2),
    (AlgorithmType.WORKER_POOL, 5),
]

ALGORITHM_IDS = ["serial", "pool-1", "pool-2", "pool-5"]


@pytest.fixture(autouse=True)
def clean_logger() -> Iterator[None]:
    """Keep logger state from leaking between tests."""
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def example_graph() -> DependencyGraph:
    """The six-step example graph."""
    return DependencyGraph.build(EXAMPLE_EDGES)


@pytest.fixture
def instructions_file(tmp_path: Path) -> Path:
    """The example graph written as an instruction file."""
    path = tmp_path / "input.txt"
    path.write_text(EXAMPLE_INSTRUCTIONS, encoding="utf-8")
    return path


@pytest.fixture(params=ALGORITHM_VARIANTS, ids=ALGORITHM_IDS)
def algorithm_variant(request: pytest.FixtureRequest) -> tuple[AlgorithmType, int]:
    """Current algorithm and worker count being tested."""
    return request.param  # type: ignore[return-value]


@pytest.fixture
def make_scheduler(
    algorithm_variant: tuple[AlgorithmType, int],
) -> Callable[[DependencyGraph], Any]:
    """Factory for creating the current algorithm over a graph, with zero overhead."""
    algorithm_type, worker_count = algorithm_variant

    def _make(graph: DependencyGraph) -> Any:
        config = SchedulingConfig(
            workers=WorkerPoolConfig(worker_count=worker_count, fixed_overhead=0)
        )
        return create_algorithm(algorithm_type, graph, config=config)

    return _make


def assert_valid_order(order: list[str], edges: list[tuple[str, str]]) -> None:
    """Assert every task appears once and every edge points forward."""
    assert len(order) == len(set(order)), f"Duplicate tasks in {order}"

    tasks = {t for edge in edges for t in edge}
    assert set(order) == tasks, f"Order {order} does not cover {sorted(tasks)}"

    position = {task: i for i, task in enumerate(order)}
    for predecessor, successor in edges:
        assert position[predecessor] < position[successor], (
            f"{predecessor} must come before {successor} in {order}"
        )


@pytest.fixture
def check_order() -> Callable[[list[str], list[tuple[str, str]]], None]:
    """The assert_valid_order helper, for use inside tests."""
    return assert_valid_order
