"""Tests for the worker-pool simulation."""
# pyright: reportPrivateUsage=false

from io import StringIO

import pytest

from steporder.exceptions import (
    CircularDependencyError,
    InvalidTaskError,
    InvariantViolationError,
)
from steporder.frontier import Frontier
from steporder.graph import DependencyGraph
from steporder.logger import setup_logger
from steporder.scheduler import (
    ScheduledStep,
    WorkerPoolSimulator,
    WorkerSlot,
    letter_cost,
    serial_walk,
    simulate,
)
from steporder.scheduler.algorithms import worker_pool


class TestLetterCost:
    """Test the default cost function."""

    def test_letter_cost_with_overhead(self) -> None:
        assert letter_cost("A", 60) == 61
        assert letter_cost("Z", 60) == 86

    def test_letter_cost_without_overhead(self) -> None:
        assert letter_cost("C", 0) == 3
        assert letter_cost("E", 0) == 5

    @pytest.mark.parametrize("task_id", ["a", "AB", "", "1", "["])
    def test_rejects_non_letters(self, task_id: str) -> None:
        """Only single uppercase letters can be priced."""
        with pytest.raises(InvalidTaskError):
            letter_cost(task_id, 0)


class TestWorkerSlot:
    """Test the worker ordering key."""

    def test_idle_before_busy(self) -> None:
        busy = WorkerSlot(index=0)
        busy.assign("A", 1, 0)
        idle = WorkerSlot(index=3)

        assert min([busy, idle], key=WorkerSlot.sort_key) is idle

    def test_lowest_index_idle_first(self) -> None:
        workers = [WorkerSlot(index=i) for i in (2, 0, 1)]
        assert min(workers, key=WorkerSlot.sort_key).index == 0

    def test_busy_sorted_by_remaining(self) -> None:
        first = WorkerSlot(index=0)
        first.assign("Z", 9, 0)
        second = WorkerSlot(index=1)
        second.assign("B", 2, 0)

        assert min([first, second], key=WorkerSlot.sort_key) is second

    def test_release(self) -> None:
        worker = WorkerSlot(index=0)
        worker.assign("A", 5, 10)
        assert not worker.is_idle
        assert str(worker) == "#0:A(5)"

        worker.release()
        assert worker.is_idle
        assert str(worker) == "#0:idle"


class TestWorkerPoolSimulator:
    """Test the discrete-event simulation."""

    def test_example_two_workers(self, example_graph: DependencyGraph) -> None:
        """Two workers with no overhead finish the example in 15 units."""
        assert simulate(example_graph, worker_count=2, fixed_overhead=0) == (15, "CABFDE")

    def test_example_timeline(self, example_graph: DependencyGraph) -> None:
        """The timeline records which worker ran each step and when."""
        result = WorkerPoolSimulator(example_graph, worker_count=2, fixed_overhead=0).schedule()

        assert result.timeline == [
            ScheduledStep(task_id="C", worker=0, start_time=0, end_time=3),
            ScheduledStep(task_id="A", worker=0, start_time=3, end_time=4),
            ScheduledStep(task_id="B", worker=0, start_time=4, end_time=6),
            ScheduledStep(task_id="F", worker=1, start_time=3, end_time=9),
            ScheduledStep(task_id="D", worker=0, start_time=6, end_time=10),
            ScheduledStep(task_id="E", worker=0, start_time=10, end_time=15),
        ]
        assert result.timeline[-1].duration == 5
        assert result.algorithm_metadata == {
            "algorithm": "worker_pool",
            "worker_count": 2,
            "fixed_overhead": 0,
        }

    def test_single_worker_matches_serial_walk(self, example_graph: DependencyGraph) -> None:
        """One worker completes tasks in serial order, summing all costs."""
        total_time, order = simulate(example_graph, worker_count=1, fixed_overhead=0)

        assert order == serial_walk(example_graph)
        assert total_time == sum(letter_cost(t, 0) for t in example_graph.tasks)

    def test_single_worker_with_overhead(self, example_graph: DependencyGraph) -> None:
        """Overhead is added to every task."""
        total_time, _ = simulate(example_graph, worker_count=1, fixed_overhead=60)
        assert total_time == 21 + 6 * 60

    def test_repeated_runs_match(self, example_graph: DependencyGraph) -> None:
        """Same inputs give the same result, and the graph is reusable."""
        first = simulate(example_graph, worker_count=2, fixed_overhead=0)
        second = simulate(example_graph, worker_count=2, fixed_overhead=0)
        assert first == second
        assert example_graph.predecessor_count("E") == 3

    def test_more_workers_than_tasks(self) -> None:
        """Independent tasks run fully in parallel; time is the longest cost."""
        graph = DependencyGraph()
        for task in ["A", "C", "B"]:
            graph.add_task(task)

        assert simulate(graph, worker_count=10, fixed_overhead=0) == (3, "ABC")

    def test_simultaneous_completions_in_worker_order(self) -> None:
        """Tasks finishing together are recorded by worker index."""
        graph = DependencyGraph()
        graph.add_task("B")
        graph.add_task("A")

        # Both cost 5 under a flat cost
        total_time, order = simulate(graph, 2, 0, cost=lambda _task: 5)
        assert (total_time, order) == (5, "AB")

    def test_custom_cost_function(self, example_graph: DependencyGraph) -> None:
        """The cost function is pluggable and independent of letters."""
        total_time, order = simulate(example_graph, 1, 0, cost=lambda _task: 1)
        assert total_time == 6
        assert order == "CABDFE"

    def test_custom_cost_allows_long_identifiers(self) -> None:
        """A custom cost removes the single-letter restriction."""
        graph = DependencyGraph.build([("fetch", "build"), ("build", "test")])
        total_time, order = simulate(graph, 2, 0, cost=len)
        assert total_time == 5 + 5 + 4
        assert order == "fetchbuildtest"

    def test_zero_cost_tasks(self) -> None:
        """Zero-duration tasks complete without advancing the clock."""
        graph = DependencyGraph.build([("A", "B"), ("B", "C")])
        assert simulate(graph, 1, 0, cost=lambda _task: 0) == (0, "ABC")

    def test_negative_cost_raises(self) -> None:
        graph = DependencyGraph.build([("A", "B")])
        with pytest.raises(InvalidTaskError, match="negative"):
            simulate(graph, 1, 0, cost=lambda _task: -1)

    def test_default_cost_rejects_bad_identifier(self) -> None:
        graph = DependencyGraph.build([("a", "b")])
        with pytest.raises(InvalidTaskError):
            simulate(graph, 2, 0)

    def test_two_node_cycle_raises(self) -> None:
        """A pure cycle stalls immediately."""
        graph = DependencyGraph.build([("A", "B"), ("B", "A")])
        with pytest.raises(CircularDependencyError, match="stalled at time 0") as exc_info:
            simulate(graph, 2, 0)
        assert exc_info.value.unfinished == ["A", "B"]

    def test_cycle_after_progress_raises(self) -> None:
        """A cycle behind completed work stalls once the pool drains."""
        graph = DependencyGraph.build([("A", "B"), ("B", "C"), ("C", "B")])
        with pytest.raises(CircularDependencyError, match="stalled at time 1"):
            simulate(graph, 2, 0)

    @pytest.mark.parametrize(
        ("worker_count", "fixed_overhead"),
        [(0, 0), (-1, 0), (1, -1)],
    )
    def test_invalid_parameters(
        self, example_graph: DependencyGraph, worker_count: int, fixed_overhead: int
    ) -> None:
        with pytest.raises(ValueError):
            WorkerPoolSimulator(
                example_graph, worker_count=worker_count, fixed_overhead=fixed_overhead
            )

    def test_inconsistent_graph_state_is_fatal(self) -> None:
        """A successor released ahead of its predecessor trips the count check."""

        class EagerGraph(DependencyGraph):
            def copy(self) -> DependencyGraph:
                clone = super().copy()
                # B is reported ready from the start although A precedes it
                clone._pending[clone._index["B"]] = 0
                clone._predecessors[clone._index["B"]] = []
                return clone

        graph = EagerGraph.build([("A", "B")])
        with pytest.raises(InvariantViolationError):
            simulate(graph, 2, 0)

    def test_task_handed_out_twice_is_fatal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A frontier that keeps returning the same task cannot start it on two workers."""

        class RepeatingFrontier(Frontier):
            def pop_smallest(self) -> str:
                return self.peek_smallest()

        monkeypatch.setattr(worker_pool, "Frontier", RepeatingFrontier)
        graph = DependencyGraph.build([("A", "B")])

        with pytest.raises(InvariantViolationError, match="assigned to a second worker"):
            simulate(graph, 2, 0)

    def test_negative_remaining_time_is_fatal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A worker whose countdown overshoots zero stops the run."""

        class OvershootingSlot(WorkerSlot):
            # Every write to remaining loses one extra time unit
            @property
            def remaining(self) -> int:  # type: ignore[override]
                return self._remaining

            @remaining.setter
            def remaining(self, value: int) -> None:
                self._remaining = value - 1

        monkeypatch.setattr(worker_pool, "WorkerSlot", OvershootingSlot)
        graph = DependencyGraph()
        graph.add_task("C")

        with pytest.raises(InvariantViolationError, match="negative remaining time"):
            simulate(graph, 1, 0)


class TestSimulationLogging:
    """Test simulation output at different verbosity levels."""

    def _run(self, graph: DependencyGraph, verbosity: int) -> str:
        stream = StringIO()
        setup_logger(verbosity, stream=stream)
        simulate(graph, worker_count=2, fixed_overhead=0)
        return stream.getvalue()

    def test_silent_by_default(self, example_graph: DependencyGraph) -> None:
        assert self._run(example_graph, 0) == ""

    def test_verbosity_1_shows_assignments(self, example_graph: DependencyGraph) -> None:
        output = self._run(example_graph, 1)

        assert "0: assigned C to worker 0 (duration 3)" in output
        assert "15: E done on worker 0" in output
        assert "ready:" not in output

    def test_verbosity_2_shows_frontier(self, example_graph: DependencyGraph) -> None:
        output = self._run(example_graph, 2)
        assert "3: ready: A, F" in output
        assert "workers:" not in output

    def test_verbosity_3_shows_workers(self, example_graph: DependencyGraph) -> None:
        output = self._run(example_graph, 3)
        assert "3: workers: #0:A(1) #1:F(6)" in output
        assert "advancing clock by 3 to 3" in output
