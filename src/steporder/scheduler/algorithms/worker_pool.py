"""Discrete-event simulation of a fixed pool of identical workers."""

from functools import partial

from steporder.exceptions import (
    CircularDependencyError,
    InvalidTaskError,
    InvariantViolationError,
)
from steporder.frontier import Frontier
from steporder.graph import DependencyGraph
from steporder.logger import checks_enabled, debug_enabled, get_logger

from ..core import AlgorithmResult, ScheduledStep, WorkerSlot, letter_cost
from ..protocols import CostFunction

logger = get_logger()


class WorkerPoolSimulator:
    """Simulates N workers consuming tasks as their dependencies complete.

    This simulator:
    1. Hands the smallest ready task to the lowest-indexed idle worker until
       either runs out
    2. Jumps the clock to the earliest completion among busy workers
    3. Completes every task whose worker reached zero remaining time, in
       worker index order, and releases its newly ready successors
    4. Repeats until no worker is busy and nothing is ready

    Both tie-break rules are fixed, so identical inputs always produce the
    same total time and completion order.
    """

    def __init__(
        self,
        graph: DependencyGraph,
        *,
        worker_count: int = 4,
        fixed_overhead: int = 60,
        cost: CostFunction | None = None,
    ):
        """Initialize the simulator.

        Args:
            graph: Dependency graph to execute; it is copied, never mutated
            worker_count: Number of workers in the pool (at least 1)
            fixed_overhead: Time added to each task's letter cost (at least 0)
            cost: Optional duration function; defaults to the letter cost with
                fixed_overhead applied
        """
        if worker_count < 1:
            raise ValueError(f"worker_count must be at least 1, got {worker_count}")
        if fixed_overhead < 0:
            raise ValueError(f"fixed_overhead must be non-negative, got {fixed_overhead}")

        self.graph = graph
        self.worker_count = worker_count
        self.fixed_overhead = fixed_overhead
        self.cost: CostFunction = cost or partial(letter_cost, fixed_overhead=fixed_overhead)

    def schedule(self) -> AlgorithmResult:
        """Run the simulation to completion.

        Returns:
            AlgorithmResult with total_time, completion order and timeline

        Raises:
            CircularDependencyError: If the pool stalls with tasks unfinished
            InvalidTaskError: If the cost function cannot price a task
            InvariantViolationError: If the simulation state becomes inconsistent
        """
        graph = self.graph.copy()
        frontier = Frontier(graph.initial_frontier())
        workers = [WorkerSlot(index=i) for i in range(self.worker_count)]
        in_progress: set[str] = set()
        completion_order: list[str] = []
        timeline: list[ScheduledStep] = []
        clock = 0

        while True:
            # Assignment phase
            while not frontier.is_empty():
                worker = min(workers, key=WorkerSlot.sort_key)
                if not worker.is_idle:
                    break
                if checks_enabled():
                    logger.checks(f"{clock}: ready: {', '.join(frontier)}")
                task_id = frontier.pop_smallest()
                if task_id in in_progress:
                    raise InvariantViolationError(f"Task {task_id!r} assigned to a second worker")
                duration = self._task_cost(task_id)
                worker.assign(task_id, duration, clock)
                in_progress.add(task_id)
                logger.changes(
                    f"{clock}: assigned {task_id} to worker {worker.index} (duration {duration})"
                )

            busy = [w for w in workers if not w.is_idle]
            if debug_enabled():
                logger.debug(f"{clock}: workers: {' '.join(str(w) for w in workers)}")

            if not busy:
                break

            # Advance phase
            delta = min(w.remaining for w in busy)
            clock += delta
            logger.debug(f"  advancing clock by {delta} to {clock}")

            for worker in busy:
                worker.remaining -= delta
                if worker.remaining < 0:
                    raise InvariantViolationError(
                        f"Worker {worker.index} has negative remaining time "
                        f"({worker.remaining}) on task {worker.task_id!r}"
                    )
                if worker.remaining > 0:
                    continue

                task_id = worker.task_id
                assert task_id is not None
                completion_order.append(task_id)
                timeline.append(
                    ScheduledStep(
                        task_id=task_id,
                        worker=worker.index,
                        start_time=worker.started_at,
                        end_time=clock,
                    )
                )
                in_progress.discard(task_id)
                worker.release()
                logger.changes(f"{clock}: {task_id} done on worker {worker.index}")

                unlocked: list[str] = []
                for successor in graph.successors(task_id):
                    if graph.decrement_predecessor_count(successor) == 0:
                        unlocked.append(successor)
                for successor in unlocked:
                    frontier.insert(successor)

        if len(completion_order) < len(graph):
            done = set(completion_order)
            unfinished = [task for task in graph.tasks if task not in done]
            raise CircularDependencyError(
                f"Worker pool stalled at time {clock} with unfinished tasks: "
                f"{', '.join(sorted(unfinished))}",
                unfinished,
            )

        return AlgorithmResult(
            completion_order=completion_order,
            total_time=clock,
            timeline=timeline,
            algorithm_metadata={
                "algorithm": "worker_pool",
                "worker_count": self.worker_count,
                "fixed_overhead": self.fixed_overhead,
            },
        )

    def _task_cost(self, task_id: str) -> int:
        duration = self.cost(task_id)
        if duration < 0:
            raise InvalidTaskError(f"Cost of task {task_id!r} is negative: {duration}")
        return duration


def simulate(
    graph: DependencyGraph,
    worker_count: int,
    fixed_overhead: int,
    cost: CostFunction | None = None,
) -> tuple[int, str]:
    """Run the worker-pool simulation and return (total_time, completion order)."""
    result = WorkerPoolSimulator(
        graph, worker_count=worker_count, fixed_overhead=fixed_overhead, cost=cost
    ).schedule()
    assert result.total_time is not None
    return (result.total_time, result.order)
