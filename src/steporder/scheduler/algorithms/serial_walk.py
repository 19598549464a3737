"""Serial walk: one task at a time in lexical-greedy topological order."""

from steporder.exceptions import CircularDependencyError
from steporder.frontier import Frontier
from steporder.graph import DependencyGraph
from steporder.logger import checks_enabled, get_logger

from ..core import AlgorithmResult

logger = get_logger()


class SerialWalker:
    """Produces the lexicographically-earliest greedy topological order.

    At every step the smallest ready task (by raw string comparison) is
    completed, and any successor whose predecessors are now all complete
    becomes ready.
    """

    def __init__(self, graph: DependencyGraph):
        """Initialize the walker.

        Args:
            graph: Dependency graph to walk; it is copied, never mutated
        """
        self.graph = graph

    def schedule(self) -> AlgorithmResult:
        """Walk the graph.

        Returns:
            AlgorithmResult whose completion_order covers every task once

        Raises:
            CircularDependencyError: If some tasks can never become ready
        """
        order = self.walk()
        return AlgorithmResult(
            completion_order=order,
            algorithm_metadata={"algorithm": "serial"},
        )

    def walk(self) -> list[str]:
        """Return the completion order as a list of task identifiers."""
        graph = self.graph.copy()
        frontier = Frontier(graph.initial_frontier())
        order: list[str] = []

        while not frontier.is_empty():
            if checks_enabled():
                logger.checks(f"Ready: {', '.join(frontier)}")
            task_id = frontier.pop_smallest()
            order.append(task_id)
            logger.changes(f"Completed {task_id}")

            unlocked: list[str] = []
            for successor in graph.successors(task_id):
                if graph.decrement_predecessor_count(successor) == 0:
                    unlocked.append(successor)
            for successor in unlocked:
                logger.debug(f"  {successor} is now ready")
                frontier.insert(successor)

        if len(order) < len(graph):
            done = set(order)
            unfinished = [task for task in graph.tasks if task not in done]
            raise CircularDependencyError(
                f"Circular dependency detected: tasks never became ready: "
                f"{', '.join(sorted(unfinished))}",
                unfinished,
            )

        return order


def serial_walk(graph: DependencyGraph) -> str:
    """Return the serial completion order of the graph as a single string."""
    return "".join(SerialWalker(graph).walk())
