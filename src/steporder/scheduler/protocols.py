"""Protocol definitions for the scheduling system."""

from typing import Protocol

from .core import AlgorithmResult


class CostFunction(Protocol):
    """Computes how long a task occupies a worker."""

    def __call__(self, task_id: str) -> int:
        """Return the task's duration in whole time units."""
        ...


class SchedulingAlgorithm(Protocol):
    """Protocol for scheduling algorithms."""

    def schedule(self) -> AlgorithmResult:
        """Run the scheduling algorithm.

        Returns:
            AlgorithmResult with the completion order and, for simulations,
            the total elapsed time
        """
        ...
