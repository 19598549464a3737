"""Ordered set of tasks that are ready to start."""

import bisect
from collections.abc import Iterable, Iterator

from .exceptions import InvariantViolationError


class Frontier:
    """Tasks whose predecessors have all completed but which have not started.

    Maintains the invariant that ``_ready`` is sorted by raw string comparison,
    so the smallest task is always at index 0. A task may enter the frontier
    only once per run, even after it has been popped.
    """

    def __init__(self, tasks: Iterable[str] = ()) -> None:
        self._ready: list[str] = []
        self._members: set[str] = set()
        self._admitted: set[str] = set()
        for task in tasks:
            self.insert(task)

    def insert(self, task: str) -> None:
        """Add a ready task.

        Raises:
            InvariantViolationError: If the task was already admitted in this run
        """
        if task in self._admitted:
            raise InvariantViolationError(f"Task {task!r} entered the frontier twice")
        bisect.insort(self._ready, task)
        self._members.add(task)
        self._admitted.add(task)

    def pop_smallest(self) -> str:
        """Remove and return the lexicographically smallest ready task."""
        if not self._ready:
            raise IndexError("pop from empty frontier")
        task = self._ready.pop(0)
        self._members.discard(task)
        return task

    def peek_smallest(self) -> str:
        """Return the lexicographically smallest ready task without removing it."""
        if not self._ready:
            raise IndexError("peek at empty frontier")
        return self._ready[0]

    def is_empty(self) -> bool:
        return not self._ready

    def contains(self, task: str) -> bool:
        return task in self._members

    def __contains__(self, task: object) -> bool:
        return task in self._members

    def __len__(self) -> int:
        return len(self._ready)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._ready))

    def __repr__(self) -> str:
        return f"Frontier({self._ready!r})"
