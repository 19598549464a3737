"""Core dataclasses for the scheduling system."""

from dataclasses import dataclass, field
from typing import Any

from steporder.exceptions import InvalidTaskError


def _default_dict() -> dict[str, Any]:
    return {}


@dataclass
class ScheduledStep:
    """A task as executed by one worker during a simulation."""

    task_id: str
    worker: int
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


def _default_step_list() -> list[ScheduledStep]:
    return []


@dataclass
class WorkerSlot:
    """A worker in the pool: idle, or busy on a task with time remaining.

    The ordering key is only used to choose which worker to inspect next:
    idle workers sort before busy ones (lowest index first), busy workers
    sort by remaining time.
    """

    index: int
    task_id: str | None = None
    remaining: int = 0
    started_at: int = 0

    @property
    def is_idle(self) -> bool:
        return self.task_id is None

    def sort_key(self) -> tuple[int, int, int]:
        if self.is_idle:
            return (0, 0, self.index)
        return (1, self.remaining, self.index)

    def assign(self, task_id: str, duration: int, now: int) -> None:
        self.task_id = task_id
        self.remaining = duration
        self.started_at = now

    def release(self) -> None:
        self.task_id = None
        self.remaining = 0
        self.started_at = 0

    def __str__(self) -> str:
        if self.is_idle:
            return f"#{self.index}:idle"
        return f"#{self.index}:{self.task_id}({self.remaining})"


@dataclass
class AlgorithmResult:
    """Result from a scheduling algorithm."""

    completion_order: list[str]
    total_time: int | None = None  # None for the serial walk
    timeline: list[ScheduledStep] = field(default_factory=_default_step_list)
    algorithm_metadata: dict[str, Any] = field(default_factory=_default_dict)

    @property
    def order(self) -> str:
        """Completion order with task identifiers concatenated."""
        return "".join(self.completion_order)


@dataclass
class SchedulingResult:
    """Complete result of a scheduling run as returned by the service."""

    algorithm: str
    completion_order: list[str]
    total_time: int | None
    task_count: int
    timeline: list[ScheduledStep] = field(default_factory=_default_step_list)

    @property
    def order(self) -> str:
        return "".join(self.completion_order)


def letter_cost(task_id: str, fixed_overhead: int) -> int:
    """Compute the duration of a task from its letter.

    ``A`` costs 1, ``B`` costs 2 and so on up to ``Z`` at 26, each plus the
    fixed overhead.

    Args:
        task_id: Single uppercase ASCII letter
        fixed_overhead: Non-negative time added to every task

    Returns:
        Duration in time units

    Raises:
        InvalidTaskError: If the task identifier is not a single letter A-Z
    """
    if len(task_id) != 1 or not "A" <= task_id <= "Z":
        raise InvalidTaskError(
            f"Cannot derive a letter cost for task {task_id!r}: "
            "identifiers must be a single uppercase letter A-Z"
        )
    return ord(task_id) - ord("A") + 1 + fixed_overhead
