"""Dependency graph of steps and their precedence edges."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .exceptions import InvariantViolationError, MissingReferenceError


class DependencyGraph:
    """Directed graph of tasks stored as an arena of integer-indexed nodes.

    Each task name maps to an index; successor lists and the
    unsatisfied-predecessor counts are stored per index. Edges point from a
    predecessor to the successor that cannot start until it has completed.
    """

    def __init__(self) -> None:
        self._names: list[str] = []
        self._index: dict[str, int] = {}
        self._successors: list[list[int]] = []
        self._predecessors: list[list[int]] = []
        self._pending: list[int] = []

    @classmethod
    def build(cls, edges: Iterable[tuple[str, str]]) -> DependencyGraph:
        """Build a graph from (predecessor, successor) pairs.

        Nodes are the union of identifiers on either side, kept in first-seen
        order. Repeated identical pairs collapse into a single edge.

        Args:
            edges: Pairs where the second task depends on the first

        Returns:
            A graph whose predecessor counts equal each task's in-degree
        """
        graph = cls()
        for predecessor, successor in edges:
            graph.add_edge(predecessor, successor)
        return graph

    def add_task(self, name: str) -> int:
        """Add a task if it is not already present and return its index."""
        existing = self._index.get(name)
        if existing is not None:
            return existing

        idx = len(self._names)
        self._names.append(name)
        self._index[name] = idx
        self._successors.append([])
        self._predecessors.append([])
        self._pending.append(0)
        return idx

    def add_edge(self, predecessor: str, successor: str) -> None:
        """Record that successor cannot start before predecessor completes."""
        src = self.add_task(predecessor)
        dst = self.add_task(successor)
        if dst in self._successors[src]:
            return
        self._successors[src].append(dst)
        self._predecessors[dst].append(src)
        self._pending[dst] += 1

    @property
    def tasks(self) -> list[str]:
        """All task names in first-seen order."""
        return list(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def _lookup(self, name: str) -> int:
        try:
            return self._index[name]
        except KeyError:
            raise MissingReferenceError(f"Unknown task: {name!r}") from None

    def successors(self, name: str) -> list[str]:
        """Tasks that directly depend on the given task."""
        return [self._names[i] for i in self._successors[self._lookup(name)]]

    def predecessors(self, name: str) -> list[str]:
        """Tasks the given task directly depends on."""
        return [self._names[i] for i in self._predecessors[self._lookup(name)]]

    def predecessor_count(self, name: str) -> int:
        """Number of predecessors of the task that have not completed yet."""
        return self._pending[self._lookup(name)]

    def initial_frontier(self) -> set[str]:
        """Tasks with no predecessors at all."""
        return {name for idx, name in enumerate(self._names) if not self._predecessors[idx]}

    def decrement_predecessor_count(self, name: str) -> int:
        """Mark one predecessor of the task as satisfied.

        Returns:
            The task's remaining unsatisfied-predecessor count

        Raises:
            InvariantViolationError: If the count would drop below zero
        """
        idx = self._lookup(name)
        if self._pending[idx] == 0:
            raise InvariantViolationError(
                f"Predecessor count of {name!r} is already zero and cannot be decremented"
            )
        self._pending[idx] -= 1
        return self._pending[idx]

    def copy(self) -> DependencyGraph:
        """Copy the graph with predecessor counts reset to the in-degrees.

        Every scheduling run works on its own copy so the caller's graph can
        be reused for further runs.
        """
        clone = DependencyGraph()
        clone._names = list(self._names)
        clone._index = dict(self._index)
        clone._successors = [list(succ) for succ in self._successors]
        clone._predecessors = [list(pred) for pred in self._predecessors]
        clone._pending = [len(pred) for pred in self._predecessors]
        return clone

    def to_dot(self) -> str:
        """Render the graph in Graphviz DOT format."""
        lines = ["digraph Steps {"]
        lines.append("  rankdir=LR;")
        lines.append("  node [shape=box];")
        lines.append("")

        for name in sorted(self._names):
            lines.append(f'  "{_escape_label(name)}";')
        lines.append("")

        lines.append("  // Dependencies (predecessor -> successor)")
        for name in sorted(self._names):
            for successor in sorted(self.successors(name)):
                lines.append(f'  "{_escape_label(name)}" -> "{_escape_label(successor)}";')

        lines.append("}")
        return "\n".join(lines)


def _escape_label(label: str) -> str:
    """Escape special characters in DOT identifiers."""
    return label.replace('"', '\\"').replace("\n", "\\n")
