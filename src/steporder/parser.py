"""Parser for step instruction files.

Each non-blank line has the form::

    Step C must be finished before step A can begin.

and yields the edge ``("C", "A")``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

from .exceptions import ParseError

INSTRUCTION_RE = re.compile(r"^Step (.+) must be finished before step (.+) can begin\.$")


def parse_instruction(line: str) -> tuple[str, str]:
    """Parse one instruction line into a (predecessor, successor) pair.

    Raises:
        ParseError: If the line does not match the instruction format
    """
    match = INSTRUCTION_RE.match(line.strip())
    if not match:
        raise ParseError(f'Unrecognized record "{line.rstrip()}"')
    return (match.group(1), match.group(2))


class InstructionParser:
    """Parser for step instruction text."""

    def parse_file(self, file_path: Path | str) -> list[tuple[str, str]]:
        """Parse an instruction file into edges."""
        path = Path(file_path)
        if not path.exists():
            raise ParseError(f"File not found: {file_path}")

        with path.open(encoding="utf-8") as f:
            return self.parse_lines(f)

    def parse_lines(self, lines: Iterable[str]) -> list[tuple[str, str]]:
        """Parse instruction lines, skipping blank ones.

        Raises:
            ParseError: On the first unrecognized line, with its line number
        """
        edges: list[tuple[str, str]] = []
        for lineno, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                edges.append(parse_instruction(line))
            except ParseError as e:
                raise ParseError(f"Line {lineno}: {e}") from e
        return edges
