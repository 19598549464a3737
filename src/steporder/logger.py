"""Logging configuration for steporder with custom verbosity levels."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

# Custom levels between the standard ones
CHANGES_LEVEL = 25  # Between INFO (20) and WARNING (30) - verbosity 1
CHECKS_LEVEL = 15  # Between DEBUG (10) and INFO (20) - verbosity 2

logging.addLevelName(CHANGES_LEVEL, "CHANGES")
logging.addLevelName(CHECKS_LEVEL, "CHECKS")

VERBOSITY_SILENT = 0  # Only errors
VERBOSITY_CHANGES = 1  # Assignments and completions
VERBOSITY_CHECKS = 2  # Frontier contents at each step
VERBOSITY_DEBUG = 3  # Worker states and clock advances

_LEVEL_MAP = {
    VERBOSITY_SILENT: logging.ERROR,
    VERBOSITY_CHANGES: CHANGES_LEVEL,
    VERBOSITY_CHECKS: CHECKS_LEVEL,
    VERBOSITY_DEBUG: logging.DEBUG,
}


class StepOrderLogger(logging.Logger):
    """Logger with semantic verbosity methods.

    - changes(): verbosity 1 - task assignments and completions
    - checks(): verbosity 2 - frontier contents and candidate selection
    - debug(): verbosity 3 - worker states and clock advances
    """

    def changes(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log changes (verbosity level 1)."""
        if self.isEnabledFor(CHANGES_LEVEL):
            self._log(CHANGES_LEVEL, msg, args, **kwargs)

    def checks(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log checks (verbosity level 2)."""
        if self.isEnabledFor(CHECKS_LEVEL):
            self._log(CHECKS_LEVEL, msg, args, **kwargs)


def get_logger() -> StepOrderLogger:
    """Return the shared steporder logger.

    Call setup_logger() to configure output before the first run.
    """
    logging.setLoggerClass(StepOrderLogger)
    logger = logging.getLogger("steporder")
    assert isinstance(logger, StepOrderLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Configure the steporder logger with a verbosity level.

    Safe to call repeatedly; existing handlers are replaced.

    Args:
        verbosity: 0=silent (errors only), 1=changes, 2=checks, 3=debug
        stream: Output stream, sys.stderr when omitted
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(_LEVEL_MAP.get(verbosity, logging.ERROR))

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Drop handlers and return to silent mode (used between tests)."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.ERROR)


def changes_enabled() -> bool:
    """True when changes-level messages will be emitted (verbosity >= 1)."""
    return get_logger().isEnabledFor(CHANGES_LEVEL)


def checks_enabled() -> bool:
    """True when checks-level messages will be emitted (verbosity >= 2)."""
    return get_logger().isEnabledFor(CHECKS_LEVEL)


def debug_enabled() -> bool:
    """True when debug messages will be emitted (verbosity >= 3)."""
    return get_logger().isEnabledFor(logging.DEBUG)
