"""Logging setup for projplan with scheduler-oriented verbosity levels."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

# Levels between the standard ones
CHANGES_LEVEL = 25  # INFO < CHANGES < WARNING: due-date assignments
CHECKS_LEVEL = 15  # DEBUG < CHECKS < INFO: resolver decisions, skipped edges

logging.addLevelName(CHANGES_LEVEL, "CHANGES")
logging.addLevelName(CHECKS_LEVEL, "CHECKS")

VERBOSITY_SILENT = 0
VERBOSITY_CHANGES = 1
VERBOSITY_CHECKS = 2
VERBOSITY_DEBUG = 3

LOGGER_NAME = "projplan"

# Index is the -v count; anything past the end means full debug output
_LEVEL_BY_VERBOSITY = (logging.ERROR, CHANGES_LEVEL, CHECKS_LEVEL, logging.DEBUG)


class ProjplanLogger(logging.Logger):
    """Logger with one method per verbosity level.

    - changes(): level 1, one line per scheduled task
    - checks(): level 2, dependency resolution decisions
    - debug(): level 3, the date arithmetic behind each assignment
    """

    def changes(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(CHANGES_LEVEL):
            self._log(CHANGES_LEVEL, msg, args, **kwargs)

    def checks(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(CHECKS_LEVEL):
            self._log(CHECKS_LEVEL, msg, args, **kwargs)


def get_logger() -> ProjplanLogger:
    """Return the projplan logger singleton.

    Call setup_logger() first to attach a handler; until then only
    records at ERROR and above reach the root logger.
    """
    logging.setLoggerClass(ProjplanLogger)
    logger = logging.getLogger(LOGGER_NAME)
    assert isinstance(logger, ProjplanLogger)
    return logger


def level_for_verbosity(verbosity: int) -> int:
    """Logging level for a -v count; negative counts are silent."""
    if verbosity < VERBOSITY_SILENT:
        return logging.ERROR
    return _LEVEL_BY_VERBOSITY[min(verbosity, VERBOSITY_DEBUG)]


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Send projplan log records to stream (default stderr) at the given verbosity.

    Safe to call repeatedly; existing handlers are replaced.
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(level_for_verbosity(verbosity))

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Drop handlers and go back to errors only. Used between tests."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.ERROR)


# Guards for call sites that format per-task messages in loops
def changes_enabled() -> bool:
    return get_logger().isEnabledFor(CHANGES_LEVEL)


def checks_enabled() -> bool:
    return get_logger().isEnabledFor(CHECKS_LEVEL)


def debug_enabled() -> bool:
    return get_logger().isEnabledFor(logging.DEBUG)
