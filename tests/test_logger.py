"""Tests for verbosity-level logging."""

import io
import logging
from collections.abc import Callable

import pytest

from projplan.logger import (
    VERBOSITY_CHANGES,
    VERBOSITY_CHECKS,
    VERBOSITY_DEBUG,
    VERBOSITY_SILENT,
    changes_enabled,
    checks_enabled,
    debug_enabled,
    get_logger,
    level_for_verbosity,
    setup_logger,
)
from projplan.models import ProjectContext, Task
from projplan.scheduler.algorithm import schedule_tasks


class TestLogger:
    """Test logger levels."""

    def test_silent_by_default(self) -> None:
        assert not changes_enabled()
        assert not checks_enabled()

    def test_levels(self) -> None:
        stream = io.StringIO()
        setup_logger(VERBOSITY_CHANGES, stream)
        logger = get_logger()
        logger.changes("assigned")
        logger.checks("checked")
        logger.debug("arithmetic")
        assert stream.getvalue() == "assigned\n"

    def test_checks_level_includes_changes(self) -> None:
        stream = io.StringIO()
        setup_logger(VERBOSITY_CHECKS, stream)
        get_logger().changes("assigned")
        get_logger().checks("checked")
        get_logger().debug("arithmetic")
        assert stream.getvalue() == "assigned\nchecked\n"

    def test_debug_shows_everything(self) -> None:
        stream = io.StringIO()
        setup_logger(VERBOSITY_DEBUG, stream)
        get_logger().debug("arithmetic")
        assert "arithmetic" in stream.getvalue()
        assert checks_enabled()

    @pytest.mark.parametrize(
        ("verbosity", "level"),
        [
            (-1, logging.ERROR),
            (0, logging.ERROR),
            (1, 25),
            (2, 15),
            (3, logging.DEBUG),
            (7, logging.DEBUG),
        ],
    )
    def test_level_for_verbosity(self, verbosity: int, level: int) -> None:
        assert level_for_verbosity(verbosity) == level

    def test_debug_guard(self) -> None:
        assert not debug_enabled()
        setup_logger(VERBOSITY_DEBUG, io.StringIO())
        assert debug_enabled()

    def test_silent_skips_per_task_messages(
        self, make_task: Callable[..., Task], make_project: Callable[..., ProjectContext]
    ) -> None:
        stream = io.StringIO()
        setup_logger(VERBOSITY_SILENT, stream)
        schedule_tasks([make_task("a")], make_project(deadline_days=1))
        assert stream.getvalue() == ""

    def test_setup_replaces_handlers(self) -> None:
        setup_logger(VERBOSITY_CHANGES, io.StringIO())
        setup_logger(VERBOSITY_SILENT, io.StringIO())
        assert len(get_logger().handlers) == 1
        assert not changes_enabled()
