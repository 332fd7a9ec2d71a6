"""Pytest configuration and fixtures for projplan tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import date
from typing import Any

import pytest

from projplan.logger import reset_logger
from projplan.models import Priority, ProjectContext, Task

REFERENCE_DATE = date(2025, 1, 6)


@pytest.fixture(autouse=True)
def _clean_logger() -> Iterator[None]:
    """Keep logger configuration from leaking between tests."""
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def reference_date() -> date:
    """A fixed Monday so date arithmetic in tests is stable."""
    return REFERENCE_DATE


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """Factory for tasks with sensible defaults."""

    def _make(
        task_id: str,
        *,
        priority: Priority | str = Priority.MEDIUM,
        estimated_hours: float = 8,
        depends_on: tuple[str, ...] | list[str] = (),
        category: str = "general",
        **kwargs: Any,
    ) -> Task:
        return Task(
            id=task_id,
            title=kwargs.pop("title", f"Task {task_id}"),
            priority=priority,  # type: ignore[arg-type]
            estimated_hours=estimated_hours,
            depends_on=tuple(depends_on),
            category=category,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_project(reference_date: date) -> Callable[..., ProjectContext]:
    """Factory for project contexts anchored at the reference date."""

    def _make(
        *,
        deadline_days: int | None = None,
        priority: Priority | None = Priority.MEDIUM,
        **kwargs: Any,
    ) -> ProjectContext:
        deadline = None
        if deadline_days is not None:
            deadline = date.fromordinal(reference_date.toordinal() + deadline_days)
        return ProjectContext(
            reference_date=kwargs.pop("reference_date", reference_date),
            deadline=deadline,
            priority=priority,
            project_name=kwargs.pop("project_name", "Website Redesign"),
            workspace_id=kwargs.pop("workspace_id", "ws-1"),
            **kwargs,
        )

    return _make
