"""Due-date assignment over a dependency-ordered task list."""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any

from projplan.exceptions import InvalidTaskError
from projplan.logger import changes_enabled, debug_enabled, get_logger
from projplan.models import ProjectContext, ScheduledTask, Task

from .config import SchedulingConfig
from .timeline import days_between, exact_ratio, shift_date
from .validator import validate_task

logger = get_logger()


def _default_str_list() -> list[str]:
    return []


def _default_dict() -> dict[str, Any]:
    return {}


@dataclass
class AlgorithmResult:
    """Result from the task scheduler."""

    scheduled_tasks: list[ScheduledTask]
    clamped_task_ids: list[str] = field(default_factory=_default_str_list)
    algorithm_metadata: dict[str, Any] = field(default_factory=_default_dict)


@dataclass(frozen=True)
class _Cursor:
    """Scheduling position carried from one task to the next."""

    current_date: date
    previous_due: date | None = None


class TaskScheduler:
    """Assigns due dates in dependency order.

    Each task gets max(priority floor, ceil(hours / hours_per_day)) days
    starting at the cursor. Its due date is clamped to the deadline, and
    the cursor then moves forward by overlap_ratio of those days (at least
    one), so consecutive tasks overlap. Without a deadline, due dates
    follow a fixed cadence of fallback_spacing_days per task instead.
    """

    def __init__(self, config: SchedulingConfig | None = None):
        self.config = config or SchedulingConfig()

    def task_duration_days(self, task: Task) -> int:
        """Days allotted to a task: the priority floor or the effort, whichever is larger."""
        validate_task(task)
        base_days = self.config.priority_base_days.get(task.priority)
        if base_days is None:
            raise InvalidTaskError(
                f"Task '{task.id}' has no duration floor for priority '{task.priority}'"
            )
        estimated_days = math.ceil(exact_ratio(task.estimated_hours) / self.config.hours_per_day)
        return max(base_days, estimated_days)

    def cursor_advance_days(self, actual_days: int) -> int:
        """How far the cursor moves after placing a task of actual_days."""
        return max(1, math.floor(actual_days * exact_ratio(self.config.overlap_ratio)))

    def schedule(
        self,
        ordered_tasks: Sequence[Task],
        project: ProjectContext,
        original_indices: Mapping[str, int] | None = None,
    ) -> AlgorithmResult:
        """Schedule tasks that are already in dependency order.

        Args:
            ordered_tasks: Output of the dependency resolver
            project: Reference date, deadline and priority for this run
            original_indices: Task id to input position. Defaults to the
                position in ordered_tasks.

        Returns:
            AlgorithmResult with one ScheduledTask per input task, in order

        Raises:
            InvalidTaskError: If a task was not validated and is malformed
        """
        cursor = _Cursor(current_date=project.reference_date)
        scheduled: list[ScheduledTask] = []
        clamped: list[str] = []

        for index, task in enumerate(ordered_tasks):
            original_index = (
                index if original_indices is None else original_indices.get(task.id, index)
            )
            if project.deadline is None:
                entry, cursor = self._place_on_cadence(task, index, original_index, cursor, project)
            else:
                entry, cursor, was_clamped = self._place_before_deadline(
                    task, original_index, cursor, project.deadline
                )
                if was_clamped:
                    clamped.append(task.id)
            scheduled.append(entry)

        return AlgorithmResult(
            scheduled_tasks=scheduled,
            clamped_task_ids=clamped,
            algorithm_metadata={
                "mode": "fallback" if project.deadline is None else "deadline",
                "final_cursor": cursor.current_date,
            },
        )

    def _place_before_deadline(
        self, task: Task, original_index: int, cursor: _Cursor, deadline: date
    ) -> tuple[ScheduledTask, _Cursor, bool]:
        actual_days = self.task_duration_days(task)
        start = cursor.current_date
        window = days_between(start, deadline)
        clamped = actual_days > window
        due = deadline if clamped else shift_date(start, actual_days)
        advance = self.cursor_advance_days(actual_days)

        if debug_enabled():
            logger.debug(
                f"    {task.id}: start={start} days={actual_days} window={window} "
                f"advance={advance}"
            )
        if changes_enabled():
            if clamped:
                logger.changes(
                    f"  {task.id}: due {due} (clamped to deadline, needs {actual_days} days "
                    f"from {start})"
                )
            else:
                logger.changes(f"  {task.id}: due {due} ({actual_days} days from {start})")

        entry = ScheduledTask(
            task=task,
            due_date=due,
            scheduled_days=actual_days,
            original_index=original_index,
            start_date=start,
            overlap_days=_overlap(cursor.previous_due, start),
        )
        next_cursor = _Cursor(current_date=shift_date(start, advance), previous_due=due)
        return entry, next_cursor, clamped

    def _place_on_cadence(
        self,
        task: Task,
        index: int,
        original_index: int,
        cursor: _Cursor,
        project: ProjectContext,
    ) -> tuple[ScheduledTask, _Cursor]:
        actual_days = self.task_duration_days(task)
        spacing = timedelta(days=self.config.fallback_spacing_days)
        due = project.reference_date + spacing * index
        start = max(project.reference_date, due - spacing)

        if changes_enabled():
            logger.changes(f"  {task.id}: due {due} (no deadline, fixed cadence)")

        entry = ScheduledTask(
            task=task,
            due_date=due,
            scheduled_days=actual_days,
            original_index=original_index,
            start_date=start,
            overlap_days=_overlap(cursor.previous_due, start),
        )
        return entry, _Cursor(current_date=start, previous_due=due)


def _overlap(previous_due: date | None, start: date) -> int:
    if previous_due is None:
        return 0
    return max(0, (previous_due - start).days)


def schedule_tasks(
    ordered_tasks: Sequence[Task],
    project: ProjectContext,
    config: SchedulingConfig | None = None,
) -> list[ScheduledTask]:
    """Schedule dependency-ordered tasks. See TaskScheduler."""
    return TaskScheduler(config).schedule(ordered_tasks, project).scheduled_tasks
