"""High-level scheduling service."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from .colors import project_color
from .events import derive_events
from .logger import get_logger
from .models import CalendarEvent, ProjectContext, ScheduledTask, Task
from .scheduler import (
    CalendarConfig,
    DependencyResolver,
    SchedulingConfig,
    TaskScheduler,
    TimelineSummary,
    compute_latest_finish,
    effective_days,
    find_at_risk,
    summarize_timeline,
    validate_tasks,
)

logger = get_logger()


def _default_str_list() -> list[str]:
    return []


@dataclass
class ScheduleResult:
    """Everything one scheduling run produces."""

    scheduled_tasks: list[ScheduledTask]
    calendar_events: list[CalendarEvent]
    effective_days: int | None
    color: str
    summary: TimelineSummary
    latest_finish: dict[str, date]
    warnings: list[str] = field(default_factory=_default_str_list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the {scheduledTasks, calendarEvents} payload plus extras."""
        return {
            "scheduled_tasks": [entry.to_dict() for entry in self.scheduled_tasks],
            "calendar_events": [event.to_dict() for event in self.calendar_events],
            "effective_days": self.effective_days,
            "color": self.color,
            "summary": self.summary.to_dict(),
            "latest_finish": {
                task_id: day.isoformat() for task_id, day in self.latest_finish.items()
            },
            "warnings": list(self.warnings),
        }


class SchedulingService:
    """Runs the full pipeline for one project.

    validation -> dependency resolution -> timeline compression ->
    due-date assignment -> deadline back-propagation -> calendar events.

    InvalidTaskError aborts the run. Cycles, unknown references and
    deadline clamping are reported as warnings on the result.
    """

    def __init__(
        self,
        tasks: Sequence[Task],
        project: ProjectContext,
        config: SchedulingConfig | None = None,
        calendar_config: CalendarConfig | None = None,
    ):
        self.tasks = list(tasks)
        self.project = project
        self.config = config or SchedulingConfig()
        self.calendar_config = calendar_config or CalendarConfig()

    def schedule(self) -> ScheduleResult:
        """Schedule all tasks and derive calendar events.

        Raises:
            InvalidTaskError: If any task is malformed (no partial result)
            CircularDependencyError: On a cycle when cycle_policy is "reject"
        """
        tasks = validate_tasks(self.tasks)
        warnings: list[str] = []

        deadline = self.project.deadline
        if deadline is not None and deadline < self.project.reference_date:
            warnings.append(
                f"Deadline {deadline} is before reference date "
                f"{self.project.reference_date}"
            )

        resolution = DependencyResolver(self.config.cycle_policy).resolve(tasks)
        for task_id, dep_id in resolution.unknown_references:
            warnings.append(f"Task '{task_id}' depends on unknown task '{dep_id}' - ignored")
        for task_id, dep_id in resolution.broken_edges:
            warnings.append(
                f"Circular dependency: '{task_id}' -> '{dep_id}' treated as already satisfied"
            )

        window = effective_days(self.project, self.config)
        if window is None:
            logger.changes("No deadline: using fixed spacing between due dates")
        else:
            logger.changes(f"Effective working days before {self.project.deadline}: {window}")

        algorithm_result = TaskScheduler(self.config).schedule(
            resolution.ordered_tasks, self.project, resolution.original_indices
        )
        scheduled = algorithm_result.scheduled_tasks

        if algorithm_result.clamped_task_ids:
            clamped = ", ".join(algorithm_result.clamped_task_ids)
            warnings.append(
                f"{len(algorithm_result.clamped_task_ids)} task(s) compressed onto deadline date "
                f"{self.project.deadline}: {clamped}"
            )

        latest_finish = compute_latest_finish(scheduled, self.project.deadline)
        by_id = {entry.id: entry for entry in scheduled}
        for task_id in find_at_risk(scheduled, latest_finish):
            days_late = (by_id[task_id].due_date - latest_finish[task_id]).days
            warnings.append(
                f"Task '{task_id}' is due {days_late} day(s) after the latest date that "
                f"leaves room for its dependents ({latest_finish[task_id]})"
            )

        return ScheduleResult(
            scheduled_tasks=scheduled,
            calendar_events=derive_events(scheduled, self.project, self.calendar_config),
            effective_days=window,
            color=project_color(self.project.project_name, self.project.workspace_id),
            summary=summarize_timeline(tasks, self.project),
            latest_finish=latest_finish,
            warnings=warnings,
        )
