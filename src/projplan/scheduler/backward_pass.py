"""Backward propagation of the project deadline through dependencies."""

from collections.abc import Sequence
from datetime import date

from projplan.models import ScheduledTask

from .timeline import shift_date


def compute_latest_finish(
    scheduled_tasks: Sequence[ScheduledTask], deadline: date | None
) -> dict[str, date]:
    """Latest date each task can finish without pushing a dependent past the deadline.

    Every task starts with the project deadline. Walking the schedule in
    reverse, each dependency must finish before its dependent starts:
    latest[dep] = min(latest[dep], latest[task] - scheduled_days(task)).
    Only edges pointing to a task earlier in the schedule are followed,
    which skips edges the resolver dropped to break a cycle.

    Args:
        scheduled_tasks: Tasks in dependency order
        deadline: Project deadline

    Returns:
        Task id to latest acceptable finish date, empty without a deadline
    """
    if deadline is None:
        return {}

    position = {entry.id: i for i, entry in enumerate(scheduled_tasks)}
    latest = {entry.id: deadline for entry in scheduled_tasks}

    for entry in reversed(scheduled_tasks):
        dep_deadline = shift_date(latest[entry.id], -entry.scheduled_days)
        for dep_id in entry.depends_on:
            if position.get(dep_id, len(position)) >= position[entry.id]:
                continue
            latest[dep_id] = min(latest[dep_id], dep_deadline)

    return latest


def find_at_risk(
    scheduled_tasks: Sequence[ScheduledTask], latest_finish: dict[str, date]
) -> list[str]:
    """Ids of tasks due after their latest acceptable finish, in schedule order."""
    return [
        entry.id
        for entry in scheduled_tasks
        if entry.id in latest_finish and entry.due_date > latest_finish[entry.id]
    ]
