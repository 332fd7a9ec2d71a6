"""Validation of tasks before they reach the scheduler."""

import math
from collections.abc import Iterable
from numbers import Real

from projplan.exceptions import InvalidTaskError
from projplan.models import Priority, Task


def validate_task(task: Task) -> None:
    """Check a single task.

    Raises:
        InvalidTaskError: If the id is empty, the priority is not one of the
            four levels, or estimated_hours is not a positive number
    """
    if not isinstance(task.id, str) or not task.id.strip():
        raise InvalidTaskError(f"Task '{task.title}' has an empty id")

    if not isinstance(task.priority, Priority):
        valid = ", ".join(p.value for p in Priority)
        raise InvalidTaskError(
            f"Task '{task.id}' has invalid priority '{task.priority}'. "
            f"Valid priorities are: {valid}"
        )

    hours = task.estimated_hours
    if isinstance(hours, bool) or not isinstance(hours, Real) or math.isnan(hours) or hours <= 0:
        raise InvalidTaskError(
            f"Task '{task.id}' must have positive estimated_hours, got {hours!r}"
        )
    if math.isinf(hours):
        raise InvalidTaskError(f"Task '{task.id}' has infinite estimated_hours")


def validate_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Validate every task and reject duplicate ids.

    Unknown dependency ids are allowed; the resolver drops them.

    Returns:
        The tasks as a list, in input order
    """
    result: list[Task] = []
    seen: set[str] = set()
    for task in tasks:
        validate_task(task)
        if task.id in seen:
            raise InvalidTaskError(f"Duplicate task id '{task.id}'")
        seen.add(task.id)
        result.append(task)
    return result
