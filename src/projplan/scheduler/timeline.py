"""Urgency-based compression of the project window."""

import math
from datetime import date, timedelta
from fractions import Fraction

from projplan.models import Priority, ProjectContext

from .config import SchedulingConfig


def exact_ratio(value: float) -> Fraction:
    """Exact decimal value of a configured ratio (0.7 is 7/10, not 0.69999...)."""
    return Fraction(str(value))


def days_between(start: date, end: date) -> int:
    """Calendar days from start to end, negative when end is earlier."""
    return (end - start).days


def shift_date(day: date, days: int) -> date:
    """day moved by days, saturating at date.min and date.max.

    Task durations come from unbounded effort estimates, so the offset may
    be larger than any timedelta.
    """
    if days >= days_between(day, date.max):
        return date.max
    if days <= days_between(day, date.min):
        return date.min
    return day + timedelta(days=days)


def urgency_multiplier(priority: Priority | None, config: SchedulingConfig | None = None) -> float:
    """Multiplier for a project priority, the configured default when unknown."""
    config = config or SchedulingConfig()
    if priority is None:
        return config.default_urgency_multiplier
    return config.urgency_multipliers.get(priority, config.default_urgency_multiplier)


def effective_days(project: ProjectContext, config: SchedulingConfig | None = None) -> int | None:
    """Working days available for execution before the deadline.

    Higher urgency leaves more slack before the real deadline:
    floor(max(1, days to deadline) * multiplier).

    Returns:
        The effective day count, or None when the project has no deadline
    """
    if project.deadline is None:
        return None

    total_days = max(1, days_between(project.reference_date, project.deadline))
    multiplier = exact_ratio(urgency_multiplier(project.priority, config))
    return math.floor(total_days * multiplier)
