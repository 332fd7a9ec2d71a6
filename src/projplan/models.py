"""Data models for projplan."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

from .exceptions import InvalidTaskError

MILESTONE_CATEGORY = "milestone"


class Priority(str, Enum):
    """Task and project urgency."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

    @classmethod
    def parse(cls, value: Priority | str) -> Priority:
        """Parse a priority, ignoring case and surrounding whitespace.

        Raises:
            InvalidTaskError: If the value is not one of the four levels
        """
        if isinstance(value, Priority):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise InvalidTaskError(
                f"Invalid priority '{value}'. Valid priorities are: {valid}"
            ) from None


class EventType(str, Enum):
    """Kinds of calendar events."""

    MEETING = "MEETING"
    DEADLINE = "DEADLINE"
    REVIEW = "REVIEW"
    PLANNING = "PLANNING"


def _dedupe(ids: tuple[str, ...] | list[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(ids))


@dataclass(frozen=True)
class Task:
    """A generated task, immutable for the duration of a scheduling run."""

    id: str
    title: str
    priority: Priority
    estimated_hours: float
    description: str = ""
    depends_on: tuple[str, ...] = ()
    category: str = "general"
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Accept lists from callers but store hashable, duplicate-free tuples
        object.__setattr__(self, "depends_on", _dedupe(tuple(self.depends_on)))
        object.__setattr__(self, "tags", tuple(self.tags))
        # Plain strings like "high" become Priority; anything else is left for validation
        if isinstance(self.priority, str) and not isinstance(self.priority, Priority):
            name = self.priority.strip().upper()
            if name in Priority.__members__:
                object.__setattr__(self, "priority", Priority[name])

    @property
    def is_milestone(self) -> bool:
        return self.category == MILESTONE_CATEGORY

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": _enum_value(self.priority),
            "estimated_hours": self.estimated_hours,
            "depends_on": list(self.depends_on),
            "category": self.category,
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class ProjectContext:
    """Project-level inputs for one scheduling run."""

    reference_date: date = field(default_factory=date.today)
    deadline: date | None = None
    priority: Priority | None = None
    project_name: str = ""
    workspace_id: str = ""
    attendees: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "attendees", tuple(self.attendees))

    @property
    def has_deadline(self) -> bool:
        return self.deadline is not None


@dataclass(frozen=True)
class ScheduledTask:
    """A task with its computed schedule.

    start_date is the scheduling cursor when the task was placed;
    overlap_days counts the calendar days it shares with the task
    scheduled immediately before it.
    """

    task: Task
    due_date: date
    scheduled_days: int
    original_index: int
    start_date: date
    overlap_days: int = 0

    @property
    def id(self) -> str:
        return self.task.id

    @property
    def title(self) -> str:
        return self.task.title

    @property
    def description(self) -> str:
        return self.task.description

    @property
    def priority(self) -> Priority:
        return self.task.priority

    @property
    def estimated_hours(self) -> float:
        return self.task.estimated_hours

    @property
    def depends_on(self) -> tuple[str, ...]:
        return self.task.depends_on

    @property
    def category(self) -> str:
        return self.task.category

    @property
    def tags(self) -> tuple[str, ...]:
        return self.task.tags

    def to_dict(self) -> dict[str, Any]:
        """Task fields plus the schedule, with dates as ISO strings."""
        result = self.task.to_dict()
        result.update(
            {
                "due_date": self.due_date.isoformat(),
                "scheduled_days": self.scheduled_days,
                "original_index": self.original_index,
                "start_date": self.start_date.isoformat(),
                "overlap_days": self.overlap_days,
            }
        )
        return result


@dataclass(frozen=True)
class CalendarEvent:
    """A calendar entry derived from the schedule."""

    id: str
    title: str
    description: str
    start_time: datetime
    end_time: datetime
    type: EventType
    color: str
    attendees: tuple[str, ...] = ()
    notification_enabled: bool = True

    @property
    def duration_hours(self) -> float:
        return (self.end_time - self.start_time).total_seconds() / 3600

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "duration_hours": self.duration_hours,
            "type": self.type.value,
            "color": self.color,
            "attendees": list(self.attendees),
            "notification_enabled": self.notification_enabled,
        }


def _enum_value(value: Any) -> Any:
    # Unvalidated tasks may still carry a raw string
    return value.value if isinstance(value, Enum) else value
