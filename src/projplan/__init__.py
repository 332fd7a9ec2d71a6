"""projplan - dependency-aware, deadline-constrained task scheduling."""

from .exceptions import (
    CircularDependencyError,
    InvalidTaskError,
    ParseError,
    ProjplanError,
    ValidationError,
)
from .models import CalendarEvent, EventType, Priority, ProjectContext, ScheduledTask, Task
from .service import ScheduleResult, SchedulingService

__version__ = "0.1.0"

__all__ = [
    "CalendarEvent",
    "CircularDependencyError",
    "EventType",
    "InvalidTaskError",
    "ParseError",
    "Priority",
    "ProjectContext",
    "ProjplanError",
    "ScheduleResult",
    "ScheduledTask",
    "SchedulingService",
    "Task",
    "ValidationError",
]
