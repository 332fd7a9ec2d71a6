"""Scheduler package - dependency-aware, deadline-constrained due dates.

Components, leaves first:
- validate_task / validate_tasks: reject malformed tasks
- DependencyResolver: order tasks after their dependencies
- effective_days: urgency-compressed working window
- TaskScheduler: due dates from a cursor that advances with overlap
- compute_latest_finish: deadline propagated back through dependencies
- summarize_timeline: workload per delivery phase

The high-level entry point is projplan.service.SchedulingService.
"""

from .algorithm import AlgorithmResult, TaskScheduler, schedule_tasks
from .backward_pass import compute_latest_finish, find_at_risk
from .config import CalendarConfig, CyclePolicy, SchedulingConfig
from .resolver import DependencyResolver, ResolutionResult, resolve_dependencies
from .summary import PhaseSummary, TimelineSummary, summarize_timeline
from .timeline import effective_days, urgency_multiplier
from .validator import validate_task, validate_tasks

__all__ = [
    # Configuration
    "SchedulingConfig",
    "CalendarConfig",
    "CyclePolicy",
    # Validation
    "validate_task",
    "validate_tasks",
    # Dependency resolution
    "DependencyResolver",
    "ResolutionResult",
    "resolve_dependencies",
    # Timeline compression
    "effective_days",
    "urgency_multiplier",
    # Due-date assignment
    "TaskScheduler",
    "AlgorithmResult",
    "schedule_tasks",
    # Deadline back-propagation
    "compute_latest_finish",
    "find_at_risk",
    # Summary
    "summarize_timeline",
    "TimelineSummary",
    "PhaseSummary",
]
