"""Project timeline summary grouped into delivery phases."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from projplan.models import ProjectContext, Task

# Horizon used when the project has no deadline
DEFAULT_HORIZON_WEEKS = 12

PHASE_CATEGORIES: list[tuple[str, frozenset[str]]] = [
    ("Planning", frozenset({"planning"})),
    ("Implementation", frozenset({"development", "implementation", "content"})),
    ("Quality Assurance", frozenset({"testing", "qa", "review"})),
    ("Launch", frozenset({"deployment", "launch"})),
]


@dataclass(frozen=True)
class PhaseSummary:
    name: str
    task_count: int


@dataclass(frozen=True)
class TimelineSummary:
    """Overview of a project's window and workload."""

    start_date: date
    end_date: date
    total_tasks: int
    estimated_hours: float
    phases: tuple[PhaseSummary, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "total_tasks": self.total_tasks,
            "estimated_hours": self.estimated_hours,
            "phases": [{"name": p.name, "task_count": p.task_count} for p in self.phases],
        }


def summarize_timeline(tasks: Sequence[Task], project: ProjectContext) -> TimelineSummary:
    """Summarize the project window, total effort and tasks per phase.

    Tasks whose category matches no phase are counted in total_tasks only.
    """
    start = project.reference_date
    end = project.deadline or start + timedelta(weeks=DEFAULT_HORIZON_WEEKS)

    phases = tuple(
        PhaseSummary(name=name, task_count=sum(1 for t in tasks if t.category in categories))
        for name, categories in PHASE_CATEGORIES
    )
    return TimelineSummary(
        start_date=start,
        end_date=end,
        total_tasks=len(tasks),
        estimated_hours=sum(t.estimated_hours for t in tasks),
        phases=phases,
    )
