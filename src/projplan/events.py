"""Calendar events derived from a schedule."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, time, timedelta

from .colors import project_color
from .models import CalendarEvent, EventType, Priority, ProjectContext, ScheduledTask
from .scheduler.config import CalendarConfig
from .scheduler.timeline import shift_date


def select_milestones(scheduled_tasks: Sequence[ScheduledTask]) -> list[ScheduledTask]:
    """Tasks that get a milestone marker, in scheduled order.

    A task qualifies if its category is "milestone", its priority is HIGH,
    or another task in the set depends on it.
    """
    depended_upon = {
        dep_id
        for entry in scheduled_tasks
        for dep_id in entry.depends_on
        if dep_id != entry.id
    }
    return [
        entry
        for entry in scheduled_tasks
        if entry.task.is_milestone or entry.priority == Priority.HIGH or entry.id in depended_upon
    ]


def derive_events(
    scheduled_tasks: Sequence[ScheduledTask],
    project: ProjectContext,
    config: CalendarConfig | None = None,
) -> list[CalendarEvent]:
    """Build the kickoff, milestone and final review events for a project.

    Milestones are placed on a fixed cadence from the reference date
    (every milestone_interval_weeks), not on the task's own due date.
    Event dates are kept inside [reference_date, deadline]. When the
    deadline is already past, every event falls on the reference date.

    Returns:
        Kickoff first, then milestones in scheduled order, then the review
        (only when the project has a deadline)
    """
    config = config or CalendarConfig()
    color = project_color(project.project_name, project.workspace_id)
    builder = _EventBuilder(project, config, color)

    events = [builder.kickoff()]
    for n, entry in enumerate(select_milestones(scheduled_tasks)):
        events.append(builder.milestone(entry, n))
    if project.deadline is not None:
        events.append(builder.final_review(project.deadline))
    return events


class _EventBuilder:
    def __init__(self, project: ProjectContext, config: CalendarConfig, color: str):
        self.project = project
        self.config = config
        self.color = color

    def kickoff(self) -> CalendarEvent:
        name = self.project.project_name or "the project"
        return self._event(
            event_id="project-kickoff",
            title="Project Kickoff",
            description=f"Kickoff meeting to align the team on {name}",
            day=self.project.reference_date,
            start=self.config.kickoff_time,
            hours=self.config.kickoff_duration_hours,
            event_type=EventType.MEETING,
        )

    def milestone(self, entry: ScheduledTask, n: int) -> CalendarEvent:
        day = shift_date(
            self.project.reference_date, 7 * self.config.milestone_interval_weeks * (n + 1)
        )
        return self._event(
            event_id=f"milestone-{entry.id}",
            title=f"Milestone: {entry.title}",
            description=entry.description,
            day=self._within_window(day),
            start=self.config.milestone_time,
            hours=self.config.milestone_duration_hours,
            event_type=EventType.DEADLINE,
        )

    def final_review(self, deadline: date) -> CalendarEvent:
        day = self._within_window(deadline - timedelta(days=self.config.review_lead_days))
        return self._event(
            event_id="project-review",
            title="Final Project Review",
            description="Review deliverables before the project deadline",
            day=day,
            start=self.config.review_time,
            hours=self.config.review_duration_hours,
            event_type=EventType.MEETING,
        )

    def _within_window(self, day: date) -> date:
        """Clamp into [reference_date, deadline]; an overdue project collapses onto its start."""
        start = self.project.reference_date
        if self.project.deadline is not None:
            day = min(day, max(start, self.project.deadline))
        return max(day, start)

    def _event(  # noqa: PLR0913 - one argument per event field
        self,
        *,
        event_id: str,
        title: str,
        description: str,
        day: date,
        start: time,
        hours: float,
        event_type: EventType,
    ) -> CalendarEvent:
        start_time = datetime.combine(day, start)
        return CalendarEvent(
            id=event_id,
            title=title,
            description=description,
            start_time=start_time,
            end_time=start_time + timedelta(hours=hours),
            type=event_type,
            color=self.color,
            attendees=self.project.attendees,
            notification_enabled=self.config.notifications_enabled,
        )
