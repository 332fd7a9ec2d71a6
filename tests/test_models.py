"""Tests for data models."""

from datetime import date, datetime

import pytest

from projplan.exceptions import InvalidTaskError
from projplan.models import (
    CalendarEvent,
    EventType,
    Priority,
    ProjectContext,
    ScheduledTask,
    Task,
)


class TestPriority:
    """Test Priority parsing."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("LOW", Priority.LOW),
            ("medium", Priority.MEDIUM),
            (" High ", Priority.HIGH),
            ("urgent", Priority.URGENT),
            (Priority.HIGH, Priority.HIGH),
        ],
    )
    def test_parse_valid(self, raw: str, expected: Priority) -> None:
        assert Priority.parse(raw) == expected

    def test_parse_invalid(self) -> None:
        with pytest.raises(InvalidTaskError, match="Invalid priority 'CRITICAL'"):
            Priority.parse("CRITICAL")


class TestTask:
    """Test the Task record."""

    def test_depends_on_deduplicated_in_order(self) -> None:
        task = Task(
            id="t1",
            title="T1",
            priority=Priority.LOW,
            estimated_hours=4,
            depends_on=["b", "a", "b"],  # type: ignore[arg-type]
        )
        assert task.depends_on == ("b", "a")

    def test_is_frozen(self) -> None:
        task = Task(id="t1", title="T1", priority=Priority.LOW, estimated_hours=4)
        with pytest.raises(AttributeError):
            task.id = "t2"  # type: ignore[misc]

    def test_is_milestone(self) -> None:
        milestone = Task(
            id="m", title="M", priority=Priority.LOW, estimated_hours=1, category="milestone"
        )
        regular = Task(id="r", title="R", priority=Priority.LOW, estimated_hours=1)
        assert milestone.is_milestone
        assert not regular.is_milestone

    def test_to_dict(self) -> None:
        task = Task(
            id="t1",
            title="Design",
            priority=Priority.HIGH,
            estimated_hours=16,
            depends_on=("t0",),
            tags=("ux",),
        )
        assert task.to_dict() == {
            "id": "t1",
            "title": "Design",
            "description": "",
            "priority": "HIGH",
            "estimated_hours": 16,
            "depends_on": ["t0"],
            "category": "general",
            "tags": ["ux"],
        }


class TestProjectContext:
    """Test ProjectContext defaults."""

    def test_reference_date_defaults_to_today(self) -> None:
        assert ProjectContext().reference_date == date.today()  # noqa: DTZ011

    def test_has_deadline(self) -> None:
        assert not ProjectContext().has_deadline
        assert ProjectContext(deadline=date(2025, 3, 1)).has_deadline


class TestScheduledTask:
    """Test ScheduledTask accessors and serialization."""

    def test_exposes_task_fields(self) -> None:
        task = Task(id="t1", title="Build", priority=Priority.URGENT, estimated_hours=2)
        entry = ScheduledTask(
            task=task,
            due_date=date(2025, 1, 7),
            scheduled_days=1,
            original_index=3,
            start_date=date(2025, 1, 6),
        )
        assert entry.id == "t1"
        assert entry.title == "Build"
        assert entry.priority == Priority.URGENT
        assert entry.estimated_hours == 2

        data = entry.to_dict()
        assert data["due_date"] == "2025-01-07"
        assert data["start_date"] == "2025-01-06"
        assert data["scheduled_days"] == 1
        assert data["original_index"] == 3
        assert data["overlap_days"] == 0


class TestCalendarEvent:
    """Test CalendarEvent."""

    def test_duration_and_dict(self) -> None:
        event = CalendarEvent(
            id="e1",
            title="Review",
            description="",
            start_time=datetime(2025, 1, 6, 14, 0),
            end_time=datetime(2025, 1, 6, 16, 0),
            type=EventType.MEETING,
            color="#10b981",
            attendees=("alice",),
        )
        assert event.duration_hours == 2.0
        data = event.to_dict()
        assert data["type"] == "MEETING"
        assert data["start_time"] == "2025-01-06T14:00:00"
        assert data["attendees"] == ["alice"]
        assert data["notification_enabled"] is True
