"""Configuration classes for the scheduling system."""

from datetime import time
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from projplan.models import Priority


class CyclePolicy(str, Enum):
    """What the dependency resolver does when it meets a cycle."""

    TOLERATE = "tolerate"  # Break the cycle silently and keep going
    REJECT = "reject"  # Raise CircularDependencyError


def _default_base_days() -> dict[Priority, int]:
    return {Priority.URGENT: 1, Priority.HIGH: 2, Priority.MEDIUM: 3, Priority.LOW: 4}


def _default_urgency_multipliers() -> dict[Priority, float]:
    return {Priority.URGENT: 0.60, Priority.HIGH: 0.75, Priority.MEDIUM: 0.85, Priority.LOW: 0.95}


class SchedulingConfig(BaseModel):
    """Configuration for dependency resolution, compression and due dates."""

    cycle_policy: CyclePolicy = CyclePolicy.TOLERATE

    # Duration policy
    hours_per_day: int = Field(default=8, gt=0)
    priority_base_days: dict[Priority, int] = Field(default_factory=_default_base_days)

    # Fraction of a task's days the cursor advances before the next task starts
    overlap_ratio: float = Field(default=0.7, gt=0, le=1)

    # Days between consecutive due dates when the project has no deadline
    fallback_spacing_days: int = Field(default=2, ge=0)

    # Timeline compression
    urgency_multipliers: dict[Priority, float] = Field(
        default_factory=_default_urgency_multipliers
    )
    default_urgency_multiplier: float = Field(default=0.85, gt=0, le=1)

    @field_validator("priority_base_days")
    @classmethod
    def base_days_positive(cls, v: dict[Priority, int]) -> dict[Priority, int]:
        """Every priority floor must be at least one day."""
        for priority, days in v.items():
            if days < 1:
                raise ValueError(f"priority_base_days[{priority.value}] must be >= 1, got {days}")
        return {**_default_base_days(), **v}

    @field_validator("urgency_multipliers")
    @classmethod
    def multipliers_in_range(cls, v: dict[Priority, float]) -> dict[Priority, float]:
        """Multipliers compress the window, so they lie in (0, 1]."""
        for priority, multiplier in v.items():
            if not 0 < multiplier <= 1:
                raise ValueError(
                    f"urgency_multipliers[{priority.value}] must be in (0, 1], got {multiplier}"
                )
        return {**_default_urgency_multipliers(), **v}


class CalendarConfig(BaseModel):
    """Placement of derived calendar events."""

    kickoff_time: time = time(9, 0)
    kickoff_duration_hours: float = Field(default=1.0, gt=0)

    milestone_interval_weeks: int = Field(default=2, ge=1)
    milestone_time: time = time(17, 0)
    milestone_duration_hours: float = Field(default=0.5, gt=0)

    review_lead_days: int = Field(default=7, ge=0)
    review_time: time = time(14, 0)
    review_duration_hours: float = Field(default=2.0, gt=0)

    notifications_enabled: bool = True
