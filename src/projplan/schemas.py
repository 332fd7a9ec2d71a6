"""Pydantic schemas for project input files.

Field names follow Python style; the camelCase names produced by the
upstream task generator are accepted as aliases.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Defaults used by the upstream generator when a field is missing
DEFAULT_ESTIMATED_HOURS = 8
DEFAULT_CATEGORY = "general"
DEFAULT_PRIORITY = "MEDIUM"


class TaskSchema(BaseModel):
    """Schema for one generated task."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    title: str | None = None
    description: str = ""
    priority: str = DEFAULT_PRIORITY
    estimated_hours: float = Field(default=DEFAULT_ESTIMATED_HOURS, alias="estimatedHours")
    depends_on: list[str] = Field(default_factory=list, alias="dependsOn")
    category: str = DEFAULT_CATEGORY
    tags: list[str] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """YAML may load ids like 1."""
        if v is None:
            return v
        return str(v)

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, v: Any) -> str:
        if v is None:
            return DEFAULT_PRIORITY
        return str(v)

    @field_validator("depends_on", "tags", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> list[str]:
        """Ensure value is a list of strings."""
        if v is None:
            return []
        if isinstance(v, list):
            return [str(item) for item in v]  # type: ignore[misc]
        return [str(v)]


class ProjectSchema(BaseModel):
    """Schema for the project section."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="", alias="projectName")
    workspace_id: str = Field(default="", alias="workspaceId")
    priority: str | None = None
    deadline: date | None = Field(default=None, alias="dueDate")
    reference_date: date | None = Field(default=None, alias="referenceDate")
    attendees: list[str] = Field(default_factory=list)

    @field_validator("workspace_id", mode="before")
    @classmethod
    def coerce_workspace_id(cls, v: Any) -> str:
        return "" if v is None else str(v)


class ProjectFileSchema(BaseModel):
    """Schema for a whole input file."""

    project: ProjectSchema = Field(default_factory=ProjectSchema)
    tasks: list[TaskSchema] = Field(default_factory=list)
