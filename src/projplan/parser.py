"""Parser for project input files (YAML or JSON)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import InvalidTaskError, ParseError, ValidationError
from .logger import get_logger
from .models import Priority, ProjectContext, Task
from .schemas import ProjectFileSchema, ProjectSchema, TaskSchema

logger = get_logger()


@dataclass
class ProjectInput:
    """Tasks and project context read from one file."""

    tasks: list[Task]
    project: ProjectContext


class ProjectParser:
    """Turns generator output into Task and ProjectContext objects.

    The file holds a `project` mapping and a `tasks` list. A bare list is
    read as tasks with an empty project section.
    """

    def parse_file(self, file_path: Path | str) -> ProjectInput:
        """Parse a YAML or JSON file."""
        path = Path(file_path)
        if not path.exists():
            raise ParseError(f"File not found: {file_path}")

        try:
            with path.open(encoding="utf-8") as f:
                data: Any = json.load(f) if path.suffix.lower() == ".json" else yaml.safe_load(f)
        except json.JSONDecodeError as e:
            raise ParseError(f"Failed to parse JSON: {e}") from e
        except yaml.YAMLError as e:
            raise ParseError(f"Failed to parse YAML: {e}") from e

        return self.parse_data(data)

    def parse_data(self, data: Any) -> ProjectInput:
        """Parse already-loaded data."""
        if isinstance(data, list):
            data = {"tasks": data}
        if not isinstance(data, dict):
            raise ParseError("Input must contain a mapping or a list of tasks at the root level")

        try:
            schema = ProjectFileSchema(**data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid input structure: {e}") from e

        tasks = [self._to_task(task, index) for index, task in enumerate(schema.tasks)]
        return ProjectInput(tasks=tasks, project=self._to_project(schema.project))

    def _to_task(self, schema: TaskSchema, index: int) -> Task:
        task_id = schema.id if schema.id is not None else f"task-{index + 1}"
        try:
            priority = Priority.parse(schema.priority)
        except InvalidTaskError as e:
            raise InvalidTaskError(f"Task '{task_id}': {e}") from e

        return Task(
            id=task_id,
            title=schema.title or f"Task {index + 1}",
            description=schema.description,
            priority=priority,
            estimated_hours=schema.estimated_hours,
            depends_on=tuple(schema.depends_on),
            category=schema.category,
            tags=tuple(schema.tags),
        )

    def _to_project(self, schema: ProjectSchema) -> ProjectContext:
        priority: Priority | None = None
        if schema.priority is not None:
            try:
                priority = Priority.parse(schema.priority)
            except InvalidTaskError:
                logger.warning(
                    f"Unknown project priority '{schema.priority}', using the default urgency"
                )

        return ProjectContext(
            reference_date=schema.reference_date or date.today(),  # noqa: DTZ011
            deadline=schema.deadline,
            priority=priority,
            project_name=schema.name,
            workspace_id=schema.workspace_id,
            attendees=tuple(schema.attendees),
        )


def load_project(path: Path | str) -> ProjectInput:
    """Load tasks and project context from a file."""
    return ProjectParser().parse_file(path)
