"""Tests for reading project input files."""

import json
from datetime import date
from pathlib import Path
from typing import Any

import pytest
import yaml

from projplan.exceptions import InvalidTaskError, ParseError, ValidationError
from projplan.models import Priority
from projplan.parser import ProjectParser, load_project


@pytest.fixture
def generator_output() -> dict[str, Any]:
    """Input in the camelCase shape the task generator produces."""
    return {
        "project": {
            "projectName": "Website Redesign",
            "workspaceId": 42,
            "priority": "high",
            "dueDate": "2025-02-05",
            "referenceDate": "2025-01-06",
            "attendees": ["ana@example.com"],
        },
        "tasks": [
            {
                "id": "design",
                "title": "Design mockups",
                "priority": "HIGH",
                "estimatedHours": 12,
                "category": "planning",
                "tags": ["ux"],
            },
            {
                "id": "build",
                "title": "Build pages",
                "estimatedHours": 24.5,
                "dependsOn": "design",
            },
        ],
    }


class TestParseData:
    """Test ProjectParser.parse_data."""

    def test_camel_case_input(self, generator_output: dict[str, Any]) -> None:
        parsed = ProjectParser().parse_data(generator_output)

        design, build = parsed.tasks
        assert design.priority == Priority.HIGH
        assert design.estimated_hours == 12
        assert design.category == "planning"
        assert design.tags == ("ux",)
        assert build.priority == Priority.MEDIUM
        assert build.depends_on == ("design",)

        project = parsed.project
        assert project.project_name == "Website Redesign"
        assert project.workspace_id == "42"
        assert project.priority == Priority.HIGH
        assert project.deadline == date(2025, 2, 5)
        assert project.reference_date == date(2025, 1, 6)
        assert project.attendees == ("ana@example.com",)

    def test_snake_case_input(self) -> None:
        parsed = ProjectParser().parse_data(
            {
                "project": {"name": "Docs", "workspace_id": "ws", "deadline": "2025-03-01"},
                "tasks": [{"id": "a", "estimated_hours": 3, "depends_on": ["b", "b"]}],
            }
        )
        assert parsed.tasks[0].estimated_hours == 3
        assert parsed.tasks[0].depends_on == ("b",)
        assert parsed.project.project_name == "Docs"
        assert parsed.project.deadline == date(2025, 3, 1)

    def test_task_defaults(self) -> None:
        parsed = ProjectParser().parse_data({"tasks": [{}, {"priority": None}]})
        first, second = parsed.tasks
        assert first.id == "task-1"
        assert first.title == "Task 1"
        assert first.priority == Priority.MEDIUM
        assert first.estimated_hours == 8
        assert first.category == "general"
        assert first.depends_on == ()
        assert second.id == "task-2"
        assert second.priority == Priority.MEDIUM

    def test_numeric_ids_become_strings(self) -> None:
        parsed = ProjectParser().parse_data([{"id": 1}, {"id": 2, "dependsOn": [1]}])
        assert [t.id for t in parsed.tasks] == ["1", "2"]
        assert parsed.tasks[1].depends_on == ("1",)

    def test_bare_list_is_tasks(self) -> None:
        parsed = ProjectParser().parse_data([{"id": "a"}, {"id": "b"}])
        assert [t.id for t in parsed.tasks] == ["a", "b"]
        assert parsed.project.deadline is None
        assert parsed.project.priority is None

    def test_reference_date_defaults_to_today(self) -> None:
        parsed = ProjectParser().parse_data({"tasks": []})
        assert parsed.project.reference_date == date.today()  # noqa: DTZ011

    def test_invalid_task_priority(self) -> None:
        with pytest.raises(InvalidTaskError, match="Task 'a': Invalid priority 'someday'"):
            ProjectParser().parse_data([{"id": "a", "priority": "someday"}])

    def test_unknown_project_priority_uses_default(self) -> None:
        parsed = ProjectParser().parse_data({"project": {"priority": "asap"}, "tasks": []})
        assert parsed.project.priority is None

    def test_scalar_root_rejected(self) -> None:
        with pytest.raises(ParseError, match="mapping or a list"):
            ProjectParser().parse_data("just text")

    def test_bad_structure_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Invalid input structure"):
            ProjectParser().parse_data({"tasks": [{"id": "a", "estimatedHours": "lots"}]})


class TestParseFile:
    """Test reading YAML and JSON files."""

    def test_yaml_file(self, tmp_path: Path, generator_output: dict[str, Any]) -> None:
        path = tmp_path / "project.yaml"
        path.write_text(yaml.safe_dump(generator_output), encoding="utf-8")
        parsed = load_project(path)
        assert [t.id for t in parsed.tasks] == ["design", "build"]

    def test_yaml_native_dates(self, tmp_path: Path) -> None:
        path = tmp_path / "project.yaml"
        path.write_text(
            "project:\n  dueDate: 2025-02-05\n  referenceDate: 2025-01-06\ntasks: []\n",
            encoding="utf-8",
        )
        parsed = load_project(path)
        assert parsed.project.deadline == date(2025, 2, 5)

    def test_json_file(self, tmp_path: Path, generator_output: dict[str, Any]) -> None:
        path = tmp_path / "project.json"
        path.write_text(json.dumps(generator_output), encoding="utf-8")
        parsed = load_project(path)
        assert parsed.project.workspace_id == "42"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ParseError, match="File not found"):
            load_project(tmp_path / "missing.yaml")

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("tasks: [unclosed\n", encoding="utf-8")
        with pytest.raises(ParseError, match="Failed to parse YAML"):
            load_project(path)

    def test_malformed_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text('{"tasks": [', encoding="utf-8")
        with pytest.raises(ParseError, match="Failed to parse JSON"):
            load_project(path)
