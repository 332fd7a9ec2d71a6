"""Command-line interface for projplan."""

from __future__ import annotations

import csv
import json
from dataclasses import replace
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml

from .colors import contrast_text_color, project_color
from .config import ProjplanConfig, discover_config
from .exceptions import ProjplanError
from .logger import setup_logger
from .models import Priority
from .parser import ProjectInput, load_project
from .scheduler import CyclePolicy
from .service import ScheduleResult, SchedulingService

app = typer.Typer(
    name="projplan",
    help="Dependency-aware, deadline-constrained scheduling for generated project tasks",
    add_completion=False,
)


class OutputFormat(str, Enum):
    """Output formats for schedule and events."""

    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show assignments, 2=show checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: projplan_config.yaml next to the input)",
        ),
    ] = None,
) -> None:
    """Global options for projplan commands."""
    setup_logger(verbose)
    ctx.obj = config


def _parse_date_option(date_str: str | None, option_name: str) -> date | None:
    """Parse a YYYY-MM-DD option value, exiting on bad input."""
    if date_str is None:
        return None

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        typer.echo(
            f"Error: Invalid {option_name} '{date_str}'. Use YYYY-MM-DD format.",
            err=True,
        )
        raise typer.Exit(1) from None


def _parse_priority_option(priority: str | None) -> Priority | None:
    if priority is None:
        return None
    try:
        return Priority.parse(priority)
    except ProjplanError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


def _load_inputs(
    file: Path,
    reference_date: str | None,
    deadline: str | None,
    priority: str | None,
) -> ProjectInput:
    """Load the input file and apply command-line overrides to the project."""
    parsed_reference = _parse_date_option(reference_date, "reference date")
    parsed_deadline = _parse_date_option(deadline, "deadline")
    parsed_priority = _parse_priority_option(priority)

    project_input = load_project(file)
    overrides: dict[str, Any] = {}
    if parsed_reference is not None:
        overrides["reference_date"] = parsed_reference
    if parsed_deadline is not None:
        overrides["deadline"] = parsed_deadline
    if parsed_priority is not None:
        overrides["priority"] = parsed_priority
    if overrides:
        project_input.project = replace(project_input.project, **overrides)
    return project_input


def _run(
    ctx: typer.Context,
    file: Path,
    reference_date: str | None,
    deadline: str | None,
    priority: str | None,
    strict_cycles: bool = False,
) -> ScheduleResult:
    """Load inputs and config, then run the scheduling service."""
    try:
        project_input = _load_inputs(file, reference_date, deadline, priority)
        config: ProjplanConfig = discover_config(file, ctx.obj)
        scheduler_config = config.scheduler
        if strict_cycles:
            scheduler_config = scheduler_config.model_copy(
                update={"cycle_policy": CyclePolicy.REJECT}
            )
        service = SchedulingService(
            project_input.tasks,
            project_input.project,
            scheduler_config,
            config.calendar,
        )
        return service.schedule()
    except (ProjplanError, FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


def _render(payload: Any, output_format: OutputFormat) -> str:
    if output_format == OutputFormat.YAML:
        return yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _display_schedule(result: ScheduleResult) -> None:
    """Display the schedule as text."""
    typer.echo("Schedule Results")
    typer.echo("=" * 80)
    if result.effective_days is None:
        typer.echo("No deadline: due dates use a fixed cadence")
    else:
        typer.echo(f"Effective working days: {result.effective_days}")
    typer.echo("")

    for entry in result.scheduled_tasks:
        typer.echo(f"{entry.title} ({entry.id})")
        typer.echo(f"  Priority:       {entry.priority.value}")
        typer.echo(f"  Start:          {entry.start_date}")
        typer.echo(f"  Due:            {entry.due_date}")
        typer.echo(f"  Scheduled days: {entry.scheduled_days}")
        if entry.overlap_days:
            typer.echo(f"  Overlap:        {entry.overlap_days} day(s) with previous task")
        if entry.id in result.latest_finish:
            typer.echo(f"  Latest finish:  {result.latest_finish[entry.id]}")
        typer.echo("")


def _display_events(result: ScheduleResult) -> None:
    """Display calendar events as text."""
    typer.echo(f"Calendar Events (color {result.color})")
    typer.echo("=" * 80)
    for event in result.calendar_events:
        start = event.start_time.strftime("%Y-%m-%d %H:%M")
        end = event.end_time.strftime("%H:%M")
        typer.echo(f"{start}-{end}  [{event.type.value}] {event.title}")


def _export_schedule_csv(result: ScheduleResult, output_path: Path) -> None:
    """Export scheduled tasks to CSV."""
    with output_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(
            ["task_id", "title", "priority", "start_date", "due_date", "scheduled_days"]
        )
        for entry in result.scheduled_tasks:
            writer.writerow(
                [
                    entry.id,
                    entry.title,
                    entry.priority.value,
                    entry.start_date.isoformat(),
                    entry.due_date.isoformat(),
                    entry.scheduled_days,
                ]
            )


def _check_output_options(
    output_format: OutputFormat, output: Path | None, output_csv: Path | None
) -> None:
    """Reject output options that would be silently ignored."""
    error = None
    if output_csv and (output is not None or output_format != OutputFormat.TABLE):
        error = "--csv cannot be combined with --format or --output"
    elif output is not None and output_format == OutputFormat.TABLE:
        error = "--output requires --format json or --format yaml"

    if error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(1)


def _echo_warnings(result: ScheduleResult) -> None:
    if result.warnings:
        typer.echo("\nWarnings:", err=True)
        for warning in result.warnings:
            typer.echo(f"  - {warning}", err=True)


ReferenceDateOption = Annotated[
    str | None,
    typer.Option(
        "--reference-date",
        "-r",
        help="Date scheduling starts from (YYYY-MM-DD). Overrides the file; defaults to today",
    ),
]
DeadlineOption = Annotated[
    str | None,
    typer.Option("--deadline", "-d", help="Project deadline (YYYY-MM-DD). Overrides the file"),
]
PriorityOption = Annotated[
    str | None,
    typer.Option("--priority", "-p", help="Project priority: LOW, MEDIUM, HIGH or URGENT"),
]
FormatOption = Annotated[
    OutputFormat, typer.Option("--format", "-f", help="Output format")
]


@app.command()
def schedule(  # noqa: PLR0913 - CLI command needs multiple options
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Path to the project tasks file (YAML or JSON)")],
    reference_date: ReferenceDateOption = None,
    deadline: DeadlineOption = None,
    priority: PriorityOption = None,
    strict_cycles: Annotated[
        bool,
        typer.Option(
            "--strict-cycles", help="Fail on circular dependencies instead of breaking them"
        ),
    ] = False,
    output_format: FormatOption = OutputFormat.TABLE,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
    output_csv: Annotated[
        Path | None, typer.Option("--csv", help="Export scheduled tasks to a CSV file")
    ] = None,
) -> None:
    """Schedule tasks and derive calendar events."""
    _check_output_options(output_format, output, output_csv)
    result = _run(ctx, file, reference_date, deadline, priority, strict_cycles)

    if output_csv:
        _export_schedule_csv(result, output_csv)
        typer.echo(f"Schedule exported to {output_csv}")
    elif output_format == OutputFormat.TABLE:
        _display_schedule(result)
        _display_events(result)
    else:
        rendered = _render(result.to_dict(), output_format)
        if output:
            output.write_text(rendered, encoding="utf-8")
            typer.echo(f"Schedule written to {output}")
        else:
            typer.echo(rendered)

    _echo_warnings(result)


@app.command()
def events(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Path to the project tasks file (YAML or JSON)")],
    reference_date: ReferenceDateOption = None,
    deadline: DeadlineOption = None,
    priority: PriorityOption = None,
    output_format: FormatOption = OutputFormat.TABLE,
) -> None:
    """Show only the derived calendar events."""
    result = _run(ctx, file, reference_date, deadline, priority)

    if output_format == OutputFormat.TABLE:
        _display_events(result)
    else:
        typer.echo(_render([event.to_dict() for event in result.calendar_events], output_format))

    _echo_warnings(result)


@app.command()
def color(
    name: Annotated[str, typer.Argument(help="Project name")],
    workspace_id: Annotated[str, typer.Argument(help="Workspace id")],
) -> None:
    """Print a project's color and a readable text color for it."""
    background = project_color(name, workspace_id)
    typer.echo(f"{background} (text {contrast_text_color(background)})")


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
