"""Dependency ordering of tasks."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from projplan.exceptions import CircularDependencyError
from projplan.logger import checks_enabled, get_logger
from projplan.models import Task

from .config import CyclePolicy

logger = get_logger()


def _default_edge_list() -> list[tuple[str, str]]:
    return []


@dataclass
class ResolutionResult:
    """Result of ordering tasks by their dependencies.

    Edges are (task_id, dependency_id) pairs.
    """

    ordered_tasks: list[Task]
    original_indices: dict[str, int]
    unknown_references: list[tuple[str, str]] = field(default_factory=_default_edge_list)
    broken_edges: list[tuple[str, str]] = field(default_factory=_default_edge_list)


@dataclass
class _VisitState:
    tasks: dict[str, Task]
    indices: dict[str, int]
    visiting: set[str] = field(default_factory=set)
    done: set[str] = field(default_factory=set)
    ordered: list[Task] = field(default_factory=list)
    unknown: list[tuple[str, str]] = field(default_factory=_default_edge_list)
    broken: list[tuple[str, str]] = field(default_factory=_default_edge_list)


class DependencyResolver:
    """Orders tasks so each one follows every in-set task it depends on.

    Depth-first visit in input order with "visiting" and "done" marks.
    Dependencies of a task are visited in their input order too, so
    independent tasks keep their relative positions.

    Unknown dependency ids are skipped. An edge back into a task that is
    still being visited closes a cycle: with CyclePolicy.TOLERATE the edge
    is treated as already satisfied, with CyclePolicy.REJECT a
    CircularDependencyError is raised.
    """

    def __init__(self, cycle_policy: CyclePolicy = CyclePolicy.TOLERATE):
        self.cycle_policy = cycle_policy

    def resolve(self, tasks: Sequence[Task]) -> ResolutionResult:
        """Return the tasks in dependency order.

        Args:
            tasks: Tasks in input order

        Returns:
            ResolutionResult with the permutation and the edges that were skipped

        Raises:
            CircularDependencyError: On a cycle when the policy is REJECT
        """
        state = _VisitState(tasks={}, indices={})
        for index, task in enumerate(tasks):
            state.tasks.setdefault(task.id, task)
            state.indices.setdefault(task.id, index)

        for task in tasks:
            if task.id not in state.done:
                self._visit(task.id, state)

        return ResolutionResult(
            ordered_tasks=state.ordered,
            original_indices=state.indices,
            unknown_references=state.unknown,
            broken_edges=state.broken,
        )

    def _dependencies_in_input_order(self, task: Task, state: _VisitState) -> Iterator[str]:
        unknown_position = len(state.indices)
        return iter(
            sorted(task.depends_on, key=lambda dep_id: state.indices.get(dep_id, unknown_position))
        )

    def _visit(self, root_id: str, state: _VisitState) -> None:
        state.visiting.add(root_id)
        stack = [(root_id, self._dependencies_in_input_order(state.tasks[root_id], state))]

        while stack:
            task_id, dependencies = stack[-1]
            for dep_id in dependencies:
                if dep_id not in state.tasks:
                    if checks_enabled():
                        logger.checks(f"  {task_id}: skipping unknown dependency '{dep_id}'")
                    state.unknown.append((task_id, dep_id))
                    continue
                if dep_id in state.done:
                    continue
                if dep_id in state.visiting:
                    self._handle_cycle(task_id, dep_id, [entry[0] for entry in stack], state)
                    continue

                state.visiting.add(dep_id)
                dep_task = state.tasks[dep_id]
                stack.append((dep_id, self._dependencies_in_input_order(dep_task, state)))
                break
            else:
                stack.pop()
                state.visiting.discard(task_id)
                state.done.add(task_id)
                state.ordered.append(state.tasks[task_id])

    def _handle_cycle(
        self, task_id: str, dep_id: str, path: list[str], state: _VisitState
    ) -> None:
        cycle = " -> ".join([*path[path.index(dep_id) :], dep_id])
        if self.cycle_policy == CyclePolicy.REJECT:
            raise CircularDependencyError(f"Circular dependency detected: {cycle}")

        if checks_enabled():
            logger.checks(f"  {task_id}: breaking cycle {cycle}, treating '{dep_id}' as satisfied")
        state.broken.append((task_id, dep_id))


def resolve_dependencies(
    tasks: Sequence[Task], cycle_policy: CyclePolicy = CyclePolicy.TOLERATE
) -> list[Task]:
    """Order tasks by dependency. See DependencyResolver."""
    return DependencyResolver(cycle_policy).resolve(tasks).ordered_tasks
