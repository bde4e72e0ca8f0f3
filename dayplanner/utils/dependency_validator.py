"""
Task dependency validation utilities.

Detects self-dependencies and dependency cycles within one task batch.
Dependencies on tasks outside the batch are ignored.
"""

from dayplanner.core.exceptions import DependencyCycleError
from dayplanner.models.task import Task


class DependencyValidator:
    """Validator for task dependencies."""

    def find_cycles(self, tasks: list[Task]) -> list[list[str]]:
        """
        Find dependency cycles using DFS.

        Args:
            tasks: Task batch to inspect

        Returns:
            Each cycle once, as task ids in traversal order
            (a self-dependency is a one-element cycle)
        """
        graph = {task.id: [dep for dep in task.dependencies if dep] for task in tasks}
        cycles: list[list[str]] = []
        seen_cycles: set[frozenset[str]] = set()
        finished: set[str] = set()

        def visit(task_id: str, path: list[str], on_path: set[str]) -> None:
            for dep_id in graph.get(task_id, []):
                if dep_id not in graph or dep_id in finished:
                    continue
                if dep_id in on_path:
                    cycle = path[path.index(dep_id):]
                    key = frozenset(cycle)
                    if key not in seen_cycles:
                        seen_cycles.add(key)
                        cycles.append(list(cycle))
                    continue
                path.append(dep_id)
                on_path.add(dep_id)
                visit(dep_id, path, on_path)
                on_path.discard(dep_id)
                path.pop()
            finished.add(task_id)

        for task in tasks:
            if task.id not in finished:
                visit(task.id, [task.id], {task.id})

        return cycles

    def validate(self, tasks: list[Task]) -> None:
        """
        Validate task dependencies.

        Raises:
            DependencyCycleError: If any dependency cycle exists
        """
        cycles = self.find_cycles(tasks)
        if not cycles:
            return
        titles = {task.id: task.title for task in tasks}
        described = [" -> ".join(titles.get(task_id, task_id) for task_id in cycle) for cycle in cycles]
        raise DependencyCycleError(
            f"Circular dependency detected: {'; '.join(described)}",
            cycles=cycles,
        )
