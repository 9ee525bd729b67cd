"""Dependency graph traversal: cycle detection and topological ordering."""

from collections.abc import Iterable, Sequence

from phasedeps.exceptions import CircularDependencyError
from phasedeps.logger import get_logger
from phasedeps.models import Dependency, Phase

logger = get_logger()


def build_adjacency(
    phases: Sequence[Phase], dependencies: Iterable[Dependency]
) -> dict[str, list[str]]:
    """Map each phase ID to the IDs of the phases that depend on it.

    Edges with a missing endpoint or a self-loop are left out.
    """
    adjacency: dict[str, list[str]] = {phase.id: [] for phase in phases}
    for dep in dependencies:
        if dep.is_self_loop:
            logger.debug(f"  Ignoring self-loop dependency {dep.id}")
            continue
        if dep.predecessor_phase_id not in adjacency or dep.successor_phase_id not in adjacency:
            logger.debug(f"  Ignoring dependency {dep.id}: endpoint not found")
            continue
        adjacency[dep.predecessor_phase_id].append(dep.successor_phase_id)
    return adjacency


def find_cycles(phases: Sequence[Phase], dependencies: Iterable[Dependency]) -> list[str]:
    """Find circular dependencies without raising.

    Returns:
        One message per cycle found, e.g.
        "Circular dependency detected: design -> build -> design"
    """
    adjacency = build_adjacency(phases, dependencies)
    circular: list[str] = []
    visited: set[str] = set()

    for phase in phases:
        if phase.id in visited:
            continue

        # Iterative DFS; path and its index track the phases on the current branch
        visited.add(phase.id)
        path = [phase.id]
        on_path = {phase.id: 0}
        stack = [iter(adjacency[phase.id])]
        while stack:
            successor_id = next(stack[-1], None)
            if successor_id is None:
                stack.pop()
                del on_path[path.pop()]
                continue
            if successor_id in on_path:
                cycle = path[on_path[successor_id] :] + [successor_id]
                circular.append(f"Circular dependency detected: {' -> '.join(cycle)}")
                continue
            if successor_id in visited:
                continue

            visited.add(successor_id)
            on_path[successor_id] = len(path)
            path.append(successor_id)
            stack.append(iter(adjacency[successor_id]))

    return circular


def ensure_acyclic(phases: Sequence[Phase], dependencies: Iterable[Dependency]) -> None:
    """Raise CircularDependencyError if the dependency graph has a cycle."""
    cycles = find_cycles(phases, dependencies)
    if cycles:
        raise CircularDependencyError(cycles[0])


def topological_order(
    phases: Sequence[Phase], dependencies: Iterable[Dependency]
) -> list[Phase]:
    """Order phases so every predecessor comes before its successors.

    Among phases that are ready at the same time, the one with the earliest
    start date goes first, then lowest display order, then ID.

    Raises:
        CircularDependencyError: If the graph contains a cycle
    """
    adjacency = build_adjacency(phases, dependencies)
    phase_map = {phase.id: phase for phase in phases}

    in_degree = dict.fromkeys(adjacency, 0)
    for successors in adjacency.values():
        for successor_id in successors:
            in_degree[successor_id] += 1

    def _sort_key(phase_id: str) -> tuple[object, ...]:
        phase = phase_map[phase_id]
        return (phase.start_date, phase.order, phase.id)

    ready = sorted((pid for pid, degree in in_degree.items() if degree == 0), key=_sort_key)
    result: list[Phase] = []

    while ready:
        phase_id = ready.pop(0)
        result.append(phase_map[phase_id])

        newly_ready: list[str] = []
        for successor_id in adjacency[phase_id]:
            in_degree[successor_id] -= 1
            if in_degree[successor_id] == 0:
                newly_ready.append(successor_id)
        if newly_ready:
            ready = sorted(ready + newly_ready, key=_sort_key)

    if len(result) != len(phase_map):
        cycles = find_cycles(phases, dependencies)
        raise CircularDependencyError(
            cycles[0] if cycles else "Circular dependency detected in phase graph"
        )

    return result
