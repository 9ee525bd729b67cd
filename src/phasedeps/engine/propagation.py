"""Forward propagation of date corrections through the dependency graph."""

from collections.abc import Iterable, Sequence
from datetime import date

from phasedeps.config import ConstraintConfig
from phasedeps.logger import get_logger
from phasedeps.models import Dependency, Phase

from .rules import earliest_bound, effective_lag, snap_forward

logger = get_logger()


class WorkingSchedule:
    """Working copy of phase dates, keyed by phase ID.

    Seeded from the phases' stored dates and updated as corrections are
    found; the input phases are never mutated.
    """

    def __init__(self, phases: Iterable[Phase]):
        self._original: dict[str, tuple[date, date]] = {
            phase.id: (phase.start_date, phase.end_date) for phase in phases
        }
        self._dates = dict(self._original)

    def __contains__(self, phase_id: object) -> bool:
        return phase_id in self._dates

    def dates(self, phase_id: str) -> tuple[date, date]:
        return self._dates[phase_id]

    def set(self, phase_id: str, start: date, end: date) -> None:
        self._dates[phase_id] = (start, end)

    def moved(self, phase_id: str) -> bool:
        """True if the working dates differ from the stored ones."""
        return self._dates[phase_id] != self._original[phase_id]


def propagate_forward(
    ordered_phases: Sequence[Phase],
    dependencies: Sequence[Dependency],
    schedule: WorkingSchedule,
    touched: set[str],
    config: ConstraintConfig,
    *,
    pinned: frozenset[str] = frozenset(),
) -> dict[str, Dependency]:
    """Snap phases forward until every touched chain satisfies its predecessors.

    Phases are visited in the given (topological) order. A phase is corrected
    if it is touched itself or any of its predecessors is touched; a phase that
    moves becomes touched, so corrections flow to every transitive successor.
    Each move preserves the phase's stored duration.

    Args:
        ordered_phases: Phases in topological order
        dependencies: All dependency edges
        schedule: Working dates, updated in place
        touched: Phase IDs whose successors must be re-checked, updated in place
        config: Constraint settings
        pinned: Phase IDs that are never moved

    Returns:
        For each moved phase, the last dependency that pushed it.
    """
    incoming: dict[str, list[Dependency]] = {phase.id: [] for phase in ordered_phases}
    for dep in dependencies:
        if dep.is_self_loop or dep.predecessor_phase_id not in schedule:
            continue
        if dep.successor_phase_id in incoming:
            incoming[dep.successor_phase_id].append(dep)

    drivers: dict[str, Dependency] = {}

    for phase in ordered_phases:
        if phase.id in pinned:
            continue
        predecessor_deps = incoming[phase.id]
        if phase.id not in touched and not any(
            dep.predecessor_phase_id in touched for dep in predecessor_deps
        ):
            continue

        start, end = schedule.dates(phase.id)
        duration = phase.duration_days
        for dep in predecessor_deps:
            pred_start, pred_end = schedule.dates(dep.predecessor_phase_id)
            lag = effective_lag(dep, config)
            bound = earliest_bound(dep, pred_start, pred_end, lag)
            snapped = snap_forward(start, end, bound, duration)
            if snapped != (start, end):
                logger.checks(
                    f"  {phase.id}: {bound.boundary} pushed to {bound.limit} "
                    f"({dep.type.value} from {dep.predecessor_phase_id}, lag {lag})"
                )
                start, end = snapped
                drivers[phase.id] = dep

        if (start, end) != schedule.dates(phase.id):
            schedule.set(phase.id, start, end)
            touched.add(phase.id)
            logger.changes(f"Moved {phase.id} to {start}..{end}")

    return drivers
