"""Bulk corrector: fixes every violating phase and cascades to successors."""

from collections.abc import Collection, Sequence

from phasedeps.config import ConstraintConfig
from phasedeps.logger import get_logger
from phasedeps.models import Dependency, Phase, PhaseCorrection

from .graph import topological_order
from .propagation import WorkingSchedule, propagate_forward

logger = get_logger()


def correct_all_phases(
    phases: Sequence[Phase],
    dependencies: Sequence[Dependency],
    violating_phase_ids: Collection[str],
    config: ConstraintConfig | None = None,
) -> list[PhaseCorrection]:
    """Compute the date changes that resolve all violating phases.

    Phases are corrected in a single pass in topological order, so a phase
    only moves after all of its predecessors have settled. Every violating
    phase is snapped past its predecessors and each move is carried through
    to all transitive successors.

    Args:
        phases: Snapshot of the project's phases
        dependencies: Snapshot of the project's dependencies
        violating_phase_ids: Phases currently failing a constraint
        config: Constraint settings (defaults apply when omitted)

    Returns:
        One correction per phase whose dates changed, in topological order.

    Raises:
        CircularDependencyError: If the dependency graph contains a cycle
    """
    if not violating_phase_ids:
        return []

    config = config or ConstraintConfig()
    ordered = topological_order(phases, dependencies)

    known = {phase.id for phase in phases}
    unknown = set(violating_phase_ids) - known
    if unknown:
        logger.debug(f"correct_all: ignoring unknown phases {sorted(unknown)}")

    schedule = WorkingSchedule(phases)
    touched = set(violating_phase_ids) & known
    propagate_forward(ordered, dependencies, schedule, touched, config)

    corrections: list[PhaseCorrection] = []
    for phase in ordered:
        if schedule.moved(phase.id):
            start, end = schedule.dates(phase.id)
            corrections.append(PhaseCorrection(phase_id=phase.id, start_date=start, end_date=end))

    logger.changes(f"Bulk correction moved {len(corrections)} phase(s)")
    return corrections
