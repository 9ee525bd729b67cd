"""Single-phase corrector: nudges one phase past its predecessors."""

from collections.abc import Sequence
from datetime import date

from phasedeps.config import ConstraintConfig
from phasedeps.logger import get_logger
from phasedeps.models import CorrectedDates, Dependency, Phase

from .rules import earliest_bound, effective_lag, phase_duration, snap_forward

logger = get_logger()


def correct_phase_dates(  # noqa: PLR0913 - mirrors validate_phase_dates
    phase_id: str,
    new_start: date,
    new_end: date,
    phases: Sequence[Phase],
    dependencies: Sequence[Dependency],
    config: ConstraintConfig | None = None,
) -> CorrectedDates:
    """Adjust proposed dates so they satisfy every predecessor constraint.

    Only dependencies where this phase is the successor are considered; the
    phase is moved forward in time, never backward. Each correction keeps the
    proposed duration and later checks see the already-corrected dates, so
    corrections compound across multiple predecessors.
    """
    config = config or ConstraintConfig()
    phase_map = {phase.id: phase for phase in phases}

    if phase_id not in phase_map:
        return CorrectedDates(start_date=new_start, end_date=new_end, was_valid=True)

    duration = phase_duration(new_start, new_end)
    corrected_start, corrected_end = new_start, new_end

    for dep in dependencies:
        if dep.successor_phase_id != phase_id or dep.is_self_loop:
            continue
        predecessor = phase_map.get(dep.predecessor_phase_id)
        if predecessor is None:
            continue

        lag = effective_lag(dep, config)
        bound = earliest_bound(dep, predecessor.start_date, predecessor.end_date, lag)
        snapped = snap_forward(corrected_start, corrected_end, bound, duration)
        if snapped != (corrected_start, corrected_end):
            logger.checks(
                f"  {phase_id}: {bound.boundary} moved to {bound.limit} "
                f"({dep.type.value} from {predecessor.id})"
            )
            corrected_start, corrected_end = snapped

    was_valid = corrected_start == new_start and corrected_end == new_end
    if not was_valid:
        logger.changes(
            f"Corrected {phase_id}: {new_start}..{new_end} -> {corrected_start}..{corrected_end}"
        )

    return CorrectedDates(start_date=corrected_start, end_date=corrected_end, was_valid=was_valid)
