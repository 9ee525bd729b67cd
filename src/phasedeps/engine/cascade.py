"""Cascade calculation for a single phase date change."""

from collections.abc import Sequence
from datetime import date

from phasedeps.config import ConstraintConfig
from phasedeps.logger import get_logger
from phasedeps.models import CascadeChange, CascadeResult, Dependency, Phase

from .graph import find_cycles, topological_order
from .propagation import WorkingSchedule, propagate_forward
from .rules import earliest_bound, effective_lag

logger = get_logger()


def _predecessor_errors(
    phase: Phase,
    new_start: date,
    new_end: date,
    phase_map: dict[str, Phase],
    dependencies: Sequence[Dependency],
    config: ConstraintConfig,
) -> list[str]:
    """Check only the constraints imposed by phases the changed phase depends on.

    Successors are not checked: the cascade moves them instead.
    """
    errors: list[str] = []
    for dep in dependencies:
        if dep.successor_phase_id != phase.id or dep.is_self_loop:
            continue
        predecessor = phase_map.get(dep.predecessor_phase_id)
        if predecessor is None:
            continue

        lag = effective_lag(dep, config)
        bound = earliest_bound(dep, predecessor.start_date, predecessor.end_date, lag)
        proposed = new_start if bound.boundary == "start" else new_end
        if proposed >= bound.limit:
            continue

        verb = "start" if bound.boundary == "start" else "finish"
        anchor = "finishes" if dep.type.anchored_on_finish else "starts"
        shown = bound.limit.strftime(config.date_display_format)
        errors.append(
            f'Phase "{phase.name}" cannot {verb} before "{predecessor.name}" {anchor}. '
            f"Required {bound.boundary} date: {shown} or later."
        )
    return errors


def calculate_cascade(  # noqa: PLR0913 - mirrors validate_phase_dates
    phase_id: str,
    new_start: date,
    new_end: date,
    phases: Sequence[Phase],
    dependencies: Sequence[Dependency],
    config: ConstraintConfig | None = None,
) -> CascadeResult:
    """Work out which successors must move if a phase takes new dates.

    Cycles and predecessor violations are reported as data; in either case no
    phases are marked as affected. Otherwise the change is pushed through all
    transitive successors, each keeping its duration.

    Successors only ever move forward: pulling a phase earlier leaves its
    dependents where they are rather than snapping them back onto their
    earliest bound, matching the correctors.
    """
    config = config or ConstraintConfig()
    phase_map = {phase.id: phase for phase in phases}

    circular = find_cycles(phases, dependencies)
    if circular:
        logger.debug(f"cascade: {len(circular)} cycle(s) found, not propagating")
        return CascadeResult(circular_dependencies=circular)

    phase = phase_map.get(phase_id)
    if phase is None:
        return CascadeResult()

    errors = _predecessor_errors(phase, new_start, new_end, phase_map, dependencies, config)
    if errors:
        return CascadeResult(validation_errors=errors)

    schedule = WorkingSchedule(phases)
    schedule.set(phase_id, new_start, new_end)
    ordered = topological_order(phases, dependencies)
    drivers = propagate_forward(
        ordered,
        dependencies,
        schedule,
        {phase_id},
        config,
        pinned=frozenset({phase_id}),
    )

    dependent_counts: dict[str, int] = {}
    for dep in dependencies:
        if not dep.is_self_loop and dep.successor_phase_id in phase_map:
            dependent_counts[dep.predecessor_phase_id] = (
                dependent_counts.get(dep.predecessor_phase_id, 0) + 1
            )

    affected: list[CascadeChange] = []
    for candidate in ordered:
        if candidate.id == phase_id or candidate.id not in drivers:
            continue
        start, end = schedule.dates(candidate.id)
        driver = drivers[candidate.id]
        affected.append(
            CascadeChange(
                phase_id=candidate.id,
                phase_name=candidate.name,
                current_start_date=candidate.start_date,
                current_end_date=candidate.end_date,
                new_start_date=start,
                new_end_date=end,
                dependency_type=driver.type,
                lag_days=driver.lag_days,
                affects_count=dependent_counts.get(candidate.id, 0),
            )
        )

    return CascadeResult(affected_phases=affected)
