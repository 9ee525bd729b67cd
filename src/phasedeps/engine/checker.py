"""Constraint checker: validates a proposed phase date change."""

from collections.abc import Sequence
from datetime import date

from phasedeps.config import ConstraintConfig
from phasedeps.logger import checks_enabled, get_logger
from phasedeps.models import Dependency, DependencyType, Phase

from .rules import earliest_bound, effective_lag, latest_bound

logger = get_logger()

END_BEFORE_START_MESSAGE = "End date must be after start date"


def _format(value: date, config: ConstraintConfig) -> str:
    return value.strftime(config.date_display_format)


def _predecessor_message(
    phase: Phase,
    predecessor: Phase,
    dependency: Dependency,
    required: date,
    lag: int,
    config: ConstraintConfig,
) -> str:
    shown = _format(required, config)
    if dependency.type == DependencyType.FINISH_TO_START:
        return (
            f'Phase "{phase.name}" cannot start before "{predecessor.name}" finishes. '
            f"Required start date: {shown} or later."
        )
    if dependency.type == DependencyType.START_TO_START:
        return f"Cannot start before {shown} ({predecessor.name} start + {lag} lag days)"
    if dependency.type == DependencyType.FINISH_TO_FINISH:
        return f"Cannot finish before {shown} ({predecessor.name} finish + {lag} lag days)"
    return f"Cannot finish before {shown} ({predecessor.name} start + {lag} lag days)"


def _successor_message(
    successor: Phase,
    dependency: Dependency,
    required: date,
    lag: int,
    config: ConstraintConfig,
) -> str:
    shown = _format(required, config)
    if dependency.type == DependencyType.FINISH_TO_START:
        return (
            f"Cannot finish after {shown} ({successor.name} starts on "
            f"{_format(successor.start_date, config)} with {lag} lag days)"
        )
    if dependency.type == DependencyType.START_TO_START:
        return f"Cannot start after {shown} ({successor.name} start - {lag} lag days)"
    if dependency.type == DependencyType.FINISH_TO_FINISH:
        return f"Cannot finish after {shown} ({successor.name} finish - {lag} lag days)"
    return f"Cannot start after {shown} ({successor.name} finish - {lag} lag days)"


def validate_phase_dates(  # noqa: PLR0913 - mirrors the corrector signatures
    phase_id: str,
    new_start: date,
    new_end: date,
    phases: Sequence[Phase],
    dependencies: Sequence[Dependency],
    config: ConstraintConfig | None = None,
) -> list[str]:
    """Validate proposed dates for one phase against every dependency touching it.

    Predecessor and successor bounds are computed from the other phase's
    current dates, not from any proposed change.

    Args:
        phase_id: Phase being edited
        new_start: Proposed start date
        new_end: Proposed end date
        phases: Snapshot of the project's phases
        dependencies: Snapshot of the project's dependencies
        config: Constraint settings (defaults apply when omitted)

    Returns:
        Human-readable violation messages; empty when the dates are valid.
        An unknown phase_id yields no errors.
    """
    return _check_dates(
        phase_id, new_start, new_end, phases, dependencies, config or ConstraintConfig()
    )


def _check_dates(  # noqa: PLR0913
    phase_id: str,
    new_start: date,
    new_end: date,
    phases: Sequence[Phase],
    dependencies: Sequence[Dependency],
    config: ConstraintConfig,
    *,
    at_rest: bool = False,
) -> list[str]:
    phase_map = {phase.id: phase for phase in phases}
    errors: list[str] = []

    phase = phase_map.get(phase_id)
    if phase is None:
        logger.debug(f"validate: phase {phase_id} not found, nothing to check")
        return errors

    # Stored dates only need start <= end, so a single-day phase is fine at rest
    if new_end < new_start or (new_end == new_start and not at_rest):
        errors.append(END_BEFORE_START_MESSAGE)

    # Phases this one depends on
    for dep in dependencies:
        if dep.successor_phase_id != phase_id or dep.is_self_loop:
            continue
        predecessor = phase_map.get(dep.predecessor_phase_id)
        if predecessor is None:
            logger.debug(f"  {dep.id}: predecessor {dep.predecessor_phase_id} not found, skipping")
            continue

        lag = effective_lag(dep, config)
        bound = earliest_bound(dep, predecessor.start_date, predecessor.end_date, lag)
        proposed = new_start if bound.boundary == "start" else new_end
        if checks_enabled():
            logger.checks(
                f"  {phase_id} {bound.boundary} {proposed} >= {bound.limit} "
                f"({dep.type.value} from {predecessor.id}, lag {lag})"
            )
        if proposed < bound.limit:
            errors.append(_predecessor_message(phase, predecessor, dep, bound.limit, lag, config))

    # Phases that depend on this one
    for dep in dependencies:
        if dep.predecessor_phase_id != phase_id or dep.is_self_loop:
            continue
        successor = phase_map.get(dep.successor_phase_id)
        if successor is None:
            logger.debug(f"  {dep.id}: successor {dep.successor_phase_id} not found, skipping")
            continue

        lag = effective_lag(dep, config)
        bound = latest_bound(dep, successor.start_date, successor.end_date, lag)
        proposed = new_start if bound.boundary == "start" else new_end
        if checks_enabled():
            logger.checks(
                f"  {phase_id} {bound.boundary} {proposed} <= {bound.limit} "
                f"({dep.type.value} to {successor.id}, lag {lag})"
            )
        if proposed > bound.limit:
            errors.append(_successor_message(successor, dep, bound.limit, lag, config))

    return errors


def find_violations(
    phases: Sequence[Phase],
    dependencies: Sequence[Dependency],
    config: ConstraintConfig | None = None,
) -> dict[str, list[str]]:
    """Validate every phase at its current dates.

    A stored single-day phase (start == end) is valid here even though
    validate_phase_dates rejects it as a proposed change.

    Returns:
        Map of phase ID to its violation messages, only for phases with at
        least one violation.
    """
    config = config or ConstraintConfig()
    violations: dict[str, list[str]] = {}
    for phase in phases:
        errors = _check_dates(
            phase.id,
            phase.start_date,
            phase.end_date,
            phases,
            dependencies,
            config,
            at_rest=True,
        )
        if errors:
            violations[phase.id] = errors
    return violations
