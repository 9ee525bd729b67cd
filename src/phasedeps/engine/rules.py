"""Constraint rules shared by the checker and the correctors."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Literal

from phasedeps.config import ConstraintConfig
from phasedeps.models import Dependency, DependencyType

Boundary = Literal["start", "end"]


@dataclass(frozen=True)
class Bound:
    """A constraint on one boundary (start or end) of a phase."""

    boundary: Boundary
    limit: date


def effective_lag(dependency: Dependency, config: ConstraintConfig) -> int:
    """Lag used when evaluating a dependency.

    Finish-to-Start edges always leave a gap of at least
    ``config.fs_min_gap_days``; every other type uses its lag unchanged.
    """
    if dependency.type == DependencyType.FINISH_TO_START:
        return max(config.fs_min_gap_days, dependency.lag_days)
    return dependency.lag_days


def earliest_bound(
    dependency: Dependency, predecessor_start: date, predecessor_end: date, lag: int
) -> Bound:
    """Earliest allowed date for the successor side of a dependency.

    | type | successor requirement |
    |------|-----------------------|
    | FS   | start >= pred.end + lag   |
    | SS   | start >= pred.start + lag |
    | FF   | end >= pred.end + lag     |
    | SF   | end >= pred.start + lag   |
    """
    anchor = predecessor_end if dependency.type.anchored_on_finish else predecessor_start
    boundary: Boundary = "start" if dependency.type.constrains_start else "end"
    return Bound(boundary, anchor + timedelta(days=lag))


def latest_bound(
    dependency: Dependency, successor_start: date, successor_end: date, lag: int
) -> Bound:
    """Latest allowed date for the predecessor side of a dependency.

    | type | predecessor requirement  |
    |------|--------------------------|
    | FS   | end <= succ.start - lag   |
    | SS   | start <= succ.start - lag |
    | FF   | end <= succ.end - lag     |
    | SF   | start <= succ.end - lag   |
    """
    anchor = successor_start if dependency.type.constrains_start else successor_end
    boundary: Boundary = "end" if dependency.type.anchored_on_finish else "start"
    return Bound(boundary, anchor - timedelta(days=lag))


def snap_forward(start: date, end: date, bound: Bound, duration_days: int) -> tuple[date, date]:
    """Move a phase so it satisfies an earliest bound, preserving its duration.

    Returns the dates unchanged when the bound is already met.
    """
    duration = timedelta(days=duration_days)
    if bound.boundary == "start":
        if start < bound.limit:
            return (bound.limit, bound.limit + duration)
    elif end < bound.limit:
        return (bound.limit - duration, bound.limit)
    return (start, end)


def phase_duration(start: date, end: date) -> int:
    """Duration in days used when moving a phase, never less than one."""
    return max(1, (end - start).days)
