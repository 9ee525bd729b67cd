"""Data models for phasedeps."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class DependencyType(str, Enum):
    """The four standard dependency types linking two phase boundaries."""

    FINISH_TO_START = "FS"
    START_TO_START = "SS"
    FINISH_TO_FINISH = "FF"
    START_TO_FINISH = "SF"

    @classmethod
    def parse(cls, value: str | DependencyType) -> DependencyType:
        """Parse a dependency type from its short code or long name.

        Supported formats:
        - "FS", "ss" - Short code (case-insensitive)
        - "finish_to_start", "Start-To-Finish" - Long name
        """
        if isinstance(value, DependencyType):
            return value
        normalized = value.strip().upper().replace("-", "_")
        for dep_type in cls:
            if normalized in (dep_type.value, dep_type.name):
                return dep_type
        raise ValueError(f"Unknown dependency type: {value!r}")

    @property
    def constrains_start(self) -> bool:
        """True if the successor's start date is the constrained boundary."""
        return self in (DependencyType.FINISH_TO_START, DependencyType.START_TO_START)

    @property
    def anchored_on_finish(self) -> bool:
        """True if the predecessor's end date is the anchoring boundary."""
        return self in (DependencyType.FINISH_TO_START, DependencyType.FINISH_TO_FINISH)


@dataclass(frozen=True)
class Phase:
    """One scheduled segment of a project.

    Dates are inclusive, date-only values.
    """

    id: str
    project_id: str
    name: str
    start_date: date
    end_date: date
    order: int = 0

    @property
    def duration_days(self) -> int:
        """Span between start and end in days, never less than one."""
        return max(1, (self.end_date - self.start_date).days)


@dataclass(frozen=True)
class Dependency:
    """A directed edge between two phases of the same project.

    The lag is a signed day offset; negative lag permits overlap (lead time).
    """

    id: str
    predecessor_phase_id: str
    successor_phase_id: str
    type: DependencyType = DependencyType.FINISH_TO_START
    lag_days: int = 0

    @property
    def is_self_loop(self) -> bool:
        return self.predecessor_phase_id == self.successor_phase_id


def _default_phase_list() -> list[Phase]:
    return []


def _default_dependency_list() -> list[Dependency]:
    return []


@dataclass
class ProjectPlan:
    """A snapshot of one project's phases and the dependencies between them."""

    project_id: str
    name: str = ""
    phases: list[Phase] = field(default_factory=_default_phase_list)
    dependencies: list[Dependency] = field(default_factory=_default_dependency_list)

    def get_phase_by_id(self, phase_id: str) -> Phase | None:
        """Get a phase by its ID."""
        for phase in self.phases:
            if phase.id == phase_id:
                return phase
        return None

    def get_all_ids(self) -> set[str]:
        """Get all phase IDs in the plan."""
        return {phase.id for phase in self.phases}

    def predecessors_of(self, phase_id: str) -> list[Dependency]:
        """Dependencies where the given phase is the successor."""
        return [dep for dep in self.dependencies if dep.successor_phase_id == phase_id]

    def successors_of(self, phase_id: str) -> list[Dependency]:
        """Dependencies where the given phase is the predecessor."""
        return [dep for dep in self.dependencies if dep.predecessor_phase_id == phase_id]


@dataclass(frozen=True)
class CorrectedDates:
    """Result of correcting one phase against its predecessors."""

    start_date: date
    end_date: date
    was_valid: bool


@dataclass(frozen=True)
class PhaseCorrection:
    """New dates proposed for one phase; the caller persists them."""

    phase_id: str
    start_date: date
    end_date: date


@dataclass(frozen=True)
class CascadeChange:
    """A successor phase moved as a consequence of changing another phase."""

    phase_id: str
    phase_name: str
    current_start_date: date
    current_end_date: date
    new_start_date: date
    new_end_date: date
    dependency_type: DependencyType
    lag_days: int
    affects_count: int  # Number of phases that directly depend on this one


def _default_change_list() -> list[CascadeChange]:
    return []


def _default_str_list() -> list[str]:
    return []


@dataclass
class CascadeResult:
    """Outcome of propagating one phase's date change to its successors."""

    affected_phases: list[CascadeChange] = field(default_factory=_default_change_list)
    circular_dependencies: list[str] = field(default_factory=_default_str_list)
    validation_errors: list[str] = field(default_factory=_default_str_list)

    @property
    def cascade_count(self) -> int:
        return len(self.affected_phases)
