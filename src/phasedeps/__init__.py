"""phasedeps - phase dependency validation and date correction.

The engine (phasedeps.engine) works on in-memory snapshots of phases and
dependencies; the loader and CLI add YAML input and configuration around it.
"""

from .config import ConstraintConfig, PhasedepsConfig, load_config
from .engine import (
    calculate_cascade,
    correct_all_phases,
    correct_phase_dates,
    find_violations,
    validate_phase_dates,
)
from .exceptions import (
    CircularDependencyError,
    MissingReferenceError,
    ParseError,
    PhasedepsError,
    ValidationError,
)
from .loader import load_plan
from .models import (
    CascadeChange,
    CascadeResult,
    CorrectedDates,
    Dependency,
    DependencyType,
    Phase,
    PhaseCorrection,
    ProjectPlan,
)

__all__ = [
    "CascadeChange",
    "CascadeResult",
    "CircularDependencyError",
    "ConstraintConfig",
    "CorrectedDates",
    "Dependency",
    "DependencyType",
    "MissingReferenceError",
    "ParseError",
    "Phase",
    "PhaseCorrection",
    "PhasedepsConfig",
    "PhasedepsError",
    "ProjectPlan",
    "ValidationError",
    "calculate_cascade",
    "correct_all_phases",
    "correct_phase_dates",
    "find_violations",
    "load_config",
    "load_plan",
    "validate_phase_dates",
]
