"""Phase dependency engine - constraint validation and date correction.

Main entry points:
- validate_phase_dates: Check a proposed date change against all dependencies
- correct_phase_dates: Move one phase forward past its predecessors
- correct_all_phases: Fix every violating phase and cascade to successors
- calculate_cascade: Preview the successors moved by one phase change

All functions are pure: they read a snapshot of phases and dependencies and
return proposed values for the caller to persist.
"""

from .bulk import correct_all_phases
from .cascade import calculate_cascade
from .checker import END_BEFORE_START_MESSAGE, find_violations, validate_phase_dates
from .corrector import correct_phase_dates
from .graph import ensure_acyclic, find_cycles, topological_order
from .rules import Bound, earliest_bound, effective_lag, latest_bound, snap_forward

__all__ = [
    # Operations
    "validate_phase_dates",
    "find_violations",
    "correct_phase_dates",
    "correct_all_phases",
    "calculate_cascade",
    # Graph utilities
    "find_cycles",
    "ensure_acyclic",
    "topological_order",
    # Constraint rules
    "Bound",
    "effective_lag",
    "earliest_bound",
    "latest_bound",
    "snap_forward",
    "END_BEFORE_START_MESSAGE",
]
