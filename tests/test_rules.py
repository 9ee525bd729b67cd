"""Tests for the shared constraint rules."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from phasedeps.config import ConstraintConfig
from phasedeps.engine.rules import (
    Bound,
    earliest_bound,
    effective_lag,
    latest_bound,
    phase_duration,
    snap_forward,
)

if TYPE_CHECKING:
    from tests.conftest import DependencyFactory

PRED_START = date(2024, 5, 1)
PRED_END = date(2024, 5, 10)


class TestEffectiveLag:
    """One lag rule for every operation."""

    def test_fs_lag_floored_to_min_gap(self, make_dep: DependencyFactory) -> None:
        config = ConstraintConfig()
        assert effective_lag(make_dep("a", "b", "FS", lag_days=0), config) == 1
        assert effective_lag(make_dep("a", "b", "FS", lag_days=-3), config) == 1
        assert effective_lag(make_dep("a", "b", "FS", lag_days=4), config) == 4

    def test_configurable_floor(self, make_dep: DependencyFactory) -> None:
        config = ConstraintConfig(fs_min_gap_days=0)
        assert effective_lag(make_dep("a", "b", "FS", lag_days=-3), config) == 0

    def test_other_types_use_lag_as_is(self, make_dep: DependencyFactory) -> None:
        config = ConstraintConfig()
        for dep_type in ("SS", "FF", "SF"):
            assert effective_lag(make_dep("a", "b", dep_type), config) == 0
            assert effective_lag(make_dep("a", "b", dep_type, lag_days=-2), config) == -2


class TestBounds:
    """Earliest and latest bounds per dependency type."""

    def test_earliest_bound_table(self, make_dep: DependencyFactory) -> None:
        expected = {
            "FS": Bound("start", date(2024, 5, 12)),
            "SS": Bound("start", date(2024, 5, 3)),
            "FF": Bound("end", date(2024, 5, 12)),
            "SF": Bound("end", date(2024, 5, 3)),
        }
        for dep_type, bound in expected.items():
            assert earliest_bound(make_dep("a", "b", dep_type), PRED_START, PRED_END, 2) == bound

    def test_latest_bound_table(self, make_dep: DependencyFactory) -> None:
        succ_start, succ_end = date(2024, 6, 10), date(2024, 6, 20)
        expected = {
            "FS": Bound("end", date(2024, 6, 8)),
            "SS": Bound("start", date(2024, 6, 8)),
            "FF": Bound("end", date(2024, 6, 18)),
            "SF": Bound("start", date(2024, 6, 18)),
        }
        for dep_type, bound in expected.items():
            assert latest_bound(make_dep("a", "b", dep_type), succ_start, succ_end, 2) == bound


class TestSnapForward:
    """Moving a phase onto a bound."""

    def test_start_bound(self) -> None:
        bound = Bound("start", date(2024, 1, 3))
        snapped = snap_forward(date(2024, 1, 1), date(2024, 1, 5), bound, 4)
        assert snapped == (date(2024, 1, 3), date(2024, 1, 7))

    def test_end_bound(self) -> None:
        bound = Bound("end", date(2024, 1, 9))
        snapped = snap_forward(date(2024, 1, 1), date(2024, 1, 5), bound, 4)
        assert snapped == (date(2024, 1, 5), date(2024, 1, 9))

    def test_satisfied_bound_is_noop(self) -> None:
        start, end = date(2024, 1, 10), date(2024, 1, 15)
        assert snap_forward(start, end, Bound("start", date(2024, 1, 3)), 5) == (start, end)
        assert snap_forward(start, end, Bound("end", date(2024, 1, 15)), 5) == (start, end)

    def test_phase_duration_minimum(self) -> None:
        assert phase_duration(date(2024, 1, 1), date(2024, 1, 1)) == 1
        assert phase_duration(date(2024, 1, 1), date(2024, 1, 11)) == 10
