"""Tests for the bulk corrector."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import pytest

from phasedeps.engine import correct_all_phases, find_violations
from phasedeps.exceptions import CircularDependencyError
from phasedeps.models import Phase, PhaseCorrection

if TYPE_CHECKING:
    from phasedeps.models import Dependency
    from tests.conftest import DependencyFactory, PhaseFactory


def _apply(phases: list[Phase], corrections: list[PhaseCorrection]) -> list[Phase]:
    """Return copies of the phases with corrections applied."""
    by_id = {c.phase_id: c for c in corrections}
    result: list[Phase] = []
    for phase in phases:
        correction = by_id.get(phase.id)
        if correction is None:
            result.append(phase)
        else:
            result.append(
                Phase(
                    id=phase.id,
                    project_id=phase.project_id,
                    name=phase.name,
                    start_date=correction.start_date,
                    end_date=correction.end_date,
                    order=phase.order,
                )
            )
    return result


class TestCorrectAllPhases:
    """Sweeping corrections through the dependency graph."""

    def test_cascade_through_chain(
        self, three_phase_chain: tuple[list[Phase], list[Dependency]]
    ) -> None:
        """Extending A pushes B and then C, even though only A is flagged."""
        phases, deps = three_phase_chain

        corrections = correct_all_phases(phases, deps, {"a"})

        assert corrections == [
            PhaseCorrection("b", date(2024, 1, 16), date(2024, 1, 25)),
            PhaseCorrection("c", date(2024, 1, 26), date(2024, 2, 5)),
        ]

    def test_empty_violating_set_returns_nothing(
        self, three_phase_chain: tuple[list[Phase], list[Dependency]]
    ) -> None:
        phases, deps = three_phase_chain
        assert correct_all_phases(phases, deps, set()) == []

    def test_result_resolves_all_violations(
        self, three_phase_chain: tuple[list[Phase], list[Dependency]]
    ) -> None:
        phases, deps = three_phase_chain
        violating = set(find_violations(phases, deps))

        corrections = correct_all_phases(phases, deps, violating)

        assert find_violations(_apply(phases, corrections), deps) == {}

    def test_flagged_successor_is_corrected(
        self, three_phase_chain: tuple[list[Phase], list[Dependency]]
    ) -> None:
        """Flagging the phase that actually overlaps moves it and its successors."""
        phases, deps = three_phase_chain

        corrections = correct_all_phases(phases, deps, {"b"})

        assert [c.phase_id for c in corrections] == ["b", "c"]

    def test_valid_phase_in_set_is_not_moved(
        self, make_phase: PhaseFactory, make_dep: DependencyFactory
    ) -> None:
        phases = [
            make_phase("a", "2024-01-01", "2024-01-10"),
            make_phase("b", "2024-01-11", "2024-01-20"),
        ]
        deps = [make_dep("a", "b")]

        assert correct_all_phases(phases, deps, {"a", "b"}) == []

    def test_unrelated_phases_are_untouched(
        self,
        three_phase_chain: tuple[list[Phase], list[Dependency]],
        make_phase: PhaseFactory,
    ) -> None:
        phases, deps = three_phase_chain
        phases = [*phases, make_phase("other", "2024-01-05", "2024-01-06")]

        corrections = correct_all_phases(phases, deps, {"a", "other"})

        assert "other" not in {c.phase_id for c in corrections}

    def test_long_chain_is_fully_cascaded(
        self, make_phase: PhaseFactory, make_dep: DependencyFactory
    ) -> None:
        """Corrections travel arbitrarily many hops."""
        phases = [
            make_phase("p1", "2024-01-01", "2024-01-20"),
            make_phase("p2", "2024-01-11", "2024-01-15"),
            make_phase("p3", "2024-01-16", "2024-01-20"),
            make_phase("p4", "2024-01-21", "2024-01-25"),
            make_phase("p5", "2024-01-26", "2024-01-30"),
        ]
        deps = [make_dep(f"p{i}", f"p{i + 1}") for i in range(1, 5)]

        corrections = correct_all_phases(phases, deps, {"p1"})

        assert corrections == [
            PhaseCorrection("p2", date(2024, 1, 21), date(2024, 1, 25)),
            PhaseCorrection("p3", date(2024, 1, 26), date(2024, 1, 30)),
            PhaseCorrection("p4", date(2024, 1, 31), date(2024, 2, 4)),
            PhaseCorrection("p5", date(2024, 2, 5), date(2024, 2, 9)),
        ]

    def test_diamond_takes_latest_predecessor(
        self, make_phase: PhaseFactory, make_dep: DependencyFactory
    ) -> None:
        """A phase with two moved predecessors ends up after both."""
        phases = [
            make_phase("start", "2024-01-01", "2024-01-10"),
            make_phase("left", "2024-01-05", "2024-01-08"),
            make_phase("right", "2024-01-05", "2024-01-15"),
            make_phase("join", "2024-01-16", "2024-01-18"),
        ]
        deps = [
            make_dep("start", "left"),
            make_dep("start", "right"),
            make_dep("left", "join"),
            make_dep("right", "join"),
        ]

        corrections = {c.phase_id: c for c in correct_all_phases(phases, deps, {"left", "right"})}

        assert (corrections["left"].start_date, corrections["left"].end_date) == (
            date(2024, 1, 11),
            date(2024, 1, 14),
        )
        assert (corrections["right"].start_date, corrections["right"].end_date) == (
            date(2024, 1, 11),
            date(2024, 1, 21),
        )
        assert (corrections["join"].start_date, corrections["join"].end_date) == (
            date(2024, 1, 22),
            date(2024, 1, 24),
        )

    def test_mixed_dependency_types(
        self, make_phase: PhaseFactory, make_dep: DependencyFactory
    ) -> None:
        """Start- and finish-anchored edges use the predecessor's working dates."""
        phases = [
            make_phase("a", "2024-01-01", "2024-01-10"),
            make_phase("b", "2024-01-05", "2024-01-12"),
            make_phase("c", "2024-01-10", "2024-01-14"),
        ]
        deps = [make_dep("a", "b", "SS", lag_days=7), make_dep("b", "c", "FF", lag_days=1)]

        corrections = correct_all_phases(phases, deps, {"b"})

        assert corrections == [
            PhaseCorrection("b", date(2024, 1, 8), date(2024, 1, 15)),
            PhaseCorrection("c", date(2024, 1, 12), date(2024, 1, 16)),
        ]

    def test_durations_preserved(
        self, three_phase_chain: tuple[list[Phase], list[Dependency]]
    ) -> None:
        phases, deps = three_phase_chain
        originals = {p.id: p.end_date - p.start_date for p in phases}

        for correction in correct_all_phases(phases, deps, {"a"}):
            assert correction.end_date - correction.start_date == originals[correction.phase_id]

    def test_inputs_not_mutated(
        self, three_phase_chain: tuple[list[Phase], list[Dependency]]
    ) -> None:
        phases, deps = three_phase_chain
        phases_before = list(phases)
        deps_before = list(deps)

        correct_all_phases(phases, deps, {"a"})

        assert phases == phases_before
        assert deps == deps_before

    def test_unknown_ids_are_ignored(
        self, three_phase_chain: tuple[list[Phase], list[Dependency]]
    ) -> None:
        phases, deps = three_phase_chain
        assert correct_all_phases(phases, deps, {"ghost"}) == []

    def test_cycle_raises(self, make_phase: PhaseFactory, make_dep: DependencyFactory) -> None:
        phases = [
            make_phase("a", "2024-01-01", "2024-01-10"),
            make_phase("b", "2024-01-11", "2024-01-20"),
        ]
        deps = [make_dep("a", "b"), make_dep("b", "a")]

        with pytest.raises(CircularDependencyError, match="Circular dependency detected"):
            correct_all_phases(phases, deps, {"a"})
