"""Pytest configuration and fixtures for phasedeps tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

import pytest

from phasedeps.logger import reset_logger
from phasedeps.models import Dependency, DependencyType, Phase

PhaseFactory = Callable[..., Phase]
DependencyFactory = Callable[..., Dependency]


@pytest.fixture(autouse=True)
def clean_logger() -> None:
    """Reset logger state before each test for isolation."""
    reset_logger()


@pytest.fixture
def make_phase() -> PhaseFactory:
    """Factory for phases in a single test project.

    Example:
        make_phase("design", "2024-01-01", "2024-01-10")
    """

    def _make(
        phase_id: str, start: str, end: str, *, name: str | None = None, order: int = 0
    ) -> Phase:
        return Phase(
            id=phase_id,
            project_id="proj-1",
            name=name or phase_id.title(),
            start_date=date.fromisoformat(start),
            end_date=date.fromisoformat(end),
            order=order,
        )

    return _make


@pytest.fixture
def make_dep() -> DependencyFactory:
    """Factory for dependencies; the ID is derived from the endpoints and type.

    Example:
        make_dep("design", "build", "SS", lag_days=3)
    """

    def _make(
        predecessor: str, successor: str, dep_type: str = "FS", *, lag_days: int = 0
    ) -> Dependency:
        parsed = DependencyType.parse(dep_type)
        return Dependency(
            id=f"{predecessor}->{successor}:{parsed.value}",
            predecessor_phase_id=predecessor,
            successor_phase_id=successor,
            type=parsed,
            lag_days=lag_days,
        )

    return _make


@pytest.fixture
def three_phase_chain(
    make_phase: PhaseFactory, make_dep: DependencyFactory
) -> tuple[list[Phase], list[Dependency]]:
    """A -> B -> C Finish-to-Start chain with no lag, A already extended to 01-15."""
    phases = [
        make_phase("a", "2024-01-01", "2024-01-15", order=1),
        make_phase("b", "2024-01-11", "2024-01-20", order=2),
        make_phase("c", "2024-01-21", "2024-01-31", order=3),
    ]
    dependencies = [make_dep("a", "b"), make_dep("b", "c")]
    return phases, dependencies
