"""Project plan loading with validation."""

from __future__ import annotations

from pathlib import Path

from . import context
from .config import DEFAULT_CONFIG_FILENAME, PhasedepsConfig, load_config
from .engine.graph import ensure_acyclic
from .exceptions import MissingReferenceError, ValidationError
from .models import ProjectPlan
from .parser import PlanParser


def discover_config(
    plan_path: Path | str | None = None,
    config_path: Path | None = None,
) -> PhasedepsConfig:
    """Find the configuration that applies to a plan.

    Search order:
    1. Explicit config_path argument
    2. Global context (set via CLI --config)
    3. plan directory / phasedeps_config.yaml
    4. Current directory / phasedeps_config.yaml

    Falls back to default settings when no file is found.
    """
    # 1. Explicit argument
    if config_path and config_path.exists():
        return load_config(config_path)

    # 2. Global context
    ctx_config = context.get_config_path()
    if ctx_config and ctx_config.exists():
        cached = context.get_loaded_config()
        if cached is None:
            cached = load_config(ctx_config)
            context.set_loaded_config(cached)
        return cached

    # 3. Plan directory
    if plan_path is not None:
        dir_config = Path(plan_path).parent / DEFAULT_CONFIG_FILENAME
        if dir_config.exists():
            return load_config(dir_config)

    # 4. Current directory
    cwd_config = Path(DEFAULT_CONFIG_FILENAME)
    if cwd_config.exists():
        return load_config(cwd_config)

    return PhasedepsConfig()


def load_plan(path: Path | str) -> ProjectPlan:
    """Load and validate a project plan.

    This is the input boundary: malformed dates, dangling references,
    self-loops and cycles are rejected here so the engine only ever sees
    well-formed snapshots.
    """
    plan = PlanParser().parse_file(path)
    validate_plan(plan)
    return plan


def validate_plan(plan: ProjectPlan) -> None:
    """Validate the plan for reference integrity, self-loops and cycles."""
    all_ids = plan.get_all_ids()
    seen_dependency_ids: set[str] = set()

    for dep in plan.dependencies:
        if dep.id in seen_dependency_ids:
            raise ValidationError(f"Duplicate dependency id: {dep.id}")
        seen_dependency_ids.add(dep.id)

        if dep.is_self_loop:
            raise ValidationError(f"Phase {dep.predecessor_phase_id} cannot depend on itself")
        if dep.predecessor_phase_id not in all_ids:
            raise MissingReferenceError(
                f"Dependency {dep.id} references unknown predecessor: {dep.predecessor_phase_id}"
            )
        if dep.successor_phase_id not in all_ids:
            raise MissingReferenceError(
                f"Dependency {dep.id} references unknown successor: {dep.successor_phase_id}"
            )

    ensure_acyclic(plan.phases, plan.dependencies)
