"""Command-line interface for phasedeps."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Annotated

import typer

from . import context
from .config import PhasedepsConfig
from .engine import (
    calculate_cascade,
    correct_all_phases,
    correct_phase_dates,
    find_violations,
    validate_phase_dates,
)
from .exceptions import PhasedepsError
from .loader import discover_config, load_plan
from .logger import setup_logger
from .models import ProjectPlan

app = typer.Typer(
    name="phasedeps",
    help="Validate and correct project phase dates against their dependencies",
    add_completion=False,
)

PlanArgument = Annotated[Path, typer.Argument(help="Path to the project plan YAML file")]
PhaseArgument = Annotated[str, typer.Argument(help="ID of the phase being changed")]
StartOption = Annotated[str, typer.Option("--start", "-s", help="Proposed start date (YYYY-MM-DD)")]
EndOption = Annotated[str, typer.Option("--end", "-e", help="Proposed end date (YYYY-MM-DD)")]


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show changes, 2=show all checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: phasedeps_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for phasedeps commands."""
    setup_logger(verbose)
    context.set_config_path(config)


def _parse_date_option(date_str: str, option_name: str) -> date:
    """Parse a date option, exiting with an error message if invalid."""
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        typer.echo(
            f"Error: Invalid {option_name} date '{date_str}'. Use YYYY-MM-DD format.",
            err=True,
        )
        raise typer.Exit(1) from None


def _load(file: Path) -> tuple[ProjectPlan, PhasedepsConfig]:
    """Load a plan and its configuration, exiting on boundary errors."""
    try:
        config = discover_config(file)
        plan = load_plan(file)
    except (PhasedepsError, FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    return plan, config


def _require_phase(plan: ProjectPlan, phase_id: str) -> None:
    if plan.get_phase_by_id(phase_id) is None:
        typer.echo(f"Error: Unknown phase '{phase_id}'", err=True)
        raise typer.Exit(1)


@app.command()
def validate(
    file: PlanArgument,
    phase: PhaseArgument,
    start: StartOption,
    end: EndOption,
) -> None:
    """Check proposed dates for a phase against all of its dependencies."""
    plan, config = _load(file)
    _require_phase(plan, phase)
    new_start = _parse_date_option(start, "start")
    new_end = _parse_date_option(end, "end")

    errors = validate_phase_dates(
        phase, new_start, new_end, plan.phases, plan.dependencies, config.constraints
    )
    if not errors:
        typer.echo(f"{phase}: {new_start} to {new_end} is valid")
        return

    for error in errors:
        typer.echo(f"- {error}")
    raise typer.Exit(1)


@app.command()
def correct(
    file: PlanArgument,
    phase: PhaseArgument,
    start: StartOption,
    end: EndOption,
) -> None:
    """Move proposed dates forward until every predecessor constraint holds."""
    plan, config = _load(file)
    _require_phase(plan, phase)
    new_start = _parse_date_option(start, "start")
    new_end = _parse_date_option(end, "end")

    result = correct_phase_dates(
        phase, new_start, new_end, plan.phases, plan.dependencies, config.constraints
    )
    if result.was_valid:
        typer.echo(f"{phase}: {result.start_date} to {result.end_date} (no correction needed)")
    else:
        typer.echo(f"{phase}: {result.start_date} to {result.end_date} (corrected)")


@app.command()
def check(file: PlanArgument) -> None:
    """List every phase whose stored dates violate a constraint."""
    plan, config = _load(file)
    violations = find_violations(plan.phases, plan.dependencies, config.constraints)
    if not violations:
        typer.echo("All phases satisfy their dependencies")
        return

    for phase_id, errors in violations.items():
        typer.echo(f"{phase_id}:")
        for error in errors:
            typer.echo(f"  - {error}")
    raise typer.Exit(1)


@app.command()
def fix(
    file: PlanArgument,
    phases: Annotated[
        list[str] | None,
        typer.Option("--phase", "-p", help="Phase to correct (default: all violating phases)"),
    ] = None,
) -> None:
    """Compute the date changes that resolve violating phases."""
    plan, config = _load(file)
    if phases:
        for phase_id in phases:
            _require_phase(plan, phase_id)
        violating = set(phases)
    else:
        violating = set(find_violations(plan.phases, plan.dependencies, config.constraints))

    # load_plan already rejected cyclic plans
    corrections = correct_all_phases(plan.phases, plan.dependencies, violating, config.constraints)
    if not corrections:
        typer.echo("No changes needed")
        return

    for correction in corrections:
        typer.echo(f"{correction.phase_id}: {correction.start_date} to {correction.end_date}")


@app.command()
def cascade(
    file: PlanArgument,
    phase: PhaseArgument,
    start: StartOption,
    end: EndOption,
) -> None:
    """Show which successors move if a phase takes new dates."""
    plan, config = _load(file)
    _require_phase(plan, phase)
    new_start = _parse_date_option(start, "start")
    new_end = _parse_date_option(end, "end")

    result = calculate_cascade(
        phase, new_start, new_end, plan.phases, plan.dependencies, config.constraints
    )
    if result.validation_errors:
        for error in result.validation_errors:
            typer.echo(f"- {error}")
        raise typer.Exit(1)

    if not result.affected_phases:
        typer.echo("No other phases affected")
        return

    typer.echo(f"{result.cascade_count} phase(s) affected:")
    for change in result.affected_phases:
        typer.echo(
            f"  {change.phase_id}: {change.current_start_date}..{change.current_end_date} -> "
            f"{change.new_start_date}..{change.new_end_date} "
            f"({change.dependency_type.value}, lag {change.lag_days})"
        )


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
