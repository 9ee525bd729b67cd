"""YAML parser for project plans."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError, ValidationError
from .models import Dependency, DependencyType, Phase, ProjectPlan
from .schemas import PlanSchema


def default_dependency_id(
    predecessor_id: str, successor_id: str, dep_type: DependencyType
) -> str:
    """ID given to a dependency that does not declare one.

    The type is part of the ID so parallel edges (e.g. SS plus FF between
    the same two phases) stay distinct.
    """
    return f"{predecessor_id}->{successor_id}:{dep_type.value}"


class PlanParser:
    """Parser for project plan YAML files.

    This parser only handles YAML parsing and model creation.
    For reference and cycle checks, use load_plan() from phasedeps.loader.
    """

    def parse_file(self, file_path: Path | str) -> ProjectPlan:
        """Parse a YAML file into a ProjectPlan."""
        path = Path(file_path)
        if not path.exists():
            raise ParseError(f"File not found: {file_path}")

        try:
            with path.open(encoding="utf-8") as f:
                data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ParseError(f"Failed to parse YAML: {e}") from e

        if not isinstance(data, dict):
            raise ParseError("YAML must contain a dictionary at the root level")

        return self.parse_data(data)  # type: ignore[arg-type]

    def parse_data(self, data: dict[str, Any]) -> ProjectPlan:
        """Convert already-loaded YAML data into a ProjectPlan."""
        try:
            schema = PlanSchema(**data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid plan structure: {e}") from e

        project_id = schema.project.id

        phases = [
            Phase(
                id=phase_id,
                project_id=project_id,
                name=phase_data.name,
                start_date=phase_data.start_date,
                end_date=phase_data.end_date,
                order=phase_data.order,
            )
            for phase_id, phase_data in schema.phases.items()
        ]

        dependencies = [
            Dependency(
                id=dep_data.id
                or default_dependency_id(dep_data.predecessor, dep_data.successor, dep_data.type),
                predecessor_phase_id=dep_data.predecessor,
                successor_phase_id=dep_data.successor,
                type=dep_data.type,
                lag_days=dep_data.lag_days,
            )
            for dep_data in schema.dependencies
        ]

        return ProjectPlan(
            project_id=project_id,
            name=schema.project.name,
            phases=phases,
            dependencies=dependencies,
        )
