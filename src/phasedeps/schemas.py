"""Pydantic schemas for project plan YAML data."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from .models import DependencyType


class ProjectSchema(BaseModel):
    """Schema for the project header."""

    id: str
    name: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id_to_string(cls, v: Any) -> str:
        """Allow numeric project IDs."""
        return str(v)


class PhaseSchema(BaseModel):
    """Schema for a single phase."""

    name: str
    start_date: date
    end_date: date
    order: int = 0

    @model_validator(mode="after")
    def check_date_order(self) -> PhaseSchema:
        """A phase at rest never ends before it starts."""
        if self.end_date < self.start_date:
            raise ValueError(
                f"end_date {self.end_date} is before start_date {self.start_date}"
            )
        return self


class DependencySchema(BaseModel):
    """Schema for a dependency edge."""

    id: str | None = None
    predecessor: str
    successor: str
    type: DependencyType = DependencyType.FINISH_TO_START
    lag_days: int = 0

    @field_validator("type", mode="before")
    @classmethod
    def parse_type(cls, v: Any) -> DependencyType:
        """Accept short codes (FS) and long names (finish_to_start)."""
        if v is None:
            return DependencyType.FINISH_TO_START
        return DependencyType.parse(str(v))

    @field_validator("lag_days", mode="before")
    @classmethod
    def default_lag(cls, v: Any) -> Any:
        """Treat an explicit null lag as zero."""
        return 0 if v is None else v


class PlanSchema(BaseModel):
    """Schema for the entire project plan YAML data."""

    project: ProjectSchema
    phases: dict[str, PhaseSchema] = Field(default_factory=dict)
    dependencies: list[DependencySchema] = Field(default_factory=list)

    @field_validator("dependencies", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> Any:
        """Treat a missing dependencies section as empty."""
        return [] if v is None else v
