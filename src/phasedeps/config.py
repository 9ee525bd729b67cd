"""Configuration loading for phasedeps.

Settings live in a single YAML file (phasedeps_config.yaml by default).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

DEFAULT_CONFIG_FILENAME = "phasedeps_config.yaml"


class ConstraintConfig(BaseModel):
    """How dependency constraints are evaluated."""

    # Finish-to-Start edges leave at least this many days between phases
    fs_min_gap_days: int = Field(default=1, ge=0)
    # strftime format for dates embedded in violation messages
    date_display_format: str = "%Y-%m-%d"


class PhasedepsConfig(BaseModel):
    """Top-level configuration."""

    constraints: ConstraintConfig = ConstraintConfig()


def load_config(config_path: Path | str) -> PhasedepsConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to phasedeps_config.yaml

    Returns:
        PhasedepsConfig with defaults filled in for missing sections

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is empty or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open(encoding="utf-8") as f:
        data: dict[str, Any] | None = yaml.safe_load(f)

    if not data:
        raise ValueError("Empty configuration file")
    if not isinstance(data, dict):
        raise ValueError("Config must contain a dictionary at the root level")

    constraints = ConstraintConfig()
    if "constraints" in data:
        constraints = ConstraintConfig.model_validate(data["constraints"] or {})

    return PhasedepsConfig(constraints=constraints)
