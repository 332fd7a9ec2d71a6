"""Configuration file loading.

A single YAML file (projplan_config.yaml) holds the scheduler and calendar
sections; both are optional and fall back to their defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .scheduler.config import CalendarConfig, SchedulingConfig

CONFIG_FILENAME = "projplan_config.yaml"


class ProjplanConfig(BaseModel):
    """All configuration for a projplan run."""

    scheduler: SchedulingConfig = Field(default_factory=SchedulingConfig)
    calendar: CalendarConfig = Field(default_factory=CalendarConfig)


def load_config(config_path: Path | str) -> ProjplanConfig:
    """Load configuration from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty, not a mapping, or has invalid values
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open(encoding="utf-8") as f:
        data: Any = yaml.safe_load(f)

    if not data:
        raise ValueError("Empty configuration file")
    if not isinstance(data, dict):
        raise ValueError("Configuration must be a mapping at the root level")

    unknown = set(data) - set(ProjplanConfig.model_fields)
    if unknown:
        raise ValueError(f"Unknown configuration section(s): {', '.join(sorted(unknown))}")

    try:
        return ProjplanConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ValueError(f"Invalid configuration in {config_path}: {e}") from e


def discover_config(
    input_path: Path | None = None, config_path: Path | None = None
) -> ProjplanConfig:
    """Find and load configuration, or return the defaults.

    Search order:
    1. Explicit config_path (must exist)
    2. The input file's directory / projplan_config.yaml
    3. Current directory / projplan_config.yaml
    """
    if config_path is not None:
        return load_config(config_path)

    if input_path is not None:
        dir_config = Path(input_path).parent / CONFIG_FILENAME
        if dir_config.exists():
            return load_config(dir_config)

    cwd_config = Path(CONFIG_FILENAME)
    if cwd_config.exists():
        return load_config(cwd_config)

    return ProjplanConfig()
