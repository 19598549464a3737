"""Unified configuration loading and discovery.

A single ``steporder_config.yaml`` file carries the scheduler settings::

    scheduler:
      algorithm:
        type: worker_pool
      workers:
        worker_count: 4
        fixed_overhead: 60
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .scheduler import SchedulingConfig

CONFIG_FILENAME = "steporder_config.yaml"


class UnifiedConfig(BaseModel):
    """Top-level configuration file contents."""

    scheduler: SchedulingConfig = SchedulingConfig()


class _Context:
    """Process-wide settings made by the CLI's global options."""

    def __init__(self) -> None:
        self.config_path: Path | None = None


_context = _Context()


def get_config_path() -> Path | None:
    """Get the config path set with --config, if any."""
    return _context.config_path


def set_config_path(path: Path | None) -> None:
    """Set the config path used by discover_config()."""
    _context.config_path = path


def load_unified_config(config_path: Path | str) -> UnifiedConfig:
    """Load unified configuration from a YAML file.

    Args:
        config_path: Path to steporder_config.yaml

    Returns:
        Parsed UnifiedConfig

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the config is empty or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse config YAML: {e}") from e

    if not data:
        raise ValueError("Empty configuration file")
    if not isinstance(data, dict):
        raise ValueError("Config must contain a mapping at the root level")

    try:
        return UnifiedConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ValueError(f"Invalid configuration in {config_path}: {e}") from e


def discover_config(
    input_path: Path | str | None = None,
    config_path: Path | None = None,
) -> UnifiedConfig | None:
    """Find and load the unified config.

    Search order:
    1. Explicit config_path argument
    2. Global context (set via CLI --config)
    3. Input file directory / steporder_config.yaml
    4. Current directory / steporder_config.yaml

    An explicitly requested file that does not exist is an error; the
    implicit locations are simply skipped.
    """
    if config_path is not None:
        return load_unified_config(config_path)

    ctx_config = get_config_path()
    if ctx_config is not None:
        return load_unified_config(ctx_config)

    if input_path is not None:
        dir_config = Path(input_path).parent / CONFIG_FILENAME
        if dir_config.exists():
            return load_unified_config(dir_config)

    cwd_config = Path(CONFIG_FILENAME)
    if cwd_config.exists():
        return load_unified_config(cwd_config)

    return None
