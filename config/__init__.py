"""
Configuration loading utilities for the tracker.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from core.constants import ErrorCode
from core.exceptions import ConfigurationError


CONFIG_DIR = Path(__file__).parent


def load_yaml(filename: str, config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of file in config directory
        config_dir: Directory to read from (defaults to this package)

    Returns:
        Parsed YAML as dict

    Raises:
        ConfigurationError: File missing, unparseable, or not a mapping
    """
    filepath = (config_dir or CONFIG_DIR) / filename
    if not filepath.exists():
        raise ConfigurationError(
            f"Config file not found: {filepath}",
            code=ErrorCode.CONFIG_INVALID,
            details={"file": str(filepath)},
        )

    try:
        with open(filepath, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Cannot read config file {filepath}: {e}",
            code=ErrorCode.CONFIG_INVALID,
            details={"file": str(filepath)},
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {filepath} must contain a mapping",
            code=ErrorCode.CONFIG_INVALID,
            details={"file": str(filepath), "type": type(data).__name__},
        )
    return data


def load_chains(config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """Load chains configuration (ordered by chain enumeration)."""
    return load_yaml("chains.yaml", config_dir)


def load_channels(config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """Load channel table: destination chain id -> source chain id -> channel."""
    return load_yaml("channels.yaml", config_dir)


def load_tracking(config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """Load tracking defaults (origin, denoms, account, overrides)."""
    return load_yaml("tracking.yaml", config_dir)
