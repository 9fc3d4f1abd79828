#!/usr/bin/env python3
"""
Configuration management for the tinmesh CLI.

This module provides functions for loading, saving, and accessing the user
settings that supply defaults to the command-line tools.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

# Default settings
DEFAULT_CONFIG = {
    "max_error": 1.0,
    "z_scale": 1.0,
    "output_dir": "tinmesh_output",
    "colormap": "terrain",
    "dpi": 150,
}


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    return Path.home() / ".tinmesh_config.json"


def load_config() -> Dict[str, Any]:
    """
    Load configuration from the config file, falling back to defaults.

    Returns:
        Dictionary containing configuration settings.
    """
    config = DEFAULT_CONFIG.copy()
    config_path = get_config_path()
    if not config_path.exists():
        return config

    try:
        with open(config_path, 'r') as f:
            config.update(json.load(f))
    except (OSError, ValueError) as e:
        logger.warning(f"Could not load config file {config_path}: {e}")
    return config


def save_config(config: Dict[str, Any]) -> None:
    """
    Save configuration to the config file.

    Args:
        config: Configuration dictionary to save.
    """
    config_path = get_config_path()
    try:
        with open(config_path, 'w') as f:
            json.dump(config, f, indent=2)
    except OSError as e:
        logger.warning(f"Could not save config file {config_path}: {e}")


def get_config_value(key: str, default: Any = None) -> Any:
    """Get a single configuration value."""
    return load_config().get(key, default)


def set_config_value(key: str, value: Any) -> None:
    """Set a single configuration value and persist it."""
    config = load_config()
    config[key] = value
    save_config(config)


def reset_config() -> None:
    """Reset configuration to default values."""
    save_config(DEFAULT_CONFIG.copy())
