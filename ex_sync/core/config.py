"""
Configuration management for ex-sync.
"""

import os
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError
from .models import SyncConfig
from .paths import get_path_manager


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return get_path_manager().config_path


def load_config(config_path: Optional[str] = None) -> SyncConfig:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        SyncConfig object
    """
    if config_path is None:
        config_path = str(get_default_config_path())

    return SyncConfig.load_from_file(config_path)


def save_config(config: SyncConfig, config_path: Optional[str] = None):
    """
    Save configuration to file.

    Args:
        config: SyncConfig object to save
        config_path: Optional path to save to. Uses default if not provided.
    """
    if config_path is None:
        manager = get_path_manager()
        manager.ensure_directories()
        config_path = str(manager.config_path)

    config_dir = os.path.dirname(os.path.abspath(os.path.expanduser(config_path)))
    os.makedirs(config_dir, exist_ok=True)

    config.save_to_file(config_path)


def require_store_paths(config: SyncConfig) -> None:
    """Raise ConfigurationError unless both task stores are configured."""
    missing = []
    if not config.exchange_store_path:
        missing.append("exchange")
    if not config.other_store_path:
        missing.append("other")
    if missing:
        raise ConfigurationError(
            f"No task store configured for: {', '.join(missing)}. "
            "Run 'ex-sync config --exchange PATH --other PATH' first."
        )
