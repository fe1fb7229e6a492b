"""
Centralized path management for ex-sync.

Resolves the working directory and the configuration, data and log
locations inside it.
"""

import logging
import os
from pathlib import Path
from typing import Optional


class PathManager:
    """Manages ex-sync file paths."""

    # Directory names
    WORKING_DIR_NAME = ".ex-sync"
    HOME_ENV_VAR = "EX_SYNC_HOME"

    # File names
    CONFIG_FILE = "config.json"
    LOG_FILE = "ex-sync.log"

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._working_dir: Optional[Path] = None

    @property
    def working_dir(self) -> Path:
        """
        Get the working directory for ex-sync data.

        Priority order:
        1. EX_SYNC_HOME environment variable (explicit override)
        2. ~/.ex-sync
        """
        if self._working_dir is not None:
            return self._working_dir

        env_override = os.environ.get(self.HOME_ENV_VAR)
        if env_override:
            self._working_dir = Path(env_override).expanduser().resolve()
            self.logger.debug(f"Using {self.HOME_ENV_VAR} override: {self._working_dir}")
        else:
            self._working_dir = Path.home() / self.WORKING_DIR_NAME

        return self._working_dir

    def ensure_directories(self) -> None:
        """Ensure all required directories exist."""
        for directory in (self.working_dir, self.data_dir, self.log_dir):
            directory.mkdir(parents=True, exist_ok=True)
            self.logger.debug(f"Ensured directory exists: {directory}")

    @property
    def data_dir(self) -> Path:
        """Default location for JSON task stores."""
        return self.working_dir / "data"

    @property
    def log_dir(self) -> Path:
        return self.working_dir / "logs"

    @property
    def config_path(self) -> Path:
        return self.working_dir / self.CONFIG_FILE

    @property
    def log_path(self) -> Path:
        return self.log_dir / self.LOG_FILE


# Global instance for convenience
_path_manager = None


def get_path_manager() -> PathManager:
    """Get or create the global PathManager instance."""
    global _path_manager
    if _path_manager is None:
        _path_manager = PathManager()
    return _path_manager


def reset_path_manager() -> None:
    """Drop the cached PathManager so the next call re-reads the environment."""
    global _path_manager
    _path_manager = None
