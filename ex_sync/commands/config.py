"""Config command - show or change the configured task stores."""

from typing import Optional

from ..core.models import SyncConfig


class ConfigCommand:
    """Shows the current configuration, or updates the store paths."""

    def __init__(self, config: SyncConfig, verbose: bool = False):
        self.config = config
        self.verbose = verbose

    def run(self, exchange: Optional[str] = None, other: Optional[str] = None) -> bool:
        """Return True when the configuration changed and should be saved."""
        if exchange or other:
            self.config = SyncConfig(
                exchange_store_path=exchange or self.config.exchange_store_path,
                other_store_path=other or self.config.other_store_path,
                log_level=self.config.log_level,
                log_to_file=self.config.log_to_file,
            )
            print("Configuration updated.")
            self._show()
            return True

        self._show()
        return False

    def _show(self) -> None:
        print("Current Configuration:")
        print(f"  Exchange store: {self.config.exchange_store_path or 'NOT SET'}")
        print(f"  Other store: {self.config.other_store_path or 'NOT SET'}")
        print(f"  Log level: {self.config.log_level}")
        print(f"  Log to file: {self.config.log_to_file}")
