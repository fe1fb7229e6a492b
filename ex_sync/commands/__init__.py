"""
Command implementations for ex-sync.
"""

from .sync import SyncCommand
from .status import StatusCommand
from .config import ConfigCommand

__all__ = [
    'SyncCommand',
    'StatusCommand',
    'ConfigCommand',
]
