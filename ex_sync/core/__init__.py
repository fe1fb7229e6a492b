"""
Core module for ex-sync - contains domain models, configuration, and exceptions.
"""

from .models import (
    TaskRecord,
    TaskPair,
    SyncAction,
    SyncStats,
    Priority,
    SyncConfig
)

from .exceptions import (
    ExSyncError,
    ConfigurationError,
    SourceError,
    TaskNotFoundError
)

__all__ = [
    # Models
    'TaskRecord',
    'TaskPair',
    'SyncAction',
    'SyncStats',
    'Priority',
    'SyncConfig',
    # Exceptions
    'ExSyncError',
    'ConfigurationError',
    'SourceError',
    'TaskNotFoundError'
]
