"""
Exception classes for ex-sync.
"""


class ExSyncError(Exception):
    """Base exception for all ex-sync errors."""
    pass


class ConfigurationError(ExSyncError):
    """Raised when configuration is invalid or missing."""
    pass


class SourceError(ExSyncError):
    """Raised when a task source cannot be read or written."""
    pass


class TaskNotFoundError(SourceError):
    """Raised when a task cannot be found in its source."""
    pass
