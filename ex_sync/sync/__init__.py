"""Sync module: pairing, reconciliation and orchestration."""

from .engine import SyncEngine
from .matcher import TaskMatcher
from .resolver import TaskReconciler

__all__ = ['SyncEngine', 'TaskMatcher', 'TaskReconciler']
