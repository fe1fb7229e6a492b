"""Task sources (store adapters) for ex-sync."""

from .base import TaskSource
from .json_store import JsonTaskSource

__all__ = ['TaskSource', 'JsonTaskSource']
