"""Task source interface consumed by the sync engine."""

from abc import ABC, abstractmethod
from typing import List

from ..core.models import TaskRecord


class TaskSource(ABC):
    """
    One task store taking part in a sync.

    The engine only ever calls the four methods below. Implementations
    raise :class:`~ex_sync.core.exceptions.SourceError` (or a subclass)
    for store-level failures so the engine can tell them apart from bugs.
    """

    name: str = "source"

    @abstractmethod
    def get_all_tasks(self) -> List[TaskRecord]:
        """Return a full snapshot of the tasks held by this source."""

    @abstractmethod
    def add_task(self, task: TaskRecord) -> None:
        """Create a task in this source mirroring ``task``."""

    @abstractmethod
    def update_completed_flag(self, task: TaskRecord) -> None:
        """Persist ``task.completed`` for an existing task."""

    @abstractmethod
    def update_due_date(self, task: TaskRecord) -> None:
        """Persist ``task.due_date`` for an existing task."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
