"""Per-pair reconciliation: decide what the peer needs and apply it."""

from typing import Optional
import logging

from ..core.exceptions import SourceError
from ..core.models import SyncAction, SyncStats, TaskPair, TaskRecord
from ..sources.base import TaskSource
from ..utils.date import dates_equal, is_after


class TaskReconciler:
    """Brings the peer side of a pair in line with Exchange.

    Exchange wins only when its task was modified strictly later than the
    peer's; on a tie, or when the peer is newer, nothing is written. There
    is no reverse sync.
    """

    def __init__(self, other_source: TaskSource, dry_run: bool = False,
                 logger: Optional[logging.Logger] = None):
        self.other_source = other_source
        self.dry_run = dry_run
        self.logger = logger or logging.getLogger(__name__)

    def decide(self, exchange_task: Optional[TaskRecord],
               other_task: Optional[TaskRecord]) -> SyncAction:
        if exchange_task is not None and not exchange_task.completed and other_task is None:
            return SyncAction.CREATE
        if exchange_task is None or other_task is None:
            # Unknown Exchange task, or a completed one with no counterpart
            return SyncAction.NONE
        if is_after(exchange_task.last_modified, other_task.last_modified):
            return SyncAction.UPDATE
        return SyncAction.NONE

    def reconcile(self, pair: TaskPair, stats: SyncStats) -> SyncAction:
        """
        Apply the decision for one pair and count each mutation in ``stats``.

        A counter is only bumped once the source call returned. A
        SourceError from the peer source is logged and recorded in
        ``stats.errors`` instead of aborting the run.
        """
        exchange_task, other_task = pair.exchange, pair.other
        action = self.decide(exchange_task, other_task)
        self.logger.debug(f"{pair.key}: {action.value}")

        if action is SyncAction.CREATE:
            self._create(exchange_task, stats)
        elif action is SyncAction.UPDATE:
            self._update(exchange_task, other_task, stats)
        return action

    def _create(self, exchange_task: TaskRecord, stats: SyncStats) -> None:
        if self._mutate("add", self.other_source.add_task, exchange_task, stats):
            stats.task_added()

    def _update(self, exchange_task: TaskRecord, other_task: TaskRecord,
                stats: SyncStats) -> None:
        # Compare before copying, the copy overwrites the peer's values
        completed_changed = exchange_task.completed != other_task.completed
        due_changed = not dates_equal(exchange_task.due_date, other_task.due_date)

        if not self.dry_run:
            exchange_task.copy_to(other_task)

        if completed_changed:
            if self._mutate("update completed flag of",
                            self.other_source.update_completed_flag, other_task, stats):
                stats.task_updated()
        if due_changed:
            if self._mutate("update due date of",
                            self.other_source.update_due_date, other_task, stats):
                stats.task_updated()

    def _mutate(self, verb: str, call, task: TaskRecord, stats: SyncStats) -> bool:
        """Run one source mutation; return True when it should be counted."""
        if self.dry_run:
            self.logger.info(f"[dry-run] Would {verb} task {task.exchange_id} in {self.other_source.name}")
            return True

        try:
            call(task)
        except SourceError as exc:
            message = f"Failed to {verb} task {task.exchange_id} in {self.other_source.name}: {exc}"
            self.logger.error(message)
            stats.record_error(message)
            return False

        self.logger.info(f"{verb.capitalize()} task {task.exchange_id} in {self.other_source.name}")
        return True
