"""Main engine orchestrating one synchronization pass."""

from datetime import datetime, timezone
from typing import Optional
import logging

from ..core.models import SyncStats
from ..sources.base import TaskSource
from .matcher import TaskMatcher
from .resolver import TaskReconciler


class SyncEngine:
    """Runs fetch, pair and reconcile for Exchange and one peer source."""

    def __init__(
        self,
        exchange_source: TaskSource,
        other_source: TaskSource,
        matcher: Optional[TaskMatcher] = None,
        dry_run: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        self.exchange_source = exchange_source
        self.other_source = other_source
        self.dry_run = dry_run
        self.logger = logger or logging.getLogger(__name__)

        self.matcher = matcher or TaskMatcher(logger=self.logger)
        self.reconciler = TaskReconciler(other_source, dry_run=dry_run, logger=self.logger)

    def sync_all(self, stats: Optional[SyncStats] = None) -> SyncStats:
        """
        Perform one full sync pass.

        Fetch errors from either source propagate before any pairing takes
        place. Each pair is reconciled into its own SyncStats which is then
        merged into ``stats``.

        Returns:
            ``stats`` (a new SyncStats when none was given)
        """
        if stats is None:
            stats = SyncStats()

        self.logger.info("Synchronizing tasks (dry_run=%s)...", self.dry_run)

        self.logger.info(f"Collecting tasks from {self.other_source.name}...")
        other_tasks = self.other_source.get_all_tasks()
        self.logger.info(f"Collecting tasks from {self.exchange_source.name}...")
        exchange_tasks = self.exchange_source.get_all_tasks()
        self.logger.info(
            f"Found {len(exchange_tasks)} {self.exchange_source.name} tasks and "
            f"{len(other_tasks)} {self.other_source.name} tasks"
        )

        pairs = self.matcher.generate_pairs(exchange_tasks, other_tasks)

        for pair in pairs:
            pair_stats = SyncStats()
            self.reconciler.reconcile(pair, pair_stats)
            stats.merge(pair_stats)

        stats.completed_at = datetime.now(timezone.utc)
        self.logger.info(
            f"Sync finished: {stats.added} added, {stats.updated} updated, "
            f"{len(stats.errors)} errors"
        )
        return stats
