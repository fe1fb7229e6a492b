"""Sync command - run one Exchange to peer reconciliation pass."""

from typing import Tuple
import logging

from ..core.config import require_store_paths
from ..core.exceptions import ConfigurationError, SourceError
from ..core.models import SyncConfig, SyncStats
from ..sources.json_store import JsonTaskSource
from ..sync.engine import SyncEngine


def build_sources(config: SyncConfig) -> Tuple[JsonTaskSource, JsonTaskSource]:
    """Create the Exchange and peer sources described by ``config``."""
    require_store_paths(config)
    exchange = JsonTaskSource(config.exchange_store_path, name="exchange")
    other = JsonTaskSource(config.other_store_path, name="other")
    return exchange, other


class SyncCommand:
    """Command for synchronizing tasks from Exchange to the peer store."""

    def __init__(self, config: SyncConfig, verbose: bool = False):
        self.config = config
        self.verbose = verbose
        self.logger = logging.getLogger(__name__)

    def run(self, apply_changes: bool = False) -> bool:
        """Run the sync command. Dry run unless ``apply_changes`` is set."""
        try:
            exchange, other = build_sources(self.config)
        except ConfigurationError as exc:
            print(str(exc))
            return False

        dry_run = not apply_changes
        engine = SyncEngine(exchange, other, dry_run=dry_run, logger=self.logger)

        try:
            stats = engine.sync_all(SyncStats())
        except SourceError as exc:
            self.logger.error(f"Sync aborted: {exc}")
            print(f"❌ Sync failed: {exc}")
            return False

        self._show_summary(stats, dry_run)
        return not stats.errors

    def _show_summary(self, stats: SyncStats, dry_run: bool) -> None:
        print(f"\nSync {'Preview' if dry_run else 'Complete'}:")
        if stats.has_changes:
            print(f"\nChanges {'to make' if dry_run else 'made'}:")
            if stats.added:
                print(f"  Tasks added: {stats.added}")
            if stats.updated:
                print(f"  Tasks updated: {stats.updated}")
        else:
            print("\nNo changes needed - everything is in sync!")

        if stats.errors:
            print(f"\n⚠️  {len(stats.errors)} change(s) failed:")
            for message in stats.errors:
                print(f"  • {message}")

        if dry_run and stats.has_changes:
            print("\n💡 This was a dry run. Use --apply to make changes.")
