"""Status command - report how the two task stores line up."""

from collections import Counter
import logging

from ..core.exceptions import ConfigurationError, SourceError
from ..core.models import SyncAction, SyncConfig
from ..sync.matcher import TaskMatcher
from ..sync.resolver import TaskReconciler
from .sync import build_sources


class StatusCommand:
    """Read-only view of pairing and pending changes."""

    def __init__(self, config: SyncConfig, verbose: bool = False):
        self.config = config
        self.verbose = verbose
        self.logger = logging.getLogger(__name__)

    def run(self) -> bool:
        try:
            exchange, other = build_sources(self.config)
            exchange_tasks = exchange.get_all_tasks()
            other_tasks = other.get_all_tasks()
        except (ConfigurationError, SourceError) as exc:
            print(str(exc))
            return False

        matcher = TaskMatcher(logger=self.logger)
        reconciler = TaskReconciler(other, dry_run=True, logger=self.logger)

        pairs = matcher.generate_pairs(exchange_tasks, other_tasks)
        pending = Counter(reconciler.decide(pair.exchange, pair.other) for pair in pairs)
        peer_only = matcher.unmatched_other(exchange_tasks, other_tasks)

        print("\n=== Sync Status ===\n")
        print(f"Exchange tasks: {len(exchange_tasks)}")
        print(f"Other tasks: {len(other_tasks)}")
        print(f"Matched pairs: {sum(1 for pair in pairs if pair.other is not None)}")
        print(f"Pending creations: {pending[SyncAction.CREATE]}")
        print(f"Pending updates: {pending[SyncAction.UPDATE]}")
        if peer_only:
            print(f"Other tasks without Exchange counterpart: {len(peer_only)} (not synced)")
            if self.verbose:
                for task in peer_only:
                    print(f"  • {task.exchange_id}: {task.title}")
        return True
