"""Pairing of authoritative and peer tasks by exchange id."""

from typing import Dict, Iterable, List, Optional
import logging

from ..core.models import TaskPair, TaskRecord


class TaskMatcher:
    """Pairs every Exchange task with the peer task sharing its exchange id.

    Only Exchange tasks drive pairing: a peer task whose id is unknown to
    Exchange never ends up in a pair.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def build_id_map(self, tasks: Iterable[TaskRecord],
                     source: str = "task") -> Dict[str, TaskRecord]:
        """Index tasks by exchange id; a repeated id keeps the last task seen.

        ``source`` names the side the tasks came from in the duplicate warning.
        """
        results: Dict[str, TaskRecord] = {}
        for task in tasks:
            if task.exchange_id in results:
                self.logger.warning(
                    f"Duplicate exchange id {task.exchange_id!r} in {source} tasks; keeping the last one"
                )
            results[task.exchange_id] = task
        return results

    def pair_for_exchange_task(self, other_by_id: Dict[str, TaskRecord],
                               exchange_task: TaskRecord) -> TaskPair:
        return TaskPair(exchange=exchange_task, other=other_by_id.get(exchange_task.exchange_id))

    def generate_pairs(self, exchange_tasks: Iterable[TaskRecord],
                       other_tasks: Iterable[TaskRecord]) -> List[TaskPair]:
        """
        Build one pair per Exchange task.

        Args:
            exchange_tasks: Full snapshot of the authoritative source
            other_tasks: Full snapshot of the peer source

        Returns:
            Pairs in Exchange fetch order; the peer side is None when no
            peer task shares the Exchange task's id.
        """
        other_by_id = self.build_id_map(other_tasks, source="peer")
        pairs_by_id = {
            exchange_id: self.pair_for_exchange_task(other_by_id, exchange_task)
            for exchange_id, exchange_task in self.build_id_map(exchange_tasks, source="Exchange").items()
        }

        matched = sum(1 for pair in pairs_by_id.values() if pair.other is not None)
        self.logger.info(
            f"Paired {len(pairs_by_id)} Exchange tasks ({matched} matched, "
            f"{len(pairs_by_id) - matched} without counterpart)"
        )
        return list(pairs_by_id.values())

    def unmatched_other(self, exchange_tasks: Iterable[TaskRecord],
                        other_tasks: Iterable[TaskRecord]) -> List[TaskRecord]:
        """Peer tasks with no Exchange counterpart. Reported, never synced."""
        exchange_ids = {task.exchange_id for task in exchange_tasks}
        return [task for task in other_tasks if task.exchange_id not in exchange_ids]
