"""Task source backed by a local JSON document."""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional
import logging
import os

import jsonschema

from ..core.exceptions import SourceError, TaskNotFoundError
from ..core.models import TaskRecord
from ..utils.date import format_date, format_timestamp
from ..utils.io import read_json, write_json
from .base import TaskSource
from .schema import STORE_SCHEMA


SCHEMA_VERSION = 1


class JsonTaskSource(TaskSource):
    """Reads and writes tasks in a JSON file keyed by exchange id.

    File layout::

        {
          "meta": {"schema": 1, "source": "other", "generated_at": "...", "task_count": 2},
          "tasks": {"E1": {...TaskRecord.to_dict()...}, ...}
        }

    A missing file is treated as an empty store and is created on the first
    write.
    """

    def __init__(self, path: str, name: Optional[str] = None,
                 logger: Optional[logging.Logger] = None):
        self.path = os.path.abspath(os.path.expanduser(path))
        self.name = name or os.path.splitext(os.path.basename(self.path))[0]
        self.logger = logger or logging.getLogger(__name__)

    def _load(self) -> Dict[str, Dict[str, Any]]:
        try:
            data = read_json(self.path)
        except (ValueError, OSError, TimeoutError) as exc:
            raise SourceError(f"Cannot read {self.name} store at {self.path}: {exc}") from exc

        if data is None:
            return {}
        try:
            jsonschema.validate(data, STORE_SCHEMA)
        except jsonschema.ValidationError as exc:
            location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
            raise SourceError(
                f"Malformed {self.name} store at {self.path} ({location}): {exc.message}"
            ) from exc
        return data.get("tasks", {})

    def _save(self, tasks: Dict[str, Dict[str, Any]]) -> None:
        document = {
            "meta": {
                "schema": SCHEMA_VERSION,
                "source": self.name,
                "generated_at": datetime.now(timezone.utc).isoformat(),
                "task_count": len(tasks),
            },
            "tasks": tasks,
        }
        try:
            write_json(self.path, document)
        except (OSError, TimeoutError, TypeError, ValueError) as exc:
            raise SourceError(f"Cannot write {self.name} store at {self.path}: {exc}") from exc

    def get_all_tasks(self) -> List[TaskRecord]:
        tasks: List[TaskRecord] = []
        for key, entry in self._load().items():
            entry = dict(entry)
            # The key is the id updates look the record up by
            if entry.get("exchange_id", key) != key:
                self.logger.warning(
                    f"Task {key!r} in {self.name} carries exchange_id "
                    f"{entry['exchange_id']!r}; using the key"
                )
            entry["exchange_id"] = key
            try:
                tasks.append(TaskRecord.from_dict(entry))
            except ValueError as exc:
                self.logger.warning(f"Skipping malformed task {key!r} in {self.name}: {exc}")
        self.logger.debug(f"Loaded {len(tasks)} tasks from {self.path}")
        return tasks

    def add_task(self, task: TaskRecord) -> None:
        tasks = self._load()
        if task.exchange_id in tasks:
            self.logger.warning(
                f"Task {task.exchange_id} already exists in {self.name}; replacing it"
            )
        tasks[task.exchange_id] = task.to_dict()
        self._save(tasks)
        self.logger.debug(f"Added task {task.exchange_id} to {self.name}")

    def _update_field(self, task: TaskRecord, apply: Callable[[Dict[str, Any]], None]) -> None:
        tasks = self._load()
        entry = tasks.get(task.exchange_id)
        if entry is None:
            raise TaskNotFoundError(f"Task {task.exchange_id} not found in {self.name}")
        apply(entry)
        entry["exchange_id"] = task.exchange_id
        entry["last_modified"] = format_timestamp(task.last_modified)
        self._save(tasks)

    def update_completed_flag(self, task: TaskRecord) -> None:
        def apply(entry):
            entry["completed"] = task.completed

        self._update_field(task, apply)
        self.logger.debug(f"Set completed={task.completed} on {task.exchange_id} in {self.name}")

    def update_due_date(self, task: TaskRecord) -> None:
        def apply(entry):
            entry["due_date"] = format_date(task.due_date)

        self._update_field(task, apply)
        self.logger.debug(f"Set due_date={task.due_date} on {task.exchange_id} in {self.name}")
