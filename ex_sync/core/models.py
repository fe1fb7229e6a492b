"""
Domain models for ex-sync.

This module contains the core data structures shared by the task sources,
the pairing and reconciliation steps and the command layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
import logging
import os

from ..utils.date import format_date, format_timestamp, parse_date, parse_timestamp
from ..utils.io import safe_read_json, write_json


logger = logging.getLogger(__name__)


def _normalize_path(path: str) -> str:
    """Expand user and convert to absolute path."""
    return os.path.abspath(os.path.expanduser(path))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Priority(Enum):
    """Task priority levels."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SyncAction(Enum):
    """Decision taken for one pair of tasks."""

    CREATE = "create"
    UPDATE = "update"
    NONE = "none"


@dataclass
class TaskRecord:
    """A task as seen by one source.

    ``exchange_id`` is assigned by the authoritative source and is the only
    key used to match records across sources. The remaining descriptive
    fields travel as a block through :meth:`copy_to`.
    """

    exchange_id: str
    last_modified: datetime
    completed: bool = False
    due_date: Optional[date] = None
    title: str = ""
    notes: str = ""
    priority: Optional[Priority] = None
    tags: List[str] = field(default_factory=list)

    def copy_to(self, other: TaskRecord) -> None:
        """Copy everything except the identifier onto ``other`` in memory."""
        other.title = self.title
        other.notes = self.notes
        other.priority = self.priority
        other.tags = list(self.tags)
        other.completed = self.completed
        other.due_date = self.due_date
        other.last_modified = self.last_modified

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exchange_id": self.exchange_id,
            "last_modified": format_timestamp(self.last_modified),
            "completed": self.completed,
            "due_date": format_date(self.due_date),
            "title": self.title,
            "notes": self.notes,
            "priority": self.priority.value if self.priority else None,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TaskRecord:
        exchange_id = data.get("exchange_id")
        if not exchange_id:
            raise ValueError("Task record is missing 'exchange_id'")

        last_modified = parse_timestamp(data.get("last_modified"))
        if last_modified is None:
            raise ValueError(
                f"Task record {exchange_id} has no valid 'last_modified' timestamp"
            )

        priority = None
        if data.get("priority"):
            try:
                priority = Priority(data["priority"])
            except ValueError:
                priority = None

        due = data.get("due_date")
        due_date = due if isinstance(due, date) else parse_date(due)

        return cls(
            exchange_id=exchange_id,
            last_modified=last_modified,
            completed=bool(data.get("completed", False)),
            due_date=due_date,
            title=data.get("title", ""),
            notes=data.get("notes", ""),
            priority=priority,
            tags=list(data.get("tags", [])),
        )


@dataclass(frozen=True)
class TaskPair:
    """One authoritative task and its peer counterpart for a single run."""

    exchange: Optional[TaskRecord]
    other: Optional[TaskRecord]

    @property
    def key(self) -> Optional[str]:
        if self.exchange is not None:
            return self.exchange.exchange_id
        if self.other is not None:
            return self.other.exchange_id
        return None


@dataclass
class SyncStats:
    """Outcome of one sync run.

    Counters are bumped once per mutation issued against the peer source.
    """

    added: int = 0
    updated: int = 0
    errors: List[str] = field(default_factory=list)
    started_at: datetime = field(default_factory=_utcnow)
    completed_at: Optional[datetime] = None

    def task_added(self) -> None:
        self.added += 1

    def task_updated(self) -> None:
        self.updated += 1

    def record_error(self, message: str) -> None:
        self.errors.append(message)

    def merge(self, other: SyncStats) -> None:
        """Fold the counters and errors of ``other`` into this result."""
        self.added += other.added
        self.updated += other.updated
        self.errors.extend(other.errors)

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.updated)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "added": self.added,
            "updated": self.updated,
            "errors": list(self.errors),
        }

    def summary(self) -> str:
        """Generate a human-readable summary."""
        lines = [
            f"Tasks added: {self.added}",
            f"Tasks updated: {self.updated}",
        ]
        if self.errors:
            lines.append(f"Errors: {len(self.errors)}")
        return "\n".join(lines)


@dataclass
class SyncConfig:
    """Configuration for sync operations."""

    exchange_store_path: Optional[str] = None
    other_store_path: Optional[str] = None
    log_level: str = "INFO"
    log_to_file: bool = True

    def __post_init__(self) -> None:
        if self.exchange_store_path:
            self.exchange_store_path = _normalize_path(self.exchange_store_path)
        if self.other_store_path:
            self.other_store_path = _normalize_path(self.other_store_path)
        self.log_level = (self.log_level or "INFO").upper()

    @property
    def has_stores(self) -> bool:
        return bool(self.exchange_store_path and self.other_store_path)

    # ------------------------------------------------------------------
    # Persistence helpers
    # ------------------------------------------------------------------
    @classmethod
    def load_from_file(cls, config_path: str) -> SyncConfig:
        config_path = _normalize_path(config_path)
        data = safe_read_json(config_path)
        if not isinstance(data, dict):
            logger.warning(f"Ignoring config at {config_path}: expected a JSON object")
            return cls()

        stores = data.get("stores") if isinstance(data.get("stores"), dict) else {}
        logging_settings = data.get("logging") if isinstance(data.get("logging"), dict) else {}

        return cls(
            exchange_store_path=stores.get("exchange"),
            other_store_path=stores.get("other"),
            log_level=logging_settings.get("level", "INFO"),
            log_to_file=logging_settings.get("to_file", True),
        )

    def save_to_file(self, config_path: str) -> None:
        config_path = _normalize_path(config_path)
        data = {
            "stores": {
                "exchange": self.exchange_store_path,
                "other": self.other_store_path,
            },
            "logging": {
                "level": self.log_level,
                "to_file": self.log_to_file,
            },
        }

        write_json(config_path, data)
