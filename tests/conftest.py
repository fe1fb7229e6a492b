#!/usr/bin/env python3
"""
Global pytest configuration and fixtures.

This module provides:
- Isolation of the ex-sync working directory per test
- Task record factories and fixed timestamps
- Fake task sources for engine tests
"""

import os
import sys
from datetime import date, datetime, timezone
from typing import Callable

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ex_sync.core.models import TaskRecord
from ex_sync.core.paths import reset_path_manager
from tests.e2e.fake_task_source import FakeTaskSource


T0 = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
T1 = datetime(2024, 3, 2, 9, 0, tzinfo=timezone.utc)
T2 = datetime(2024, 3, 3, 9, 0, tzinfo=timezone.utc)

D0 = date(2024, 4, 1)
D1 = date(2024, 4, 15)


def pytest_configure(config):
    """Configure pytest environment."""
    config.addinivalue_line("markers", "e2e: end-to-end tests against fake task sources")


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point EX_SYNC_HOME at a temp directory for every test."""
    home = tmp_path / "ex-sync-home"
    monkeypatch.setenv("EX_SYNC_HOME", str(home))
    reset_path_manager()
    yield home
    reset_path_manager()


@pytest.fixture
def make_task() -> Callable[..., TaskRecord]:
    """Factory for TaskRecord with sensible defaults."""
    def _make(exchange_id: str = "E1", last_modified: datetime = T1, **kwargs) -> TaskRecord:
        kwargs.setdefault("title", f"Task {exchange_id}")
        return TaskRecord(exchange_id=exchange_id, last_modified=last_modified, **kwargs)

    return _make


@pytest.fixture
def exchange_source() -> FakeTaskSource:
    return FakeTaskSource(name="exchange")


@pytest.fixture
def other_source() -> FakeTaskSource:
    return FakeTaskSource(name="other")
