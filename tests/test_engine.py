"""
Tests for the sync orchestrator (ex_sync/sync/engine.py).

Each scenario runs a full sync_all pass against fake sources and checks the
mutations issued and the statistics reported.
"""

from unittest.mock import Mock

import pytest

from ex_sync.core.exceptions import SourceError
from ex_sync.core.models import SyncStats
from ex_sync.sync.engine import SyncEngine
from ex_sync.sync.matcher import TaskMatcher
from tests.conftest import D0, D1, T0, T1, T2


@pytest.fixture
def engine(exchange_source, other_source):
    return SyncEngine(exchange_source, other_source)


class TestSyncAll:
    def test_create_on_missing(self, engine, exchange_source, other_source, make_task):
        exchange_source.seed(make_task("E1", last_modified=T1, completed=False))

        stats = engine.sync_all(SyncStats())

        assert other_source.mutation_calls == [("add_task", "E1")]
        assert (stats.added, stats.updated) == (1, 0)
        assert "E1" in other_source.tasks

    def test_no_create_when_completed(self, engine, exchange_source, other_source, make_task):
        exchange_source.seed(make_task("E2", completed=True))

        stats = engine.sync_all(SyncStats())

        assert other_source.mutation_calls == []
        assert exchange_source.mutation_calls == []
        assert (stats.added, stats.updated) == (0, 0)

    def test_update_on_divergence(self, engine, exchange_source, other_source, make_task):
        exchange_source.seed(make_task("E3", last_modified=T2, completed=True, due_date=D1))
        other_source.seed(make_task("E3", last_modified=T1, completed=False, due_date=D0))

        stats = engine.sync_all(SyncStats())

        assert sorted(other_source.mutation_calls) == [
            ("update_completed_flag", "E3"),
            ("update_due_date", "E3"),
        ]
        assert stats.updated == 2
        assert other_source.tasks["E3"].completed is True
        assert other_source.tasks["E3"].due_date == D1

    def test_peer_wins_on_tie(self, engine, exchange_source, other_source, make_task):
        exchange_source.seed(make_task("E4", last_modified=T1, completed=True))
        other_source.seed(make_task("E4", last_modified=T1, completed=False))

        stats = engine.sync_all(SyncStats())

        assert other_source.mutation_calls == []
        assert not stats.has_changes

    def test_reverse_freshness_no_op(self, engine, exchange_source, other_source, make_task):
        exchange_source.seed(make_task("E5", last_modified=T0, completed=True, due_date=D1))
        other_source.seed(make_task("E5", last_modified=T2, completed=False, due_date=D0))

        engine.sync_all(SyncStats())

        assert other_source.mutation_calls == []
        assert exchange_source.mutation_calls == []

    def test_clean_run_is_idempotent(self, engine, exchange_source, other_source, make_task):
        for i in range(3):
            exchange_source.seed(make_task(f"E{i}", last_modified=T1, due_date=D0))
            other_source.seed(make_task(f"E{i}", last_modified=T2, due_date=D0))

        stats = engine.sync_all(SyncStats())

        assert other_source.mutation_calls == []
        assert (stats.added, stats.updated, stats.errors) == (0, 0, [])

    def test_second_pass_after_create_is_clean(self, engine, exchange_source, other_source, make_task):
        exchange_source.seed(make_task("E1", completed=False))
        engine.sync_all(SyncStats())

        stats = engine.sync_all(SyncStats())

        assert stats.added == 0
        assert other_source.mutation_calls == [("add_task", "E1")]

    def test_peer_only_tasks_are_ignored(self, engine, exchange_source, other_source, make_task):
        other_source.seed(make_task("X1"))

        stats = engine.sync_all(SyncStats())

        assert other_source.mutation_calls == []
        assert exchange_source.mutation_calls == []
        assert not stats.has_changes

    def test_mixed_run_aggregates_counts(self, engine, exchange_source, other_source, make_task):
        exchange_source.seed(make_task("A", completed=False))
        exchange_source.seed(make_task("B", completed=True))
        exchange_source.seed(make_task("C", last_modified=T2, completed=True))
        other_source.seed(make_task("C", last_modified=T1, completed=False))

        stats = engine.sync_all(SyncStats())

        assert (stats.added, stats.updated) == (1, 1)
        assert stats.completed_at is not None


class TestStatsSink:
    def test_accumulates_into_given_sink(self, engine, exchange_source, make_task):
        exchange_source.seed(make_task("E1"))
        sink = SyncStats(added=5)

        result = engine.sync_all(sink)

        assert result is sink
        assert sink.added == 6

    def test_creates_sink_when_none_given(self, engine, exchange_source, make_task):
        exchange_source.seed(make_task("E1"))
        assert engine.sync_all().added == 1


class TestFetchFailures:
    def test_exchange_fetch_error_aborts_before_pairing(self, exchange_source, other_source, make_task):
        exchange_source.fetch_error = SourceError("exchange down")
        matcher = Mock(spec=TaskMatcher)
        engine = SyncEngine(exchange_source, other_source, matcher=matcher)

        with pytest.raises(SourceError):
            engine.sync_all(SyncStats())

        matcher.generate_pairs.assert_not_called()
        assert other_source.mutation_calls == []

    def test_other_fetch_error_propagates(self, engine, exchange_source, other_source, make_task):
        exchange_source.seed(make_task("E1"))
        other_source.fetch_error = OSError("disk gone")

        with pytest.raises(OSError):
            engine.sync_all(SyncStats())

        assert other_source.mutation_calls == []


class TestDryRun:
    def test_dry_run_reports_without_mutating(self, exchange_source, other_source, make_task):
        exchange_source.seed(make_task("E1"))
        exchange_source.seed(make_task("E2", last_modified=T2, due_date=D1))
        other_source.seed(make_task("E2", last_modified=T1, due_date=D0))
        engine = SyncEngine(exchange_source, other_source, dry_run=True)

        stats = engine.sync_all()

        assert (stats.added, stats.updated) == (1, 1)
        assert other_source.mutation_calls == []
        assert other_source.tasks["E2"].due_date == D0
        assert "E1" not in other_source.tasks
