"""
Tests for utility helpers (ex_sync/utils).
"""

import json
from datetime import date, datetime, timedelta, timezone

import pytest

from ex_sync.utils.date import (
    dates_equal, format_date, is_after, parse_date, parse_timestamp
)
from ex_sync.utils.io import read_json, safe_read_json, write_json


class TestDateUtils:
    def test_parse_date_formats(self):
        assert parse_date("2024-04-01") == date(2024, 4, 1)
        assert parse_date("2024-04-01T10:30:00") == date(2024, 4, 1)
        assert parse_date("2024-4-1") == date(2024, 4, 1)
        assert parse_date("") is None
        assert parse_date("garbage") is None

    def test_format_date(self):
        assert format_date(date(2024, 4, 1)) == "2024-04-01"
        assert format_date(None) is None

    def test_parse_timestamp(self):
        assert parse_timestamp("2024-03-02T09:00:00Z") == datetime(2024, 3, 2, 9, tzinfo=timezone.utc)
        existing = datetime(2024, 1, 1)
        assert parse_timestamp(existing) is existing
        assert parse_timestamp(None) is None
        assert parse_timestamp("nope") is None

    def test_is_after_is_strict(self):
        t = datetime(2024, 3, 2, 9, tzinfo=timezone.utc)
        assert is_after(t + timedelta(seconds=1), t)
        assert not is_after(t, t)
        assert not is_after(t - timedelta(seconds=1), t)

    def test_is_after_across_timezones(self):
        utc = datetime(2024, 3, 2, 9, tzinfo=timezone.utc)
        plus_two = datetime(2024, 3, 2, 11, tzinfo=timezone(timedelta(hours=2)))
        assert not is_after(utc, plus_two)
        assert not is_after(plus_two, utc)

    def test_dates_equal_null_safe(self):
        assert dates_equal(None, None)
        assert not dates_equal(date(2024, 1, 1), None)
        assert not dates_equal(None, date(2024, 1, 1))
        assert dates_equal(date(2024, 1, 1), date(2024, 1, 1))
        assert not dates_equal(date(2024, 1, 1), date(2024, 1, 2))


class TestJsonIO:
    def test_write_then_read(self, tmp_path):
        target = tmp_path / "nested" / "doc.json"
        write_json(str(target), {"b": 1, "a": [1, 2]})
        assert read_json(str(target)) == {"a": [1, 2], "b": 1}
        assert not list(target.parent.glob(".tmp_*"))

    def test_read_missing_returns_none(self, tmp_path):
        assert read_json(str(tmp_path / "missing.json")) is None

    def test_read_corrupt_raises(self, tmp_path):
        target = tmp_path / "bad.json"
        target.write_text("{", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            read_json(str(target))

    def test_safe_read_falls_back_to_default(self, tmp_path):
        target = tmp_path / "bad.json"
        target.write_text("{", encoding="utf-8")
        assert safe_read_json(str(target), default={"x": 1}) == {"x": 1}
        assert safe_read_json(str(tmp_path / "missing.json")) == {}

    def test_safe_read_handles_invalid_utf8(self, tmp_path):
        target = tmp_path / "bad.json"
        target.write_bytes(b"\xff\xfe")
        assert safe_read_json(str(target), default={"x": 1}) == {"x": 1}

    def test_failed_write_leaves_target_and_temp_files_absent(self, tmp_path):
        with pytest.raises(TypeError):
            write_json(str(tmp_path / "bad.json"), {"a": object()})
        assert not (tmp_path / "bad.json").exists()
        assert not list(tmp_path.glob(".tmp_*"))
