"""
Utility functions for ex-sync.
"""

from .io import read_json, write_json, safe_read_json
from .date import (
    parse_date, format_date, parse_timestamp, format_timestamp,
    is_after, dates_equal
)

__all__ = [
    # I/O utilities
    'read_json',
    'write_json',
    'safe_read_json',
    # Date utilities
    'parse_date',
    'format_date',
    'parse_timestamp',
    'format_timestamp',
    'is_after',
    'dates_equal',
]
