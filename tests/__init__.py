"""
Test suite for ex-sync.

This package contains:
- Unit tests for pairing, reconciliation and the sync engine
- Tests for the JSON task store, configuration and CLI
- End-to-end tests against fake and file-backed task sources
"""
