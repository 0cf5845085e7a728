"""Shared fixtures for the budget tracker tests."""

from datetime import datetime

import pytest

from budget_tracker.audit import AuditLogger
from budget_tracker.ledger import LedgerService
from budget_tracker.services import InMemoryKeyValueStore, PreferenceService


# Wednesday; its week runs Mon Oct 12 - Sun Oct 18, 2026
WEDNESDAY = datetime(2026, 10, 14, 9, 30)
MONDAY = datetime(2026, 10, 12)


class RecordingLogger:
    """Stands in for a structlog bound logger."""

    def __init__(self):
        self.records = []

    def _record(self, level, event, **kwargs):
        self.records.append((level, event, kwargs))

    def debug(self, event, **kwargs):
        self._record("debug", event, **kwargs)

    def info(self, event, **kwargs):
        self._record("info", event, **kwargs)

    def warning(self, event, **kwargs):
        self._record("warning", event, **kwargs)

    def error(self, event, **kwargs):
        self._record("error", event, **kwargs)

    def event_types(self, level=None):
        return [
            kwargs["event_type"]
            for record_level, _, kwargs in self.records
            if level is None or record_level == level
        ]


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def audit_logger(recording_logger):
    return AuditLogger(logger=recording_logger)


@pytest.fixture
def ledger_service(store, audit_logger):
    return LedgerService(store, audit_logger=audit_logger, ledger_key="budget_data")


@pytest.fixture
def preference_service(store, audit_logger):
    return PreferenceService(store, audit_logger=audit_logger, dark_mode_key="dark_mode_preference")
