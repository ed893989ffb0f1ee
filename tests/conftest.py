# tests/conftest.py
from types import SimpleNamespace

import pytest

from tally.app import create_app
from tally.config import Config
from tally.services.datastore import DataStore
from tally.services.metrics import Metrics


class FakeQuery:
    """Chainable stand-in for a PostgREST query builder; records every call."""

    def __init__(self, table, rows, error=None):
        self.table = table
        self.rows = rows
        self.error = error
        self.calls = []

    def __getattr__(self, name):
        def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self

        return method

    def called(self, name):
        return [(args, kwargs) for n, args, kwargs in self.calls if n == name]

    def execute(self):
        if self.error is not None:
            raise self.error
        return SimpleNamespace(data=list(self.rows), count=len(self.rows))


class FakeClient:
    def __init__(self, tables=None, error=None):
        self.tables = tables or {}
        self.error = error
        self.queries = []

    def table(self, name):
        query = FakeQuery(name, self.tables.get(name, []), error=self.error)
        self.queries.append(query)
        return query

    def last(self, name):
        return [q for q in self.queries if q.table == name][-1]


def base_config(**overrides):
    config = {key: getattr(Config, key) for key in dir(Config) if key.isupper()}
    config.update(overrides)
    return config


DAILY_METRICS = [
    {"date": "2025-01-05", "total_uploads": 3, "unique_users": 2, "total_size": 1024,
     "successful_uploads": 3, "failed_uploads": 0},
    {"date": "2025-01-20", "total_uploads": 7, "unique_users": 5, "total_size": 2048,
     "successful_uploads": 6, "failed_uploads": 1},
    {"date": "2025-02-02", "total_uploads": 1, "unique_users": 1, "total_size": 1024,
     "successful_uploads": 0, "failed_uploads": 1},
]

CHECKINS = [
    {"Id": 1, "StartupName": "Acme", "CheckInTime": "2025-03-01T09:00:00Z",
     "CheckInRole": "founder", "AcceleratorName": "North"},
    {"Id": 2, "StartupName": "Acme", "CheckInTime": "2025-03-01T17:30:00Z",
     "CheckInRole": "cto", "AcceleratorName": "North"},
    {"Id": 3, "StartupName": "Acme Labs", "CheckInTime": "2025-04-12T08:15:00Z",
     "CheckInRole": "founder", "AcceleratorName": "South"},
]

ATTACHMENTS = [
    {"id": 1, "attachment_id": "a1", "user_id": "u1", "file_name": "deck.pdf", "file_type": "pdf",
     "file_size": 1536, "upload_status": "success", "upload_timestamp": "2025-01-05T10:00:00Z",
     "storage_path": "files/deck.pdf"},
    {"id": 2, "attachment_id": "a2", "user_id": "u2", "file_name": "logo.png", "file_type": "png",
     "file_size": 0, "upload_status": "failed", "upload_timestamp": "2025-01-04T10:00:00Z",
     "storage_path": None},
]

FILE_TYPES = [
    {"file_type": "pdf", "count": 10, "total_size": 5000},
    {"file_type": "png", "count": 6, "total_size": 3000},
    {"file_type": "docx", "count": 3, "total_size": 1000},
    {"file_type": "csv", "count": 1, "total_size": 100},
]

USER_ACTIVITY = [
    {"user_id": "u1", "upload_count": 12, "last_activity": "2025-02-01T10:00:00Z"},
    {"user_id": "u2", "upload_count": 4, "last_activity": "2025-01-15T10:00:00Z"},
]

STORAGE = [
    {"date": "2025-01-31", "total_storage": 4096, "storage_growth": 1024},
]

STARTUPS = [
    {"id": 1, "name": "Acme", "industry": "fintech", "founded_date": "2020-01-01",
     "created_at": "2024-05-01T00:00:00Z"},
]


def default_tables():
    return {
        "daily_attachment_metrics": DAILY_METRICS,
        "StartupCheckIns": CHECKINS,
        "attachments": ATTACHMENTS,
        "file_type_distribution": FILE_TYPES,
        "user_activity": USER_ACTIVITY,
        "storage_metrics": STORAGE,
        "startups": STARTUPS,
    }


@pytest.fixture
def fake_client():
    return FakeClient(default_tables())


@pytest.fixture
def datastore(fake_client):
    config = base_config()
    return DataStore(config, Metrics(config["SERIES"]), client=fake_client)


@pytest.fixture
def app(datastore):
    return create_app({"TESTING": True}, datastore=datastore)


@pytest.fixture
def client(app):
    return app.test_client()
