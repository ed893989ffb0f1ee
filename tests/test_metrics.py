"""Tests for the per-source metric registry."""

from tally.config import Config
from tally.services.metrics import Metrics
from tally.utils.timeseries import ChartPoint


def _metrics():
    return Metrics(Config.SERIES)


def test_sources_and_labels():
    metrics = _metrics()
    assert set(metrics.sources()) == {"checkins", "attachments", "storage"}
    assert metrics.label("attachments", "total_uploads") == "Uploads"
    assert metrics.label("attachments", "mystery") == "mystery"
    assert metrics.label("attachments", None) == ""


def test_validate():
    metrics = _metrics()
    assert metrics.validate("storage", "total_storage") == "total_storage"
    assert metrics.validate("storage", "total_uploads") is None
    assert metrics.validate("nope", "total_uploads") is None


def test_value_field_counts_checkins():
    metrics = _metrics()
    assert metrics.value_field("checkins", "count") is None
    assert metrics.value_field("attachments", "total_size") == "total_size"


def test_compute_stats():
    stats = Metrics.compute_stats([ChartPoint("2025-01-01", 10), ChartPoint("2025-02-01", 2)])
    assert stats == {"total": 12.0, "peak": 10.0, "average": 6.0, "buckets": 2}


def test_compute_stats_empty():
    assert Metrics.compute_stats([]) == {"total": 0.0, "peak": 0.0, "average": 0.0, "buckets": 0}
