"""Date-range filtering and granularity bucketing for chart series."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, List, Literal, Mapping, Optional, Union

import pandas as pd

logger = logging.getLogger("tally.timeseries")

Granularity = Literal["daily", "monthly", "yearly"]
GRANULARITIES = ("daily", "monthly", "yearly")

TimedRecord = Mapping[str, Any]
ValueField = Union[str, Callable[[TimedRecord], Any], None]

# pandas offset aliases for the first day of each bucket
_BUCKET_FREQ: Dict[str, str] = {"daily": "D", "monthly": "MS", "yearly": "YS"}


@dataclass(frozen=True)
class ChartPoint:
    date: str
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date, "value": self.value}


def parse_record_date(value: Any) -> Optional[date]:
    """Return the calendar date of an ISO date/date-time value, or None.

    Time of day and UTC offset are dropped; the date is the one written in
    the value itself.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    parsed = pd.to_datetime(value.strip(), errors="coerce")
    if parsed is None or pd.isna(parsed):
        return None
    return parsed.date()


def _coerce_value(raw: Any) -> float:
    if raw is None:
        return 0
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, (int, float)):
        return 0 if pd.isna(raw) else raw
    parsed = pd.to_numeric(raw, errors="coerce")
    return 0 if pd.isna(parsed) else float(parsed)


def _value_getter(value_field: ValueField) -> Callable[[TimedRecord], float]:
    if value_field is None:
        return lambda record: 1
    if callable(value_field):
        return lambda record: _coerce_value(value_field(record))
    return lambda record: _coerce_value(record.get(value_field))


def bucket_key(day: date, granularity: str) -> str:
    if granularity == "daily":
        return day.isoformat()
    if granularity == "monthly":
        return f"{day.year:04d}-{day.month:02d}"
    if granularity == "yearly":
        return f"{day.year:04d}"
    raise ValueError(f"Unknown granularity: {granularity!r}")


def bucket_start(key: str, granularity: str) -> str:
    """Canonical ``yyyy-MM-dd`` date for a bucket key."""
    if granularity == "monthly":
        return f"{key}-01"
    if granularity == "yearly":
        return f"{key}-01-01"
    return key


def filter_by_date_range(
    records: Optional[Iterable[TimedRecord]],
    start: Optional[date] = None,
    end: Optional[date] = None,
    date_key: str = "date",
) -> List[TimedRecord]:
    """Keep records whose calendar date lies in ``[start, end]`` (inclusive).

    Either bound may be omitted. With no bounds the records come back
    unchanged. Records whose date cannot be parsed are skipped.
    """
    if not records:
        return []
    if start is None and end is None:
        return list(records)

    out: List[TimedRecord] = []
    skipped = 0
    for record in records:
        day = parse_record_date(record.get(date_key))
        if day is None:
            skipped += 1
            continue
        if start is not None and day < start:
            continue
        if end is not None and day > end:
            continue
        out.append(record)

    if skipped:
        logger.warning("Skipped %d record(s) with unparseable %r", skipped, date_key)
    return out


def aggregate_by_granularity(
    records: Optional[Iterable[TimedRecord]],
    granularity: str,
    value_field: ValueField = "value",
    date_key: str = "date",
    collapse_days: bool = False,
) -> List[ChartPoint]:
    """Bucket records by day, month or year and return sorted chart points.

    ``daily`` maps every record to its own point unless ``collapse_days`` is
    set, in which case same-day records are summed. ``monthly`` and
    ``yearly`` always sum, and each bucket is dated on its first day
    (``yyyy-MM-01`` / ``yyyy-01-01``). Output is ascending by date; ties keep
    input order.

    ``value_field`` is a field name, a callable taking the record, or None
    to count records. Missing or non-numeric values count as 0. Records with
    an unparseable date are logged and skipped.
    """
    if granularity not in GRANULARITIES:
        raise ValueError(f"Unknown granularity: {granularity!r}")
    if not records:
        return []

    get_value = _value_getter(value_field)
    points: List[ChartPoint] = []
    buckets: Dict[str, float] = defaultdict(int)
    passthrough = granularity == "daily" and not collapse_days
    skipped = 0

    for record in records:
        day = parse_record_date(record.get(date_key))
        if day is None:
            skipped += 1
            continue
        if passthrough:
            points.append(ChartPoint(date=day.isoformat(), value=get_value(record)))
        else:
            buckets[bucket_key(day, granularity)] += get_value(record)

    if skipped:
        logger.warning(
            "Skipped %d record(s) with unparseable %r during %s aggregation",
            skipped,
            date_key,
            granularity,
        )

    if not passthrough:
        points = [
            ChartPoint(date=bucket_start(key, granularity), value=value)
            for key, value in buckets.items()
        ]

    return sorted(points, key=lambda point: point.date)


def fill_gaps(
    points: List[ChartPoint],
    granularity: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[ChartPoint]:
    """Insert zero-valued points for buckets with no data.

    The timeline runs from the earlier of ``start`` and the first point to
    the later of ``end`` and the last point. Existing points are kept as they
    are, so uncollapsed daily duplicates survive.
    """
    if granularity not in GRANULARITIES:
        raise ValueError(f"Unknown granularity: {granularity!r}")

    bounds = [date.fromisoformat(p.date) for p in points]
    if start is not None:
        bounds.append(start)
    if end is not None:
        bounds.append(end)
    if not bounds:
        return []

    first = bucket_start(bucket_key(min(bounds), granularity), granularity)
    last = bucket_start(bucket_key(max(bounds), granularity), granularity)

    present = {p.date for p in points}
    filled = list(points)
    for ts in pd.date_range(start=first, end=last, freq=_BUCKET_FREQ[granularity]):
        day = ts.date().isoformat()
        if day not in present:
            filled.append(ChartPoint(date=day, value=0))

    return sorted(filled, key=lambda point: point.date)


def format_bucket_label(date_str: str, granularity: str, long: bool = False) -> str:
    """Human label for a bucket date, e.g. ``Jan 2025`` or ``January 2025``."""
    day = parse_record_date(date_str)
    if day is None:
        return date_str
    if granularity == "yearly":
        return f"{day.year}"
    if granularity == "monthly":
        return day.strftime("%B %Y" if long else "%b %Y")
    if long:
        return f"{day:%B} {day.day}, {day.year}"
    return f"{day:%b} {day.day}"


def points_to_dicts(points: Iterable[ChartPoint]) -> List[Dict[str, Any]]:
    return [point.to_dict() for point in points]


__all__ = [
    "ChartPoint",
    "GRANULARITIES",
    "Granularity",
    "TimedRecord",
    "aggregate_by_granularity",
    "bucket_key",
    "bucket_start",
    "filter_by_date_range",
    "fill_gaps",
    "format_bucket_label",
    "parse_record_date",
    "points_to_dicts",
]
