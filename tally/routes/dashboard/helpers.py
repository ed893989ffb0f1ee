"""Shared helper functions for dashboard routes."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import pandas as pd
from flask import current_app

from tally.utils.filter_params import FilterParams
from tally.utils.timeseries import GRANULARITIES

_TRUTHY = {"1", "true", "yes", "on"}


def _parse_date(value: str) -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        parsed = pd.to_datetime(value, errors="coerce")
        return parsed.date() if pd.notna(parsed) else None


def _parse_int(value: Optional[str], default: int, minimum: int = 1, maximum: Optional[int] = None) -> int:
    try:
        out = int(value) if value not in (None, "") else default
    except (TypeError, ValueError):
        out = default
    out = max(out, minimum)
    if maximum is not None:
        out = min(out, maximum)
    return out


def _parse_bool(value: Optional[str]) -> bool:
    return str(value or "").strip().lower() in _TRUTHY


def parse_granularity(value: Optional[str]) -> str:
    default = current_app.config.get("DEFAULT_GRANULARITY", "monthly")
    if default not in GRANULARITIES:
        default = "monthly"
    granularity = (value or "").strip().lower()
    return granularity if granularity in GRANULARITIES else default


def build_params(args) -> FilterParams:
    """Build ``FilterParams`` from request args."""
    file_type = (args.get("file_type") or "").strip() or None
    return FilterParams(
        start=_parse_date(args.get("start_date", "")),
        end=_parse_date(args.get("end_date", "")),
        granularity=parse_granularity(args.get("granularity")),
        search=(args.get("q") or "").strip(),
        file_type=file_type,
        metric=args.get("metric") or None,
        fill_gaps=_parse_bool(args.get("fill_gaps")),
    )


__all__ = [
    "_parse_bool",
    "_parse_date",
    "_parse_int",
    "build_params",
    "parse_granularity",
]
