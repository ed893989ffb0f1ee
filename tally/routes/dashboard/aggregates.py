"""Aggregate chart and summary endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

import pandas as pd
from flask import current_app, jsonify, request

from . import bp, get_datastore, get_metrics
from .helpers import _parse_int, build_params
from tally.utils.filter_params import FilterParams
from tally.utils.formatting import format_bytes
from tally.utils.timeseries import aggregate_by_granularity


def _to_float(value: Any) -> float:
    if value is None:
        return 0.0
    parsed = pd.to_numeric(value, errors="coerce")
    return 0.0 if pd.isna(parsed) else float(parsed)


@bp.route("/pie-data", methods=["GET"])
def pie_data():
    """File type distribution, largest first, with the tail folded into "Other"."""
    datastore = get_datastore()
    rows = datastore.fetch_file_type_distribution()
    if not rows:
        return jsonify({"labels": [], "values": [], "sizes": [], "segment": "file_type"})

    df = pd.DataFrame(rows).dropna(subset=["file_type"])
    for col in ("count", "total_size"):
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0) if col in df.columns else 0.0
    grp = (
        df.groupby(df["file_type"].astype(str))[["count", "total_size"]]
        .sum()
        .sort_values("count", ascending=False, kind="mergesort")
    )

    top_n = int(current_app.config.get("PIE_TOP_N", 8))
    if len(grp) > top_n:
        top = grp.iloc[:top_n]
        rest = grp.iloc[top_n:]
        labels = top.index.tolist() + ["Other"]
        values = [float(v) for v in top["count"]] + [float(rest["count"].sum())]
        sizes = [float(v) for v in top["total_size"]] + [float(rest["total_size"].sum())]
    else:
        labels = grp.index.tolist()
        values = [float(v) for v in grp["count"]]
        sizes = [float(v) for v in grp["total_size"]]

    return jsonify(
        {
            "labels": labels,
            "values": values,
            "sizes": sizes,
            "total_files": float(sum(values)),
            "total_size": format_bytes(sum(sizes)),
            "segment": "file_type",
        }
    )


@bp.route("/bar-data", methods=["GET"])
def bar_data():
    """Top uploaders by upload count."""
    datastore = get_datastore()
    default_limit = int(current_app.config.get("TOP_USERS_LIMIT", 10))
    limit = _parse_int(request.args.get("limit"), default_limit, maximum=100)
    rows = datastore.fetch_user_activity(limit)

    return jsonify(
        {
            "labels": [str(r.get("user_id")) for r in rows],
            "values": [_to_float(r.get("upload_count")) for r in rows],
            "last_activity": [r.get("last_activity") for r in rows],
            "segment": "user_id",
        }
    )


def _range_label(params: FilterParams) -> str:
    if params.start is None:
        if params.end is not None:
            return f"Until {params.end:%b} {params.end.day}, {params.end.year}"
        return "All time"
    start = f"{params.start:%b} {params.start.day}, {params.start.year}"
    end = f"{params.end:%b} {params.end.day}, {params.end.year}" if params.end else "Present"
    return f"{start} - {end}"


@bp.route("/summary", methods=["GET"])
def summary():
    """Headline cards for the selected range and granularity."""
    datastore = get_datastore()
    metrics = get_metrics()
    params = build_params(request.args)
    records = params.apply(datastore.fetch_records("attachments", params))

    def total(field: str) -> Dict[str, Any]:
        points = aggregate_by_granularity(records, params.granularity, value_field=field)
        return metrics.compute_stats(points)

    uploads = total("total_uploads")
    users = total("unique_users")
    storage = total("total_size")
    successful = total("successful_uploads")

    success_rate: Optional[float] = None
    if uploads["total"]:
        success_rate = round(successful["total"] / uploads["total"] * 100, 1)

    latest = datastore.fetch_latest_storage()

    return jsonify(
        {
            "range": _range_label(params),
            "granularity": params.granularity,
            "cards": {
                "total_uploads": uploads["total"],
                "active_users_peak": users["peak"],
                "storage_used": storage["total"],
                "storage_used_display": format_bytes(storage["total"]),
                "success_rate": success_rate,
            },
            "latest_storage": latest,
            "recent": datastore.fetch_recent_metrics(),
        }
    )
