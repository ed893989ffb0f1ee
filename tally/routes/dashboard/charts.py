"""Chart data endpoints."""

from __future__ import annotations

from typing import Any, Dict, List

from flask import jsonify, request

from . import bp, get_datastore, get_metrics
from .helpers import build_params
from tally.utils.timeseries import (
    aggregate_by_granularity,
    fill_gaps,
    format_bucket_label,
    points_to_dicts,
)


@bp.route("/chart-data", methods=["GET"])
def chart_data():
    """Time-series per metric for one source, bucketed by granularity."""
    datastore = get_datastore()
    metrics = get_metrics()

    source = (request.args.get("source") or "attachments").strip().lower()
    if source not in metrics.sources():
        return jsonify({"error": f"Unknown source: {source}"}), 404

    params = build_params(request.args)
    requested = params.metrics() or [key for key, _ in metrics.available(source)][:1]
    validated = [m for m in requested if metrics.validate(source, m)]

    payload: Dict[str, Any] = {
        "source": source,
        "granularity": params.granularity,
        "metric_labels": {m: metrics.label(source, m) for m in validated},
        "series": {},
        "stats": {},
        "labels": {},
    }
    if not validated:
        return jsonify(payload)

    spec = datastore.series_config(source)
    records = params.apply(datastore.fetch_records(source, params))

    dates: List[str] = []
    for m in validated:
        points = aggregate_by_granularity(
            records,
            params.granularity,
            value_field=metrics.value_field(source, m),
            collapse_days=bool(spec.get("collapse_days")),
        )
        if params.fill_gaps:
            points = fill_gaps(points, params.granularity, params.start, params.end)
        payload["series"][m] = points_to_dicts(points)
        payload["stats"][m] = metrics.compute_stats(points)
        dates.extend(p.date for p in points)

    payload["labels"] = {d: format_bucket_label(d, params.granularity) for d in sorted(set(dates))}
    return jsonify(payload)
