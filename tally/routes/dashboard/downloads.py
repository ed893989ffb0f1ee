"""Download endpoints for dashboard."""

from __future__ import annotations

import io
from datetime import datetime, timezone

import pandas as pd
from flask import Response, current_app, request

from . import bp, get_datastore
from .helpers import build_params


@bp.route("/download-csv", methods=["GET"])
def download_csv():
    """Download the filtered attachments as CSV."""
    datastore = get_datastore()
    params = build_params(request.args)
    limit = int(current_app.config.get("EXPORT_LIMIT", 5000))

    rows, _ = datastore.fetch_attachments(params, page=1, per_page=limit)
    filtered = pd.DataFrame(rows)

    buf = io.StringIO()
    filtered.to_csv(buf, index=False)
    buf.seek(0)

    ts = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    filename = f"attachments_{ts}.csv"

    return Response(
        buf.getvalue(),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
