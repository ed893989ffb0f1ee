"""Attachment table endpoints."""

from __future__ import annotations

from flask import current_app, jsonify, request

from . import bp, get_datastore
from .helpers import _parse_int, build_params
from tally.utils.formatting import format_bytes
from tally.utils.pagination import page_window, total_pages


@bp.route("/attachments", methods=["GET"])
def attachments():
    """One page of attachments matching search, file type and date range."""
    datastore = get_datastore()
    params = build_params(request.args)

    page = _parse_int(request.args.get("page"), 1)
    per_page = _parse_int(
        request.args.get("per_page"),
        int(current_app.config.get("PAGE_SIZE", 10)),
        maximum=int(current_app.config.get("MAX_PAGE_SIZE", 100)),
    )

    sort = request.args.get("sort") or "upload_timestamp"
    if sort not in current_app.config["ATTACHMENT_SORT_COLUMNS"]:
        sort = "upload_timestamp"
    direction = "asc" if (request.args.get("direction") or "").lower() == "asc" else "desc"

    rows, count = datastore.fetch_attachments(
        params, page=page, per_page=per_page, sort=sort, descending=direction == "desc"
    )
    pages = total_pages(count, per_page)

    return jsonify(
        {
            "rows": [{**row, "file_size_display": format_bytes(row.get("file_size"))} for row in rows],
            "count": count,
            "page": page,
            "per_page": per_page,
            "pages": pages,
            "page_window": page_window(min(page, pages), pages),
            "sort": sort,
            "direction": direction,
        }
    )


@bp.route("/attachments/file-types", methods=["GET"])
def attachment_file_types():
    datastore = get_datastore()
    return jsonify(datastore.fetch_file_types())
