"""Startup search endpoint."""

from __future__ import annotations

from flask import jsonify, request

from . import bp, get_datastore


@bp.route("/startups/search", methods=["GET"])
def search_startups():
    """Startups whose name contains ``q``; a blank query returns nothing."""
    q = (request.args.get("q") or "").strip()
    if not q:
        return jsonify([])
    return jsonify(get_datastore().search_startups(q))
