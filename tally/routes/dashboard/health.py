"""Healthcheck endpoint."""

from __future__ import annotations

from flask import jsonify

from . import bp, get_datastore


@bp.route("/health", methods=["GET"])
def health():
    datastore = get_datastore()
    return jsonify({"ok": True, "store_configured": datastore.is_configured()}), 200
