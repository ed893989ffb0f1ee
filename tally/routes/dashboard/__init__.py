"""Dashboard blueprint package."""

from __future__ import annotations

from flask import Blueprint, jsonify

from tally.services.datastore import DataStoreError

bp = Blueprint("dashboard", __name__)

RETRY_MESSAGE = "Failed to load data. Please try again later."


def get_metrics():
    from flask import current_app

    return current_app.extensions["metrics"]


def get_datastore():
    from flask import current_app

    return current_app.extensions["datastore"]


@bp.errorhandler(DataStoreError)
def datastore_unavailable(exc: DataStoreError):
    return jsonify({"error": RETRY_MESSAGE}), 503


from . import aggregates, attachments, charts, downloads, health, startups  # noqa: E402,F401

__all__ = ["bp", "get_metrics", "get_datastore", "RETRY_MESSAGE"]
