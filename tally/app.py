"""Application factory for the Tally dashboard."""

from __future__ import annotations

import logging

from typing import Any, Mapping, Optional, Union

from flask import Flask

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("tally")

from .config import Config
from .routes.dashboard import bp as dashboard_bp
from .services.datastore import DataStore
from .services.metrics import Metrics


def create_app(
    config_object: Optional[Union[str, Mapping[str, Any], type]] = None,
    datastore: Optional[DataStore] = None,
) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(Config)

    if isinstance(config_object, Mapping):
        app.config.from_mapping(config_object)
    elif config_object is not None:
        app.config.from_object(config_object)

    logger.setLevel(str(app.config.get("LOG_LEVEL") or "INFO").upper())

    metrics = Metrics(app.config["SERIES"])
    if datastore is None:
        datastore = DataStore(app.config, metrics)

    app.extensions["metrics"] = metrics
    app.extensions["datastore"] = datastore

    app.register_blueprint(dashboard_bp)

    if not datastore.is_configured():
        logger.warning("Supabase is not configured; data routes will answer 503.")

    return app


__all__ = ["create_app"]
