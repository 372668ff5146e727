"""Flask application factory."""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS
from redis import Redis
from rq import Queue

from ..config import QUEUE_CONFIG
from ..pipelines import LocatorPipeline
from .routes import api_bp

logger = logging.getLogger(__name__)


def create_app(
    *,
    pipeline: Optional[LocatorPipeline] = None,
    redis_connection: Optional[Redis] = None,
) -> Flask:
    """Create and configure the Flask application."""

    app = Flask(__name__)
    app.json.sort_keys = False

    CORS(app)
    app.register_blueprint(api_bp, url_prefix="/api")

    redis_connection = redis_connection or Redis.from_url(QUEUE_CONFIG.redis_url)
    queue = Queue(
        name=QUEUE_CONFIG.queue_name,
        connection=redis_connection,
        default_timeout=QUEUE_CONFIG.default_timeout,
    )
    app.extensions["rq"] = {"queue": queue, "connection": redis_connection}
    app.extensions["puja_locator"] = {
        "pipeline": pipeline or LocatorPipeline.default(redis_connection),
    }

    @app.get("/health")
    def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    logger.info("Flask application initialised")
    return app
