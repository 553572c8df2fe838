"""Flask application factory for the roadmap service.

Wires together the services:

- ConfigService: Application configuration (config.yaml)
- PrioritizationConfigService: Scoring weights and keyword tables
- RoadmapPrioritizationService: Phase and task reordering
- TextSummarizer: Extractive document summarization

Usage:
    from src.app import create_app
    app = create_app()
    app.run(port=5050)
"""

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from src.models import AppConfig
from src.routes import register_blueprints
from src.services import (
    PrioritizationConfigService,
    RoadmapPrioritizationService,
    SummaryCache,
    TextSummarizer,
    get_config_service,
)

logger = logging.getLogger(__name__)


def create_app(config_path: str = "config.yaml") -> Flask:
    """Create and configure the Flask application.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Configured Flask application.
    """
    config_service = get_config_service(config_path)
    config = config_service.get_config()

    app = Flask(__name__)
    app.config["TESTING"] = False
    app.config["MAX_CONTENT_LENGTH"] = 10 * 1024 * 1024

    # Store services on app for access in routes
    app.extensions["config"] = config
    app.extensions["config_service"] = config_service

    _init_services(app, config)

    register_blueprints(app)

    @app.route("/api/health")
    def health():
        return jsonify({"status": "ok"})

    _register_error_handlers(app)

    return app


def _init_services(app: Flask, config: AppConfig) -> None:
    """Initialize all services and wire them together.

    Args:
        app: Flask application.
        config: Application configuration.
    """
    prioritization_config = PrioritizationConfigService(config.prioritization_config_path)
    app.extensions["prioritization_config"] = prioritization_config

    app.extensions["prioritization_service"] = RoadmapPrioritizationService(
        config_service=prioritization_config,
    )

    app.extensions["text_summarizer"] = TextSummarizer(
        config=config.summarizer,
        cache=SummaryCache(config.summarizer.cache_capacity),
    )

    logger.info("Services initialized")


def _register_error_handlers(app: Flask) -> None:
    """Return JSON for every error instead of HTML pages."""

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        message = "Not Found" if error.code == 404 else error.description
        return jsonify({"error": message}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        logger.error(f"Unhandled error: {error}")
        return jsonify({"error": str(error)}), 500


def main():
    """Run the Flask application."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = create_app()
    config = app.extensions.get("config")

    port = config.port if config else 5050
    debug = config.debug if config else False

    logger.info(f"Starting roadmap service on port {port}")
    app.run(host="0.0.0.0", port=port, debug=debug, threaded=True)


if __name__ == "__main__":
    main()
