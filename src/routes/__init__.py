"""Flask routes for the roadmap service."""

from src.routes.prioritize import prioritize_bp
from src.routes.roadmaps import roadmaps_bp
from src.routes.summarize import summarize_bp

__all__ = [
    "prioritize_bp",
    "roadmaps_bp",
    "summarize_bp",
]


def register_blueprints(app):
    """Register all blueprints with the Flask app.

    Args:
        app: The Flask application instance.
    """
    app.register_blueprint(prioritize_bp, url_prefix="/api")
    app.register_blueprint(roadmaps_bp, url_prefix="/api")
    app.register_blueprint(summarize_bp, url_prefix="/api")
