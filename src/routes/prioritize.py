"""Prioritization routes.

Provides REST API endpoints for roadmap prioritization:
- POST /api/prioritize - Reorder a roadmap for the user's constraints
- POST /api/prioritize/config/reload - Re-read the prioritization config
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from src.services.prioritization_service import (
    RoadmapPrioritizationService,
    get_prioritization_service,
)

prioritize_bp = Blueprint("prioritize", __name__)

logger = logging.getLogger(__name__)


def _get_prioritization_service() -> RoadmapPrioritizationService:
    """Get the prioritization service from app extensions, or the global one."""
    return current_app.extensions.get("prioritization_service") or get_prioritization_service()


@prioritize_bp.route("/prioritize", methods=["POST"])
def prioritize():
    """Optimize the phase and task order of a roadmap.

    Request body:
        {
            "roadmap": {"metadata": {...}, "summary": "...", "phases": [...]},
            "userConstraints": {"timeline": "6 weeks", "experienceLevel": "Beginner",
                                "scope": "MVP"}
        }

    Returns:
        JSON object with optimizedRoadmap. When prioritization could not be
        applied, optimizedRoadmap is the submitted roadmap and diagnostics
        explain why.
    """
    data = request.get_json(silent=True) or {}
    roadmap = data.get("roadmap")
    user_constraints = data.get("userConstraints")

    if roadmap is None or user_constraints is None:
        return jsonify({"error": "Roadmap and user constraints are required"}), 400

    result = _get_prioritization_service().prioritize_with_diagnostics(
        roadmap, user_constraints
    )

    return jsonify(
        {
            "success": True,
            "optimizedRoadmap": result.roadmap,
            "applied": result.applied,
            "diagnostics": result.diagnostics,
            "dependencyWarnings": result.dependency_warnings,
            "message": (
                "Roadmap optimized successfully"
                if result.applied
                else "Roadmap returned unchanged"
            ),
        }
    )


@prioritize_bp.route("/prioritize/config/reload", methods=["POST"])
def reload_config():
    """Reload the prioritization configuration file."""
    config_service = _get_prioritization_service().config_service
    config = config_service.reload_config()
    logger.info("Prioritization config reloaded")

    return jsonify(
        {
            "status": "reloaded",
            "source": str(config_service.config_path) if config_service.config_path else None,
            "projectTypes": list(config.weights),
            "domains": [group.label for group in config.domain_keywords],
        }
    )
