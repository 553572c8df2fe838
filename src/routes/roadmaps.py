"""Roadmap routes.

Provides REST API endpoints for generated roadmaps:
- POST /api/roadmaps/validate - Validate generator output
- POST /api/roadmaps/progress - Task completion progress
"""

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from src.models.roadmap import Roadmap
from src.services.roadmap_validation import format_validation_error, validate_roadmap_content

roadmaps_bp = Blueprint("roadmaps", __name__)


@roadmaps_bp.route("/roadmaps/validate", methods=["POST"])
def validate_roadmap():
    """Validate raw roadmap content.

    Request body:
        {"content": "```json\\n{...}\\n```"}

    Returns:
        JSON object with isValid, errors, warnings and the parsed roadmap.
    """
    data = request.get_json(silent=True) or {}
    content = data.get("content")

    if content is None:
        return jsonify({"error": "Content is required"}), 400

    result = validate_roadmap_content(content)
    return jsonify(result.to_dict())


@roadmaps_bp.route("/roadmaps/progress", methods=["POST"])
def roadmap_progress():
    """Compute overall, per-phase and per-milestone progress.

    Request body:
        {"roadmap": {...}}
    """
    data = request.get_json(silent=True) or {}
    raw = data.get("roadmap")

    if not raw:
        return jsonify({"error": "Roadmap is required"}), 400

    try:
        roadmap = Roadmap.model_validate(raw)
    except ValidationError as e:
        details = [format_validation_error(error) for error in e.errors()]
        return jsonify({"error": "Invalid roadmap", "details": details}), 400

    return jsonify(
        {
            "overall": roadmap.progress_percentage(),
            "phases": [
                {
                    "id": phase.id,
                    "title": phase.title,
                    "percentage": phase.progress_percentage(),
                    "milestones": [
                        {"id": milestone.id, **milestone.progress()}
                        for milestone in phase.milestones
                    ],
                }
                for phase in roadmap.phases
            ],
        }
    )
