"""Summarization routes.

Provides REST API endpoints for document summarization:
- POST /api/summarize - Summarize text
- GET /api/summarize/cache - Cache statistics
- DELETE /api/summarize/cache - Clear the cache
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from src.services.text_summarizer import TextSummarizer, get_text_summarizer

summarize_bp = Blueprint("summarize", __name__)

logger = logging.getLogger(__name__)


def _get_summarizer() -> TextSummarizer:
    """Get the summarizer from app extensions, or the global one."""
    return current_app.extensions.get("text_summarizer") or get_text_summarizer()


@summarize_bp.route("/summarize", methods=["POST"])
def summarize():
    """Summarize a document or description.

    Request body:
        {"text": "..."}

    Returns:
        JSON object with originalText, summarizedText and isSummarized.
    """
    data = request.get_json(silent=True) or {}
    text = data.get("text")

    if not text or not isinstance(text, str):
        return jsonify({"error": "Text is required"}), 400

    summarized = _get_summarizer().summarize(text)

    return jsonify(
        {
            "success": True,
            "originalText": text,
            "summarizedText": summarized,
            "isSummarized": len(text) > len(summarized),
        }
    )


@summarize_bp.route("/summarize/cache", methods=["GET"])
def cache_stats():
    """Get summary cache statistics."""
    return jsonify(_get_summarizer().get_cache_stats())


@summarize_bp.route("/summarize/cache", methods=["DELETE"])
def clear_cache():
    """Clear the summary cache."""
    summarizer = _get_summarizer()
    cleared = summarizer.get_cache_stats()["size"]
    summarizer.clear_cache()
    logger.info(f"Cleared {cleared} cached summaries")
    return jsonify({"status": "cleared", "entries_cleared": cleared})
