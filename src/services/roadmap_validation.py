"""Validation of generated roadmap content before it is saved.

The generator usually wraps its JSON in a ```json fence; the fence is
stripped, the JSON parsed and the result checked against the Roadmap model.
"""

import json
import logging
import re
from dataclasses import dataclass, field

from pydantic import ValidationError

from src.models.roadmap import Roadmap

logger = logging.getLogger(__name__)

OPENING_FENCE = re.compile(r"^```json\s*\n?", re.IGNORECASE)
CLOSING_FENCE = re.compile(r"\n?```\s*$")

ROADMAP_INCOMPLETE = "Roadmap content is incomplete"
INVALID_ROADMAP_CONTENT = "Invalid roadmap content"


@dataclass
class RoadmapValidationResult:
    """Result of validating roadmap content."""

    is_valid: bool = False
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    roadmap: Roadmap | None = None

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "errors": self.errors,
            "warnings": self.warnings,
            "roadmap": self.roadmap.to_json_dict() if self.roadmap else None,
        }


def strip_markdown_code_blocks(content: str) -> str:
    """Remove a leading ```json fence and a trailing ``` fence."""
    if not content or not isinstance(content, str):
        return content
    content = OPENING_FENCE.sub("", content.strip())
    content = CLOSING_FENCE.sub("", content)
    return content.strip()


def format_validation_error(error: dict) -> str:
    path = ".".join(str(part) for part in error["loc"])
    return f"{path}: {error['msg']}" if path else error["msg"]


def validate_roadmap_content(content: str) -> RoadmapValidationResult:
    """Validate raw generator output as a roadmap.

    Args:
        content: JSON text, optionally wrapped in a markdown code fence.

    Returns:
        RoadmapValidationResult with the parsed Roadmap when valid.
    """
    result = RoadmapValidationResult()

    if not content or not isinstance(content, str):
        result.errors.append(ROADMAP_INCOMPLETE)
        return result

    try:
        parsed = json.loads(strip_markdown_code_blocks(content))
    except json.JSONDecodeError as e:
        result.errors.append(f"{INVALID_ROADMAP_CONTENT}: {e}")
        return result

    try:
        result.roadmap = Roadmap.model_validate(parsed)
    except ValidationError as e:
        result.errors = [format_validation_error(error) for error in e.errors()]
        logger.debug(f"Roadmap failed validation with {len(result.errors)} errors")
        return result

    result.is_valid = True

    orders = sorted(phase.order for phase in result.roadmap.phases)
    if orders != list(range(1, len(orders) + 1)):
        result.warnings.append("phases: order is not a contiguous 1-based sequence")

    return result
