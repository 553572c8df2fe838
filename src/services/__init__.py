"""Services for the roadmap service."""

from src.services.config_service import (
    ConfigService,
    get_config_service,
    reset_config_service,
)
from src.services.prioritization_config import (
    PrioritizationConfigService,
    get_prioritization_config_service,
    reset_prioritization_config_service,
)
from src.services.prioritization_service import (
    PrioritizationResult,
    RoadmapPrioritizationService,
    RoadmapValidationError,
    get_prioritization_service,
    reset_prioritization_service,
)
from src.services.roadmap_validation import (
    RoadmapValidationResult,
    strip_markdown_code_blocks,
    validate_roadmap_content,
)
from src.services.text_summarizer import (
    ScoredSentence,
    SummaryCache,
    TextSummarizer,
    get_text_summarizer,
    reset_text_summarizer,
)

__all__ = [
    "ConfigService",
    "get_config_service",
    "reset_config_service",
    # Prioritization
    "PrioritizationConfigService",
    "get_prioritization_config_service",
    "reset_prioritization_config_service",
    "PrioritizationResult",
    "RoadmapPrioritizationService",
    "RoadmapValidationError",
    "get_prioritization_service",
    "reset_prioritization_service",
    # Roadmap validation
    "RoadmapValidationResult",
    "strip_markdown_code_blocks",
    "validate_roadmap_content",
    # Summarization
    "ScoredSentence",
    "SummaryCache",
    "TextSummarizer",
    "get_text_summarizer",
    "reset_text_summarizer",
]
