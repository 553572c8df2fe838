"""Prioritization configuration provider.

Loads the scoring tables once from an external YAML or JSON file, falling
back to the built-in defaults, and resolves a per-roadmap ProjectConfig by
detecting the project type and domain from the roadmap text.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any

import yaml

from src.models.prioritization import (
    KeywordGroup,
    PatternRule,
    PrioritizationConfig,
    ProjectConfig,
    RiskProfile,
    TimelineParser,
)

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_TYPE = "default"
DEFAULT_DOMAIN = "web-app"
DEFAULT_EXPERIENCE = "beginner"


def roadmap_text(roadmap: Any) -> str:
    """Serialize a roadmap to a lowercase text blob for keyword scans."""
    if hasattr(roadmap, "model_dump"):
        roadmap = roadmap.model_dump(mode="json", by_alias=True)
    return json.dumps(roadmap, default=str, ensure_ascii=False).lower()


def _first_matching_group(text: str, groups: list[KeywordGroup]) -> str | None:
    # Keywords must start a word, so "basics" matches "basic" but "html" never matches "ml"
    for group in groups:
        for keyword in group.keywords:
            if re.search(rf"\b{re.escape(keyword.lower())}", text):
                return group.label
    return None


class PrioritizationConfigService:
    """Supplies weights, risk matrices and keyword tables to the engine.

    Lookups never raise: an unknown project type, domain or experience
    level falls back to the default table entry.
    """

    def __init__(self, config_path: str | Path | None = None):
        """Initialize and load configuration.

        Args:
            config_path: YAML or JSON file. None uses built-in defaults only.
        """
        self.config_path = Path(config_path) if config_path else None
        self.config = self.load_config()

    def load_config(self) -> PrioritizationConfig:
        """Load configuration from the external file with fallback to defaults."""
        if self.config_path is None:
            return PrioritizationConfig()

        if not self.config_path.exists():
            logger.warning(
                f"Prioritization config not found at {self.config_path}, using defaults"
            )
            return PrioritizationConfig()

        try:
            with open(self.config_path, encoding="utf-8") as f:
                if self.config_path.suffix.lower() == ".json":
                    raw = json.load(f)
                else:
                    raw = yaml.safe_load(f)
        except Exception as e:
            logger.warning(f"Failed to load prioritization config, using defaults: {e}")
            return PrioritizationConfig()

        if raw is None:
            return PrioritizationConfig()

        try:
            return PrioritizationConfig.model_validate(raw)
        except Exception as e:
            logger.warning(f"Invalid prioritization config, using defaults: {e}")
            return PrioritizationConfig()

    def reload_config(self) -> PrioritizationConfig:
        """Re-read the external configuration."""
        self.config = self.load_config()
        return self.config

    def detect_project_type(self, roadmap: Any) -> str:
        """Detect mvp / full-featured / enterprise-level / default.

        Indicator groups are checked in configured order; the first group
        with a keyword present wins.
        """
        text = roadmap_text(roadmap)
        return _first_matching_group(text, self.config.project_types) or DEFAULT_PROJECT_TYPE

    def detect_domain(self, roadmap: Any) -> str:
        """Detect mobile-app / ai-project / web-app, defaulting to web-app."""
        text = roadmap_text(roadmap)
        return _first_matching_group(text, self.config.domain_keywords) or DEFAULT_DOMAIN

    def get_weights(self, project_type: str = DEFAULT_PROJECT_TYPE) -> dict[str, float]:
        return self.config.weights.get(project_type) or self.config.weights["default"]

    def get_risk_matrix(self, domain: str = DEFAULT_DOMAIN) -> dict[str, RiskProfile]:
        return self.config.risk_matrices.get(domain) or self.config.risk_matrices[DEFAULT_DOMAIN]

    def get_learning_patterns(self, experience_level: str | None = DEFAULT_EXPERIENCE) -> list[str]:
        level = (experience_level or DEFAULT_EXPERIENCE).strip().lower()
        patterns = self.config.learning_patterns
        return patterns.get(level) or patterns[DEFAULT_EXPERIENCE]

    def get_timeline_parsers(self) -> list[TimelineParser]:
        return self.config.timeline_parsers

    def get_task_patterns(self) -> list[PatternRule]:
        return self.config.task_patterns

    def get_phase_patterns(self) -> list[PatternRule]:
        return self.config.phase_patterns

    def get_project_config(self, roadmap: Any, user_constraints: Any) -> ProjectConfig:
        """Compose the full configuration for one roadmap.

        Args:
            roadmap: Roadmap dict (or model) to analyze.
            user_constraints: Constraint dict or UserConstraints model.

        Returns:
            ProjectConfig with detection metadata recorded for audit.
        """
        project_type = self.detect_project_type(roadmap)
        domain = self.detect_domain(roadmap)

        if hasattr(user_constraints, "model_dump"):
            applied = user_constraints.model_dump(by_alias=True)
        else:
            applied = dict(user_constraints or {})

        return ProjectConfig(
            weights=self.get_weights(project_type),
            risk_matrix=self.get_risk_matrix(domain),
            learning_patterns=self.get_learning_patterns(
                applied.get("experienceLevel") or applied.get("experience_level")
            ),
            timeline_parsers=self.get_timeline_parsers(),
            task_patterns=self.get_task_patterns(),
            phase_patterns=self.get_phase_patterns(),
            metadata={
                "detectedProjectType": project_type,
                "detectedDomain": domain,
                "appliedConstraints": applied,
            },
        )


# Module-level singleton
_prioritization_config_service: PrioritizationConfigService | None = None


def get_prioritization_config_service(
    config_path: str | Path | None = None,
) -> PrioritizationConfigService:
    """Get the global prioritization config service.

    Args:
        config_path: Config file (only used on first call).
    """
    global _prioritization_config_service
    if _prioritization_config_service is None:
        _prioritization_config_service = PrioritizationConfigService(config_path)
    return _prioritization_config_service


def reset_prioritization_config_service() -> None:
    """Reset the global prioritization config service (for testing)."""
    global _prioritization_config_service
    _prioritization_config_service = None
