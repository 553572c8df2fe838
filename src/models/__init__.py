"""Domain models for the roadmap service."""

from src.models.config import AppConfig, SummarizerConfig
from src.models.prioritization import (
    KeywordGroup,
    NormalizedConstraints,
    PatternRule,
    PrioritizationConfig,
    ProjectConfig,
    RiskProfile,
    TimelineParser,
    UserConstraints,
)
from src.models.roadmap import (
    Milestone,
    Phase,
    Resource,
    Roadmap,
    RoadmapMetadata,
    Task,
    TaskStatus,
)

__all__ = [
    # Config
    "AppConfig",
    "SummarizerConfig",
    # Prioritization
    "KeywordGroup",
    "NormalizedConstraints",
    "PatternRule",
    "PrioritizationConfig",
    "ProjectConfig",
    "RiskProfile",
    "TimelineParser",
    "UserConstraints",
    # Roadmap
    "Milestone",
    "Phase",
    "Resource",
    "Roadmap",
    "RoadmapMetadata",
    "Task",
    "TaskStatus",
]
