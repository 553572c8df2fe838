"""Prioritization configuration models with Pydantic validation.

The pattern tables are ordered lists rather than mappings: the first entry
whose keywords match wins, so list order is the precedence order.
"""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator


class PatternRule(BaseModel):
    """A keyword category used to score phase or task titles."""

    category: str = Field(..., description="Category name (setup, development, ...)")
    keywords: list[str] = Field(
        default_factory=list,
        description="Lowercase substrings that select this category",
    )
    score: float = Field(..., description="Score assigned on match")

    @field_validator("keywords")
    @classmethod
    def _lowercase_keywords(cls, value: list[str]) -> list[str]:
        return [k.lower() for k in value]

    def matches(self, text: str) -> bool:
        """Check whether any keyword occurs in the (lowercased) text."""
        lowered = text.lower()
        return any(keyword in lowered for keyword in self.keywords)


class TimelineParser(BaseModel):
    """A unit pattern for turning timeline text into a day count."""

    unit: str = Field(..., description="Unit name (day, week, month, year)")
    pattern: str = Field(..., description="Regex with the number as group 1")
    multiplier: int = Field(default=1, ge=1, description="Days per unit")

    _regex: re.Pattern = PrivateAttr()

    @field_validator("pattern")
    @classmethod
    def _strip_delimiters(cls, value: str) -> str:
        # Older config files store patterns as "/day[s]? (\d+)/i"
        match = re.fullmatch(r"/(.*)/[a-z]*", value)
        return match.group(1) if match else value

    def model_post_init(self, __context: Any) -> None:
        self._regex = re.compile(self.pattern, re.IGNORECASE)

    def match(self, text: str) -> int | None:
        """Return the matched number multiplied into days, or None."""
        found = self._regex.search(text)
        if not found:
            return None
        return int(found.group(1)) * self.multiplier


class RiskProfile(BaseModel):
    """Risk characteristics of a phase keyword."""

    risk: int = Field(default=1, ge=0)
    impact: int = Field(default=1, ge=0)
    complexity: int = Field(default=1, ge=0)


class KeywordGroup(BaseModel):
    """A label detected when any of its keywords appears in roadmap text."""

    label: str
    keywords: list[str] = Field(default_factory=list)


def _default_weights() -> dict[str, dict[str, float]]:
    return {
        "default": {
            "logical_order": 0.35,
            "timeline_optimization": 0.25,
            "experience_alignment": 0.20,
            "scope_relevance": 0.15,
            "risk_assessment": 0.05,
        }
    }


def _default_project_types() -> list[KeywordGroup]:
    return [
        KeywordGroup(
            label="enterprise-level",
            keywords=["enterprise", "scalable", "microservices", "distributed"],
        ),
        KeywordGroup(
            label="mvp",
            keywords=["mvp", "minimum viable", "core features", "basic"],
        ),
        KeywordGroup(
            label="full-featured",
            keywords=["full", "complete", "advanced features", "comprehensive"],
        ),
    ]


def _default_domains() -> list[KeywordGroup]:
    return [
        KeywordGroup(
            label="mobile-app",
            keywords=[
                "react native", "flutter", "ios", "android", "mobile", "app store",
                "xcode", "android studio", "swift", "kotlin", "mobile app", "native app",
            ],
        ),
        KeywordGroup(
            label="ai-project",
            keywords=[
                "tensorflow", "pytorch", "machine learning", "ml", "ai", "neural",
                "model training", "data science", "deep learning",
                "artificial intelligence", "natural language processing", "nlp",
                "computer vision", "cv",
            ],
        ),
        KeywordGroup(
            label="web-app",
            keywords=[
                "react", "angular", "vue", "node.js", "express", "frontend", "backend",
                "api", "javascript", "html", "css", "web app", "website",
                "web application",
            ],
        ),
    ]


def _default_risk_matrices() -> dict[str, dict[str, RiskProfile]]:
    return {
        "web-app": {
            "setup": RiskProfile(risk=1, impact=3, complexity=1),
            "development": RiskProfile(risk=2, impact=3, complexity=2),
            "deployment": RiskProfile(risk=2, impact=3, complexity=2),
        }
    }


def _default_learning_patterns() -> dict[str, list[str]]:
    return {
        "beginner": ["foundation", "basic-concepts", "testing", "deployment"],
        "intermediate": ["foundation", "development", "testing", "deployment"],
        "advanced": ["foundation", "development", "optimization", "deployment"],
        "expert": ["foundation", "development", "optimization", "deployment"],
    }


def _default_timeline_parsers() -> list[TimelineParser]:
    return [
        TimelineParser(unit="day", pattern=r"day[s]? (\d+)", multiplier=1),
        TimelineParser(unit="week", pattern=r"week[s]? (\d+)", multiplier=7),
        TimelineParser(unit="month", pattern=r"month[s]? (\d+)", multiplier=30),
        TimelineParser(unit="year", pattern=r"year[s]? (\d+)", multiplier=365),
        TimelineParser(unit="days", pattern=r"(\d+)\s*days?\b", multiplier=1),
        TimelineParser(unit="weeks", pattern=r"(\d+)\s*weeks?\b", multiplier=7),
        TimelineParser(unit="months", pattern=r"(\d+)\s*months?\b", multiplier=30),
        TimelineParser(unit="years", pattern=r"(\d+)\s*years?\b", multiplier=365),
    ]


def _default_task_patterns() -> list[PatternRule]:
    return [
        PatternRule(category="setup", keywords=["setup", "install", "configure"], score=100),
        PatternRule(category="development", keywords=["development", "build", "create"], score=80),
        PatternRule(category="testing", keywords=["testing", "test"], score=60),
        PatternRule(category="deployment", keywords=["deploy", "deployment"], score=40),
    ]


def _default_phase_patterns() -> list[PatternRule]:
    return [
        PatternRule(category="setup", keywords=["setup", "planning", "foundation"], score=100),
        PatternRule(
            category="development",
            keywords=["development", "build", "implementation"],
            score=80,
        ),
        PatternRule(category="testing", keywords=["testing", "test", "deploy"], score=60),
        PatternRule(
            category="documentation",
            keywords=["documentation", "maintenance"],
            score=40,
        ),
    ]


class PrioritizationConfig(BaseModel):
    """Scoring tables used by the prioritization engine.

    The default instance is the built-in configuration. An external YAML or
    JSON file may override any section; omitted sections keep their defaults.
    """

    weights: dict[str, dict[str, float]] = Field(
        default_factory=_default_weights,
        description="Factor weights keyed by project type ('default' required)",
    )
    project_types: list[KeywordGroup] = Field(
        default_factory=_default_project_types,
        description="Project type indicators in precedence order",
    )
    domain_keywords: list[KeywordGroup] = Field(
        default_factory=_default_domains,
        description="Domain indicators in precedence order",
    )
    risk_matrices: dict[str, dict[str, RiskProfile]] = Field(
        default_factory=_default_risk_matrices,
        description="Risk profiles keyed by domain, then phase keyword",
    )
    learning_patterns: dict[str, list[str]] = Field(
        default_factory=_default_learning_patterns,
        description="Learning order per experience level",
    )
    timeline_parsers: list[TimelineParser] = Field(
        default_factory=_default_timeline_parsers,
        description="Timeline unit patterns, tried in order",
    )
    task_patterns: list[PatternRule] = Field(
        default_factory=_default_task_patterns,
        description="Task categories, first match wins",
    )
    phase_patterns: list[PatternRule] = Field(
        default_factory=_default_phase_patterns,
        description="Phase categories, first match wins",
    )

    @field_validator("weights")
    @classmethod
    def _require_default_weights(
        cls, value: dict[str, dict[str, float]]
    ) -> dict[str, dict[str, float]]:
        if "default" not in value:
            value = {**_default_weights(), **value}
        return value

    @field_validator("risk_matrices")
    @classmethod
    def _require_web_app_matrix(
        cls, value: dict[str, dict[str, RiskProfile]]
    ) -> dict[str, dict[str, RiskProfile]]:
        if "web-app" not in value:
            value = {**_default_risk_matrices(), **value}
        return value

    @field_validator("learning_patterns")
    @classmethod
    def _require_beginner_pattern(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        value = {level.lower(): [k.lower() for k in keywords] for level, keywords in value.items()}
        if "beginner" not in value:
            value["beginner"] = _default_learning_patterns()["beginner"]
        return value


class UserConstraints(BaseModel):
    """Constraints entered by the user on the project form."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    timeline: str | int | None = Field(default=None, description="Free text, e.g. '6 weeks'")
    experience_level: str | None = Field(
        default=None,
        alias="experienceLevel",
        description="beginner, intermediate, advanced or expert",
    )
    scope: str | None = Field(
        default=None,
        description="mvp, full-featured or enterprise-level",
    )


class NormalizedConstraints(BaseModel):
    """User constraints after parsing and defaulting."""

    timeline: int = Field(default=30, description="Total timeline in days")
    experience: str = Field(default="beginner")
    scope: str = Field(default="mvp")


class ProjectConfig(BaseModel):
    """Per-call configuration resolved for one roadmap.

    Lives only for the duration of a single prioritization call.
    """

    weights: dict[str, float]
    risk_matrix: dict[str, RiskProfile]
    learning_patterns: list[str]
    timeline_parsers: list[TimelineParser]
    task_patterns: list[PatternRule]
    phase_patterns: list[PatternRule]
    metadata: dict[str, Any] = Field(default_factory=dict)
