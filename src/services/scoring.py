"""Scoring utilities for roadmap prioritization.

Pure functions that score a phase or task on one factor each, plus the
weighted combination. Every factor returns the neutral score 50 when nothing
in its table matches, so an unrecognized phase neither rises nor sinks.

Phases and tasks are plain roadmap dicts (anything with a ``title`` key or
attribute works).
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any

from src.models.prioritization import PatternRule, RiskProfile, TimelineParser

NEUTRAL_SCORE = 50
DEFAULT_TIMELINE_DAYS = 30

# Phases in the first 30% of the timeline get a 1.2x bonus
EARLY_PHASE_FRACTION = 0.3
EARLY_PHASE_BONUS = 1.2

TASK_ORDER_BIAS = 0.1

BARE_NUMBER = re.compile(r"(\d+)")
CAMEL_BOUNDARY = re.compile(r"([A-Z])")


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def _title(item: Any) -> str:
    return str(_field(item, "title") or "").lower()


def weight_key(factor: str) -> str:
    """Convert a camelCase factor name to the snake_case config key."""
    return CAMEL_BOUNDARY.sub(r"_\1", factor).lower()


def calculate_weighted_score(scores: Mapping[str, float], weights: Mapping[str, float]) -> float:
    """Sum each factor score times its weight.

    The weight is looked up under the snake_case form of the factor name,
    then the raw name. Factors without a weight contribute nothing.
    """
    total = 0.0
    for factor, score in scores.items():
        weight = weights.get(weight_key(factor)) or weights.get(factor) or 0
        total += score * weight
    return total


def get_logical_order_score(phase: Any, phase_patterns: Iterable[PatternRule]) -> float:
    """Score of the first phase pattern matching the title, else neutral."""
    title = _title(phase)
    for pattern in phase_patterns:
        if pattern.matches(title):
            return pattern.score
    return NEUTRAL_SCORE


def get_timeline_score(
    phase: Any, timeline_days: int, timeline_parsers: Iterable[TimelineParser]
) -> float:
    """Favor phases that start early relative to the whole timeline."""
    phase_day = extract_day_from_timeline(_field(phase, "timeline"), timeline_parsers)
    if not phase_day:
        return NEUTRAL_SCORE

    score = max(0, timeline_days - phase_day + 1) * 10
    if phase_day <= timeline_days * EARLY_PHASE_FRACTION:
        return score * EARLY_PHASE_BONUS
    return score


def get_experience_score(phase: Any, learning_pattern: list[str]) -> float:
    """Earlier entries in the learning pattern score higher."""
    title = _title(phase)
    for index, keyword in enumerate(learning_pattern):
        if keyword in title:
            return (len(learning_pattern) - index) * 10
    return NEUTRAL_SCORE


def get_scope_score(phase: Any, scope: str | None) -> float:
    """Score a phase against the project scope."""
    title = _title(phase)
    scope = (scope or "").lower()

    if scope == "mvp":
        if any(word in title for word in ("core", "basic", "foundation")):
            return 100
        if any(word in title for word in ("advanced", "optimization")):
            return 30
        return NEUTRAL_SCORE
    if scope == "full-featured":
        return 70
    if scope == "enterprise-level":
        return 80
    return NEUTRAL_SCORE


def get_risk_score(phase: Any, risk_matrix: Mapping[str, RiskProfile]) -> float:
    """(impact - risk) * 10 for the first keyword found in the title."""
    title = _title(phase)
    for keyword, profile in risk_matrix.items():
        if keyword.lower() in title:
            return (profile.impact - profile.risk) * 10
    return NEUTRAL_SCORE


def get_task_score(task: Any, task_patterns: Iterable[PatternRule], original_index: int) -> float:
    """Score of the first matching task pattern plus a small positional bias."""
    title = _title(task)
    score = 0.0
    for pattern in task_patterns:
        if pattern.matches(title):
            score += pattern.score
            break

    # Earlier tasks win ties
    score += (100 - original_index) * TASK_ORDER_BIAS
    return score


def extract_day_from_timeline(
    timeline: str | None, timeline_parsers: Iterable[TimelineParser]
) -> int | None:
    """Extract a day number from text such as "Week 2" or "Day 5".

    Configured parsers are tried in order; failing those, the first bare
    integer in the text is used.

    Returns:
        Day number, or None if the text holds no number.
    """
    if not timeline:
        return None

    timeline = str(timeline)
    for parser in timeline_parsers:
        days = parser.match(timeline)
        if days is not None:
            return days

    number = BARE_NUMBER.search(timeline)
    if number:
        return int(number.group(1))

    return None


def parse_timeline(timeline: str | None, timeline_parsers: Iterable[TimelineParser]) -> int:
    """Parse a timeline into days, defaulting to 30."""
    days = extract_day_from_timeline(timeline, timeline_parsers)
    return days or DEFAULT_TIMELINE_DAYS


def validate_dependencies(
    phases: list[Any], dependency_rules: Mapping[str, Iterable[str]]
) -> list[str]:
    """Report prerequisites that come after the phase depending on them.

    Phases are located by case-insensitive substring match on their titles.
    Nothing is reordered.

    Returns:
        Warning messages, empty when the order is consistent.
    """
    titles = [_title(phase) for phase in phases]

    def position(keyword: str) -> int:
        for index, title in enumerate(titles):
            if keyword in title:
                return index
        return -1

    warnings = []
    for dependent, prerequisites in dependency_rules.items():
        dependent_index = position(dependent.lower())
        if dependent_index == -1:
            continue
        for prerequisite in prerequisites:
            prerequisite_index = position(prerequisite.lower())
            if prerequisite_index > dependent_index:
                warnings.append(
                    f"Dependency warning: {prerequisite} should come before {dependent}"
                )
    return warnings
