"""Roadmap prioritization service.

Reorders the phases of a roadmap, and the tasks inside each milestone, by
weighted heuristic scores derived from the user's constraints.

Prioritization is a best-effort optimization layered on an already valid
roadmap: any failure returns the original roadmap untouched. The reason is
logged and reported in PrioritizationResult.diagnostics.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from src.models.prioritization import NormalizedConstraints, ProjectConfig, UserConstraints
from src.services.prioritization_config import (
    PrioritizationConfigService,
    get_prioritization_config_service,
)
from src.services.scoring import (
    calculate_weighted_score,
    get_experience_score,
    get_logical_order_score,
    get_risk_score,
    get_scope_score,
    get_task_score,
    get_timeline_score,
    parse_timeline,
    validate_dependencies,
)

logger = logging.getLogger(__name__)

# Prerequisite phases that should come before each dependent phase
DEPENDENCY_RULES: dict[str, list[str]] = {
    "development": ["setup", "planning"],
    "testing": ["development"],
    "deployment": ["testing"],
    "optimization": ["development"],
}

# Small enough to only break near-exact ties
PHASE_ORDER_BIAS = 0.01


class RoadmapValidationError(ValueError):
    """Raised internally when the roadmap or constraints cannot be prioritized."""


@dataclass
class PrioritizationResult:
    """Outcome of a prioritization call."""

    roadmap: Any
    applied: bool
    diagnostics: list[str] = field(default_factory=list)
    dependency_warnings: list[str] = field(default_factory=list)
    factors: dict[str, Any] = field(default_factory=dict)


class RoadmapPrioritizationService:
    """Optimizes the order of phases and tasks in a project roadmap.

    Pipeline: validate, configure, score and sort phases, score and sort
    tasks per milestone, check dependency order (advisory), stamp metadata.
    """

    def __init__(self, config_service: PrioritizationConfigService | None = None):
        """Initialize the service.

        Args:
            config_service: Configuration provider. Uses the global one if not provided.
        """
        self._config = config_service or get_prioritization_config_service()

    @property
    def config_service(self) -> PrioritizationConfigService:
        return self._config

    def prioritize_roadmap(self, roadmap: Any, user_constraints: Any) -> Any:
        """Return a reordered copy of the roadmap, or the original on any failure."""
        return self.prioritize_with_diagnostics(roadmap, user_constraints).roadmap

    def prioritize_with_diagnostics(
        self, roadmap: Any, user_constraints: Any
    ) -> PrioritizationResult:
        """Prioritize and report why changes were or were not applied.

        Args:
            roadmap: Roadmap dict with a non-empty ``phases`` list.
            user_constraints: Dict or UserConstraints with timeline,
                experienceLevel and scope.

        Returns:
            PrioritizationResult. ``roadmap`` is the original object when
            ``applied`` is False.
        """
        try:
            self.validate_inputs(roadmap, user_constraints)

            project_config = self._config.get_project_config(roadmap, user_constraints)
            constraints = self.parse_constraints(user_constraints, project_config)

            phases = self.optimize_phase_order(roadmap["phases"], constraints, project_config)
            phases = self.optimize_task_order(phases, project_config)

            warnings = validate_dependencies(phases, DEPENDENCY_RULES)
            for warning in warnings:
                logger.info(warning)

            metadata = roadmap.get("metadata") or {}
            optimized = {
                **roadmap,
                "phases": phases,
                "metadata": {
                    **metadata,
                    "optimizedAt": datetime.now(timezone.utc).isoformat(),
                    "optimizationFactors": project_config.metadata,
                },
            }
        except Exception as e:
            logger.warning(f"Roadmap prioritization skipped: {e}")
            return PrioritizationResult(
                roadmap=roadmap,
                applied=False,
                diagnostics=[f"{type(e).__name__}: {e}"],
            )

        return PrioritizationResult(
            roadmap=optimized,
            applied=True,
            dependency_warnings=warnings,
            factors=project_config.metadata,
        )

    def validate_inputs(self, roadmap: Any, user_constraints: Any) -> None:
        """Check roadmap shape and constraint presence.

        Raises:
            RoadmapValidationError: If either input is unusable.
        """
        if not isinstance(roadmap, Mapping):
            raise RoadmapValidationError("Invalid roadmap structure")
        phases = roadmap.get("phases")
        if not isinstance(phases, list) or not phases:
            raise RoadmapValidationError("Roadmap phases must be a non-empty list")
        if user_constraints is None:
            raise RoadmapValidationError("User constraints are required")
        if not isinstance(user_constraints, Mapping | UserConstraints):
            raise RoadmapValidationError("User constraints must be an object")

    def parse_constraints(
        self, user_constraints: Any, project_config: ProjectConfig
    ) -> NormalizedConstraints:
        """Normalize constraints: timeline to days, lowercase labels, defaults."""
        if not isinstance(user_constraints, UserConstraints):
            user_constraints = UserConstraints.model_validate(user_constraints)

        return NormalizedConstraints(
            timeline=parse_timeline(user_constraints.timeline, project_config.timeline_parsers),
            experience=(user_constraints.experience_level or "beginner").strip().lower(),
            scope=(user_constraints.scope or "mvp").strip().lower(),
        )

    def optimize_phase_order(
        self,
        phases: list[dict],
        constraints: NormalizedConstraints,
        project_config: ProjectConfig,
    ) -> list[dict]:
        """Sort phases by score (highest first) and renumber ``order`` from 1."""
        scored = [
            (self.calculate_phase_score(phase, constraints, project_config, index), phase)
            for index, phase in enumerate(phases)
        ]
        scored.sort(key=lambda item: item[0], reverse=True)
        return [{**phase, "order": position + 1} for position, (_, phase) in enumerate(scored)]

    def calculate_phase_score(
        self,
        phase: dict,
        constraints: NormalizedConstraints,
        project_config: ProjectConfig,
        original_index: int,
    ) -> float:
        """Weighted sum of the five factor scores plus an order-preserving bias."""
        scores = {
            "logical_order": get_logical_order_score(phase, project_config.phase_patterns),
            "timeline_optimization": get_timeline_score(
                phase, constraints.timeline, project_config.timeline_parsers
            ),
            "experience_alignment": get_experience_score(
                phase, project_config.learning_patterns
            ),
            "scope_relevance": get_scope_score(phase, constraints.scope),
            "risk_assessment": get_risk_score(phase, project_config.risk_matrix),
        }
        weighted = calculate_weighted_score(scores, project_config.weights)
        return weighted + (100 - original_index) * PHASE_ORDER_BIAS

    def optimize_task_order(
        self, phases: list[dict], project_config: ProjectConfig
    ) -> list[dict]:
        """Reorder tasks inside every milestone of every phase."""
        optimized = []
        for phase in phases:
            milestones = phase.get("milestones")
            if not isinstance(milestones, list):
                optimized.append(phase)
                continue
            optimized.append(
                {
                    **phase,
                    "milestones": [
                        self._reorder_milestone(milestone, project_config)
                        for milestone in milestones
                    ],
                }
            )
        return optimized

    def _reorder_milestone(self, milestone: dict, project_config: ProjectConfig) -> dict:
        tasks = milestone.get("tasks")
        if not isinstance(tasks, list):
            return milestone
        return {**milestone, "tasks": self.reorder_tasks(tasks, project_config)}

    def reorder_tasks(self, tasks: list[dict], project_config: ProjectConfig) -> list[dict]:
        """Sort tasks by pattern score; ties keep their original order."""
        scored = [
            (get_task_score(task, project_config.task_patterns, index), task)
            for index, task in enumerate(tasks)
        ]
        scored.sort(key=lambda item: item[0], reverse=True)
        return [task for _, task in scored]


# Module-level singleton
_prioritization_service: RoadmapPrioritizationService | None = None


def get_prioritization_service() -> RoadmapPrioritizationService:
    """Get the global prioritization service."""
    global _prioritization_service
    if _prioritization_service is None:
        _prioritization_service = RoadmapPrioritizationService()
    return _prioritization_service


def reset_prioritization_service() -> None:
    """Reset the global prioritization service (for testing)."""
    global _prioritization_service
    _prioritization_service = None
