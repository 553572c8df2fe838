"""Tests for RoadmapPrioritizationService."""

import logging
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from src.models.prioritization import UserConstraints
from src.services.prioritization_config import PrioritizationConfigService
from src.services.prioritization_service import (
    RoadmapPrioritizationService,
    RoadmapValidationError,
    get_prioritization_service,
)


@pytest.fixture
def service():
    """Prioritization service on built-in configuration."""
    return RoadmapPrioritizationService(config_service=PrioritizationConfigService())


def phase_ids(roadmap):
    return [phase["id"] for phase in roadmap["phases"]]


def task_ids(phase):
    return [task["id"] for task in phase["milestones"][0]["tasks"]]


class TestFailSoft:
    """Invalid input returns the original roadmap untouched."""

    def test_missing_constraints(self, service, sample_roadmap, frozen_roadmap):
        """None constraints return the exact input object."""
        result = service.prioritize_roadmap(sample_roadmap, None)

        assert result is sample_roadmap
        assert result == frozen_roadmap

    def test_phases_not_a_list(self, service):
        """A non-list phases value is returned unchanged."""
        roadmap = {"phases": "not-an-array"}

        result = service.prioritize_roadmap(roadmap, {})

        assert result is roadmap
        assert result == {"phases": "not-an-array"}

    def test_empty_phases(self, service):
        """An empty phase list is not prioritized."""
        roadmap = {"phases": []}
        assert service.prioritize_roadmap(roadmap, {"scope": "mvp"}) is roadmap

    def test_non_mapping_roadmap(self, service):
        """Non-dict roadmaps are returned as-is."""
        assert service.prioritize_roadmap("roadmap", {}) == "roadmap"
        assert service.prioritize_roadmap(None, {}) is None

    def test_non_mapping_constraints(self, service, sample_roadmap):
        """Constraints must be an object."""
        assert service.prioritize_roadmap(sample_roadmap, ["mvp"]) is sample_roadmap

    def test_diagnostics_explain_failure(self, service, sample_roadmap, caplog):
        """The failure reason is logged and reported."""
        result = service.prioritize_with_diagnostics(sample_roadmap, None)

        assert result.applied is False
        assert result.roadmap is sample_roadmap
        assert result.diagnostics == [
            "RoadmapValidationError: User constraints are required"
        ]
        assert "prioritization skipped" in caplog.text

    def test_internal_error_is_contained(self, sample_roadmap, sample_constraints):
        """Unexpected errors from collaborators never escape."""
        config_service = MagicMock()
        config_service.get_project_config.side_effect = RuntimeError("boom")
        service = RoadmapPrioritizationService(config_service=config_service)

        result = service.prioritize_with_diagnostics(sample_roadmap, sample_constraints)

        assert result.applied is False
        assert result.roadmap is sample_roadmap
        assert result.diagnostics == ["RuntimeError: boom"]


class TestValidateInputs:
    """Tests for validate_inputs."""

    def test_accepts_empty_constraints(self, service, sample_roadmap):
        """An empty constraint object is valid."""
        service.validate_inputs(sample_roadmap, {})

    def test_accepts_model_constraints(self, service, sample_roadmap):
        """UserConstraints models are valid."""
        service.validate_inputs(sample_roadmap, UserConstraints(scope="mvp"))

    def test_rejects_missing_phases(self, service):
        """Missing phases raise."""
        with pytest.raises(RoadmapValidationError):
            service.validate_inputs({"summary": "x"}, {})


class TestParseConstraints:
    """Tests for parse_constraints."""

    def test_normalizes_form_values(self, service, sample_roadmap, sample_constraints):
        """Timeline becomes days and labels are lowercased."""
        project_config = service.config_service.get_project_config(
            sample_roadmap, sample_constraints
        )

        constraints = service.parse_constraints(sample_constraints, project_config)

        assert constraints.timeline == 42
        assert constraints.experience == "beginner"
        assert constraints.scope == "mvp"

    def test_defaults(self, service, sample_roadmap):
        """Missing values fall back to 30 days, beginner and mvp."""
        project_config = service.config_service.get_project_config(sample_roadmap, {})

        constraints = service.parse_constraints({}, project_config)

        assert constraints.timeline == 30
        assert constraints.experience == "beginner"
        assert constraints.scope == "mvp"


class TestPrioritizeRoadmap:
    """Tests for the full prioritization pipeline."""

    def test_phase_order(self, service, sample_roadmap, sample_constraints):
        """Setup first, then development, then testing."""
        result = service.prioritize_roadmap(sample_roadmap, sample_constraints)

        assert phase_ids(result) == ["phase-1", "phase-2", "phase-3"]

    def test_order_field_is_renumbered(self, service, sample_roadmap, sample_constraints):
        """phases[i].order == i + 1."""
        result = service.prioritize_roadmap(sample_roadmap, sample_constraints)

        for index, phase in enumerate(result["phases"]):
            assert phase["order"] == index + 1

    def test_phase_set_is_preserved(self, service, sample_roadmap, sample_constraints):
        """No phase is added or dropped."""
        result = service.prioritize_roadmap(sample_roadmap, sample_constraints)

        assert sorted(phase_ids(result)) == sorted(phase_ids(sample_roadmap))

    def test_task_order(self, service, sample_roadmap, sample_constraints):
        """Tasks are reordered within each milestone."""
        result = service.prioritize_roadmap(sample_roadmap, sample_constraints)
        phases = {phase["id"]: phase for phase in result["phases"]}

        assert task_ids(phases["phase-1"]) == ["t-2", "t-1"]
        assert task_ids(phases["phase-2"]) == ["t-4", "t-3"]
        assert task_ids(phases["phase-3"]) == ["t-6", "t-5"]

    def test_tasks_stay_in_their_milestone(self, service, sample_roadmap, sample_constraints):
        """Task sets per milestone are unchanged."""
        result = service.prioritize_roadmap(sample_roadmap, sample_constraints)
        original = {phase["id"]: set(task_ids(phase)) for phase in sample_roadmap["phases"]}

        for phase in result["phases"]:
            assert set(task_ids(phase)) == original[phase["id"]]

    def test_input_is_not_mutated(
        self, service, sample_roadmap, sample_constraints, frozen_roadmap
    ):
        """The caller's roadmap is left exactly as it was."""
        service.prioritize_roadmap(sample_roadmap, sample_constraints)

        assert sample_roadmap == frozen_roadmap

    def test_metadata_is_stamped(self, service, sample_roadmap, sample_constraints):
        """optimizedAt and optimizationFactors are recorded."""
        result = service.prioritize_roadmap(sample_roadmap, sample_constraints)
        metadata = result["metadata"]

        assert datetime.fromisoformat(metadata["optimizedAt"]).tzinfo is not None
        assert metadata["optimizationFactors"] == {
            "detectedProjectType": "mvp",
            "detectedDomain": "web-app",
            "appliedConstraints": sample_constraints,
        }
        assert metadata["title"] == "Recipe Sharing Site"

    def test_other_fields_are_kept(self, service, sample_roadmap, sample_constraints):
        """Fields outside phases and metadata pass through."""
        result = service.prioritize_roadmap(sample_roadmap, sample_constraints)

        assert result["summary"] == sample_roadmap["summary"]

    def test_phase_without_milestones(self, service, sample_constraints):
        """Phases lacking a milestone list pass through task ordering."""
        roadmap = {
            "phases": [
                {"id": "a", "title": "Deployment", "timeline": "Week 4"},
                {"id": "b", "title": "Setup", "timeline": "Week 1", "milestones": "tbd"},
            ]
        }

        result = service.prioritize_roadmap(roadmap, sample_constraints)

        assert phase_ids(result) == ["b", "a"]
        assert result["phases"][0]["milestones"] == "tbd"
        assert "milestones" not in result["phases"][1]

    def test_ties_keep_original_order(self, service):
        """Identically scored phases keep their relative order."""
        roadmap = {
            "phases": [
                {"id": "first", "title": "Marketing", "timeline": "Week 2"},
                {"id": "second", "title": "Marketing", "timeline": "Week 2"},
            ]
        }

        result = service.prioritize_roadmap(roadmap, {})

        assert phase_ids(result) == ["first", "second"]

    def test_accepts_model_constraints(self, service, sample_roadmap):
        """UserConstraints models are accepted."""
        constraints = UserConstraints(timeline="6 weeks", experience_level="beginner", scope="mvp")

        result = service.prioritize_with_diagnostics(sample_roadmap, constraints)

        assert result.applied is True
        assert phase_ids(result.roadmap) == ["phase-1", "phase-2", "phase-3"]


class TestDiagnostics:
    """Tests for prioritize_with_diagnostics."""

    def test_successful_result(self, service, sample_roadmap, sample_constraints):
        """A successful run is marked applied with no diagnostics."""
        result = service.prioritize_with_diagnostics(sample_roadmap, sample_constraints)

        assert result.applied is True
        assert result.diagnostics == []
        assert result.dependency_warnings == []
        assert result.factors["detectedProjectType"] == "mvp"

    def test_dependency_warnings_are_advisory(self, service, caplog):
        """Out-of-order prerequisites are reported but not fixed."""

        caplog.set_level(logging.INFO)
        # Setup keywords put this deployment phase first
        roadmap = {
            "phases": [
                {"id": "deploy", "title": "Deployment Setup", "timeline": "Day 1"},
                {"id": "qa", "title": "Testing", "timeline": "Week 3"},
            ]
        }

        result = service.prioritize_with_diagnostics(roadmap, {"timeline": "4 weeks"})

        assert result.applied is True
        assert phase_ids(result.roadmap) == ["deploy", "qa"]
        assert result.dependency_warnings == [
            "Dependency warning: testing should come before deployment"
        ]
        assert "testing should come before deployment" in caplog.text


class TestSingleton:
    """Tests for the module-level accessor."""

    def test_returns_same_instance(self):
        """The global accessor is a singleton."""
        assert get_prioritization_service() is get_prioritization_service()
