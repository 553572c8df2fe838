"""Pytest configuration and shared fixtures for roadmap service tests."""

import copy

import pytest

from src.services.config_service import reset_config_service
from src.services.prioritization_config import reset_prioritization_config_service
from src.services.prioritization_service import reset_prioritization_service
from src.services.text_summarizer import reset_text_summarizer


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset module-level service singletons between tests."""
    reset_config_service()
    reset_prioritization_config_service()
    reset_prioritization_service()
    reset_text_summarizer()
    yield
    reset_config_service()
    reset_prioritization_config_service()
    reset_prioritization_service()
    reset_text_summarizer()


def make_task(task_id: str, title: str, status: str = "pending") -> dict:
    return {
        "id": task_id,
        "title": title,
        "description": f"{title} for the project",
        "resources": [{"name": "Docs", "url": "https://example.com"}],
        "status": status,
        "estimatedHours": "4",
    }


@pytest.fixture
def sample_roadmap():
    """A small web-app roadmap in generator JSON shape, deliberately mis-ordered."""
    return {
        "metadata": {
            "title": "Recipe Sharing Site",
            "description": "A website for sharing recipes built with React and a REST api",
            "timeline": "6 weeks",
            "experienceLevel": "Beginner",
            "technologies": "React, Node.js",
            "scope": "MVP",
            "version": "1.0",
        },
        "summary": "Build the basic recipe site.",
        "phases": [
            {
                "id": "phase-3",
                "title": "Testing and QA",
                "timeline": "Week 5",
                "order": 1,
                "milestones": [
                    {
                        "id": "m-3",
                        "title": "Quality",
                        "timeline": "Week 5",
                        "order": 1,
                        "tasks": [
                            make_task("t-5", "Write end-to-end test suite"),
                            make_task("t-6", "Deploy staging build"),
                        ],
                    }
                ],
            },
            {
                "id": "phase-2",
                "title": "Core Development",
                "timeline": "Week 2",
                "order": 2,
                "milestones": [
                    {
                        "id": "m-2",
                        "title": "Features",
                        "timeline": "Week 2",
                        "order": 1,
                        "tasks": [
                            make_task("t-3", "Write unit test cases", status="completed"),
                            make_task("t-4", "Build recipe list page"),
                        ],
                    }
                ],
            },
            {
                "id": "phase-1",
                "title": "Project Setup and Planning",
                "timeline": "Week 1",
                "order": 3,
                "milestones": [
                    {
                        "id": "m-1",
                        "title": "Environment",
                        "timeline": "Day 1",
                        "order": 1,
                        "tasks": [
                            make_task("t-1", "Create wireframes"),
                            make_task("t-2", "Install Node and configure tooling"),
                        ],
                    }
                ],
            },
        ],
    }


@pytest.fixture
def sample_constraints():
    """User constraints as submitted by the project form."""
    return {"timeline": "6 weeks", "experienceLevel": "Beginner", "scope": "MVP"}


@pytest.fixture
def frozen_roadmap(sample_roadmap):
    """Deep copy of the sample roadmap for checking it was not mutated."""
    return copy.deepcopy(sample_roadmap)
