"""Roadmap models: phases, milestones, tasks and progress."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskStatus(str, Enum):
    """Task status values. Only the UI layer changes these."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


def _percentage(completed: int, total: int) -> int:
    if total == 0:
        return 0
    return round(completed / total * 100)


class Resource(BaseModel):
    """A learning resource or tool attached to a task."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    url: str | None = Field(default=None, description="Not always a valid URL")


class Task(BaseModel):
    """An atomic unit of work within a milestone."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    resources: list[Resource] = Field(default_factory=list)
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    estimated_hours: str = Field(..., alias="estimatedHours", min_length=1)

    @field_validator("estimated_hours", mode="before")
    @classmethod
    def _hours_to_string(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, int | float):
            if value <= 0:
                raise ValueError("estimatedHours must be positive")
            return str(value)
        return value

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


class Milestone(BaseModel):
    """A group of tasks within a phase."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    timeline: str = Field(..., min_length=1)
    order: int | float
    tasks: list[Task] = Field(..., min_length=1)

    def progress(self) -> dict[str, int]:
        """Get task completion counts for this milestone."""
        total = len(self.tasks)
        completed = sum(1 for task in self.tasks if task.is_completed)
        return {
            "total": total,
            "completed": completed,
            "percentage": _percentage(completed, total),
        }


class Phase(BaseModel):
    """A top-level stage of the roadmap."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    timeline: str = Field(..., min_length=1)
    order: int | float
    milestones: list[Milestone] = Field(..., min_length=1)

    def progress_percentage(self) -> int:
        """Percentage of completed tasks across all milestones."""
        tasks = [task for milestone in self.milestones for task in milestone.tasks]
        completed = sum(1 for task in tasks if task.is_completed)
        return _percentage(completed, len(tasks))


class RoadmapMetadata(BaseModel):
    """Project information the roadmap was generated from."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    timeline: str = Field(..., min_length=1)
    experience_level: str = Field(..., alias="experienceLevel", min_length=1)
    technologies: str = Field(..., min_length=1)
    scope: str = Field(..., min_length=1)
    version: str = Field(..., min_length=1)


class Roadmap(BaseModel):
    """A complete project roadmap as produced by the generator."""

    model_config = ConfigDict(extra="allow")

    metadata: RoadmapMetadata
    summary: str = Field(..., min_length=1)
    phases: list[Phase] = Field(..., min_length=1)

    def progress_percentage(self) -> int:
        """Overall percentage of completed tasks."""
        tasks = [
            task
            for phase in self.phases
            for milestone in phase.milestones
            for task in milestone.tasks
        ]
        completed = sum(1 for task in tasks if task.is_completed)
        return _percentage(completed, len(tasks))

    def to_json_dict(self) -> dict[str, Any]:
        """Dump back to the camelCase JSON shape."""
        return self.model_dump(mode="json", by_alias=True)
