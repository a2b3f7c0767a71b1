"""Boundary schemas consumed by the engine.

The client profile and its session history are owned by the host
application; the engine only reads them. Catalog rows are validated here
before being turned into immutable ExerciseDefinition values.
"""

from datetime import datetime

from loguru import logger
from pydantic import BaseModel, Field, field_validator

from hygie.programs.enums import ExperienceLevel


class PerformanceEntry(BaseModel):
    """Personal record for an exercise.

    Attributes:
        weight: Load in kg
        reps: Repetitions performed at that load
        date: When the record was set
    """

    weight: float = Field(..., ge=0)
    reps: int = Field(..., ge=1)
    date: datetime


class PerformedExercise(BaseModel):
    """Exercise as actually performed during a recorded session."""

    name: str
    weight: float | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)


class SessionRecord(BaseModel):
    """Historical session record written by the host application.

    Attributes:
        date: Session date
        mood: Free-text mood entered by the client
        debrief: Free-text debrief (advisory service output)
        rpe: Actual RPE reported for the session
        week: Program week the session belonged to (explicit tag, optional)
        focus: Session focus label
        exercises: Exercises performed
    """

    date: datetime
    mood: str = ""
    debrief: str = ""
    rpe: float | None = Field(None, ge=0, le=10)
    week: int | None = Field(None, ge=1)
    focus: str | None = None
    exercises: list[PerformedExercise] = Field(default_factory=list)


class ClientProfile(BaseModel):
    """Read-only view of the client profile used by the engine."""

    id: str
    name: str
    experience: ExperienceLevel = ExperienceLevel.INTERMEDIATE
    injuries: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    main_goal: str = "Remise en forme"
    body_weight_kg: float | None = Field(None, gt=0)
    session_records: list[SessionRecord] = Field(default_factory=list)
    personal_bests: dict[str, PerformanceEntry] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @field_validator("experience", mode="before")
    @classmethod
    def validate_experience(cls, value: object) -> object:
        """Map free-text experience levels, defaulting unknown ones to intermediate."""
        if isinstance(value, ExperienceLevel) or not isinstance(value, str):
            return value
        normalized = value.strip().lower()
        for level in ExperienceLevel:
            if level.value.lower() == normalized:
                return level
        logger.warning(f"Unknown experience level '{value}'. Defaulting to {ExperienceLevel.INTERMEDIATE.value}.")
        return ExperienceLevel.INTERMEDIATE


class CatalogEntrySchema(BaseModel):
    """One row of the exercise catalog file."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    category: str
    targets: list[str] = Field(default_factory=list)
    triggers: list[str] = Field(default_factory=list)
    description: str = ""
    coach_tip: str = ""
    suggested_load: str | None = None

    @field_validator("id")
    @classmethod
    def validate_id(cls, value: str) -> str:
        if value.strip() != value or " " in value:
            raise ValueError(f"Exercise id must not contain whitespace: {value!r}")
        return value


class CatalogFileSchema(BaseModel):
    """Top-level structure of the catalog YAML file."""

    version: str = "1"
    exercises: list[CatalogEntrySchema]
