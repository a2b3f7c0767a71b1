"""Root conftest for all tests.

This file makes shared fixtures available across all test modules: a small
in-memory exercise catalog, client profiles, a seeded random source and a
loguru capture sink.
"""

import random
from datetime import UTC, datetime

import pytest
from loguru import logger

from hygie.programs.enums import ExperienceLevel
from hygie.programs.models import ExerciseCatalog, ExerciseDefinition
from hygie.programs.schemas import ClientProfile


def make_exercise(
    exercise_id: str,
    category: str,
    targets: list[str],
    triggers: list[str] | None = None,
    suggested_load: str | None = None,
) -> ExerciseDefinition:
    return ExerciseDefinition(
        id=exercise_id,
        name=exercise_id.replace("_", " ").title(),
        category=category,
        targets=tuple(targets),
        triggers=tuple(triggers or []),
        description=f"{exercise_id} description",
        coach_tip=f"{exercise_id} tip",
        suggested_load=suggested_load,
    )


@pytest.fixture
def exercise_factory():
    return make_exercise


@pytest.fixture
def small_catalog() -> ExerciseCatalog:
    """Four exercises per region, enough for every split pattern."""
    return (
        make_exercise("face_pull", "Correction Posturale", ["Rhomboïdes", "Deltoïde postérieur"], ["upper_crossed_syndrome"]),
        make_exercise("push_up", "Poussée", ["Grand Pectoral", "Triceps"], suggested_load="PDC"),
        make_exercise("dumbbell_row", "Tirage", ["Grand dorsal", "Biceps"], suggested_load="16 kg"),
        make_exercise("overhead_press", "Poussée Verticale", ["Deltoïde antérieur", "Épaules"]),
        make_exercise("goblet_squat", "Jambes", ["Quadriceps", "Fessiers"], ["general_strength"]),
        make_exercise("step_up", "Renforcement Unilatéral", ["Quadriceps", "Genou"], ["knee_valgus"]),
        make_exercise("glute_bridge", "Activation", ["Grand Fessier"], ["weak_glutes"]),
        make_exercise("calf_raise", "Mollets", ["Gastrocnémien"]),
        make_exercise("pallof_press", "Anti-Rotation", ["Obliques", "Transverse"], ["lumbar_instability"]),
        make_exercise("dead_bug", "Stabilité Lombaire", ["Transverse"], ["lumbar_instability"]),
        make_exercise("front_plank", "Gainage", ["Grand droit"]),
        make_exercise("side_plank", "Gainage", ["Obliques"]),
    )


@pytest.fixture
def healthy_client() -> ClientProfile:
    return ClientProfile(
        id="client-1",
        name="Camille",
        experience=ExperienceLevel.INTERMEDIATE,
        main_goal="Renforcement",
        body_weight_kg=68.0,
    )


@pytest.fixture
def injured_client() -> ClientProfile:
    return ClientProfile(
        id="client-2",
        name="Alex",
        experience=ExperienceLevel.BEGINNER,
        injuries=["Genou"],
        main_goal="Reprise",
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 3, 18, 30, tzinfo=UTC)


@pytest.fixture
def log_messages():
    """Capture loguru records emitted during a test."""
    records: list = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(sink_id)
