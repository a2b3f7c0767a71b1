"""Canonical enums for program dimensions.

All enums are string-based so that programs serialize to plain JSON and
round-trip through the persistence layer unchanged.
"""

from enum import StrEnum


# -----------------------------
# Body regions (catalog partitions)
# -----------------------------
class BodyRegion(StrEnum):
    """Body region a catalog exercise belongs to."""

    UPPER = "upper"
    LOWER = "lower"
    CORE = "core"


# -----------------------------
# Periodization table phases
# -----------------------------
class SchemePhase(StrEnum):
    """Phase names of the weekly periodization table."""

    FAMILIARIZATION = "Familiarisation"
    MUSCLE_BUILDING = "Construction Musculaire"
    MAX_STRENGTH = "Force Maximale"


# -----------------------------
# Macro phases (five-bucket step function)
# -----------------------------
class MacroPhase(StrEnum):
    """Coarse program phase derived from the week number."""

    ADAPTATION = "Adaptation"
    DEVELOPMENT = "Développement"
    INTENSIFICATION = "Intensification"
    SPECIALIZATION = "Spécialisation"
    CONSOLIDATION = "Consolidation"


# -----------------------------
# Weekly micro-focus (3-week cycle)
# -----------------------------
class TrainingFocus(StrEnum):
    """Rotating micro-focus of a week."""

    STRENGTH = "strength"
    HYPERTROPHY = "hypertrophy"
    ENDURANCE = "endurance"


# -----------------------------
# Workout structure
# -----------------------------
class WorkoutStructure(StrEnum):
    """Interval-style circuit or straight series."""

    CIRCUIT = "CIRCUIT"
    SERIES = "SERIES"


# -----------------------------
# Gate decisions
# -----------------------------
class GateAction(StrEnum):
    """Action recommended by the phase gate evaluator."""

    PROCEED = "proceed"
    REPEAT_PREVIOUS_WEEK = "repeat_previous_week"
    REPEAT_TWO_WEEKS_BACK = "repeat_two_weeks_back"


# -----------------------------
# Client experience
# -----------------------------
class ExperienceLevel(StrEnum):
    """Client experience level as declared on the profile."""

    BEGINNER = "Débutant"
    INTERMEDIATE = "Intermédiaire"
    ADVANCED = "Avancé"
