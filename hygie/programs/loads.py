"""Suggested load calculation from personal records and history.

Loads are derived from the best known performance on an exercise (Epley
1RM estimate scaled by a percentage-of-1RM table keyed on target reps),
with a body-weight based fallback for clients without history.
"""

import math
import re
from datetime import UTC, datetime

from loguru import logger

from hygie.programs.enums import ExperienceLevel
from hygie.programs.schemas import ClientProfile, PerformanceEntry

LOAD_INCREMENT_KG = 2.5
DEFAULT_BODY_WEIGHT_KG = 70.0
BEGINNER_SAFETY_FACTOR = 0.85
DEFAULT_PERCENTAGE = 75.0
HIGH_REP_PERCENTAGE = 55.0

# target reps (upper bound) -> percentage of 1RM
PERCENTAGE_OF_1RM: tuple[tuple[int, float], ...] = (
    (1, 100.0),
    (2, 95.0),
    (3, 93.0),
    (4, 90.0),
    (5, 87.0),
    (6, 85.0),
    (8, 80.0),
    (10, 75.0),
    (12, 70.0),
    (15, 65.0),
    (20, 60.0),
)

BODY_WEIGHT_FACTOR = {
    ExperienceLevel.BEGINNER: 0.2,
    ExperienceLevel.INTERMEDIATE: 0.4,
    ExperienceLevel.ADVANCED: 0.6,
}

_NUMBER_PATTERN = re.compile(r"(\d+(?:[.,]\d+)?)")


def _round_to_increment(weight: float) -> float:
    return math.floor(weight / LOAD_INCREMENT_KG + 0.5) * LOAD_INCREMENT_KG


def extract_reps(reps_text: str | None) -> int:
    """Extract a rep count from free text ("10-12" -> 10, "Echec" -> 1)."""
    if not reps_text:
        return 1
    lowered = reps_text.lower()
    if "echec" in lowered or "échec" in lowered or "max" in lowered:
        return 1
    match = re.search(r"\d+", reps_text)
    return int(match.group(0)) if match else 1


def extract_weight(weight_text: str | None) -> float:
    """Extract a load in kg from free text ("50kg" -> 50.0, "12,5 kg" -> 12.5)."""
    if not weight_text:
        return 0.0
    match = _NUMBER_PATTERN.search(weight_text)
    if not match:
        return 0.0
    return float(match.group(1).replace(",", "."))


def find_personal_best(profile: ClientProfile, exercise_name: str) -> PerformanceEntry | None:
    """Find the best known performance for an exercise.

    Looks at stored personal bests first, then scans the session history for
    the best weight x reps volume.

    Args:
        profile: Client profile
        exercise_name: Exercise display name

    Returns:
        Best PerformanceEntry, or None without any history
    """
    stored = profile.personal_bests.get(exercise_name)
    if stored is not None:
        return stored

    best: PerformanceEntry | None = None
    best_volume = 0.0
    target = exercise_name.lower()
    for record in profile.session_records:
        for performed in record.exercises:
            if performed.name.lower() != target or not performed.weight or not performed.reps:
                continue
            volume = performed.weight * performed.reps
            if volume > best_volume:
                best_volume = volume
                best = PerformanceEntry(weight=performed.weight, reps=performed.reps, date=record.date)
    return best


def percentage_for_reps(target_reps: int) -> float:
    """Percentage of 1RM appropriate for a target rep count."""
    if target_reps > PERCENTAGE_OF_1RM[-1][0]:
        return HIGH_REP_PERCENTAGE
    for reps, percentage in PERCENTAGE_OF_1RM:
        if target_reps <= reps:
            return percentage
    return DEFAULT_PERCENTAGE


def calculate_suggested_weight(
    profile: ClientProfile,
    exercise_name: str,
    target_reps: int,
    fallback_load: str | None = None,
) -> float:
    """Suggest a working load for an exercise.

    Args:
        profile: Client profile
        exercise_name: Exercise display name
        target_reps: Prescribed reps per set
        fallback_load: Free-text load used when there is no history

    Returns:
        Suggested load in kg (0 means body weight only)
    """
    best = find_personal_best(profile, exercise_name)

    if best is None:
        fallback = extract_weight(fallback_load)
        if fallback > 0:
            return fallback
        body_weight = profile.body_weight_kg or DEFAULT_BODY_WEIGHT_KG
        factor = BODY_WEIGHT_FACTOR[profile.experience]
        return _round_to_increment(body_weight * factor)

    estimated_1rm = best.weight * (1 + best.reps / 30)
    suggested = estimated_1rm * percentage_for_reps(target_reps) / 100

    if profile.experience == ExperienceLevel.BEGINNER:
        suggested *= BEGINNER_SAFETY_FACTOR

    suggested = _round_to_increment(suggested)
    if 0 < suggested < LOAD_INCREMENT_KG:
        suggested = LOAD_INCREMENT_KG

    logger.debug(
        "Suggested load computed",
        exercise=exercise_name,
        target_reps=target_reps,
        estimated_1rm=round(estimated_1rm, 1),
        suggested=suggested,
    )
    return max(0.0, suggested)


def format_load(weight: float) -> str:
    return f"{weight:g} kg"


def update_personal_best(
    profile: ClientProfile,
    exercise_name: str,
    weight: float,
    reps: int,
    achieved_at: datetime | None = None,
) -> ClientProfile:
    """Return a profile copy with a new personal best, if it beats the stored one.

    A performance wins on weight x reps volume, or on weight at equal volume.
    The engine never persists the result: the caller decides what to store.
    """
    current = profile.personal_bests.get(exercise_name)
    new_volume = weight * reps
    current_volume = current.weight * current.reps if current else 0.0

    if current is not None and not (
        new_volume > current_volume or (new_volume == current_volume and weight > current.weight)
    ):
        return profile

    entry = PerformanceEntry(weight=weight, reps=reps, date=achieved_at or datetime.now(UTC))
    logger.info("New personal best", client_id=profile.id, exercise=exercise_name, weight=weight, reps=reps)
    return profile.model_copy(update={"personal_bests": {**profile.personal_bests, exercise_name: entry}})
