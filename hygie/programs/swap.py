"""Exercise swap for an already generated session.

Replaces one exercise of a memoized plan with the most relevant admissible
alternative from the same body region, keeping the week's prescription.
"""

from dataclasses import replace

from loguru import logger

from hygie.programs.categorization import exclude_by_injury, filter_by_region, prioritize_by_weaknesses
from hygie.programs.errors import CatalogExhaustedError, InvalidReferenceError
from hygie.programs.models import ExerciseCatalog, Program, SynthesisResult
from hygie.programs.periodization import week_scheme
from hygie.programs.schemas import ClientProfile
from hygie.programs.synthesizer import build_exercise, estimate_duration_minutes


def swap_exercise(
    profile: ClientProfile,
    program: Program,
    week_number: int,
    session_number: int,
    exercise_id: str,
    catalog: ExerciseCatalog,
) -> SynthesisResult:
    """Swap one exercise of a generated session.

    Candidates come from the same region, pass the injury filter, are not
    already in the session, and are ranked by relevance to the client's
    weaknesses and injuries.

    Raises:
        InvalidReferenceError: If the slot, its plan, or the exercise does not exist
        CatalogExhaustedError: If no alternative remains
    """
    week = program.find_week(week_number)
    session = week.find_session(session_number) if week else None
    if session is None:
        raise InvalidReferenceError(f"Session {week_number}/{session_number} not found in program {program.id}")
    if session.workout_plan is None:
        raise InvalidReferenceError(f"Session {week_number}/{session_number} has no generated plan to swap from")

    plan = session.workout_plan
    position = next((i for i, ex in enumerate(plan.exercises) if ex.exercise_id == exercise_id), None)
    if position is None:
        raise InvalidReferenceError(f"Exercise {exercise_id} is not part of session {week_number}/{session_number}")

    scheme = week_scheme(week_number)
    if scheme is None:
        raise InvalidReferenceError(f"Week {week_number} is outside the periodization table")

    current = plan.exercises[position]
    in_session = {ex.exercise_id for ex in plan.exercises}
    pool = [
        ex
        for ex in exclude_by_injury(filter_by_region(catalog, current.region), profile.injuries)
        if ex.id not in in_session
    ]
    ranked = prioritize_by_weaknesses(pool, profile.weaknesses, profile.injuries)
    if not ranked:
        raise CatalogExhaustedError(f"No alternative to {exercise_id} in region {current.region.value}")

    replacement = build_exercise(ranked[0], current.region, scheme, profile)
    exercises = plan.exercises[:position] + (replacement,) + plan.exercises[position + 1 :]
    new_plan = replace(plan, exercises=exercises, estimated_minutes=estimate_duration_minutes(exercises))
    updated = program.replace_session(week_number, replace(session, workout_plan=new_plan))

    logger.info(
        "Exercise swapped",
        program_id=program.id,
        week=week_number,
        session=session_number,
        replaced=exercise_id,
        replacement=replacement.exercise_id,
    )
    return SynthesisResult(plan=new_plan, program=updated)
