"""Session workout synthesis.

This module turns a (week, session) reference into a concrete workout:
- Picks the split pattern from the number of sessions per week
- Filters each region pool by the client's declared injuries
- Samples exercises uniformly without replacement
- Stamps the week's sets/reps/rest/RPE prescription on every pick
- Wraps the main block with fixed warm-up, stretch and cool-down blocks

Selection is random, so the first generated plan is memoized on the
session node and returned unchanged on every later request.
"""

import math
import random
from dataclasses import replace

from loguru import logger

from hygie.programs.categorization import exclude_by_injury, filter_by_region
from hygie.programs.constants import SECONDS_PER_SET
from hygie.programs.enums import BodyRegion, WorkoutStructure
from hygie.programs.errors import CatalogExhaustedError, InvalidReferenceError
from hygie.programs.loads import calculate_suggested_weight, find_personal_best, format_load
from hygie.programs.models import (
    Exercise,
    ExerciseCatalog,
    ExerciseDefinition,
    PhaseExercise,
    Program,
    RegionShortfall,
    SessionProgram,
    SynthesisResult,
    WeekProgram,
    WeekScheme,
    WorkoutPlan,
)
from hygie.programs.periodization import program_phase, week_scheme
from hygie.programs.schemas import ClientProfile

SplitPattern = tuple[tuple[BodyRegion, int], ...]

FULL_BODY_PATTERN: SplitPattern = ((BodyRegion.UPPER, 1), (BodyRegion.CORE, 1), (BodyRegion.LOWER, 1))
UPPER_DAY_PATTERN: SplitPattern = ((BodyRegion.UPPER, 2), (BodyRegion.CORE, 1))
LOWER_DAY_PATTERN: SplitPattern = ((BodyRegion.LOWER, 2), (BodyRegion.CORE, 1))
THREE_WAY_PATTERNS: tuple[SplitPattern, ...] = (
    ((BodyRegion.UPPER, 3),),
    ((BodyRegion.LOWER, 3),),
    ((BodyRegion.CORE, 3),),
)

WARMUP: tuple[PhaseExercise, ...] = (
    PhaseExercise(
        name="Cardio léger",
        instructions="Vélo, rameur ou marche rapide à allure confortable.",
        duration_seconds=180,
    ),
    PhaseExercise(
        name="Mobilisation articulaire",
        instructions="Cercles de chevilles, hanches, épaules et poignets.",
        duration_seconds=120,
    ),
)
DYNAMIC_STRETCHES: tuple[PhaseExercise, ...] = (
    PhaseExercise(
        name="Fentes avec rotation",
        instructions="Fente avant puis rotation du buste vers la jambe avant.",
        duration_seconds=90,
    ),
    PhaseExercise(
        name="Balanciers de jambes",
        instructions="Balancer chaque jambe d'avant en arrière, buste gainé.",
        duration_seconds=90,
    ),
)
COOLDOWN: tuple[PhaseExercise, ...] = (
    PhaseExercise(
        name="Respiration diaphragmatique",
        instructions="Allongé, inspirer par le ventre 4 secondes, expirer 6 secondes.",
        duration_seconds=120,
    ),
    PhaseExercise(
        name="Étirements statiques",
        instructions="Ischios, quadriceps, pectoraux : 30 secondes par position.",
        duration_seconds=180,
    ),
)


def _block_seconds(block: tuple[PhaseExercise, ...]) -> int:
    return sum(phase.duration_seconds for phase in block)


def split_pattern(sessions_per_week: int, session_number: int) -> SplitPattern:
    """Resolve the regions and exercise counts of a session.

    Patterns are keyed strictly on sessions per week:
    - 1/week: full body (1 upper, 1 core, 1 lower)
    - 2/week: upper day (2 upper, 1 core) / lower day (2 lower, 1 core)
    - 3/week: upper / lower / core days, 3 exercises each
    - any other count: full body

    Args:
        sessions_per_week: Sessions in the program week
        session_number: Session number (1-based)

    Returns:
        Ordered (region, count) pairs
    """
    if sessions_per_week == 2:
        return UPPER_DAY_PATTERN if (session_number - 1) % 2 == 0 else LOWER_DAY_PATTERN
    if sessions_per_week == 3:
        return THREE_WAY_PATTERNS[(session_number - 1) % 3]
    return FULL_BODY_PATTERN


def estimate_duration_minutes(exercises: tuple[Exercise, ...]) -> int:
    """Estimate total session time in whole minutes (half-up rounding).

    Each exercise costs sets x 60 s of work plus (sets - 1) x rest. The fixed
    warm-up, dynamic stretch and cool-down blocks are added on top.
    """
    main_block = sum(ex.sets * SECONDS_PER_SET + (ex.sets - 1) * ex.rest_seconds for ex in exercises)
    total_seconds = _block_seconds(WARMUP) + _block_seconds(DYNAMIC_STRETCHES) + main_block + _block_seconds(COOLDOWN)
    return math.floor(total_seconds / 60 + 0.5)


def _suggested_load(profile: ClientProfile, definition: ExerciseDefinition, reps: int) -> str | None:
    if find_personal_best(profile, definition.name) is None:
        return definition.suggested_load
    weight = calculate_suggested_weight(profile, definition.name, reps, definition.suggested_load)
    return format_load(weight)


def build_exercise(
    definition: ExerciseDefinition,
    region: BodyRegion,
    scheme: WeekScheme,
    profile: ClientProfile,
) -> Exercise:
    """Stamp a catalog entry with the week's prescription."""
    return Exercise(
        exercise_id=definition.id,
        name=definition.name,
        region=region,
        sets=scheme.sets,
        reps=scheme.reps,
        rest_seconds=scheme.rest_seconds,
        target_rpe=scheme.rpe,
        description=definition.description,
        coach_tip=definition.coach_tip,
        suggested_load=_suggested_load(profile, definition, scheme.reps),
    )


def select_exercises(
    catalog: ExerciseCatalog,
    pattern: SplitPattern,
    injuries: list[str],
    rng: random.Random,
) -> tuple[list[tuple[BodyRegion, ExerciseDefinition]], list[RegionShortfall]]:
    """Pick exercises for every region of a split pattern.

    Regions are disjoint catalog partitions, and each pool is sampled
    without replacement, so no catalog id appears twice in a session.

    Returns:
        Tuple of (picks in pattern order, regions that came up short)
    """
    picks: list[tuple[BodyRegion, ExerciseDefinition]] = []
    shortfalls: list[RegionShortfall] = []
    used_ids: set[str] = set()

    for region, count in pattern:
        pool = [ex for ex in exclude_by_injury(filter_by_region(catalog, region), injuries) if ex.id not in used_ids]
        chosen = rng.sample(pool, k=min(count, len(pool)))
        if len(chosen) < count:
            shortfalls.append(RegionShortfall(region=region, requested=count, selected=len(chosen)))
        for definition in chosen:
            used_ids.add(definition.id)
            picks.append((region, definition))

    return picks, shortfalls


def _resolve_slot(program: Program, week_number: int, session_number: int) -> tuple[WeekProgram, SessionProgram]:
    week = program.find_week(week_number)
    if week is None:
        raise InvalidReferenceError(f"Week {week_number} not found in program {program.id}")
    session = week.find_session(session_number)
    if session is None:
        raise InvalidReferenceError(f"Session {session_number} not found in week {week_number} of program {program.id}")
    return week, session


def synthesize_session(
    profile: ClientProfile,
    program: Program,
    week_number: int,
    session_number: int,
    catalog: ExerciseCatalog,
    rng: random.Random | None = None,
) -> SynthesisResult:
    """Generate (or fetch) the workout plan of a program slot.

    Args:
        profile: Client profile (injuries, experience, history)
        program: Program holding the slot
        week_number: Week number (1-based)
        session_number: Session number (1-based)
        catalog: Exercise catalog to select from
        rng: Random source (defaults to a fresh unseeded Random)

    Returns:
        SynthesisResult with the plan and the program holding it

    Raises:
        InvalidReferenceError: If the slot does not exist or the week is outside
            the periodization table
        CatalogExhaustedError: If injury filtering leaves nothing to select
    """
    _, session = _resolve_slot(program, week_number, session_number)

    if session.workout_plan is not None:
        logger.debug(
            "Returning memoized workout plan",
            program_id=program.id,
            week=week_number,
            session=session_number,
        )
        return SynthesisResult(plan=session.workout_plan, program=program, from_cache=True)

    scheme = week_scheme(week_number)
    if scheme is None:
        logger.error(
            "No periodization scheme for week",
            program_id=program.id,
            week=week_number,
        )
        raise InvalidReferenceError(f"Week {week_number} is outside the periodization table")

    pattern = split_pattern(program.sessions_per_week, session_number)
    picks, shortfalls = select_exercises(catalog, pattern, profile.injuries, rng or random.Random())

    if not picks:
        logger.error(
            "Catalog exhausted for session",
            program_id=program.id,
            week=week_number,
            session=session_number,
            injuries=profile.injuries,
        )
        raise CatalogExhaustedError(
            f"No admissible exercise for week {week_number} session {session_number} "
            f"after excluding injuries {profile.injuries}"
        )

    for shortfall in shortfalls:
        logger.warning(
            "Region pool exhausted after injury filtering, session generated with fewer exercises",
            program_id=program.id,
            week=week_number,
            session=session_number,
            region=shortfall.region.value,
            requested=shortfall.requested,
            selected=shortfall.selected,
        )

    exercises = tuple(build_exercise(definition, region, scheme, profile) for region, definition in picks)
    phase = program_phase(week_number)
    plan = WorkoutPlan(
        opening_phrase=f"Semaine {week_number} - {phase.phase.value} : {session.focus}. C'est parti !",
        structure=WorkoutStructure.CIRCUIT if pattern == FULL_BODY_PATTERN else WorkoutStructure.SERIES,
        warmup=WARMUP,
        dynamic_stretches=DYNAMIC_STRETCHES,
        exercises=exercises,
        cooldown=COOLDOWN,
        estimated_minutes=estimate_duration_minutes(exercises),
    )

    updated = program.replace_session(week_number, replace(session, workout_plan=plan))

    logger.info(
        "Workout plan synthesized",
        program_id=program.id,
        week=week_number,
        session=session_number,
        exercise_ids=[ex.exercise_id for ex in exercises],
        estimated_minutes=plan.estimated_minutes,
    )

    return SynthesisResult(plan=plan, program=updated, shortfalls=tuple(shortfalls))
