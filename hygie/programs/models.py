"""Core immutable data models for program generation.

This module defines the canonical data structures that represent:
- The exercise catalog (definitions shared by every program)
- The periodization table rows
- The program aggregate (weeks, sessions, cursor)
- Generated workout plans
- Results returned by the engine operations

All models are frozen (immutable). Operations that change a program return
a new value built with ``dataclasses.replace``.
"""

from dataclasses import dataclass, replace
from datetime import datetime

from hygie.programs.enums import (
    BodyRegion,
    GateAction,
    MacroPhase,
    SchemePhase,
    TrainingFocus,
    WorkoutStructure,
)


# -----------------------------
# Catalog
# -----------------------------
@dataclass(frozen=True)
class ExerciseDefinition:
    """Immutable catalog entry.

    Attributes:
        id: Unique exercise identifier (e.g., "face_pull")
        name: Display name
        category: Category label (e.g., "Correction Posturale")
        targets: Targeted muscles or regions
        triggers: Condition codes for which the exercise is preferred
        description: Execution instructions
        coach_tip: Coaching cue
        suggested_load: Optional suggested load (free text, e.g. "8 kg")
    """

    id: str
    name: str
    category: str
    targets: tuple[str, ...]
    triggers: tuple[str, ...]
    description: str
    coach_tip: str
    suggested_load: str | None = None


ExerciseCatalog = tuple[ExerciseDefinition, ...]


# -----------------------------
# Periodization
# -----------------------------
@dataclass(frozen=True)
class WeekScheme:
    """One row of the periodization table.

    Attributes:
        week: Week number (1-based)
        phase: Table phase name
        sets: Sets per exercise
        reps: Repetitions per set
        rpe: Target RPE (0-10, half points allowed)
        rest_seconds: Rest between sets
    """

    week: int
    phase: SchemePhase
    sets: int
    reps: int
    rpe: float
    rest_seconds: int


@dataclass(frozen=True)
class ProgramPhase:
    """Macro phase of a week with its focus label and intensity factor."""

    phase: MacroPhase
    focus: str
    intensity: float


@dataclass(frozen=True)
class WeeklyFocus:
    """Micro-focus of a week within the 3-week rotation."""

    focus: TrainingFocus
    label: str
    intensity: float


# -----------------------------
# Workout plans
# -----------------------------
@dataclass(frozen=True)
class PhaseExercise:
    """Duration-based block (warm-up, stretch, cool-down)."""

    name: str
    instructions: str
    duration_seconds: int


@dataclass(frozen=True)
class Exercise:
    """Catalog exercise stamped with a concrete prescription.

    Attributes:
        exercise_id: Catalog id of the source definition
        name: Display name
        region: Body region the exercise was picked for
        sets: Number of sets
        reps: Repetitions per set
        rest_seconds: Rest between sets
        target_rpe: Target RPE for the week
        description: Execution instructions
        coach_tip: Coaching cue
        suggested_load: Suggested load, if any
    """

    exercise_id: str
    name: str
    region: BodyRegion
    sets: int
    reps: int
    rest_seconds: int
    target_rpe: float
    description: str
    coach_tip: str
    suggested_load: str | None = None


@dataclass(frozen=True)
class WorkoutPlan:
    """A complete, ready-to-perform session."""

    opening_phrase: str
    structure: WorkoutStructure
    warmup: tuple[PhaseExercise, ...]
    dynamic_stretches: tuple[PhaseExercise, ...]
    exercises: tuple[Exercise, ...]
    cooldown: tuple[PhaseExercise, ...]
    estimated_minutes: int


# -----------------------------
# Program aggregate
# -----------------------------
@dataclass(frozen=True)
class SessionProgram:
    """Session slot of a week.

    Attributes:
        session_number: Session number within the week (1-based)
        focus: Focus label
        completed: Whether the client completed the session
        completed_at: Completion timestamp
        workout_plan: Generated plan (None until first requested)
    """

    session_number: int
    focus: str
    completed: bool = False
    completed_at: datetime | None = None
    workout_plan: WorkoutPlan | None = None


@dataclass(frozen=True)
class WeekProgram:
    """Week of a program with its macro-focus label and sessions."""

    week_number: int
    focus: str
    sessions: tuple[SessionProgram, ...]

    def find_session(self, session_number: int) -> SessionProgram | None:
        for session in self.sessions:
            if session.session_number == session_number:
                return session
        return None


@dataclass(frozen=True)
class Program:
    """Immutable program aggregate for one client.

    Attributes:
        id: Program identifier
        name: Display name
        duration_weeks: Total number of weeks
        sessions_per_week: Sessions in every week
        created_at: Creation timestamp (UTC)
        current_week: Cursor week (1-based)
        current_session: Cursor session (1-based)
        weeks: One WeekProgram per week, ordered
    """

    id: str
    name: str
    duration_weeks: int
    sessions_per_week: int
    created_at: datetime
    current_week: int
    current_session: int
    weeks: tuple[WeekProgram, ...]

    def find_week(self, week_number: int) -> WeekProgram | None:
        for week in self.weeks:
            if week.week_number == week_number:
                return week
        return None

    def replace_session(self, week_number: int, session: SessionProgram, **changes: object) -> "Program":
        """Return a new program with one session node swapped.

        Args:
            week_number: Week holding the session
            session: New session node (matched by session_number)
            **changes: Extra program-level fields to update (e.g., cursor)

        Returns:
            New Program instance
        """
        weeks = tuple(
            replace(
                week,
                sessions=tuple(
                    session if s.session_number == session.session_number else s for s in week.sessions
                ),
            )
            if week.week_number == week_number
            else week
            for week in self.weeks
        )
        return replace(self, weeks=weeks, **changes)


# -----------------------------
# Operation results
# -----------------------------
@dataclass(frozen=True)
class RegionShortfall:
    """A region that could not supply as many exercises as the split asks."""

    region: BodyRegion
    requested: int
    selected: int


@dataclass(frozen=True)
class SynthesisResult:
    """Outcome of synthesizing (or fetching) a session plan.

    Attributes:
        plan: The session plan
        program: Program value holding the memoized plan
        shortfalls: Regions that came up short after injury filtering
        from_cache: True when the plan was already generated
    """

    plan: WorkoutPlan
    program: Program
    shortfalls: tuple[RegionShortfall, ...] = ()
    from_cache: bool = False


@dataclass(frozen=True)
class GateResult:
    """Decision of the phase gate evaluator.

    Attributes:
        can_proceed: Whether the client may move past the gate week
        reason: Human-readable explanation
        action: Recommended action
        repeat_week: Week to repeat when the gate fails
    """

    can_proceed: bool
    reason: str
    action: GateAction
    repeat_week: int | None = None


@dataclass(frozen=True)
class CompletionOutcome:
    """Program after a completion, with the gate decision when one ran."""

    program: Program
    gate: GateResult | None = None


@dataclass(frozen=True)
class ProgressionSuggestion:
    """Suggested progression for the next week."""

    weight_increase_percent: float
    rep_increase: int
