"""Deterministic periodization logic.

This module holds the weekly prescription table and derives program phase,
weekly focus and session focus labels from the week number. No state, no
I/O: every function is a pure lookup or step function.
"""

from hygie.programs.constants import (
    GATE_WEEK,
    LOWER_BODY_INJURY_ZONES,
    POSTURE_CORRECTION_WEEKS,
    UPPER_BODY_INJURY_ZONES,
)
from hygie.programs.enums import MacroPhase, SchemePhase, TrainingFocus
from hygie.programs.errors import InvalidReferenceError
from hygie.programs.models import ProgramPhase, WeekScheme, WeeklyFocus

_F = SchemePhase.FAMILIARIZATION
_M = SchemePhase.MUSCLE_BUILDING
_S = SchemePhase.MAX_STRENGTH

WEEKLY_SCHEME: tuple[WeekScheme, ...] = (
    # Familiarisation
    WeekScheme(week=1, phase=_F, sets=3, reps=8, rpe=6.0, rest_seconds=120),
    WeekScheme(week=2, phase=_F, sets=3, reps=10, rpe=6.5, rest_seconds=120),
    # Construction musculaire (hypertrophy)
    WeekScheme(week=3, phase=_M, sets=3, reps=12, rpe=7.0, rest_seconds=120),
    WeekScheme(week=4, phase=_M, sets=3, reps=8, rpe=7.0, rest_seconds=90),
    WeekScheme(week=5, phase=_M, sets=3, reps=10, rpe=7.0, rest_seconds=90),
    WeekScheme(week=6, phase=_M, sets=3, reps=8, rpe=7.5, rest_seconds=90),
    WeekScheme(week=7, phase=_M, sets=3, reps=8, rpe=7.5, rest_seconds=90),
    WeekScheme(week=8, phase=_M, sets=3, reps=8, rpe=8.0, rest_seconds=90),
    WeekScheme(week=9, phase=_M, sets=3, reps=10, rpe=8.0, rest_seconds=90),
    WeekScheme(week=10, phase=_M, sets=3, reps=10, rpe=8.0, rest_seconds=90),
    WeekScheme(week=11, phase=_M, sets=3, reps=10, rpe=8.5, rest_seconds=90),
    WeekScheme(week=12, phase=_M, sets=4, reps=6, rpe=8.5, rest_seconds=90),
    # Force maximale
    WeekScheme(week=13, phase=_S, sets=4, reps=5, rpe=8.5, rest_seconds=180),
    WeekScheme(week=14, phase=_S, sets=4, reps=3, rpe=9.0, rest_seconds=180),
    WeekScheme(week=15, phase=_S, sets=4, reps=6, rpe=8.5, rest_seconds=180),
    WeekScheme(week=16, phase=_S, sets=4, reps=5, rpe=8.5, rest_seconds=180),
    WeekScheme(week=17, phase=_S, sets=5, reps=3, rpe=9.0, rest_seconds=180),
    WeekScheme(week=18, phase=_S, sets=6, reps=3, rpe=9.0, rest_seconds=180),
    WeekScheme(week=19, phase=_S, sets=6, reps=3, rpe=9.0, rest_seconds=180),
    WeekScheme(week=20, phase=_S, sets=5, reps=6, rpe=8.5, rest_seconds=180),
    WeekScheme(week=21, phase=_S, sets=6, reps=3, rpe=9.0, rest_seconds=180),
)

TABLE_WEEKS = len(WEEKLY_SCHEME)

# (last week of bucket, phase, focus label, intensity factor)
_PHASE_BUCKETS: tuple[tuple[int, MacroPhase, str, float], ...] = (
    (4, MacroPhase.ADAPTATION, "Correction Posturale & Mobilité", 0.6),
    (10, MacroPhase.DEVELOPMENT, "Renforcement Fondamental", 0.75),
    (16, MacroPhase.INTENSIFICATION, "Force & Puissance", 0.9),
    (20, MacroPhase.SPECIALIZATION, "Objectif Spécifique", 0.85),
)
_FINAL_PHASE = ProgramPhase(
    phase=MacroPhase.CONSOLIDATION,
    focus="Optimisation & Performance",
    intensity=0.8,
)

_WEEKLY_CYCLE: tuple[WeeklyFocus, ...] = (
    WeeklyFocus(focus=TrainingFocus.STRENGTH, label="Force", intensity=0.85),
    WeeklyFocus(focus=TrainingFocus.HYPERTROPHY, label="Volume & Hypertrophie", intensity=0.75),
    WeeklyFocus(focus=TrainingFocus.ENDURANCE, label="Endurance & Mobilité", intensity=0.65),
)


def week_scheme(week_number: int) -> WeekScheme | None:
    """Get the periodization row for a week.

    Args:
        week_number: Week number (1-based)

    Returns:
        WeekScheme, or None outside the table range
    """
    if week_number < 1 or week_number > TABLE_WEEKS:
        return None
    return WEEKLY_SCHEME[week_number - 1]


def is_gate_week(week_number: int) -> bool:
    """Return True for the week that requires a pain/exertion check."""
    return week_number == GATE_WEEK


def _require_valid_week(week_number: int) -> None:
    if week_number < 1:
        raise InvalidReferenceError(f"Week number must be >= 1, got {week_number}")


def program_phase(week_number: int) -> ProgramPhase:
    """Resolve the macro phase of a week.

    Phase determination logic:
    - weeks 1-4: adaptation
    - weeks 5-10: development
    - weeks 11-16: intensification
    - weeks 17-20: specialization
    - weeks 21+: consolidation

    Raises:
        InvalidReferenceError: If week_number < 1
    """
    _require_valid_week(week_number)
    for last_week, phase, focus, intensity in _PHASE_BUCKETS:
        if week_number <= last_week:
            return ProgramPhase(phase=phase, focus=focus, intensity=intensity)
    return _FINAL_PHASE


def weekly_focus(week_number: int) -> WeeklyFocus:
    """Resolve the 3-week rotating micro-focus (strength, volume, endurance).

    Raises:
        InvalidReferenceError: If week_number < 1
    """
    _require_valid_week(week_number)
    return _WEEKLY_CYCLE[(week_number - 1) % len(_WEEKLY_CYCLE)]


def _has_injury_in(injuries: list[str], zones: tuple[str, ...]) -> bool:
    lowered = [injury.lower() for injury in injuries]
    return any(zone in injury for injury in lowered for zone in zones)


def session_focus(week_number: int, session_number: int, injuries: list[str]) -> str:
    """Build the focus label of a session.

    Session 1 carries the strength/correction work, session 2 the volume
    work, later sessions the technique and recovery work. Declared upper-
    or lower-body injuries switch session 1 to posture correction during the
    first weeks and make the other sessions compensatory.

    Args:
        week_number: Week number (1-based)
        session_number: Session number within the week (1-based)
        injuries: Declared injuries

    Returns:
        Focus label
    """
    phase = program_phase(week_number)
    has_upper = _has_injury_in(injuries, UPPER_BODY_INJURY_ZONES)
    has_lower = _has_injury_in(injuries, LOWER_BODY_INJURY_ZONES)
    early_weeks = week_number <= POSTURE_CORRECTION_WEEKS

    if session_number == 1:
        if has_upper and early_weeks:
            return "Correction Posture Supérieure & Force"
        if has_lower and early_weeks:
            return "Correction Posture Inférieure & Force"
        if phase.phase == MacroPhase.ADAPTATION:
            return "Correction & Mobilité"
        return weekly_focus(week_number).label

    if session_number == 2:
        if has_upper or has_lower:
            return "Renforcement Compensatoire & Volume"
        return "Volume & Hypertrophie"

    if has_upper or has_lower:
        return "Récupération Active & Mobilité"
    return "Technique & Récupération"
