"""Program validators with hard guardrails.

Enforces invariants to prevent silent corruption:
- Program parameters are positive and bounded
- Week and session numbering is contiguous and 1-based
- The cursor stays inside the program
"""

from loguru import logger

from hygie.programs.errors import InvalidConfigurationError, ProgramInvariantError
from hygie.programs.models import Program


def validate_program_parameters(
    duration_weeks: int,
    sessions_per_week: int,
    max_weeks: int,
    max_sessions_per_week: int,
) -> None:
    """Validate skeleton parameters.

    Args:
        duration_weeks: Requested program duration
        sessions_per_week: Requested sessions per week
        max_weeks: Upper bound on duration
        max_sessions_per_week: Upper bound on sessions per week

    Raises:
        InvalidConfigurationError: If a parameter is out of bounds
    """
    if duration_weeks <= 0:
        raise InvalidConfigurationError(f"duration_weeks must be > 0, got {duration_weeks}")
    if sessions_per_week <= 0:
        raise InvalidConfigurationError(f"sessions_per_week must be > 0, got {sessions_per_week}")
    if duration_weeks > max_weeks:
        raise InvalidConfigurationError(f"duration_weeks must be <= {max_weeks}, got {duration_weeks}")
    if sessions_per_week > max_sessions_per_week:
        raise InvalidConfigurationError(
            f"sessions_per_week must be <= {max_sessions_per_week}, got {sessions_per_week}"
        )


def validate_program(program: Program) -> None:
    """Validate program shape and cursor invariants.

    Enforces:
    - Exactly duration_weeks weeks, numbered 1..duration_weeks
    - Exactly sessions_per_week sessions per week, numbered 1..sessions_per_week
    - 1 <= current_week <= duration_weeks
    - 1 <= current_session <= sessions_per_week
    - A completed session has a completion timestamp

    Raises:
        ProgramInvariantError: If any invariant is violated
    """
    week_numbers = [w.week_number for w in program.weeks]
    if week_numbers != list(range(1, program.duration_weeks + 1)):
        raise ProgramInvariantError(
            "WEEK_COUNT_MISMATCH",
            [f"expected weeks 1..{program.duration_weeks}, got {week_numbers}"],
        )

    details: list[str] = []
    expected_sessions = list(range(1, program.sessions_per_week + 1))
    for week in program.weeks:
        session_numbers = [s.session_number for s in week.sessions]
        if session_numbers != expected_sessions:
            details.append(f"week {week.week_number}: sessions {session_numbers}")
        for session in week.sessions:
            if session.completed and session.completed_at is None:
                details.append(f"week {week.week_number} session {session.session_number}: completed without timestamp")
    if details:
        raise ProgramInvariantError("SESSION_LAYOUT_INVALID", details)

    if not 1 <= program.current_week <= program.duration_weeks:
        raise ProgramInvariantError(
            "CURSOR_OUT_OF_RANGE",
            [f"current_week={program.current_week} not in 1..{program.duration_weeks}"],
        )
    if not 1 <= program.current_session <= program.sessions_per_week:
        raise ProgramInvariantError(
            "CURSOR_OUT_OF_RANGE",
            [f"current_session={program.current_session} not in 1..{program.sessions_per_week}"],
        )

    logger.debug(
        "Program invariants validated",
        program_id=program.id,
        weeks=program.duration_weeks,
        sessions_per_week=program.sessions_per_week,
    )
