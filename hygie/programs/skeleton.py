"""Program skeleton generation.

Lays out every week and session of a program with focus labels and empty
workout slots. No exercise is selected here: plans are synthesized on
demand so that they reflect the client data current at training time.
"""

import uuid
from datetime import UTC, datetime

from loguru import logger

from hygie.config.settings import settings
from hygie.programs.models import Program, SessionProgram, WeekProgram
from hygie.programs.periodization import TABLE_WEEKS, program_phase, session_focus
from hygie.programs.schemas import ClientProfile
from hygie.programs.validators import validate_program_parameters


def default_program_name(profile: ClientProfile, duration_weeks: int) -> str:
    return f"Programme {profile.main_goal} - {duration_weeks} semaines"


def create_program(
    profile: ClientProfile,
    duration_weeks: int,
    sessions_per_week: int,
    name: str | None = None,
    created_at: datetime | None = None,
) -> Program:
    """Build the full program shell for a client.

    Args:
        profile: Client profile (injuries drive the session focus labels)
        duration_weeks: Number of weeks
        sessions_per_week: Sessions in every week
        name: Optional display name
        created_at: Creation timestamp (defaults to now, UTC)

    Returns:
        Program with every slot empty and the cursor at (1, 1)

    Raises:
        InvalidConfigurationError: If duration or sessions per week are invalid
    """
    validate_program_parameters(
        duration_weeks=duration_weeks,
        sessions_per_week=sessions_per_week,
        max_weeks=settings.max_program_weeks,
        max_sessions_per_week=settings.max_sessions_per_week,
    )

    if duration_weeks > TABLE_WEEKS:
        logger.warning(
            "Program runs past the periodization table; later weeks cannot be synthesized",
            client_id=profile.id,
            duration_weeks=duration_weeks,
            table_weeks=TABLE_WEEKS,
        )

    weeks = tuple(
        WeekProgram(
            week_number=week,
            focus=program_phase(week).focus,
            sessions=tuple(
                SessionProgram(
                    session_number=session,
                    focus=session_focus(week, session, profile.injuries),
                )
                for session in range(1, sessions_per_week + 1)
            ),
        )
        for week in range(1, duration_weeks + 1)
    )

    program = Program(
        id=f"program_{uuid.uuid4().hex}",
        name=name or default_program_name(profile, duration_weeks),
        duration_weeks=duration_weeks,
        sessions_per_week=sessions_per_week,
        created_at=created_at or datetime.now(UTC),
        current_week=1,
        current_session=1,
        weeks=weeks,
    )

    logger.info(
        "Program skeleton created",
        program_id=program.id,
        client_id=profile.id,
        duration_weeks=duration_weeks,
        sessions_per_week=sessions_per_week,
    )

    return program
