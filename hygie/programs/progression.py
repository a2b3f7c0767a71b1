"""Completion tracking and phase gate evaluation.

The cursor (current_week, current_session) only moves through this module.
Every function returns a new Program value; callers persist it.

Gate rule: at the gate week the client proceeds only when no recent session
mentions pain AND the last reported RPE does not exceed the week's target.
"""

import math
from dataclasses import replace
from datetime import UTC, datetime

from loguru import logger

from hygie.config.settings import settings
from hygie.programs.constants import (
    BASE_WEIGHT_INCREASE_PERCENT,
    EXPERIENCE_PROGRESSION_MULTIPLIER,
    GATE_WEEK,
    PAIN_KEYWORDS,
)
from hygie.programs.enums import GateAction
from hygie.programs.errors import InvalidReferenceError
from hygie.programs.models import (
    CompletionOutcome,
    GateResult,
    Program,
    ProgressionSuggestion,
)
from hygie.programs.periodization import is_gate_week, week_scheme
from hygie.programs.schemas import ClientProfile, SessionRecord


def mark_completed(
    program: Program,
    week_number: int,
    session_number: int,
    completed_at: datetime | None = None,
) -> Program:
    """Mark a session complete and advance the cursor.

    Cursor rules:
    - Every session of the week complete and not the last week: (week + 1, 1)
    - Otherwise, session < sessions_per_week: (week, session + 1)
    - Otherwise unchanged (program finished)

    Args:
        program: Program to update
        week_number: Week of the completed session
        session_number: Completed session
        completed_at: Completion timestamp (defaults to now, UTC)

    Returns:
        New Program value

    Raises:
        InvalidReferenceError: If the week or session does not exist
    """
    week = program.find_week(week_number)
    if week is None:
        raise InvalidReferenceError(f"Week {week_number} not found in program {program.id}")
    session = week.find_session(session_number)
    if session is None:
        raise InvalidReferenceError(f"Session {session_number} not found in week {week_number} of program {program.id}")

    done = replace(session, completed=True, completed_at=completed_at or datetime.now(UTC))
    updated = program.replace_session(week_number, done)

    all_completed = all(s.completed for s in updated.find_week(week_number).sessions)
    if all_completed and week_number < program.duration_weeks:
        cursor = (week_number + 1, 1)
    elif session_number < program.sessions_per_week:
        cursor = (week_number, session_number + 1)
    else:
        cursor = (program.current_week, program.current_session)

    logger.info(
        "Session marked completed",
        program_id=program.id,
        week=week_number,
        session=session_number,
        week_completed=all_completed,
        cursor_week=cursor[0],
        cursor_session=cursor[1],
    )

    return replace(updated, current_week=cursor[0], current_session=cursor[1])


def _mentions_pain(record: SessionRecord) -> bool:
    text = f"{record.mood} {record.debrief}".lower()
    return any(keyword in text for keyword in PAIN_KEYWORDS)


def select_gate_records(
    records: list[SessionRecord],
    gate_week: int = GATE_WEEK,
    lookback: int | None = None,
) -> list[SessionRecord]:
    """Pick the session records that belong to the gate week.

    Records carrying an explicit week tag are matched on it. When no record
    carries a tag, every record is a candidate. Only the last ``lookback``
    candidates are kept, so an earlier failed attempt at the gate week does
    not count against a retry.
    """
    if any(record.week is not None for record in records):
        candidates = [record for record in records if record.week == gate_week]
    else:
        candidates = list(records)
    size = lookback if lookback is not None else settings.gate_lookback_sessions
    if size <= 0:
        return []
    return candidates[-size:]


def evaluate_gate(
    week_number: int,
    recent_records: list[SessionRecord],
    target_rpe: float,
    lookback: int | None = None,
) -> GateResult:
    """Decide whether the client may move past the gate week.

    Args:
        week_number: Week being evaluated
        recent_records: Recent session records, oldest first
        target_rpe: Target RPE of the gate week
        lookback: Most recent gate-week records to inspect (defaults to settings)

    Returns:
        GateResult; non-gate weeks always proceed
    """
    if not is_gate_week(week_number):
        return GateResult(can_proceed=True, reason="Not a gate week", action=GateAction.PROCEED)

    gate_records = select_gate_records(recent_records, GATE_WEEK, lookback)

    if not gate_records:
        logger.warning("Gate week evaluated without session records", week=week_number)
        return GateResult(
            can_proceed=False,
            reason=f"No session found for week {GATE_WEEK}",
            action=GateAction.REPEAT_PREVIOUS_WEEK,
            repeat_week=GATE_WEEK - 1,
        )

    has_pain = any(_mentions_pain(record) for record in gate_records)
    last_rpe = gate_records[-1].rpe
    actual_rpe = last_rpe if last_rpe is not None else target_rpe
    rpe_exceeded = actual_rpe > target_rpe

    if not has_pain and not rpe_exceeded:
        result = GateResult(
            can_proceed=True,
            reason="Gate passed: no pain reported and RPE within target",
            action=GateAction.PROCEED,
        )
    elif rpe_exceeded:
        reason = (
            f"Pain reported during week {GATE_WEEK}"
            if has_pain
            else f"Actual RPE ({actual_rpe:g}) above target RPE ({target_rpe:g})"
        )
        result = GateResult(
            can_proceed=False,
            reason=reason,
            action=GateAction.REPEAT_PREVIOUS_WEEK,
            repeat_week=GATE_WEEK - 1,
        )
    else:
        result = GateResult(
            can_proceed=False,
            reason=f"Pain reported during week {GATE_WEEK}",
            action=GateAction.REPEAT_TWO_WEEKS_BACK,
            repeat_week=GATE_WEEK - 2,
        )

    logger.info(
        "Gate evaluated",
        week=week_number,
        records=len(gate_records),
        has_pain=has_pain,
        actual_rpe=actual_rpe,
        target_rpe=target_rpe,
        can_proceed=result.can_proceed,
        action=result.action.value,
    )
    return result


def record_completion(
    program: Program,
    profile: ClientProfile,
    week_number: int,
    session_number: int,
    completed_at: datetime | None = None,
) -> CompletionOutcome:
    """Mark a session complete and run the gate once the gate week is done.

    The gate decision is only reported; apply it with ``rewind_to_week``.
    """
    updated = mark_completed(program, week_number, session_number, completed_at)

    if not is_gate_week(week_number):
        return CompletionOutcome(program=updated)
    if not all(s.completed for s in updated.find_week(week_number).sessions):
        return CompletionOutcome(program=updated)

    scheme = week_scheme(week_number)
    if scheme is None:
        raise InvalidReferenceError(f"Week {week_number} is outside the periodization table")

    gate = evaluate_gate(week_number, profile.session_records, scheme.rpe)
    return CompletionOutcome(program=updated, gate=gate)


def rewind_to_week(program: Program, week_number: int) -> Program:
    """Send the client back to the start of a week.

    Completion of that week and every later week is cleared; generated plans
    stay cached. The cursor moves to (week_number, 1).

    Raises:
        InvalidReferenceError: If the week does not exist
    """
    if program.find_week(week_number) is None:
        raise InvalidReferenceError(f"Week {week_number} not found in program {program.id}")

    weeks = tuple(
        replace(
            week,
            sessions=tuple(replace(s, completed=False, completed_at=None) for s in week.sessions),
        )
        if week.week_number >= week_number
        else week
        for week in program.weeks
    )

    logger.info(
        "Program rewound",
        program_id=program.id,
        from_week=program.current_week,
        to_week=week_number,
    )
    return replace(program, weeks=weeks, current_week=week_number, current_session=1)


def calculate_progression(
    profile: ClientProfile,
    program: Program,
    week_number: int,
) -> ProgressionSuggestion:
    """Suggest next week's load and rep increase.

    Returns zero progression when the week is unknown or has no completed
    session. Otherwise scales the base increase by the client's experience.
    """
    week = program.find_week(week_number)
    if week is None or not any(s.completed for s in week.sessions):
        return ProgressionSuggestion(weight_increase_percent=0.0, rep_increase=0)

    multiplier = EXPERIENCE_PROGRESSION_MULTIPLIER[profile.experience.value]
    return ProgressionSuggestion(
        weight_increase_percent=BASE_WEIGHT_INCREASE_PERCENT * multiplier,
        rep_increase=math.floor(multiplier + 0.5),
    )
