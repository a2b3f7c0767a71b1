"""Tests for completion tracking, the week-12 gate and rewinds."""

from datetime import timedelta

import pytest

from hygie.programs.enums import ExperienceLevel, GateAction
from hygie.programs.errors import InvalidReferenceError
from hygie.programs.progression import (
    calculate_progression,
    evaluate_gate,
    mark_completed,
    record_completion,
    rewind_to_week,
    select_gate_records,
)
from hygie.programs.schemas import ClientProfile, SessionRecord
from hygie.programs.skeleton import create_program


def _record(fixed_now, days=0, **kwargs) -> SessionRecord:
    return SessionRecord(date=fixed_now + timedelta(days=days), **kwargs)


def _complete_week(program, week_number, at):
    for session in range(1, program.sessions_per_week + 1):
        program = mark_completed(program, week_number, session, completed_at=at)
    return program


# ---------------------------------------------------------------------------
# mark_completed
# ---------------------------------------------------------------------------
def test_mark_completed_advances_within_week(healthy_client, fixed_now):
    program = create_program(healthy_client, 4, 3)
    updated = mark_completed(program, 1, 1, completed_at=fixed_now)

    session = updated.find_week(1).find_session(1)
    assert session.completed
    assert session.completed_at == fixed_now
    assert (updated.current_week, updated.current_session) == (1, 2)
    # Input value is untouched
    assert not program.find_week(1).find_session(1).completed


def test_mark_completed_moves_to_next_week(healthy_client, fixed_now):
    program = create_program(healthy_client, 4, 2)
    program = mark_completed(program, 1, 1, completed_at=fixed_now)
    program = mark_completed(program, 1, 2, completed_at=fixed_now)
    assert (program.current_week, program.current_session) == (2, 1)


def test_mark_completed_one_session_per_week(healthy_client, fixed_now):
    program = create_program(healthy_client, 2, 1)

    program = mark_completed(program, 1, 1, completed_at=fixed_now)
    assert (program.current_week, program.current_session) == (2, 1)

    # Last session of the last week leaves the cursor where it is
    program = mark_completed(program, 2, 1, completed_at=fixed_now)
    assert (program.current_week, program.current_session) == (2, 1)


def test_mark_completed_out_of_order_keeps_week_open(healthy_client, fixed_now):
    program = create_program(healthy_client, 4, 3)
    program = mark_completed(program, 1, 3, completed_at=fixed_now)
    # Session 3 is the last of the week but sessions 1 and 2 are still open
    assert (program.current_week, program.current_session) == (1, 1)


def test_mark_completed_is_idempotent_on_cursor(healthy_client, fixed_now):
    program = create_program(healthy_client, 4, 3)
    once = mark_completed(program, 1, 1, completed_at=fixed_now)
    twice = mark_completed(once, 1, 1, completed_at=fixed_now)
    assert (twice.current_week, twice.current_session) == (1, 2)


@pytest.mark.parametrize(("week", "session"), [(0, 1), (5, 1), (1, 4)])
def test_mark_completed_invalid_reference(healthy_client, week, session):
    program = create_program(healthy_client, 4, 3)
    with pytest.raises(InvalidReferenceError):
        mark_completed(program, week, session)


# ---------------------------------------------------------------------------
# Gate evaluation
# ---------------------------------------------------------------------------
def test_gate_non_gate_week_always_proceeds(fixed_now):
    records = [_record(fixed_now, mood="douleur au genou", rpe=10)]
    result = evaluate_gate(11, records, target_rpe=8.5)
    assert result.can_proceed
    assert result.action == GateAction.PROCEED


def test_gate_passes_without_pain_and_rpe_in_target(fixed_now):
    records = [_record(fixed_now, i, mood="En forme", rpe=8) for i in range(3)]
    result = evaluate_gate(12, records, target_rpe=8.5)
    assert result.can_proceed
    assert result.repeat_week is None


def test_gate_pain_repeats_two_weeks_back(fixed_now):
    records = [
        _record(fixed_now, 0, mood="Bien", rpe=8),
        _record(fixed_now, 1, debrief="Légère douleur à l'épaule", rpe=8),
    ]
    result = evaluate_gate(12, records, target_rpe=8.5)
    assert not result.can_proceed
    assert result.action == GateAction.REPEAT_TWO_WEEKS_BACK
    assert result.repeat_week == 10
    assert result.reason.startswith("Pain")


def test_gate_rpe_exceeded_repeats_previous_week(fixed_now):
    records = [_record(fixed_now, mood="Fatigué", rpe=9.5)]
    result = evaluate_gate(12, records, target_rpe=8.5)
    assert not result.can_proceed
    assert result.action == GateAction.REPEAT_PREVIOUS_WEEK
    assert result.repeat_week == 11
    assert "9.5" in result.reason


def test_gate_pain_and_rpe_exceeded_repeats_previous_week(fixed_now):
    records = [_record(fixed_now, mood="Douloureux", rpe=9)]
    result = evaluate_gate(12, records, target_rpe=8.5)
    assert not result.can_proceed
    assert result.repeat_week == 11
    assert result.reason.startswith("Pain")


def test_gate_missing_rpe_uses_target(fixed_now):
    result = evaluate_gate(12, [_record(fixed_now, mood="ok")], target_rpe=8.5)
    assert result.can_proceed


def test_gate_without_records_fails(log_messages):
    result = evaluate_gate(12, [], target_rpe=8.5)
    assert not result.can_proceed
    assert result.repeat_week == 11
    assert any(r["level"].name == "WARNING" for r in log_messages)


def test_gate_only_looks_at_recent_untagged_records(fixed_now):
    records = [_record(fixed_now, 0, mood="douleur", rpe=7)] + [
        _record(fixed_now, i, mood="ok", rpe=7) for i in range(1, 4)
    ]
    assert evaluate_gate(12, records, target_rpe=8.5).can_proceed
    assert not evaluate_gate(12, records, target_rpe=8.5, lookback=4).can_proceed


def test_select_gate_records_uses_week_tags(fixed_now):
    records = [
        _record(fixed_now, 0, week=11, mood="douleur"),
        _record(fixed_now, 1, week=12, mood="ok"),
        _record(fixed_now, 2, week=12, mood="ok"),
        _record(fixed_now, 3, mood="untagged"),
    ]
    selected = select_gate_records(records)
    assert [r.week for r in selected] == [12, 12]
    assert evaluate_gate(12, records, target_rpe=8.5).can_proceed


def test_gate_retry_ignores_earlier_tagged_attempt(fixed_now):
    # First attempt at week 12 reported pain, the retries after the rewind are clean
    records = [_record(fixed_now, 0, week=12, mood="douleur au genou", rpe=8)] + [
        _record(fixed_now, i, week=12, mood="ok", rpe=8) for i in range(1, 7)
    ]

    assert len(select_gate_records(records)) == 3
    result = evaluate_gate(12, records, target_rpe=8.5)
    assert result.can_proceed
    assert result.action == GateAction.PROCEED


def test_gate_tagged_window_still_sees_recent_pain(fixed_now):
    records = [_record(fixed_now, i, week=12, mood="ok", rpe=8) for i in range(3)] + [
        _record(fixed_now, 3, week=12, debrief="douleur lombaire", rpe=8),
    ]
    result = evaluate_gate(12, records, target_rpe=8.5)
    assert result.action == GateAction.REPEAT_TWO_WEEKS_BACK


def test_select_gate_records_explicit_zero_lookback(fixed_now):
    records = [_record(fixed_now, i, mood="ok", rpe=7) for i in range(3)]

    assert select_gate_records(records, lookback=0) == []
    result = evaluate_gate(12, records, target_rpe=8.5, lookback=0)
    assert not result.can_proceed
    assert result.repeat_week == 11


    assert evaluate_gate(12, records, target_rpe=8.5).can_proceed


# ---------------------------------------------------------------------------
# record_completion / rewind
# ---------------------------------------------------------------------------
def test_record_completion_outside_gate_week(healthy_client, fixed_now):
    program = create_program(healthy_client, 14, 1)
    outcome = record_completion(program, healthy_client, 1, 1, completed_at=fixed_now)
    assert outcome.gate is None
    assert outcome.program.current_week == 2


def test_record_completion_runs_gate_when_week_done(fixed_now):
    client = ClientProfile(
        id="c",
        name="Sam",
        session_records=[_record(fixed_now, mood="douleur lombaire", rpe=8)],
    )
    program = create_program(client, 14, 2)
    for week in range(1, 12):
        program = _complete_week(program, week, fixed_now)

    partial = record_completion(program, client, 12, 1, completed_at=fixed_now)
    assert partial.gate is None

    outcome = record_completion(partial.program, client, 12, 2, completed_at=fixed_now)
    assert outcome.gate is not None
    assert not outcome.gate.can_proceed
    assert outcome.gate.repeat_week == 10
    # The decision is reported, the cursor still moves on
    assert outcome.program.current_week == 13


def test_rewind_to_week(healthy_client, fixed_now):
    program = create_program(healthy_client, 14, 1)
    for week in range(1, 13):
        program = _complete_week(program, week, fixed_now)

    rewound = rewind_to_week(program, 11)

    assert (rewound.current_week, rewound.current_session) == (11, 1)
    assert rewound.find_week(10).find_session(1).completed
    assert not rewound.find_week(11).find_session(1).completed
    assert rewound.find_week(12).find_session(1).completed_at is None


def test_rewind_to_missing_week(healthy_client):
    program = create_program(healthy_client, 4, 1)
    with pytest.raises(InvalidReferenceError):
        rewind_to_week(program, 9)


# ---------------------------------------------------------------------------
# Progression suggestion
# ---------------------------------------------------------------------------
def test_progression_is_zero_without_completed_session(healthy_client):
    program = create_program(healthy_client, 4, 2)
    suggestion = calculate_progression(healthy_client, program, 1)
    assert (suggestion.weight_increase_percent, suggestion.rep_increase) == (0.0, 0)


@pytest.mark.parametrize(
    ("experience", "percent", "reps"),
    [
        (ExperienceLevel.BEGINNER, 1.25, 1),
        (ExperienceLevel.INTERMEDIATE, 2.5, 1),
        (ExperienceLevel.ADVANCED, 3.75, 2),
    ],
)
def test_progression_scales_with_experience(fixed_now, experience, percent, reps):
    client = ClientProfile(id="c", name="Sam", experience=experience)
    program = mark_completed(create_program(client, 4, 2), 1, 1, completed_at=fixed_now)

    suggestion = calculate_progression(client, program, 1)

    assert suggestion.weight_increase_percent == pytest.approx(percent)
    assert suggestion.rep_increase == reps


def test_progression_unknown_experience_uses_intermediate_rate(fixed_now):
    client = ClientProfile(id="c", name="Sam", experience="Expert confirmé")
    program = mark_completed(create_program(client, 4, 2), 1, 1, completed_at=fixed_now)

    suggestion = calculate_progression(client, program, 1)

    assert suggestion.weight_increase_percent == pytest.approx(2.5)
    assert suggestion.rep_increase == 1
