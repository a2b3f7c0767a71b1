"""Tests for suggested load calculation."""

from datetime import timedelta

import pytest

from hygie.programs.enums import ExperienceLevel
from hygie.programs.loads import (
    calculate_suggested_weight,
    extract_reps,
    extract_weight,
    find_personal_best,
    format_load,
    percentage_for_reps,
    update_personal_best,
)
from hygie.programs.schemas import ClientProfile, PerformanceEntry, PerformedExercise, SessionRecord


@pytest.mark.parametrize(
    ("text", "expected"),
    [("10-12", 10), ("8", 8), ("Echec", 1), ("max", 1), ("", 1), (None, 1), ("beaucoup", 1)],
)
def test_extract_reps(text, expected):
    assert extract_reps(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [("50kg", 50.0), ("12,5 kg", 12.5), ("7.5", 7.5), ("PDC", 0.0), (None, 0.0)],
)
def test_extract_weight(text, expected):
    assert extract_weight(text) == expected


def test_percentage_for_reps():
    assert percentage_for_reps(1) == 100.0
    assert percentage_for_reps(7) == 80.0
    assert percentage_for_reps(12) == 70.0
    assert percentage_for_reps(25) == 55.0


def test_find_personal_best_prefers_stored_value(fixed_now):
    stored = PerformanceEntry(weight=40, reps=5, date=fixed_now)
    client = ClientProfile(
        id="c",
        name="Sam",
        personal_bests={"Goblet Squat": stored},
        session_records=[
            SessionRecord(date=fixed_now, exercises=[PerformedExercise(name="Goblet Squat", weight=60, reps=10)]),
        ],
    )
    assert find_personal_best(client, "Goblet Squat") == stored


def test_find_personal_best_scans_history_by_volume(fixed_now):
    client = ClientProfile(
        id="c",
        name="Sam",
        session_records=[
            SessionRecord(date=fixed_now, exercises=[PerformedExercise(name="goblet squat", weight=20, reps=12)]),
            SessionRecord(
                date=fixed_now + timedelta(days=3),
                exercises=[PerformedExercise(name="Goblet Squat", weight=24, reps=8)],
            ),
        ],
    )
    best = find_personal_best(client, "Goblet Squat")
    assert (best.weight, best.reps) == (20, 12)


def test_find_personal_best_without_history(healthy_client):
    assert find_personal_best(healthy_client, "Goblet Squat") is None


def test_suggested_weight_fallback_load(healthy_client):
    assert calculate_suggested_weight(healthy_client, "Row", 8, "16 kg") == 16.0


def test_suggested_weight_body_weight_fallback(healthy_client):
    # 68 kg x 0.4 = 27.2 -> 27.5
    assert calculate_suggested_weight(healthy_client, "Row", 8, "PDC") == 27.5


def test_suggested_weight_default_body_weight_for_beginner():
    client = ClientProfile(id="c", name="Sam", experience=ExperienceLevel.BEGINNER)
    # 70 kg x 0.2 = 14 -> 15
    assert calculate_suggested_weight(client, "Row", 8) == 15.0


def test_suggested_weight_from_history_beginner_discount(fixed_now):
    best = PerformanceEntry(weight=60, reps=10, date=fixed_now)
    intermediate = ClientProfile(id="c", name="Sam", personal_bests={"Squat": best})
    beginner = intermediate.model_copy(update={"experience": ExperienceLevel.BEGINNER})

    # 1RM 80 kg, 75% for 10 reps = 60 kg; beginners get 85% -> 51 -> 50
    assert calculate_suggested_weight(intermediate, "Squat", 10) == 60.0
    assert calculate_suggested_weight(beginner, "Squat", 10) == 50.0


def test_suggested_weight_minimum_increment(fixed_now):
    client = ClientProfile(
        id="c",
        name="Sam",
        personal_bests={"Curl": PerformanceEntry(weight=2, reps=5, date=fixed_now)},
    )
    assert calculate_suggested_weight(client, "Curl", 20) == 2.5


def test_format_load():
    assert format_load(32.5) == "32.5 kg"
    assert format_load(20.0) == "20 kg"


def test_update_personal_best_records_better_volume(healthy_client, fixed_now):
    updated = update_personal_best(healthy_client, "Squat", 50, 8, achieved_at=fixed_now)

    assert updated is not healthy_client
    assert updated.personal_bests["Squat"].weight == 50
    assert healthy_client.personal_bests == {}


def test_update_personal_best_keeps_better_record(healthy_client, fixed_now):
    first = update_personal_best(healthy_client, "Squat", 50, 8, achieved_at=fixed_now)
    second = update_personal_best(first, "Squat", 40, 8, achieved_at=fixed_now)
    assert second is first


def test_update_personal_best_heavier_at_equal_volume(healthy_client, fixed_now):
    first = update_personal_best(healthy_client, "Squat", 40, 10, achieved_at=fixed_now)
    second = update_personal_best(first, "Squat", 50, 8, achieved_at=fixed_now)
    assert second.personal_bests["Squat"].weight == 50
