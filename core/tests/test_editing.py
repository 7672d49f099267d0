from datetime import date

import pytest

from core.editing import (
    add_exercise,
    edit_workout,
    new_routine,
    remove_exercise,
    session_payload,
    start_workout,
    update_exercise,
    update_workout_set,
)
from core.schemas import ExerciseTemplate, Routine


@pytest.fixture
def routine() -> Routine:
    return Routine(
        id="r-1",
        name="Legs",
        exercises=[ExerciseTemplate(name="Squat", sets=3, reps=5), ExerciseTemplate(name="Lunge", sets=2, reps=10)],
    )


def test_new_routine_is_not_valid_until_named_and_filled() -> None:
    draft = new_routine()
    assert not draft.is_valid
    assert not draft.is_saved

    draft = add_exercise(draft)
    assert not draft.is_valid

    draft = draft.model_copy(update={"name": "Push"})
    assert draft.is_valid


def test_add_exercise_uses_default_targets() -> None:
    draft = add_exercise(new_routine())
    assert draft.exercises == [ExerciseTemplate(name="", sets=3, reps=10)]


def test_update_exercise_coerces_and_does_not_mutate_input(routine: Routine) -> None:
    updated = update_exercise(routine, 0, "sets", "4")
    renamed = update_exercise(updated, 1, "name", "Split Squat")

    assert routine.exercises[0].sets == 3
    assert updated.exercises[0].sets == 4
    assert renamed.exercises[1].name == "Split Squat"


def test_update_exercise_rejects_unknown_field(routine: Routine) -> None:
    with pytest.raises(ValueError):
        update_exercise(routine, 0, "weight", 10)


def test_remove_exercise(routine: Routine) -> None:
    assert [e.name for e in remove_exercise(routine, 0).exercises] == ["Lunge"]
    assert len(routine.exercises) == 2


def test_start_workout_creates_placeholder_sets(routine: Routine) -> None:
    session = start_workout(routine, date(2026, 1, 5))

    assert session.name == "Legs"
    assert session.date == "2026-01-05"
    assert session.id is None
    assert [len(e.sets) for e in session.exercises] == [3, 2]
    assert all(s.weight == 0 and s.reps == 0 for e in session.exercises for s in e.sets)


def test_update_workout_set_parses_input(routine: Routine) -> None:
    session = start_workout(routine, date(2026, 1, 5))

    session = update_workout_set(session, 0, 1, "weight", "82.5")
    session = update_workout_set(session, 0, 1, "reps", "5")
    session = update_workout_set(session, 1, 0, "reps", "abc")

    assert session.exercises[0].sets[1].weight == 82.5
    assert session.exercises[0].sets[1].reps == 5
    assert session.exercises[1].sets[0].reps == 0
    assert [len(e.sets) for e in session.exercises] == [3, 2]


def test_edit_workout_round_trips_to_payload(sample_workout) -> None:
    session = edit_workout(sample_workout, from_calendar=True)

    assert session.is_editing
    assert session.from_calendar
    assert session.id == "w-1"
    assert session.name == "Push"
    assert session_payload(session) == {
        "routine_name": "Push",
        "date": "2026-01-05",
        "exercises": [
            {"name": "Bench Press", "sets": [{"weight": 80.0, "reps": 10}, {"weight": 80.0, "reps": 8}]},
            {"name": "Fly", "sets": [{"weight": 40.0, "reps": 12}]},
        ],
    }
