from datetime import date
from typing import Any

from config.app_settings import settings
from core.enums import SetField, TemplateField
from core.schemas import ExerciseTemplate, Routine, Workout, WorkoutExercise, WorkoutSession, WorkoutSet
from core.utils.dates import to_date_key


def new_routine() -> Routine:
    return Routine(name="", exercises=[])


def add_exercise(routine: Routine) -> Routine:
    template = ExerciseTemplate(name="", sets=settings.DEFAULT_TARGET_SETS, reps=settings.DEFAULT_TARGET_REPS)
    return routine.model_copy(update={"exercises": [*routine.exercises, template]})


def update_exercise(routine: Routine, index: int, field: TemplateField | str, value: Any) -> Routine:
    key = TemplateField(field).value
    exercises = list(routine.exercises)
    current = exercises[index].model_dump()
    current[key] = value
    exercises[index] = ExerciseTemplate.model_validate(current)
    return routine.model_copy(update={"exercises": exercises})


def remove_exercise(routine: Routine, index: int) -> Routine:
    exercises = [exercise for i, exercise in enumerate(routine.exercises) if i != index]
    return routine.model_copy(update={"exercises": exercises})


def start_workout(routine: Routine, day: date | None = None) -> WorkoutSession:
    """Open a logging session with one empty set per target set of each exercise."""
    return WorkoutSession(
        name=routine.name,
        date=to_date_key(day or date.today()),
        exercises=[
            WorkoutExercise(name=template.name, sets=[WorkoutSet() for _ in range(template.sets)])
            for template in routine.exercises
        ],
    )


def update_workout_set(
    session: WorkoutSession, exercise_index: int, set_index: int, field: SetField | str, value: Any
) -> WorkoutSession:
    """Replace one value of one set; the number of sets never changes while logging."""
    key = SetField(field).value
    exercises = [exercise.model_copy(deep=True) for exercise in session.exercises]
    target = exercises[exercise_index]
    updated = target.sets[set_index].model_dump()
    updated[key] = value
    target.sets[set_index] = WorkoutSet.model_validate(updated)
    return session.model_copy(update={"exercises": exercises})


def edit_workout(workout: Workout, from_calendar: bool = False) -> WorkoutSession:
    return WorkoutSession(
        id=workout.id,
        name=workout.routine_name,
        date=workout.date,
        exercises=[exercise.model_copy(deep=True) for exercise in workout.exercises],
        is_editing=True,
        from_calendar=from_calendar,
    )


def session_payload(session: WorkoutSession) -> dict[str, Any]:
    """Row body for the workouts table built from a logging session."""
    return {
        "routine_name": session.name,
        "date": session.date or to_date_key(date.today()),
        "exercises": [exercise.model_dump(mode="json") for exercise in session.exercises],
    }
