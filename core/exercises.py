from typing import Iterable

from core.schemas import ExerciseSummary, Workout, WorkoutExercise


def is_performed(exercise: WorkoutExercise | None) -> bool:
    """An exercise counts as performed when any set has weight or reps.

    Placeholder sets (``weight == 0 and reps == 0``) are what a session starts
    with, so an exercise made only of them was skipped.
    """
    if exercise is None or not exercise.sets:
        return False
    return any(s.weight > 0 or s.reps > 0 for s in exercise.sets)


def exercise_volume(exercise: WorkoutExercise) -> float:
    return sum((s.weight * s.reps for s in exercise.sets), 0.0)


def max_weight(exercise: WorkoutExercise) -> float:
    return max((s.weight for s in exercise.sets), default=0.0)


def total_volume(workout: Workout) -> float:
    return sum((exercise_volume(exercise) for exercise in workout.exercises), 0.0)


def exercise_summaries(workout: Workout) -> list[ExerciseSummary]:
    return [
        ExerciseSummary(
            name=exercise.name,
            total_sets=len(exercise.sets),
            total_reps=sum(s.reps for s in exercise.sets),
            total_volume=exercise_volume(exercise),
            max_weight=max_weight(exercise),
            performed=is_performed(exercise),
        )
        for exercise in workout.exercises
    ]


def exercise_names(workouts: Iterable[Workout]) -> list[str]:
    names: dict[str, None] = {}
    for workout in workouts:
        for exercise in workout.exercises:
            names.setdefault(exercise.name, None)
    return list(names)
