from typing import Sequence

from config.app_settings import settings
from core.enums import ChartLocale
from core.exercises import exercise_names, exercise_volume, is_performed, max_weight
from core.schemas import ChartPoint, ProgressStats, Workout
from core.utils.dates import from_date_key, short_label


def exercise_series(
    exercise_name: str,
    workouts: Sequence[Workout],
    locale: ChartLocale | str | None = None,
) -> list[ChartPoint]:
    """Chronological chart points for one exercise across the history.

    Workouts where the exercise was logged but skipped produce no point, so
    the trend line has no artificial drops to zero. Workouts on the same day
    keep their input order.
    """
    label_locale = locale or settings.CHART_LOCALE
    matching = [w for w in workouts if any(e.name == exercise_name for e in w.exercises)]
    matching.sort(key=lambda w: from_date_key(w.date))

    points: list[ChartPoint] = []
    for workout in matching:
        exercise = next(e for e in workout.exercises if e.name == exercise_name)
        if not is_performed(exercise):
            continue
        points.append(
            ChartPoint(
                date=short_label(from_date_key(workout.date), label_locale),
                max_weight=max_weight(exercise),
                total_volume=exercise_volume(exercise),
            )
        )
    return points


def progress_stats(workouts: Sequence[Workout]) -> ProgressStats:
    return ProgressStats(
        workouts=len(workouts),
        exercises=len(exercise_names(workouts)),
        active_days=len({w.date for w in workouts}),
    )
