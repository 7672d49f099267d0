from core.progress import exercise_series, progress_stats


def test_series_skips_sessions_where_exercise_was_not_performed(make_workout) -> None:
    workouts = [
        make_workout("2026-01-08", [{"name": "Squat", "sets": [{"weight": 0, "reps": 0}, {"weight": 0, "reps": 0}]}]),
        make_workout(
            "2026-01-01",
            [{"name": "Squat", "sets": [{"weight": 100, "reps": 5}, {"weight": 110, "reps": 3}]}],
        ),
    ]

    points = exercise_series("Squat", workouts, "es")

    assert [p.model_dump() for p in points] == [{"date": "1 ene", "max_weight": 110, "total_volume": 830}]


def test_series_is_sorted_by_date_and_stable_for_same_day(make_workout) -> None:
    workouts = [
        make_workout("2026-02-10", [{"name": "Bench", "sets": [{"weight": 70, "reps": 5}]}]),
        make_workout("2026-01-20", [{"name": "Bench", "sets": [{"weight": 60, "reps": 5}]}]),
        make_workout("2026-01-20", [{"name": "Bench", "sets": [{"weight": 65, "reps": 5}]}]),
        make_workout("2026-01-25", [{"name": "Row", "sets": [{"weight": 50, "reps": 10}]}]),
    ]

    points = exercise_series("Bench", workouts, "en")

    assert [(p.date, p.max_weight) for p in points] == [("Jan 20", 60), ("Jan 20", 65), ("Feb 10", 70)]


def test_series_uses_first_matching_exercise_in_workout(make_workout) -> None:
    workout = make_workout(
        "2026-03-03",
        [
            {"name": "Curl", "sets": [{"weight": 12, "reps": 10}]},
            {"name": "Curl", "sets": [{"weight": 20, "reps": 10}]},
        ],
    )

    (point,) = exercise_series("Curl", [workout], "es")

    assert point.max_weight == 12
    assert point.total_volume == 120


def test_series_matches_names_exactly(make_workout) -> None:
    workouts = [make_workout("2026-01-01", [{"name": "squat", "sets": [{"weight": 100, "reps": 5}]}])]
    assert exercise_series("Squat", workouts) == []


def test_series_empty_input() -> None:
    assert exercise_series("Nonexistent", []) == []


def test_series_defaults_to_configured_locale(make_workout) -> None:
    workouts = [make_workout("2026-08-15", [{"name": "Dip", "sets": [{"weight": 0, "reps": 12}]}])]
    assert exercise_series("Dip", workouts)[0].date == "15 ago"


def test_progress_stats(make_workout) -> None:
    workouts = [
        make_workout("2026-01-01", [{"name": "Squat"}, {"name": "Bench"}]),
        make_workout("2026-01-01", [{"name": "Row"}]),
        make_workout("2026-01-03", [{"name": "Squat"}]),
    ]

    stats = progress_stats(workouts)

    assert (stats.workouts, stats.exercises, stats.active_days) == (3, 3, 2)
