import csv
import io
import json
from datetime import date, datetime, timezone
from typing import Any, Sequence

from loguru import logger
from pydantic import ValidationError

from core.enums import ExportKind
from core.exceptions import ImportFormatError
from core.schemas import Routine, Workout
from core.utils.dates import to_date_key

CSV_HEADER = ("Fecha", "Rutina", "Ejercicio", "Serie", "Peso(kg)", "Repeticiones")


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def export_json(routines: Sequence[Routine], workouts: Sequence[Workout], exported_at: datetime | None = None) -> str:
    moment = exported_at or datetime.now(timezone.utc)
    payload = {
        "routines": [routine.model_dump(mode="json", exclude_none=True) for routine in routines],
        "workouts": [workout.model_dump(mode="json", exclude_none=True) for workout in workouts],
        "exportDate": moment.isoformat(),
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def export_csv(workouts: Sequence[Workout]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for workout in workouts:
        for exercise in workout.exercises:
            for index, workout_set in enumerate(exercise.sets, start=1):
                writer.writerow(
                    (
                        workout.date,
                        workout.routine_name,
                        exercise.name,
                        index,
                        _format_number(workout_set.weight),
                        workout_set.reps,
                    )
                )
    return buffer.getvalue()


def parse_import(text: str) -> tuple[list[Routine], list[Workout]]:
    """Read a JSON backup. Missing sections are treated as empty.

    Imported records drop their ids and owners; they are re-created for the
    importing user.
    """
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ImportFormatError(f"not valid JSON: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise ImportFormatError("top-level value must be an object")

    raw_routines = data.get("routines")
    raw_workouts = data.get("workouts")
    try:
        routines = [
            Routine.model_validate(item).model_copy(update={"id": None, "user_id": None})
            for item in (raw_routines if isinstance(raw_routines, list) else [])
        ]
        workouts = [
            Workout.model_validate(item).model_copy(update={"id": None, "user_id": None})
            for item in (raw_workouts if isinstance(raw_workouts, list) else [])
        ]
    except ValidationError as exc:
        raise ImportFormatError(str(exc)) from exc

    logger.info(f"Parsed import with {len(routines)} routines and {len(workouts)} workouts")
    return routines, workouts


def backup_filename(kind: ExportKind | str, day: date | None = None) -> str:
    stamp = to_date_key(day or date.today())
    if ExportKind(kind) is ExportKind.csv:
        return f"gym-workouts-{stamp}.csv"
    return f"gym-backup-{stamp}.json"
