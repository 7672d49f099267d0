import asyncio
import json
import threading
from pathlib import Path
from typing import Any
from uuid import uuid4

from loguru import logger

from core.editing import session_payload
from core.exceptions import RecordNotFoundError, RoutineValidationError
from core.schemas import Routine, Workout, WorkoutSession

FILE_LOCK = threading.Lock()


def read_json_file(path: Path, default: Any) -> Any:
    with FILE_LOCK:
        if not path.exists():
            return default
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning(f"Ignoring unreadable store file {path}")
            return default


def write_json_file(path: Path, payload: Any) -> None:
    with FILE_LOCK:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


class _JsonTable:
    filename: str

    def __init__(self, directory: Path) -> None:
        self.path = Path(directory) / self.filename

    def _rows(self) -> list[dict[str, Any]]:
        data = read_json_file(self.path, [])
        return data if isinstance(data, list) else []

    def _write(self, rows: list[dict[str, Any]]) -> None:
        write_json_file(self.path, rows)

    def _insert(self, row: dict[str, Any]) -> dict[str, Any]:
        rows = self._rows()
        stored = {**row, "id": uuid4().hex}
        rows.append(stored)
        self._write(rows)
        return stored

    def _replace(self, record_id: str, row: dict[str, Any]) -> dict[str, Any]:
        rows = self._rows()
        for index, current in enumerate(rows):
            if str(current.get("id")) == record_id:
                rows[index] = {**current, **row, "id": record_id}
                self._write(rows)
                return rows[index]
        raise RecordNotFoundError(self.filename, record_id)

    def _delete_where(self, key: str, value: str) -> int:
        rows = self._rows()
        kept = [row for row in rows if str(row.get(key)) != value]
        self._write(kept)
        return len(rows) - len(kept)

    def _delete_owned(self, user_id: str) -> int:
        rows = self._rows()
        kept = [row for row in rows if not _owned_by(row, user_id)]
        self._write(kept)
        return len(rows) - len(kept)

    def _owned_rows(self, user_id: str) -> list[dict[str, Any]]:
        return [row for row in self._rows() if _owned_by(row, user_id)]


def _owned_by(row: dict[str, Any], user_id: str) -> bool:
    # rows written before accounts existed carry no user_id and belong to whoever is signed in
    return row.get("user_id") in (None, user_id)


class LocalRoutineStore(_JsonTable):
    filename = "gym-routines.json"

    async def list_routines(self, user_id: str) -> list[Routine]:
        rows = await asyncio.to_thread(self._owned_rows, user_id)
        return [Routine.model_validate(row) for row in rows]

    async def create_routine(self, user_id: str, routine: Routine) -> Routine:
        row = routine.model_dump(mode="json", exclude={"id"})
        row["user_id"] = user_id
        return Routine.model_validate(await asyncio.to_thread(self._insert, row))

    async def update_routine(self, routine: Routine) -> Routine:
        if routine.id is None:
            raise RecordNotFoundError(self.filename, "<unsaved>")
        row = routine.model_dump(mode="json", include={"name", "exercises"})
        return Routine.model_validate(await asyncio.to_thread(self._replace, routine.id, row))

    async def save_routine(self, user_id: str, routine: Routine) -> Routine:
        if not routine.is_valid:
            raise RoutineValidationError(routine.name, len(routine.exercises))
        if routine.is_saved:
            return await self.update_routine(routine)
        return await self.create_routine(user_id, routine)

    async def delete_routine(self, routine_id: str) -> None:
        if not await asyncio.to_thread(self._delete_where, "id", routine_id):
            raise RecordNotFoundError(self.filename, routine_id)

    async def delete_all(self, user_id: str) -> None:
        removed = await asyncio.to_thread(self._delete_owned, user_id)
        logger.info(f"Removed {removed} local routines for user_id={user_id}")


class LocalWorkoutStore(_JsonTable):
    filename = "gym-workouts.json"

    async def list_workouts(self, user_id: str) -> list[Workout]:
        rows = await asyncio.to_thread(self._owned_rows, user_id)
        return [Workout.model_validate(row) for row in rows]

    async def create_workout(self, user_id: str, workout: Workout) -> Workout:
        row = workout.model_dump(mode="json", exclude={"id"})
        row["user_id"] = user_id
        return Workout.model_validate(await asyncio.to_thread(self._insert, row))

    async def update_workout(self, workout: Workout) -> Workout:
        if workout.id is None:
            raise RecordNotFoundError(self.filename, "<unsaved>")
        row = workout.model_dump(mode="json", include={"routine_name", "date", "exercises"})
        return Workout.model_validate(await asyncio.to_thread(self._replace, workout.id, row))

    async def save_session(self, user_id: str, session: WorkoutSession) -> Workout:
        workout = Workout.model_validate({"id": session.id, **session_payload(session)})
        if session.is_editing and session.id:
            return await self.update_workout(workout)
        return await self.create_workout(user_id, workout)

    async def delete_workout(self, workout_id: str) -> None:
        if not await asyncio.to_thread(self._delete_where, "id", workout_id):
            raise RecordNotFoundError(self.filename, workout_id)

    async def delete_all(self, user_id: str) -> None:
        removed = await asyncio.to_thread(self._delete_owned, user_id)
        logger.info(f"Removed {removed} local workouts for user_id={user_id}")
