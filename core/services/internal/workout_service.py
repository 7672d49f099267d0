from typing import Any

from loguru import logger

from core.editing import session_payload
from core.exceptions import RecordNotFoundError, TrackerServiceError
from core.schemas import Workout, WorkoutSession
from core.services.internal.api_client import APIClient

RETURN_ROWS = {"Prefer": "return=representation"}


class WorkoutService(APIClient):
    table = "workouts"

    async def list_workouts(self, user_id: str) -> list[Workout]:
        url = self._table_url(self.table)
        status, data = await self._api_request("get", url, params={"select": "*", "user_id": f"eq.{user_id}"})
        if status != 200 or not isinstance(data, list):
            logger.warning(f"Workout lookup failed for user_id={user_id}. HTTP={status}, Response: {data}")
            return []
        return [Workout.model_validate(row) for row in data]

    async def create_workout(self, user_id: str, workout: Workout) -> Workout:
        url = self._table_url(self.table)
        body = self._row(workout)
        body["user_id"] = user_id
        status, data = await self._api_request("post", url, body, headers=RETURN_ROWS)
        if status not in {200, 201}:
            logger.error(f"Failed to create workout for user_id={user_id}: {data}")
            raise TrackerServiceError(f"Failed to create workout, received status {status}", code=status)
        return self._first_row(data, fallback=workout.model_copy(update={"user_id": user_id}))

    async def update_workout(self, workout: Workout) -> Workout:
        if workout.id is None:
            raise RecordNotFoundError(self.table, "<unsaved>")
        url = self._table_url(self.table)
        status, data = await self._api_request(
            "patch", url, self._row(workout), params={"id": f"eq.{workout.id}"}, headers=RETURN_ROWS
        )
        if status not in {200, 204}:
            logger.error(f"Failed to update workout {workout.id}. HTTP status: {status}, response: {data}")
            raise TrackerServiceError(f"Failed to update workout, received status {status}", code=status)
        if isinstance(data, list) and not data:
            raise RecordNotFoundError(self.table, workout.id)
        return self._first_row(data, fallback=workout)

    async def save_session(self, user_id: str, session: WorkoutSession) -> Workout:
        """Persist a logging session: re-edits of a saved workout update it, anything else inserts."""
        workout = Workout.model_validate({"id": session.id, **session_payload(session)})
        try:
            if session.is_editing and session.id:
                return await self.update_workout(workout)
            return await self.create_workout(user_id, workout.model_copy(update={"id": None}))
        except TrackerServiceError as e:
            logger.error(f"Error while saving workout {session.name!r} on {session.date} for user_id={user_id}: {e}")
            raise

    async def delete_workout(self, workout_id: str) -> None:
        url = self._table_url(self.table)
        status, data = await self._api_request("delete", url, params={"id": f"eq.{workout_id}"})
        if status not in {200, 204}:
            logger.error(f"Failed to delete workout {workout_id}. HTTP status: {status}, response: {data}")
            raise TrackerServiceError(f"Failed to delete workout, received status {status}", code=status)
        logger.info(f"Workout {workout_id} deleted")

    async def delete_all(self, user_id: str) -> None:
        url = self._table_url(self.table)
        status, data = await self._api_request("delete", url, params={"user_id": f"eq.{user_id}"})
        if status not in {200, 204}:
            logger.error(f"Failed to clear workouts for user_id={user_id}. HTTP status: {status}, response: {data}")
            raise TrackerServiceError(f"Failed to clear workouts, received status {status}", code=status)

    @staticmethod
    def _row(workout: Workout) -> dict[str, Any]:
        return {
            "routine_name": workout.routine_name,
            "date": workout.date,
            "exercises": [exercise.model_dump(mode="json") for exercise in workout.exercises],
        }

    @staticmethod
    def _first_row(data: Any, *, fallback: Workout) -> Workout:
        if isinstance(data, list) and data:
            return Workout.model_validate(data[0])
        if isinstance(data, dict):
            return Workout.model_validate(data)
        return fallback
