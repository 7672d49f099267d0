from typing import Any

from loguru import logger

from core.exceptions import RecordNotFoundError, RoutineValidationError, TrackerServiceError
from core.schemas import Routine
from core.services.internal.api_client import APIClient

RETURN_ROWS = {"Prefer": "return=representation"}


class RoutineService(APIClient):
    table = "routines"

    async def list_routines(self, user_id: str) -> list[Routine]:
        url = self._table_url(self.table)
        status, data = await self._api_request("get", url, params={"select": "*", "user_id": f"eq.{user_id}"})
        if status != 200 or not isinstance(data, list):
            logger.warning(f"Routine lookup failed for user_id={user_id}. HTTP={status}, Response: {data}")
            return []
        return [Routine.model_validate(row) for row in data]

    async def create_routine(self, user_id: str, routine: Routine) -> Routine:
        url = self._table_url(self.table)
        body: dict[str, Any] = {
            "user_id": user_id,
            "name": routine.name,
            "exercises": [exercise.model_dump(mode="json") for exercise in routine.exercises],
        }
        status, data = await self._api_request("post", url, body, headers=RETURN_ROWS)
        if status not in {200, 201}:
            logger.error(f"Failed to create routine for user_id={user_id}: {data}")
            raise TrackerServiceError(f"Failed to create routine, received status {status}", code=status)
        return self._first_row(data, fallback=routine.model_copy(update={"user_id": user_id}))

    async def update_routine(self, routine: Routine) -> Routine:
        if routine.id is None:
            raise RecordNotFoundError(self.table, "<unsaved>")
        url = self._table_url(self.table)
        body = {
            "name": routine.name,
            "exercises": [exercise.model_dump(mode="json") for exercise in routine.exercises],
        }
        status, data = await self._api_request(
            "patch", url, body, params={"id": f"eq.{routine.id}"}, headers=RETURN_ROWS
        )
        if status not in {200, 204}:
            logger.error(f"Failed to update routine {routine.id}. HTTP status: {status}, response: {data}")
            raise TrackerServiceError(f"Failed to update routine, received status {status}", code=status)
        if isinstance(data, list) and not data:
            raise RecordNotFoundError(self.table, routine.id)
        return self._first_row(data, fallback=routine)

    async def save_routine(self, user_id: str, routine: Routine) -> Routine:
        """Insert a new routine or update the stored one, depending on whether it has an id."""
        if not routine.is_valid:
            raise RoutineValidationError(routine.name, len(routine.exercises))
        try:
            if routine.is_saved:
                return await self.update_routine(routine)
            return await self.create_routine(user_id, routine)
        except TrackerServiceError as e:
            logger.error(f"Error while saving routine {routine.name!r} for user_id={user_id}: {e}")
            raise

    async def delete_routine(self, routine_id: str) -> None:
        url = self._table_url(self.table)
        status, data = await self._api_request("delete", url, params={"id": f"eq.{routine_id}"})
        if status not in {200, 204}:
            logger.error(f"Failed to delete routine {routine_id}. HTTP status: {status}, response: {data}")
            raise TrackerServiceError(f"Failed to delete routine, received status {status}", code=status)
        logger.info(f"Routine {routine_id} deleted")

    async def delete_all(self, user_id: str) -> None:
        url = self._table_url(self.table)
        status, data = await self._api_request("delete", url, params={"user_id": f"eq.{user_id}"})
        if status not in {200, 204}:
            logger.error(f"Failed to clear routines for user_id={user_id}. HTTP status: {status}, response: {data}")
            raise TrackerServiceError(f"Failed to clear routines, received status {status}", code=status)

    @staticmethod
    def _first_row(data: Any, *, fallback: Routine) -> Routine:
        if isinstance(data, list) and data:
            return Routine.model_validate(data[0])
        if isinstance(data, dict):
            return Routine.model_validate(data)
        return fallback
