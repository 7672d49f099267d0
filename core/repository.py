from typing import Protocol, Sequence

from loguru import logger

from core.exceptions import TrackerServiceError, UserNotSignedInError
from core.schemas import Routine, Workout, WorkoutSession


class RoutineBackend(Protocol):
    async def list_routines(self, user_id: str) -> list[Routine]: ...

    async def create_routine(self, user_id: str, routine: Routine) -> Routine: ...

    async def save_routine(self, user_id: str, routine: Routine) -> Routine: ...

    async def delete_routine(self, routine_id: str) -> None: ...

    async def delete_all(self, user_id: str) -> None: ...


class WorkoutBackend(Protocol):
    async def list_workouts(self, user_id: str) -> list[Workout]: ...

    async def create_workout(self, user_id: str, workout: Workout) -> Workout: ...

    async def save_session(self, user_id: str, session: WorkoutSession) -> Workout: ...

    async def delete_workout(self, workout_id: str) -> None: ...

    async def delete_all(self, user_id: str) -> None: ...


class TrackerRepository:
    """Snapshot of one user's routines and workouts over a storage backend.

    Mutations go to the backend first; the in-memory lists change only when
    the backend call succeeded.
    """

    def __init__(self, user_id: str, routines: RoutineBackend, workouts: WorkoutBackend) -> None:
        if not user_id:
            raise UserNotSignedInError()
        self.user_id = user_id
        self._routine_backend = routines
        self._workout_backend = workouts
        self.routines: list[Routine] = []
        self.workouts: list[Workout] = []

    async def load(self) -> None:
        try:
            routines = await self._routine_backend.list_routines(self.user_id)
            workouts = await self._workout_backend.list_workouts(self.user_id)
        except TrackerServiceError as e:
            logger.error(f"Error loading data for user_id={self.user_id}: {e}")
            raise
        self.routines = routines
        self.workouts = [w for w in workouts if w.is_saved]
        logger.debug(f"Loaded {len(self.routines)} routines and {len(self.workouts)} workouts")

    async def save_routine(self, routine: Routine) -> Routine:
        saved = await self._routine_backend.save_routine(self.user_id, routine)
        await self.load()
        logger.info(f"Routine {saved.name!r} saved")
        return saved

    async def delete_routine(self, routine_id: str) -> None:
        try:
            await self._routine_backend.delete_routine(routine_id)
        except TrackerServiceError as e:
            logger.error(f"Error deleting routine {routine_id}: {e}")
            raise
        self.routines = [r for r in self.routines if r.id != routine_id]

    async def save_workout(self, session: WorkoutSession) -> Workout:
        saved = await self._workout_backend.save_session(self.user_id, session)
        await self.load()
        logger.info(f"Workout {saved.routine_name!r} on {saved.date} saved")
        return saved

    async def delete_workout(self, workout_id: str) -> None:
        try:
            await self._workout_backend.delete_workout(workout_id)
        except TrackerServiceError as e:
            logger.error(f"Error deleting workout {workout_id}: {e}")
            raise
        self.workouts = [w for w in self.workouts if w.id != workout_id]

    async def import_data(self, routines: Sequence[Routine], workouts: Sequence[Workout]) -> None:
        for routine in routines:
            await self._routine_backend.create_routine(self.user_id, routine)
        for workout in workouts:
            await self._workout_backend.create_workout(self.user_id, workout)
        await self.load()
        logger.info(f"Imported {len(routines)} routines and {len(workouts)} workouts")

    async def clear_all(self) -> None:
        try:
            await self._routine_backend.delete_all(self.user_id)
            await self._workout_backend.delete_all(self.user_id)
        except TrackerServiceError as e:
            logger.error(f"Error clearing data for user_id={self.user_id}: {e}")
            raise
        self.routines = []
        self.workouts = []

    def find_routine(self, routine_id: str) -> Routine | None:
        return next((r for r in self.routines if r.id == routine_id), None)

    def find_workout(self, workout_id: str) -> Workout | None:
        return next((w for w in self.workouts if w.id == workout_id), None)
