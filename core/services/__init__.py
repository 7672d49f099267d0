from core.services.internal.api_client import APIClient, APIClientHTTPError, APIClientTransportError
from core.services.internal.routine_service import RoutineService
from core.services.internal.workout_service import WorkoutService
from core.services.local_store import LocalRoutineStore, LocalWorkoutStore


__all__ = [
    "APIClient",
    "APIClientHTTPError",
    "APIClientTransportError",
    "LocalRoutineStore",
    "LocalWorkoutStore",
    "RoutineService",
    "WorkoutService",
]
