from typing import Any

import httpx
from dependency_injector import containers, providers

from config.app_settings import Settings, settings
from core.repository import TrackerRepository
from core.services.internal.routine_service import RoutineService
from core.services.internal.workout_service import WorkoutService
from core.services.local_store import LocalRoutineStore, LocalWorkoutStore


def build_http_client(timeout: float, **_: Any) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=timeout,
        limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
    )


class App(containers.DeclarativeContainer):
    config = providers.Configuration()
    app_settings = providers.Object(settings)

    http_client = providers.Singleton(build_http_client, timeout=config.timeout)

    routine_backend = providers.Selector(
        config.storage_backend,
        remote=providers.Factory(RoutineService, client=http_client, settings=app_settings),
        local=providers.Factory(LocalRoutineStore, directory=config.local_storage_dir),
    )
    workout_backend = providers.Selector(
        config.storage_backend,
        remote=providers.Factory(WorkoutService, client=http_client, settings=app_settings),
        local=providers.Factory(LocalWorkoutStore, directory=config.local_storage_dir),
    )

    repository = providers.Factory(
        TrackerRepository,
        user_id=config.user_id,
        routines=routine_backend,
        workouts=workout_backend,
    )


def build_container(app_settings: Settings = settings) -> App:
    container = App()
    container.app_settings.override(providers.Object(app_settings))
    container.config.from_dict(
        {
            "storage_backend": str(app_settings.STORAGE_BACKEND),
            "local_storage_dir": str(app_settings.LOCAL_STORAGE_DIR),
            "user_id": app_settings.DATA_API_USER_ID,
            "timeout": app_settings.DATA_API_TIMEOUT,
        }
    )
    return container
