from types import SimpleNamespace
from typing import Any, Callable

import httpx
import pytest

from core.schemas import Workout


def _build_workout(date: str, exercises: list[dict[str, Any]], **extra: Any) -> Workout:
    payload: dict[str, Any] = {"routine_name": "Push", "date": date, "exercises": exercises}
    payload.update(extra)
    return Workout.model_validate(payload)


@pytest.fixture
def sample_workout() -> Workout:
    return _build_workout(
        "2026-01-05",
        [
            {"name": "Bench Press", "sets": [{"weight": 80, "reps": 10}, {"weight": 80, "reps": 8}]},
            {"name": "Fly", "sets": [{"weight": 40, "reps": 12}]},
        ],
        id="w-1",
    )


@pytest.fixture
def api_settings() -> SimpleNamespace:
    return SimpleNamespace(
        DATA_API_URL="http://testserver",
        DATA_API_KEY="test_api_key",
        DATA_API_TIMEOUT=5,
        API_MAX_RETRIES=0,
        API_RETRY_INITIAL_DELAY=0.0,
        API_RETRY_BACKOFF_FACTOR=2.0,
        API_RETRY_MAX_DELAY=0.0,
        access_token="user-token",
    )


@pytest.fixture
def mock_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def make_workout() -> Callable[..., Workout]:
    return _build_workout
