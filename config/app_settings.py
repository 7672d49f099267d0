# ruff: noqa: E501
from pathlib import Path
from typing import Annotated, Any
from urllib.parse import urlsplit, urlunsplit

from loguru import logger
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings

from core.enums import ChartLocale, StorageBackend


class Settings(BaseSettings):
    # --- Core Settings ---
    ENVIRONMENT: Annotated[str, Field(default="development", description="Application environment (e.g., 'development', 'production').")]
    SITE_NAME: Annotated[str, Field(default="GymTracker", description="Public name of the application.")]

    # --- Logging ---
    LOG_LEVEL: Annotated[str, Field(default="DEBUG", description="Logging level for the application (e.g., DEBUG, INFO, WARNING).")]
    LOG_VERBOSE_HTTP: Annotated[bool, Field(default=False, description="If True, httpx/httpcore logs are forwarded at INFO level.")]

    # --- Storage ---
    STORAGE_BACKEND: Annotated[StorageBackend, Field(default=StorageBackend.remote, description="Where routines and workouts are persisted: 'remote' table store or 'local' JSON files.")]
    LOCAL_STORAGE_DIR: Annotated[Path, Field(default=Path("data"), description="Directory holding the local JSON store files.")]

    # --- Remote table store ---
    DATA_API_URL: Annotated[str, Field(default="http://127.0.0.1:54321", description="Base URL of the hosted table store (REST endpoint root).")]
    DATA_API_KEY: Annotated[str, Field(default="", description="Anon/service key sent with every request to the table store.")]
    DATA_API_ACCESS_TOKEN: Annotated[str, Field(default="", description="User session token; falls back to DATA_API_KEY when empty.")]
    DATA_API_USER_ID: Annotated[str, Field(default="", description="Identifier of the signed-in user whose records are loaded.")]
    DATA_API_TIMEOUT: Annotated[int, Field(default=10, description="Default timeout in seconds for table store calls.")]
    API_MAX_RETRIES: int = Field(default=1, description="Maximum number of retries for failing outbound API calls.")
    API_RETRY_INITIAL_DELAY: float = Field(default=1.0, description="Initial delay in seconds for API call retries.")
    API_RETRY_BACKOFF_FACTOR: float = Field(default=2.0, description="Factor by which to increase delay between API retries.")
    API_RETRY_MAX_DELAY: float = Field(default=10.0, description="Maximum delay in seconds between API retries.")

    # --- Tracker behaviour ---
    CHART_LOCALE: Annotated[ChartLocale, Field(default=ChartLocale.es, description="Locale used for chart and calendar date labels.")]
    DEFAULT_TARGET_SETS: Annotated[int, Field(default=3, ge=0, description="Target sets for a newly added routine exercise.")]
    DEFAULT_TARGET_REPS: Annotated[int, Field(default=10, ge=0, description="Target reps for a newly added routine exercise.")]

    @field_validator("CHART_LOCALE", mode="before")
    @classmethod
    def _normalize_locale(cls, value: Any) -> Any:
        """Accept full locale tags like 'es-ES' or 'en_US' and keep only the language part."""
        if isinstance(value, str):
            return value.replace("_", "-").split("-", 1)[0].lower()
        return value

    @field_validator("DATA_API_URL", mode="before")
    @classmethod
    def _normalize_api_url(cls, value: Any) -> str:
        if value is None:
            return ""
        candidate = str(value).strip()
        if not candidate:
            return ""
        if "://" not in candidate:
            candidate = f"http://{candidate}"
        parsed = urlsplit(candidate)
        return urlunsplit((parsed.scheme, parsed.netloc, parsed.path.rstrip("/"), "", ""))

    @model_validator(mode="after")
    def _check_remote_credentials(self) -> "Settings":
        if self.STORAGE_BACKEND is StorageBackend.remote and not self.DATA_API_KEY:
            logger.warning("DATA_API_KEY is empty; remote table store requests will be unauthenticated")
        return self

    @property
    def access_token(self) -> str:
        return self.DATA_API_ACCESS_TOKEN or self.DATA_API_KEY


settings = Settings()  # noqa  # pyrefly: ignore[missing-argument]
