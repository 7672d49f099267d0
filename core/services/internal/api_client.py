import asyncio
from json import JSONDecodeError, loads
from typing import Any, Optional, Protocol

import httpx
from loguru import logger

from core.exceptions import TrackerServiceError


class APIClientHTTPError(TrackerServiceError):
    def __init__(
        self,
        status: int,
        text: str,
        *,
        method: str,
        url: str,
        retryable: bool = False,
        reason: str | None = None,
    ) -> None:
        self.status = status
        self.text = text
        self.retryable = retryable
        self.reason = reason
        super().__init__(
            f"HTTP {status} on {method.upper()} {url}: {text}" if text else f"HTTP {status} on {method.upper()} {url}",
            code=status,
        )


class APIClientTransportError(TrackerServiceError):
    def __init__(self, message: str) -> None:
        super().__init__(message, code=503)


class APISettings(Protocol):
    DATA_API_URL: str
    DATA_API_KEY: str
    DATA_API_TIMEOUT: int
    API_MAX_RETRIES: int
    API_RETRY_INITIAL_DELAY: float
    API_RETRY_BACKOFF_FACTOR: float
    API_RETRY_MAX_DELAY: float

    @property
    def access_token(self) -> str: ...


class APIClient:
    """Request helper for the hosted table store (PostgREST dialect)."""

    rest_prefix = "rest/v1"

    def __init__(self, client: httpx.AsyncClient, settings: APISettings) -> None:
        self.client = client
        self.settings = settings
        self.api_url = getattr(settings, "DATA_API_URL", "").rstrip("/")
        self.api_key = getattr(settings, "DATA_API_KEY", "")
        self.access_token = getattr(settings, "access_token", "") or self.api_key
        self.max_retries = getattr(settings, "API_MAX_RETRIES", 0)
        self.initial_delay = getattr(settings, "API_RETRY_INITIAL_DELAY", 0.0)
        self.backoff_factor = getattr(settings, "API_RETRY_BACKOFF_FACTOR", 0.0)
        self.max_delay = getattr(settings, "API_RETRY_MAX_DELAY", 0.0)
        self.default_timeout = getattr(settings, "DATA_API_TIMEOUT", 0)

    async def aclose(self) -> None:
        try:
            await self.client.aclose()
        except Exception:  # pragma: no cover - best effort
            logger.exception("Failed to close httpx client")

    def _table_url(self, table: str) -> str:
        return f"{self.api_url}/{self.rest_prefix}/{table}"

    def _default_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    async def _api_request(
        self,
        method: str,
        url: str,
        data: Optional[dict | list] = None,
        *,
        params: Optional[dict[str, str]] = None,
        headers: Optional[dict] = None,
        timeout: int | None = None,
        allow_statuses: set[int] | None = None,
    ) -> tuple[int, Any | None]:
        merged_headers = self._default_headers()
        merged_headers.update(headers or {})
        timeout_value = timeout or self.default_timeout or None
        allowed = allow_statuses or set()
        attempts = max(1, self.max_retries + 1)
        delay = self.initial_delay

        for attempt in range(1, attempts + 1):
            try:
                response = await self.client.request(
                    method,
                    url,
                    params=params,
                    json=data,
                    headers=merged_headers,
                    timeout=timeout_value,
                )

                if response.status_code in allowed:
                    return response.status_code, self._parse_response_json(response)

                try:
                    response.raise_for_status()
                except httpx.HTTPStatusError as exc:
                    status = response.status_code
                    body = response.text
                    reason = self._extract_reason(body)
                    retryable = status == 429 or status >= 500
                    if retryable and attempt < attempts:
                        logger.warning(
                            f"Retrying {method.upper()} {url} after HTTP {status} (attempt {attempt}/{attempts})"
                        )
                        await self._sleep(delay)
                        delay = self._next_delay(delay)
                        continue
                    raise APIClientHTTPError(
                        status,
                        body,
                        method=method,
                        url=url,
                        retryable=retryable,
                        reason=reason,
                    ) from exc

                return response.status_code, self._parse_response_json(response)

            except APIClientHTTPError:
                raise

            except httpx.RequestError as exc:
                if attempt >= attempts:
                    raise APIClientTransportError(f"{type(exc).__name__} on {method.upper()} {url}: {exc}") from exc
                logger.warning(
                    f"Retrying {method.upper()} {url} after transport error {type(exc).__name__} "
                    f"(attempt {attempt}/{attempts})"
                )
                await self._sleep(delay)
                delay = self._next_delay(delay)

        raise APIClientTransportError(f"Exhausted retries for {method.upper()} {url}")

    @staticmethod
    async def _sleep(delay: float) -> None:
        if delay > 0:
            await asyncio.sleep(delay)

    def _next_delay(self, current: float) -> float:
        if current <= 0:
            return self.initial_delay or 0.0
        next_delay = current * self.backoff_factor
        if self.max_delay:
            next_delay = min(next_delay, self.max_delay)
        return next_delay

    @staticmethod
    def _parse_response_json(response: httpx.Response) -> Any | None:
        content_type = response.headers.get("content-type", "")
        if content_type.startswith("application/json"):
            try:
                payload = response.json()
            except JSONDecodeError:
                logger.warning(f"Failed to decode JSON response from {response.request.url}")
                return None
            return payload
        return None

    @staticmethod
    def _extract_reason(body: str) -> str | None:
        if not body:
            return None
        try:
            data = loads(body)
        except JSONDecodeError:
            return None
        if isinstance(data, dict):
            for key in ("message", "reason", "hint"):
                value = data.get(key)
                if isinstance(value, str):
                    return value
        return None
