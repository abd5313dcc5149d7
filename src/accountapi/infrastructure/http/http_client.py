from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
    Union,
)
from types import TracebackType

import httpx
from pydantic import BaseModel, ValidationError

from ...domain.errors import AccountApiError, ErrorKind, error_from_response

logger = logging.getLogger(__name__)

JSON_API_CONTENT_TYPE = "application/vnd.api+json"
DEFAULT_TIMEOUT = 10.0
DEFAULT_BACKOFF_SCHEDULE: Tuple[float, ...] = (2.0, 3.0, 5.0)

ModelT = TypeVar("ModelT", bound=BaseModel)


class _NoContent:
    """Marker returned when a call expects no response body."""

    _instance: Optional["_NoContent"] = None

    def __new__(cls) -> "_NoContent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_CONTENT"

    def __bool__(self) -> bool:
        return False


NO_CONTENT = _NoContent()


@dataclass(frozen=True)
class ApiRequest:
    """Fully built request: method, absolute URL, optional body and headers."""

    method: str
    url: str
    body: Optional[bytes] = None
    headers: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def build(
        cls,
        method: str,
        url: str,
        *,
        body: Optional[bytes] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> "ApiRequest":
        try:
            url = str(httpx.URL(url, params=params))
        except httpx.InvalidURL as e:
            raise AccountApiError(
                ErrorKind.INVALID_INPUT, f"Invalid URL: {e}", cause=e
            ) from e
        return cls(
            method=method.upper(),
            url=url,
            body=body,
            headers=(
                ("Content-Type", JSON_API_CONTENT_TYPE),
                ("Accept", JSON_API_CONTENT_TYPE),
            ),
        )


def _interpret(
    status_code: int,
    body: bytes,
    response_model: Optional[Type[ModelT]],
) -> Union[ModelT, _NoContent]:
    """Turn a received status and body into a decoded model, NO_CONTENT or an error."""
    if status_code < 200 or status_code >= 400:
        raise error_from_response(status_code, body)
    if response_model is None:
        return NO_CONTENT
    try:
        return response_model.model_validate_json(body)
    except ValidationError as e:
        raise AccountApiError(
            ErrorKind.DECODE,
            f"could not decode {response_model.__name__}: {e}",
            status_code=status_code,
            cause=e,
        ) from e


def _exhausted(request: ApiRequest, last_error: Optional[Exception]) -> AccountApiError:
    if last_error is None:
        message = f"no attempts made for {request.method} {request.url}"
    else:
        message = f"{request.method} {request.url} failed: {last_error}"
    return AccountApiError(ErrorKind.TRANSPORT, message, cause=last_error)


def _unreadable(status_code: int, exc: httpx.HTTPError) -> AccountApiError:
    return AccountApiError(
        ErrorKind.DECODE,
        f"could not read response body: {exc}",
        status_code=status_code,
        cause=exc,
    )


class HttpClient:
    """Synchronous request executor around httpx.

    - Normalizes base URLs and paths.
    - Applies a per-attempt timeout.
    - Retries transport failures following the backoff schedule.
    - Maps non-successful responses to ``AccountApiError``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        backoff_schedule: Sequence[float] = DEFAULT_BACKOFF_SCHEDULE,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._backoff_schedule = tuple(backoff_schedule)
        self._sleep = sleep
        self._client = httpx.Client(timeout=timeout, transport=transport)

    @property
    def backoff_schedule(self) -> Tuple[float, ...]:
        return self._backoff_schedule

    def url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self._base_url}/{path.lstrip('/')}"

    def _send(self, request: ApiRequest) -> httpx.Response:
        last_error: Optional[httpx.TransportError] = None
        for attempt, backoff in enumerate(self._backoff_schedule, start=1):
            http_request = self._client.build_request(
                request.method,
                request.url,
                content=request.body,
                headers=dict(request.headers),
            )
            try:
                logger.debug(
                    "Sending %s %s (attempt %d)", request.method, request.url, attempt
                )
                return self._client.send(http_request, stream=True)
            except httpx.TransportError as e:
                last_error = e
                logger.warning(
                    "Request error on %s %s (attempt %d of %d): %s. Waiting %ss",
                    request.method,
                    request.url,
                    attempt,
                    len(self._backoff_schedule),
                    e,
                    backoff,
                )
                self._sleep(backoff)
        raise _exhausted(request, last_error) from last_error

    def execute(
        self,
        request: ApiRequest,
        response_model: Optional[Type[ModelT]] = None,
    ) -> Union[ModelT, _NoContent]:
        """Send ``request`` and decode the response into ``response_model``.

        Returns ``NO_CONTENT`` when no model is given. Raises
        ``AccountApiError`` for transport failures (after the backoff
        schedule is exhausted), error statuses and undecodable bodies.
        """
        response = self._send(request)
        try:
            try:
                body = response.read()
            except httpx.HTTPError as e:
                raise _unreadable(response.status_code, e) from e
            return _interpret(response.status_code, body, response_model)
        finally:
            response.close()

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()


class AsyncHttpClient:
    """Asynchronous request executor around httpx.AsyncClient.

    Mirrors `HttpClient`; backoff waits use an awaitable ``sleep``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        backoff_schedule: Sequence[float] = DEFAULT_BACKOFF_SCHEDULE,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._backoff_schedule = tuple(backoff_schedule)
        self._sleep = sleep
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @property
    def backoff_schedule(self) -> Tuple[float, ...]:
        return self._backoff_schedule

    def url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self._base_url}/{path.lstrip('/')}"

    async def _send(self, request: ApiRequest) -> httpx.Response:
        last_error: Optional[httpx.TransportError] = None
        for attempt, backoff in enumerate(self._backoff_schedule, start=1):
            http_request = self._client.build_request(
                request.method,
                request.url,
                content=request.body,
                headers=dict(request.headers),
            )
            try:
                logger.debug(
                    "Sending %s %s (attempt %d)", request.method, request.url, attempt
                )
                return await self._client.send(http_request, stream=True)
            except httpx.TransportError as e:
                last_error = e
                logger.warning(
                    "Request error on %s %s (attempt %d of %d): %s. Waiting %ss",
                    request.method,
                    request.url,
                    attempt,
                    len(self._backoff_schedule),
                    e,
                    backoff,
                )
                await self._sleep(backoff)
        raise _exhausted(request, last_error) from last_error

    async def execute(
        self,
        request: ApiRequest,
        response_model: Optional[Type[ModelT]] = None,
    ) -> Union[ModelT, _NoContent]:
        response = await self._send(request)
        try:
            try:
                body = await response.aread()
            except httpx.HTTPError as e:
                raise _unreadable(response.status_code, e) from e
            return _interpret(response.status_code, body, response_model)
        finally:
            await response.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        await self.aclose()
