from __future__ import annotations

from typing import Optional, Sequence, Type
from types import TracebackType
from urllib.parse import quote

import httpx

from ...application.dtos import AccountDataRequestDTO, AccountDataResponseDTO
from ...domain.entities import Account
from ...domain.errors import AccountApiError, ErrorKind
from ...env import Settings
from ..http.http_client import (
    DEFAULT_BACKOFF_SCHEDULE,
    DEFAULT_TIMEOUT,
    ApiRequest,
    AsyncHttpClient,
    HttpClient,
)

ACCOUNTS_API_PATH = "/v1/organisation/accounts"


def _require_id(account_id: str) -> None:
    if not account_id:
        raise AccountApiError(ErrorKind.INVALID_INPUT, "Invalid account id")


def _account_path(account_id: str) -> str:
    return f"{ACCOUNTS_API_PATH}/{quote(account_id, safe='')}"


def _create_body(account: Account) -> bytes:
    return AccountDataRequestDTO(data=account).model_dump_json(exclude_none=True).encode(
        "utf-8"
    )


class AccountClient:
    """Synchronous client for the organisation accounts API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        backoff_schedule: Sequence[float] = DEFAULT_BACKOFF_SCHEDULE,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._http = HttpClient(
            base_url,
            timeout=timeout,
            backoff_schedule=backoff_schedule,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "AccountClient":
        return cls(
            settings.base_url,
            timeout=settings.timeout,
            backoff_schedule=settings.backoff_schedule,
        )

    def fetch(self, account_id: str) -> Optional[Account]:
        """Get a single account by its ID."""
        _require_id(account_id)
        request = ApiRequest.build(
            "GET", self._http.url(_account_path(account_id))
        )
        resp = self._http.execute(request, AccountDataResponseDTO)
        return resp.data

    def create(self, account: Account) -> Optional[Account]:
        """Register an account and return it as stored by the API."""
        request = ApiRequest.build(
            "POST", self._http.url(ACCOUNTS_API_PATH), body=_create_body(account)
        )
        resp = self._http.execute(request, AccountDataResponseDTO)
        return resp.data

    def delete(self, account_id: str, version: int) -> None:
        """Delete the given version of an account."""
        _require_id(account_id)
        request = ApiRequest.build(
            "DELETE",
            self._http.url(_account_path(account_id)),
            params={"version": version},
        )
        self._http.execute(request)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "AccountClient":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()


class AsyncAccountClient:
    """Asynchronous client for the organisation accounts API.

    Mirrors `AccountClient` but uses `AsyncHttpClient` and async methods.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        backoff_schedule: Sequence[float] = DEFAULT_BACKOFF_SCHEDULE,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._http = AsyncHttpClient(
            base_url,
            timeout=timeout,
            backoff_schedule=backoff_schedule,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "AsyncAccountClient":
        return cls(
            settings.base_url,
            timeout=settings.timeout,
            backoff_schedule=settings.backoff_schedule,
        )

    async def fetch(self, account_id: str) -> Optional[Account]:
        _require_id(account_id)
        request = ApiRequest.build(
            "GET", self._http.url(_account_path(account_id))
        )
        resp = await self._http.execute(request, AccountDataResponseDTO)
        return resp.data

    async def create(self, account: Account) -> Optional[Account]:
        request = ApiRequest.build(
            "POST", self._http.url(ACCOUNTS_API_PATH), body=_create_body(account)
        )
        resp = await self._http.execute(request, AccountDataResponseDTO)
        return resp.data

    async def delete(self, account_id: str, version: int) -> None:
        _require_id(account_id)
        request = ApiRequest.build(
            "DELETE",
            self._http.url(_account_path(account_id)),
            params={"version": version},
        )
        await self._http.execute(request)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "AsyncAccountClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()
