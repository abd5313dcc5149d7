"""Client library for the organisation accounts API."""

from .domain.entities import Account, AccountAttributes
from .domain.errors import AccountApiError, ErrorKind, classify_status
from .infrastructure.accounts.account_client import (
    ACCOUNTS_API_PATH,
    AccountClient,
    AsyncAccountClient,
)
from .infrastructure.http.http_client import NO_CONTENT, ApiRequest

__all__ = [
    "ACCOUNTS_API_PATH",
    "Account",
    "AccountApiError",
    "AccountAttributes",
    "AccountClient",
    "ApiRequest",
    "AsyncAccountClient",
    "ErrorKind",
    "NO_CONTENT",
    "classify_status",
]
