"""Protocol interface for account client implementations.

Services that work with accounts depend on this protocol instead of the
concrete HTTP client, so tests can pass an in-memory fake.
"""

from __future__ import annotations

from typing import Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from ..entities import Account


class AccountClientProtocol(Protocol):
    """Contract shared by `AccountClient` and test doubles."""

    def fetch(self, account_id: str) -> Optional["Account"]:
        """Return the account with ``account_id``.

        Raises:
            AccountApiError: with kind INVALID_INPUT for an empty id, or the
                kind matching the failed call.
        """
        ...

    def create(self, account: "Account") -> Optional["Account"]:
        """Create ``account`` and return the stored copy."""
        ...

    def delete(self, account_id: str, version: int) -> None:
        """Delete ``version`` of the account with ``account_id``."""
        ...

    def close(self) -> None: ...
