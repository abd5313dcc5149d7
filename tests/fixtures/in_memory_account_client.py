"""In-memory implementation of AccountClientProtocol for unit testing."""

from __future__ import annotations

from typing import Dict, Optional

from accountapi.domain.entities import Account
from accountapi.domain.errors import AccountApiError, ErrorKind


class InMemoryAccountClient:
    """Fake account client that stores accounts in a dict.

    Behaves like the API for the cases the tests need: duplicate ids
    conflict, unknown ids are not found, and deletes must name the
    current version.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict]] = []
        self.accounts: Dict[str, Account] = {}
        self.closed = False

    def fetch(self, account_id: str) -> Optional[Account]:
        self.calls.append(("fetch", {"account_id": account_id}))
        if not account_id:
            raise AccountApiError(ErrorKind.INVALID_INPUT, "Invalid account id")
        if account_id not in self.accounts:
            raise AccountApiError(
                ErrorKind.NOT_FOUND,
                f"record {account_id} does not exist",
                status_code=404,
            )
        return self.accounts[account_id]

    def create(self, account: Account) -> Optional[Account]:
        self.calls.append(("create", {"account": account}))
        if account.id in self.accounts:
            raise AccountApiError(
                ErrorKind.CONFLICT,
                "Account cannot be created as it violates a duplicate constraint",
                status_code=409,
            )
        stored = account.model_copy(update={"version": 0})
        self.accounts[account.id] = stored
        return stored

    def delete(self, account_id: str, version: int) -> None:
        self.calls.append(("delete", {"account_id": account_id, "version": version}))
        if not account_id:
            raise AccountApiError(ErrorKind.INVALID_INPUT, "Invalid account id")
        stored = self.accounts.get(account_id)
        if stored is None:
            raise AccountApiError(
                ErrorKind.NOT_FOUND,
                f"record {account_id} does not exist",
                status_code=404,
            )
        if stored.version != version:
            raise AccountApiError(
                ErrorKind.CONFLICT, "invalid version", status_code=409
            )
        del self.accounts[account_id]

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "InMemoryAccountClient":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()
