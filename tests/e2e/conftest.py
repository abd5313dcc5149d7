"""Fixtures for end-to-end tests against a running account API."""

from __future__ import annotations

import os
from collections.abc import Generator
from typing import List

import httpx
import pytest

from accountapi.domain.entities import Account
from accountapi.domain.errors import AccountApiError
from accountapi.infrastructure.accounts.account_client import AccountClient


@pytest.fixture(scope="session")
def account_api_base_url() -> str:
    """
    Base URL of the account API used by E2E tests.

    Skips the session's E2E tests when the API health endpoint does not answer.
    """
    base_url = os.getenv("ACCOUNT_API_BASE_URL", "http://localhost:8080").rstrip("/")
    try:
        with httpx.Client(timeout=2.0) as client:
            client.get(f"{base_url}/v1/health").raise_for_status()
    except httpx.HTTPError as e:
        pytest.skip(f"Account API not available at {base_url}: {e}")
    return base_url


@pytest.fixture
def api_client(account_api_base_url: str) -> Generator[AccountClient, None, None]:
    with AccountClient(account_api_base_url, backoff_schedule=(0.5, 1.0)) as client:
        yield client


@pytest.fixture
def seeded_accounts(
    api_client: AccountClient, seed_accounts: List[Account]
) -> Generator[List[Account], None, None]:
    """Create the fixture accounts before a test and delete them afterwards."""
    for account in seed_accounts:
        try:
            api_client.create(account)
        except AccountApiError as e:
            print(f"[E2E] seeding {account.id} failed: {e}")

    yield seed_accounts

    for account in seed_accounts:
        try:
            api_client.delete(account.id, account.version or 0)
        except AccountApiError:
            pass  # Already deleted by the test
