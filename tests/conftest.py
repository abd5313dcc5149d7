"""Shared pytest fixtures for account API client tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, List, Optional

import pytest

from accountapi.domain.entities import Account, AccountAttributes

BASE_URL = "https://api.example.test"
FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def recorded_sleeps() -> List[float]:
    return []


@pytest.fixture
def fake_sleep(recorded_sleeps: List[float]) -> Callable[[float], None]:
    """Sleep replacement that records requested delays instead of waiting."""

    def _sleep(seconds: float) -> None:
        recorded_sleeps.append(seconds)

    return _sleep


@pytest.fixture
def fake_async_sleep(recorded_sleeps: List[float]):
    async def _sleep(seconds: float) -> None:
        recorded_sleeps.append(seconds)

    return _sleep


@pytest.fixture
def account_factory() -> Callable[..., Account]:
    """Build accounts with sensible defaults for tests."""

    def _make(
        account_id: str = "ad27e265-9605-4b4b-a0e5-3003ea9cc4dc",
        version: Optional[int] = None,
        bic: str = "NWBKGB22",
    ) -> Account:
        return Account(
            id=account_id,
            organisation_id="eb0bd6f5-c3f5-44b2-b677-acd23cdde73c",
            version=version,
            attributes=AccountAttributes(
                country="GB",
                base_currency="GBP",
                bank_id="400300",
                bank_id_code="GBDSC",
                bic=bic,
                name=["Samantha Holder"],
                account_classification="Personal",
            ),
        )

    return _make


@pytest.fixture(scope="session")
def seed_accounts() -> List[Account]:
    """Accounts loaded from tests/fixtures/account_data.json."""
    raw = json.loads((FIXTURES_DIR / "account_data.json").read_text(encoding="utf-8"))
    return [Account.model_validate(item) for item in raw]
