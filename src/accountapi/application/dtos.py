"""Data Transfer Objects for the account API wire format."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from ..domain.entities import Account


class AccountDataRequestDTO(BaseModel):
    """Envelope sent when creating an account."""

    data: Account


class AccountDataResponseDTO(BaseModel):
    """Envelope returned by fetch and create."""

    data: Optional[Account] = None
