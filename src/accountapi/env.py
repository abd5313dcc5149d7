from __future__ import annotations

import os
from typing import Tuple
from urllib.parse import urlparse

from pydantic import BaseModel, field_validator


class Settings(BaseModel):
    """Typed client settings built from environment variables."""

    base_url: str
    timeout: float = 10.0
    backoff_schedule: Tuple[float, ...] = (2.0, 3.0, 5.0)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v:
            raise ValueError("Account API base URL cannot be empty")
        parsed = urlparse(v)
        if parsed.scheme not in {"http", "https"}:
            raise ValueError("Account API base URL must start with http:// or https://")
        if not parsed.netloc:
            raise ValueError("Account API base URL must include a host")
        return v.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v

    @field_validator("backoff_schedule")
    @classmethod
    def validate_backoff_schedule(cls, v: Tuple[float, ...]) -> Tuple[float, ...]:
        if any(delay < 0 for delay in v):
            raise ValueError("Backoff delays cannot be negative")
        return v


def _parse_schedule(raw: str) -> Tuple[float, ...]:
    return tuple(float(part) for part in raw.split(",") if part.strip())


def get_settings() -> Settings:
    """Return typed settings instance sourced from env vars."""
    base_url = os.environ.get("ACCOUNT_API_BASE_URL")
    if not base_url:
        raise ValueError("ACCOUNT_API_BASE_URL is required")
    return Settings(
        base_url=base_url,
        timeout=float(os.environ.get("ACCOUNT_API_TIMEOUT", "10")),
        backoff_schedule=_parse_schedule(
            os.environ.get("ACCOUNT_API_BACKOFF_SCHEDULE", "2,3,5")
        ),
    )
