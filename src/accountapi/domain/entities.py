"""Account domain entities."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class AccountAttributes(BaseModel):
    """Attributes of a bank account resource.

    Only the commonly used attributes are typed; anything else the API
    returns is kept as-is.
    """

    model_config = ConfigDict(extra="allow")

    country: Optional[str] = None
    base_currency: Optional[str] = None
    bank_id: Optional[str] = None
    bank_id_code: Optional[str] = None
    bic: Optional[str] = None
    account_number: Optional[str] = None
    iban: Optional[str] = None
    name: Optional[List[str]] = None
    alternative_names: Optional[List[str]] = None
    account_classification: Optional[str] = None
    joint_account: Optional[bool] = None
    account_matching_opt_out: Optional[bool] = None
    secondary_identification: Optional[str] = None
    switched: Optional[bool] = None
    status: Optional[str] = None


class Account(BaseModel):
    """Account resource as exchanged with the API."""

    model_config = ConfigDict(extra="allow")

    id: str
    organisation_id: Optional[str] = None
    type: str = "accounts"
    version: Optional[int] = None
    attributes: Optional[AccountAttributes] = None
