"""Pydantic schemas for Balance endpoints."""

from datetime import datetime

from pydantic import BaseModel, field_validator

from houseledger.schemas.common import AuditedResponse, to_naive_utc


class BalanceFields(BaseModel):
    amount: float
    balance_date: datetime
    account_id: int | None = None
    note: str | None = None

    @field_validator("balance_date")
    @classmethod
    def normalise_balance_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class BalanceCreateRequest(BalanceFields):
    """Request body for POST /balances."""


class BalanceUpdateRequest(BalanceFields):
    """Request body for PUT /balances/{id}."""


class BalanceResponse(AuditedResponse):
    amount: float
    balance_date: datetime
    account_id: int | None
    account_name: str | None = None
