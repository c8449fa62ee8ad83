"""
Pydantic schemas for Transaction endpoints.

Validation mirrors what the import pipeline enforces:
  - amount must be non-zero (sign carries direction)
  - transaction_date is stored as naive UTC and may be at most one day
    in the future
  - description <= 500, category_name <= 100, note <= 1000 characters

unique_key is never accepted from the client; it is generated on write.
"""

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, Field, field_validator

from houseledger.schemas.common import AuditedResponse, to_naive_utc


class TransactionFields(BaseModel):
    transaction_date: datetime
    amount: float
    description: str | None = Field(None, max_length=500)
    category_name: str | None = Field(None, max_length=100)
    is_category_confirmed: bool = False
    account_id: int = Field(gt=0)
    note: str | None = Field(None, max_length=1000)

    @field_validator("amount")
    @classmethod
    def amount_not_zero(cls, value: float) -> float:
        if value == 0:
            raise ValueError("Amount cannot be zero")
        return value

    @field_validator("transaction_date")
    @classmethod
    def normalise_date(cls, value: datetime) -> datetime:
        value = to_naive_utc(value)
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        if value > now + timedelta(days=1):
            raise ValueError("Transaction date cannot be more than one day in the future")
        return value


class TransactionCreateRequest(TransactionFields):
    """Request body for POST /transactions."""


class TransactionUpdateRequest(TransactionFields):
    """Request body for PUT /transactions/{id}."""


class TransactionResponse(AuditedResponse):
    transaction_date: datetime
    amount: float
    description: str | None
    unique_key: str | None
    category_name: str | None
    is_category_confirmed: bool
    account_id: int
    account_name: str | None = None
