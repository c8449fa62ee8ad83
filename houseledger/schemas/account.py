"""
Pydantic schemas for Account endpoints.

Create and update share the same writable fields. Neither accepts id,
timestamps or is_active: unknown keys in the body are ignored.
"""

from pydantic import BaseModel, Field

from houseledger.schemas.common import AuditedResponse


class AccountFields(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    account_number: str | None = Field(None, max_length=50)
    description: str | None = Field(None, max_length=500)
    iban: str | None = Field(None, max_length=34)
    bic: str | None = Field(None, max_length=11)
    account_type: str | None = Field(None, max_length=50)
    currency_id: int | None = None
    bank_id: int | None = None
    note: str | None = None


class AccountCreateRequest(AccountFields):
    """Request body for POST /accounts."""


class AccountUpdateRequest(AccountFields):
    """Request body for PUT /accounts/{id}."""


class AccountResponse(AuditedResponse):
    """Public representation of an account, with its bank's display name."""
    name: str
    account_number: str | None
    description: str | None
    iban: str | None
    bic: str | None
    account_type: str | None
    currency_id: int | None
    bank_id: int | None
    bank_name: str | None = None
