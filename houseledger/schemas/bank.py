"""Pydantic schemas for Bank endpoints."""

from pydantic import BaseModel, Field

from houseledger.schemas.common import AuditedResponse


class BankFields(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=500)
    web_url: str | None = Field(None, max_length=500)
    address: str | None = Field(None, max_length=300)
    city: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=50)
    mail: str | None = Field(None, max_length=200)
    reference_name: str | None = Field(
        None, max_length=200, description="Contact person at the bank"
    )
    country_id: int | None = None
    note: str | None = None


class BankCreateRequest(BankFields):
    """Request body for POST /banks."""


class BankUpdateRequest(BankFields):
    """Request body for PUT /banks/{id}."""


class BankResponse(AuditedResponse):
    name: str
    description: str | None
    web_url: str | None
    address: str | None
    city: str | None
    phone: str | None
    mail: str | None
    reference_name: str | None
    country_id: int | None
