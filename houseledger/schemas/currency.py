"""Pydantic schemas for Currency endpoints."""

from pydantic import BaseModel, Field

from houseledger.schemas.common import AuditedResponse


class CurrencyFields(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    currency_code_alf3: str | None = Field(None, max_length=3, description="ISO 4217 code, e.g. EUR")
    currency_code_num3: str | None = Field(None, max_length=3, description="ISO 4217 numeric, e.g. 978")
    note: str | None = None


class CurrencyCreateRequest(CurrencyFields):
    """Request body for POST /currencies."""


class CurrencyUpdateRequest(CurrencyFields):
    """Request body for PUT /currencies/{id}."""


class CurrencyResponse(AuditedResponse):
    name: str
    description: str | None
    currency_code_alf3: str | None
    currency_code_num3: str | None
