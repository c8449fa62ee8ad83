"""Pydantic schemas for Country endpoints."""

from pydantic import BaseModel, Field

from houseledger.schemas.common import AuditedResponse


class CountryFields(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    country_code_alf3: str | None = Field(None, max_length=3, description="ISO 3166 alpha-3, e.g. ITA")
    country_code_num3: str | None = Field(None, max_length=3, description="ISO 3166 numeric, e.g. 380")
    note: str | None = None


class CountryCreateRequest(CountryFields):
    """Request body for POST /countries."""


class CountryUpdateRequest(CountryFields):
    """Request body for PUT /countries/{id}."""


class CountryResponse(AuditedResponse):
    name: str
    description: str | None
    country_code_alf3: str | None
    country_code_num3: str | None
