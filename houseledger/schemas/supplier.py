"""Pydantic schemas for Supplier endpoints."""

from pydantic import BaseModel, Field

from houseledger.schemas.common import AuditedResponse


class SupplierFields(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    unit_measure: str | None = Field(None, max_length=50)
    description: str | None = Field(None, max_length=500)
    type: str | None = Field(None, max_length=100)
    contract: str | None = Field(None, max_length=200)
    note: str | None = None


class SupplierCreateRequest(SupplierFields):
    """Request body for POST /suppliers."""


class SupplierUpdateRequest(SupplierFields):
    """Request body for PUT /suppliers/{id}."""


class SupplierResponse(AuditedResponse):
    name: str
    unit_measure: str | None
    description: str | None
    type: str | None
    contract: str | None
