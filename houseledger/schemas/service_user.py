"""Pydantic schemas for ServiceUser endpoints."""

from pydantic import BaseModel, Field

from houseledger.schemas.common import AuditedResponse


class ServiceUserFields(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    surname: str | None = Field(None, max_length=100)
    note: str | None = None


class ServiceUserCreateRequest(ServiceUserFields):
    """Request body for POST /service-users."""


class ServiceUserUpdateRequest(ServiceUserFields):
    """Request body for PUT /service-users/{id}."""


class ServiceUserResponse(AuditedResponse):
    name: str
    surname: str | None
