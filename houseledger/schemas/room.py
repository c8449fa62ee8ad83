"""Pydantic schemas for Room endpoints."""

from pydantic import BaseModel, Field

from houseledger.schemas.common import AuditedResponse


class RoomFields(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    color: str | None = Field(None, max_length=20)
    icon: str | None = Field(None, max_length=50)
    note: str | None = None


class RoomCreateRequest(RoomFields):
    """Request body for POST /rooms."""


class RoomUpdateRequest(RoomFields):
    """Request body for PUT /rooms/{id}."""


class RoomResponse(AuditedResponse):
    name: str
    description: str | None
    color: str | None
    icon: str | None
