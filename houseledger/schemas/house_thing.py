"""
Pydantic schemas for HouseThing endpoints.

history_id is only accepted on create. Updates cannot move an item to a
different history group, and a renewal always inherits the group of the
item it replaces, so HouseThingRenewRequest is the update shape.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from houseledger.schemas.common import AuditedResponse, to_naive_utc


class HouseThingFields(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=500)
    item_type: str | None = Field(None, max_length=100)
    model: str | None = Field(None, max_length=200)
    cost: float | None = Field(None, ge=0)
    purchase_date: datetime | None = None
    room_id: int | None = None
    note: str | None = None

    @field_validator("purchase_date")
    @classmethod
    def normalise_purchase_date(cls, value: datetime | None) -> datetime | None:
        return to_naive_utc(value)


class HouseThingCreateRequest(HouseThingFields):
    """Request body for POST /house-things."""
    history_id: int | None = Field(
        None,
        ge=0,
        description="History group to join; omit (or 0) to start a new one",
    )


class HouseThingUpdateRequest(HouseThingFields):
    """Request body for PUT /house-things/{id}."""


class HouseThingRenewRequest(HouseThingFields):
    """Request body for POST /house-things/{id}/renew: the replacement item."""


class HouseThingResponse(AuditedResponse):
    name: str
    description: str | None
    item_type: str | None
    model: str | None
    cost: float | None
    history_id: int
    purchase_date: datetime | None
    room_id: int | None
    room_name: str | None = None
