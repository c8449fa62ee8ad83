"""
Rooms and house things routers.

House things have three extra endpoints:
  GET  /house-things/room/{room_id}         - active items in a room
  GET  /house-things/history/{history_id}   - every item of a history group,
                                              soft-deleted ones included
  POST /house-things/{item_id}/renew        - replace an item (201): the old
                                              one is soft-deleted and the new
                                              one joins its history group
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from houseledger.database import get_db
from houseledger.exceptions import ResourceNotFoundError
from houseledger.routers.crud import add_crud_routes
from houseledger.schemas.house_thing import (
    HouseThingCreateRequest,
    HouseThingRenewRequest,
    HouseThingResponse,
    HouseThingUpdateRequest,
)
from houseledger.schemas.room import RoomCreateRequest, RoomResponse, RoomUpdateRequest
from houseledger.services.room_service import house_thing_service, room_service

rooms_router = APIRouter()
house_things_router = APIRouter()


@house_things_router.get(
    "/room/{room_id}",
    response_model=list[HouseThingResponse],
    summary="List the items in a room",
)
async def list_house_things_by_room(room_id: int, db: AsyncSession = Depends(get_db)):
    return await house_thing_service.get_by_room_id(db, room_id)


@house_things_router.get(
    "/history/{history_id}",
    response_model=list[HouseThingResponse],
    summary="List every item of a history group",
)
async def list_house_thing_history(history_id: int, db: AsyncSession = Depends(get_db)):
    return await house_thing_service.get_history(db, history_id)


@house_things_router.post(
    "/{item_id}/renew",
    response_model=HouseThingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Replace an item with a new purchase",
)
async def renew_house_thing(
    item_id: int,
    request: HouseThingRenewRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Record the replacement of a household item.

    The item identified by `item_id` is soft-deleted and the new item
    inherits its history_id, so GET /house-things/history/{history_id}
    shows the full purchase history.
    """
    renewed = await house_thing_service.renew(db, item_id, request)
    if renewed is None:
        raise ResourceNotFoundError("HouseThing", item_id)
    return renewed


add_crud_routes(
    rooms_router, room_service,
    RoomCreateRequest, RoomUpdateRequest, RoomResponse,
)
add_crud_routes(
    house_things_router, house_thing_service,
    HouseThingCreateRequest, HouseThingUpdateRequest, HouseThingResponse,
)
