"""
Room and HouseThing services.

Renewal:
  Household items are renewed rather than edited when they are replaced.
  renew(db, id, request) creates the replacement from the request, copies
  the old item's history_id onto it, and soft-deletes the old item. Both
  writes share the request's unit of work.

History groups:
  A house thing created without a history_id (or with 0) starts its own
  group: its history_id becomes its own id once the INSERT is flushed.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from houseledger.mapping import (
    HOUSE_THING_MAPPING,
    HOUSE_THING_RENEW_MAPPING,
    ROOM_MAPPING,
    create_patch,
)
from houseledger.models.house_thing import HouseThing
from houseledger.models.room import Room
from houseledger.schemas.house_thing import HouseThingRenewRequest, HouseThingResponse
from houseledger.schemas.room import RoomResponse
from houseledger.services.crud import CrudService

logger = logging.getLogger(__name__)


class RoomService(CrudService[Room, RoomResponse]):
    model = Room
    response_schema = RoomResponse
    mapping = ROOM_MAPPING
    resource_name = "Room"

    def order_by(self) -> list:
        return [Room.created_date.desc(), Room.id.desc()]


class HouseThingService(CrudService[HouseThing, HouseThingResponse]):
    model = HouseThing
    response_schema = HouseThingResponse
    mapping = HOUSE_THING_MAPPING
    resource_name = "HouseThing"
    load_options = (selectinload(HouseThing.room),)

    def order_by(self) -> list:
        return [HouseThing.purchase_date.desc(), HouseThing.id.desc()]

    async def prepare_create(self, db, entity, request) -> None:
        if not entity.history_id:
            entity.history_id = 0

    async def after_create(self, db, entity) -> None:
        if entity.history_id == 0:
            entity.history_id = entity.id
            await self.flush(db)

    async def get_by_room_id(self, db: AsyncSession, room_id: int) -> list[HouseThingResponse]:
        stmt = self.base_query().where(HouseThing.room_id == room_id)
        return await self.fetch_list(db, stmt.order_by(*self.order_by()))

    async def get_history(self, db: AsyncSession, history_id: int) -> list[HouseThingResponse]:
        """Every item ever recorded in a history group, soft-deleted ones included."""
        stmt = self.base_query(include_inactive=True).where(HouseThing.history_id == history_id)
        return await self.fetch_list(db, stmt.order_by(*self.order_by()))

    async def renew(
        self,
        db: AsyncSession,
        house_thing_id: int,
        request: HouseThingRenewRequest,
    ) -> HouseThingResponse | None:
        """
        Replace an item with a newly purchased one.

        Returns:
            The new item, or None if house_thing_id does not exist.
        """
        old_item = await db.get(HouseThing, house_thing_id)
        if old_item is None:
            logger.warning("Renew skipped: HouseThing %s not found", house_thing_id)
            return None

        new_item = HouseThing(**create_patch(request, HOUSE_THING_RENEW_MAPPING))
        new_item.history_id = old_item.history_id

        old_item.is_active = False
        old_item.touch()

        await self._insert(db, new_item)

        logger.info(
            "Renewed HouseThing %s as %s (history %s)",
            house_thing_id, new_item.id, new_item.history_id,
        )
        return await self._reload(db, new_item.id)


room_service = RoomService()
house_thing_service = HouseThingService()
