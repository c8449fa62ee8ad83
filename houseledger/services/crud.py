"""
Generic CRUD service - the command/query contract every aggregate shares.

One CrudService subclass per aggregate declares its model, response schema,
mapping, relationship loaders and default ordering; everything else is
inherited:

  create(db, request)                  -> response DTO
  update(db, id, request)              -> response DTO, or None if absent
  soft_delete(db, id)                  -> True, or False if absent
  hard_delete(db, id)                  -> True, or False if absent
  get_by_id(db, id)                    -> response DTO, or None if absent
  get_all(db, include_inactive)        -> list of response DTOs
  list_paged(db, paging, include_inactive) -> PagedResult

Not-found is a return value, never an exception: the routers decide what a
missing id means over HTTP. Database failures during a write are
translated into ConflictError / PersistenceUnavailableError; hard-deleting
a row that other rows still reference is a ConflictError too.

Unit of work:
  Services only flush. The request session (database.get_db) commits once
  when the request succeeds and rolls back otherwise, so a multi-step
  operation like a house-thing renewal is all-or-nothing.

Reading rows:
  get_by_id returns a row whether it is active or soft-deleted; list
  queries hide soft-deleted rows unless include_inactive is requested.
"""

import logging
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from houseledger.exceptions import ConflictError, PersistenceUnavailableError
from houseledger.mapping import (
    EntityMapping,
    apply_patch,
    create_patch,
    to_response,
    update_patch,
)
from houseledger.schemas.common import PageRequest, PagedResult

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class CrudService(Generic[ModelT, ResponseT]):
    """
    Base class for per-aggregate services.

    Subclasses set the class attributes below and may override the
    prepare_create / prepare_update / after_create hooks to add business
    rules, and order_by() to change the default list ordering.
    """

    model: ClassVar[type]
    response_schema: ClassVar[type[BaseModel]]
    mapping: ClassVar[EntityMapping]
    # Human-readable name used in log lines and 404 messages
    resource_name: ClassVar[str]
    # Loader options (selectinload(...)) needed to fill display names
    load_options: ClassVar[tuple] = ()

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def order_by(self) -> list:
        return [self.model.id]

    async def prepare_create(self, db: AsyncSession, entity: ModelT, request: BaseModel) -> None:
        """Called after mapping, before the INSERT is flushed."""

    async def after_create(self, db: AsyncSession, entity: ModelT) -> None:
        """Called once the INSERT is flushed and entity.id is known."""

    async def prepare_update(self, db: AsyncSession, entity: ModelT, request: BaseModel) -> None:
        """Called after the update patch is applied, before the UPDATE is flushed."""

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def create(self, db: AsyncSession, request: BaseModel) -> ResponseT:
        entity = self.model(**create_patch(request, self.mapping))
        await self.prepare_create(db, entity, request)
        await self._insert(db, entity)
        await self.after_create(db, entity)

        logger.info("Created %s %s", self.resource_name, entity.id)
        return await self._reload(db, entity.id)

    async def update(self, db: AsyncSession, entity_id: int, request: BaseModel) -> ResponseT | None:
        entity = await db.get(self.model, entity_id)
        if entity is None:
            logger.warning("Update skipped: %s %s not found", self.resource_name, entity_id)
            return None

        apply_patch(entity, update_patch(request, self.mapping))
        await self.prepare_update(db, entity, request)
        entity.touch()
        await self.flush(db)

        logger.info("Updated %s %s", self.resource_name, entity_id)
        return await self._reload(db, entity_id)

    async def soft_delete(self, db: AsyncSession, entity_id: int) -> bool:
        entity = await db.get(self.model, entity_id)
        if entity is None:
            logger.warning("Soft delete skipped: %s %s not found", self.resource_name, entity_id)
            return False

        entity.is_active = False
        entity.touch()
        await self.flush(db)

        logger.info("Soft-deleted %s %s", self.resource_name, entity_id)
        return True

    async def hard_delete(self, db: AsyncSession, entity_id: int) -> bool:
        entity = await db.get(self.model, entity_id)
        if entity is None:
            logger.warning("Hard delete skipped: %s %s not found", self.resource_name, entity_id)
            return False

        await db.delete(entity)
        await self.flush(
            db,
            conflict_detail=f"{self.resource_name} {entity_id} is still referenced by other records",
        )

        # Irreversible, so it is logged louder than a soft delete
        logger.warning("Hard-deleted %s %s", self.resource_name, entity_id)
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_by_id(self, db: AsyncSession, entity_id: int) -> ResponseT | None:
        logger.debug("Fetching %s %s", self.resource_name, entity_id)
        result = await db.execute(self.select_loaded().where(self.model.id == entity_id))
        entity = result.scalar_one_or_none()
        return self.to_response(entity) if entity is not None else None

    async def get_all(self, db: AsyncSession, include_inactive: bool = False) -> list[ResponseT]:
        stmt = self.base_query(include_inactive).order_by(*self.order_by())
        return await self.fetch_list(db, stmt)

    async def list_paged(
        self,
        db: AsyncSession,
        paging: PageRequest,
        include_inactive: bool = False,
    ) -> PagedResult[ResponseT]:
        stmt = self.base_query(include_inactive).order_by(*self.order_by())
        return await self.fetch_page(db, stmt, paging)

    # ------------------------------------------------------------------
    # Building blocks for subclasses
    # ------------------------------------------------------------------

    def select_loaded(self) -> Select:
        """
        SELECT for this model with its display relationships loaded.

        populate_existing refreshes rows already in the identity map, so a
        relationship that changed along with its foreign key is re-read.
        """
        return (
            select(self.model)
            .options(*self.load_options)
            .execution_options(populate_existing=True)
        )

    def base_query(self, include_inactive: bool = False) -> Select:
        stmt = self.select_loaded()
        if not include_inactive:
            stmt = stmt.where(self.model.is_active.is_(True))
        return stmt

    def to_response(self, entity: ModelT) -> ResponseT:
        return to_response(entity, self.response_schema, self.mapping)

    async def fetch_list(self, db: AsyncSession, stmt: Select) -> list[ResponseT]:
        result = await db.execute(stmt)
        return [self.to_response(entity) for entity in result.scalars().all()]

    async def fetch_page(
        self,
        db: AsyncSession,
        stmt: Select,
        paging: PageRequest,
    ) -> PagedResult[ResponseT]:
        # All filters are on the model's own table, so the WHERE clause is reusable
        count_stmt = select(func.count()).select_from(self.model)
        if stmt.whereclause is not None:
            count_stmt = count_stmt.where(stmt.whereclause)
        total_count = await db.scalar(count_stmt)

        items = await self.fetch_list(db, stmt.offset(paging.skip).limit(paging.page_size))
        return PagedResult[self.response_schema].build(items, total_count or 0, paging)

    async def flush(self, db: AsyncSession, conflict_detail: str | None = None) -> None:
        """
        Flush pending writes, translating database failures into domain errors.

        A constraint violation (unique key, foreign key) becomes ConflictError,
        a lost or locked connection becomes PersistenceUnavailableError.
        """
        try:
            await db.flush()
        except IntegrityError as exc:
            logger.warning("%s write rejected by the database: %s", self.resource_name, exc.orig)
            raise ConflictError(
                conflict_detail or f"{self.resource_name} conflicts with existing data"
            ) from exc
        except OperationalError as exc:
            logger.error("Database unavailable while writing %s: %s", self.resource_name, exc.orig)
            raise PersistenceUnavailableError() from exc

    async def _insert(self, db: AsyncSession, entity: Any) -> None:
        db.add(entity)
        await self.flush(db)

    async def _reload(self, db: AsyncSession, entity_id: int) -> ResponseT:
        result = await db.execute(self.select_loaded().where(self.model.id == entity_id))
        return self.to_response(result.scalar_one())
