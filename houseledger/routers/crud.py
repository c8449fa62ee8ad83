"""
Shared CRUD endpoints, mounted onto each resource router.

add_crud_routes() registers the six standard endpoints for one aggregate:

    GET    ""               - paged list (page, page_size, include_inactive)
    GET    "/{item_id}"     - one item, active or soft-deleted
    POST   ""               - create (201)
    PUT    "/{item_id}"     - update
    DELETE "/{item_id}"     - soft delete (204)
    DELETE "/{item_id}/hard" - hard delete (204)

Call it AFTER declaring a router's own filter routes: "/{item_id}" would
otherwise capture fixed paths such as "/recent".

Services report a missing id by returning None / False; this is where it
becomes a 404.
"""

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from houseledger.config import settings
from houseledger.database import get_db
from houseledger.exceptions import ResourceNotFoundError
from houseledger.schemas.common import PageRequest, PagedResult
from houseledger.services.crud import CrudService


def page_request(
    page: int = Query(1, description="1-based page number; values below 1 are treated as 1"),
    page_size: int = Query(
        settings.DEFAULT_PAGE_SIZE,
        description=f"Items per page, capped at {settings.MAX_PAGE_SIZE}",
    ),
) -> PageRequest:
    return PageRequest(page=page, page_size=page_size)


def add_crud_routes(
    router: APIRouter,
    service: CrudService,
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    response_schema: type[BaseModel],
) -> None:
    resource = service.resource_name

    @router.get(
        "",
        response_model=PagedResult[response_schema],
        summary=f"List {resource} records",
    )
    async def list_items(
        paging: PageRequest = Depends(page_request),
        include_inactive: bool = Query(False, description="Include soft-deleted records"),
        db: AsyncSession = Depends(get_db),
    ):
        return await service.list_paged(db, paging, include_inactive)

    @router.get(
        "/{item_id}",
        response_model=response_schema,
        summary=f"Get a {resource} by id",
    )
    async def get_item(
        item_id: int,
        db: AsyncSession = Depends(get_db),
    ):
        item = await service.get_by_id(db, item_id)
        if item is None:
            raise ResourceNotFoundError(resource, item_id)
        return item

    @router.post(
        "",
        response_model=response_schema,
        status_code=status.HTTP_201_CREATED,
        summary=f"Create a {resource}",
    )
    async def create_item(
        request: create_schema,
        db: AsyncSession = Depends(get_db),
    ):
        return await service.create(db, request)

    @router.put(
        "/{item_id}",
        response_model=response_schema,
        summary=f"Update a {resource}",
    )
    async def update_item(
        item_id: int,
        request: update_schema,
        db: AsyncSession = Depends(get_db),
    ):
        item = await service.update(db, item_id, request)
        if item is None:
            raise ResourceNotFoundError(resource, item_id)
        return item

    @router.delete(
        "/{item_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary=f"Soft-delete a {resource}",
    )
    async def soft_delete_item(
        item_id: int,
        db: AsyncSession = Depends(get_db),
    ):
        if not await service.soft_delete(db, item_id):
            raise ResourceNotFoundError(resource, item_id)

    @router.delete(
        "/{item_id}/hard",
        status_code=status.HTTP_204_NO_CONTENT,
        summary=f"Permanently delete a {resource}",
    )
    async def hard_delete_item(
        item_id: int,
        db: AsyncSession = Depends(get_db),
    ):
        if not await service.hard_delete(db, item_id):
            raise ResourceNotFoundError(resource, item_id)
