"""
Transactions router.

Endpoints (besides the standard CRUD set):
  GET /transactions/recent                    - newest active transactions, paged
  GET /transactions/account/{account_id}      - one account's transactions, paged,
                                                optionally within [from_date, to_date]

Writes are validated against the referenced account (400 if it is missing
or inactive) and rejected as duplicates (409) when an active transaction
with the same account, day and absolute amount already exists.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from houseledger.database import get_db
from houseledger.routers.crud import add_crud_routes, page_request
from houseledger.schemas.common import PageRequest, PagedResult, to_naive_utc
from houseledger.schemas.transaction import (
    TransactionCreateRequest,
    TransactionResponse,
    TransactionUpdateRequest,
)
from houseledger.services.transaction_service import transaction_service

router = APIRouter()


@router.get(
    "/recent",
    response_model=PagedResult[TransactionResponse],
    summary="List the most recent transactions",
)
async def list_recent_transactions(
    paging: PageRequest = Depends(page_request),
    db: AsyncSession = Depends(get_db),
):
    return await transaction_service.get_recent(db, paging)


@router.get(
    "/account/{account_id}",
    response_model=PagedResult[TransactionResponse],
    summary="List an account's transactions",
)
async def list_account_transactions(
    account_id: int,
    from_date: datetime | None = Query(None, description="Inclusive lower bound"),
    to_date: datetime | None = Query(None, description="Inclusive upper bound"),
    paging: PageRequest = Depends(page_request),
    db: AsyncSession = Depends(get_db),
):
    return await transaction_service.get_by_account_id(
        db,
        account_id,
        paging,
        from_date=to_naive_utc(from_date),
        to_date=to_naive_utc(to_date),
    )


add_crud_routes(
    router, transaction_service,
    TransactionCreateRequest, TransactionUpdateRequest, TransactionResponse,
)
