"""
Accounts, balances and banks routers.

  /accounts                      - CRUD
  GET /accounts/bank/{bank_id}   - active accounts held at one bank
  /balances                      - CRUD
  GET /balances/account/{account_id} - balance snapshots of one account, newest first
  /banks                         - CRUD
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from houseledger.database import get_db
from houseledger.routers.crud import add_crud_routes
from houseledger.schemas.account import (
    AccountCreateRequest,
    AccountResponse,
    AccountUpdateRequest,
)
from houseledger.schemas.balance import (
    BalanceCreateRequest,
    BalanceResponse,
    BalanceUpdateRequest,
)
from houseledger.schemas.bank import BankCreateRequest, BankResponse, BankUpdateRequest
from houseledger.services.account_service import (
    account_service,
    balance_service,
    bank_service,
)

accounts_router = APIRouter()
balances_router = APIRouter()
banks_router = APIRouter()


@accounts_router.get(
    "/bank/{bank_id}",
    response_model=list[AccountResponse],
    summary="List accounts held at a bank",
)
async def list_accounts_by_bank(
    bank_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await account_service.get_by_bank_id(db, bank_id)


@balances_router.get(
    "/account/{account_id}",
    response_model=list[BalanceResponse],
    summary="List balance snapshots of an account",
)
async def list_balances_by_account(
    account_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await balance_service.get_by_account_id(db, account_id)


add_crud_routes(
    accounts_router, account_service,
    AccountCreateRequest, AccountUpdateRequest, AccountResponse,
)
add_crud_routes(
    balances_router, balance_service,
    BalanceCreateRequest, BalanceUpdateRequest, BalanceResponse,
)
add_crud_routes(
    banks_router, bank_service,
    BankCreateRequest, BankUpdateRequest, BankResponse,
)
