"""
Transaction service - business logic for account transactions.

On top of the generic CRUD contract this module handles:
  - Account validation: a transaction can only be written against an
    account that exists and is active (InvalidReferenceError otherwise)
  - Category: set through the TransactionCategory value object, only when
    the request carries a non-blank category name
  - Duplicate detection: unique_key is regenerated on every write and an
    existing ACTIVE transaction with the same key is a ConflictError.
    Soft-deleted transactions do not block a re-import.
  - Paged listings per account (with an optional date window) and across
    all accounts, newest first
"""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from houseledger.exceptions import ConflictError, InvalidReferenceError
from houseledger.mapping import TRANSACTION_MAPPING
from houseledger.models.account import Account
from houseledger.models.transaction import (
    Transaction,
    TransactionCategory,
    build_unique_key,
)
from houseledger.schemas.common import PageRequest, PagedResult
from houseledger.schemas.transaction import TransactionFields, TransactionResponse
from houseledger.services.crud import CrudService

logger = logging.getLogger(__name__)


def category_from_request(request: TransactionFields) -> TransactionCategory | None:
    if request.category_name is None or not request.category_name.strip():
        return None
    return TransactionCategory(request.category_name, request.is_category_confirmed)


class TransactionService(CrudService[Transaction, TransactionResponse]):
    model = Transaction
    response_schema = TransactionResponse
    mapping = TRANSACTION_MAPPING
    resource_name = "Transaction"
    load_options = (selectinload(Transaction.account),)

    def order_by(self) -> list:
        return [Transaction.transaction_date.desc(), Transaction.id.desc()]

    async def prepare_create(self, db, entity, request) -> None:
        await self._ensure_account_is_active(db, entity.account_id)
        entity.category = category_from_request(request)
        await self._assign_unique_key(db, entity)

    async def prepare_update(self, db, entity, request) -> None:
        await self._ensure_account_is_active(db, entity.account_id)
        entity.category = category_from_request(request)
        await self._assign_unique_key(db, entity)

    async def get_by_account_id(
        self,
        db: AsyncSession,
        account_id: int,
        paging: PageRequest,
        from_date: datetime | None = None,
        to_date: datetime | None = None,
    ) -> PagedResult[TransactionResponse]:
        """
        Active transactions of one account, newest first.

        Both date bounds are inclusive and optional.
        """
        stmt = self.base_query().where(Transaction.account_id == account_id)
        if from_date is not None:
            stmt = stmt.where(Transaction.transaction_date >= from_date)
        if to_date is not None:
            stmt = stmt.where(Transaction.transaction_date <= to_date)
        return await self.fetch_page(db, stmt.order_by(*self.order_by()), paging)

    async def get_recent(
        self, db: AsyncSession, paging: PageRequest
    ) -> PagedResult[TransactionResponse]:
        """Active transactions across all accounts, newest first."""
        return await self.fetch_page(db, self.base_query().order_by(*self.order_by()), paging)

    # ------------------------------------------------------------------

    async def _ensure_account_is_active(self, db: AsyncSession, account_id: int) -> None:
        account = await db.get(Account, account_id)
        if account is None or not account.is_active:
            raise InvalidReferenceError("Account", account_id)

    async def _assign_unique_key(self, db: AsyncSession, entity: Transaction) -> None:
        unique_key = build_unique_key(entity.account_id, entity.transaction_date, entity.amount)

        stmt = select(Transaction.id).where(
            Transaction.unique_key == unique_key,
            Transaction.is_active.is_(True),
        )
        if entity.id is not None:
            stmt = stmt.where(Transaction.id != entity.id)

        duplicate_id = (await db.execute(stmt.limit(1))).scalar_one_or_none()
        if duplicate_id is not None:
            logger.warning(
                "Duplicate transaction %s matches existing transaction %s",
                unique_key, duplicate_id,
            )
            raise ConflictError(f"Duplicate transaction detected: {unique_key}")

        entity.unique_key = unique_key


transaction_service = TransactionService()
