"""
Account, Balance and Bank services.

Accounts and balances carry a display name from a related row (bank_name,
account_name), so their services eager-load that relationship with
selectinload; lazy loading is not available on an AsyncSession.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from houseledger.mapping import ACCOUNT_MAPPING, BALANCE_MAPPING, BANK_MAPPING
from houseledger.models.account import Account
from houseledger.models.balance import Balance
from houseledger.models.bank import Bank
from houseledger.schemas.account import AccountResponse
from houseledger.schemas.balance import BalanceResponse
from houseledger.schemas.bank import BankResponse
from houseledger.services.crud import CrudService

logger = logging.getLogger(__name__)


class AccountService(CrudService[Account, AccountResponse]):
    model = Account
    response_schema = AccountResponse
    mapping = ACCOUNT_MAPPING
    resource_name = "Account"
    load_options = (selectinload(Account.bank),)

    def order_by(self) -> list:
        return [Account.name]

    async def get_by_bank_id(self, db: AsyncSession, bank_id: int) -> list[AccountResponse]:
        logger.debug("Listing accounts for bank %s", bank_id)
        stmt = self.base_query().where(Account.bank_id == bank_id)
        return await self.fetch_list(db, stmt.order_by(*self.order_by()))


class BalanceService(CrudService[Balance, BalanceResponse]):
    model = Balance
    response_schema = BalanceResponse
    mapping = BALANCE_MAPPING
    resource_name = "Balance"
    load_options = (selectinload(Balance.account),)

    def order_by(self) -> list:
        return [Balance.balance_date.desc(), Balance.id.desc()]

    async def get_by_account_id(self, db: AsyncSession, account_id: int) -> list[BalanceResponse]:
        logger.debug("Listing balances for account %s", account_id)
        stmt = self.base_query().where(Balance.account_id == account_id)
        return await self.fetch_list(db, stmt.order_by(*self.order_by()))


class BankService(CrudService[Bank, BankResponse]):
    model = Bank
    response_schema = BankResponse
    mapping = BANK_MAPPING
    resource_name = "Bank"

    def order_by(self) -> list:
        return [Bank.name]


account_service = AccountService()
balance_service = BalanceService()
bank_service = BankService()
