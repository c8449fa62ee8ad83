"""
Salary service - CRUD plus conversion of every pay slip to EUR.

Exchange rate resolution (resolve_exchange_rate), in order:
  1. No currency on the slip                       -> 1
  2. Currency id does not exist                    -> 1
  3. Currency code is EUR (any case)               -> 1
  4. Active rate for the code on the slip's date   -> that rate
  5. Latest active rate for the code               -> that rate
  6. Nothing stored for the code                   -> 1

Rates are "units of currency per 1 EUR", so:

    salary_value_eur = salary_value / exchange_rate

computed with Decimal and rounded half-up to cents. Both values are
recomputed on every create and update; clients cannot set them.
"""

import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from houseledger.mapping import SALARY_MAPPING
from houseledger.models.currency import Currency
from houseledger.models.salary import Salary
from houseledger.schemas.salary import SalaryResponse
from houseledger.services.crud import CrudService
from houseledger.services.currency_rate_service import find_latest_rate, find_rate_on_date

logger = logging.getLogger(__name__)

BASE_CURRENCY = "EUR"
NEUTRAL_RATE = Decimal("1")
CENTS = Decimal("0.01")


async def resolve_exchange_rate(
    db: AsyncSession,
    currency_id: int | None,
    salary_date: datetime,
) -> Decimal:
    """Find the rate that converts a salary in `currency_id` to EUR."""
    if currency_id is None:
        return NEUTRAL_RATE

    currency = await db.get(Currency, currency_id)
    if currency is None:
        logger.warning("Currency %s not found, using rate 1", currency_id)
        return NEUTRAL_RATE

    code = (currency.currency_code_alf3 or "").upper()
    if code == BASE_CURRENCY:
        return NEUTRAL_RATE

    rate = await find_rate_on_date(db, code, salary_date)
    if rate is not None and rate.rate_value > 0:
        return Decimal(rate.rate_value)

    rate = await find_latest_rate(db, code)
    if rate is not None and rate.rate_value > 0:
        logger.warning(
            "No %s rate on %s, falling back to the rate of %s",
            code, salary_date.date(), rate.referring_date.date(),
        )
        return Decimal(rate.rate_value)

    logger.warning("No %s rate stored at all, using rate 1", code)
    return NEUTRAL_RATE


def convert_to_eur(value: Decimal, exchange_rate: Decimal) -> Decimal:
    if exchange_rate <= 0:
        raise ValueError(f"Exchange rate must be positive, got {exchange_rate}")
    return (Decimal(value) / exchange_rate).quantize(CENTS, rounding=ROUND_HALF_UP)


class SalaryService(CrudService[Salary, SalaryResponse]):
    model = Salary
    response_schema = SalaryResponse
    mapping = SALARY_MAPPING
    resource_name = "Salary"
    load_options = (selectinload(Salary.currency), selectinload(Salary.user))

    def order_by(self) -> list:
        return [Salary.salary_date.desc(), Salary.id.desc()]

    async def prepare_create(self, db, entity, request) -> None:
        await self._apply_conversion(db, entity)

    async def prepare_update(self, db, entity, request) -> None:
        await self._apply_conversion(db, entity)

    async def get_by_user_id(self, db: AsyncSession, user_id: int) -> list[SalaryResponse]:
        stmt = self.base_query().where(Salary.user_id == user_id)
        return await self.fetch_list(db, stmt.order_by(*self.order_by()))

    async def get_by_year(self, db: AsyncSession, year: int | str) -> list[SalaryResponse]:
        stmt = self.base_query().where(Salary.refer_year == str(year))
        return await self.fetch_list(db, stmt.order_by(*self.order_by()))

    async def _apply_conversion(self, db: AsyncSession, entity: Salary) -> None:
        rate = await resolve_exchange_rate(db, entity.currency_id, entity.salary_date)
        entity.exchange_rate = rate
        entity.salary_value_eur = convert_to_eur(entity.salary_value, rate)


salary_service = SalaryService()
