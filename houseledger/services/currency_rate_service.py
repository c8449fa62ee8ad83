"""
Currency conversion rate service.

Besides the generic CRUD contract this module owns the two rate lookups
the salary conversion depends on:

  find_rate_on_date  - the active rate for a code whose referring_date
                       falls on the given calendar day
  find_latest_rate   - the most recent active rate for a code

Codes are matched case-insensitively. "Same day" compares the calendar
date only; the time of day on either side is ignored.
"""

import logging
from datetime import date, datetime, time, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from houseledger.mapping import CURRENCY_RATE_MAPPING
from houseledger.models.currency_rate import CurrencyConversionRate
from houseledger.schemas.currency_rate import CurrencyRateResponse
from houseledger.services.crud import CrudService

logger = logging.getLogger(__name__)


def _day_bounds(day: date | datetime) -> tuple[datetime, datetime]:
    if isinstance(day, datetime):
        day = day.date()
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def _for_code(code: str):
    return select(CurrencyConversionRate).where(
        CurrencyConversionRate.is_active.is_(True),
        func.upper(CurrencyConversionRate.currency_code_alf3) == code.upper(),
    )


async def find_rate_on_date(
    db: AsyncSession, code: str, day: date | datetime
) -> CurrencyConversionRate | None:
    start, end = _day_bounds(day)
    result = await db.execute(
        _for_code(code)
        .where(
            CurrencyConversionRate.referring_date >= start,
            CurrencyConversionRate.referring_date < end,
        )
        .order_by(CurrencyConversionRate.referring_date.desc(), CurrencyConversionRate.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def find_latest_rate(db: AsyncSession, code: str) -> CurrencyConversionRate | None:
    result = await db.execute(
        _for_code(code)
        .order_by(CurrencyConversionRate.referring_date.desc(), CurrencyConversionRate.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


class CurrencyRateService(CrudService[CurrencyConversionRate, CurrencyRateResponse]):
    model = CurrencyConversionRate
    response_schema = CurrencyRateResponse
    mapping = CURRENCY_RATE_MAPPING
    resource_name = "CurrencyConversionRate"

    def order_by(self) -> list:
        return [
            CurrencyConversionRate.referring_date.desc(),
            CurrencyConversionRate.currency_code_alf3,
        ]

    async def prepare_create(self, db, entity, request) -> None:
        entity.currency_code_alf3 = entity.currency_code_alf3.upper()

    async def prepare_update(self, db, entity, request) -> None:
        entity.currency_code_alf3 = entity.currency_code_alf3.upper()

    async def get_by_currency_code(
        self, db: AsyncSession, code: str
    ) -> list[CurrencyRateResponse]:
        stmt = self.base_query().where(
            func.upper(CurrencyConversionRate.currency_code_alf3) == code.upper()
        )
        return await self.fetch_list(db, stmt.order_by(*self.order_by()))

    async def get_by_currency_and_date(
        self, db: AsyncSession, code: str, day: date | datetime
    ) -> CurrencyRateResponse | None:
        rate = await find_rate_on_date(db, code, day)
        return self.to_response(rate) if rate is not None else None


currency_rate_service = CurrencyRateService()
