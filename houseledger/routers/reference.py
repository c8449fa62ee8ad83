"""
Reference data routers: countries, currencies, conversion rates, service
users and suppliers.

Lookups by code are case-insensitive and return 404 when nothing active
matches:
  GET /countries/code/{code}
  GET /currencies/code/{code}
  GET /currency-conversion-rates/currency/{code}
  GET /currency-conversion-rates/currency/{code}/date/{day}
"""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from houseledger.database import get_db
from houseledger.exceptions import ResourceNotFoundError
from houseledger.routers.crud import add_crud_routes
from houseledger.schemas.country import (
    CountryCreateRequest,
    CountryResponse,
    CountryUpdateRequest,
)
from houseledger.schemas.currency import (
    CurrencyCreateRequest,
    CurrencyResponse,
    CurrencyUpdateRequest,
)
from houseledger.schemas.currency_rate import (
    CurrencyRateCreateRequest,
    CurrencyRateResponse,
    CurrencyRateUpdateRequest,
)
from houseledger.schemas.service_user import (
    ServiceUserCreateRequest,
    ServiceUserResponse,
    ServiceUserUpdateRequest,
)
from houseledger.schemas.supplier import (
    SupplierCreateRequest,
    SupplierResponse,
    SupplierUpdateRequest,
)
from houseledger.services.currency_rate_service import currency_rate_service
from houseledger.services.reference_services import (
    country_service,
    currency_service,
    service_user_service,
    supplier_service,
)

countries_router = APIRouter()
currencies_router = APIRouter()
currency_rates_router = APIRouter()
service_users_router = APIRouter()
suppliers_router = APIRouter()


@countries_router.get(
    "/code/{code}",
    response_model=CountryResponse,
    summary="Get a country by ISO alpha-3 code",
)
async def get_country_by_code(code: str, db: AsyncSession = Depends(get_db)):
    country = await country_service.get_by_code(db, code)
    if country is None:
        raise ResourceNotFoundError("Country", code)
    return country


@currencies_router.get(
    "/code/{code}",
    response_model=CurrencyResponse,
    summary="Get a currency by ISO 4217 code",
)
async def get_currency_by_code(code: str, db: AsyncSession = Depends(get_db)):
    currency = await currency_service.get_by_code(db, code)
    if currency is None:
        raise ResourceNotFoundError("Currency", code)
    return currency


@currency_rates_router.get(
    "/currency/{code}",
    response_model=list[CurrencyRateResponse],
    summary="List the stored rates of a currency",
)
async def list_rates_by_currency(code: str, db: AsyncSession = Depends(get_db)):
    return await currency_rate_service.get_by_currency_code(db, code)


@currency_rates_router.get(
    "/currency/{code}/date/{day}",
    response_model=CurrencyRateResponse,
    summary="Get a currency's rate for one day",
)
async def get_rate_by_currency_and_date(
    code: str,
    day: date,
    db: AsyncSession = Depends(get_db),
):
    rate = await currency_rate_service.get_by_currency_and_date(db, code, day)
    if rate is None:
        raise ResourceNotFoundError("CurrencyConversionRate", f"{code.upper()}@{day}")
    return rate


add_crud_routes(
    countries_router, country_service,
    CountryCreateRequest, CountryUpdateRequest, CountryResponse,
)
add_crud_routes(
    currencies_router, currency_service,
    CurrencyCreateRequest, CurrencyUpdateRequest, CurrencyResponse,
)
add_crud_routes(
    currency_rates_router, currency_rate_service,
    CurrencyRateCreateRequest, CurrencyRateUpdateRequest, CurrencyRateResponse,
)
add_crud_routes(
    service_users_router, service_user_service,
    ServiceUserCreateRequest, ServiceUserUpdateRequest, ServiceUserResponse,
)
add_crud_routes(
    suppliers_router, supplier_service,
    SupplierCreateRequest, SupplierUpdateRequest, SupplierResponse,
)
