"""
Services for reference data: countries, currencies, service users, suppliers.

These aggregates have no business rules beyond the generic CRUD contract,
only their default ordering and the code lookups used by other services
and by the import tooling.
"""

import logging

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from houseledger.mapping import (
    COUNTRY_MAPPING,
    CURRENCY_MAPPING,
    SERVICE_USER_MAPPING,
    SUPPLIER_MAPPING,
)
from houseledger.models.country import Country
from houseledger.models.currency import Currency
from houseledger.models.service_user import ServiceUser
from houseledger.models.supplier import Supplier
from houseledger.schemas.country import CountryResponse
from houseledger.schemas.currency import CurrencyResponse
from houseledger.schemas.service_user import ServiceUserResponse
from houseledger.schemas.supplier import SupplierResponse
from houseledger.services.crud import CrudService

logger = logging.getLogger(__name__)


class CountryService(CrudService[Country, CountryResponse]):
    model = Country
    response_schema = CountryResponse
    mapping = COUNTRY_MAPPING
    resource_name = "Country"

    def order_by(self) -> list:
        return [Country.name]

    async def get_by_code(self, db: AsyncSession, code: str) -> CountryResponse | None:
        """Look up an active country by ISO alpha-3 code, case-insensitively."""
        result = await db.execute(
            self.base_query()
            .where(func.upper(Country.country_code_alf3) == code.upper())
            .order_by(Country.id)
            .limit(1)
        )
        country = result.scalar_one_or_none()
        return self.to_response(country) if country is not None else None


class CurrencyService(CrudService[Currency, CurrencyResponse]):
    model = Currency
    response_schema = CurrencyResponse
    mapping = CURRENCY_MAPPING
    resource_name = "Currency"

    def order_by(self) -> list:
        return [Currency.currency_code_alf3]

    async def get_by_code(self, db: AsyncSession, code: str) -> CurrencyResponse | None:
        """Look up an active currency by ISO 4217 code, case-insensitively."""
        result = await db.execute(
            self.base_query()
            .where(func.upper(Currency.currency_code_alf3) == code.upper())
            .order_by(Currency.id)
            .limit(1)
        )
        currency = result.scalar_one_or_none()
        return self.to_response(currency) if currency is not None else None


class ServiceUserService(CrudService[ServiceUser, ServiceUserResponse]):
    model = ServiceUser
    response_schema = ServiceUserResponse
    mapping = SERVICE_USER_MAPPING
    resource_name = "ServiceUser"

    def order_by(self) -> list:
        return [ServiceUser.surname, ServiceUser.name]


class SupplierService(CrudService[Supplier, SupplierResponse]):
    model = Supplier
    response_schema = SupplierResponse
    mapping = SUPPLIER_MAPPING
    resource_name = "Supplier"

    def order_by(self) -> list:
        return [Supplier.name]


country_service = CountryService()
currency_service = CurrencyService()
service_user_service = ServiceUserService()
supplier_service = SupplierService()
