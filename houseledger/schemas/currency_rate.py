"""
Pydantic schemas for CurrencyConversionRate endpoints.

rate_value is a Decimal: it is serialised as a JSON string so no precision
is lost on the way out.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from houseledger.schemas.common import AuditedResponse, to_naive_utc


class CurrencyRateFields(BaseModel):
    rate_value: Decimal = Field(gt=0, description="Units of the currency per 1 EUR")
    currency_code_alf3: str = Field(min_length=3, max_length=3)
    referring_date: datetime
    unique_key: str | None = Field(None, max_length=100)
    note: str | None = None

    @field_validator("referring_date")
    @classmethod
    def normalise_referring_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class CurrencyRateCreateRequest(CurrencyRateFields):
    """Request body for POST /currency-conversion-rates."""


class CurrencyRateUpdateRequest(CurrencyRateFields):
    """Request body for PUT /currency-conversion-rates/{id}."""


class CurrencyRateResponse(AuditedResponse):
    rate_value: Decimal
    currency_code_alf3: str
    referring_date: datetime
    unique_key: str | None
