"""
Pydantic schemas for Salary endpoints.

exchange_rate and salary_value_eur appear only on the response: they are
computed server-side from the stored conversion rates.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from houseledger.schemas.common import AuditedResponse, to_naive_utc


class SalaryFields(BaseModel):
    salary_value: Decimal = Field(description="Net amount in the slip's own currency")
    salary_date: datetime
    refer_year: str | None = Field(None, pattern=r"^\d{4}$")
    refer_month: str | None = Field(None, pattern=r"^(0?[1-9]|1[0-2])$")
    file_name: str | None = Field(None, max_length=255)
    currency_id: int | None = None
    user_id: int | None = None
    note: str | None = None

    @field_validator("salary_date")
    @classmethod
    def normalise_salary_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class SalaryCreateRequest(SalaryFields):
    """Request body for POST /salaries."""


class SalaryUpdateRequest(SalaryFields):
    """Request body for PUT /salaries/{id}."""


class SalaryResponse(AuditedResponse):
    salary_value: Decimal
    salary_value_eur: Decimal | None
    exchange_rate: Decimal | None
    salary_date: datetime
    refer_year: str | None
    refer_month: str | None
    file_name: str | None
    currency_id: int | None
    user_id: int | None
    currency_name: str | None = None
    currency_code: str | None = None
    user_name: str | None = None
