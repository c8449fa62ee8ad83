"""
CurrencyConversionRate model - a dated exchange rate against EUR.

Rates are keyed by currency code rather than by a foreign key to Currency,
matching how the rate files are imported: one row per code per day.
rate_value is "units of the currency per 1 EUR", so an amount in that
currency converts to EUR by division (see services/salary_service.py).
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from houseledger.database import Base
from houseledger.models.audit import AuditMixin


class CurrencyConversionRate(AuditMixin, Base):
    __tablename__ = "AD_CurrencyConversionRate"

    rate_value: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    currency_code_alf3: Mapped[str] = mapped_column(
        String(3), nullable=False, index=True
    )
    referring_date: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, index=True
    )
    unique_key: Mapped[str | None] = mapped_column(String(100))
