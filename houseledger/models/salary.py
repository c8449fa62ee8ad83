"""
Salary model - a monthly pay slip for a household member.

Money columns are Numeric/Decimal. salary_value is in the slip's own
currency; salary_value_eur and exchange_rate are computed by
services/salary_service.py on every create and update and are never
accepted from clients.

The exchange rate is stored in column "ExcengeRate" (sic): the misspelling
is part of the existing schema.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from houseledger.database import Base
from houseledger.models.audit import AuditMixin


class Salary(AuditMixin, Base):
    __tablename__ = "SL_Salary"

    salary_value: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    salary_value_eur: Mapped[Decimal | None] = mapped_column(Numeric(18, 2))
    exchange_rate: Mapped[Decimal | None] = mapped_column(
        "ExcengeRate", Numeric(18, 6)
    )

    salary_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    # Kept as text, e.g. "2024" and "03", as printed on the slip
    refer_year: Mapped[str | None] = mapped_column(String(4), index=True)
    refer_month: Mapped[str | None] = mapped_column(String(2))
    file_name: Mapped[str | None] = mapped_column(String(255))

    currency_id: Mapped[int | None] = mapped_column(
        ForeignKey("AD_Currency.id"),
        nullable=True,
    )
    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("AD_ServiceUser.id"),
        nullable=True,
        index=True,
    )

    # --- Relationships ---
    currency: Mapped["Currency"] = relationship()
    user: Mapped["ServiceUser"] = relationship()
