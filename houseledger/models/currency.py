"""Currency reference data (ISO 4217 alpha-3 and numeric codes)."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from houseledger.database import Base
from houseledger.models.audit import AuditMixin


class Currency(AuditMixin, Base):
    __tablename__ = "AD_Currency"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500))
    currency_code_alf3: Mapped[str | None] = mapped_column(String(3), index=True)
    currency_code_num3: Mapped[str | None] = mapped_column(String(3))
