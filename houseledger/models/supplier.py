"""Supplier model - utility and service providers (electricity, gas, internet...)."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from houseledger.database import Base
from houseledger.models.audit import AuditMixin


class Supplier(AuditMixin, Base):
    __tablename__ = "Suppliers"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    # Billing unit, e.g. "kWh" or "m3"
    unit_measure: Mapped[str | None] = mapped_column(String(50))
    description: Mapped[str | None] = mapped_column(String(500))
    type: Mapped[str | None] = mapped_column(String(100))
    contract: Mapped[str | None] = mapped_column(String(200))
