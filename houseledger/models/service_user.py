"""ServiceUser model - a household member that salaries are recorded for."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from houseledger.database import Base
from houseledger.models.audit import AuditMixin


class ServiceUser(AuditMixin, Base):
    __tablename__ = "AD_ServiceUser"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    surname: Mapped[str | None] = mapped_column(String(100))
