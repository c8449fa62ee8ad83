"""Bank model - master data for a bank the household holds accounts with."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from houseledger.database import Base
from houseledger.models.audit import AuditMixin


class Bank(AuditMixin, Base):
    __tablename__ = "MM_BankMasterData"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500))
    web_url: Mapped[str | None] = mapped_column(String(500))
    address: Mapped[str | None] = mapped_column(String(300))
    city: Mapped[str | None] = mapped_column(String(100))
    phone: Mapped[str | None] = mapped_column(String(50))
    mail: Mapped[str | None] = mapped_column(String(200))
    # Contact person at the bank
    reference_name: Mapped[str | None] = mapped_column(String(200))

    country_id: Mapped[int | None] = mapped_column(
        ForeignKey("AD_Country.id"),
        nullable=True,
    )

    # --- Relationships ---
    country: Mapped["Country"] = relationship()
    # Deleting a bank that still has accounts is refused by the database
    accounts: Mapped[list["Account"]] = relationship(
        back_populates="bank", passive_deletes="all"
    )
