"""
Account model - a bank account held by the household.

Legacy storage names:
  The table predates this service, so a few columns keep their historical
  names. The display name lives in column "Conto" and the bank reference in
  "BankMasterDataId". Python code only ever sees `name` and `bank_id`.

Balances are not derived from transactions: they are recorded snapshots
(see models/balance.py).
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from houseledger.database import Base
from houseledger.models.audit import AuditMixin


class Account(AuditMixin, Base):
    __tablename__ = "MM_AccountMasterData"

    name: Mapped[str] = mapped_column("Conto", String(200), nullable=False)
    account_number: Mapped[str | None] = mapped_column(String(50))
    description: Mapped[str | None] = mapped_column(String(500))
    iban: Mapped[str | None] = mapped_column(String(34))
    bic: Mapped[str | None] = mapped_column(String(11))
    # Free-form: "checking", "savings", "credit card", ...
    account_type: Mapped[str | None] = mapped_column(String(50))

    currency_id: Mapped[int | None] = mapped_column(
        ForeignKey("AD_Currency.id"),
        nullable=True,
    )
    bank_id: Mapped[int | None] = mapped_column(
        "BankMasterDataId",
        ForeignKey("MM_BankMasterData.id"),
        nullable=True,
        index=True,
    )

    # --- Relationships ---
    bank: Mapped["Bank"] = relationship(back_populates="accounts")
    currency: Mapped["Currency"] = relationship()
