"""
Transaction model - a single movement on an account, imported or entered by hand.

Category:
  Each transaction can carry a spending category ("Groceries", "Utilities")
  plus a flag telling whether a human confirmed it or it was guessed during
  import. The pair is exposed as the TransactionCategory value object via
  the `category` property; storage keeps the legacy columns "Area" and
  "IsCatConfirmed".

Duplicate detection:
  unique_key is "{account_id}_{YYYYMMDD}_{abs(amount):.2f}" and is generated
  by the service layer, never by the client. Two active transactions with
  the same key are treated as the same bank movement imported twice.
"""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from houseledger.database import Base
from houseledger.models.audit import AuditMixin


@dataclass(frozen=True)
class TransactionCategory:
    """A spending category. The name is stripped and must not be blank."""
    name: str
    is_confirmed: bool = False

    def __post_init__(self):
        if self.name is None or not self.name.strip():
            raise ValueError("Category name cannot be empty")
        object.__setattr__(self, "name", self.name.strip())


def build_unique_key(account_id: int, transaction_date: datetime, amount: float) -> str:
    return f"{account_id}_{transaction_date:%Y%m%d}_{abs(amount):.2f}"


class Transaction(AuditMixin, Base):
    __tablename__ = "TX_Transaction"

    transaction_date: Mapped[datetime] = mapped_column(
        "TxnDate", DateTime, nullable=False, index=True
    )
    amount: Mapped[float] = mapped_column("TxnAmount", Float, nullable=False)
    description: Mapped[str | None] = mapped_column(String(500))
    unique_key: Mapped[str | None] = mapped_column(String(100), index=True)

    category_name: Mapped[str | None] = mapped_column("Area", String(100))
    is_category_confirmed: Mapped[bool] = mapped_column(
        "IsCatConfirmed", Boolean, default=False, nullable=False
    )

    account_id: Mapped[int] = mapped_column(
        ForeignKey("MM_AccountMasterData.id"),
        nullable=False,
        index=True,
    )

    # --- Relationships ---
    account: Mapped["Account"] = relationship()

    @property
    def category(self) -> TransactionCategory | None:
        if not self.category_name:
            return None
        return TransactionCategory(self.category_name, bool(self.is_category_confirmed))

    @category.setter
    def category(self, value: TransactionCategory | None) -> None:
        if value is None:
            self.category_name = None
            self.is_category_confirmed = False
        else:
            self.category_name = value.name
            self.is_category_confirmed = value.is_confirmed
