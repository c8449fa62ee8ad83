"""Balance model - a point-in-time balance snapshot for an account."""

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from houseledger.database import Base
from houseledger.models.audit import AuditMixin


class Balance(AuditMixin, Base):
    __tablename__ = "MM_Balance"

    amount: Mapped[float] = mapped_column("BalanceValue", Float, nullable=False)
    balance_date: Mapped[datetime] = mapped_column(
        "DateBalance", DateTime, nullable=False
    )

    account_id: Mapped[int | None] = mapped_column(
        ForeignKey("MM_AccountMasterData.id"),
        nullable=True,
        index=True,
    )

    # --- Relationships ---
    account: Mapped["Account"] = relationship()
