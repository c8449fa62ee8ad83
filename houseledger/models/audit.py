"""
Audit columns shared by every HouseLedger entity.

  - id: integer surrogate key, assigned by the database on insert
  - created_date: stamped once at insert, never changed afterwards
  - last_updated_date: stamped at insert and refreshed on every UPDATE
  - is_active: False marks the row as soft-deleted
  - note: optional free text

None of these are client-writable: the mapping layer (houseledger/mapping.py)
refuses to copy them from request bodies.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditMixin:
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    last_updated_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    # Soft-delete flag: inactive rows are hidden from list queries by default
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
        index=True,
    )

    note: Mapped[str | None] = mapped_column(Text, nullable=True)

    def touch(self) -> None:
        """Refresh last_updated_date explicitly before a mutating flush."""
        self.last_updated_date = utcnow()
