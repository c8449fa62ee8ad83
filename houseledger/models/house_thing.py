"""
HouseThing model - a household item (appliance, furniture, device).

Renewal history:
  Items are replaced rather than edited when they are bought again: the old
  row is soft-deleted and a new row is created with the same history_id.
  All rows sharing a history_id form the purchase history of one "slot" in
  the house (e.g. "the kitchen fridge"), active or not.
"""

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from houseledger.database import Base
from houseledger.models.audit import AuditMixin


class HouseThing(AuditMixin, Base):
    __tablename__ = "MM_HouseThings"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500))
    item_type: Mapped[str | None] = mapped_column(String(100))
    model: Mapped[str | None] = mapped_column(String(200))
    cost: Mapped[float | None] = mapped_column(Float)
    history_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    purchase_date: Mapped[datetime | None] = mapped_column(DateTime)

    room_id: Mapped[int | None] = mapped_column(
        ForeignKey("MM_HouseThingsRooms.id"),
        nullable=True,
        index=True,
    )

    # --- Relationships ---
    room: Mapped["Room"] = relationship(back_populates="house_things")
