"""Room model - a room of the house that household items are placed in."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from houseledger.database import Base
from houseledger.models.audit import AuditMixin


class Room(AuditMixin, Base):
    __tablename__ = "MM_HouseThingsRooms"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500))
    # UI hints for the frontend (hex colour, icon name)
    color: Mapped[str | None] = mapped_column(String(20))
    icon: Mapped[str | None] = mapped_column(String(50))

    # --- Relationships ---
    # Deleting a room that still holds items is refused by the database
    house_things: Mapped[list["HouseThing"]] = relationship(
        back_populates="room", passive_deletes="all"
    )
