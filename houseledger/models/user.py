"""
User model - the authentication identity.

A User is only a login credential (email + hashed password). It is not part
of the household ledger: ServiceUser (models/service_user.py) is the person
a salary belongs to, and has no login.

The password is stored as an Argon2id hash, never in plaintext.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from houseledger.database import Base
from houseledger.models.audit import AuditMixin


class User(AuditMixin, Base):
    __tablename__ = "users"

    # Email is the login identifier: unique and indexed for fast lookups
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    # Argon2id hash of the password
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
