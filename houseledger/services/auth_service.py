"""
Authentication service - register and login business logic.

Register flow:
  1. Check if email is already registered
  2. Hash the password with Argon2id
  3. Create the User and return a JWT so the caller is logged in at once

Login flow:
  1. Look up user by email
  2. Verify password against stored hash
  3. Return a JWT

Login returns the same error for "wrong password", "email not found" and
"user deactivated" so valid emails cannot be enumerated.
"""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from houseledger.exceptions import DuplicateEmailError, InvalidCredentialsError
from houseledger.models.user import User
from houseledger.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)


async def register(
    db: AsyncSession,
    email: str,
    password: str,
) -> tuple[User, str, datetime]:
    """
    Register a new user.

    Returns:
        Tuple of (User instance, JWT token string, token expiry).

    Raises:
        DuplicateEmailError: If the email is already registered.
    """
    result = await db.execute(select(User).where(User.email == email))
    if result.scalar_one_or_none() is not None:
        raise DuplicateEmailError(email)

    user = User(
        email=email,
        hashed_password=hash_password(password),
    )
    db.add(user)
    # Flush to get user.id assigned for the token subject
    await db.flush()

    logger.info("Registered user %s", user.id)
    token, expires_at = create_access_token(data={"sub": str(user.id)})
    return user, token, expires_at


async def login(
    db: AsyncSession,
    email: str,
    password: str,
) -> tuple[User, str, datetime]:
    """
    Authenticate a user and return a JWT token.

    Raises:
        InvalidCredentialsError: If the email doesn't exist, the password
            is wrong, or the user is deactivated.
    """
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()

    if not user or not verify_password(password, user.hashed_password) or not user.is_active:
        logger.warning("Failed login attempt")
        raise InvalidCredentialsError()

    token, expires_at = create_access_token(data={"sub": str(user.id)})
    return user, token, expires_at
