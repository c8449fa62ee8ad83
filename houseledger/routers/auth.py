"""
Authentication router - register and login endpoints.

These are the only public (unauthenticated) endpoints besides /health.
Everything else requires a valid JWT token.

Endpoints:
  POST /api/v1/auth/register  - Register a new user and get a token
  POST /api/v1/auth/login     - Authenticate and get a token

Plaintext passwords exist only in memory during request processing; they
are hashed before any database operation and never logged.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from houseledger.database import get_db
from houseledger.schemas.auth import (
    RegisterResponse,
    TokenResponse,
    UserLoginRequest,
    UserRegisterRequest,
)
from houseledger.services import auth_service

router = APIRouter()


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    request: UserRegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a new user. Returns a JWT so the user is logged in at once.

    - **email**: Must be a valid email format and not already registered
    - **password**: Minimum 8 characters
    """
    user, token, expires_at = await auth_service.register(
        db=db,
        email=request.email,
        password=request.password,
    )

    return RegisterResponse(
        user_id=user.id,
        email=user.email,
        token=token,
        expires_at=expires_at,
    )


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Authenticate and get a token",
)
async def login(
    request: UserLoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Authenticate with email and password.

    The returned token goes in the Authorization header of every
    subsequent request:

        Authorization: Bearer <token>
    """
    _, token, expires_at = await auth_service.login(
        db=db,
        email=request.email,
        password=request.password,
    )

    return TokenResponse(token=token, expires_at=expires_at)
