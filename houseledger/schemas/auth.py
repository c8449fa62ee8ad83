"""
Pydantic schemas for authentication endpoints (register and login).

Pydantic validates incoming data automatically: if a required field is
missing or the wrong type, FastAPI returns a 422 error before our code
even runs.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class UserRegisterRequest(BaseModel):
    """Request body for POST /auth/register."""
    email: EmailStr                                # Validates email format
    password: str = Field(min_length=8)            # Minimum 8 characters


class UserLoginRequest(BaseModel):
    """Request body for POST /auth/login."""
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """Response body for a successful login: the JWT and when it expires."""
    token: str
    token_type: str = "bearer"
    expires_at: datetime


class RegisterResponse(TokenResponse):
    """Response body for a successful registration: user info + JWT."""
    user_id: int
    email: str
