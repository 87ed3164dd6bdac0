"""
Pydantic schemas for authentication requests and responses.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime
from rental_admin.models.user import UserRole


class LoginRequest(BaseModel):
    """Login request schema."""

    # Plain str: e-mails are matched exactly as stored, without normalization
    email: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="User's email address",
        examples=["admin@dashboard.com"]
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="User's password"
    )


class CurrentUserResponse(BaseModel):
    """User response schema (excluding sensitive data)."""

    id: int = Field(..., description="User's identifier", examples=[1])
    email: EmailStr = Field(..., description="User's email address", examples=["admin@dashboard.com"])
    role: UserRole = Field(..., description="User's role", examples=["admin"])


class LoginResponse(BaseModel):
    """Complete login response schema."""

    user: CurrentUserResponse = Field(..., description="Authenticated user information")
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type", examples=["bearer"])
    expires_in: int = Field(..., description="Access token lifetime in seconds", examples=[86400])


class TokenValidationResponse(BaseModel):
    """Token validation response schema."""

    valid: bool = Field(..., description="Whether the token is valid")
    user_id: Optional[str] = Field(None, description="User ID if token is valid")
    email: Optional[EmailStr] = Field(None, description="User email if token is valid")
    role: Optional[UserRole] = Field(None, description="User role if token is valid")
    expires_at: Optional[datetime] = Field(None, description="Token expiration time")
