"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
Responses never carry the password hash.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import User


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    """

    name: str
    email: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class PublicUser(BaseModel):
    """User fields safe to hand to clients"""

    id: str
    name: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "PublicUser":
        return cls(id=str(user.id), name=user.name, email=user.email)


class UserProfile(PublicUser):
    """Stored user record without credentials"""

    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserProfile":
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            created_at=user.created_at,
        )


class AuthResponse(BaseModel):
    """Response for register, login and reset password use cases"""

    success: bool = True
    token: str
    user: PublicUser


class MessageResponse(BaseModel):
    """Response for use cases that only report an outcome"""

    success: bool = True
    message: str


class CurrentUserResponse(BaseModel):
    """Response for GET /auth/me"""

    success: bool = True
    data: UserProfile


class UserExistsResponse(BaseModel):
    """Response for check user exists use case"""

    success: bool = True
    exists: bool


class DirectResetPasswordResponse(BaseModel):
    """Response for direct password reset use case"""

    success: bool = True
    message: str
    data: PublicUser


class AuthenticatedSession(BaseModel):
    """Identity resolved from a valid session token"""

    user: UserProfile
    token_id: Optional[str] = None
    expires_at: Optional[datetime] = None
