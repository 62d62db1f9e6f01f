"""
User Entity

Represents an account that signs in with email and password.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class User(SQLModel, table=True):
    """
    User entity - the credential record behind every session.

    Business Rules:
    - Email is unique across all users and stored lower-cased
    - Password stored as bcrypt hash (cost factor 12), never serialized
    - reset_password_token is the SHA-256 hash of the emailed secret
    - reset_password_token and reset_password_expire are set and cleared together
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    # Password reset (forgot/reset flow)
    reset_password_token: Optional[str] = Field(
        default=None, index=True, max_length=64
    )
    reset_password_expire: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_user_reset_expire", "reset_password_expire"),)

    @staticmethod
    def normalize_email(email: str) -> str:
        return email.strip().lower()

    def set_password_reset(self, token_hash: str, expires_at: datetime) -> None:
        self.reset_password_token = token_hash
        self.reset_password_expire = expires_at

    def clear_password_reset(self) -> None:
        self.reset_password_token = None
        self.reset_password_expire = None

    def has_pending_reset(self, now: datetime) -> bool:
        return (
            self.reset_password_token is not None
            and self.reset_password_expire is not None
            and self.reset_password_expire > now
        )
