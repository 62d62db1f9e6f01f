"""
RevokedToken Entity

Deny-list of session tokens invalidated by logout.
"""

from datetime import datetime
from uuid import UUID

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class RevokedToken(SQLModel, table=True):
    """
    RevokedToken entity - a session token that must no longer authenticate.

    Business Rules:
    - Keyed by the token's jti claim
    - Kept until the token would have expired on its own
    """

    __tablename__ = "revoked_tokens"

    jti: str = Field(primary_key=True, max_length=64)
    user_id: UUID = Field(foreign_key="users.id", index=True)

    revoked_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (Index("idx_revoked_token_expires_at", "expires_at"),)
