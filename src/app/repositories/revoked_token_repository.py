from abc import ABC, abstractmethod
from datetime import datetime

from src.domain.entities import RevokedToken


class IRevokedTokenRepository(ABC):
    """Revoked session token repository interface - application layer"""

    @abstractmethod
    async def add(self, revoked_token: RevokedToken) -> RevokedToken:
        """Record a revoked token (idempotent per jti)"""
        pass

    @abstractmethod
    async def is_revoked(self, jti: str) -> bool:
        """Check whether a token id has been revoked"""
        pass

    @abstractmethod
    async def purge_expired(self, now: datetime) -> int:
        """Delete revocations whose token has expired; returns rows removed"""
        pass
