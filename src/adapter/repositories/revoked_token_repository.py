from datetime import datetime

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.revoked_token_repository import IRevokedTokenRepository
from src.domain.entities import RevokedToken


class RevokedTokenRepository(IRevokedTokenRepository):
    """Revoked token repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, revoked_token: RevokedToken) -> RevokedToken:
        existing = await self.session.get(RevokedToken, revoked_token.jti)
        if existing is not None:
            return existing
        self.session.add(revoked_token)
        await self.session.flush()
        return revoked_token

    async def is_revoked(self, jti: str) -> bool:
        stmt = select(RevokedToken.jti).where(RevokedToken.jti == jti)
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def purge_expired(self, now: datetime) -> int:
        stmt = delete(RevokedToken).where(RevokedToken.expires_at <= now)
        result = await self.session.execute(stmt)
        return result.rowcount or 0
