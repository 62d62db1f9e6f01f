"""
Logout Use Case

Revokes the presented session token so it stops authenticating
before its natural expiry.
"""

import logging
from datetime import UTC, datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import RevokedToken
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for logging out.

    Business Rules:
    - Logout always succeeds; the cookie is cleared by the API layer
    - A verified token's jti is added to the deny-list until it expires
    - Revocations of already expired tokens are purged on each logout
    - Tokens issued to other clients stay valid
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, claims: Optional[dict] = None) -> Result[MessageResponse]:
        """
        Execute logout use case.

        Args:
            claims: Decoded session token claims, or None when the request
                carried no valid token
        """
        if claims and claims.get("jti") and claims.get("exp"):
            now = datetime.now(UTC).replace(tzinfo=None)
            expires_at = datetime.fromtimestamp(claims["exp"], UTC).replace(tzinfo=None)
            async with self.uow:
                purged = await self.uow.revoked_tokens.purge_expired(now)
                if purged:
                    logger.info(f"Purged {purged} expired token revocations")

                try:
                    await self.uow.revoked_tokens.add(
                        RevokedToken(
                            jti=claims["jti"],
                            user_id=UUID(claims["id"]),
                            expires_at=expires_at,
                        )
                    )
                    await self.uow.commit()
                except IntegrityError:
                    # A concurrent logout of the same token got there first
                    logger.info(f"Session token for user {claims['id']} already revoked")
                else:
                    logger.info(f"Revoked session token for user {claims['id']}")

        return Return.ok(MessageResponse(message="User logged out successfully"))
