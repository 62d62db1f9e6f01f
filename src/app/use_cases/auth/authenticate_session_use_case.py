"""
Authenticate Session Use Case

Resolves a bearer session token to the user it was issued to.
"""

import logging
from datetime import UTC, datetime
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.api.utils.jwt import verify_session_token
from .dtos import AuthenticatedSession, UserProfile

logger = logging.getLogger(__name__)

NOT_AUTHORIZED_MESSAGE = "Not authorized to access this route"


class AuthenticateSessionUseCase:
    """
    Use case behind the session middleware.

    Business Rules:
    - Token signature and expiry must verify
    - Token must not be on the revocation list
    - Embedded user id must still resolve to a user
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[AuthenticatedSession]:
        """
        Execute authenticate session use case.

        Args:
            token: Session token from cookie or Authorization header

        Returns:
            Result with AuthenticatedSession, or Error(UNAUTHORIZED)
        """
        if not token:
            return Return.err(Error("UNAUTHORIZED", NOT_AUTHORIZED_MESSAGE))

        claims = verify_session_token(token)
        if claims is None:
            logger.info("Rejected session token: invalid signature or expired")
            return Return.err(Error("UNAUTHORIZED", NOT_AUTHORIZED_MESSAGE))

        async with self.uow:
            jti = claims.get("jti")
            if jti and await self.uow.revoked_tokens.is_revoked(jti):
                logger.info(f"Rejected revoked session token for user {claims['id']}")
                return Return.err(Error("UNAUTHORIZED", NOT_AUTHORIZED_MESSAGE))

            user = await self.uow.users.get_by_id(UUID(claims["id"]))
            if user is None:
                logger.info(f"Session token references missing user {claims['id']}")
                return Return.err(Error("UNAUTHORIZED", "User not found"))

            expires_at = None
            if claims.get("exp"):
                expires_at = datetime.fromtimestamp(claims["exp"], UTC).replace(tzinfo=None)

            return Return.ok(
                AuthenticatedSession(
                    user=UserProfile.from_user(user),
                    token_id=jti,
                    expires_at=expires_at,
                )
            )
