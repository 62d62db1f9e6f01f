"""
Login Use Case

Handles email/password authentication and issues a session token.
"""

import logging

from src.libs.result import Error, Result, Return
from src.app.services.password import burn_password_check, verify_password
from src.app.services.unit_of_work import UnitOfWork
from src.api.utils.jwt import generate_session_token
from .dtos import AuthResponse, PublicUser

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "The email or password you entered is incorrect"


class LoginUseCase:
    """
    Use case for user login and session token issuance.

    Business Rules:
    - Unknown email and wrong password produce the same error
    - A bcrypt check runs even when the user is missing (flat timing)
    - Session token is valid for JWT_EXPIRE_DAYS
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str, password: str) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with AuthResponse containing token and user, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                burn_password_check(password)
                logger.info("Login failed: unknown email")
                return Return.err(
                    Error("INVALID_CREDENTIALS", INVALID_CREDENTIALS_MESSAGE)
                )

            if not verify_password(password, user.password_hash):
                logger.info(f"Login failed: wrong password for user {user.id}")
                return Return.err(
                    Error("INVALID_CREDENTIALS", INVALID_CREDENTIALS_MESSAGE)
                )

            logger.info(f"Login successful for user {user.id}")

            return Return.ok(
                AuthResponse(
                    token=generate_session_token(user.id),
                    user=PublicUser.from_user(user),
                )
            )
