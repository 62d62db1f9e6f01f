"""
Reset Password Use Case

Consumes a reset secret and sets a new password.
"""

import logging
from datetime import datetime

from src.libs.result import Error, Result, Return
from src.app.services.password import hash_password, validate_password
from src.app.services.reset_secret import hash_reset_secret
from src.app.services.unit_of_work import UnitOfWork
from src.api.utils.jwt import generate_session_token
from .dtos import AuthResponse, PublicUser

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for resetting a password with an emailed secret.

    Business Rules:
    - Secret is validated by hashing it and matching the stored hash
    - Stored expiry must still be in the future
    - Reset fields are cleared on success, so a secret works once
    - A fresh session token is issued
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str, new_password: str) -> Result[AuthResponse]:
        """
        Execute reset password use case.

        Args:
            token: Reset secret (plain text from the emailed link)
            new_password: New password to set

        Errors:
            - VALIDATION_ERROR: Password does not meet requirements
            - INVALID_TOKEN: Secret unknown, already used or expired
        """
        password_validation = validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            user = await self.uow.users.get_by_reset_token(
                hash_reset_secret(token), datetime.utcnow()
            )
            if user is None:
                return Return.err(Error("INVALID_TOKEN", "Invalid token"))

            user.password_hash = hash_password(new_password)
            user.clear_password_reset()
            await self.uow.users.update(user)
            await self.uow.commit()

            logger.info(f"Password reset completed for user {user.id}")

            return Return.ok(
                AuthResponse(
                    token=generate_session_token(user.id),
                    user=PublicUser.from_user(user),
                )
            )
