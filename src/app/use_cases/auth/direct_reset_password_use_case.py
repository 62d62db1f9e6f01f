"""
Direct Reset Password Use Case

Resets a password addressed by email. The caller must still hold the
unexpired reset secret issued to that email.
"""

import logging
from datetime import datetime

from src.libs.result import Error, Result, Return
from src.app.services.password import hash_password, validate_password
from src.app.services.reset_secret import match_reset_secret
from src.app.services.unit_of_work import UnitOfWork
from .dtos import DirectResetPasswordResponse, PublicUser

logger = logging.getLogger(__name__)


class DirectResetPasswordUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, email: str, token: str, new_password: str
    ) -> Result[DirectResetPasswordResponse]:
        password_validation = validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "No user with that email"))

            if not user.has_pending_reset(datetime.utcnow()) or not match_reset_secret(
                token, user.reset_password_token
            ):
                logger.warning(f"Direct reset rejected for user {user.id}")
                return Return.err(Error("INVALID_TOKEN", "Invalid token"))

            user.password_hash = hash_password(new_password)
            user.clear_password_reset()
            await self.uow.users.update(user)
            await self.uow.commit()

            logger.info(f"Password updated via direct reset for user {user.id}")

            return Return.ok(
                DirectResetPasswordResponse(
                    message="Password updated successfully",
                    data=PublicUser.from_user(user),
                )
            )
