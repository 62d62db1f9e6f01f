"""
Forgot Password Use Case

Generates a one-time reset secret and sends the reset link.
"""

import logging
from datetime import datetime, timedelta

from config import ApplicationConfig
from src.libs.result import Error, Result, Return
from src.app.services.mailer import MailDeliveryError, Mailer
from src.app.services.reset_secret import generate_reset_secret
from src.app.services.unit_of_work import UnitOfWork
from .dtos import MessageResponse

logger = logging.getLogger(__name__)

CONCEALED_MESSAGE = "If the email exists, a password reset link has been sent"


class ForgotPasswordUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Reset secret is 20 random bytes (hex), only its SHA-256 hash is stored
    - Secret expires after RESET_TOKEN_EXPIRE_MINUTES (10 by default)
    - A newer request overwrites the pending secret of an older one
    - Unknown email fails with USER_NOT_FOUND, unless
      FORGOT_PASSWORD_CONCEAL_UNKNOWN_EMAIL is set
    - Without a mail transport the reset URL is written to the log
    - If delivery fails the reset fields are cleared again
    """

    def __init__(self, uow: UnitOfWork, mailer: Mailer, config=ApplicationConfig):
        self.uow = uow
        self.mailer = mailer
        self.config = config

    def _build_message(self, reset_url: str) -> str:
        return (
            "You are receiving this email because you (or someone else) has "
            "requested the reset of a password.\n"
            "Please click on the following link to reset your password:\n\n"
            f"{reset_url}\n\n"
            f"The link expires in {self.config.RESET_TOKEN_EXPIRE_MINUTES} minutes."
        )

    async def execute(self, email: str) -> Result[MessageResponse]:
        """
        Execute forgot password use case.

        Args:
            email: User's email address

        Returns:
            Result with MessageResponse, or Error

        Errors:
            - USER_NOT_FOUND: No account for this email
            - EMAIL_SEND_FAILED: Mail transport rejected the message
        """
        conceal = self.config.FORGOT_PASSWORD_CONCEAL_UNKNOWN_EMAIL

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                if conceal:
                    return Return.ok(MessageResponse(message=CONCEALED_MESSAGE))
                return Return.err(Error("USER_NOT_FOUND", "No user with that email"))

            plaintext, token_hash = generate_reset_secret()
            user.set_password_reset(
                token_hash,
                datetime.utcnow()
                + timedelta(minutes=self.config.RESET_TOKEN_EXPIRE_MINUTES),
            )
            await self.uow.users.update(user)
            await self.uow.commit()

            logger.info(f"Password reset requested for user {user.id}")

            reset_url = f"{self.config.CLIENT_URL.rstrip('/')}/reset-password/{plaintext}"

            if not self.mailer.is_configured:
                logger.info(f"Reset URL: {reset_url}")
                message = "Email sent (check server logs for reset URL)"
                return Return.ok(
                    MessageResponse(message=CONCEALED_MESSAGE if conceal else message)
                )

            try:
                await self.mailer.send(
                    to=user.email,
                    subject="Password reset token",
                    text=self._build_message(reset_url),
                )
            except MailDeliveryError as exc:
                logger.error(f"Reset email for user {user.id} could not be sent: {exc}")
                user.clear_password_reset()
                await self.uow.users.update(user)
                await self.uow.commit()
                return Return.err(Error("EMAIL_SEND_FAILED", "Email could not be sent"))

            return Return.ok(
                MessageResponse(message=CONCEALED_MESSAGE if conceal else "Email sent")
            )
