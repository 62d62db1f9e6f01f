"""
SMTP Mailer

Delivers password reset messages through an SMTP relay.
"""

import logging
import smtplib
from email.message import EmailMessage

from fastapi.concurrency import run_in_threadpool

from src.app.services.mailer import MailDeliveryError, Mailer

logger = logging.getLogger(__name__)


class SmtpMailer(Mailer):
    def __init__(
        self,
        host: str,
        port: int,
        username: str = "",
        password: str = "",
        use_tls: bool = True,
        from_name: str = "",
        from_email: str = "",
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.from_name = from_name
        self.from_email = from_email

    @classmethod
    def from_config(cls, config) -> "SmtpMailer":
        return cls(
            host=config.EMAIL_HOST,
            port=config.EMAIL_PORT,
            username=config.EMAIL_USER,
            password=config.EMAIL_PASSWORD,
            use_tls=config.EMAIL_USE_TLS,
            from_name=config.FROM_NAME,
            from_email=config.FROM_EMAIL,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.host)

    def _build_message(self, to: str, subject: str, text: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = f"{self.from_name} <{self.from_email}>"
        message["To"] = to
        message["Subject"] = subject
        message.set_content(text)
        return message

    def _send_sync(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=30) as server:
            if self.use_tls:
                server.starttls()
            if self.username:
                server.login(self.username, self.password)
            server.send_message(message)

    async def send(self, to: str, subject: str, text: str) -> None:
        if not self.is_configured:
            raise MailDeliveryError("Mail transport is not configured")

        message = self._build_message(to, subject, text)
        try:
            await run_in_threadpool(self._send_sync, message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error(f"SMTP delivery to {to} failed: {exc}")
            raise MailDeliveryError(str(exc)) from exc

        logger.info(f"Sent '{subject}' to {to}")
