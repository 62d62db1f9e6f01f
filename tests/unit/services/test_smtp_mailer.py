import smtplib
from unittest.mock import MagicMock, patch

import pytest

from src.adapter.services.smtp_mailer import SmtpMailer
from src.app.services.mailer import MailDeliveryError


def make_mailer(**overrides) -> SmtpMailer:
    settings = dict(
        host="smtp.example.com",
        port=587,
        username="mailer",
        password="hunter2",
        use_tls=True,
        from_name="Auth Service",
        from_email="noreply@example.com",
    )
    settings.update(overrides)
    return SmtpMailer(**settings)


def test_unconfigured_without_host():
    assert make_mailer(host="").is_configured is False
    assert make_mailer().is_configured is True


@pytest.mark.asyncio
async def test_send_uses_tls_and_login():
    server = MagicMock()
    with patch("src.adapter.services.smtp_mailer.smtplib.SMTP") as smtp:
        smtp.return_value.__enter__.return_value = server
        await make_mailer().send("ann@example.com", "Password reset token", "link")

    smtp.assert_called_once_with("smtp.example.com", 587, timeout=30)
    server.starttls.assert_called_once()
    server.login.assert_called_once_with("mailer", "hunter2")
    message = server.send_message.call_args.args[0]
    assert message["To"] == "ann@example.com"
    assert message["From"] == "Auth Service <noreply@example.com>"
    assert message["Subject"] == "Password reset token"


@pytest.mark.asyncio
async def test_send_failure_raises_delivery_error():
    with patch("src.adapter.services.smtp_mailer.smtplib.SMTP") as smtp:
        smtp.side_effect = smtplib.SMTPConnectError(421, "unavailable")
        with pytest.raises(MailDeliveryError):
            await make_mailer().send("ann@example.com", "Password reset token", "link")


@pytest.mark.asyncio
async def test_send_without_host_raises():
    with pytest.raises(MailDeliveryError):
        await make_mailer(host="").send("ann@example.com", "subject", "text")
