# fakeso/core/mailer.py
"""
Outgoing email.
Wraps fastapi-mail; in development (SEND_EMAILS=false) messages are logged
instead of delivered.
"""
import logging

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType

from fakeso.config import settings

logger = logging.getLogger("uvicorn.error")


class MailError(Exception):
    """Raised when a message could not be handed to the SMTP server."""


class EmailService:
    """Wrap FastMail sending with development friendly behaviour."""

    def __init__(self):
        self._fast_mail = None

    def _client(self) -> FastMail:
        # Built on first real send so a dev setup without SMTP settings still imports
        if self._fast_mail is None:
            config = ConnectionConfig(
                MAIL_USERNAME=settings.smtp_username,
                MAIL_PASSWORD=settings.smtp_password,
                MAIL_FROM=settings.smtp_from,
                MAIL_SERVER=settings.smtp_host,
                MAIL_PORT=settings.smtp_port,
                MAIL_STARTTLS=settings.smtp_starttls,
                MAIL_SSL_TLS=settings.smtp_ssl_tls,
                USE_CREDENTIALS=bool(settings.smtp_username),
                VALIDATE_CERTS=True,
            )
            self._fast_mail = FastMail(config)
        return self._fast_mail

    async def send_email(self, to_email: str, subject: str, body_text: str) -> None:
        if not settings.send_emails:
            logger.info("[mail] SEND_EMAILS disabled -> To=%s Subject=%s\n%s", to_email, subject, body_text)
            return

        try:
            msg = MessageSchema(
                subject=subject,
                recipients=[to_email],
                body=body_text,
                subtype=MessageType.plain,
            )
            await self._client().send_message(msg)
        except Exception as exc:
            raise MailError(f"Could not send email to {to_email}") from exc
        logger.info("[mail] sent '%s' to %s", subject, to_email)


email_service = EmailService()


async def send_email(to_email: str, subject: str, body_text: str) -> None:
    """Send a plain text email through the shared EmailService."""
    await email_service.send_email(to_email, subject, body_text)
