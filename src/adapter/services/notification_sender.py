import logging

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType
from fastapi_mail.errors import ConnectionErrors

from src.app.services.notification_sender import DeliveryFailed, INotificationSender
from src.domain.entities import User

logger = logging.getLogger(__name__)


class LoggingNotificationSender(INotificationSender):
    """Development sender: writes the links to the log instead of mailing them"""

    async def send_verification_link(self, user: User, url: str) -> None:
        logger.info(f"Verification link for user {user.id}: {url}")

    async def send_reset_link(self, email: str, token: str, url: str) -> None:
        logger.info(f"Password reset link issued for {email}: {url}")


class SmtpNotificationSender(INotificationSender):
    """SMTP delivery through fastapi-mail"""

    def __init__(self, config):
        self.conf = ConnectionConfig(
            MAIL_USERNAME=config.MAIL_USERNAME,
            MAIL_PASSWORD=config.MAIL_PASSWORD,
            MAIL_FROM=config.MAIL_FROM,
            MAIL_FROM_NAME=config.MAIL_FROM_NAME,
            MAIL_PORT=config.MAIL_PORT,
            MAIL_SERVER=config.MAIL_SERVER,
            MAIL_STARTTLS=config.MAIL_STARTTLS,
            MAIL_SSL_TLS=config.MAIL_SSL_TLS,
            USE_CREDENTIALS=bool(config.MAIL_USERNAME),
        )

    async def send_verification_link(self, user: User, url: str) -> None:
        body = (
            f"Hello {user.name},\n\n"
            "Please click the link below to verify your email address.\n\n"
            f"{url}\n\n"
            "If you did not create an account, no further action is required."
        )
        await self._send(user.email, "Verify Email Address", body)

    async def send_reset_link(self, email: str, token: str, url: str) -> None:
        body = (
            "You are receiving this email because we received a password reset "
            "request for your account.\n\n"
            f"{url}\n\n"
            "If you did not request a password reset, no further action is required."
        )
        await self._send(email, "Reset Password Notification", body)

    async def _send(self, recipient: str, subject: str, body: str) -> None:
        message = MessageSchema(
            subject=subject,
            recipients=[recipient],
            body=body,
            subtype=MessageType.plain,
        )
        try:
            await FastMail(self.conf).send_message(message)
        except ConnectionErrors as exc:
            logger.error(f"Mail delivery failed: {subject}")
            raise DeliveryFailed(str(exc)) from exc
        logger.info(f"Mail sent: {subject}")
