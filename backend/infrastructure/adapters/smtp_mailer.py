"""Adapter SMTP (aiosmtplib) pour l'envoi d'emails."""

import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

import aiosmtplib

from backend.domain.exceptions import MailDeliveryError
from backend.domain.ports.mailer_port import MailerPort

logger = logging.getLogger(__name__)


class SmtpMailer(MailerPort):
    """
    Implementation du MailerPort sur un serveur SMTP.

    use_tls=True: connexion TLS implicite (port 465).
    use_tls=False: STARTTLS apres connexion (port 587).
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        from_address: str,
        use_tls: bool = True,
    ):
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._from_address = from_address
        self._use_tls = use_tls

    async def send(
        self, to: list[str], subject: str, html: str, sender_name: str = "ChatForge AI"
    ) -> None:
        if not self._host:
            raise MailDeliveryError("SMTP is not configured.")
        if not to:
            raise MailDeliveryError("No recipients.")

        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = formataddr((sender_name, self._from_address))
        message["To"] = ", ".join(to)
        message.attach(MIMEText(html, "html"))

        try:
            await aiosmtplib.send(
                message,
                hostname=self._host,
                port=self._port,
                username=self._username or None,
                password=self._password or None,
                use_tls=self._use_tls,
                start_tls=not self._use_tls,
            )
        except aiosmtplib.SMTPException as e:
            logger.error(f"Failed to send email '{subject}' to {len(to)} recipient(s): {e}")
            raise MailDeliveryError() from e

        logger.info(f"Email '{subject}' sent to {len(to)} recipient(s)")
