"""Use case: emails de l'administrateur vers les tenants."""

import logging

from backend.application.use_cases.bulk_mail import send_to_each
from backend.domain.exceptions import NoRecipientsError
from backend.domain.ports.mailer_port import MailerPort
from backend.domain.ports.tenant_repository_port import TenantRepositoryPort
from chatforge.agents import EmailWriter
from chatforge.config import settings
from chatforge.templates import render_direct_message_email

logger = logging.getLogger(__name__)

ADMIN_SENDER_SUFFIX = " Admin"


class DirectMailUseCase:
    def __init__(
        self,
        tenant_repo: TenantRepositoryPort,
        email_writer: EmailWriter,
        mailer: MailerPort,
    ):
        self._tenant_repo = tenant_repo
        self._email_writer = email_writer
        self._mailer = mailer

    async def generate(self, prompt: str, user_name: str = "there") -> str:
        return await self._email_writer.generate_direct_email(prompt, user_name or "there")

    async def send_one(self, to: str, subject: str, message: str) -> None:
        """Message texte libre, mis en forme dans le gabarit 'message de l'administrateur'."""
        await self._mailer.send(
            [to],
            subject,
            render_direct_message_email(message, app_name=settings.APP_NAME),
            settings.MAIL_FROM_NAME + ADMIN_SENDER_SUFFIX,
        )
        logger.info(f"Direct email '{subject}' sent")

    async def send_to_all(self, subject: str, html: str) -> int:
        tenants = await self._tenant_repo.search()
        if not tenants:
            raise NoRecipientsError("There are no registered users to send to.")
        return await send_to_each(
            self._mailer,
            [t.email for t in tenants],
            subject,
            html,
            settings.MAIL_FROM_NAME,
        )
