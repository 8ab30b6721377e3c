"""Use case: abonnements et envoi de la newsletter."""

import logging

from backend.application.use_cases.bulk_mail import send_to_each
from backend.domain.exceptions import AlreadySubscribedError, NoRecipientsError
from backend.domain.models.submission import Subscriber
from backend.domain.ports.mailer_port import MailerPort
from backend.domain.ports.submission_repository_port import SubscriberRepositoryPort
from chatforge.agents import EmailWriter
from chatforge.config import settings

logger = logging.getLogger(__name__)


class NewsletterUseCase:
    def __init__(
        self,
        subscriber_repo: SubscriberRepositoryPort,
        email_writer: EmailWriter,
        mailer: MailerPort,
    ):
        self._subscriber_repo = subscriber_repo
        self._email_writer = email_writer
        self._mailer = mailer

    async def subscribe(self, email: str) -> Subscriber:
        subscriber = Subscriber.create(email.strip().lower())
        if not await self._subscriber_repo.create(subscriber):
            raise AlreadySubscribedError(subscriber.email)
        logger.info(f"New newsletter subscriber {subscriber.subscriber_id}")
        return subscriber

    async def list_subscribers(self) -> list[Subscriber]:
        return await self._subscriber_repo.list_all()

    async def generate(self, prompt: str) -> str:
        """HTML de newsletter genere par le modele (GenerationError si echec)."""
        return await self._email_writer.generate_newsletter(prompt)

    async def send(self, subject: str, html: str) -> int:
        subscribers = await self._subscriber_repo.list_all()
        if not subscribers:
            raise NoRecipientsError("There are no subscribers to send to.")
        return await send_to_each(
            self._mailer,
            [s.email for s in subscribers],
            subject,
            html,
            settings.MAIL_FROM_NAME,
        )
