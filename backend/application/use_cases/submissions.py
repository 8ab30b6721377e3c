"""Use case: demandes commerciales (plans Pro / Enterprise)."""

import logging
from typing import Optional

from backend.domain.exceptions import MailDeliveryError, SubmissionNotFoundError
from backend.domain.models.submission import Submission, SubmissionStatus
from backend.domain.ports.mailer_port import MailerPort
from backend.domain.ports.submission_repository_port import SubmissionRepositoryPort
from chatforge.config import settings
from chatforge.templates import render_submission_status_email

logger = logging.getLogger(__name__)


class SubmissionsUseCase:
    """
    Cycle de vie d'une demande: pending -> accepted | rejected.

    Seule une demande encore en attente peut etre traitee; le demandeur
    recoit un email a l'issue (un echec d'envoi est seulement journalise).
    """

    def __init__(self, submission_repo: SubmissionRepositoryPort, mailer: MailerPort):
        self._submission_repo = submission_repo
        self._mailer = mailer

    async def create(
        self,
        name: str,
        email: str,
        plan: str,
        message: str,
        company: Optional[str] = None,
    ) -> Submission:
        submission = Submission.create(
            name=name.strip(),
            email=email,
            plan=plan,
            message=message.strip(),
            company=company.strip() if company else None,
        )
        await self._submission_repo.create(submission)
        return submission

    async def list_submissions(self) -> list[Submission]:
        return await self._submission_repo.list_recent()

    async def resolve(self, submission_id: str, status: SubmissionStatus) -> Submission:
        if status is SubmissionStatus.PENDING:
            raise ValueError("A submission can only be accepted or rejected.")

        submission = await self._submission_repo.resolve_pending(submission_id, status)
        if submission is None:
            raise SubmissionNotFoundError(
                submission_id, "Submission not found or already processed."
            )

        email = render_submission_status_email(
            submission.name,
            submission.plan,
            accepted=status is SubmissionStatus.ACCEPTED,
            app_name=settings.APP_NAME,
        )
        try:
            await self._mailer.send(
                [submission.email], email.subject, email.html, settings.MAIL_FROM_NAME
            )
        except MailDeliveryError:
            logger.error(f"Could not send {status.value} email for submission {submission_id}")

        logger.info(f"Submission {submission_id} {status.value}")
        return submission

    async def delete(self, submission_id: str) -> None:
        if not await self._submission_repo.delete(submission_id):
            raise SubmissionNotFoundError(submission_id)
