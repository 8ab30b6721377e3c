"""Ports abstraits pour les demandes commerciales et les abonnes newsletter."""

from abc import ABC, abstractmethod
from typing import Optional

from backend.domain.models.submission import Submission, SubmissionStatus, Subscriber


class SubmissionRepositoryPort(ABC):
    @abstractmethod
    async def create(self, submission: Submission) -> None:
        ...

    @abstractmethod
    async def list_recent(self, limit: Optional[int] = None) -> list[Submission]:
        """Liste les demandes, plus recentes d'abord."""
        ...

    @abstractmethod
    async def count(self) -> int:
        ...

    @abstractmethod
    async def resolve_pending(
        self, submission_id: str, status: SubmissionStatus
    ) -> Optional[Submission]:
        """
        Passe une demande 'pending' au statut donne.

        Returns:
            La demande mise a jour, ou None si absente ou deja traitee
        """
        ...

    @abstractmethod
    async def delete(self, submission_id: str) -> bool:
        ...


class SubscriberRepositoryPort(ABC):
    @abstractmethod
    async def create(self, subscriber: Subscriber) -> bool:
        """Returns: False si l'email est deja abonne."""
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Subscriber]:
        ...

    @abstractmethod
    async def list_all(self) -> list[Subscriber]:
        ...
