"""Port abstrait pour l'envoi d'emails transactionnels."""

from abc import ABC, abstractmethod


class MailerPort(ABC):
    """
    Interface d'envoi d'emails.

    Implementations possibles:
    - SmtpMailer (aiosmtplib)
    - RecordingMailer (pour tests)
    """

    @abstractmethod
    async def send(self, to: list[str], subject: str, html: str, sender_name: str = "ChatForge AI") -> None:
        """
        Envoie un email HTML.

        Raises:
            MailDeliveryError: Si l'envoi echoue
        """
        ...
