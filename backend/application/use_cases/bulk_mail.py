"""Envoi d'un email a une liste de destinataires, un message par destinataire."""

import logging

from backend.domain.exceptions import MailDeliveryError
from backend.domain.ports.mailer_port import MailerPort

logger = logging.getLogger(__name__)


async def send_to_each(
    mailer: MailerPort,
    recipients: list[str],
    subject: str,
    html: str,
    sender_name: str,
) -> int:
    """
    Les destinataires ne voient pas les adresses des autres.

    Returns:
        Nombre d'emails remis

    Raises:
        MailDeliveryError: Si aucun email n'a pu etre remis
    """
    delivered = 0
    for recipient in recipients:
        try:
            await mailer.send([recipient], subject, html, sender_name)
            delivered += 1
        except MailDeliveryError:
            logger.warning(f"Delivery failed for one recipient of '{subject}'")

    if recipients and delivered == 0:
        raise MailDeliveryError("Could not send the email to any recipient.")
    logger.info(f"'{subject}' delivered to {delivered}/{len(recipients)} recipients")
    return delivered
