"""Resultat de la decision d'admission d'une requete de chat."""

from dataclasses import dataclass
from typing import Union

from backend.domain.models.chatbot import Chatbot
from backend.domain.models.tenant import Tenant

DOMAIN_NOT_AUTHORIZED_MESSAGE = (
    "This chatbot is not authorized to be used on this domain. "
    "Please contact the site administrator."
)


@dataclass(frozen=True)
class Admitted:
    """Requete acceptee; le quota a deja ete decompte."""

    chatbot: Chatbot
    tenant: Tenant


@dataclass(frozen=True)
class PolicyRejected:
    """
    Rejet attendu par politique (domaine non autorise).

    Renvoye au widget comme une reponse normale du bot.
    """

    message: str = DOMAIN_NOT_AUTHORIZED_MESSAGE


AdmissionResult = Union[Admitted, PolicyRejected]
