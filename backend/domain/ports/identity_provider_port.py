"""Port abstrait pour la verification d'identite OAuth (Google)."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class IdentityProfile:
    email: str
    name: Optional[str] = None
    avatar: Optional[str] = None


class IdentityProviderPort(ABC):
    @abstractmethod
    async def verify(self, credential: str) -> IdentityProfile:
        """
        Verifie un ID token et retourne le profil associe.

        Raises:
            InvalidGoogleTokenError: Si le token est invalide
        """
        ...
