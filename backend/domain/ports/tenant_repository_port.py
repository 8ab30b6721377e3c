"""Port abstrait pour le repository des tenants."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from backend.domain.models.plan import Plan
from backend.domain.models.tenant import Tenant


class TenantRepositoryPort(ABC):
    """
    Interface pour l'acces aux tenants en base.

    Chaque ecriture porte sur une seule ligne et repose sur l'atomicite
    de la base pour cette ligne.

    Implementations possibles:
    - PostgresTenantRepository (psycopg3 async, pool partage)
    - InMemoryTenantRepository (pour tests)
    """

    @abstractmethod
    async def create(self, tenant: Tenant) -> None:
        """Sauvegarde un nouveau tenant."""
        ...

    @abstractmethod
    async def get_by_id(self, tenant_id: str) -> Optional[Tenant]:
        """Recupere un tenant par son ID."""
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Tenant]:
        """Recupere un tenant par son email."""
        ...

    @abstractmethod
    async def search(self, email_query: Optional[str] = None) -> list[Tenant]:
        """Liste les tenants (recherche email insensible a la casse), plus recents d'abord."""
        ...

    @abstractmethod
    async def count_created_since(self, since: datetime) -> int:
        ...

    @abstractmethod
    async def count(self) -> int:
        ...

    @abstractmethod
    async def list_created_since(self, since: datetime) -> list[Tenant]:
        ...

    @abstractmethod
    async def increment_if_below_limit(self, tenant_id: str) -> Optional[int]:
        """
        Incremente atomiquement le compteur si messages_sent < message_limit.

        Returns:
            Le nouveau compteur, ou None si le plafond est atteint
        """
        ...

    @abstractmethod
    async def start_new_cycle(
        self, tenant_id: str, started_at: datetime, previous_start: datetime
    ) -> bool:
        """
        Ouvre un nouveau cycle: compteur a 1, debut de cycle = started_at.

        L'ecriture n'a lieu que si le debut de cycle vaut encore
        previous_start (un seul gagnant si deux requetes basculent en meme temps).

        Returns:
            True si le cycle a ete ouvert par cet appel
        """
        ...

    @abstractmethod
    async def set_otp(self, tenant_id: str, otp: Optional[str], expires: Optional[datetime]) -> None:
        ...

    @abstractmethod
    async def mark_verified(self, tenant_id: str) -> None:
        """Marque le compte verifie et efface l'OTP."""
        ...

    @abstractmethod
    async def set_banned(self, tenant_id: str, is_banned: bool) -> bool:
        ...

    @abstractmethod
    async def update_plan(self, tenant_id: str, plan: Plan) -> bool:
        ...

    @abstractmethod
    async def delete(self, tenant_id: str) -> bool:
        """Supprime le tenant (ses chatbots sont supprimes en cascade)."""
        ...
