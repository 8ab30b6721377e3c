"""Port abstrait pour le repository des chatbots."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from backend.domain.models.chatbot import Chatbot


class ChatbotRepositoryPort(ABC):
    """
    Interface pour l'acces aux chatbots en base.

    Implementations possibles:
    - PostgresChatbotRepository (psycopg3 async, pool partage)
    - InMemoryChatbotRepository (pour tests)
    """

    @abstractmethod
    async def create(self, chatbot: Chatbot) -> None:
        ...

    @abstractmethod
    async def get_by_api_key(self, api_key: str) -> Optional[Chatbot]:
        """Recupere un chatbot par correspondance exacte de son API key."""
        ...

    @abstractmethod
    async def get_by_id(self, chatbot_id: str, tenant_id: Optional[str] = None) -> Optional[Chatbot]:
        """Recupere un chatbot; si tenant_id est fourni, il doit en etre le proprietaire."""
        ...

    @abstractmethod
    async def list_by_tenant(self, tenant_id: str) -> list[Chatbot]:
        """Liste les chatbots d'un tenant par date de creation croissante."""
        ...

    @abstractmethod
    async def count_by_tenant(self, tenant_id: str) -> int:
        ...

    @abstractmethod
    async def update(self, chatbot_id: str, tenant_id: str, changes: dict[str, Any]) -> Optional[Chatbot]:
        """
        Applique une mise a jour partielle (une seule ligne).

        Returns:
            Le chatbot mis a jour, ou None s'il n'appartient pas au tenant
        """
        ...

    @abstractmethod
    async def set_api_key(self, chatbot_id: str, api_key: str) -> bool:
        ...

    @abstractmethod
    async def delete(self, chatbot_id: str, tenant_id: Optional[str] = None) -> bool:
        ...
