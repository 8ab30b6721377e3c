"""Use case: gestion des chatbots d'un tenant (dashboard)."""

import logging
from typing import Any

from backend.domain.exceptions import (
    ChatbotLimitReachedError,
    ChatbotNotFoundError,
    TenantNotFoundError,
)
from backend.domain.models.chatbot import Chatbot
from backend.domain.models.tenant import UsageResponse
from backend.domain.ports.chatbot_repository_port import ChatbotRepositoryPort
from backend.domain.ports.tenant_repository_port import TenantRepositoryPort
from chatforge.config import settings
from chatforge.templates import EmbedScripts, generate_embed_scripts

logger = logging.getLogger(__name__)


class ChatbotManagementUseCase:
    """
    Operations du dashboard sur les chatbots d'un tenant.

    Toutes les lectures et ecritures sont filtrees par tenant_id: le
    chatbot d'un autre tenant est traite comme inexistant.
    """

    def __init__(
        self,
        chatbot_repo: ChatbotRepositoryPort,
        tenant_repo: TenantRepositoryPort,
        app_url: str = "",
        cycle_length_days: int = 30,
    ):
        self._chatbot_repo = chatbot_repo
        self._tenant_repo = tenant_repo
        self._app_url = app_url or settings.APP_URL
        self._cycle_length_days = cycle_length_days

    async def list_chatbots(self, tenant_id: str) -> list[Chatbot]:
        return await self._chatbot_repo.list_by_tenant(tenant_id)

    async def create(self, tenant_id: str, name: str) -> Chatbot:
        tenant = await self._tenant_repo.get_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundError(tenant_id)

        count = await self._chatbot_repo.count_by_tenant(tenant_id)
        if count >= tenant.plan.chatbot_limit:
            raise ChatbotLimitReachedError(tenant_id, tenant.plan.chatbot_limit)

        chatbot = Chatbot.create(tenant_id, name.strip())
        await self._chatbot_repo.create(chatbot)
        return chatbot

    async def get(self, tenant_id: str, chatbot_id: str) -> Chatbot:
        chatbot = await self._chatbot_repo.get_by_id(chatbot_id, tenant_id)
        if chatbot is None:
            raise ChatbotNotFoundError(chatbot_id)
        return chatbot

    async def update(self, tenant_id: str, chatbot_id: str, changes: dict[str, Any]) -> Chatbot:
        """Mise a jour partielle; sans changement, retourne l'etat courant."""
        if not changes:
            return await self.get(tenant_id, chatbot_id)

        chatbot = await self._chatbot_repo.update(chatbot_id, tenant_id, changes)
        if chatbot is None:
            raise ChatbotNotFoundError(chatbot_id)
        return chatbot

    async def delete(self, tenant_id: str, chatbot_id: str) -> None:
        if not await self._chatbot_repo.delete(chatbot_id, tenant_id):
            raise ChatbotNotFoundError(chatbot_id)

    async def embed_scripts(self, tenant_id: str, chatbot_id: str) -> EmbedScripts:
        chatbot = await self.get(tenant_id, chatbot_id)
        return generate_embed_scripts(chatbot.api_key, self._app_url)

    async def usage(self, tenant_id: str) -> UsageResponse:
        tenant = await self._tenant_repo.get_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundError(tenant_id)
        count = await self._chatbot_repo.count_by_tenant(tenant_id)
        return UsageResponse(
            plan=tenant.plan.name,
            messages_sent=tenant.messages_sent,
            message_limit=tenant.plan.message_limit,
            chatbot_count=count,
            chatbot_limit=tenant.plan.chatbot_limit,
            cycle_start=tenant.plan_cycle_start,
            cycle_end=tenant.cycle_end(self._cycle_length_days),
        )
