"""Use case: administration des comptes tenants."""

import logging
from typing import Optional

from backend.domain.exceptions import ChatbotNotFoundError, TenantNotFoundError
from backend.domain.models.chatbot import Chatbot, generate_api_key
from backend.domain.models.plan import Plan, PlanTier
from backend.domain.models.tenant import Tenant
from backend.domain.ports.chatbot_repository_port import ChatbotRepositoryPort
from backend.domain.ports.tenant_repository_port import TenantRepositoryPort

logger = logging.getLogger(__name__)


class UserAdministrationUseCase:
    def __init__(self, tenant_repo: TenantRepositoryPort, chatbot_repo: ChatbotRepositoryPort):
        self._tenant_repo = tenant_repo
        self._chatbot_repo = chatbot_repo

    async def list_users(self, query: Optional[str] = None) -> list[Tenant]:
        """Tous les tenants, les plus recents d'abord; recherche partielle sur l'email."""
        return await self._tenant_repo.search(query.strip() if query else None)

    async def details(self, tenant_id: str) -> tuple[Tenant, list[Chatbot]]:
        tenant = await self._tenant_repo.get_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundError(tenant_id)
        return tenant, await self._chatbot_repo.list_by_tenant(tenant_id)

    async def set_banned(self, tenant_id: str, is_banned: bool) -> None:
        if not await self._tenant_repo.set_banned(tenant_id, is_banned):
            raise TenantNotFoundError(tenant_id)
        logger.info(f"Tenant {tenant_id} {'banned' if is_banned else 'unbanned'}")

    async def change_plan(
        self,
        tenant_id: str,
        tier: PlanTier,
        message_limit: Optional[int] = None,
        chatbot_limit: Optional[int] = None,
    ) -> Plan:
        plan = Plan.for_tier(tier, message_limit, chatbot_limit)
        if not await self._tenant_repo.update_plan(tenant_id, plan):
            raise TenantNotFoundError(tenant_id)
        logger.info(
            f"Tenant {tenant_id} moved to {plan.name} "
            f"({plan.message_limit} messages, {plan.chatbot_limit} chatbots)"
        )
        return plan

    async def delete_user(self, tenant_id: str) -> None:
        if not await self._tenant_repo.delete(tenant_id):
            raise TenantNotFoundError(tenant_id)
        logger.info(f"Tenant {tenant_id} deleted with its chatbots")

    async def regenerate_api_key(self, chatbot_id: str) -> str:
        """L'ancienne cle cesse immediatement de fonctionner."""
        new_key = generate_api_key()
        if not await self._chatbot_repo.set_api_key(chatbot_id, new_key):
            raise ChatbotNotFoundError(chatbot_id)
        return new_key

    async def delete_chatbot(self, chatbot_id: str) -> None:
        if not await self._chatbot_repo.delete(chatbot_id):
            raise ChatbotNotFoundError(chatbot_id)
