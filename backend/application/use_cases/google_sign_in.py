"""Use case: connexion / inscription via Google."""

import logging

from backend.domain.models.chatbot import Chatbot
from backend.domain.models.tenant import Tenant
from backend.domain.ports.chatbot_repository_port import ChatbotRepositoryPort
from backend.domain.ports.identity_provider_port import IdentityProviderPort
from backend.domain.ports.tenant_repository_port import TenantRepositoryPort
from backend.infrastructure.security import create_session_token

logger = logging.getLogger(__name__)


class GoogleSignInUseCase:
    """
    Verifie l'ID token Google, retrouve le tenant par email ou le cree
    (verifie d'office, avec son premier chatbot), puis ouvre une session.
    """

    def __init__(
        self,
        identity_provider: IdentityProviderPort,
        tenant_repo: TenantRepositoryPort,
        chatbot_repo: ChatbotRepositoryPort,
    ):
        self._identity_provider = identity_provider
        self._tenant_repo = tenant_repo
        self._chatbot_repo = chatbot_repo

    async def execute(self, credential: str) -> tuple[Tenant, str]:
        profile = await self._identity_provider.verify(credential)

        tenant = await self._tenant_repo.get_by_email(profile.email)
        if tenant is None:
            tenant = Tenant.create_from_google(profile.email, profile.name, profile.avatar)
            await self._tenant_repo.create(tenant)
            await self._chatbot_repo.create(Chatbot.create_default(tenant.tenant_id))
            logger.info(f"Tenant {tenant.tenant_id} signed up with Google")
        elif not tenant.is_verified:
            # Google atteste la possession de l'adresse
            await self._tenant_repo.mark_verified(tenant.tenant_id)
            tenant.is_verified = True

        return tenant, create_session_token(tenant)
