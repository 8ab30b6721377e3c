"""Use case: inscription par email et mot de passe."""

import logging

from backend.application.use_cases.otp import OtpIssuer
from backend.domain.exceptions import EmailAlreadyRegisteredError
from backend.domain.models.chatbot import Chatbot
from backend.domain.models.tenant import Tenant
from backend.domain.ports.chatbot_repository_port import ChatbotRepositoryPort
from backend.domain.ports.tenant_repository_port import TenantRepositoryPort
from backend.infrastructure.security import get_password_hash

logger = logging.getLogger(__name__)


class SignupUseCase:
    """
    Cree le tenant (plan Free, non verifie), son premier chatbot,
    puis envoie un OTP. Un echec d'envoi n'annule pas l'inscription.
    """

    def __init__(
        self,
        tenant_repo: TenantRepositoryPort,
        chatbot_repo: ChatbotRepositoryPort,
        otp_issuer: OtpIssuer,
    ):
        self._tenant_repo = tenant_repo
        self._chatbot_repo = chatbot_repo
        self._otp_issuer = otp_issuer

    async def execute(self, email: str, password: str) -> Tenant:
        email = email.strip().lower()
        if await self._tenant_repo.get_by_email(email):
            raise EmailAlreadyRegisteredError(email)

        tenant = Tenant.create_with_password(email, get_password_hash(password))
        await self._tenant_repo.create(tenant)
        await self._chatbot_repo.create(Chatbot.create_default(tenant.tenant_id))

        await self._otp_issuer.issue(tenant)

        logger.info(f"Tenant {tenant.tenant_id} signed up")
        return tenant
