"""Use case: admission d'une requete de chat (cle, domaine, compte, quota)."""

import logging
from datetime import datetime
from typing import Optional

from backend.domain.exceptions import (
    AccessDisabledError,
    InternalInconsistencyError,
    InvalidCredentialError,
    QuotaExceededError,
)
from backend.domain.models.admission import Admitted, AdmissionResult, PolicyRejected
from backend.domain.models.tenant import utcnow
from backend.domain.ports.chatbot_repository_port import ChatbotRepositoryPort
from backend.domain.ports.tenant_repository_port import TenantRepositoryPort
from backend.domain.services.origin_policy import is_origin_authorized

logger = logging.getLogger(__name__)


class ChatAdmissionUseCase:
    """
    Decide si une requete de chat entrante peut etre servie.

    Ordre des controles:
    1. API key -> chatbot (InvalidCredentialError)
    2. Origine autorisee (PolicyRejected, reponse normale pour le widget)
    3. Tenant proprietaire (InternalInconsistencyError)
    4. Tenant banni (AccessDisabledError)
    5. Cycle de facturation et quota (QuotaExceededError)

    Une requete admise a deja ete decomptee du quota du tenant.
    """

    def __init__(
        self,
        chatbot_repo: ChatbotRepositoryPort,
        tenant_repo: TenantRepositoryPort,
        platform_origin: str = "",
        cycle_length_days: int = 30,
    ):
        self._chatbot_repo = chatbot_repo
        self._tenant_repo = tenant_repo
        self._platform_origin = platform_origin
        self._cycle_length_days = cycle_length_days

    async def execute(
        self,
        api_key: str,
        origin: Optional[str],
        now: Optional[datetime] = None,
    ) -> AdmissionResult:
        # 1. Resolution de la cle
        chatbot = await self._chatbot_repo.get_by_api_key(api_key)
        if chatbot is None:
            raise InvalidCredentialError()

        # 2. Domaine d'integration
        if not is_origin_authorized(origin, chatbot.authorized_domains, self._platform_origin):
            logger.info(f"Chatbot {chatbot.chatbot_id}: origin {origin} not authorized")
            return PolicyRejected()

        # 3. Proprietaire
        tenant = await self._tenant_repo.get_by_id(chatbot.tenant_id)
        if tenant is None:
            logger.error(
                f"Chatbot {chatbot.chatbot_id} references missing tenant {chatbot.tenant_id}"
            )
            raise InternalInconsistencyError(chatbot.chatbot_id, chatbot.tenant_id)

        # 4. Compte banni
        if tenant.is_banned:
            raise AccessDisabledError(tenant.tenant_id)

        # 5. Cycle et quota
        now = now or utcnow()
        if tenant.cycle_expired(now, self._cycle_length_days):
            started = await self._tenant_repo.start_new_cycle(
                tenant.tenant_id, started_at=now, previous_start=tenant.plan_cycle_start
            )
            if started:
                logger.info(f"Tenant {tenant.tenant_id}: new billing cycle started")
                tenant.messages_sent = 1
                tenant.plan_cycle_start = now
                return Admitted(chatbot=chatbot, tenant=tenant)
            # Une autre requete a deja ouvert le nouveau cycle

        count = await self._tenant_repo.increment_if_below_limit(tenant.tenant_id)
        if count is None:
            logger.info(
                f"Tenant {tenant.tenant_id}: message limit reached ({tenant.plan.message_limit})"
            )
            raise QuotaExceededError(tenant.tenant_id, tenant.plan.message_limit)

        tenant.messages_sent = count
        return Admitted(chatbot=chatbot, tenant=tenant)
