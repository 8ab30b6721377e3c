"""Use case: configuration publique d'un chatbot (lue par le widget)."""

from backend.domain.exceptions import AccessDisabledError, InvalidCredentialError
from backend.domain.models.chat import ChatConfigResponse
from backend.domain.models.chatbot import DEFAULT_COLOR, DEFAULT_WELCOME_MESSAGE
from backend.domain.models.plan import PlanTier
from backend.domain.ports.chatbot_repository_port import ChatbotRepositoryPort
from backend.domain.ports.tenant_repository_port import TenantRepositoryPort

DEFAULT_WIDGET_TITLE = "Chat with us"


class GetChatConfigUseCase:
    """Lecture seule: ne touche ni au quota ni a l'etat du chatbot."""

    def __init__(self, chatbot_repo: ChatbotRepositoryPort, tenant_repo: TenantRepositoryPort):
        self._chatbot_repo = chatbot_repo
        self._tenant_repo = tenant_repo

    async def execute(self, api_key: str) -> ChatConfigResponse:
        chatbot = await self._chatbot_repo.get_by_api_key(api_key)
        if chatbot is None:
            raise InvalidCredentialError()

        tenant = await self._tenant_repo.get_by_id(chatbot.tenant_id)
        if tenant is not None and tenant.is_banned:
            raise AccessDisabledError(tenant.tenant_id, "This chatbot has been disabled.")

        return ChatConfigResponse(
            name=chatbot.name or DEFAULT_WIDGET_TITLE,
            welcome=chatbot.welcome_message or DEFAULT_WELCOME_MESSAGE,
            color=chatbot.color or DEFAULT_COLOR,
            plan=tenant.plan.name if tenant else PlanTier.FREE.value,
        )
