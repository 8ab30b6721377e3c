"""Routes du dashboard: chatbots du tenant connecte et consommation."""

from fastapi import APIRouter, Depends, HTTPException, status
from dependency_injector.wiring import inject, Provide

from backend.application.use_cases.manage_chatbots import ChatbotManagementUseCase
from backend.domain.exceptions import ChatbotLimitReachedError, ChatbotNotFoundError
from backend.domain.models.chatbot import (
    ChatbotCreate,
    ChatbotResponse,
    ChatbotUpdate,
    EmbedResponse,
)
from backend.domain.models.tenant import UsageResponse
from backend.infrastructure.container import Container
from backend.routes.dependencies import CurrentTenant

router = APIRouter()


def _not_found(e: ChatbotNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/chatbots", response_model=list[ChatbotResponse])
@inject
async def list_chatbots(
    tenant: CurrentTenant,
    use_case: ChatbotManagementUseCase = Depends(Provide[Container.chatbot_management]),
) -> list[ChatbotResponse]:
    chatbots = await use_case.list_chatbots(tenant.tenant_id)
    return [ChatbotResponse.from_chatbot(c) for c in chatbots]


@router.post("/chatbots", response_model=ChatbotResponse, status_code=status.HTTP_201_CREATED)
@inject
async def create_chatbot(
    payload: ChatbotCreate,
    tenant: CurrentTenant,
    use_case: ChatbotManagementUseCase = Depends(Provide[Container.chatbot_management]),
) -> ChatbotResponse:
    """Cree un chatbot; refuse (403) si le plafond du plan est atteint."""
    try:
        chatbot = await use_case.create(tenant.tenant_id, payload.name)
    except ChatbotLimitReachedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return ChatbotResponse.from_chatbot(chatbot)


@router.patch("/chatbots/{chatbot_id}", response_model=ChatbotResponse)
@inject
async def update_chatbot(
    chatbot_id: str,
    payload: ChatbotUpdate,
    tenant: CurrentTenant,
    use_case: ChatbotManagementUseCase = Depends(Provide[Container.chatbot_management]),
) -> ChatbotResponse:
    """Mise a jour partielle (instructions, qa, name, welcomeMessage, color, authorizedDomains)."""
    try:
        chatbot = await use_case.update(tenant.tenant_id, chatbot_id, payload.to_changes())
    except ChatbotNotFoundError as e:
        raise _not_found(e)
    return ChatbotResponse.from_chatbot(chatbot)


@router.delete("/chatbots/{chatbot_id}")
@inject
async def delete_chatbot(
    chatbot_id: str,
    tenant: CurrentTenant,
    use_case: ChatbotManagementUseCase = Depends(Provide[Container.chatbot_management]),
) -> dict:
    try:
        await use_case.delete(tenant.tenant_id, chatbot_id)
    except ChatbotNotFoundError as e:
        raise _not_found(e)
    return {"success": True}


@router.get("/chatbots/{chatbot_id}/embed", response_model=EmbedResponse)
@inject
async def embed_code(
    chatbot_id: str,
    tenant: CurrentTenant,
    use_case: ChatbotManagementUseCase = Depends(Provide[Container.chatbot_management]),
) -> EmbedResponse:
    """Code d'integration HTML, React et Next.js du chatbot."""
    try:
        scripts = await use_case.embed_scripts(tenant.tenant_id, chatbot_id)
    except ChatbotNotFoundError as e:
        raise _not_found(e)
    return EmbedResponse(html=scripts.html, react=scripts.react, nextjs=scripts.nextjs)


@router.get("/usage", response_model=UsageResponse)
@inject
async def usage(
    tenant: CurrentTenant,
    use_case: ChatbotManagementUseCase = Depends(Provide[Container.chatbot_management]),
) -> UsageResponse:
    return await use_case.usage(tenant.tenant_id)
