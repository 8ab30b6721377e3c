"""Routes de l'espace administrateur (session par cookie)."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Cookie, Depends, HTTPException, Query, Response, status
from dependency_injector.wiring import inject, Provide

from backend.application.use_cases.administer_users import UserAdministrationUseCase
from backend.application.use_cases.dashboard_stats import DashboardStatsUseCase
from backend.application.use_cases.direct_mail import DirectMailUseCase
from backend.application.use_cases.newsletter import NewsletterUseCase
from backend.application.use_cases.submissions import SubmissionsUseCase
from backend.domain.exceptions import (
    ChatbotNotFoundError,
    MailDeliveryError,
    NoRecipientsError,
    SubmissionNotFoundError,
    TenantNotFoundError,
)
from backend.domain.models.admin import (
    AdminAccessRequest,
    AdminStatusResponse,
    ApiKeyResponse,
    BanRequest,
    BulkEmailRequest,
    BulkSendResponse,
    DashboardStatsResponse,
    DirectEmailRequest,
    GeneratedEmailResponse,
    GenerateEmailRequest,
    PlanChangeRequest,
    SubmissionStatusRequest,
    UserDetailsResponse,
)
from backend.domain.models.chatbot import ChatbotResponse
from backend.domain.models.submission import (
    SubmissionResponse,
    SubmissionStatus,
    SubscriberResponse,
)
from backend.domain.models.tenant import TenantResponse
from backend.infrastructure.container import Container
from backend.infrastructure.security import (
    ADMIN_COOKIE_NAME,
    create_admin_session_token,
    is_admin_session_valid,
    verify_admin_key,
)
from backend.routes.dependencies import AdminSession
from chatforge.agents import GenerationError
from chatforge.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()
protected = APIRouter(dependencies=[AdminSession])


def _http_error(status_code: int, e: Exception) -> HTTPException:
    return HTTPException(status_code=status_code, detail=str(e))


# =============================================================================
# SESSION
# =============================================================================


@router.post("/access")
async def admin_access(payload: AdminAccessRequest, response: Response) -> dict:
    """Echange la cle d'acces contre un cookie de session (1 heure)."""
    if not verify_admin_key(payload.key):
        logger.warning("Rejected admin access attempt")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid access key.")

    response.set_cookie(
        key=ADMIN_COOKIE_NAME,
        value=create_admin_session_token(),
        max_age=settings.ADMIN_SESSION_MINUTES * 60,
        httponly=True,
        secure=settings.ADMIN_COOKIE_SECURE,
        samesite="strict",
        path="/",
    )
    return {"success": True}


@router.get("/status", response_model=AdminStatusResponse)
async def admin_status(
    admin_session: Annotated[Optional[str], Cookie(alias=ADMIN_COOKIE_NAME)] = None,
) -> AdminStatusResponse:
    return AdminStatusResponse(is_authenticated=is_admin_session_valid(admin_session))


# =============================================================================
# UTILISATEURS
# =============================================================================


@protected.get("/users", response_model=list[TenantResponse])
@inject
async def list_users(
    q: Optional[str] = Query(default=None, description="Recherche partielle sur l'email"),
    use_case: UserAdministrationUseCase = Depends(Provide[Container.user_administration]),
) -> list[TenantResponse]:
    tenants = await use_case.list_users(q)
    return [TenantResponse.from_tenant(t) for t in tenants]


@protected.get("/users/{tenant_id}", response_model=UserDetailsResponse)
@inject
async def user_details(
    tenant_id: str,
    use_case: UserAdministrationUseCase = Depends(Provide[Container.user_administration]),
) -> UserDetailsResponse:
    try:
        tenant, chatbots = await use_case.details(tenant_id)
    except TenantNotFoundError as e:
        raise _http_error(status.HTTP_404_NOT_FOUND, e)
    details = UserDetailsResponse(**TenantResponse.from_tenant(tenant).model_dump())
    details.chatbots = [ChatbotResponse.from_chatbot(c) for c in chatbots]
    return details


@protected.post("/users/{tenant_id}/ban")
@inject
async def set_user_banned(
    tenant_id: str,
    payload: BanRequest,
    use_case: UserAdministrationUseCase = Depends(Provide[Container.user_administration]),
) -> dict:
    try:
        await use_case.set_banned(tenant_id, payload.is_banned)
    except TenantNotFoundError as e:
        raise _http_error(status.HTTP_404_NOT_FOUND, e)
    return {"success": True}


@protected.put("/users/{tenant_id}/plan")
@inject
async def change_user_plan(
    tenant_id: str,
    payload: PlanChangeRequest,
    use_case: UserAdministrationUseCase = Depends(Provide[Container.user_administration]),
) -> dict:
    """Free et Pro appliquent leurs limites par defaut; Enterprise accepte des limites sur mesure."""
    try:
        plan = await use_case.change_plan(
            tenant_id, payload.plan, payload.message_limit, payload.chatbot_limit
        )
    except TenantNotFoundError as e:
        raise _http_error(status.HTTP_404_NOT_FOUND, e)
    return {
        "success": True,
        "plan": plan.name,
        "messageLimit": plan.message_limit,
        "chatbotLimit": plan.chatbot_limit,
    }


@protected.delete("/users/{tenant_id}")
@inject
async def delete_user(
    tenant_id: str,
    use_case: UserAdministrationUseCase = Depends(Provide[Container.user_administration]),
) -> dict:
    try:
        await use_case.delete_user(tenant_id)
    except TenantNotFoundError as e:
        raise _http_error(status.HTTP_404_NOT_FOUND, e)
    return {"success": True}


@protected.post("/chatbots/{chatbot_id}/regenerate-key", response_model=ApiKeyResponse)
@inject
async def regenerate_api_key(
    chatbot_id: str,
    use_case: UserAdministrationUseCase = Depends(Provide[Container.user_administration]),
) -> ApiKeyResponse:
    try:
        new_key = await use_case.regenerate_api_key(chatbot_id)
    except ChatbotNotFoundError as e:
        raise _http_error(status.HTTP_404_NOT_FOUND, e)
    return ApiKeyResponse(new_api_key=new_key)


@protected.delete("/chatbots/{chatbot_id}")
@inject
async def delete_user_chatbot(
    chatbot_id: str,
    use_case: UserAdministrationUseCase = Depends(Provide[Container.user_administration]),
) -> dict:
    try:
        await use_case.delete_chatbot(chatbot_id)
    except ChatbotNotFoundError as e:
        raise _http_error(status.HTTP_404_NOT_FOUND, e)
    return {"success": True}


# =============================================================================
# DEMANDES COMMERCIALES
# =============================================================================


@protected.get("/submissions", response_model=list[SubmissionResponse])
@inject
async def list_submissions(
    use_case: SubmissionsUseCase = Depends(Provide[Container.submissions]),
) -> list[SubmissionResponse]:
    submissions = await use_case.list_submissions()
    return [SubmissionResponse.from_submission(s) for s in submissions]


@protected.post("/submissions/{submission_id}/status", response_model=SubmissionResponse)
@inject
async def resolve_submission(
    submission_id: str,
    payload: SubmissionStatusRequest,
    use_case: SubmissionsUseCase = Depends(Provide[Container.submissions]),
) -> SubmissionResponse:
    """Accepte ou refuse une demande en attente; le demandeur est prevenu par email."""
    try:
        submission = await use_case.resolve(submission_id, SubmissionStatus(payload.status))
    except SubmissionNotFoundError as e:
        raise _http_error(status.HTTP_404_NOT_FOUND, e)
    return SubmissionResponse.from_submission(submission)


@protected.delete("/submissions/{submission_id}")
@inject
async def delete_submission(
    submission_id: str,
    use_case: SubmissionsUseCase = Depends(Provide[Container.submissions]),
) -> dict:
    try:
        await use_case.delete(submission_id)
    except SubmissionNotFoundError as e:
        raise _http_error(status.HTTP_404_NOT_FOUND, e)
    return {"success": True}


# =============================================================================
# NEWSLETTER
# =============================================================================


@protected.get("/newsletter/subscribers", response_model=list[SubscriberResponse])
@inject
async def list_subscribers(
    use_case: NewsletterUseCase = Depends(Provide[Container.newsletter]),
) -> list[SubscriberResponse]:
    subscribers = await use_case.list_subscribers()
    return [SubscriberResponse.from_subscriber(s) for s in subscribers]


@protected.post("/newsletter/generate", response_model=GeneratedEmailResponse)
@inject
async def generate_newsletter(
    payload: GenerateEmailRequest,
    use_case: NewsletterUseCase = Depends(Provide[Container.newsletter]),
) -> GeneratedEmailResponse:
    try:
        html = await use_case.generate(payload.prompt)
    except GenerationError as e:
        raise _http_error(status.HTTP_502_BAD_GATEWAY, e)
    return GeneratedEmailResponse(html=html)


@protected.post("/newsletter/send", response_model=BulkSendResponse)
@inject
async def send_newsletter(
    payload: BulkEmailRequest,
    use_case: NewsletterUseCase = Depends(Provide[Container.newsletter]),
) -> BulkSendResponse:
    try:
        count = await use_case.send(payload.subject, payload.content)
    except NoRecipientsError as e:
        raise _http_error(status.HTTP_400_BAD_REQUEST, e)
    except MailDeliveryError as e:
        raise _http_error(status.HTTP_502_BAD_GATEWAY, e)
    return BulkSendResponse(recipient_count=count)


# =============================================================================
# EMAILS DIRECTS
# =============================================================================


@protected.post("/mail/generate", response_model=GeneratedEmailResponse)
@inject
async def generate_direct_email(
    payload: GenerateEmailRequest,
    use_case: DirectMailUseCase = Depends(Provide[Container.direct_mail]),
) -> GeneratedEmailResponse:
    try:
        html = await use_case.generate(payload.prompt, payload.user_name or "there")
    except GenerationError as e:
        raise _http_error(status.HTTP_502_BAD_GATEWAY, e)
    return GeneratedEmailResponse(html=html)


@protected.post("/mail/send")
@inject
async def send_direct_email(
    payload: DirectEmailRequest,
    use_case: DirectMailUseCase = Depends(Provide[Container.direct_mail]),
) -> dict:
    try:
        await use_case.send_one(payload.to, payload.subject, payload.message)
    except MailDeliveryError as e:
        raise _http_error(status.HTTP_502_BAD_GATEWAY, e)
    return {"success": True}


@protected.post("/mail/send-all", response_model=BulkSendResponse)
@inject
async def send_email_to_all_users(
    payload: BulkEmailRequest,
    use_case: DirectMailUseCase = Depends(Provide[Container.direct_mail]),
) -> BulkSendResponse:
    try:
        count = await use_case.send_to_all(payload.subject, payload.content)
    except NoRecipientsError as e:
        raise _http_error(status.HTTP_400_BAD_REQUEST, e)
    except MailDeliveryError as e:
        raise _http_error(status.HTTP_502_BAD_GATEWAY, e)
    return BulkSendResponse(recipient_count=count)


# =============================================================================
# TABLEAU DE BORD
# =============================================================================


@protected.get("/dashboard", response_model=DashboardStatsResponse)
@inject
async def dashboard(
    use_case: DashboardStatsUseCase = Depends(Provide[Container.dashboard_stats]),
) -> DashboardStatsResponse:
    return await use_case.execute()


router.include_router(protected)
