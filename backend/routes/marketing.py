"""Routes publiques du site: demandes de plan et newsletter."""

from fastapi import APIRouter, Depends, HTTPException, status
from dependency_injector.wiring import inject, Provide

from backend.application.use_cases.newsletter import NewsletterUseCase
from backend.application.use_cases.submissions import SubmissionsUseCase
from backend.domain.exceptions import AlreadySubscribedError
from backend.domain.models.submission import SubmissionCreate, SubscribeRequest
from backend.infrastructure.container import Container

router = APIRouter()


@router.post("/submissions", status_code=status.HTTP_201_CREATED)
@inject
async def create_submission(
    payload: SubmissionCreate,
    use_case: SubmissionsUseCase = Depends(Provide[Container.submissions]),
) -> dict:
    """Demande de plan Pro ou Enterprise depuis la page contact."""
    await use_case.create(
        name=payload.name,
        email=payload.email,
        plan=payload.plan,
        message=payload.message,
        company=payload.company,
    )
    return {"success": True}


@router.post("/newsletter/subscribe", status_code=status.HTTP_201_CREATED)
@inject
async def subscribe(
    payload: SubscribeRequest,
    use_case: NewsletterUseCase = Depends(Provide[Container.newsletter]),
) -> dict:
    try:
        await use_case.subscribe(payload.email)
    except AlreadySubscribedError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return {"success": True}
