"""Routes du chat public: widget integre, configuration du widget, demo."""

import json
import logging
from typing import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, Request, status
from dependency_injector.wiring import inject, Provide
from sse_starlette.sse import EventSourceResponse

from backend.application.use_cases.chat_config import GetChatConfigUseCase
from backend.application.use_cases.chat_reply import ChatReplyUseCase
from backend.application.use_cases.demo_chat import DemoChatUseCase
from backend.domain.exceptions import (
    AccessDisabledError,
    EmptyMessageError,
    InternalInconsistencyError,
    InvalidCredentialError,
    QuotaExceededError,
)
from backend.domain.models.admission import PolicyRejected
from backend.domain.models.chat import ChatConfigResponse, ChatReply, ChatRequest, DemoChatRequest
from backend.infrastructure.container import Container
from chatforge.agents import GenerationError

logger = logging.getLogger(__name__)

router = APIRouter()


async def _sse_events(chunks: AsyncIterator[str]):
    """Fragments -> evenements SSE; un evenement final done=true cloture le flux."""
    try:
        async for chunk in chunks:
            yield {"event": "message", "data": json.dumps({"chunk": chunk, "done": False})}
    except GenerationError as e:
        yield {"event": "error", "data": json.dumps({"error": str(e)})}
        return
    yield {"event": "message", "data": json.dumps({"chunk": "", "done": True})}


@router.post("/chat", response_model=None)
@inject
async def chat(
    payload: ChatRequest,
    request: Request,
    chat_reply: ChatReplyUseCase = Depends(Provide[Container.chat_reply]),
):
    """
    Message d'un visiteur vers un chatbot integre.

    stream=false: {"reply": ...}
    stream=true: text/event-stream, evenements "message" {"chunk", "done"}.
    Un domaine non autorise recoit une reponse 200 normale contenant le refus.
    """
    if not payload.api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="API key is required.")
    if not payload.message or not payload.message.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Message is required.")

    origin = request.headers.get("origin")
    history = [item.to_turn() for item in payload.history]

    try:
        if payload.stream:
            result = await chat_reply.open_stream(payload.api_key, origin, payload.message, history)
        else:
            result = await chat_reply.reply(payload.api_key, origin, payload.message, history)
    except InvalidCredentialError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except InternalInconsistencyError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Chatbot owner not found.",
        )
    except AccessDisabledError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except QuotaExceededError as e:
        raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=str(e))
    except GenerationError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    if isinstance(result, PolicyRejected):
        return ChatReply(reply=result.message)
    if payload.stream:
        return EventSourceResponse(_sse_events(result))
    return ChatReply(reply=result)


@router.get("/chat/config/{api_key}", response_model=ChatConfigResponse)
@inject
async def chat_config(
    api_key: str,
    use_case: GetChatConfigUseCase = Depends(Provide[Container.chat_config]),
) -> ChatConfigResponse:
    """Configuration publique lue par le widget avant d'ouvrir le chat."""
    try:
        return await use_case.execute(api_key)
    except InvalidCredentialError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except AccessDisabledError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))


@router.post("/demo/chat", response_model=ChatReply)
@inject
async def demo_chat(
    payload: DemoChatRequest,
    use_case: DemoChatUseCase = Depends(Provide[Container.demo_chat]),
) -> ChatReply:
    """Chat de demonstration de la page d'accueil (instructions fixes, sans quota)."""
    try:
        reply = await use_case.execute(payload.message, [h.to_turn() for h in payload.history])
    except EmptyMessageError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except GenerationError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return ChatReply(reply=reply)
