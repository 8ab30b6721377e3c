"""Use case: chat de demonstration de la page d'accueil (sans quota)."""

from backend.domain.exceptions import EmptyMessageError
from chatforge.agents import ChatGenerationRequest, ChatResponder, ChatTurn
from chatforge.config import settings


class DemoChatUseCase:
    def __init__(self, responder: ChatResponder):
        self._responder = responder

    async def execute(self, message: str, history: list[ChatTurn]) -> str:
        if not message.strip():
            raise EmptyMessageError("Message cannot be empty.")
        return await self._responder.generate(
            ChatGenerationRequest(
                message=message,
                instructions=settings.DEMO_INSTRUCTIONS,
                history=history,
            )
        )
