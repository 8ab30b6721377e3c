"""Use case: reponse d'un chatbot integre (unique ou en streaming)."""

import logging
from typing import AsyncIterator, Optional, Union

from backend.application.use_cases.chat_admission import ChatAdmissionUseCase
from backend.domain.models.admission import PolicyRejected
from backend.domain.models.chatbot import Chatbot
from chatforge.agents import ChatGenerationRequest, ChatResponder, ChatTurn
from chatforge.config import settings

logger = logging.getLogger(__name__)


def build_generation_request(
    chatbot: Chatbot, message: str, history: list[ChatTurn]
) -> ChatGenerationRequest:
    return ChatGenerationRequest(
        message=message,
        instructions=chatbot.instructions or settings.DEFAULT_BOT_INSTRUCTIONS,
        qa=[(p.question, p.answer) for p in chatbot.qa],
        history=history,
    )


class ChatReplyUseCase:
    """
    Admet la requete puis delegue au generateur de reponses.

    Les erreurs d'admission sont levees avant toute generation, donc avant
    l'ouverture d'un flux SSE.
    """

    def __init__(self, admission: ChatAdmissionUseCase, responder: ChatResponder):
        self._admission = admission
        self._responder = responder

    async def reply(
        self,
        api_key: str,
        origin: Optional[str],
        message: str,
        history: list[ChatTurn],
    ) -> Union[str, PolicyRejected]:
        """
        Reponse complete.

        Raises:
            GenerationError: Si le modele echoue (le message reste decompte)
        """
        result = await self._admission.execute(api_key, origin)
        if isinstance(result, PolicyRejected):
            return result

        request = build_generation_request(result.chatbot, message, history)
        return await self._responder.generate(request)

    async def open_stream(
        self,
        api_key: str,
        origin: Optional[str],
        message: str,
        history: list[ChatTurn],
    ) -> Union[AsyncIterator[str], PolicyRejected]:
        """Admet la requete et retourne le flux de fragments (non demarre)."""
        result = await self._admission.execute(api_key, origin)
        if isinstance(result, PolicyRejected):
            return result

        request = build_generation_request(result.chatbot, message, history)
        logger.debug(f"Streaming reply for chatbot {result.chatbot.chatbot_id}")
        return self._responder.stream(request)
