"""
Generateur de reponses des chatbots.

Construit le prompt a partir des instructions du chatbot, des paires
question/reponse personnalisees et de l'historique, puis interroge le
modele de chat en mode reponse unique ou en streaming.
"""

import logging
from dataclasses import dataclass, field
from typing import AsyncIterator

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from chatforge.config import settings

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Sorry, the assistant could not generate a reply."


class GenerationError(Exception):
    """Echec du modele lors de la generation d'une reponse."""

    def __init__(self, message: str = GENERIC_FAILURE_MESSAGE):
        super().__init__(message)


@dataclass
class ChatTurn:
    """Un tour de conversation ("user" ou "model")."""

    role: str
    text: str


@dataclass
class ChatGenerationRequest:
    """Entree du generateur: message courant et contexte du chatbot."""

    message: str
    instructions: str = settings.DEFAULT_BOT_INSTRUCTIONS
    qa: list[tuple[str, str]] = field(default_factory=list)
    history: list[ChatTurn] = field(default_factory=list)


def _chunk_text(content) -> str:
    # Certains providers renvoient une liste de blocs au lieu d'une chaine
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            part.get("text", "") if isinstance(part, dict) else str(part)
            for part in content
        )
    return ""


class ChatResponder:
    """
    Produit la reponse d'un chatbot via un modele de chat LangChain.

    La restitution mot pour mot des reponses Q&A est une consigne donnee
    au modele, pas une garantie programmatique.

    Usage:
        responder = ChatResponder(model=create_chat_model())
        reply = await responder.generate(request)
        async for chunk in responder.stream(request):
            ...
    """

    def __init__(self, model: BaseChatModel):
        self._model = model

    def build_messages(self, request: ChatGenerationRequest) -> list[BaseMessage]:
        """Construit la liste de messages envoyee au modele."""
        system_prompt = settings.format_chat_prompt(request.instructions, request.qa)
        messages: list[BaseMessage] = [SystemMessage(content=system_prompt)]

        for turn in request.history:
            if not turn.text:
                continue
            if turn.role == "user":
                messages.append(HumanMessage(content=turn.text))
            else:
                messages.append(AIMessage(content=turn.text))

        messages.append(HumanMessage(content=request.message))
        return messages

    async def generate(self, request: ChatGenerationRequest) -> str:
        """
        Genere une reponse complete.

        Raises:
            GenerationError: Si l'appel au modele echoue
        """
        messages = self.build_messages(request)
        try:
            result = await self._model.ainvoke(messages)
        except Exception as e:
            logger.error(f"Erreur lors de la generation de la reponse: {e}")
            raise GenerationError() from e
        return _chunk_text(result.content)

    async def stream(self, request: ChatGenerationRequest) -> AsyncIterator[str]:
        """
        Stream la reponse fragment par fragment.

        Yields:
            str: Fragments de texte au fur et a mesure

        Raises:
            GenerationError: Si le modele echoue pendant le streaming
        """
        messages = self.build_messages(request)
        logger.debug(f"Demarrage du streaming ({len(messages)} messages)")
        try:
            async for chunk in self._model.astream(messages):
                text = _chunk_text(chunk.content)
                if text:
                    yield text
        except Exception as e:
            logger.error(f"Erreur pendant le streaming de la reponse: {e}")
            raise GenerationError() from e
        logger.debug("Streaming termine avec succes")
