"""Redaction d'emails HTML (newsletter, message direct) par le modele."""

import logging
import re

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage

from chatforge.config import settings
from chatforge.agents.chat_responder import GenerationError

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^```(?:html)?\s*|\s*```$", re.IGNORECASE)


class EmailWriter:
    """Genere le HTML complet d'un email a partir d'un prompt administrateur."""

    def __init__(self, model: BaseChatModel):
        self._model = model

    async def _complete(self, prompt: str) -> str:
        try:
            result = await self._model.ainvoke([HumanMessage(content=prompt)])
        except Exception as e:
            logger.error(f"Erreur lors de la generation de l'email: {e}")
            raise GenerationError(f"Could not generate email content: {e}") from e
        content = result.content if isinstance(result.content, str) else str(result.content)
        return _CODE_FENCE.sub("", content.strip())

    async def generate_newsletter(self, prompt: str) -> str:
        return await self._complete(
            settings.NEWSLETTER_PROMPT_TEMPLATE.format(prompt=prompt)
        )

    async def generate_direct_email(self, prompt: str, user_name: str) -> str:
        return await self._complete(
            settings.DIRECT_EMAIL_PROMPT_TEMPLATE.format(prompt=prompt, user_name=user_name)
        )
