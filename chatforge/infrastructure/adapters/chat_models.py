"""
Construction des modeles de chat LangChain selon le provider configure.
Supporte Ollama (local) et Mistral (API).
"""

import logging
from typing import Optional

from langchain_core.language_models.chat_models import BaseChatModel

from chatforge.config import settings

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ["ollama", "mistral"]


class LLMProviderError(Exception):
    """Erreur liee au provider LLM."""
    pass


def _create_ollama_model(temperature: float) -> BaseChatModel:
    """Initialise le LLM avec Ollama."""
    from langchain_ollama import ChatOllama

    return ChatOllama(
        model=settings.OLLAMA_MODEL,
        base_url=settings.OLLAMA_BASE_URL,
        temperature=temperature,
    )


def _create_mistral_model(temperature: float) -> BaseChatModel:
    """Initialise le LLM avec Mistral API."""
    from langchain_mistralai import ChatMistralAI

    if not settings.MISTRAL_API_KEY:
        raise LLMProviderError(
            "MISTRAL_API_KEY n'est pas definie.\n"
            "Ajoutez votre cle API Mistral dans le fichier .env:\n"
            "MISTRAL_API_KEY=votre_cle_api"
        )

    return ChatMistralAI(
        model=settings.MISTRAL_MODEL,
        api_key=settings.MISTRAL_API_KEY,
        temperature=temperature,
    )


def create_chat_model(
    provider: Optional[str] = None,
    temperature: Optional[float] = None,
) -> BaseChatModel:
    """
    Cree le modele de chat pour le provider demande.

    Args:
        provider: "ollama" ou "mistral". Si None, utilise LLM_PROVIDER du .env
        temperature: Temperature du modele. Si None, utilise MODEL_TEMPERATURE

    Returns:
        Modele de chat LangChain (supporte ainvoke et astream)

    Raises:
        LLMProviderError: Si le provider est inconnu ou mal configure
    """
    provider = (provider or settings.LLM_PROVIDER).lower()
    temperature = settings.MODEL_TEMPERATURE if temperature is None else temperature

    if provider == "ollama":
        model = _create_ollama_model(temperature)
    elif provider == "mistral":
        model = _create_mistral_model(temperature)
    else:
        raise LLMProviderError(
            f"Provider LLM inconnu: '{provider}'\n"
            f"Providers supportes: {', '.join(SUPPORTED_PROVIDERS)}"
        )

    logger.info(f"Modele de chat initialise (provider: {provider})")
    return model
