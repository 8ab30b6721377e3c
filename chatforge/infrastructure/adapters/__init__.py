"""
Adapters - Construction des modeles de chat LangChain.

Les adapters font le pont entre la configuration et les technologies
concretes (Ollama, Mistral).
"""

from chatforge.infrastructure.adapters.chat_models import (
    LLMProviderError,
    SUPPORTED_PROVIDERS,
    create_chat_model,
)

__all__ = ["LLMProviderError", "SUPPORTED_PROVIDERS", "create_chat_model"]
