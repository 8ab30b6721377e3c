"""
Module de generation (reponses des chatbots, emails)
"""

from .chat_responder import (
    ChatGenerationRequest,
    ChatResponder,
    ChatTurn,
    GenerationError,
    GENERIC_FAILURE_MESSAGE,
)
from .email_writer import EmailWriter

__all__ = [
    "ChatGenerationRequest",
    "ChatResponder",
    "ChatTurn",
    "GenerationError",
    "GENERIC_FAILURE_MESSAGE",
    "EmailWriter",
]
