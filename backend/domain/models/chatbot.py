"""Modele domain pour les chatbots."""

import secrets
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from backend.domain.models.api import APIModel
from backend.domain.models.tenant import utcnow

DEFAULT_BOT_NAME = "My First Bot"
DEFAULT_WELCOME_MESSAGE = "Hello! How can I help you today?"
DEFAULT_COLOR = "#007BFF"
DEFAULT_INSTRUCTIONS = "You are a helpful assistant."


def generate_api_key() -> str:
    """API key globalement unique: prefixe cfai_ + 32 caracteres hex."""
    return f"cfai_{secrets.token_hex(16)}"


@dataclass
class QAPair:
    question: str
    answer: str


@dataclass
class Chatbot:
    """
    Entite chatbot du domaine.

    L'API key est l'unique credential des requetes de chat entrantes.
    """

    chatbot_id: str
    tenant_id: str
    name: str
    api_key: str
    instructions: str = DEFAULT_INSTRUCTIONS
    qa: list[QAPair] = field(default_factory=list)
    welcome_message: str = DEFAULT_WELCOME_MESSAGE
    color: str = DEFAULT_COLOR
    authorized_domains: list[str] = field(default_factory=list)
    created_at: Optional[datetime] = None

    @classmethod
    def create_default(cls, tenant_id: str) -> "Chatbot":
        """Factory method: le bot cree a l'inscription."""
        return cls(
            chatbot_id=str(uuid.uuid4()),
            tenant_id=tenant_id,
            name=DEFAULT_BOT_NAME,
            api_key=generate_api_key(),
            created_at=utcnow(),
        )

    @classmethod
    def create(cls, tenant_id: str, name: str) -> "Chatbot":
        """Factory method: bot cree explicitement depuis le dashboard."""
        return cls(
            chatbot_id=str(uuid.uuid4()),
            tenant_id=tenant_id,
            name=name,
            api_key=generate_api_key(),
            instructions=f"You are a helpful assistant named {name}.",
            created_at=utcnow(),
        )


# --- Schemas API (Pydantic) ---


class QAPairSchema(BaseModel):
    question: str
    answer: str


class ChatbotCreate(APIModel):
    name: str = Field(min_length=2)


class ChatbotUpdate(APIModel):
    """Mise a jour partielle: seuls les champs envoyes sont modifies."""

    name: Optional[str] = Field(default=None, min_length=2)
    instructions: Optional[str] = None
    qa: Optional[list[QAPairSchema]] = None
    welcome_message: Optional[str] = None
    color: Optional[str] = None
    authorized_domains: Optional[list[str]] = None

    def to_changes(self) -> dict:
        changes = self.model_dump(exclude_unset=True, by_alias=False)
        if "qa" in changes and changes["qa"] is not None:
            changes["qa"] = [QAPair(**p) for p in changes["qa"]]
        if "authorized_domains" in changes and changes["authorized_domains"] is not None:
            changes["authorized_domains"] = [
                d.strip() for d in changes["authorized_domains"] if d.strip()
            ]
        return {key: value for key, value in changes.items() if value is not None}


class ChatbotResponse(APIModel):
    id: str
    user_id: str
    name: str
    instructions: str
    qa: list[QAPairSchema]
    welcome_message: str
    color: str
    api_key: str
    authorized_domains: list[str]
    created_at: Optional[datetime] = None

    @classmethod
    def from_chatbot(cls, chatbot: Chatbot) -> "ChatbotResponse":
        return cls(
            id=chatbot.chatbot_id,
            user_id=chatbot.tenant_id,
            name=chatbot.name,
            instructions=chatbot.instructions,
            qa=[QAPairSchema(question=p.question, answer=p.answer) for p in chatbot.qa],
            welcome_message=chatbot.welcome_message,
            color=chatbot.color,
            api_key=chatbot.api_key,
            authorized_domains=chatbot.authorized_domains,
            created_at=chatbot.created_at,
        )


class EmbedResponse(BaseModel):
    html: str
    react: str
    nextjs: str
