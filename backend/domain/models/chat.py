"""Schemas API pour le chat des widgets et la demo publique."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from backend.domain.models.api import APIModel
from chatforge.agents import ChatTurn


class HistoryPart(BaseModel):
    text: str = ""


class HistoryItem(BaseModel):
    """
    Tour d'historique envoye par le widget.

    Accepte {"role", "content": [{"text"}]} ou la forme courte {"role", "text"}.
    """

    role: Literal["user", "model"]
    content: list[HistoryPart] = Field(default_factory=list)
    text: Optional[str] = None

    def to_turn(self) -> ChatTurn:
        text = self.text if self.text is not None else "".join(p.text for p in self.content)
        return ChatTurn(role=self.role, text=text)


class ChatRequest(APIModel):
    """Champs optionnels: l'absence d'API key ou de message a ses propres erreurs."""

    message: Optional[str] = None
    api_key: Optional[str] = None
    history: list[HistoryItem] = Field(default_factory=list)
    stream: bool = False


class ChatReply(BaseModel):
    reply: str


class ChatConfigResponse(BaseModel):
    name: str
    welcome: str
    color: str
    plan: str


class DemoHistoryItem(HistoryItem):
    """La demo accepte tout role: ce qui n'est pas "user" est un tour du modele."""

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v: object) -> str:
        return "user" if v == "user" else "model"


class DemoChatRequest(BaseModel):
    message: str = ""
    history: list[DemoHistoryItem] = Field(default_factory=list)
