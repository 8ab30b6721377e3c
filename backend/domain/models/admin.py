"""Schemas API de l'espace administrateur."""

from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field

from backend.domain.models.api import APIModel
from backend.domain.models.chatbot import ChatbotResponse
from backend.domain.models.plan import PlanTier
from backend.domain.models.submission import SubmissionResponse
from backend.domain.models.tenant import TenantResponse


class AdminAccessRequest(BaseModel):
    key: str


class AdminStatusResponse(APIModel):
    is_authenticated: bool


class UserDetailsResponse(TenantResponse):
    chatbots: list[ChatbotResponse] = Field(default_factory=list)


class BanRequest(APIModel):
    is_banned: bool


class PlanChangeRequest(APIModel):
    plan: PlanTier
    message_limit: Optional[int] = Field(default=None, ge=0)
    chatbot_limit: Optional[int] = Field(default=None, ge=0)


class ApiKeyResponse(APIModel):
    success: bool = True
    new_api_key: str


class SubmissionStatusRequest(BaseModel):
    status: Literal["accepted", "rejected"]


class GenerateEmailRequest(APIModel):
    prompt: str = Field(min_length=1)
    user_name: Optional[str] = None


class GeneratedEmailResponse(BaseModel):
    success: bool = True
    html: str


class BulkEmailRequest(BaseModel):
    """Le contenu est du HTML (genere ou saisi)."""

    subject: str = Field(min_length=1)
    content: str = Field(min_length=1)


class DirectEmailRequest(BaseModel):
    to: EmailStr
    subject: str = Field(min_length=1)
    message: str = Field(min_length=1)


class BulkSendResponse(APIModel):
    success: bool = True
    recipient_count: int


class DashboardTotals(APIModel):
    total_users: int
    new_users: int
    total_submissions: int


class SignupChartPoint(BaseModel):
    date: str
    signups: int


class DashboardStatsResponse(APIModel):
    stats: DashboardTotals
    recent_submissions: list[SubmissionResponse]
    signup_chart_data: list[SignupChartPoint]
