"""Modele domain pour les tenants (comptes clients)."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from backend.domain.models.api import APIModel
from backend.domain.models.plan import Plan


class AuthMethod(str, Enum):
    EMAIL = "email"
    GOOGLE = "google"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Tenant:
    """
    Entite tenant du domaine.

    Porte le plan, le compteur de messages du cycle courant et la date
    de debut de cycle. Utiliser les factory methods pour creer un compte;
    le constructeur direct est reserve a la reconstitution depuis la persistence.
    """

    tenant_id: str
    email: str
    plan: Plan = field(default_factory=Plan.free)
    password_hash: Optional[str] = None
    auth_method: AuthMethod = AuthMethod.EMAIL
    name: Optional[str] = None
    avatar: Optional[str] = None
    is_verified: bool = False
    is_banned: bool = False
    messages_sent: int = 0
    plan_cycle_start: datetime = field(default_factory=utcnow)
    otp: Optional[str] = None
    otp_expires: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def create_with_password(cls, email: str, password_hash: str) -> "Tenant":
        """Factory method: compte email/mot de passe, non verifie."""
        now = utcnow()
        return cls(
            tenant_id=str(uuid.uuid4()),
            email=email,
            password_hash=password_hash,
            auth_method=AuthMethod.EMAIL,
            plan_cycle_start=now,
            created_at=now,
        )

    @classmethod
    def create_from_google(
        cls,
        email: str,
        name: Optional[str] = None,
        avatar: Optional[str] = None,
    ) -> "Tenant":
        """Factory method: compte Google, verifie d'office."""
        now = utcnow()
        return cls(
            tenant_id=str(uuid.uuid4()),
            email=email,
            auth_method=AuthMethod.GOOGLE,
            name=name,
            avatar=avatar,
            is_verified=True,
            plan_cycle_start=now,
            created_at=now,
        )

    def cycle_end(self, cycle_length_days: int = 30) -> datetime:
        return self.plan_cycle_start + timedelta(days=cycle_length_days)

    def cycle_expired(self, now: datetime, cycle_length_days: int = 30) -> bool:
        return now > self.cycle_end(cycle_length_days)


# --- Schemas API (Pydantic) ---


class TokenData(BaseModel):
    """Donnees extraites du token JWT."""

    tenant_id: Optional[str] = None
    email: Optional[str] = None


class SignupRequest(APIModel):
    email: EmailStr
    password: str = Field(min_length=8)


class SignupResponse(APIModel):
    success: bool = True
    user_id: str


class LoginRequest(APIModel):
    email: EmailStr
    password: str = Field(min_length=1)


class LoginResponse(APIModel):
    """
    Resultat du login.

    Compte non verifie: success=False, requires_otp=True et un nouvel OTP est envoye.
    """

    success: bool
    token: Optional[str] = None
    requires_otp: Optional[bool] = None
    user_id: Optional[str] = None


class VerifyOtpRequest(APIModel):
    user_id: str
    otp: str = Field(min_length=6, max_length=6)


class VerifyOtpResponse(APIModel):
    success: bool = True
    token: str
    email: str


class ResendOtpRequest(APIModel):
    user_id: str


class GoogleCallbackRequest(APIModel):
    token: str


class SessionResponse(APIModel):
    success: bool = True
    token: str


class TenantResponse(APIModel):
    """Profil d'un tenant (sans mot de passe ni OTP)."""

    id: str
    email: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    auth_method: str
    plan: str
    message_limit: int
    chatbot_limit: int
    messages_sent: int
    plan_cycle_start: datetime
    is_verified: bool
    is_banned: bool
    created_at: Optional[datetime] = None

    @classmethod
    def from_tenant(cls, tenant: Tenant) -> "TenantResponse":
        return cls(
            id=tenant.tenant_id,
            email=tenant.email,
            name=tenant.name,
            avatar=tenant.avatar,
            auth_method=tenant.auth_method.value,
            plan=tenant.plan.name,
            message_limit=tenant.plan.message_limit,
            chatbot_limit=tenant.plan.chatbot_limit,
            messages_sent=tenant.messages_sent,
            plan_cycle_start=tenant.plan_cycle_start,
            is_verified=tenant.is_verified,
            is_banned=tenant.is_banned,
            created_at=tenant.created_at,
        )


class UsageResponse(APIModel):
    plan: str
    messages_sent: int
    message_limit: int
    chatbot_count: int
    chatbot_limit: int
    cycle_start: datetime
    cycle_end: datetime
