"""Modeles domain pour les demandes commerciales et la newsletter."""

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field

from backend.domain.models.api import APIModel
from backend.domain.models.tenant import utcnow


class SubmissionStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass
class Submission:
    """Demande de plan Pro / Enterprise envoyee depuis la page contact."""

    submission_id: str
    name: str
    email: str
    plan: str
    message: str
    company: Optional[str] = None
    status: SubmissionStatus = SubmissionStatus.PENDING
    created_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        name: str,
        email: str,
        plan: str,
        message: str,
        company: Optional[str] = None,
    ) -> "Submission":
        return cls(
            submission_id=str(uuid.uuid4()),
            name=name,
            email=email,
            plan=plan,
            message=message,
            company=company,
            created_at=utcnow(),
        )


@dataclass
class Subscriber:
    subscriber_id: str
    email: str
    subscribed_at: Optional[datetime] = None

    @classmethod
    def create(cls, email: str) -> "Subscriber":
        return cls(subscriber_id=str(uuid.uuid4()), email=email, subscribed_at=utcnow())


# --- Schemas API (Pydantic) ---


class SubmissionCreate(BaseModel):
    name: str = Field(min_length=2)
    email: EmailStr
    company: Optional[str] = None
    plan: Literal["Pro", "Enterprise"]
    message: str = Field(min_length=10)


class SubmissionResponse(APIModel):
    id: str
    name: str
    email: str
    company: Optional[str] = None
    plan: str
    message: str
    status: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_submission(cls, submission: Submission) -> "SubmissionResponse":
        return cls(
            id=submission.submission_id,
            name=submission.name,
            email=submission.email,
            company=submission.company,
            plan=submission.plan,
            message=submission.message,
            status=submission.status.value,
            created_at=submission.created_at,
        )


class SubscribeRequest(BaseModel):
    email: EmailStr


class SubscriberResponse(APIModel):
    id: str
    email: str
    subscribed_at: Optional[datetime] = None

    @classmethod
    def from_subscriber(cls, subscriber: Subscriber) -> "SubscriberResponse":
        return cls(
            id=subscriber.subscriber_id,
            email=subscriber.email,
            subscribed_at=subscriber.subscribed_at,
        )
