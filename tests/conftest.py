import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
import pytest_asyncio
from dependency_injector import providers
from httpx import ASGITransport, AsyncClient
from langchain_core.language_models import FakeListChatModel

from backend.domain.models.chatbot import Chatbot, QAPair
from backend.domain.models.plan import Plan
from backend.domain.models.tenant import Tenant
from backend.infrastructure.security import create_session_token, get_password_hash
from backend.main import create_app, create_container
from tests.fakes import (
    FakeIdentityProvider,
    InMemoryChatbotRepository,
    InMemorySubmissionRepository,
    InMemorySubscriberRepository,
    InMemoryTenantRepository,
    RecordingMailer,
)

BOT_REPLY = "Hello from the bot"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------
# Seed helpers
# ---------------------------------------------------------
async def seed_tenant(
    tenant_repo: InMemoryTenantRepository,
    email: Optional[str] = None,
    plan: Optional[Plan] = None,
    messages_sent: int = 0,
    cycle_start: Optional[datetime] = None,
    is_banned: bool = False,
    is_verified: bool = True,
    password: str = "correct-horse",
    created_at: Optional[datetime] = None,
) -> Tenant:
    tenant = Tenant.create_with_password(
        email or f"owner-{uuid.uuid4().hex[:8]}@example.com",
        get_password_hash(password),
    )
    tenant.plan = plan or Plan.free()
    tenant.messages_sent = messages_sent
    tenant.plan_cycle_start = cycle_start or utcnow()
    tenant.is_banned = is_banned
    tenant.is_verified = is_verified
    if created_at:
        tenant.created_at = created_at
    await tenant_repo.create(tenant)
    return tenant


async def seed_chatbot(
    chatbot_repo: InMemoryChatbotRepository,
    tenant_id: str,
    name: str = "Support Bot",
    authorized_domains: Optional[list[str]] = None,
    qa: Optional[list[QAPair]] = None,
    instructions: str = "You are a helpful assistant.",
) -> Chatbot:
    chatbot = Chatbot.create(tenant_id, name)
    chatbot.instructions = instructions
    chatbot.authorized_domains = authorized_domains or []
    chatbot.qa = qa or []
    await chatbot_repo.create(chatbot)
    return chatbot


def auth_headers(tenant: Tenant) -> dict:
    return {"Authorization": f"Bearer {create_session_token(tenant)}"}


# ---------------------------------------------------------
# Fakes
# ---------------------------------------------------------
@pytest.fixture()
def tenant_repo():
    return InMemoryTenantRepository()


@pytest.fixture()
def chatbot_repo(tenant_repo):
    return InMemoryChatbotRepository(tenant_repo)


@pytest.fixture()
def submission_repo():
    return InMemorySubmissionRepository()


@pytest.fixture()
def subscriber_repo():
    return InMemorySubscriberRepository()


@pytest.fixture()
def mailer():
    return RecordingMailer()


@pytest.fixture()
def identity_provider():
    return FakeIdentityProvider()


@pytest.fixture()
def chat_model():
    return FakeListChatModel(responses=[BOT_REPLY])


# ---------------------------------------------------------
# Container with overridden providers
# ---------------------------------------------------------
@pytest.fixture()
def container(
    tenant_repo,
    chatbot_repo,
    submission_repo,
    subscriber_repo,
    mailer,
    identity_provider,
    chat_model,
):
    container = create_container()
    container.tenant_repository.override(providers.Object(tenant_repo))
    container.chatbot_repository.override(providers.Object(chatbot_repo))
    container.submission_repository.override(providers.Object(submission_repo))
    container.subscriber_repository.override(providers.Object(subscriber_repo))
    container.mailer.override(providers.Object(mailer))
    container.google_verifier.override(providers.Object(identity_provider))
    container.chat_model.override(providers.Object(chat_model))
    yield container
    container.unwire()
    container.reset_singletons()


@pytest.fixture()
def app(container):
    return create_app(container, manage_pool=False)


@pytest.fixture(autouse=True)
def _reset_sse_exit_event(monkeypatch):
    # sse-starlette garde un Event global lie a la premiere boucle asyncio
    from sse_starlette.sse import AppStatus

    monkeypatch.setattr(AppStatus, "should_exit_event", None, raising=False)


# ---------------------------------------------------------
# HTTP client
# ---------------------------------------------------------
@pytest_asyncio.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture()
def expired_cycle_start() -> datetime:
    return utcnow() - timedelta(days=31)
