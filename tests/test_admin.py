from datetime import timedelta

import jwt
import pytest
import pytest_asyncio
from dependency_injector import providers
from langchain_core.language_models import FakeListChatModel

from backend.domain.models.submission import Submission, SubmissionStatus, Subscriber
from backend.infrastructure.security import ADMIN_COOKIE_NAME, create_admin_session_token
from chatforge.config import settings
from tests.conftest import seed_chatbot, seed_tenant, utcnow

ADMIN_KEY = "admin-access-key"
ADMIN_SECRET = "test-admin-session-secret"


@pytest.fixture(autouse=True)
def _admin_key(monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_ACCESS_KEY", ADMIN_KEY)
    monkeypatch.setattr(settings, "ADMIN_ACCESS_SECRET", ADMIN_SECRET)


@pytest_asyncio.fixture()
async def admin_client(client):
    client.cookies.set(ADMIN_COOKIE_NAME, create_admin_session_token())
    yield client


async def seed_submission(submission_repo, plan: str = "Pro", **kwargs) -> Submission:
    submission = Submission.create(
        name=kwargs.get("name", "Jane Doe"),
        email=kwargs.get("email", "jane@acme.com"),
        plan=plan,
        message="We would like to upgrade our team.",
        company="Acme",
    )
    await submission_repo.create(submission)
    return submission


# ---------------------------------------------------------
# Session
# ---------------------------------------------------------
@pytest.mark.asyncio
async def test_access_with_valid_key_sets_session_cookie(client):
    response = await client.post("/api/admin/access", json={"key": ADMIN_KEY})

    assert response.status_code == 200
    cookie = response.headers["set-cookie"]
    assert cookie.startswith(f"{ADMIN_COOKIE_NAME}=")
    assert "HttpOnly" in cookie
    assert "samesite=strict" in cookie.lower()


@pytest.mark.asyncio
async def test_access_with_wrong_key_is_unauthorized(client):
    response = await client.post("/api/admin/access", json={"key": "guess"})

    assert response.status_code == 401
    assert "set-cookie" not in response.headers


@pytest.mark.asyncio
async def test_access_is_refused_when_no_key_is_configured(client, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_ACCESS_KEY", "")

    response = await client.post("/api/admin/access", json={"key": ""})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_status_reflects_session(client):
    response = await client.get("/api/admin/status")
    assert response.json() == {"isAuthenticated": False}

    client.cookies.set(ADMIN_COOKIE_NAME, create_admin_session_token())
    response = await client.get("/api/admin/status")
    assert response.json() == {"isAuthenticated": True}


@pytest.mark.asyncio
async def test_protected_routes_require_session(client):
    response = await client.get("/api/admin/users")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_tampered_session_is_rejected(client):
    client.cookies.set(ADMIN_COOKIE_NAME, create_admin_session_token() + "x")

    response = await client.get("/api/admin/dashboard")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_existing_session_is_rejected_once_key_is_unset(client, monkeypatch):
    client.cookies.set(ADMIN_COOKIE_NAME, create_admin_session_token())
    monkeypatch.setattr(settings, "ADMIN_ACCESS_KEY", "")

    response = await client.get("/api/admin/users")

    assert response.status_code == 401
    assert (await client.get("/api/admin/status")).json() == {"isAuthenticated": False}


@pytest.mark.asyncio
async def test_admin_space_is_closed_without_session_secret(client, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_ACCESS_SECRET", "")
    forged = jwt.encode(
        {"admin": True, "exp": utcnow() + timedelta(minutes=5)},
        "change-me-admin-secret",
        algorithm="HS256",
    )
    client.cookies.set(ADMIN_COOKIE_NAME, forged)

    assert (await client.get("/api/admin/users")).status_code == 401
    assert (await client.post("/api/admin/access", json={"key": ADMIN_KEY})).status_code == 401


# ---------------------------------------------------------
# Users
# ---------------------------------------------------------
@pytest.mark.asyncio
async def test_list_users_with_email_search(admin_client, tenant_repo):
    await seed_tenant(tenant_repo, email="alice@acme.com")
    await seed_tenant(tenant_repo, email="bob@other.org")

    response = await admin_client.get("/api/admin/users", params={"q": "ACME"})

    assert response.status_code == 200
    assert [u["email"] for u in response.json()] == ["alice@acme.com"]


@pytest.mark.asyncio
async def test_user_details_include_chatbots(admin_client, tenant_repo, chatbot_repo):
    tenant = await seed_tenant(tenant_repo)
    bot = await seed_chatbot(chatbot_repo, tenant.tenant_id)

    response = await admin_client.get(f"/api/admin/users/{tenant.tenant_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == tenant.email
    assert [c["id"] for c in body["chatbots"]] == [bot.chatbot_id]


@pytest.mark.asyncio
async def test_user_details_for_unknown_tenant_is_not_found(admin_client):
    response = await admin_client.get("/api/admin/users/nobody")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_ban_blocks_chat_and_unban_restores_it(admin_client, tenant_repo, chatbot_repo):
    tenant = await seed_tenant(tenant_repo)
    bot = await seed_chatbot(chatbot_repo, tenant.tenant_id)

    response = await admin_client.post(
        f"/api/admin/users/{tenant.tenant_id}/ban", json={"isBanned": True}
    )
    assert response.status_code == 200
    chat = await admin_client.post("/api/chat", json={"message": "Hi", "apiKey": bot.api_key})
    assert chat.status_code == 403

    await admin_client.post(f"/api/admin/users/{tenant.tenant_id}/ban", json={"isBanned": False})
    chat = await admin_client.post("/api/chat", json={"message": "Hi", "apiKey": bot.api_key})
    assert chat.status_code == 200


@pytest.mark.asyncio
async def test_change_plan_to_pro_applies_default_limits(admin_client, tenant_repo):
    tenant = await seed_tenant(tenant_repo)

    response = await admin_client.put(
        f"/api/admin/users/{tenant.tenant_id}/plan",
        json={"plan": "Pro", "messageLimit": 5, "chatbotLimit": 5},
    )

    assert response.status_code == 200
    stored = await tenant_repo.get_by_id(tenant.tenant_id)
    assert stored.plan.name == "Pro"
    assert stored.plan.message_limit == 50_000
    assert stored.plan.chatbot_limit == 10


@pytest.mark.asyncio
async def test_change_plan_to_enterprise_accepts_custom_limits(admin_client, tenant_repo):
    tenant = await seed_tenant(tenant_repo)

    response = await admin_client.put(
        f"/api/admin/users/{tenant.tenant_id}/plan",
        json={"plan": "Enterprise", "messageLimit": 250_000, "chatbotLimit": 25},
    )

    assert response.status_code == 200
    assert response.json()["messageLimit"] == 250_000
    stored = await tenant_repo.get_by_id(tenant.tenant_id)
    assert stored.plan.message_limit == 250_000
    assert stored.plan.chatbot_limit == 25


@pytest.mark.asyncio
async def test_change_plan_rejects_unknown_tier(admin_client, tenant_repo):
    tenant = await seed_tenant(tenant_repo)

    response = await admin_client.put(
        f"/api/admin/users/{tenant.tenant_id}/plan", json={"plan": "Platinum"}
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_delete_user_removes_their_chatbots(admin_client, tenant_repo, chatbot_repo):
    tenant = await seed_tenant(tenant_repo)
    bot = await seed_chatbot(chatbot_repo, tenant.tenant_id)

    response = await admin_client.delete(f"/api/admin/users/{tenant.tenant_id}")

    assert response.status_code == 200
    assert await tenant_repo.get_by_id(tenant.tenant_id) is None
    chat = await admin_client.post("/api/chat", json={"message": "Hi", "apiKey": bot.api_key})
    assert chat.status_code == 401


@pytest.mark.asyncio
async def test_regenerate_key_invalidates_the_old_one(admin_client, tenant_repo, chatbot_repo):
    tenant = await seed_tenant(tenant_repo)
    bot = await seed_chatbot(chatbot_repo, tenant.tenant_id)

    response = await admin_client.post(f"/api/admin/chatbots/{bot.chatbot_id}/regenerate-key")

    assert response.status_code == 200
    new_key = response.json()["newApiKey"]
    assert new_key != bot.api_key
    old = await admin_client.post("/api/chat", json={"message": "Hi", "apiKey": bot.api_key})
    assert old.status_code == 401
    new = await admin_client.post("/api/chat", json={"message": "Hi", "apiKey": new_key})
    assert new.status_code == 200


@pytest.mark.asyncio
async def test_admin_deletes_any_chatbot(admin_client, tenant_repo, chatbot_repo):
    tenant = await seed_tenant(tenant_repo)
    bot = await seed_chatbot(chatbot_repo, tenant.tenant_id)

    response = await admin_client.delete(f"/api/admin/chatbots/{bot.chatbot_id}")

    assert response.status_code == 200
    assert await chatbot_repo.get_by_id(bot.chatbot_id) is None


# ---------------------------------------------------------
# Submissions
# ---------------------------------------------------------
@pytest.mark.asyncio
async def test_accepting_a_submission_notifies_the_requester(admin_client, submission_repo, mailer):
    submission = await seed_submission(submission_repo, plan="Enterprise")

    response = await admin_client.post(
        f"/api/admin/submissions/{submission.submission_id}/status", json={"status": "accepted"}
    )

    assert response.status_code == 200
    assert response.json()["status"] == "accepted"
    assert mailer.sent[-1]["to"] == ["jane@acme.com"]
    assert "Accepted" in mailer.sent[-1]["subject"]


@pytest.mark.asyncio
async def test_rejecting_a_submission_sends_an_update(admin_client, submission_repo, mailer):
    submission = await seed_submission(submission_repo)

    response = await admin_client.post(
        f"/api/admin/submissions/{submission.submission_id}/status", json={"status": "rejected"}
    )

    assert response.status_code == 200
    assert mailer.sent[-1]["subject"].startswith("Update on your")


@pytest.mark.asyncio
async def test_submission_can_only_be_resolved_once(admin_client, submission_repo, mailer):
    submission = await seed_submission(submission_repo)
    url = f"/api/admin/submissions/{submission.submission_id}/status"
    await admin_client.post(url, json={"status": "accepted"})

    response = await admin_client.post(url, json={"status": "rejected"})

    assert response.status_code == 404
    assert submission_repo.submissions[submission.submission_id].status is SubmissionStatus.ACCEPTED
    assert len(mailer.sent) == 1


@pytest.mark.asyncio
async def test_resolution_survives_mail_failure(admin_client, submission_repo, mailer):
    submission = await seed_submission(submission_repo)
    mailer.failing = True

    response = await admin_client.post(
        f"/api/admin/submissions/{submission.submission_id}/status", json={"status": "accepted"}
    )

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_delete_submission(admin_client, submission_repo):
    submission = await seed_submission(submission_repo)

    response = await admin_client.delete(f"/api/admin/submissions/{submission.submission_id}")

    assert response.status_code == 200
    assert await submission_repo.count() == 0


# ---------------------------------------------------------
# Newsletter and direct emails
# ---------------------------------------------------------
@pytest.mark.asyncio
async def test_newsletter_generation_strips_code_fences(admin_client, container):
    container.chat_model.override(
        providers.Object(FakeListChatModel(responses=["```html\n<p>Big news</p>\n```"]))
    )

    response = await admin_client.post("/api/admin/newsletter/generate", json={"prompt": "Launch"})

    assert response.status_code == 200
    assert response.json()["html"] == "<p>Big news</p>"


@pytest.mark.asyncio
async def test_newsletter_is_sent_one_message_per_subscriber(admin_client, subscriber_repo, mailer):
    await subscriber_repo.create(Subscriber.create("a@example.com"))
    await subscriber_repo.create(Subscriber.create("b@example.com"))

    response = await admin_client.post(
        "/api/admin/newsletter/send", json={"subject": "News", "content": "<p>Hi</p>"}
    )

    assert response.status_code == 200
    assert response.json()["recipientCount"] == 2
    assert sorted(m["to"][0] for m in mailer.sent) == ["a@example.com", "b@example.com"]
    assert all(len(m["to"]) == 1 for m in mailer.sent)


@pytest.mark.asyncio
async def test_newsletter_without_subscribers_is_bad_request(admin_client):
    response = await admin_client.post(
        "/api/admin/newsletter/send", json={"subject": "News", "content": "<p>Hi</p>"}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "There are no subscribers to send to."


@pytest.mark.asyncio
async def test_newsletter_delivery_failure_is_bad_gateway(admin_client, subscriber_repo, mailer):
    await subscriber_repo.create(Subscriber.create("a@example.com"))
    mailer.failing = True

    response = await admin_client.post(
        "/api/admin/newsletter/send", json={"subject": "News", "content": "<p>Hi</p>"}
    )

    assert response.status_code == 502


@pytest.mark.asyncio
async def test_direct_email_is_wrapped_and_escaped(admin_client, mailer):
    response = await admin_client.post(
        "/api/admin/mail/send",
        json={"to": "jane@example.com", "subject": "Hello", "message": "Hi <b>Jane</b>"},
    )

    assert response.status_code == 200
    sent = mailer.sent[-1]
    assert sent["to"] == ["jane@example.com"]
    assert sent["sender_name"].endswith(" Admin")
    assert "&lt;b&gt;Jane&lt;/b&gt;" in sent["html"]


@pytest.mark.asyncio
async def test_send_to_all_users(admin_client, tenant_repo, mailer):
    await seed_tenant(tenant_repo, email="a@example.com")
    await seed_tenant(tenant_repo, email="b@example.com")

    response = await admin_client.post(
        "/api/admin/mail/send-all", json={"subject": "Update", "content": "<p>Hi</p>"}
    )

    assert response.status_code == 200
    assert response.json()["recipientCount"] == 2


# ---------------------------------------------------------
# Dashboard
# ---------------------------------------------------------
@pytest.mark.asyncio
async def test_dashboard_counts_and_zero_filled_chart(admin_client, tenant_repo, submission_repo):
    now = utcnow()
    await seed_tenant(tenant_repo, created_at=now)
    await seed_tenant(tenant_repo, created_at=now)
    await seed_tenant(tenant_repo, created_at=now - timedelta(days=2))
    await seed_tenant(tenant_repo, created_at=now - timedelta(days=40))
    for _ in range(6):
        await seed_submission(submission_repo)

    response = await admin_client.get("/api/admin/dashboard")

    assert response.status_code == 200
    body = response.json()
    assert body["stats"] == {"totalUsers": 4, "newUsers": 3, "totalSubmissions": 6}
    assert len(body["recentSubmissions"]) == 5

    chart = body["signupChartData"]
    assert len(chart) == 7
    assert chart[-1] == {"date": now.date().isoformat(), "signups": 2}
    assert chart[-3]["signups"] == 1
    assert sum(point["signups"] for point in chart) == 3
