from datetime import timedelta

import pytest

from backend.domain.models.tenant import AuthMethod, Tenant
from backend.domain.ports.identity_provider_port import IdentityProfile
from backend.infrastructure.security import decode_token
from tests.conftest import auth_headers, seed_tenant, utcnow


@pytest.mark.asyncio
async def test_signup_creates_unverified_tenant_with_default_bot(client, tenant_repo, chatbot_repo, mailer):
    response = await client.post(
        "/api/auth/signup",
        json={"email": "Jane@Example.com", "password": "s3cret-pass"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    tenant = await tenant_repo.get_by_id(body["userId"])
    assert tenant.email == "jane@example.com"
    assert tenant.is_verified is False
    assert tenant.plan.name == "Free"
    assert tenant.password_hash != "s3cret-pass"

    bots = await chatbot_repo.list_by_tenant(tenant.tenant_id)
    assert [b.name for b in bots] == ["My First Bot"]
    assert bots[0].api_key.startswith("cfai_")

    assert len(mailer.sent) == 1
    assert mailer.sent[0]["to"] == ["jane@example.com"]
    assert tenant.otp in mailer.sent[0]["html"]


@pytest.mark.asyncio
async def test_signup_with_existing_email_is_rejected(client, tenant_repo):
    await seed_tenant(tenant_repo, email="taken@example.com")

    response = await client.post(
        "/api/auth/signup",
        json={"email": "taken@example.com", "password": "s3cret-pass"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "A user with this email already exists."


@pytest.mark.asyncio
async def test_signup_with_short_password_is_invalid(client):
    response = await client.post(
        "/api/auth/signup",
        json={"email": "jane@example.com", "password": "short"},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_signup_succeeds_when_mail_delivery_fails(client, mailer, tenant_repo):
    mailer.failing = True

    response = await client.post(
        "/api/auth/signup",
        json={"email": "jane@example.com", "password": "s3cret-pass"},
    )

    assert response.status_code == 201
    assert await tenant_repo.get_by_id(response.json()["userId"]) is not None


@pytest.mark.asyncio
async def test_login_verified_tenant_returns_session_token(client, tenant_repo):
    tenant = await seed_tenant(tenant_repo, email="jane@example.com")

    response = await client.post(
        "/api/auth/login",
        json={"email": "jane@example.com", "password": "correct-horse"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert decode_token(body["token"]).tenant_id == tenant.tenant_id


@pytest.mark.asyncio
async def test_login_unverified_tenant_requires_otp(client, tenant_repo, mailer):
    tenant = await seed_tenant(tenant_repo, email="jane@example.com", is_verified=False)

    response = await client.post(
        "/api/auth/login",
        json={"email": "jane@example.com", "password": "correct-horse"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": False, "requiresOtp": True, "userId": tenant.tenant_id}
    assert len(mailer.sent) == 1


@pytest.mark.asyncio
async def test_login_with_wrong_password_is_unauthorized(client, tenant_repo):
    await seed_tenant(tenant_repo, email="jane@example.com")

    response = await client.post(
        "/api/auth/login",
        json={"email": "jane@example.com", "password": "wrong-horse"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password."


@pytest.mark.asyncio
async def test_login_to_google_account_is_refused(client, tenant_repo):
    await tenant_repo.create(Tenant.create_from_google("g@example.com", "G"))

    response = await client.post(
        "/api/auth/login",
        json={"email": "g@example.com", "password": "anything"},
    )

    assert response.status_code == 400
    assert "Google" in response.json()["detail"]


@pytest.mark.asyncio
async def test_verify_otp_marks_tenant_verified(client, tenant_repo):
    tenant = await seed_tenant(tenant_repo, email="jane@example.com", is_verified=False)
    await tenant_repo.set_otp(tenant.tenant_id, "A1B2C3", utcnow() + timedelta(minutes=5))

    response = await client.post(
        "/api/auth/verify-otp",
        json={"userId": tenant.tenant_id, "otp": "a1b2c3"},
    )

    assert response.status_code == 200
    assert response.json()["email"] == "jane@example.com"
    stored = await tenant_repo.get_by_id(tenant.tenant_id)
    assert stored.is_verified is True
    assert stored.otp is None


@pytest.mark.asyncio
async def test_verify_otp_with_wrong_code_is_rejected(client, tenant_repo):
    tenant = await seed_tenant(tenant_repo, is_verified=False)
    await tenant_repo.set_otp(tenant.tenant_id, "A1B2C3", utcnow() + timedelta(minutes=5))

    response = await client.post(
        "/api/auth/verify-otp",
        json={"userId": tenant.tenant_id, "otp": "FFFFFF"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid OTP."
    assert (await tenant_repo.get_by_id(tenant.tenant_id)).is_verified is False


@pytest.mark.asyncio
async def test_verify_otp_after_expiry_is_rejected(client, tenant_repo):
    tenant = await seed_tenant(tenant_repo, is_verified=False)
    await tenant_repo.set_otp(tenant.tenant_id, "A1B2C3", utcnow() - timedelta(minutes=1))

    response = await client.post(
        "/api/auth/verify-otp",
        json={"userId": tenant.tenant_id, "otp": "A1B2C3"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "OTP has expired."


@pytest.mark.asyncio
async def test_resend_otp_replaces_the_previous_code(client, tenant_repo, mailer):
    tenant = await seed_tenant(tenant_repo, is_verified=False)
    await tenant_repo.set_otp(tenant.tenant_id, "000000", utcnow() + timedelta(minutes=5))

    response = await client.post("/api/auth/resend-otp", json={"userId": tenant.tenant_id})

    assert response.status_code == 200
    stored = await tenant_repo.get_by_id(tenant.tenant_id)
    assert stored.otp != "000000"
    assert stored.otp in mailer.sent[-1]["html"]


@pytest.mark.asyncio
async def test_resend_otp_for_unknown_tenant_is_not_found(client):
    response = await client.post("/api/auth/resend-otp", json={"userId": "nobody"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_resend_otp_reports_mail_failure(client, tenant_repo, mailer):
    tenant = await seed_tenant(tenant_repo, is_verified=False)
    mailer.failing = True

    response = await client.post("/api/auth/resend-otp", json={"userId": tenant.tenant_id})

    assert response.status_code == 502


@pytest.mark.asyncio
async def test_google_callback_creates_verified_tenant(client, identity_provider, tenant_repo, chatbot_repo):
    identity_provider.profiles["good-token"] = IdentityProfile(email="g@example.com", name="G")

    response = await client.post("/api/auth/google/callback", json={"token": "good-token"})

    assert response.status_code == 200
    tenant = await tenant_repo.get_by_email("g@example.com")
    assert tenant.auth_method is AuthMethod.GOOGLE
    assert tenant.is_verified is True
    assert decode_token(response.json()["token"]).tenant_id == tenant.tenant_id
    assert await chatbot_repo.count_by_tenant(tenant.tenant_id) == 1


@pytest.mark.asyncio
async def test_google_callback_reuses_existing_tenant(client, identity_provider, tenant_repo, chatbot_repo):
    tenant = await seed_tenant(tenant_repo, email="jane@example.com", is_verified=False)
    identity_provider.profiles["good-token"] = IdentityProfile(email="jane@example.com")

    response = await client.post("/api/auth/google/callback", json={"token": "good-token"})

    assert response.status_code == 200
    assert await tenant_repo.count() == 1
    assert (await tenant_repo.get_by_id(tenant.tenant_id)).is_verified is True
    assert await chatbot_repo.count_by_tenant(tenant.tenant_id) == 0


@pytest.mark.asyncio
async def test_google_callback_with_invalid_token_is_unauthorized(client):
    response = await client.post("/api/auth/google/callback", json={"token": "forged"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_returns_profile_without_secrets(client, tenant_repo):
    tenant = await seed_tenant(tenant_repo, email="jane@example.com", messages_sent=4)

    response = await client.get("/api/auth/me", headers=auth_headers(tenant))

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == tenant.tenant_id
    assert body["messagesSent"] == 4
    assert body["messageLimit"] == 1000
    assert "passwordHash" not in body
    assert "otp" not in body


@pytest.mark.asyncio
async def test_me_without_token_is_unauthorized(client):
    response = await client.get("/api/auth/me")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_for_banned_tenant_is_forbidden(client, tenant_repo):
    tenant = await seed_tenant(tenant_repo, is_banned=True)

    response = await client.get("/api/auth/me", headers=auth_headers(tenant))

    assert response.status_code == 403
